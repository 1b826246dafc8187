"""stdmeta - Entry Point.

This module provides the main entry point for the naming-standard engine CLI.

Usage:
    python main.py check domains
    python main.py check terms --file term.json
    python main.py check relations
    python main.py check sync --apply
    python main.py check convert 사용자_번호 --direction ko-to-en
"""

from stdmeta.cli import create_app

app = create_app()


if __name__ == "__main__":
    app()
