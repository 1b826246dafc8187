"""CLI interface using Typer.

Available subcommands:
    - check: 명명 표준/정의서 관계 검증, 동기화, 이름 생성

Usage:
    uv run stdmeta check domains
    uv run stdmeta check terms --file term.json
    uv run stdmeta check relations --issues
    uv run stdmeta check sync --apply
    uv run stdmeta check domain-name 회원 VARCHAR --length 10
"""

import typer


def create_app() -> typer.Typer:
    """Create the main CLI application with all sub-commands.

    Lazy import를 사용하여 서브커맨드 모듈을 필요할 때만 로드합니다.
    """
    from stdmeta.cli.check import app as check_app

    main_app = typer.Typer(
        name="stdmeta",
        help="Naming-standard and design-relation consistency engine",
        no_args_is_help=True,
    )

    main_app.add_typer(check_app, name="check", help="Naming standard / design relation checks")

    return main_app


def main() -> None:
    """Entry point for the ``stdmeta`` console script."""
    app = create_app()
    app()
