"""Typer CLI for naming-standard and design-relation checks.

Commands:
    - files: 타입별 데이터 파일 목록 (표시 설정 반영)
    - domains: 도메인 검증 (표준도메인명 불일치/중복)
    - terms: 용어 검증 + 자동 수정 제안
    - vocabulary: 단어집 검증 (필수/금지어/이음동의어/약어 중복)
    - duplicates: 단어집 중복 그룹
    - relations: 5개 정의서 관계 검증
    - sync: 관계 동기화 미리보기 (--apply 시 저장 + 히스토리 기록)
    - domain-name: 표준도메인명 계산
    - convert: 용어 단방향 변환
"""

from __future__ import annotations

import uuid
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from stdmeta.config.settings import get_settings
from stdmeta.core.exceptions import StorageError
from stdmeta.core.logger import setup_logger
from stdmeta.models.base import DataFile, DataType
from stdmeta.models.history import HistoryAction, HistoryLogEntry
from stdmeta.naming.duplicates import get_duplicate_groups, mark_duplicates
from stdmeta.naming.generator import (
    ConvertDirection,
    convert_term,
    generate_standard_domain_name,
)
from stdmeta.relations.models import RelationSeverity
from stdmeta.relations.sync import apply_sync_plan, build_design_relation_sync_plan
from stdmeta.relations.validator import validate_design_relations
from stdmeta.store.context import load_mapping_context
from stdmeta.store.history import HistoryStore
from stdmeta.store.registry import DataRegistry
from stdmeta.store.settings import SettingsService, filter_files
from stdmeta.validation.domain import check_domain_name_uniqueness, validate_domains
from stdmeta.validation.models import ValidationReport
from stdmeta.validation.term import TermValidationContext, validate_terms
from stdmeta.validation.vocabulary import validate_vocabulary

app = typer.Typer(no_args_is_help=True)
console = Console()

_SEVERITY_COLORS: dict[RelationSeverity, str] = {
    RelationSeverity.ERROR: "red",
    RelationSeverity.WARNING: "yellow",
}

_FileOption = Annotated[
    str | None, typer.Option("--file", "-f", help="Data file name (default: <type>.json)")
]
_VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-V", help="Enable verbose output")
]


def _setup_cli_logger(verbose: bool) -> None:
    setup_logger(
        console_level="DEBUG" if verbose else "WARNING",
        enable_file=False,
        show_context=verbose,
    )


def _registry() -> DataRegistry:
    return DataRegistry(get_settings().data_dir)


def _fail(e: StorageError) -> typer.Exit:
    console.print(f"[red]{escape(str(e))}[/red]")
    return typer.Exit(code=1)


def _load(registry: DataRegistry, data_type: DataType, filename: str | None) -> DataFile[Any]:
    try:
        return registry.load(data_type, filename)
    except StorageError as e:
        raise _fail(e) from None


def _print_report_summary(title: str, report: ValidationReport[Any]) -> None:
    console.print(
        f"[bold]{title}[/bold]  total={report.total_count}  "
        f"[green]passed={report.passed_count}[/green]  "
        f"[red]failed={report.failed_count}[/red]"
    )


def _error_types(errors: list[Any]) -> str:
    return ", ".join(error.type for error in errors)


# ─── Files ───────────────────────────────────────────────────────────


@app.command(name="files")
def list_files(
    data_type: Annotated[DataType, typer.Argument(help="Data type (e.g., domain, column)")],
    show_all: Annotated[
        bool, typer.Option("--all", "-a", help="Include system files regardless of settings")
    ] = False,
) -> None:
    """타입별 데이터 파일 목록."""
    settings = get_settings()
    registry = DataRegistry(settings.data_dir)
    try:
        display = SettingsService(settings.settings_path).get()
    except StorageError as e:
        raise _fail(e) from None

    files = registry.list_files(data_type)
    visible = filter_files(
        data_type, files, show_system_files=show_all or display.show_system_files(data_type)
    )
    if not visible:
        console.print(f"[yellow]No {data_type} files.[/yellow]")
        return

    for name in visible:
        console.print(f"  [dim]•[/dim] {escape(name)}")


# ─── Naming standard checks ──────────────────────────────────────────


@app.command(name="domains")
def check_domains(file: _FileOption = None, verbose: _VerboseOption = False) -> None:
    """도메인 검증."""
    _setup_cli_logger(verbose)
    data = _load(_registry(), DataType.DOMAIN, file)
    report = validate_domains(data.entries)

    _print_report_summary("Domain validation", report)
    if not report.failed_entries:
        return

    table = Table(show_header=True, header_style="bold", title="Failed domains")
    table.add_column("ID", style="bold")
    table.add_column("Stored")
    table.add_column("Generated", style="cyan")
    table.add_column("Errors", style="red")
    for result in report.failed_entries:
        table.add_row(
            escape(result.entry.id),
            escape(result.entry.standard_domain_name or "-"),
            escape(result.generated_domain_name or "-"),
            _error_types(result.errors),
        )
    console.print(table)


@app.command(name="terms")
def check_terms(
    file: _FileOption = None,
    vocabulary_file: Annotated[
        str | None, typer.Option("--vocabulary-file", help="Vocabulary file name")
    ] = None,
    domain_file: Annotated[
        str | None, typer.Option("--domain-file", help="Domain file name")
    ] = None,
    verbose: _VerboseOption = False,
) -> None:
    """용어 검증 (용어 파일의 mapping을 기본 참조 파일로 사용)."""
    _setup_cli_logger(verbose)
    registry = _registry()
    terms = _load(registry, DataType.TERM, file)
    mapping = terms.mapping or {}

    vocabulary_name = vocabulary_file or mapping.get("vocabulary")
    vocabulary = _load(registry, DataType.VOCABULARY, vocabulary_name)
    domains = _load(registry, DataType.DOMAIN, domain_file or mapping.get("domain"))

    context = TermValidationContext(
        vocabulary=vocabulary.entries,
        domains=domains.entries,
        vocabulary_filename=vocabulary_name or DataType.VOCABULARY.default_filename,
    )
    report = validate_terms(terms.entries, context)

    _print_report_summary("Term validation", report)
    for result in report.failed_entries:
        entry = result.entry
        lines = [f"[red]{error.type}[/red] {escape(error.message)}" for error in result.errors]
        if result.suggestions is not None:
            lines.append("")
            lines.append(f"[bold]Suggestion:[/bold] {result.suggestions.action_type or '-'}")
            lines.append(escape(result.suggestions.reason))
        console.print(Panel("\n".join(lines), title=escape(entry.term_name or entry.id)))


@app.command(name="vocabulary")
def check_vocabulary(file: _FileOption = None, verbose: _VerboseOption = False) -> None:
    """단어집 검증."""
    _setup_cli_logger(verbose)
    registry = _registry()
    data = _load(registry, DataType.VOCABULARY, file)
    try:
        forbidden_words = registry.load_forbidden_words()
    except StorageError as e:
        raise _fail(e) from None

    report = validate_vocabulary(data.entries, forbidden_words)

    _print_report_summary("Vocabulary validation", report)
    if not report.failed_entries:
        return

    table = Table(show_header=True, header_style="bold", title="Failed vocabulary")
    table.add_column("ID", style="bold")
    table.add_column("Standard")
    table.add_column("Abbr.", style="cyan")
    table.add_column("Errors", style="red")
    for result in report.failed_entries:
        table.add_row(
            escape(result.entry.id),
            escape(result.entry.standard_name or "-"),
            escape(result.entry.abbreviation or "-"),
            _error_types(result.errors),
        )
    console.print(table)


@app.command(name="duplicates")
def check_duplicates(
    file: _FileOption = None,
    mark: Annotated[
        bool, typer.Option("--mark", help="Persist duplicateInfo flags to the file")
    ] = False,
) -> None:
    """단어집 중복 그룹 (표준단어명/영문약어/영문명)."""
    registry = _registry()
    data = _load(registry, DataType.VOCABULARY, file)
    groups = get_duplicate_groups(data.entries)

    if mark:
        marked = data.with_entries(mark_duplicates(data.entries))
        try:
            registry.save(DataType.VOCABULARY, marked, file)
        except StorageError as e:
            raise _fail(e) from None

    if not groups:
        console.print("[green]No duplicates found.[/green]")
        return

    table = Table(
        show_header=True, header_style="bold", title=f"Duplicate groups ({len(groups)})"
    )
    table.add_column("Standard")
    table.add_column("Abbr.", style="cyan")
    table.add_column("IDs", style="bold")
    for group in groups:
        table.add_row(
            escape(" / ".join(dict.fromkeys(e.standard_name for e in group))),
            escape(" / ".join(dict.fromkeys(e.abbreviation for e in group))),
            escape(", ".join(e.id for e in group)),
        )
    console.print(table)


# ─── Design relations ────────────────────────────────────────────────


@app.command(name="relations")
def check_relations(
    show_issues: Annotated[
        bool, typer.Option("--issues", "-i", help="List unmatched records")
    ] = False,
    verbose: _VerboseOption = False,
) -> None:
    """5개 정의서 관계 검증."""
    _setup_cli_logger(verbose)
    try:
        context, _ = load_mapping_context(_registry())
    except StorageError as e:
        raise _fail(e) from None

    result = validate_design_relations(context)

    table = Table(show_header=True, header_style="bold", title="Design relations")
    table.add_column("Relation", style="bold")
    table.add_column("Severity")
    table.add_column("Checked", justify="right")
    table.add_column("Matched", justify="right")
    table.add_column("Unmatched", justify="right")
    for summary in result.summaries:
        color = _SEVERITY_COLORS.get(summary.severity, "white")
        table.add_row(
            str(summary.relation_id),
            f"[{color}]{summary.severity}[/{color}]",
            str(summary.total_checked),
            str(summary.matched),
            str(summary.unmatched),
        )
    console.print(table)

    totals = result.totals
    console.print(
        f"unmatched={totals.unmatched}  "
        f"[red]errors={totals.error_count}[/red]  "
        f"[yellow]warnings={totals.warning_count}[/yellow]"
    )

    if show_issues:
        for summary in result.summaries:
            for issue in summary.issues:
                console.print(
                    f"  [dim]•[/dim] {issue.relation_id} {escape(issue.target_label)} "
                    f"[dim]({escape(issue.expected_key)})[/dim]"
                )


@app.command(name="sync")
def sync_relations(
    apply: Annotated[
        bool, typer.Option("--apply", help="Persist table/column patches and log history")
    ] = False,
    verbose: _VerboseOption = False,
) -> None:
    """관계 동기화 미리보기 / 적용."""
    _setup_cli_logger(verbose)
    settings = get_settings()
    registry = DataRegistry(settings.data_dir)
    try:
        context, selection = load_mapping_context(registry)
    except StorageError as e:
        raise _fail(e) from None

    plan = build_design_relation_sync_plan(context)
    counts = plan.preview.counts
    console.print(
        f"[bold]Sync preview[/bold]  tables={counts.table_candidates}  "
        f"columns={counts.column_candidates}  fields={counts.field_changes}  "
        f"suggestions={counts.attribute_column_suggestions}"
    )

    if plan.preview.changes:
        table = Table(show_header=True, header_style="bold", title="Field changes")
        table.add_column("Target", style="bold")
        table.add_column("Field")
        table.add_column("Before", style="dim")
        table.add_column("After", style="green")
        for change in plan.preview.changes:
            table.add_row(
                escape(f"{change.target_type}:{change.target_label}"),
                change.field,
                escape(change.before or "-"),
                escape(change.after),
            )
        console.print(table)

    for suggestion in plan.suggestions:
        labels = ", ".join(candidate.column_label for candidate in suggestion.candidates)
        console.print(f"  [dim]•[/dim] {escape(suggestion.attribute_name)} → {escape(labels)}")

    if not apply:
        return
    if plan.is_empty:
        console.print("[yellow]Nothing to apply.[/yellow]")
        return

    patched = apply_sync_plan(context, plan)
    history = HistoryStore(settings.history_path, settings.history_max_logs)
    targets: list[tuple[DataType, list[Any], int]] = [
        (DataType.TABLE, patched.tables, len(plan.table_updates)),
        (DataType.COLUMN, patched.columns, len(plan.column_updates)),
    ]
    try:
        for data_type, entries, updated in targets:
            if not updated:
                continue
            filename = selection.get(data_type)
            current = registry.load(data_type, filename)
            registry.save(data_type, current.with_entries(entries), filename)
            history.add(
                HistoryLogEntry(
                    id=str(uuid.uuid4()),
                    action=HistoryAction.SYNC,
                    data_type=data_type,
                    target_id="design-relation-sync",
                    target_name=f"{data_type} relation sync",
                    filename=filename,
                    details={"updated": updated},
                )
            )
    except StorageError as e:
        raise _fail(e) from None

    console.print(
        f"[green]Applied: tables={len(plan.table_updates)}, "
        f"columns={len(plan.column_updates)}[/green]"
    )


# ─── Generators ──────────────────────────────────────────────────────


@app.command(name="domain-name")
def domain_name(
    category: Annotated[str, typer.Argument(help="Domain category (e.g., 회원)")],
    physical_type: Annotated[str, typer.Argument(help="Physical data type (e.g., VARCHAR)")],
    length: Annotated[str | None, typer.Option("--length", "-l", help="Data length")] = None,
    decimals: Annotated[
        str | None, typer.Option("--decimals", "-d", help="Decimal places")
    ] = None,
    file: Annotated[
        str | None, typer.Option("--file", "-f", help="Domain file for a uniqueness check")
    ] = None,
) -> None:
    """표준도메인명 계산."""
    name = generate_standard_domain_name(category, physical_type, length, decimals)
    if not name:
        console.print("[red]Category and physical type are required.[/red]")
        raise typer.Exit(code=1)

    console.print(escape(name))
    if file is None:
        return

    data = _load(_registry(), DataType.DOMAIN, file)
    issue = check_domain_name_uniqueness(
        category, physical_type, data.entries, length=length, decimals=decimals
    )
    if issue is not None:
        console.print(f"[yellow]{escape(issue.message)}[/yellow]")


@app.command(name="convert")
def convert(
    term: Annotated[str, typer.Argument(help="Term to convert (e.g., 사용자_번호)")],
    direction: Annotated[
        ConvertDirection, typer.Option("--direction", help="ko-to-en or en-to-ko")
    ] = ConvertDirection.KO_TO_EN,
    vocabulary_file: Annotated[
        str | None, typer.Option("--vocabulary-file", help="Vocabulary file name")
    ] = None,
) -> None:
    """용어 단방향 변환 (미매핑 단어는 ##)."""
    data = _load(_registry(), DataType.VOCABULARY, vocabulary_file)
    console.print(escape(convert_term(term, data.entries, direction)))
