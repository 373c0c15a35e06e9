"""CLI interface for folio."""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from folio.config import load_config, merge_cli_overrides
from folio.content.store import load_records
from folio.query.contentset import ContentSet
from folio.query.supplement import SupplementContext
from folio.shared.request import RequestContext

app = typer.Typer(
    name="folio",
    help="Filter, sort and paginate flat-file content records.",
)

console = Console()

_DEFAULT_COLUMNS = ["url", "title"]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from folio import __version__

        console.print(f"folio {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Folio - query content records the way a template loop sees them."""
    pass


@app.command(name="query")
def query_cmd(
    records_file: Annotated[
        Path,
        typer.Argument(
            help="JSON file holding an array of content records.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    folder: Annotated[
        Optional[list[str]],
        typer.Option("--folder", "-f", help="Folder pattern to keep (repeatable, supports 'blog/*')."),
    ] = None,
    content_type: Annotated[
        Optional[str],
        typer.Option("--type", help="Keep only 'entries' or 'pages'."),
    ] = None,
    conditions: Annotated[
        Optional[str],
        typer.Option("--conditions", "-c", help="Condition string, e.g. 'tags:red|blue, !draft'."),
    ] = None,
    since: Annotated[Optional[str], typer.Option("--since", help="Earliest date to include.")] = None,
    until: Annotated[Optional[str], typer.Option("--until", help="Latest date to include.")] = None,
    show_hidden: Annotated[
        bool,
        typer.Option("--show-hidden", help="Include records under '_'-prefixed paths."),
    ] = False,
    show_past: Annotated[
        bool,
        typer.Option("--show-past/--hide-past", help="Include records dated before now."),
    ] = True,
    show_future: Annotated[
        bool,
        typer.Option("--show-future/--hide-future", help="Include records dated after now."),
    ] = True,
    located: Annotated[
        bool,
        typer.Option("--located", help="Keep only records with resolved coordinates."),
    ] = False,
    locate_with: Annotated[
        Optional[str],
        typer.Option("--locate-with", help="Field holding {latitude, longitude}."),
    ] = None,
    center: Annotated[
        Optional[str],
        typer.Option("--center", help="Center point 'lat,lng' for distance fields."),
    ] = None,
    sort: Annotated[Optional[str], typer.Option("--sort", "-s", help="Field to sort by, or 'random'.")] = None,
    direction: Annotated[Optional[str], typer.Option("--direction", help="'asc' or 'desc'.")] = None,
    limit: Annotated[Optional[int], typer.Option("--limit", "-n", help="Maximum records to show.")] = None,
    offset: Annotated[int, typer.Option("--offset", help="Records to skip before the limit.")] = 0,
    page: Annotated[Optional[int], typer.Option("--page", help="Page number (1-based).")] = None,
    per_page: Annotated[int, typer.Option("--per-page", help="Records per page.")] = 10,
    uri: Annotated[str, typer.Option("--uri", help="Resource URI of the current request.")] = "/",
    output_format: Annotated[
        str,
        typer.Option("--format", help="Output format: 'table' or 'json'."),
    ] = "table",
    fields: Annotated[
        Optional[str],
        typer.Option("--fields", help="Comma-separated columns for table output."),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", help="Path to a .folio.toml config file."),
    ] = None,
    fix_pagination: Annotated[
        Optional[bool],
        typer.Option("--fix-pagination/--no-fix-pagination", help="Clamp out-of-range pages."),
    ] = None,
    case_sensitive_taxonomies: Annotated[
        Optional[bool],
        typer.Option(
            "--case-sensitive-taxonomies/--case-insensitive-taxonomies",
            help="Match taxonomy conditions with exact case.",
        ),
    ] = None,
    taxonomies: Annotated[
        Optional[str],
        typer.Option("--taxonomies", help="Comma-separated taxonomy fields, e.g. 'tags,categories'."),
    ] = None,
    list_helpers: Annotated[
        Optional[bool],
        typer.Option("--list-helpers/--no-list-helpers", help="Add joined variants of list fields."),
    ] = None,
    context_urls: Annotated[
        Optional[bool],
        typer.Option("--context-urls/--no-context-urls", help="Add raw_url and page_url fields."),
    ] = None,
    parse_content: Annotated[
        bool,
        typer.Option("--parse-content", help="Read and render each record's content file."),
    ] = False,
    content_base_path: Annotated[
        Optional[Path],
        typer.Option("--content-base-path", help="Directory content files are read from."),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging.")] = False,
) -> None:
    """Run a query over a records file and print the result."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if output_format not in ("table", "json"):
        raise typer.BadParameter("must be 'table' or 'json'", param_hint="--format")

    try:
        records = load_records(records_file)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc

    taxonomy_fields = None
    if taxonomies is not None:
        taxonomy_fields = [t.strip() for t in taxonomies.split(",") if t.strip()]

    config = merge_cli_overrides(
        load_config(config_path),
        fix_pagination=fix_pagination,
        case_sensitive_taxonomies=case_sensitive_taxonomies,
        taxonomies=taxonomy_fields,
        list_helpers=list_helpers,
        context_urls=context_urls,
        content_base_path=str(content_base_path) if content_base_path is not None else None,
    )
    content_set = ContentSet(records, config=config, request=RequestContext(uri))

    if locate_with or center:
        # Located filtering needs coordinates before the filter runs.
        content_set.supplement(SupplementContext(locate_with=locate_with, center_point=center))

    content_set.filter(
        {
            "show_all": show_hidden,
            "since": since,
            "until": until,
            "show_past": show_past,
            "show_future": show_future,
            "type": content_type,
            "folders": folder,
            "conditions": conditions,
            "located": located,
        }
    )

    if sort:
        content_set.sort(sort, direction)

    if page is not None:
        content_set.isolate_page(per_page, page)
    else:
        content_set.limit(limit, offset)

    try:
        results = content_set.get(parse_content=parse_content)
    except OSError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc

    if output_format == "json":
        print(json.dumps(results, indent=2, default=str))
        return

    columns = [c.strip() for c in fields.split(",") if c.strip()] if fields else _DEFAULT_COLUMNS
    table = Table(title=f"{len(results)} record(s)")
    table.add_column("#", justify="right")
    for column in columns:
        table.add_column(column)
    for record in results:
        table.add_row(str(record.get("count", "")), *[_cell(record.get(c)) for c in columns])
    console.print(table)


def _cell(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, dict)):
        return json.dumps(value, default=str)
    return str(value)


if __name__ == "__main__":
    app()
