"""Typer CLI for sheet layout."""

import logging
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer

from sheetlayout.application import SheetLayoutService
from sheetlayout.application.config import (
    CanvasSnapshot,
    ConfigError,
    LayoutSettings,
    load_settings,
    load_snapshot,
)
from sheetlayout.application.factory import ServiceFactory
from sheetlayout.cli.commands import validate_command
from sheetlayout.domain.errors import LayoutError
from sheetlayout.domain.value_objects import (
    OverflowPolicy,
    Rect,
    SearchPreset,
    StartCorner,
)
from sheetlayout.infrastructure import JsonFormatter, TextFormatter

app = typer.Typer(
    name="sheetlayout",
    help="Resolve printable areas, find empty space and lay out content on drawing sheets.",
)

# Register validate command
app.command(name="validate")(validate_command)

SnapshotArg = Annotated[Path, typer.Argument(help="Path to the JSON canvas snapshot")]
SettingsOpt = Annotated[
    Path | None, typer.Option("--settings", "-s", help="Path to JSON layout settings")
]
CanvasOpt = Annotated[
    str | None, typer.Option("--canvas", "-c", help="Canvas id (default: first canvas)")
]
FormatOpt = Annotated[str, typer.Option("--format", "-f", help="Output format: text, json")]
MarginOpt = Annotated[
    float | None, typer.Option("--margin", "-m", help="Edge margin in inches")
]


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """Sheet layout command line."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


def _load(
    snapshot_file: Path, settings_file: Path | None
) -> tuple[SheetLayoutService, CanvasSnapshot]:
    try:
        settings = load_settings(settings_file) if settings_file else LayoutSettings()
        snapshot = load_snapshot(snapshot_file)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    factory = ServiceFactory(settings=settings)
    host = factory.create_memory_host(snapshot)
    return factory.create_sheet_layout_service(host), snapshot


def _canvas_id(snapshot: CanvasSnapshot, canvas: str | None) -> str:
    return canvas if canvas is not None else snapshot.canvases[0].id


def _check_format(output_format: str) -> str:
    output_format = output_format.lower()
    if output_format not in ("text", "json"):
        typer.echo(f"Error: Unknown format '{output_format}'. Use text or json.", err=True)
        raise typer.Exit(code=1)
    return output_format


def _split_ids(items: str) -> list[str]:
    return [item.strip() for item in items.split(",") if item.strip()]


def _emit(output_format: str, text: str, data: Any) -> None:
    if output_format == "json":
        typer.echo(JsonFormatter().dumps(data))
    else:
        typer.echo(text)


def _fail(error: Exception) -> NoReturn:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


@app.command()
def area(
    snapshot_file: SnapshotArg,
    settings_file: SettingsOpt = None,
    canvas: CanvasOpt = None,
    margin: MarginOpt = None,
    output_format: FormatOpt = "text",
) -> None:
    """Show the printable area of a canvas and where it came from.

    Examples:
        sheetlayout area sheet.json
        sheetlayout area sheet.json --canvas A102 --margin 0.5 --format json
    """
    output_format = _check_format(output_format)
    service, snapshot = _load(snapshot_file, settings_file)
    canvas_id = _canvas_id(snapshot, canvas)
    try:
        result = service.resolve_printable_area(canvas_id, margin)
    except LayoutError as e:
        _fail(e)

    _emit(
        output_format,
        TextFormatter().format_area(canvas_id, result),
        JsonFormatter().area_to_dict(result),
    )


@app.command()
def zones(
    snapshot_file: SnapshotArg,
    settings_file: SettingsOpt = None,
    canvas: CanvasOpt = None,
    rows: Annotated[int, typer.Option("--rows", help="Zone grid rows")] = 3,
    cols: Annotated[int, typer.Option("--cols", help="Zone grid columns")] = 3,
    margin: MarginOpt = None,
    output_format: FormatOpt = "text",
) -> None:
    """List the zones of a canvas and which zones existing content touches.

    Example:
        sheetlayout zones sheet.json --rows 3 --cols 3
    """
    output_format = _check_format(output_format)
    service, snapshot = _load(snapshot_file, settings_file)
    canvas_id = _canvas_id(snapshot, canvas)
    try:
        zone_list = service.zones(canvas_id, rows, cols, margin)
        occupancy = service.zone_occupancy(canvas_id, rows, cols, margin)
    except LayoutError as e:
        _fail(e)

    formatter = JsonFormatter()
    _emit(
        output_format,
        TextFormatter().format_zones(zone_list, occupancy),
        {
            "zones": [formatter.zone_to_dict(z) for z in zone_list],
            "occupancy": occupancy,
        },
    )


@app.command()
def plan(
    snapshot_file: SnapshotArg,
    items: Annotated[str, typer.Option("--items", "-i", help="Comma-separated content ids")],
    settings_file: SettingsOpt = None,
    canvas: CanvasOpt = None,
    strategy: Annotated[
        str | None, typer.Option("--strategy", help="Layout strategy (default from settings)")
    ] = None,
    columns: Annotated[
        int | None, typer.Option("--columns", help="Fixed column count")
    ] = None,
    spacing: Annotated[
        str | None, typer.Option("--spacing", help="Spacing preset: compact, normal, spacious")
    ] = None,
    start_corner: Annotated[
        StartCorner | None, typer.Option("--start-corner", help="Corner to fill from")
    ] = None,
    overflow: Annotated[
        OverflowPolicy | None, typer.Option("--overflow", help="Overflow policy")
    ] = None,
    margin: MarginOpt = None,
    diagram: Annotated[bool, typer.Option("--diagram", help="Include an ASCII diagram")] = False,
    output_format: FormatOpt = "text",
) -> None:
    """Compute a layout plan without placing anything.

    Examples:
        sheetlayout plan sheet.json --items d1,d2,d3
        sheetlayout plan sheet.json --items d1,d2,d3,d4 --strategy grid-2x2 --diagram
        sheetlayout plan sheet.json --items d1,d2,d3 --strategy row --overflow reject
    """
    output_format = _check_format(output_format)
    service, snapshot = _load(snapshot_file, settings_file)
    canvas_id = _canvas_id(snapshot, canvas)
    try:
        printable = service.resolve_printable_area(canvas_id, margin)
        content = service.estimate_footprints(_split_ids(items))
        result = service.plan_layout(
            content,
            printable.bounds,
            strategy=strategy,
            columns_override=columns,
            margin=service.settings.margin_for(spacing),
            start_corner=start_corner,
            overflow_policy=overflow,
        )
    except LayoutError as e:
        _fail(e)

    text = TextFormatter().format_plan(result)
    if diagram:
        text = f"{text}\n\n{TextFormatter().format_diagram(result)}"
    _emit(output_format, text, JsonFormatter().plan_to_dict(result))


@app.command()
def audit(
    snapshot_file: SnapshotArg,
    settings_file: SettingsOpt = None,
    canvas: CanvasOpt = None,
    margin: MarginOpt = None,
    output_format: FormatOpt = "text",
) -> None:
    """Report overlapping content and content past the sheet or printable area.

    Exits with code 1 when any issue is found.

    Example:
        sheetlayout audit sheet.json --canvas A101
    """
    output_format = _check_format(output_format)
    service, snapshot = _load(snapshot_file, settings_file)
    canvas_id = _canvas_id(snapshot, canvas)
    try:
        result = service.analyze_layout(canvas_id, margin)
    except LayoutError as e:
        _fail(e)

    _emit(
        output_format,
        TextFormatter().format_audit(result),
        JsonFormatter().audit_to_dict(result),
    )
    if result.issue_count:
        raise typer.Exit(code=1)


@app.command(name="find-space")
def find_space(
    snapshot_file: SnapshotArg,
    width: Annotated[float, typer.Option("--width", "-w", help="Required width")],
    height: Annotated[float, typer.Option("--height", "-h", help="Required height")],
    settings_file: SettingsOpt = None,
    canvas: CanvasOpt = None,
    preset: Annotated[
        SearchPreset, typer.Option("--preset", help="Search region: any, notes, legend")
    ] = SearchPreset.ANY,
    max_candidates: Annotated[
        int | None, typer.Option("--max", help="Maximum number of candidates")
    ] = None,
    output_format: FormatOpt = "text",
) -> None:
    """Find unoccupied spots large enough for a footprint.

    Example:
        sheetlayout find-space sheet.json --width 0.5 --height 0.3 --preset notes
    """
    output_format = _check_format(output_format)
    service, snapshot = _load(snapshot_file, settings_file)
    canvas_id = _canvas_id(snapshot, canvas)
    try:
        candidates = service.find_empty_space(
            canvas_id, width, height, preset=preset, max_candidates=max_candidates
        )
    except LayoutError as e:
        _fail(e)

    formatter = JsonFormatter()
    _emit(
        output_format,
        TextFormatter().format_candidates(candidates),
        {"candidates": [formatter.candidate_to_dict(c) for c in candidates]},
    )


@app.command(name="check-overlap")
def check_overlap(
    snapshot_file: SnapshotArg,
    rect: Annotated[
        str, typer.Option("--rect", "-r", help="Proposed rectangle as min_x,min_y,max_x,max_y")
    ],
    settings_file: SettingsOpt = None,
    canvas: CanvasOpt = None,
    buffer: Annotated[
        float | None, typer.Option("--buffer", "-b", help="Clearance around the rectangle")
    ] = None,
    output_format: FormatOpt = "text",
) -> None:
    """Check whether a proposed rectangle collides with existing content.

    Example:
        sheetlayout check-overlap sheet.json --rect 0.5,0.5,1.0,0.8
    """
    output_format = _check_format(output_format)
    try:
        edges = [float(v) for v in rect.split(",")]
        proposed = Rect(*edges)
    except (TypeError, ValueError) as e:
        typer.echo(f"Error: Invalid rectangle '{rect}': {e}", err=True)
        raise typer.Exit(code=1)

    service, snapshot = _load(snapshot_file, settings_file)
    canvas_id = _canvas_id(snapshot, canvas)
    try:
        report = service.check_overlap(canvas_id, proposed, buffer)
    except LayoutError as e:
        _fail(e)

    _emit(
        output_format,
        TextFormatter().format_overlap(report),
        JsonFormatter().overlap_to_dict(report),
    )


@app.command()
def place(
    snapshot_file: SnapshotArg,
    items: Annotated[str, typer.Option("--items", "-i", help="Comma-separated content ids")],
    settings_file: SettingsOpt = None,
    canvas: CanvasOpt = None,
    strategy: Annotated[str | None, typer.Option("--strategy", help="Layout strategy")] = None,
    columns: Annotated[int | None, typer.Option("--columns", help="Fixed column count")] = None,
    spacing: Annotated[
        str | None, typer.Option("--spacing", help="Spacing preset: compact, normal, spacious")
    ] = None,
    start_corner: Annotated[
        StartCorner | None, typer.Option("--start-corner", help="Corner to fill from")
    ] = None,
    overflow: Annotated[
        OverflowPolicy | None, typer.Option("--overflow", help="Overflow policy")
    ] = None,
    zone: Annotated[
        str | None, typer.Option("--zone", "-z", help="Place a single item at this zone's center")
    ] = None,
    validate_only: Annotated[
        bool, typer.Option("--validate-only", help="With --zone, preview without placing")
    ] = False,
    margin: MarginOpt = None,
    output_format: FormatOpt = "text",
) -> None:
    """Lay out and place content items on a canvas.

    Placements are applied to an in-memory copy of the snapshot; the
    snapshot file is not modified.

    Examples:
        sheetlayout place sheet.json --items d1,d2,d3 --strategy auto
        sheetlayout place sheet.json --items d1 --zone 5 --validate-only
    """
    output_format = _check_format(output_format)
    content_ids = _split_ids(items)
    service, snapshot = _load(snapshot_file, settings_file)
    canvas_id = _canvas_id(snapshot, canvas)

    if zone is not None:
        if len(content_ids) != 1:
            typer.echo("Error: --zone places exactly one item", err=True)
            raise typer.Exit(code=1)
        try:
            zone_output = service.place_in_zone(
                canvas_id, content_ids[0], zone, validate_only=validate_only, margin_inches=margin
            )
        except LayoutError as e:
            _fail(e)
        _emit(
            output_format,
            TextFormatter().format_zone_placement(zone_output),
            JsonFormatter().zone_placement_to_dict(zone_output),
        )
        if not validate_only and not zone_output.placed:
            raise typer.Exit(code=1)
        return

    try:
        output = service.place_items(
            canvas_id,
            content_ids,
            strategy=strategy,
            columns_override=columns,
            spacing=spacing,
            start_corner=start_corner,
            overflow_policy=overflow,
            margin_inches=margin,
        )
    except LayoutError as e:
        _fail(e)

    _emit(
        output_format,
        TextFormatter().format_batch(output),
        JsonFormatter().batch_to_dict(output),
    )
    if not output.is_valid:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
