"""asciiforge command line, built on Typer.

Commands
--------
draw         Rasterize a rectangle, circle or polygon.
banner       Render text with the block glyph font.
transform    Rotate, mirror or scale a grid stored in a text file.
recipe       Execute a recipe document.
compose      Build a canvas from a shape-recipe document.
decorators   List registered fill patterns.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from asciiforge.config.settings import settings
from asciiforge.decorators import apply_decorator, get_decorator_registry
from asciiforge.errors import AsciiForgeError, ConfigurationError
from asciiforge.export import export_text, grid_to_html, grid_to_json, import_grid
from asciiforge.grid import CompositeGrid, Grid, RowCompleted
from asciiforge.recipe import RecipeExecutor, parse_recipe, parse_shape_recipe
from asciiforge.recipe.models import validate_shape_params

app = typer.Typer(
    name="asciiforge",
    help="Draw, transform and compose ASCII art.",
    add_completion=False,
)

FORGE_THEME = Theme(
    {
        "forge.name": "bold cyan",
        "forge.dim": "dim white",
        "forge.success": "bold green",
        "forge.error": "bold red",
    }
)

console = Console(theme=FORGE_THEME)
err_console = Console(theme=FORGE_THEME, stderr=True)

OUTPUT_FORMATS = ("text", "json", "html")

# Shared option definitions
OutputOption = typer.Option(None, "--output", "-o", help="Write the result to this file.")
AppendOption = typer.Option(False, "--append", help="Append to --output instead of replacing it.")
AnimateOption = typer.Option(False, "--animate", help="Print row by row with the configured delay.")
FormatOption = typer.Option("text", "--format", "-f", help="Output format: text, json or html.")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")


def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(name)-30s  %(levelname)-7s  %(message)s",
    )


def _fail(exc: Exception) -> None:
    err_console.print(f"[forge.error]Error:[/] {escape(str(exc))}", highlight=False, soft_wrap=True)
    raise typer.Exit(1)


def _print_plain(text: str) -> None:
    console.print(text, markup=False, highlight=False, soft_wrap=True)


async def _animate(grid: Grid) -> None:
    delay = settings.render.stream_delay_ms / 1000
    async for event in grid.stream_rows_with_delay(delay):
        if isinstance(event, RowCompleted):
            _print_plain(event.data)


def _render(grid: Grid, fmt: str, metadata: dict[str, Any]) -> str:
    if fmt == "json":
        return grid_to_json(grid, metadata)
    if fmt == "html":
        return grid_to_html(grid)
    if fmt == "text":
        return grid.to_string()
    raise ConfigurationError(
        f"Unknown output format: {fmt!r} (allowed: {', '.join(OUTPUT_FORMATS)})", fmt,
    )


def _emit(
    grid: Grid,
    output: Optional[Path],
    append: bool,
    animate: bool,
    fmt: str = "text",
    metadata: Optional[dict[str, Any]] = None,
) -> None:
    """Show *grid* on the console and optionally export it."""
    text = _render(grid, fmt, metadata or {})
    if animate and fmt == "text":
        asyncio.run(_animate(grid))
    else:
        _print_plain(text)

    if output is not None:
        path = export_text(text, output, append=append)
        err_console.print(f"[forge.success]Saved[/] {path}", highlight=False)


def _parse_step(step: str) -> dict[str, Any]:
    """``rotate:90`` / ``mirror:horizontal`` / ``scale:2`` -> transform step."""
    kind, _, value = step.partition(":")
    if not value:
        raise ConfigurationError(f"Transform step must look like TYPE:VALUE, got {step!r}", step)
    try:
        if kind == "rotate":
            return {"type": kind, "params": {"degrees": int(value)}}
        if kind == "scale":
            return {"type": kind, "params": {"factor": float(value)}}
    except ValueError as exc:
        raise ConfigurationError(f"Invalid value in transform step {step!r}", step) from exc
    if kind == "mirror":
        return {"type": kind, "params": {"axis": value}}
    raise ConfigurationError(f"Unknown transformation type: {kind!r}", kind)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def draw(
    shape: str = typer.Option(..., "--shape", "-s", help="rectangle, circle or polygon."),
    width: Optional[int] = typer.Option(None, "--width", help="Rectangle width."),
    height: Optional[int] = typer.Option(None, "--height", help="Rectangle height."),
    radius: Optional[int] = typer.Option(None, "--radius", help="Circle or polygon radius."),
    sides: Optional[int] = typer.Option(None, "--sides", help="Polygon side count."),
    filled: bool = typer.Option(False, "--filled", help="Fill the shape."),
    char: Optional[str] = typer.Option(None, "--char", "-c", help="Drawing character."),
    fill_pattern: Optional[str] = typer.Option(
        None, "--fill-pattern", "-p", help="Decorate blank cells (see `decorators`).",
    ),
    direction: str = typer.Option("horizontal", "--direction", help="Gradient direction."),
    output: Optional[Path] = OutputOption,
    append: bool = AppendOption,
    animate: bool = AnimateOption,
    fmt: str = FormatOption,
    verbose: bool = VerboseOption,
) -> None:
    """Draw a rectangle, circle or polygon."""
    _setup_logging(verbose)
    by_shape: dict[str, dict[str, Any]] = {
        "rectangle": {"width": width, "height": height},
        "circle": {"radius": radius},
        "polygon": {"sides": sides, "radius": radius},
    }
    try:
        if shape not in by_shape:
            raise ConfigurationError(
                f"Unknown shape: {shape!r}. Available: {', '.join(by_shape)}", shape,
            )
        params = validate_shape_params(
            shape,
            {**by_shape[shape], "filled": filled, "char": char or settings.render.default_char},
        )
        grid = Grid.generate(shape, params)
        if fill_pattern:
            fill_params = {"direction": direction} if fill_pattern == "gradient" else {}
            apply_decorator(fill_pattern, grid, **fill_params)
        _emit(grid, output, append, animate, fmt, {"shape": shape, "params": params})
    except AsciiForgeError as exc:
        _fail(exc)


@app.command()
def banner(
    text: str = typer.Argument(..., help="Text to render (A-Z, 0-9, space and ! ? . - + :)."),
    char: Optional[str] = typer.Option(None, "--char", "-c", help="Replace the glyph character."),
    width: Optional[int] = typer.Option(None, "--width", help="Centre the banner in this width."),
    output: Optional[Path] = OutputOption,
    append: bool = AppendOption,
    animate: bool = AnimateOption,
    fmt: str = FormatOption,
    verbose: bool = VerboseOption,
) -> None:
    """Render TEXT as a five-row block banner."""
    _setup_logging(verbose)
    try:
        grid = Grid.create_text(text)
        if char:
            grid = Grid(grid.width, grid.height).overlay(grid, char=char)
        if width:
            grid = grid.center_horizontally(width)
        _emit(grid, output, append, animate, fmt, {"shape": "text", "text": text})
    except AsciiForgeError as exc:
        _fail(exc)


@app.command()
def transform(
    source: Path = typer.Argument(..., help="Text file holding the grid."),
    steps: List[str] = typer.Option(
        ..., "--step", help="Ordered steps: rotate:90, mirror:horizontal, scale:0.5 ...",
    ),
    output: Optional[Path] = OutputOption,
    append: bool = AppendOption,
    animate: bool = AnimateOption,
    fmt: str = FormatOption,
    verbose: bool = VerboseOption,
) -> None:
    """Apply transformation steps, in order, to the grid in SOURCE."""
    _setup_logging(verbose)
    try:
        grid = import_grid(source).transform(_parse_step(step) for step in steps)
        _emit(grid, output, append, animate, fmt, {"source": str(source), "steps": steps})
    except AsciiForgeError as exc:
        _fail(exc)


@app.command()
def recipe(
    path: Path = typer.Argument(..., help="Recipe JSON document."),
    output: Optional[Path] = OutputOption,
    append: bool = AppendOption,
    animate: bool = AnimateOption,
    fmt: str = FormatOption,
    verbose: bool = VerboseOption,
) -> None:
    """Execute the recipe in PATH and show its output grid."""
    _setup_logging(verbose)
    try:
        document = parse_recipe(_read_document(path))
        result = RecipeExecutor().run(document)
        _emit(result.output, output, append, animate, fmt, {"recipe": str(path), "output": document.output})
    except AsciiForgeError as exc:
        _fail(exc)


@app.command()
def compose(
    path: Path = typer.Argument(..., help="Shape-recipe JSON document."),
    layers: bool = typer.Option(False, "--layers", help="Also list where each shape landed."),
    output: Optional[Path] = OutputOption,
    append: bool = AppendOption,
    animate: bool = AnimateOption,
    fmt: str = FormatOption,
    verbose: bool = VerboseOption,
) -> None:
    """Compose the shapes declared in PATH onto one canvas."""
    _setup_logging(verbose)
    try:
        composite = CompositeGrid.from_recipe(parse_shape_recipe(_read_document(path)))
        _emit(composite, output, append, animate, fmt, {"recipe": str(path)})
    except AsciiForgeError as exc:
        _fail(exc)

    if layers:
        table = Table(title="Layers", title_style="forge.name")
        table.add_column("#", justify="right")
        table.add_column("Size")
        table.add_column("Anchor")
        table.add_column("Origin (row, col)")
        for index, layer in enumerate(composite.layers):
            table.add_row(
                str(index),
                f"{layer.grid.width}x{layer.grid.height}",
                layer.anchor,
                f"({layer.row}, {layer.col})",
            )
        console.print(table)


@app.command()
def decorators() -> None:
    """List registered fill patterns."""
    _setup_logging()
    table = Table(title="Fill patterns", title_style="forge.name")
    table.add_column("Name", style="forge.name")
    table.add_column("Description", style="forge.dim")
    for entry in get_decorator_registry().describe():
        table.add_row(entry["name"], entry["description"])
    console.print(table)


def _read_document(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read {path}: {exc}", str(path)) from exc


def main() -> None:
    """Console-script entry point."""
    app()
