"""Validate command for surface files."""

from pathlib import Path

import typer

from ...validator import validate_surface
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, format_validation_for_json, load_surface_or_fail


@app.command("validate")
def validate_command(
    surface_file: Path = typer.Argument(..., help="Surface YAML file to validate"),
    strict: bool = typer.Option(False, "--strict", help="Treat warnings as errors"),
):
    """
    Validate a surface file.

    EXIT CODES:
        0 = Success (valid surface)
        1 = Validation error (invalid surface)
        3 = File not found

    EXAMPLES:
        optiongate validate surface.yaml
        optiongate validate surface.yaml --strict
    """
    json_mode = get_json_mode()
    out = Output(console=console, json_mode=json_mode)

    spec = load_surface_or_fail(surface_file, out)
    if spec is None:
        raise typer.Exit(out.finish())

    out.success(
        f"Loaded: [bold]{surface_file.name}[/bold] ({len(spec.options)} options)",
        surface_file=str(surface_file),
        option_count=len(spec.options),
    )

    result = validate_surface(spec)
    out.set_data("validation", format_validation_for_json(result))

    if result.errors:
        out.error(
            f"Surface has {len(result.errors)} error(s)",
            exit_code=ExitCode.VALIDATION_ERROR,
        )
        if not json_mode:
            out.table(
                "Errors",
                ["Location", "Category", "Message"],
                [[e.location, e.category, e.message[:70]] for e in result.errors],
                styles=["red", "dim", None],
            )
            for err in result.errors[:3]:
                if err.suggestion:
                    out.text(f"  [dim]→ {err.location}: {err.suggestion}[/dim]")
        raise typer.Exit(out.finish())

    if result.warnings and strict:
        out.error(
            f"Surface has {len(result.warnings)} warning(s) (strict mode)",
            exit_code=ExitCode.VALIDATION_ERROR,
        )
        if not json_mode:
            out.table(
                "Warnings",
                ["Location", "Category", "Message"],
                [[w.location, w.category, w.message[:70]] for w in result.warnings],
                styles=["yellow", "dim", None],
            )
        raise typer.Exit(out.finish())

    if result.warnings:
        out.success(f"Surface validated with {len(result.warnings)} warning(s)")
        if not json_mode:
            for warn in result.warnings:
                out.warning(warn.message, location=warn.location)
    else:
        out.success("Surface validated")

    raise typer.Exit(out.finish())
