"""Order command: show the render order of a surface's options."""

from pathlib import Path

import typer

from ...ordering import sort_by_priority
from ..app import app, console, get_json_mode
from ..utils import Output, load_surface_or_fail


@app.command("order")
def order_command(
    surface_file: Path = typer.Argument(..., help="Surface YAML file"),
    no_pair_shortcut: bool = typer.Option(
        False,
        "--no-pair-shortcut",
        help="Route two-option lists through the general partition",
    ),
):
    """
    Print options in render order (ascending priority).

    EXAMPLES:
        optiongate order surface.yaml
        optiongate --json order surface.yaml
    """
    out = Output(console=console, json_mode=get_json_mode())

    spec = load_surface_or_fail(surface_file, out)
    if spec is None:
        raise typer.Exit(out.finish())

    ordered = sort_by_priority(spec.options, pair_shortcut=not no_pair_shortcut)

    rows = [
        [str(i), option.key, str(option.priority), option.premium or ""]
        for i, option in enumerate(ordered, 1)
    ]
    out.table(
        "Render order",
        ["#", "Key", "Priority", "Premium"],
        rows,
        data_key="order",
        styles=["dim", "bold", None, "dim"],
    )
    out.set_data("keys", [option.key for option in ordered])

    raise typer.Exit(out.finish())
