"""Evaluate command: run one visibility pass over a surface."""

from pathlib import Path

import typer

from ...config import get_config
from ...core.errors import UnknownContextError
from ...visibility import Context, VisibilityEngine, detect_context
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, load_surface_or_fail, visibility_label


def _parse_assignment(raw: str) -> tuple[str, str]:
    """Split a NAME=VALUE assignment."""
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise ValueError(f"Expected NAME=VALUE, got {raw!r}")
    return name.strip(), value


@app.command("evaluate")
def evaluate_command(
    surface_file: Path = typer.Argument(..., help="Surface YAML file"),
    context: str | None = typer.Option(
        None,
        "--context",
        "-c",
        help="settings-page or embedded (default: from the surface file, its url, or config)",
    ),
    assignments: list[str] = typer.Option(
        [],
        "--set",
        "-s",
        help="Simulate input before evaluating: NAME=VALUE (true/false toggles checkboxes)",
    ),
):
    """
    Evaluate which dependent options are visible.

    EXIT CODES:
        0 = Success
        1 = Invalid surface file
        2 = Bad --context or --set value
        3 = File not found

    EXAMPLES:
        optiongate evaluate surface.yaml
        optiongate evaluate surface.yaml --context embedded
        optiongate evaluate surface.yaml --set float_style_source=false
    """
    json_mode = get_json_mode()
    out = Output(console=console, json_mode=json_mode)

    spec = load_surface_or_fail(surface_file, out)
    if spec is None:
        raise typer.Exit(out.finish())

    try:
        if context is not None:
            ctx = Context.parse(context)
        elif spec.context is not None:
            ctx = Context.parse(spec.context)
        elif spec.url is not None:
            ctx = detect_context(spec.url)
        else:
            ctx = Context.parse(get_config().engine.default_context)
    except UnknownContextError as e:
        out.error(str(e), exit_code=ExitCode.USAGE_ERROR)
        raise typer.Exit(out.finish())

    surface = spec.build_surface()
    for raw in assignments:
        try:
            name, value = _parse_assignment(raw)
            control = surface.find_by_name(name)
            if control is None:
                raise KeyError(f"No control named {name!r} on this surface")
            if control.is_toggle:
                surface.set_checked(name, value.strip().lower() in ("true", "1", "on"))
            else:
                surface.set_value(name, value)
        except ValueError as e:
            out.error(str(e), exit_code=ExitCode.USAGE_ERROR)
            raise typer.Exit(out.finish())
        except KeyError as e:
            out.error(e.args[0], exit_code=ExitCode.USAGE_ERROR)
            raise typer.Exit(out.finish())

    engine = VisibilityEngine(spec.options, rules=spec.rules)
    report = engine.evaluate_all(ctx, surface)

    out.success(f"Evaluated in [bold]{ctx.value}[/bold] context", context=ctx.value)

    rows = []
    for key, visible in report.decisions.items():
        option = spec.get_option(key)
        controller = option.dependency.controller_key if option and option.dependency else ""
        rows.append([key, controller, visibility_label(visible, plain=json_mode)])
    out.table(
        "Dependents",
        ["Option", "Controller", "Visibility"],
        rows,
        data_key="dependents",
        styles=["bold", "dim", None],
    )

    if report.rules:
        out.table(
            "Rules",
            ["Target", "Visibility"],
            [
                [target, visibility_label(visible, plain=json_mode)]
                for target, visible in report.rules.items()
            ],
            data_key="rules",
        )

    for key, message in report.errors.items():
        out.warning(message, location=key)

    raise typer.Exit(out.finish())
