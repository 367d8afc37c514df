"""Shared helpers for optiongate commands.

Every command reports through ``Output``: Rich tables and coloured status
lines by default, or one JSON document on stdout under the global ``--json``
flag. Surface files are loaded with ``load_surface_or_fail`` so a missing or
unparseable file maps to the same exit codes everywhere.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, PrivateAttr, ConfigDict
from rich.console import Console
from rich.table import Table

from ..core.models import SurfaceSpec


class ExitCode:
    """Process exit codes shared by all optiongate commands."""

    SUCCESS = 0
    VALIDATION_ERROR = 1
    USAGE_ERROR = 2
    FILE_NOT_FOUND = 3


class Output(BaseModel):
    """Collects a command's results and renders them as Rich text or JSON."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    json_mode: bool = False

    _data: dict[str, Any] = PrivateAttr()
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        self._data = {
            "status": "success",
            "warnings": [],
            "errors": [],
        }

    def success(self, message: str, **data: Any) -> None:
        """Report success; keyword data goes into the JSON document."""
        if self.json_mode:
            self._data.update(data)
        else:
            self.console.print(f"[green]✓[/green] {message}")

    def warning(self, message: str, *, location: str | None = None) -> None:
        """Report a non-fatal problem, optionally tied to an option key."""
        if self.json_mode:
            warning_obj: dict[str, Any] = {"message": message}
            if location:
                warning_obj["location"] = location
            self._data["warnings"].append(warning_obj)
        else:
            prefix = f"{location}: " if location else ""
            self.console.print(f"[yellow]⚠[/yellow] {prefix}{message}")

    def error(
        self,
        message: str,
        *,
        suggestion: str | None = None,
        exit_code: int = ExitCode.VALIDATION_ERROR,
    ) -> None:
        """Report a failure and record the exit code ``finish()`` will return."""
        self._exit_code = exit_code
        self._data["status"] = "error"

        if self.json_mode:
            error_obj: dict[str, Any] = {"message": message}
            if suggestion:
                error_obj["suggestion"] = suggestion
            self._data["errors"].append(error_obj)
        else:
            self.console.print(f"[red]✗[/red] {message}")
            if suggestion:
                self.console.print(f"  [dim]→ {suggestion}[/dim]")

    def text(self, message: str) -> None:
        """Print Rich markup; ignored in JSON mode."""
        if not self.json_mode:
            self.console.print(message)

    def table(
        self,
        title: str,
        columns: list[str],
        rows: list[list[str]],
        *,
        data_key: str | None = None,
        styles: list[str | None] | None = None,
    ) -> None:
        """Render rows as a Rich table, or as a list of column-keyed dicts under
        ``data_key`` (default: the title in snake case) in JSON mode.
        """
        key = data_key or title.lower().replace(" ", "_")

        if self.json_mode:
            self._data[key] = [dict(zip(columns, row)) for row in rows]
        else:
            table = Table(title=title, show_header=True, header_style="bold")
            for i, col in enumerate(columns):
                style = styles[i] if styles and i < len(styles) else None
                table.add_column(col, style=style)
            for row in rows:
                table.add_row(*row)
            self.console.print(table)

    def set_data(self, key: str, value: Any) -> None:
        """Attach a value to the JSON document."""
        self._data[key] = value

    def finish(self) -> int:
        """Print the JSON document (JSON mode) and return the exit code."""
        if self.json_mode:
            self._data["exit_code"] = self._exit_code
            print(json.dumps(self._data, indent=2, default=str))

        return self._exit_code


def load_surface_or_fail(path: Path, out: Output) -> SurfaceSpec | None:
    """Load a surface file, reporting a missing or invalid file through ``out``."""
    if not path.exists():
        out.error(
            f"File not found: {path}",
            exit_code=ExitCode.FILE_NOT_FOUND,
            suggestion=f"Check the file path: {path.absolute()}",
        )
        return None
    try:
        return SurfaceSpec.from_yaml(path)
    except Exception as e:
        out.error(f"Failed to load surface: {e}", exit_code=ExitCode.VALIDATION_ERROR)
        return None


def format_validation_for_json(result) -> dict[str, Any]:
    """Validation issues grouped by severity for the JSON document."""
    return {
        "valid": result.valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "errors": [
            {
                "location": e.location,
                "category": e.category,
                "message": e.message,
                "suggestion": e.suggestion,
                "value": e.value,
            }
            for e in result.errors
        ],
        "warnings": [
            {
                "location": w.location,
                "category": w.category,
                "message": w.message,
                "suggestion": w.suggestion,
                "value": w.value,
            }
            for w in result.warnings
        ],
    }


def visibility_label(visible: bool, plain: bool = False) -> str:
    """Label a decision as shown/hidden, coloured for Rich unless plain."""
    if plain:
        return "shown" if visible else "hidden"
    return "[green]shown[/green]" if visible else "[red]hidden[/red]"
