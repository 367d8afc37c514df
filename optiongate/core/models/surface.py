"""Surface spec models and YAML I/O.

A SurfaceSpec describes one rendering surface as the host collaborator sees
it: the option descriptors, the input controls currently on the page (with
their values), the initial visibility of presentation elements, and any
aggregate rules. It is a snapshot for tooling and tests; live state is held
by ``optiongate.visibility.Surface``.
"""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from .option import Option

ControlKind = Literal["checkbox", "toggle", "select", "text", "textarea"]
TOGGLE_KINDS = frozenset({"checkbox", "toggle"})


class Control(BaseModel):
    """An input control on the page that may act as a controller."""

    name: str = Field(description="The control's name attribute (page-global key)")
    swp_name: str | None = Field(
        default=None, description="Scoped data-swp-name; defaults to name"
    )
    field: str | None = Field(
        default=None, description="Secondary field identifier, matched by suffix"
    )
    kind: ControlKind = "select"
    value: Any = None
    checked: bool = False
    container: str | None = Field(
        default=None, description="Nearest enclosing grouping container element id"
    )
    group: str | None = Field(
        default=None, description="Enclosing widget holder id (embedded context scope)"
    )

    @property
    def scoped_name(self) -> str:
        return self.swp_name or self.name

    @property
    def is_toggle(self) -> bool:
        return self.kind in TOGGLE_KINDS

    def raw_value(self) -> Any:
        """Checked state for toggle-like controls, value for everything else."""
        if self.is_toggle:
            return bool(self.checked)
        return self.value


class Condition(BaseModel):
    """One clause of an aggregate rule: ``control`` must currently equal ``equals``."""

    control: str
    equals: bool | str


class AggregateRule(BaseModel):
    """Show ``target`` when any group of conditions fully matches.

    ``any_of`` is a disjunction of conjunctions:
        [[a, b], [c]]  ->  (a and b) or c
    """

    target: str
    any_of: list[list[Condition]] = Field(default_factory=list)

    def control_names(self) -> list[str]:
        names: list[str] = []
        for group in self.any_of:
            for cond in group:
                if cond.control not in names:
                    names.append(cond.control)
        return names


class SurfaceSpec(BaseModel):
    """A complete surface snapshot with YAML I/O."""

    context: str | None = Field(
        default=None, description="Rendering context; detected from url when omitted"
    )
    url: str | None = None
    options: list[Option] = Field(default_factory=list)
    controls: list[Control] = Field(default_factory=list)
    elements: dict[str, bool] = Field(
        default_factory=dict, description="Initial element visibility by id"
    )
    rules: list[AggregateRule] = Field(default_factory=list)

    def to_yaml(self, path: Path | str) -> None:
        """Save spec to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(mode="json", exclude_none=True)

        with open(path, "w") as f:
            yaml.dump(
                data, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )

    @classmethod
    def from_yaml(cls, path: Path | str) -> "SurfaceSpec":
        """Load spec from YAML file."""
        path = Path(path)

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.model_validate(data or {})

    def get_option(self, key: str) -> Option | None:
        """Get an option by key."""
        for option in self.options:
            if option.key == key:
                return option
        return None

    def build_surface(self):
        """Create a live Surface from this snapshot."""
        from ...visibility.surface import Surface

        surface = Surface()
        for element_id, visible in self.elements.items():
            surface.add_element(element_id, visible)
        for option in self.options:
            if not surface.has_element(option.element_id):
                surface.add_element(option.element_id, True)
        for control in self.controls:
            surface.add_control(control)
        return surface

    def summary(self) -> str:
        """Get a text summary of the spec."""
        dependents = sum(1 for o in self.options if o.dependency is not None)
        return "\n".join(
            [
                f"Options: {len(self.options)} ({dependents} dependent)",
                f"Controls: {len(self.controls)}",
                f"Rules: {len(self.rules)}",
            ]
        )
