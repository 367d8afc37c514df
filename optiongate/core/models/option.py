"""Option and Dependency models.

An Option is an immutable descriptor built once per rendering pass from
markup attributes or a surface file:
- key: unique identifier (also the controller key other options refer to)
- priority: render order weight, lower renders first
- dependency: optional visibility rule on another option's current value
- container: enclosing grouping element, used by the embedded context
"""

import math
import re
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..values import RequiredValues, parse_required


# =============================================================================
# Helpers
# =============================================================================

_INT_PATTERN = re.compile(r"^[+-]?\d+$")
_FLOAT_PATTERN = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")


def coerce_priority(raw: Any) -> int:
    """Coerce a raw priority into an int, falling back to 0.

    Missing, non-numeric and non-finite priorities sort as 0 so the order
    stays total and deterministic.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else 0
    if isinstance(raw, str):
        text = raw.strip()
        if _INT_PATTERN.match(text):
            return int(text)
        if _FLOAT_PATTERN.match(text):
            return int(float(text))
    return 0


def is_valid_priority(raw: Any) -> bool:
    """Whether a raw priority is an integer greater than 0."""
    if raw is None or isinstance(raw, bool):
        return False
    if isinstance(raw, int):
        return raw >= 1
    if isinstance(raw, str) and _INT_PATTERN.match(raw.strip()):
        return int(raw) >= 1
    return False


def name_to_key(name: str) -> str:
    """Convert a display name into a selector-safe key.

    Examples:
        "Float Button Colors" -> "float_button_colors"
        "Show (on) Pages!"    -> "show_on_pages"
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected a string name, got {type(name).__name__}")
    key = re.sub(r"[^\w\s]", "", name)
    key = re.sub(r"\s+", "_", key.strip())
    return key.lower()


# =============================================================================
# Dependency
# =============================================================================


class Dependency(BaseModel):
    """Visibility rule: show the dependent when the controller holds a required value.

    ``values`` keeps the payload exactly as supplied (JSON text from markup,
    or a decoded list/scalar). It is parsed on demand so that a malformed
    payload only affects the dependent carrying it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    controller_key: str = Field(alias="parent", description="Key of the controller option")
    values: Any = Field(description="Required values payload (JSON text, list or scalar)")

    def required(self) -> RequiredValues:
        """Parse the required values.

        Raises:
            MalformedDependencyError: If the payload cannot be parsed.
        """
        return parse_required(self.values)

    @classmethod
    def from_attributes(cls, attrs: Mapping[str, Any]) -> "Dependency | None":
        """Build from ``data-dep`` / ``data-dep_val`` markup attributes."""
        controller = attrs.get("data-dep")
        if not controller:
            return None
        return cls(controller_key=str(controller), values=attrs.get("data-dep_val", "[]"))


# =============================================================================
# Option
# =============================================================================


class Option(BaseModel):
    """A configurable option descriptor."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str | None = None
    priority: int = 0
    dependency: Dependency | None = None
    container: str | None = Field(
        default=None,
        description="Enclosing grouping element (widget holder), used by the embedded context",
    )
    element: str | None = Field(
        default=None, description="Presentation element toggled for this option"
    )
    premium: str | None = Field(
        default=None, description="Addon code this premium option requires (e.g. 'pro')"
    )
    raw_priority: Any = Field(default=None, exclude=True, repr=False)

    @model_validator(mode="before")
    @classmethod
    def _remember_raw_priority(cls, data: Any) -> Any:
        if isinstance(data, dict) and "raw_priority" not in data:
            data = {**data, "raw_priority": data.get("priority")}
        return data

    @field_validator("priority", mode="before")
    @classmethod
    def _coerce_priority(cls, value: Any) -> int:
        return coerce_priority(value)

    @classmethod
    def create(cls, key: str | None = None, **data: Any) -> "Option":
        """Construct an option; ``key`` defaults to ``name_to_key(name)``."""
        if key is None:
            name = data.get("name")
            if name is None:
                raise ValueError("Option needs a key or a name")
            key = name_to_key(name)
        return cls(key=key, **data)

    @classmethod
    def from_attributes(
        cls, key: str, attrs: Mapping[str, Any], **extra: Any
    ) -> "Option":
        """Build an option from markup attributes.

        Recognized attributes: ``data-dep``, ``data-dep_val``,
        ``data-priority``, ``premium``.
        """
        data: dict[str, Any] = dict(extra)
        data.setdefault("dependency", Dependency.from_attributes(attrs))
        if "data-priority" in attrs:
            data.setdefault("priority", attrs["data-priority"])
        if attrs.get("premium"):
            data.setdefault("premium", str(attrs["premium"]))
        return cls.create(key=key, **data)

    @property
    def element_id(self) -> str:
        """Presentation element id, ``{key}_wrapper`` unless set explicitly."""
        return self.element or f"{self.key}_wrapper"

    @property
    def has_dependency(self) -> bool:
        return self.dependency is not None
