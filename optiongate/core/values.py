"""Tagged option values and required-value parsing.

Controller values arrive from the page as booleans (checkbox state) or
strings (selection/text). They are normalized once, at resolution time,
into ``BoolValue`` or ``TextValue`` so that nothing downstream compares raw
strings against ``"true"``/``"false"``.

Required values come from the ``data-dep_val`` attribute as JSON. A JSON
array is a set of acceptable values; a bare scalar (JSON literal or plain
attribute text) is kept as a scalar requirement, which only the embedded
context knows how to match.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Union

from .errors import MalformedDependencyError


@dataclass(frozen=True)
class BoolValue:
    """A boolean controller value (checkbox state or a literal "true"/"false")."""

    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class TextValue:
    """A text or selection controller value."""

    value: str

    def __str__(self) -> str:
        return self.value


OptionValue = Union[BoolValue, TextValue]

FALSE = BoolValue(False)
TRUE = BoolValue(True)


def normalize(raw: Any) -> OptionValue:
    """Normalize a raw controller value into a tagged value.

    Examples:
        True        -> BoolValue(True)
        "false"     -> BoolValue(False)
        "10"        -> TextValue("10")
        None        -> TextValue("")
    """
    if isinstance(raw, (BoolValue, TextValue)):
        return raw
    if isinstance(raw, bool):
        return BoolValue(raw)
    if raw is None:
        return TextValue("")
    if isinstance(raw, str):
        if raw == "true":
            return TRUE
        if raw == "false":
            return FALSE
        return TextValue(raw)
    return TextValue(_number_to_text(raw))


def _pre_normalize(element: Any) -> OptionValue:
    """Normalize one decoded required-values element.

    Strings are kept verbatim (no "true" -> bool conversion), matching the
    strict comparison the page performs against its required list.
    """
    if isinstance(element, bool):
        return BoolValue(element)
    if isinstance(element, str):
        return TextValue(element)
    if isinstance(element, (int, float)):
        return TextValue(_number_to_text(element))
    raise MalformedDependencyError(
        f"Unsupported required value {element!r}; expected string or boolean",
        payload=element,
    )


def _number_to_text(number: Any) -> str:
    if isinstance(number, float):
        if not math.isfinite(number):
            raise MalformedDependencyError(
                f"Non-finite number {number!r} in required values", payload=number
            )
        if number.is_integer():
            return str(int(number))
    return str(number)


@dataclass(frozen=True)
class RequiredValues:
    """The set (or scalar) of values a controller must hold for a dependent to show."""

    values: tuple[OptionValue, ...]
    scalar: bool = False

    def contains(self, value: OptionValue) -> bool:
        """Set membership; a scalar requirement is not a set and never contains anything."""
        if self.scalar:
            return False
        return value in self.values

    def equals_scalar(self, value: OptionValue) -> bool:
        """True when this is a scalar requirement equal to ``value``."""
        return self.scalar and self.values[0] == value

    def to_json(self) -> Any:
        decoded = [v.value for v in self.values]
        return decoded[0] if self.scalar else decoded


def parse_required(payload: Any) -> RequiredValues:
    """Parse a required-values payload.

    Args:
        payload: JSON text from the ``data-dep_val`` attribute, or an
            already-decoded list / scalar.

    Raises:
        MalformedDependencyError: If the payload is not valid JSON or does not
            decode to a list of strings/booleans or a single string/boolean.
    """
    decoded = payload
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8", errors="replace")
    if isinstance(payload, str):
        text = payload.strip()
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError as e:
            # Bare attribute text (data-dep_val="custom_color") is a scalar string.
            if text[:1] in ("[", "{") or not text:
                raise MalformedDependencyError(
                    f"Required values are not valid JSON: {e}", payload=payload
                ) from e
            decoded = text

    if isinstance(decoded, (list, tuple)):
        return RequiredValues(values=tuple(_pre_normalize(v) for v in decoded))
    if decoded is None or isinstance(decoded, dict):
        raise MalformedDependencyError(
            f"Required values must be a list or a scalar, got {type(decoded).__name__}",
            payload=payload,
        )
    return RequiredValues(values=(_pre_normalize(decoded),), scalar=True)
