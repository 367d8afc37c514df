"""Dependency evaluation: is a dependent option visible right now?

Two rendering contexts apply different rules:

- settings-page: visible iff the controller value is in the required set
  AND the controller's nearest grouping container is visible. Only that one
  container is checked; ancestors are not chased.
- embedded (widget-style editors): visible iff the controller value is in
  the required set OR equals the requirement taken as a scalar.

Both rules are kept exactly as the pages apply them today.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from ..core.errors import UnknownContextError
from ..core.models.option import Option
from ..core.models.surface import Control
from ..core.values import FALSE, OptionValue, normalize
from .surface import OptionValueLookup

logger = logging.getLogger(__name__)


class Context(str, Enum):
    SETTINGS_PAGE = "settings-page"
    EMBEDDED = "embedded"

    @classmethod
    def parse(cls, value: "Context | str") -> "Context":
        """Accept a Context or its string value.

        Raises:
            UnknownContextError: For any other string.
        """
        if isinstance(value, Context):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(c.value for c in cls)
            raise UnknownContextError(
                f"Unknown context {value!r}; expected one of: {valid}"
            ) from None


def resolve_controller(
    controller_key: str,
    context: Context | str,
    registry: OptionValueLookup,
    group: str | None = None,
) -> Control | None:
    """Find the controller control via the fallback chain.

    1. embedded: group-scoped lookup; otherwise page-global by name
    2. page-global by name
    3. suffix match on the secondary field identifier

    Stops at the first hit. Returns None when every lookup misses.
    """
    context = Context.parse(context)
    if context is Context.EMBEDDED:
        control = registry.find_in_group(group, controller_key)
    else:
        control = registry.find_by_name(controller_key)
    if control is None:
        control = registry.find_by_name(controller_key)
    if control is None:
        control = registry.find_by_field_suffix(controller_key)
    return control


def resolve_value(control: Control | None) -> OptionValue:
    """Normalized value of a controller; an absent controller reads as false."""
    if control is None:
        return FALSE
    raw: Any = control.raw_value()
    return normalize(raw)


def is_visible(
    dependent: Option,
    context: Context | str,
    registry: OptionValueLookup,
) -> bool:
    """Decide whether ``dependent`` is visible under ``context``.

    Raises:
        MalformedDependencyError: If the dependency payload cannot be parsed.
        UnknownContextError: If ``context`` is not recognized.
    """
    dependency = dependent.dependency
    if dependency is None:
        return True

    context = Context.parse(context)
    required = dependency.required()
    control = resolve_controller(
        dependency.controller_key, context, registry, group=dependent.container
    )
    value = resolve_value(control)
    member = required.contains(value)

    if context is Context.SETTINGS_PAGE:
        container = control.container if control is not None else None
        visible = member and registry.is_element_visible(container)
    else:
        visible = member or required.equals_scalar(value)

    logger.debug(
        "%s: controller=%s found=%s value=%r -> %s",
        dependent.key,
        dependency.controller_key,
        control is not None,
        value,
        "show" if visible else "hide",
    )
    return visible
