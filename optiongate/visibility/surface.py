"""Live registry of controls and presentation elements.

The Surface stands in for the rendered page. It answers the three controller
lookups the evaluator needs (group-scoped, page-global by name, and suffix
match on the secondary field identifier), holds the current visibility of
each presentation element, and accepts user input. Every evaluator and
engine call receives the surface explicitly.
"""

import logging
from typing import Any, Iterable, Protocol

from ..core.models.surface import Control
from .readiness import ReadinessObserver

logger = logging.getLogger(__name__)


class OptionValueLookup(Protocol):
    """What the dependency evaluator needs from a registry."""

    def find_in_group(self, group: str | None, key: str) -> Control | None: ...

    def find_by_name(self, key: str) -> Control | None: ...

    def find_by_field_suffix(self, key: str) -> Control | None: ...

    def is_element_visible(self, element_id: str | None) -> bool: ...


class Surface:
    """In-memory page state: controls, element visibility, readiness."""

    def __init__(
        self,
        controls: Iterable[Control] = (),
        elements: dict[str, bool] | None = None,
        observer: ReadinessObserver | None = None,
    ):
        self._controls: list[Control] = []
        self._elements: dict[str, bool] = {}
        self.observer = observer or ReadinessObserver()
        for element_id, visible in (elements or {}).items():
            self._elements[element_id] = bool(visible)
        for control in controls:
            self._controls.append(control.model_copy())

    # ── Lookups ──

    def find_in_group(self, group: str | None, key: str) -> Control | None:
        """First control inside ``group`` whose scoped name is ``key``."""
        if group is None:
            return None
        for control in self._controls:
            if control.group == group and control.scoped_name == key:
                return control
        return None

    def find_by_name(self, key: str) -> Control | None:
        """First control on the page whose name attribute is ``key``."""
        for control in self._controls:
            if control.name == key:
                return control
        return None

    def find_by_field_suffix(self, key: str) -> Control | None:
        """First control whose secondary field identifier ends with ``key``."""
        if not key:
            return None
        for control in self._controls:
            if control.field and control.field.endswith(key):
                return control
        return None

    # ── Element visibility ──

    def is_element_visible(self, element_id: str | None) -> bool:
        """Current visibility; unknown elements (and None) count as visible."""
        if element_id is None:
            return True
        return self._elements.get(element_id, True)

    def set_element_visible(self, element_id: str, visible: bool) -> None:
        self._elements[element_id] = bool(visible)

    def has_element(self, element_id: str) -> bool:
        return element_id in self._elements

    @property
    def elements(self) -> dict[str, bool]:
        return dict(self._elements)

    @property
    def controls(self) -> list[Control]:
        return list(self._controls)

    # ── Input ──

    def set_value(self, name: str, value: Any) -> Control:
        """Apply user input to a select/text control.

        Raises:
            KeyError: If no control has this name.
        """
        control = self._require(name)
        control.value = value
        return control

    def set_checked(self, name: str, checked: bool) -> Control:
        """Toggle a checkbox control.

        Raises:
            KeyError: If no control has this name.
        """
        control = self._require(name)
        control.checked = bool(checked)
        return control

    def _require(self, name: str) -> Control:
        control = self.find_by_name(name)
        if control is None:
            raise KeyError(f"No control named {name!r} on this surface")
        return control

    # ── Asynchronous insertion ──

    def add_control(self, control: Control) -> Control:
        """Insert a control (copied) and notify readiness watchers."""
        stored = control.model_copy()
        self._controls.append(stored)
        self.observer.notify()
        return stored

    def add_element(self, element_id: str, visible: bool = True) -> None:
        """Insert a presentation element and notify readiness watchers."""
        self._elements[element_id] = bool(visible)
        self.observer.notify()
