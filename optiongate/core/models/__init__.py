"""Pydantic models for optiongate, organized by concern.

- option.py: Option and Dependency descriptors, priority coercion, name_to_key
- surface.py: Control, aggregate rules and the SurfaceSpec snapshot with YAML I/O
- validation.py: Severity, ValidationIssue, ValidationResult
"""

from .option import (
    Option,
    Dependency,
    coerce_priority,
    is_valid_priority,
    name_to_key,
)
from .surface import (
    Control,
    ControlKind,
    TOGGLE_KINDS,
    Condition,
    AggregateRule,
    SurfaceSpec,
)
from .validation import (
    Severity,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "Option",
    "Dependency",
    "coerce_priority",
    "is_valid_priority",
    "name_to_key",
    "Control",
    "ControlKind",
    "TOGGLE_KINDS",
    "Condition",
    "AggregateRule",
    "SurfaceSpec",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
]
