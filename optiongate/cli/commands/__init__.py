"""CLI commands for optiongate."""

from . import (
    order,
    evaluate,
    validate,
    config_cmd,
)

__all__ = [
    "order",
    "evaluate",
    "validate",
    "config_cmd",
]
