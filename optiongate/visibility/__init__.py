"""Runtime visibility: surface registry, dependency evaluation and triggers."""

from ..core.values import (
    BoolValue,
    TextValue,
    OptionValue,
    RequiredValues,
    normalize,
    parse_required,
)
from .surface import OptionValueLookup, Surface
from .evaluator import Context, is_visible, resolve_controller, resolve_value
from .rules import evaluate_rule
from ..core.models.surface import AggregateRule, Condition
from .engine import Presenter, SurfacePresenter, VisibilityEngine, VisibilityReport
from .readiness import ReadinessObserver, Subscription
from .session import PageSession, detect_context

__all__ = [
    "BoolValue",
    "TextValue",
    "OptionValue",
    "RequiredValues",
    "normalize",
    "parse_required",
    "OptionValueLookup",
    "Surface",
    "Context",
    "is_visible",
    "resolve_controller",
    "resolve_value",
    "evaluate_rule",
    "AggregateRule",
    "Condition",
    "Presenter",
    "SurfacePresenter",
    "VisibilityEngine",
    "VisibilityReport",
    "ReadinessObserver",
    "Subscription",
    "PageSession",
    "detect_context",
]
