"""optiongate: priority ordering and dependency-driven visibility for option surfaces.

The package turns a declarative set of options into a deterministic render
order and decides, on every trigger, which dependent options are visible.

Quick use:
    from optiongate import SurfaceSpec, VisibilityEngine, Context

    spec = SurfaceSpec.from_yaml("surface.yaml")
    surface = spec.build_surface()
    engine = VisibilityEngine(spec.options, rules=spec.rules)
    report = engine.evaluate_all(Context.SETTINGS_PAGE, surface)
"""

__version__ = "0.3.0"

from .core.errors import (
    OptionGateError,
    MalformedDependencyError,
    UnknownContextError,
)
from .core.models import (
    Option,
    Dependency,
    Control,
    SurfaceSpec,
    name_to_key,
)
from .ordering import sort_by_priority, render_order
from .visibility import (
    BoolValue,
    TextValue,
    RequiredValues,
    normalize,
    parse_required,
    Context,
    Surface,
    is_visible,
    AggregateRule,
    Condition,
    VisibilityEngine,
    VisibilityReport,
    ReadinessObserver,
    Subscription,
    PageSession,
    detect_context,
)

__all__ = [
    "__version__",
    "OptionGateError",
    "MalformedDependencyError",
    "UnknownContextError",
    "Option",
    "Dependency",
    "Control",
    "SurfaceSpec",
    "name_to_key",
    "sort_by_priority",
    "render_order",
    "BoolValue",
    "TextValue",
    "RequiredValues",
    "normalize",
    "parse_required",
    "Context",
    "Surface",
    "is_visible",
    "AggregateRule",
    "Condition",
    "VisibilityEngine",
    "VisibilityReport",
    "ReadinessObserver",
    "Subscription",
    "PageSession",
    "detect_context",
]
