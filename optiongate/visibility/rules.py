"""Aggregate visibility rules.

Some wrappers are toggled by a combination of several controls rather than
a single dependency, e.g. the floating bar's custom colour panel:

    (float_style_source is unchecked and float_default_colors == custom_color)
    or float_default_colors == custom_color_outlines
    or float_single_colors == custom_color
    ...

Such rules are expressed as ``AggregateRule(any_of=[[...], [...]])``.
Controls are looked up page-globally by name; a missing control never
matches a condition.
"""

from ..core.models.surface import AggregateRule, Condition
from ..core.values import normalize
from .surface import OptionValueLookup


def condition_matches(condition: Condition, registry: OptionValueLookup) -> bool:
    control = registry.find_by_name(condition.control)
    if control is None:
        return False
    return normalize(control.raw_value()) == normalize(condition.equals)


def evaluate_rule(rule: AggregateRule, registry: OptionValueLookup) -> bool:
    """True when at least one condition group fully matches."""
    return any(
        group and all(condition_matches(c, registry) for c in group)
        for group in rule.any_of
    )
