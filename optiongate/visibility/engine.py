"""Visibility engine: re-evaluate every dependent and apply show/hide.

The engine is pure orchestration. The only side effect of ``evaluate_all`` is
the show/hide applied through the presenter. On the settings page a decision
can hide the wrapper that contains another dependent's controller, so one
pass in registration order is not enough: passes (dependents, then aggregate
rules) repeat until no decision changes. The result is the same whatever the
registration order and whatever visibility earlier calls left behind, as
long as options do not gate each other in a cycle. Cycles are capped at one
pass per dependent and rule.

A dependent whose required-values payload is malformed is hidden and
reported; it never stops the rest of the pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence

from ..core.errors import MalformedDependencyError
from ..core.models.option import Option
from ..core.models.surface import AggregateRule
from .evaluator import Context, is_visible
from .rules import evaluate_rule
from .surface import OptionValueLookup

logger = logging.getLogger(__name__)


class Presenter(Protocol):
    """Applies visibility decisions to presentation elements."""

    def apply(self, element_id: str, visible: bool) -> None: ...


class SurfacePresenter:
    """Writes decisions back into a Surface's element visibility."""

    def __init__(self, surface):
        self.surface = surface

    def apply(self, element_id: str, visible: bool) -> None:
        self.surface.set_element_visible(element_id, visible)


@dataclass
class VisibilityReport:
    """Outcome of one evaluate_all call, in evaluation order."""

    context: Context
    decisions: dict[str, bool] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    rules: dict[str, bool] = field(default_factory=dict)
    passes: int = field(default=1, compare=False)

    def visible_keys(self) -> list[str]:
        return [key for key, visible in self.decisions.items() if visible]

    def hidden_keys(self) -> list[str]:
        return [key for key, visible in self.decisions.items() if not visible]

    def to_dict(self) -> dict:
        return {
            "context": self.context.value,
            "decisions": dict(self.decisions),
            "errors": dict(self.errors),
            "rules": dict(self.rules),
        }


class VisibilityEngine:
    """Evaluates all dependents of an option set against a registry."""

    def __init__(
        self,
        options: Sequence[Option],
        rules: Iterable[AggregateRule] = (),
        presenter: Presenter | None = None,
    ):
        self.options = list(options)
        self.rules = list(rules)
        self.presenter = presenter

    @property
    def dependents(self) -> list[Option]:
        return [o for o in self.options if o.dependency is not None]

    def dependents_of(self, controller_key: str) -> list[Option]:
        return [
            o
            for o in self.options
            if o.dependency is not None
            and o.dependency.controller_key == controller_key
        ]

    def is_controller(self, name: str) -> bool:
        """Whether a change to control ``name`` can affect any decision."""
        if self.dependents_of(name):
            return True
        return any(name in rule.control_names() for rule in self.rules)

    def evaluate_all(
        self, context: Context | str, registry: OptionValueLookup
    ) -> VisibilityReport:
        """Evaluate every dependent and aggregate rule, applying each result.

        Passes repeat until a pass changes no decision. Without an explicit
        presenter, decisions are written to ``registry`` itself (it must then
        provide ``set_element_visible``).
        """
        context = Context.parse(context)
        presenter = self.presenter or SurfacePresenter(registry)
        max_passes = len(self.dependents) + len(self.rules) + 1

        report = self._pass(context, registry, presenter)
        for _ in range(max_passes - 1):
            previous = report
            report = self._pass(context, registry, presenter)
            report.passes = previous.passes + 1
            if report == previous:
                break
        else:
            if max_passes > 1:
                logger.warning(
                    "Visibility did not settle after %d passes; options may gate each other in a cycle",
                    max_passes,
                )

        for key, message in report.errors.items():
            option = next(o for o in self.options if o.key == key)
            logger.warning(
                "Hiding %s: malformed dependency on %s: %s",
                key,
                option.dependency.controller_key,
                message,
            )

        logger.debug(
            "Evaluated %d dependent(s) in %s context: %d visible, %d hidden, %d error(s), %d pass(es)",
            len(report.decisions),
            context.value,
            len(report.visible_keys()),
            len(report.hidden_keys()),
            len(report.errors),
            report.passes,
        )
        return report

    def _pass(
        self, context: Context, registry: OptionValueLookup, presenter: Presenter
    ) -> VisibilityReport:
        """One pass in registration order; each decision is applied as it is made."""
        report = VisibilityReport(context=context)

        for option in self.dependents:
            try:
                visible = is_visible(option, context, registry)
            except MalformedDependencyError as e:
                report.errors[option.key] = str(e)
                visible = False
            report.decisions[option.key] = visible
            presenter.apply(option.element_id, visible)

        for rule in self.rules:
            visible = evaluate_rule(rule, registry)
            report.rules[rule.target] = visible
            presenter.apply(rule.target, visible)

        return report
