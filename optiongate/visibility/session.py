"""Page session: wires external triggers to the visibility engine.

Triggers are owned by the host, not the engine:
- start(): the first evaluation, deferred until the target markup exists
- on_change(name): a recognized controller changed (selection, checkbox)
- on_save(): a one-shot re-check after the host re-renders the form

Everything runs on one thread. Each trigger evaluates synchronously to
completion; the only scheduled work is the post-save re-check, placed on the
asyncio event loop.
"""

import asyncio
import logging

from ..config import OptionGateConfig, get_config
from .engine import VisibilityEngine, VisibilityReport
from .evaluator import Context
from .readiness import Subscription
from .surface import Surface

logger = logging.getLogger(__name__)


def detect_context(url: str | None, marker: str | None = None) -> Context:
    """Settings page when ``url`` contains the settings-page marker, else embedded."""
    if marker is None:
        marker = get_config().engine.settings_page_marker
    if url and marker and marker in url:
        return Context.SETTINGS_PAGE
    return Context.EMBEDDED


class PageSession:
    """One page's engine, surface and trigger handling."""

    def __init__(
        self,
        engine: VisibilityEngine,
        surface: Surface,
        context: Context | str,
        config: OptionGateConfig | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self.engine = engine
        self.surface = surface
        self.context = Context.parse(context)
        self.config = config or get_config()
        self._loop = loop
        self.last_report: VisibilityReport | None = None
        self.passes = 0

    def evaluate(self) -> VisibilityReport:
        """Run one full evaluation pass."""
        self.last_report = self.engine.evaluate_all(self.context, self.surface)
        self.passes += 1
        logger.debug(
            "Session evaluation #%d: %d hidden", self.passes, len(self.last_report.hidden_keys())
        )
        return self.last_report

    def start(self, target: str | None = None) -> Subscription:
        """Run the first evaluation once ``target`` exists on the surface.

        Returns the readiness subscription; cancel it to abandon the wait.
        """
        if target is None:
            return self.surface.observer.watch(lambda: True, self.evaluate)

        def ready() -> bool:
            return self.surface.has_element(target)

        sub = self.surface.observer.watch(ready, self.evaluate)
        if sub.active:
            logger.debug("Waiting for %s before first evaluation", target)
        return sub

    def on_change(self, control_name: str) -> VisibilityReport | None:
        """Re-evaluate when ``control_name`` is a recognized controller."""
        if not self.engine.is_controller(control_name):
            return None
        return self.evaluate()

    def on_save(self) -> asyncio.TimerHandle:
        """Schedule a one-shot re-check ``recheck_delay`` seconds from now.

        Must be called with a running event loop, or with one passed in at
        construction.
        """
        loop = self._loop or asyncio.get_running_loop()
        delay = self.config.engine.recheck_delay
        logger.debug("Scheduling re-check in %.3fs", delay)
        return loop.call_later(delay, self.evaluate)
