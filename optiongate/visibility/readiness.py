"""Readiness notification for asynchronously inserted markup.

The host may insert the form that holds the options some time after the page
is ready. Instead of polling for it, interested parties register a predicate
with a ``ReadinessObserver``; the surface calls ``notify()`` whenever markup
is inserted, and each satisfied subscription fires exactly once and cancels
itself. A subscription can also be cancelled by its owner at any time.

Usage:
    observer = ReadinessObserver()
    sub = observer.watch(lambda: surface.has_element("widgets"), start_engine)
    ...
    sub.cancel()  # no-op if it already fired
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class Subscription:
    """Cancel handle for a readiness watch."""

    def __init__(
        self,
        observer: "ReadinessObserver",
        predicate: Callable[[], bool],
        callback: Callable[[], object],
    ):
        self._observer = observer
        self._predicate = predicate
        self._callback = callback
        self._active = True
        self.fired = False

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Stop watching. Idempotent."""
        if not self._active:
            return
        self._active = False
        self._observer._discard(self)

    def _check(self) -> bool:
        """Fire the callback if the predicate holds. Returns True when fired."""
        if not self._active or not self._predicate():
            return False
        # Cancel before the callback so a re-entrant notify() cannot fire twice.
        self.cancel()
        self.fired = True
        self._callback()
        return True


class ReadinessObserver:
    """Holds readiness subscriptions and re-checks them on notify()."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def watch(
        self, predicate: Callable[[], bool], callback: Callable[[], object]
    ) -> Subscription:
        """Run ``callback`` once, as soon as ``predicate()`` is true.

        The predicate is checked immediately; if it already holds the
        callback runs before this returns and the subscription is inactive.
        """
        sub = Subscription(self, predicate, callback)
        self._subscriptions.append(sub)
        sub._check()
        return sub

    def notify(self) -> int:
        """Re-check all active subscriptions. Returns how many fired."""
        fired = 0
        for sub in list(self._subscriptions):
            if sub._check():
                fired += 1
        if fired:
            logger.debug("Readiness notify fired %d subscription(s)", fired)
        return fired

    @property
    def pending(self) -> int:
        return len(self._subscriptions)

    def _discard(self, sub: Subscription) -> None:
        if sub in self._subscriptions:
            self._subscriptions.remove(sub)
