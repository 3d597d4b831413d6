"""Availability gate — Cached answer to "can we talk to the index?".

The startup probe sets the first value. After that, reads never touch the
network. The state changes through explicit transitions:
  - a probe (startup or ``refresh()``) opens or closes the gate
  - connection failures reported by the synchronizer count toward a
    breaker; reaching ``failure_threshold`` trips the gate
  - a tripped gate lets calls through again once ``reset_timeout`` has
    elapsed (half-open); the next success closes the breaker, the next
    failure trips it again

A gate closed by a probe stays closed until the next probe.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from indexsync.backends.base import IndexBackend

logger = logging.getLogger(__name__)


class GateState(str, Enum):
    """Lifecycle state of the availability gate."""

    UNPROBED = "unprobed"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    TRIPPED = "tripped"


class AvailabilityGate:
    """Reachability flag consulted before every mutating operation.

    Args:
        failure_threshold: Consecutive connection failures that trip the gate.
        reset_timeout: Seconds a tripped gate waits before letting a trial call through.
        clock: Monotonic time source.

    Attributes:
        state: Current gate state.
        nodes: Node names seen by the last successful probe.
        reason: Why the gate was last closed, if it is closed.
    """

    def __init__(
        self,
        failure_threshold: int = 3,
        reset_timeout: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.failure_threshold = max(1, failure_threshold)
        self.reset_timeout = reset_timeout
        self._clock = clock
        self.state = GateState.UNPROBED
        self.nodes: frozenset[str] = frozenset()
        self.reason: str | None = None
        self.failures = 0
        self._tripped_at = 0.0

    def is_available(self) -> bool:
        """Return whether mutating operations may reach the backend."""
        if self.state is GateState.AVAILABLE:
            return True
        return self.half_open

    @property
    def half_open(self) -> bool:
        """True when a tripped gate has waited long enough to allow a trial call."""
        return self.state is GateState.TRIPPED and self._clock() - self._tripped_at >= self.reset_timeout

    def mark_available(self, nodes: set[str] | frozenset[str]) -> None:
        previous = self.state
        self.state = GateState.AVAILABLE
        self.nodes = frozenset(nodes)
        self.reason = None
        self.failures = 0
        if previous is not GateState.AVAILABLE:
            logger.info("Search backend available (%d node(s): %s)", len(self.nodes), ", ".join(sorted(self.nodes)))

    def mark_unavailable(self, reason: str) -> None:
        previous = self.state
        self.state = GateState.UNAVAILABLE
        self.nodes = frozenset()
        self.reason = reason
        self.failures = 0
        if previous is not GateState.UNAVAILABLE:
            logger.warning("Search backend unavailable: %s", reason)

    def record_success(self) -> None:
        """A request reached the backend; reset the breaker."""
        self.failures = 0
        if self.state is GateState.TRIPPED:
            self.state = GateState.AVAILABLE
            self.reason = None
            logger.info("Search backend recovered")

    def record_failure(self, reason: str) -> None:
        """A request could not reach the backend; trip once the threshold is hit."""
        if self.state not in (GateState.AVAILABLE, GateState.TRIPPED):
            return
        self.failures += 1
        if self.state is GateState.TRIPPED or self.failures >= self.failure_threshold:
            self.state = GateState.TRIPPED
            self.reason = reason
            self._tripped_at = self._clock()
            logger.warning(
                "Search backend tripped after %d failure(s), retrying in %.0fs: %s",
                self.failures,
                self.reset_timeout,
                reason,
            )

    async def refresh(self, backend: IndexBackend) -> bool:
        """Re-probe ``backend`` and update the state from the result.

        A probe that raises closes the gate rather than propagating.

        Returns:
            The new availability.
        """
        try:
            nodes = await backend.probe()
        except Exception as e:
            logger.error("Probe of backend '%s' failed", backend.name, exc_info=True)
            self.mark_unavailable(f"probe failed: {e}")
            return False

        if nodes:
            self.mark_available(nodes)
        else:
            self.mark_unavailable("no reachable nodes")
        return self.is_available()
