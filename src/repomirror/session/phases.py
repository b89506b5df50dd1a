"""Progress phases shown while an analysis runs, and the timer that plays them.

The phases are cosmetic: they do not track real work. What matters is the
timing contract. Phase 1 is active as soon as the timeline starts; each
delay is how long the current phase stays active before it completes and
hands over to the next. The last phase is left active when its delay runs
out; the session marks everything complete when it commits a result.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class PhaseStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETE = "complete"


@dataclass(frozen=True)
class LoadingPhase:
    id: int
    label: str
    icon: str
    status: PhaseStatus = PhaseStatus.PENDING


PHASE_DEFINITIONS: Tuple[Tuple[int, str, str], ...] = (
    (1, "Scanning repository structure...", "folder"),
    (2, "Analyzing code quality...", "code"),
    (3, "Evaluating documentation...", "file"),
    (4, "Checking test coverage...", "test"),
    (5, "Reviewing commit history...", "git"),
    (6, "Generating AI insights...", "sparkles"),
)

Phases = Tuple[LoadingPhase, ...]


def initial_phases() -> Phases:
    """All six phases, pending."""
    return tuple(LoadingPhase(id=pid, label=label, icon=icon) for pid, label, icon in PHASE_DEFINITIONS)


def phases_at(completed: int) -> Phases:
    """Phases after *completed* of them have finished.

    The phase right after the completed ones is active; with every phase
    completed none is.
    """
    if not 0 <= completed <= len(PHASE_DEFINITIONS):
        raise ValueError(f"completed must be in [0, {len(PHASE_DEFINITIONS)}]")
    phases = []
    for index, phase in enumerate(initial_phases()):
        if index < completed:
            status = PhaseStatus.COMPLETE
        elif index == completed:
            status = PhaseStatus.ACTIVE
        else:
            status = PhaseStatus.PENDING
        phases.append(replace(phase, status=status))
    return tuple(phases)


def completed_count(phases: Sequence[LoadingPhase]) -> int:
    return sum(1 for phase in phases if phase.status is PhaseStatus.COMPLETE)


class PhaseTimeline:
    """Plays the phase sequence back on the running event loop.

    Each step is a ``loop.call_later`` handle that schedules the next one, so
    :meth:`cancel` stops the sequence at whatever point it reached. After
    cancellation no further ``on_change`` calls are made.

    ``delays[i]`` is how long phase *i* stays active. The first five delays
    each complete a phase and activate the next. The last one only marks the
    timeline as played out (:attr:`finished`) and emits nothing: the final
    phase stays active until the session commits.
    """

    def __init__(
        self,
        delays: Sequence[float],
        on_change: Callable[[Phases], None],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        if len(delays) != len(PHASE_DEFINITIONS):
            raise ValueError(f"expected {len(PHASE_DEFINITIONS)} delays, got {len(delays)}")
        self.delays = tuple(delays)
        self._on_change = on_change
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._step = 0
        self._finished = False
        self._cancelled = False
        self.phases: Phases = initial_phases()

    @property
    def finished(self) -> bool:
        """True once every delay, including the last phase's, has elapsed."""
        return self._finished

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> None:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._emit(phases_at(0))
        self._schedule()

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        logger.debug("Phase timeline cancelled at step %d", self._step)

    def _schedule(self) -> None:
        assert self._loop is not None
        self._handle = self._loop.call_later(self.delays[self._step], self._advance)

    def _advance(self) -> None:
        if self._cancelled:
            return
        self._step += 1
        if self._step < len(self.delays):
            self._emit(phases_at(self._step))
            self._schedule()
        else:
            self._handle = None
            self._finished = True
            logger.debug("Phase timeline played out")

    def _emit(self, phases: Phases) -> None:
        self.phases = phases
        self._on_change(phases)
