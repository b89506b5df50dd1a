"""Analysis session state machine.

One :class:`AnalysisSession` value holds everything the presentation layer
needs. The controller replaces it on every transition::

    Idle --submit(valid)--> Running --report--> Succeeded
      ^  \\--submit(invalid)--> Idle + ValidationError
      |                        \\--failure--> Failed
      +------------- reset() / next submit ---------+

A result or failure is only committed once the request has finished AND
``min_display_seconds`` have passed since the submit, whichever is later.
Each submit bumps a generation counter; anything belonging to an older
generation (timeline ticks, late responses) is dropped.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional

from ..config import MirrorConfig
from ..exceptions import AnalysisError, RepoMirrorError, TransportError, ValidationError
from ..models import AnalysisReport, AnalysisResult
from ..parsing import parse_repository_url
from .phases import Phases, PhaseTimeline, completed_count, initial_phases, phases_at
from .transport import AnalysisTransport

logger = logging.getLogger(__name__)

SessionListener = Callable[["AnalysisSession"], None]


class SessionState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class AnalysisSession:
    """Snapshot of one analysis cycle.

    Construction enforces the combinations the UI can rely on: a running
    session has neither result nor error, a succeeded one has a result and
    no error, a failed one has an error and no result.
    """

    state: SessionState = SessionState.IDLE
    input_url: str = ""
    phases: Phases = initial_phases()
    result: Optional[AnalysisResult] = None
    error: Optional[RepoMirrorError] = None
    generation: int = 0

    def __post_init__(self) -> None:
        has_result = self.result is not None
        has_error = self.error is not None
        if self.state is SessionState.RUNNING and (has_result or has_error):
            raise ValueError("running session cannot carry a result or error")
        if self.state is SessionState.SUCCEEDED and (not has_result or has_error):
            raise ValueError("succeeded session needs a result and no error")
        if self.state is SessionState.FAILED and (not has_error or has_result):
            raise ValueError("failed session needs an error and no result")
        if self.state is SessionState.IDLE and has_result:
            raise ValueError("idle session cannot carry a result")

    @property
    def is_running(self) -> bool:
        return self.state is SessionState.RUNNING

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error is not None else None

    @property
    def completed_phases(self) -> int:
        return completed_count(self.phases)


class AnalysisSessionController:
    """Drives :class:`AnalysisSession` transitions for a single client.

    Must be used from one event loop. Only the most recent submit can
    commit; older ones return the current session untouched.
    """

    def __init__(self, transport: AnalysisTransport, config: Optional[MirrorConfig] = None) -> None:
        self.transport = transport
        self.config = config or MirrorConfig()
        self._session = AnalysisSession()
        self._generation = 0
        self._timeline: Optional[PhaseTimeline] = None
        self._listeners: list[SessionListener] = []

    @property
    def session(self) -> AnalysisSession:
        return self._session

    @property
    def generation(self) -> int:
        return self._generation

    def add_listener(self, listener: SessionListener) -> None:
        """Register a callback invoked with every new session value."""
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    async def submit(self, url: str) -> AnalysisSession:
        """Validate *url*, run one analysis and return the session it ends in.

        An invalid URL never reaches the transport: the session goes back to
        ``Idle`` with a :class:`ValidationError` attached. Submitting
        supersedes any request still in flight.
        """
        generation = self._supersede()

        repository = parse_repository_url(url)
        if repository is None:
            logger.info("Rejected repository input %r", url)
            self._commit(
                AnalysisSession(
                    state=SessionState.IDLE,
                    input_url=url,
                    error=ValidationError(url),
                    generation=generation,
                )
            )
            return self._session

        loop = asyncio.get_running_loop()
        started = loop.time()
        self._commit(
            AnalysisSession(state=SessionState.RUNNING, input_url=url, generation=generation)
        )

        timeline = PhaseTimeline(
            self.config.phase_delays,
            on_change=lambda phases: self._on_phases(generation, phases),
            loop=loop,
        )
        self._timeline = timeline
        timeline.start()
        logger.info("Analyzing %s (generation %d)", repository.full_name, generation)

        report: Optional[AnalysisReport] = None
        failure: Optional[AnalysisError] = None
        try:
            try:
                report = await self.transport.analyze(repository)
            except AnalysisError as exc:
                failure = exc

            remaining = self.config.min_display_seconds - (loop.time() - started)
            if remaining > 0:
                await asyncio.sleep(remaining)
        except asyncio.CancelledError:
            if generation == self._generation:
                timeline.cancel()
                self._commit(replace(self._session, state=SessionState.IDLE))
            raise
        except Exception as exc:
            # keep the state machine consistent before propagating
            if generation == self._generation:
                timeline.cancel()
                self._commit(self._failed(TransportError(f"unexpected error: {exc}")))
            raise

        if generation != self._generation:
            logger.debug(
                "Discarding stale response for generation %d (current %d)",
                generation,
                self._generation,
            )
            return self._session

        timeline.cancel()
        if failure is not None:
            logger.warning("Analysis of %s failed: %s", repository.full_name, failure)
            self._commit(self._failed(failure))
        else:
            assert report is not None
            self._commit(
                replace(
                    self._session,
                    state=SessionState.SUCCEEDED,
                    phases=phases_at(len(self._session.phases)),
                    result=AnalysisResult(repository=repository, report=report),
                )
            )
            logger.info(
                "Analysis of %s complete: %d (%s)",
                repository.full_name,
                report.overall_score,
                report.rating,
            )
        return self._session

    def reset(self) -> AnalysisSession:
        """Return to ``Idle``, keeping the last input.

        Also abandons a running request; its response will be discarded.
        """
        generation = self._supersede()
        self._commit(AnalysisSession(input_url=self._session.input_url, generation=generation))
        return self._session

    # ── Internals ──────────────────────────────────────────────────────

    def _supersede(self) -> int:
        self._generation += 1
        if self._timeline is not None:
            self._timeline.cancel()
            self._timeline = None
        return self._generation

    def _failed(self, error: AnalysisError) -> AnalysisSession:
        return replace(self._session, state=SessionState.FAILED, result=None, error=error)

    def _on_phases(self, generation: int, phases: Phases) -> None:
        if generation != self._generation or not self._session.is_running:
            return
        self._commit(replace(self._session, phases=phases))

    def _commit(self, session: AnalysisSession) -> None:
        if session.state is not self._session.state:
            logger.debug(
                "Session %d: %s -> %s",
                session.generation,
                self._session.state.value,
                session.state.value,
            )
        self._session = session
        for listener in list(self._listeners):
            try:
                listener(session)
            except Exception as exc:
                logger.warning("Session listener failed: %s", exc)
