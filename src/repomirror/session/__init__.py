"""Client-side analysis session: phase timeline, transports, state machine."""

from .controller import AnalysisSession, AnalysisSessionController, SessionState
from .phases import (
    PHASE_DEFINITIONS,
    LoadingPhase,
    PhaseStatus,
    PhaseTimeline,
    initial_phases,
    phases_at,
)
from .transport import AnalysisTransport, HttpTransport, LocalTransport

__all__ = [
    "AnalysisSession",
    "AnalysisSessionController",
    "SessionState",
    "LoadingPhase",
    "PhaseStatus",
    "PhaseTimeline",
    "PHASE_DEFINITIONS",
    "initial_phases",
    "phases_at",
    "AnalysisTransport",
    "HttpTransport",
    "LocalTransport",
]
