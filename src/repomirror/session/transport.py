"""Ways for a session to reach an analysis engine.

:class:`HttpTransport` posts to the ``/analyze`` service; :class:`LocalTransport`
calls an :class:`~repomirror.engine.AnalysisEngine` in-process. Both raise only
:class:`~repomirror.exceptions.AnalysisError` subclasses on failure.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from ..engine import AnalysisEngine
from ..exceptions import TransportError
from ..models import AnalysisReport, RepositoryRef

logger = logging.getLogger(__name__)


class AnalysisTransport(Protocol):
    async def analyze(self, repository: RepositoryRef) -> AnalysisReport:
        """Produce a complete report for *repository* or raise ``AnalysisError``."""
        ...


class LocalTransport:
    """Runs the engine in the current process; ``EngineError`` propagates."""

    def __init__(self, engine: Optional[AnalysisEngine] = None) -> None:
        self.engine = engine or AnalysisEngine()

    async def analyze(self, repository: RepositoryRef) -> AnalysisReport:
        return self.engine.analyze(repository.owner, repository.name)


class HttpTransport:
    """Client for ``POST /analyze``.

    Network errors, timeouts, non-2xx responses and bodies that do not parse
    into a full report all become :class:`TransportError`. Nothing is
    retried.
    """

    def __init__(
        self,
        analyze_url: str,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.analyze_url = analyze_url
        self.timeout = timeout
        self._client = client

    async def analyze(self, repository: RepositoryRef) -> AnalysisReport:
        payload = {"owner": repository.owner, "repo": repository.name}
        logger.debug("POST %s for %s", self.analyze_url, repository.full_name)

        try:
            if self._client is not None:
                response = await self._client.post(self.analyze_url, json=payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.analyze_url, json=payload)
        except httpx.TimeoutException as exc:
            logger.warning("Analysis request for %s timed out", repository.full_name)
            raise TransportError(f"request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.warning("Analysis request for %s failed: %s", repository.full_name, exc)
            raise TransportError(f"request failed: {exc}") from exc

        if not response.is_success:
            reason = _error_reason(response)
            logger.warning(
                "Analysis service returned %d for %s: %s",
                response.status_code,
                repository.full_name,
                reason,
            )
            raise TransportError(reason, status_code=response.status_code)

        try:
            return AnalysisReport.from_dict(response.json())
        except ValueError as exc:
            raise TransportError(f"malformed report: {exc}", status_code=response.status_code) from exc


def _error_reason(response: httpx.Response) -> str:
    """Pull the ``error`` field out of a failure body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"HTTP {response.status_code}"
