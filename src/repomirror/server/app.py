"""Starlette ASGI application exposing ``POST /analyze``."""

from __future__ import annotations

import logging
from typing import Any, Optional

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from ..config import MirrorConfig
from ..engine import AnalysisEngine
from ..exceptions import EngineError

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid repository data"


def create_app(
    engine: Optional[AnalysisEngine] = None, config: Optional[MirrorConfig] = None
) -> Starlette:
    """Build the Starlette application serving reports from *engine*.

    Args:
        engine: Engine used for every request (a fresh default one if omitted)
        config: Supplies the CORS origins
    """
    engine = engine or AnalysisEngine()
    config = config or MirrorConfig()

    async def analyze(request: Request) -> JSONResponse:
        """Analyze one repository. POST /analyze {"owner": ..., "repo": ...}"""
        try:
            body: Any = await request.json()
        except ValueError:
            body = None

        owner, repo = _extract_repository(body)
        if owner is None or repo is None:
            logger.info("Rejected /analyze request with body %r", body)
            return JSONResponse({"error": INVALID_REQUEST_MESSAGE}, status_code=400)

        try:
            report = engine.analyze(owner, repo)
        except EngineError as exc:
            logger.warning("Engine failed for %s/%s: %s", owner, repo, exc)
            return JSONResponse({"error": exc.message}, status_code=502)

        logger.debug("Served report for %s/%s", owner, repo)
        return JSONResponse(report.to_dict())

    routes = [
        Route("/analyze", analyze, methods=["POST"]),
    ]
    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=list(config.cors_origins),
            allow_methods=["*"],
            allow_headers=["*"],
        ),
    ]

    return Starlette(routes=routes, middleware=middleware)


def _extract_repository(body: Any) -> tuple[Optional[str], Optional[str]]:
    """Return ``(owner, repo)``, with ``None`` for anything missing or empty."""
    if not isinstance(body, dict):
        return None, None
    owner = body.get("owner")
    repo = body.get("repo")
    if not isinstance(owner, str) or not owner:
        owner = None
    if not isinstance(repo, str) or not repo:
        repo = None
    return owner, repo
