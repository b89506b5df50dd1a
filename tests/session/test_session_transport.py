"""Tests for session.transport: in-process and HTTP transports."""

import asyncio
import json

import httpx
import pytest

from repomirror.engine import AnalysisEngine, SequenceRandomSource
from repomirror.exceptions import EngineError, TransportError
from repomirror.models import AnalysisReport, RepositoryRef
from repomirror.session.transport import HttpTransport, LocalTransport

ANALYZE_URL = "http://analysis.test/analyze"
REACT = RepositoryRef(owner="facebook", name="react")


def _report_body():
    engine = AnalysisEngine(SequenceRandomSource([15, 22, 70, 1]))
    return engine.analyze("facebook", "react").to_dict()


def _transport(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTransport(ANALYZE_URL, client=client)


class TestLocalTransport:
    def test_runs_engine(self, fixed_engine):
        report = asyncio.run(LocalTransport(fixed_engine).analyze(REACT))
        assert report.overall_score == 80
        assert report.tech_stack == ("React", "JavaScript", "JSX")

    def test_engine_error_propagates(self):
        class BrokenEngine(AnalysisEngine):
            def analyze(self, owner, name):
                raise EngineError(owner, name, "rate limited")

        with pytest.raises(EngineError):
            asyncio.run(LocalTransport(BrokenEngine()).analyze(REACT))


class TestHttpTransport:
    def test_posts_owner_and_repo(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=_report_body())

        report = asyncio.run(_transport(handler).analyze(REACT))

        assert isinstance(report, AnalysisReport)
        assert report.overall_score == 80
        assert requests[0].method == "POST"
        assert str(requests[0].url) == ANALYZE_URL
        assert json.loads(requests[0].content) == {"owner": "facebook", "repo": "react"}

    def test_client_error_status(self):
        def handler(request):
            return httpx.Response(400, json={"error": "Invalid repository data"})

        with pytest.raises(TransportError) as exc_info:
            asyncio.run(_transport(handler).analyze(REACT))
        assert exc_info.value.status_code == 400
        assert exc_info.value.reason == "Invalid repository data"

    def test_server_error_without_json(self):
        def handler(request):
            return httpx.Response(503, text="upstream down")

        with pytest.raises(TransportError) as exc_info:
            asyncio.run(_transport(handler).analyze(REACT))
        assert exc_info.value.status_code == 503
        assert exc_info.value.reason == "HTTP 503"

    def test_network_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError, match="request failed"):
            asyncio.run(_transport(handler).analyze(REACT))

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(TransportError, match="timed out"):
            asyncio.run(_transport(handler).analyze(REACT))

    def test_partial_report_rejected(self):
        body = _report_body()
        del body["metrics"]

        def handler(request):
            return httpx.Response(200, json=body)

        with pytest.raises(TransportError, match="malformed report"):
            asyncio.run(_transport(handler).analyze(REACT))

    def test_non_json_success_body(self):
        def handler(request):
            return httpx.Response(200, text="<html>")

        with pytest.raises(TransportError, match="malformed report"):
            asyncio.run(_transport(handler).analyze(REACT))
