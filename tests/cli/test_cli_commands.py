"""Tests for the repomirror CLI commands."""

import json

import pytest
from typer.testing import CliRunner

from repomirror import __version__
from repomirror.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestAnalyzeCommand:
    def test_json_output(self):
        result = runner.invoke(
            app, ["analyze", "https://github.com/facebook/react", "--json", "--instant"]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["repoFullName"] == "facebook/react"
        assert data["repoUrl"] == "https://github.com/facebook/react"
        assert data["techStack"] == ["React", "JavaScript", "JSX"]
        assert data["stats"]["languages"] == 3
        assert len(data["roadmap"]) == 5

    def test_rich_output(self):
        result = runner.invoke(app, ["analyze", "https://github.com/a/payments-api", "--instant"])

        assert result.exit_code == 0, result.output
        assert "a/payments-api" in result.output
        assert "REST API" in result.output

    def test_output_file(self, tmp_path):
        target = tmp_path / "report.json"
        result = runner.invoke(
            app,
            ["analyze", "github.com/a/ml-lab.git", "--json", "--instant", "-o", str(target)],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(target.read_text())
        assert data["repoName"] == "ml-lab"
        assert data["techStack"] == ["Python", "Machine Learning", "NumPy"]

    def test_invalid_url(self):
        result = runner.invoke(app, ["analyze", "not a url", "--instant"])

        assert result.exit_code == 2
        assert "Invalid GitHub URL" in result.output
        assert "facebook/react" in result.output

    def test_remote_failure(self):
        # nothing listens on port 9 (discard); the request fails fast
        result = runner.invoke(
            app,
            [
                "analyze",
                "https://github.com/facebook/react",
                "--remote",
                "--api-url",
                "http://127.0.0.1:9",
                "--instant",
            ],
        )

        assert result.exit_code == 1
        assert "Failed to analyze repository" in result.output

    def test_bad_config(self, tmp_path):
        (tmp_path / "repomirror.toml").write_text("port = 0\n")
        result = runner.invoke(app, ["analyze", "https://github.com/a/b", "--instant"])
        assert result.exit_code == 2


class TestLoggingLevel:
    @pytest.fixture
    def logging_calls(self, monkeypatch):
        calls = []
        monkeypatch.setattr(
            "repomirror.cli.analyze.setup_logging", lambda **kwargs: calls.append(kwargs)
        )
        return calls

    def test_env_verbosity(self, monkeypatch, logging_calls):
        monkeypatch.setenv("REPOMIRROR_VERBOSITY", "verbose")
        result = runner.invoke(app, ["analyze", "https://github.com/a/b", "--json", "--instant"])

        assert result.exit_code == 0, result.output
        assert logging_calls == [{"verbose": True, "quiet": False}]

    def test_config_file_verbosity(self, tmp_path, logging_calls):
        (tmp_path / "repomirror.toml").write_text('verbosity = "quiet"\n')
        result = runner.invoke(app, ["analyze", "https://github.com/a/b", "--json", "--instant"])

        assert result.exit_code == 0, result.output
        assert logging_calls == [{"verbose": False, "quiet": True}]

    def test_flag_overrides_config(self, tmp_path, logging_calls):
        (tmp_path / "repomirror.toml").write_text('verbosity = "quiet"\n')
        result = runner.invoke(
            app, ["analyze", "https://github.com/a/b", "--json", "--instant", "-v"]
        )

        assert result.exit_code == 0, result.output
        assert logging_calls == [{"verbose": True, "quiet": False}]
