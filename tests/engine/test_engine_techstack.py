"""Tests for engine.techstack first-match resolution."""

import pytest

from repomirror.engine.techstack import DEFAULT_TECH_STACK, match_bucket, resolve_tech_stack


class TestResolveTechStack:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("react", ("React", "JavaScript", "JSX")),
            ("next.js", ("Next.js", "React", "Node.js")),
            ("payments-api", ("Node.js", "Express", "REST API")),
            ("ml-pipeline", ("Python", "Machine Learning", "NumPy")),
            ("tailwindcss", ("JavaScript", "HTML", "CSS")),
        ],
    )
    def test_buckets(self, name, expected):
        assert resolve_tech_stack(name) == expected

    def test_first_match_wins(self):
        # contains both "react" and "next"
        assert resolve_tech_stack("react-next-app") == ("React", "JavaScript", "JSX")
        assert match_bucket("react-next-app") == "react"

    def test_declared_order_not_position_in_name(self):
        # "next" appears before "react" in the name; bucket order still decides
        assert match_bucket("next-react") == "react"

    def test_case_insensitive(self):
        assert match_bucket("MyReactApp") == "react"

    def test_substring_match(self):
        # "html" contains "ml"
        assert match_bucket("html-templates") == "ml"

    def test_api_before_ml(self):
        assert match_bucket("ml-api") == "api"

    def test_default(self):
        assert match_bucket("linux") == "default"
        assert resolve_tech_stack("linux") == DEFAULT_TECH_STACK
