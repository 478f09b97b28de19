"""Tests for path escaping and URL assembly."""

from __future__ import annotations

from urllib.parse import unquote

import pytest

from pipekit.backend.routing import build_url, escape_segment, format_url_path, join_path
from pipekit.core.exceptions import ConfigurationError, InvalidPipeError
from pipekit.models.meta import Route
from pipekit.models.params import Params

RUNS = "v1/users/{user}/pipes/{pipe}/runs"


class TestFormatURLPath:
    def test_prefixes_route_marker(self):
        assert format_url_path(Route.HOSTED, RUNS, user="u1", pipe="p1") == (
            "events-handler/v1/users/u1/pipes/p1/runs"
        )
        assert format_url_path(Route.IN_CLUSTER, RUNS, user="u1", pipe="p1") == (
            "plumbing/v1/users/u1/pipes/p1/runs"
        )

    def test_escapes_each_segment(self):
        path = format_url_path(Route.HOSTED, RUNS, user="a b", pipe="c/d")
        assert path == "events-handler/v1/users/a%20b/pipes/c%2Fd/runs"

    def test_escaping_round_trips(self):
        for value in ["a b", "c/d", "ü?x#y", "50%"]:
            assert unquote(escape_segment(value)) == value

    def test_dot_segments_are_escaped(self):
        assert escape_segment("..") == "%2E%2E"
        assert escape_segment(".") == "%2E"

    def test_empty_segment_rejected(self):
        with pytest.raises(InvalidPipeError):
            format_url_path(Route.HOSTED, RUNS, user="", pipe="p1")


class TestBuildURL:
    def test_joins_without_duplicate_slashes(self):
        url = build_url("https://pipekit.io/api/", "/events-handler/v1/users/u1")
        assert url == "https://pipekit.io/api/events-handler/v1/users/u1"

    def test_base_without_path(self):
        assert build_url("http://localhost:8080", "plumbing/v1") == "http://localhost:8080/plumbing/v1"

    def test_appends_query(self):
        url = build_url("https://pipekit.io/api", "a/b", Params({"should-kill": True}))
        assert url == "https://pipekit.io/api/a/b?should-kill=true"

    def test_preserves_escapes(self):
        url = build_url("https://pipekit.io/api", "users/a%20b/pipes/c%2Fd")
        assert url.endswith("/users/a%20b/pipes/c%2Fd")

    @pytest.mark.parametrize("base", ["pipekit.io/api", "ftp://pipekit.io", "https://pipekit.io/api?x=1", ""])
    def test_malformed_base_uri(self, base):
        with pytest.raises(ConfigurationError):
            build_url(base, "a")

    @pytest.mark.parametrize("path", ["a?b=1", "a#frag", "http://evil.example/a", "a b"])
    def test_malformed_logical_path(self, path):
        with pytest.raises(ConfigurationError):
            build_url("https://pipekit.io/api", path)


def test_join_path_drops_empty_segments_only():
    assert join_path("/api/", "//x/y/", "z") == "/api/x/y/z"
