"""Tests for the query-parameter bag."""

from __future__ import annotations

from pipekit.core.protocols import IParamsContainer
from pipekit.models.params import Params


def test_encode_sorts_keys():
    params = Params()
    params.add("zeta", "1")
    params.add("alpha", "2")
    assert params.encode() == "alpha=2&zeta=1"


def test_multiple_values_keep_insertion_order():
    params = Params({"tag": ["b", "a"]})
    assert params.get_all("tag") == ["b", "a"]
    assert params.encode() == "tag=b&tag=a"


def test_bools_encode_lowercase():
    params = Params()
    params.add("should-kill", True)
    assert params.get("should-kill") == "true"


def test_set_replaces_values():
    params = Params({"k": ["1", "2"]})
    params.set("k", "3")
    assert params.get_all("k") == ["3"]


def test_values_are_url_encoded():
    params = Params({"q": "a b&c"})
    assert params.encode() == "q=a+b%26c"


def test_empty_bag_is_falsy():
    params = Params()
    assert not params
    assert params.encode() == ""
    assert params.get("missing") is None


def test_params_is_its_own_container():
    params = Params({"a": "1"})
    assert isinstance(params, IParamsContainer)
    assert params.get_params() is params
