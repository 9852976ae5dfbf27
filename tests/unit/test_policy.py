from __future__ import annotations

import pytest

from simpleprint.formatter import render
from simpleprint.policy import (
    DEFAULT_INVALID_SENTINEL,
    INVALID_SENTINEL_ENV,
    UNSUPPORTED_VALUES_ENV,
    RenderPolicy,
    get_render_policy,
    render_policy,
    resolve_env_policy,
)


@pytest.mark.unit
def test_default_policy():
    policy = get_render_policy()
    assert policy == RenderPolicy()
    assert policy.invalid_sentinel == DEFAULT_INVALID_SENTINEL == "<INVALID>"
    assert policy.unsupported_values == "error"


@pytest.mark.unit
def test_environment_policy(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(INVALID_SENTINEL_ENV, "")
    monkeypatch.setenv(UNSUPPORTED_VALUES_ENV, " REPR ")
    policy = resolve_env_policy()
    assert policy.invalid_sentinel == ""
    assert policy.unsupported_values == "repr"
    assert render("[{}]") == "[]"
    assert render("{}", None) == "None"


@pytest.mark.unit
def test_invalid_environment_mode_falls_back_to_error(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(UNSUPPORTED_VALUES_ENV, "ignore")
    assert resolve_env_policy().unsupported_values == "error"


@pytest.mark.unit
def test_invalid_mode_is_rejected():
    with pytest.raises(ValueError):
        RenderPolicy(unsupported_values="ignore")  # type: ignore[arg-type]


@pytest.mark.unit
def test_scoped_override_is_restored():
    with render_policy(invalid_sentinel="!") as active:
        assert get_render_policy() is active
        with render_policy(unsupported_values="str"):
            inner = get_render_policy()
            assert inner.invalid_sentinel == "!"
            assert inner.unsupported_values == "str"
        assert get_render_policy().unsupported_values == "error"
    assert get_render_policy() == RenderPolicy()


@pytest.mark.unit
def test_scoped_full_policy():
    with render_policy(RenderPolicy(invalid_sentinel="--")):
        assert render("{}") == "--"
