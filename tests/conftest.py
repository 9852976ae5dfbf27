"""Shared pytest fixtures for SimplePrint tests."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast isolated tests")
    config.addinivalue_line("markers", "integration: tests crossing the CLI/API facade")


@pytest.fixture(autouse=True)
def _clean_policy_env(monkeypatch: pytest.MonkeyPatch):
    from simpleprint.policy import INVALID_SENTINEL_ENV, UNSUPPORTED_VALUES_ENV

    monkeypatch.delenv(INVALID_SENTINEL_ENV, raising=False)
    monkeypatch.delenv(UNSUPPORTED_VALUES_ENV, raising=False)
    yield


@pytest.fixture
def registry():
    """A registry isolated from the process-wide default one."""
    from simpleprint.registry import RendererRegistry

    return RendererRegistry()
