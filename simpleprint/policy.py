"""Render policy: configuration for sentinel text and unsupported values."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Any, Iterator, Literal
import logging
import os

logger = logging.getLogger(__name__)

INVALID_SENTINEL_ENV = "SIMPLEPRINT_INVALID_SENTINEL"
UNSUPPORTED_VALUES_ENV = "SIMPLEPRINT_UNSUPPORTED_VALUES"

DEFAULT_INVALID_SENTINEL = "<INVALID>"

UnsupportedMode = Literal["error", "str", "repr"]
_UNSUPPORTED_MODES = ("error", "str", "repr")


@dataclass(frozen=True)
class RenderPolicy:
    """Knobs consulted while building arguments and scanning templates."""

    invalid_sentinel: str = DEFAULT_INVALID_SENTINEL
    unsupported_values: UnsupportedMode = "error"

    def __post_init__(self) -> None:
        if self.unsupported_values not in _UNSUPPORTED_MODES:
            raise ValueError(
                f"Invalid unsupported_values mode: {self.unsupported_values!r}"
            )


_RENDER_POLICY: ContextVar[RenderPolicy | None] = ContextVar(
    "simpleprint_render_policy",
    default=None,
)


def resolve_env_policy() -> RenderPolicy:
    """Resolve the policy from environment variables."""
    sentinel = os.environ.get(INVALID_SENTINEL_ENV)
    mode = os.environ.get(UNSUPPORTED_VALUES_ENV, "").strip().lower()
    if mode and mode not in _UNSUPPORTED_MODES:
        logger.warning(
            "Ignoring %s=%r; expected one of %s",
            UNSUPPORTED_VALUES_ENV,
            mode,
            ", ".join(_UNSUPPORTED_MODES),
        )
        mode = ""
    return RenderPolicy(
        invalid_sentinel=DEFAULT_INVALID_SENTINEL if sentinel is None else sentinel,
        unsupported_values=mode or "error",  # type: ignore[arg-type]
    )


def get_render_policy() -> RenderPolicy:
    """Return the active policy: a scoped override, else the environment."""
    policy = _RENDER_POLICY.get()
    if policy is not None:
        return policy
    return resolve_env_policy()


@contextmanager
def render_policy(policy: RenderPolicy | None = None, **overrides: Any) -> Iterator[RenderPolicy]:
    """Scope a policy override to the current context.

    Either pass a full ``RenderPolicy`` or keyword overrides applied on top of
    the currently active policy.
    """
    base = policy if policy is not None else get_render_policy()
    active = replace(base, **overrides) if overrides else base
    token = _RENDER_POLICY.set(active)
    try:
        yield active
    finally:
        _RENDER_POLICY.reset(token)
