"""
SimplePrint template engine.

Templates use ``{}`` for the next positional argument and ``{{``/``}}`` for
literal braces. The scan is a single left-to-right pass and never fails:
unsupported or unmatched brace sequences are dropped, and placeholders
without a matching argument render as the policy's sentinel text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import logging

from simpleprint.arguments import ArgumentList, build_arguments
from simpleprint.policy import RenderPolicy, get_render_policy
from simpleprint.registry import RendererRegistry

logger = logging.getLogger(__name__)


@dataclass
class ParseContext:
    """Scanning state for one ``format()`` call."""

    current_idx: int = 0
    in_left_escape: bool = False
    in_right_escape: bool = False


class Formatter:
    """A template bound to its arguments.

    The argument list is built once, in the constructor; ``format()`` can then
    be called any number of times and always yields the same text.
    """

    def __init__(
        self,
        template: str,
        *values: Any,
        registry: RendererRegistry | None = None,
        policy: RenderPolicy | None = None,
    ) -> None:
        self.policy = policy if policy is not None else get_render_policy()
        self.template = template
        self.args = build_arguments(values, registry, self.policy)

    @classmethod
    def from_arguments(
        cls,
        template: str,
        args: ArgumentList,
        policy: RenderPolicy | None = None,
    ) -> "Formatter":
        formatter = cls.__new__(cls)
        formatter.policy = policy if policy is not None else get_render_policy()
        formatter.template = template
        formatter.args = args
        return formatter

    def format(self) -> str:
        ctx = ParseContext()
        result: list[str] = []
        for c in self.template:
            self._parse(ctx, c, result)

        if ctx.in_left_escape or ctx.in_right_escape:
            logger.debug("Dropping unmatched trailing brace in %r", self.template)
        return "".join(result)

    def _parse(self, ctx: ParseContext, c: str, result: list[str]) -> None:
        if ctx.in_left_escape:
            self._on_left_brace(ctx, c, result)
        elif ctx.in_right_escape:
            self._on_right_brace(ctx, c, result)
        elif c == "{":
            ctx.in_left_escape = True
        elif c == "}":
            ctx.in_right_escape = True
        else:
            result.append(c)

    def _on_left_brace(self, ctx: ParseContext, c: str, result: list[str]) -> None:
        ctx.in_left_escape = False
        if c == "{":
            result.append(c)
        elif c == "}":
            if self.args.in_range(ctx.current_idx):
                result.append(self.args[ctx.current_idx].render())
                ctx.current_idx += 1
            else:
                logger.debug(
                    "Placeholder %d has no argument (%d given)",
                    ctx.current_idx,
                    len(self.args),
                )
                result.append(self.policy.invalid_sentinel)
        else:
            # reserved for inline specifiers
            logger.debug("Ignoring %r after '{' in %r", c, self.template)

    def _on_right_brace(self, ctx: ParseContext, c: str, result: list[str]) -> None:
        ctx.in_right_escape = False
        if c == "}":
            result.append(c)
        else:
            logger.debug("Dropping lone '}' before %r in %r", c, self.template)

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Formatter({self.template!r}, {self.args!r})"


def render(
    template: str,
    *values: Any,
    registry: RendererRegistry | None = None,
    policy: RenderPolicy | None = None,
) -> str:
    """Render ``template`` with ``values`` substituted for its placeholders."""
    return Formatter(template, *values, registry=registry, policy=policy).format()
