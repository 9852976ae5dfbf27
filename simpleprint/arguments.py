"""Type-erased argument list built once per formatting call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from simpleprint.policy import RenderPolicy, get_render_policy
from simpleprint.registry import RendererRegistry
from simpleprint.value_model import FormatValue, Shape, adapt_value


@dataclass(frozen=True)
class FormatArgument:
    """One call-site value paired with its shape renderer."""

    value: FormatValue

    @property
    def shape(self) -> Shape:
        return self.value.shape

    def render(self) -> str:
        return self.value.render()


class ArgumentList:
    """Fixed-length, ordered and immutable sequence of format arguments."""

    __slots__ = ("_args",)

    def __init__(self, args: Iterable[FormatArgument] = ()) -> None:
        self._args: tuple[FormatArgument, ...] = tuple(args)

    def __len__(self) -> int:
        return len(self._args)

    def __getitem__(self, index: int) -> FormatArgument:
        return self._args[index]

    def __iter__(self) -> Iterator[FormatArgument]:
        return iter(self._args)

    def __repr__(self) -> str:
        shapes = ", ".join(arg.shape.value for arg in self._args)
        return f"ArgumentList([{shapes}])"

    def in_range(self, index: int) -> bool:
        return 0 <= index < len(self._args)


def build_arguments(
    values: Iterable[Any],
    registry: RendererRegistry | None = None,
    policy: RenderPolicy | None = None,
) -> ArgumentList:
    """Adapt call-site values into an :class:`ArgumentList`.

    Raises:
        UnsupportedValueError: A value has no shape and the policy is ``error``.
    """
    if policy is None:
        policy = get_render_policy()
    return ArgumentList(
        FormatArgument(adapt_value(value, registry, policy)) for value in values
    )
