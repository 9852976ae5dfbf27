"""SimplePrint value model: shape dispatch and per-shape renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any
import logging

from simpleprint.error_msg import UnsupportedValueError
from simpleprint.policy import RenderPolicy, get_render_policy
from simpleprint.registry import RenderFn, RendererRegistry, get_default_registry

logger = logging.getLogger(__name__)


class Shape(Enum):
    CHARACTER = "character"
    SIGNED_INT = "signed-int"
    UNSIGNED_INT = "unsigned-int"
    FLOAT = "float"
    CSTRING = "cstring"
    STRING = "string"
    POINTER = "pointer"
    CUSTOM = "custom"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


# ----------------- Shape markers -----------------


@dataclass(frozen=True)
class Char:
    """Marks a value as a single character."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or len(self.value) != 1:
            raise ValueError(f"Char expects exactly one character, got {self.value!r}")

    @classmethod
    def from_code(cls, code: int) -> "Char":
        return cls(chr(code))


@dataclass(frozen=True)
class Unsigned:
    """Marks an integer as unsigned with the given bit width."""

    value: int
    bits: int = 64

    def __post_init__(self) -> None:
        if self.bits <= 0:
            raise ValueError(f"Unsigned bit width must be positive, got {self.bits}")


@dataclass(frozen=True)
class Pointer:
    """Opaque address rendered as hexadecimal."""

    address: int

    def __post_init__(self) -> None:
        if self.address < 0:
            raise ValueError(f"Pointer address must be non-negative, got {self.address}")

    @classmethod
    def of(cls, obj: Any) -> "Pointer":
        return cls(id(obj))


# ----------------- Renderable values -----------------


class FormatValue(ABC):
    """A value bound to the renderer of its shape."""

    shape: Shape

    def __init__(self, raw: Any):
        self.raw = raw

    @abstractmethod
    def render(self) -> str:
        """Return the text for this value."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.raw!r})"


class CharValue(FormatValue):
    shape = Shape.CHARACTER

    def render(self) -> str:
        return self.raw.value


class SignedIntValue(FormatValue):
    shape = Shape.SIGNED_INT

    def render(self) -> str:
        return str(int(self.raw))


class UnsignedIntValue(FormatValue):
    shape = Shape.UNSIGNED_INT

    def render(self) -> str:
        # two's complement wrap, as a fixed-width unsigned would
        return str(self.raw.value % (1 << self.raw.bits))


class FloatValue(FormatValue):
    """Fixed conversion with six decimals, like C's ``%f``."""

    shape = Shape.FLOAT

    def render(self) -> str:
        return f"{self.raw:f}"


class CStringValue(FormatValue):
    """Byte string terminated by the first NUL, one byte per character."""

    shape = Shape.CSTRING

    def render(self) -> str:
        data = bytes(self.raw)
        end = data.find(b"\0")
        if end != -1:
            data = data[:end]
        return data.decode("latin-1")


class StringValue(FormatValue):
    shape = Shape.STRING

    def render(self) -> str:
        return self.raw


class PointerValue(FormatValue):
    shape = Shape.POINTER

    def render(self) -> str:
        return f"0x{self.raw.address:x}"


class CustomValue(FormatValue):
    """User type rendered by a caller-supplied function, held by reference."""

    shape = Shape.CUSTOM

    def __init__(self, raw: Any, render_fn: RenderFn):
        super().__init__(raw)
        self.render_fn = render_fn

    def render(self) -> str:
        return str(self.render_fn(self.raw))


class SequenceValue(FormatValue):
    """List or tuple; elements are adapted when rendered, so later changes show."""

    shape = Shape.SEQUENCE

    def __init__(
        self,
        raw: Any,
        registry: RendererRegistry,
        policy: RenderPolicy,
        active: frozenset[int] = frozenset(),
    ):
        super().__init__(raw)
        self.registry = registry
        self.policy = policy
        self.active = active | {id(raw)}

    def render(self) -> str:
        if not self.raw:
            return "vector()"
        items = [_adapt(item, self.registry, self.policy, self.active) for item in self.raw]
        return "vector( " + ", ".join(item.render() for item in items) + ")"


class MappingValue(FormatValue):
    """Mapping rendered with its keys in sorted order at render time."""

    shape = Shape.MAPPING

    def __init__(
        self,
        raw: Any,
        registry: RendererRegistry,
        policy: RenderPolicy,
        active: frozenset[int] = frozenset(),
    ):
        super().__init__(raw)
        self.registry = registry
        self.policy = policy
        self.active = active | {id(raw)}

    def render(self) -> str:
        if not self.raw:
            return "map()"
        pairs = [
            (
                _adapt(key, self.registry, self.policy, self.active),
                _adapt(item, self.registry, self.policy, self.active),
            )
            for key, item in _sorted_items(self.raw)
        ]
        body = ",".join(f" {{{key.render()}, {value.render()}}}" for key, value in pairs)
        return f"map({body} )"


# ----------------- Dispatch -----------------


def _sorted_items(mapping: Mapping) -> list[tuple[Any, Any]]:
    items = list(mapping.items())
    try:
        return sorted(items, key=lambda item: item[0])
    except TypeError:
        logger.debug(
            "Mapping keys of %s are not mutually ordered; keeping insertion order",
            type(mapping).__name__,
        )
        return items


def _unsupported(value: Any, policy: RenderPolicy) -> FormatValue:
    if policy.unsupported_values == "str":
        return CustomValue(value, str)
    if policy.unsupported_values == "repr":
        return CustomValue(value, repr)
    raise UnsupportedValueError(value)


def _enter_container(value: Any, active: frozenset[int]) -> frozenset[int]:
    if id(value) in active:
        raise UnsupportedValueError(
            value, f"Self-referencing {type(value).__name__} cannot be rendered"
        )
    return active | {id(value)}


def _adapt(
    value: Any,
    registry: RendererRegistry,
    policy: RenderPolicy,
    active: frozenset[int],
) -> FormatValue:
    if isinstance(value, Char):
        return CharValue(value)
    if isinstance(value, Unsigned):
        return UnsignedIntValue(value)
    if isinstance(value, Pointer):
        return PointerValue(value)

    render_fn = registry.resolve(type(value))
    if render_fn is not None:
        return CustomValue(value, render_fn)
    hook = getattr(type(value), "__simpleprint__", None)
    if callable(hook):
        return CustomValue(value, hook)

    if isinstance(value, (bool, int)):
        return SignedIntValue(value)
    if isinstance(value, float):
        return FloatValue(value)
    if isinstance(value, str):
        return StringValue(value)
    if isinstance(value, (bytes, bytearray)):
        return CStringValue(value)
    if isinstance(value, Mapping):
        inner = _enter_container(value, active)
        # fail early on elements that have no renderer
        for key, item in value.items():
            _adapt(key, registry, policy, inner)
            _adapt(item, registry, policy, inner)
        return MappingValue(value, registry, policy, active)
    if isinstance(value, (list, tuple)):
        inner = _enter_container(value, active)
        for item in value:
            _adapt(item, registry, policy, inner)
        return SequenceValue(value, registry, policy, active)
    return _unsupported(value, policy)


def adapt_value(
    value: Any,
    registry: RendererRegistry | None = None,
    policy: RenderPolicy | None = None,
) -> FormatValue:
    """Bind a native value to the renderer of its shape.

    Shape markers win, then renderers registered for the value's type, then
    a ``__simpleprint__`` method, then the built-in shapes. Anything left is
    handled by the unsupported-value policy.

    Containers are checked element by element here, so an element without a
    renderer or a container that contains itself raises
    :class:`UnsupportedValueError` now. The elements themselves are adapted
    again when the container is rendered, so changes made in between show up.
    """
    if registry is None:
        registry = get_default_registry()
    if policy is None:
        policy = get_render_policy()
    return _adapt(value, registry, policy, frozenset())
