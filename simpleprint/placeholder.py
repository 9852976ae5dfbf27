"""
Placeholder specifier parser.

Decodes the printf-style mini-language found inside a placeholder::

    [param$][flags][width][.precision][type]

Parsing is best-effort: malformed pieces leave the affected field at its
default and never raise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class Flags(IntFlag):
    """Flag bits accepted by the flags stage."""

    NONE = 0
    MINUS = 0x1
    PLUS = 0x2
    SPACE = 0x4
    ZERO = 0x8
    HASH = 0x10


class PlaceholderType(Enum):
    DEFAULT = "default"
    SIGNED_INT = "signed-int"
    UNSIGNED_INT = "unsigned-int"
    OCT = "octal"
    HEX_UPPER = "hex-upper"
    HEX_LOWER = "hex-lower"


class NumFieldStatus(Enum):
    DEFAULT = "default"
    SPECIFIED = "specified"
    CUSTOMIZE = "customize"


@dataclass(frozen=True)
class NumField:
    """Tri-state width/precision field.

    ``num`` is only meaningful when ``status`` is SPECIFIED, and is then
    always strictly positive.
    """

    status: NumFieldStatus = NumFieldStatus.DEFAULT
    num: int = -1

    @classmethod
    def specified(cls, num: int) -> "NumField":
        if num <= 0:
            raise ValueError(f"Specified field must be positive, got {num}")
        return cls(NumFieldStatus.SPECIFIED, num)

    @classmethod
    def customize(cls) -> "NumField":
        return cls(NumFieldStatus.CUSTOMIZE)

    @property
    def is_default(self) -> bool:
        return self.status is NumFieldStatus.DEFAULT


_FLAG_CHARS = {
    "-": Flags.MINUS,
    "+": Flags.PLUS,
    " ": Flags.SPACE,
    "0": Flags.ZERO,
    "#": Flags.HASH,
}

_TYPE_CHARS = {
    "d": PlaceholderType.SIGNED_INT,
    "i": PlaceholderType.SIGNED_INT,
    "u": PlaceholderType.UNSIGNED_INT,
    "o": PlaceholderType.OCT,
    "X": PlaceholderType.HEX_UPPER,
    "x": PlaceholderType.HEX_LOWER,
}

_NUM_RUN_CHARS = frozenset("0123456789*")


@dataclass
class _SpecFields:
    """Mutable accumulator filled by the parse stages."""

    param: int = -1
    flags: Flags = Flags.NONE
    type_: PlaceholderType = PlaceholderType.DEFAULT
    width: NumField = field(default_factory=NumField)
    precision: NumField = field(default_factory=NumField)


ParseStage = Callable[[str, int, _SpecFields], int]


INT_MAX = 2**31 - 1
_INT_MAX_DIGITS = len(str(INT_MAX))


def _parse_int(text: str) -> int | None:
    """Parse a run of ASCII digits as a C ``int``; None when it does not fit."""
    if not (text.isascii() and text.isdigit()):
        return None
    digits = text.lstrip("0") or "0"
    if len(digits) > _INT_MAX_DIGITS:
        return None
    value = int(digits)
    if value > INT_MAX:
        return None
    return value


def _parse_param(spec: str, start: int, fields: _SpecFields) -> int:
    pos = spec.find("$", start)
    if pos == -1:
        return start

    text = spec[start:pos]
    param = _parse_int(text)
    if param is not None and param > 0:
        fields.param = param
    else:
        logger.debug("Dropping malformed parameter index %r in %r", text, spec)
    return pos + 1


def _parse_flags(spec: str, start: int, fields: _SpecFields) -> int:
    pos = start
    while pos < len(spec) and spec[pos] in _FLAG_CHARS:
        fields.flags |= _FLAG_CHARS[spec[pos]]
        pos += 1
    return pos


def _scan_num_run(spec: str, start: int) -> int:
    pos = start
    while pos < len(spec) and spec[pos] in _NUM_RUN_CHARS:
        pos += 1
    return pos


def _parse_num_field(spec: str, start: int, end: int) -> NumField:
    # leading zeros belong to the flags, not the number
    text = spec[start:end].lstrip("0")
    if not text:
        return NumField()
    if text == "*":
        return NumField.customize()
    num = _parse_int(text)
    if num is None:
        logger.debug("Ignoring malformed numeric field %r in %r", text, spec)
        return NumField()
    return NumField.specified(num)


def _parse_width(spec: str, start: int, fields: _SpecFields) -> int:
    end = _scan_num_run(spec, start)
    fields.width = _parse_num_field(spec, start, end)
    return end


def _parse_precision(spec: str, start: int, fields: _SpecFields) -> int:
    if spec[start] != ".":
        return start

    start += 1
    end = _scan_num_run(spec, start)
    fields.precision = _parse_num_field(spec, start, end)
    return end


def _parse_type(spec: str, start: int, fields: _SpecFields) -> int:
    type_ = _TYPE_CHARS.get(spec[start])
    if type_ is None:
        return start
    fields.type_ = type_
    return start + 1


PARSE_STAGES: tuple[ParseStage, ...] = (
    _parse_param,
    _parse_flags,
    _parse_width,
    _parse_precision,
    _parse_type,
)


@dataclass(frozen=True)
class PlaceholderSpec:
    """Parsed placeholder specifier.

    ``param`` is the explicit 1-based argument index, or ``-1`` when the
    positional counter should be used.
    """

    param: int = -1
    flags: Flags = Flags.NONE
    type_: PlaceholderType = PlaceholderType.DEFAULT
    width: NumField = field(default_factory=NumField)
    precision: NumField = field(default_factory=NumField)

    @classmethod
    def parse(cls, spec: str) -> "PlaceholderSpec":
        """Parse specifier text; never raises for malformed input."""
        fields = _SpecFields()
        pos = 0
        for stage in PARSE_STAGES:
            if pos >= len(spec):
                break
            pos = stage(spec, pos, fields)

        if pos < len(spec):
            logger.debug("Unparsed specifier tail %r in %r", spec[pos:], spec)

        return cls(
            param=fields.param,
            flags=fields.flags,
            type_=fields.type_,
            width=fields.width,
            precision=fields.precision,
        )

    @property
    def has_param(self) -> bool:
        return self.param > 0

    def has_flag(self, flag: Flags) -> bool:
        return bool(self.flags & flag)


def parse_placeholder(spec: str) -> PlaceholderSpec:
    """Module-level shortcut for :meth:`PlaceholderSpec.parse`."""
    return PlaceholderSpec.parse(spec)
