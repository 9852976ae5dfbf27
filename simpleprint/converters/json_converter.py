"""
JSON converter for parsed placeholder specifiers
"""

from enum import Enum
from typing import Any
import dataclasses
import json

from simpleprint.placeholder import Flags, PlaceholderSpec


class SpecJSONEncoder(json.JSONEncoder):
    def default(self, o):
        # Always return a fully unwrapped, JSON-serializable object
        return _unwrap(o)


def _unwrap(v: Any) -> Any:
    if isinstance(v, Flags):
        return [flag.name for flag in Flags if flag is not Flags.NONE and v & flag]
    if isinstance(v, Enum):
        return v.value
    if dataclasses.is_dataclass(v) and not isinstance(v, type):
        return {
            k.rstrip("_"): _unwrap(getattr(v, k)) for k in v.__dataclass_fields__
        }
    if isinstance(v, dict):
        return {_unwrap(k): _unwrap(val) for k, val in v.items()}
    if isinstance(v, (list, tuple, set)):
        return [_unwrap(i) for i in v]
    return v


def to_json(spec: PlaceholderSpec) -> dict:
    """Convert a PlaceholderSpec to a JSON-ready dictionary

    Args:
        spec: The parsed specifier

    Returns:
        Dictionary with ``param``, ``flags`` (flag names), ``type``, ``width``
        and ``precision`` (each ``{"status", "num"}``)
    """
    return _unwrap(spec)
