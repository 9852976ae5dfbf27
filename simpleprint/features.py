"""
This module defines all SimplePrint features using a unified registry system.
The CLI and the HTTP API both dispatch through it.
"""

from typing import (
    Dict,
    Any,
    Callable,
    List,
    Optional,
    TypeVar,
    Generic,
)
from dataclasses import dataclass
import json
import logging

from simpleprint.converters import to_json
from simpleprint.error_msg import SimplePrintError
from simpleprint.formatter import render
from simpleprint.placeholder import PlaceholderSpec

logger = logging.getLogger("simpleprint.features")

T = TypeVar("T")


class OperationResult(Generic[T]):
    """Wrapper for operation results with success/error handling"""

    def __init__(
        self, success: bool, data: Optional[T] = None, error: Optional[str] = None
    ):
        self.success = success
        self.data = data
        self.error = error

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "OperationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "OperationResult[T]":
        return cls(success=False, error=error)


@dataclass
class Feature:
    """Base class for all SimplePrint features"""

    name: str
    description: str
    handler: Callable
    cli_options: Optional[Dict[str, Any]] = None
    api_endpoint: Optional[Dict[str, Any]] = None


class FeatureRegistry:
    """Registry for all SimplePrint features"""

    _features: Dict[str, Feature] = {}

    @classmethod
    def register(cls, feature: Feature) -> Feature:
        """Register a new feature"""
        cls._features[feature.name] = feature
        return feature

    @classmethod
    def get_feature(cls, name: str) -> Optional[Feature]:
        """Get a feature by name"""
        return cls._features.get(name)

    @classmethod
    def get_all_features(cls) -> Dict[str, Feature]:
        """Get all registered features"""
        return cls._features.copy()


# ----------------- Feature Handlers -----------------


def handle_version(**kwargs) -> OperationResult[Dict[str, str]]:
    """Handle version request"""
    from simpleprint.version import get_version

    return OperationResult.ok({"version": get_version()})


def decode_typed_values(raw_values: List[str]) -> List[Any]:
    """Decode CLI values as JSON literals, keeping bare words as strings."""
    decoded: List[Any] = []
    for raw in raw_values:
        try:
            decoded.append(json.loads(raw))
        except json.JSONDecodeError:
            decoded.append(raw)
    return decoded


def handle_render(
    template: str,
    values: Optional[List[Any]] = None,
    typed: bool = False,
    **kwargs,
) -> OperationResult[Dict[str, str]]:
    """Render a template with the given values"""
    values = list(values or [])
    if typed:
        values = decode_typed_values([str(v) for v in values])
    try:
        text = render(template, *values)
    except SimplePrintError as e:
        logger.debug("Render failed", exc_info=True)
        return OperationResult.fail(str(e))
    logger.debug("Rendered %d values into %d characters", len(values), len(text))
    return OperationResult.ok({"text": text})


def handle_parse_spec(specifier: str, **kwargs) -> OperationResult[Dict[str, Any]]:
    """Parse a placeholder specifier"""
    spec = PlaceholderSpec.parse(specifier)
    return OperationResult.ok(
        {"specifier": specifier, "spec": to_json(spec)}
    )


# ----------------- Feature Registration -----------------

version_feature = FeatureRegistry.register(
    Feature(
        name="version",
        description="Get the SimplePrint version",
        handler=handle_version,
        api_endpoint={
            "path": "/version",
            "methods": ["GET"],
            "response_model": Dict[str, str],
        },
    )
)

render_feature = FeatureRegistry.register(
    Feature(
        name="render",
        description="Render a template with positional values",
        handler=handle_render,
        cli_options={
            "template": {"help": "Template using {} placeholders"},
            "values": {"help": "Values substituted in order"},
            "typed": {
                "help": "Decode each value as a JSON literal (numbers, lists, objects)",
            },
        },
        api_endpoint={
            "path": "/render",
            "methods": ["POST"],
        },
    )
)

spec_feature = FeatureRegistry.register(
    Feature(
        name="spec",
        description="Parse a printf-style placeholder specifier",
        handler=handle_parse_spec,
        cli_options={
            "specifier": {"help": "Specifier text, e.g. 1$-08.3d"},
        },
        api_endpoint={
            "path": "/spec",
            "methods": ["POST"],
        },
    )
)
