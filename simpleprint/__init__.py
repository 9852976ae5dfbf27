"""
SimplePrint - {}-template rendering and printf-style specifier parsing
"""

from simpleprint.arguments import ArgumentList, FormatArgument, build_arguments
from simpleprint.error_msg import SimplePrintError, UnsupportedValueError
from simpleprint.formatter import Formatter, ParseContext, render
from simpleprint.placeholder import (
    Flags,
    NumField,
    NumFieldStatus,
    PlaceholderSpec,
    PlaceholderType,
    parse_placeholder,
)
from simpleprint.policy import RenderPolicy, get_render_policy, render_policy
from simpleprint.registry import RendererRegistry, get_default_registry, register_renderer
from simpleprint.value_model import Char, Pointer, Shape, Unsigned, adapt_value
from simpleprint.version import __version__

__all__ = [
    "ArgumentList",
    "Char",
    "Flags",
    "FormatArgument",
    "Formatter",
    "NumField",
    "NumFieldStatus",
    "ParseContext",
    "PlaceholderSpec",
    "PlaceholderType",
    "Pointer",
    "RenderPolicy",
    "RendererRegistry",
    "Shape",
    "SimplePrintError",
    "Unsigned",
    "UnsupportedValueError",
    "__version__",
    "adapt_value",
    "build_arguments",
    "get_default_registry",
    "get_render_policy",
    "parse_placeholder",
    "register_renderer",
    "render",
    "render_policy",
]
