"""
SimplePrint converters package

This package contains converters to transform parsed specifiers into various formats.
"""

from .json_converter import SpecJSONEncoder, to_json

__all__ = ['SpecJSONEncoder', 'to_json']
