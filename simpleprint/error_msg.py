"""
SimplePrint Error Message module
"""

from __future__ import annotations

from typing import Any


class SimplePrintError(RuntimeError):
    """Base error for SimplePrint programming errors.

    Malformed templates and specifiers never raise; these errors are reserved
    for values that cannot be turned into a format argument.
    """

    code = "E_SIMPLEPRINT"


class UnsupportedValueError(SimplePrintError, TypeError):
    """Raised when a value has no renderable shape under the active policy."""

    code = "E_UNSUPPORTED_VALUE"

    def __init__(self, value: Any, message: str | None = None):
        type_name = f"{type(value).__module__}.{type(value).__name__}"
        detail = message or (
            f"Value type '{type_name}' has no renderer; register one with "
            "register_renderer() or relax the unsupported-value policy."
        )
        super().__init__(detail)
        self.value_type = type_name
