"""Message template management and preview module."""

from .engine import (
    PREVIEW_VARIABLES,
    PreviewVariable,
    extract_placeholders,
    sample_bindings,
    substitute,
)

__all__ = [
    "PREVIEW_VARIABLES",
    "PreviewVariable",
    "extract_placeholders",
    "sample_bindings",
    "substitute",
]
