"""Utility functions and helpers."""

from planboard.utils.denormalize import refresh_display_fields
from planboard.utils.validation import validate_draft

__all__ = [
    "refresh_display_fields",
    "validate_draft",
]
