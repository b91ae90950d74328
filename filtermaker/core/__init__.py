"""
Core types, errors and validation for Filter Maker.
"""

from .types import (
    ValidationSeverity,
    Pixel,
    ImageGrid,
    ImageSpecSnapshot,
    ValidationIssue,
    ExportSpec,
    clamp_channel,
)
from .errors import (
    FilterMakerError,
    UsageError,
    DecodeError,
    SourceNotFoundError,
    EncodeError,
    FilterError,
    RecipeError,
)

__all__ = [
    "ValidationSeverity",
    "Pixel",
    "ImageGrid",
    "ImageSpecSnapshot",
    "ValidationIssue",
    "ExportSpec",
    "clamp_channel",
    "FilterMakerError",
    "UsageError",
    "DecodeError",
    "SourceNotFoundError",
    "EncodeError",
    "FilterError",
    "RecipeError",
]
