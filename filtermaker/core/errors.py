"""
Exception hierarchy for Filter Maker.

Unknown filter names are not errors: they resolve to the no-op filter and
travel as warnings on FilterResolution / ValidationIssue instead.
"""


class FilterMakerError(Exception):
    """Base class for all Filter Maker errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UsageError(FilterMakerError):
    """Command invoked without a source image."""


class DecodeError(FilterMakerError):
    """Source image cannot be read or is not an RGB raster."""


class SourceNotFoundError(DecodeError):
    """Source path does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"The image can't be found: {path}")


class EncodeError(FilterMakerError):
    """Destination image cannot be written."""


class FilterError(FilterMakerError):
    """A filter produced a grid that breaks the image invariants."""


class RecipeError(FilterMakerError):
    """A saved filter chain is missing or malformed."""
