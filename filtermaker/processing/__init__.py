"""
Processing system for Filter Maker.

Provides the fixed set of image filters, the pipeline that chains them and
the executor that applies a pipeline to an image grid.
"""

from .filters import (
    FilterKind,
    ProcessingFilter,
    FilterResolution,
    FILTER_REGISTRY,
    IDENTITY_FILTER,
    available_filter_names,
    create_filter,
    resolve_filter,
    get_filters_by_category,
    get_all_categories,
)
from .pipeline import ProcessingPipeline, compose_output_name
from .executor import ProcessingExecutor

__all__ = [
    "ProcessingPipeline",
    "ProcessingFilter",
    "ProcessingExecutor",
    "FilterKind",
    "FilterResolution",
    "compose_output_name",
    # Helpers
    "available_filter_names",
    "create_filter",
    "resolve_filter",
    "get_filters_by_category",
    "get_all_categories",
    "FILTER_REGISTRY",
    "IDENTITY_FILTER",
]
