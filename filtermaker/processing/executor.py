"""
Processing executor - applies a filter chain to an image grid.

Each filter runs both of its stages before the next filter starts, so the
output of filter k is the complete input of filter k + 1.
"""

from ..core import FilterError, ImageGrid
from ..logging_config import get_logger
from .filters import ProcessingFilter
from .pipeline import ProcessingPipeline

logger = get_logger("executor")


class ProcessingExecutor:
    """Executes processing pipeline on ImageGrid objects."""

    def execute(self, image: ImageGrid, pipeline: ProcessingPipeline) -> ImageGrid:
        """
        Apply all filters in pipeline to image sequentially.

        Args:
            image: Input image, never modified
            pipeline: Processing pipeline with filters

        Returns:
            Processed image. An empty pipeline returns a copy of the input.
        """
        if pipeline.is_empty():
            return image.copy()

        result = image
        for index, filter in enumerate(pipeline):
            result = self._apply_filter(result, filter)
            logger.debug(f"Applied filter {index + 1}/{len(pipeline)}: {filter.filter_id}")

        return result

    def _apply_filter(self, image: ImageGrid, filter: ProcessingFilter) -> ImageGrid:
        """Apply a single filter and check that the grid keeps its size."""
        result = filter.apply(image)
        if result.size != image.size:
            raise FilterError(
                f"Filter {filter.filter_id} changed image size from "
                f"{image.width}x{image.height} to {result.width}x{result.height}"
            )
        return result
