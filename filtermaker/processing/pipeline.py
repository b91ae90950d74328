"""
Processing pipeline management.

Manages a chain of filters that are applied sequentially to image data, and
derives the output name from that same chain.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .filters import ProcessingFilter, resolve_filter


def compose_output_name(base_name: str, filters: Iterable[ProcessingFilter]) -> str:
    """Append each filter's suffix to the base name, in chain order."""
    return base_name + "".join(f.suffix for f in filters)


@dataclass
class ProcessingPipeline:
    """Container for a sequence of processing filters."""

    filters: List[ProcessingFilter] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ProcessingPipeline":
        """
        Build a pipeline from filter names.

        Unknown names become the no-op filter; their warnings are collected
        on the pipeline so the caller can report them.
        """
        pipeline = cls()
        for name in names:
            resolution = resolve_filter(name)
            pipeline.add_filter(resolution.filter)
            if resolution.warning:
                pipeline.warnings.append(resolution.warning)
        return pipeline

    def add_filter(self, filter: ProcessingFilter) -> None:
        """Add a filter to the end of the pipeline."""
        self.filters.append(filter)

    def remove_filter(self, index: int) -> bool:
        """Remove a filter by index. Returns success."""
        if 0 <= index < len(self.filters):
            del self.filters[index]
            return True
        return False

    def move_filter(self, from_index: int, to_index: int) -> bool:
        """Move a filter from one position to another. Returns success."""
        if not (0 <= from_index < len(self.filters) and 0 <= to_index < len(self.filters)):
            return False

        filter = self.filters.pop(from_index)
        self.filters.insert(to_index, filter)
        return True

    def get_filter(self, index: int) -> Optional[ProcessingFilter]:
        """Get a filter by index."""
        if 0 <= index < len(self.filters):
            return self.filters[index]
        return None

    def extend(self, other: "ProcessingPipeline") -> None:
        """Append another pipeline's filters and warnings after this one's."""
        self.filters.extend(other.filters)
        self.warnings.extend(other.warnings)

    def clear(self) -> None:
        """Remove all filters from pipeline."""
        self.filters.clear()
        self.warnings.clear()

    def is_empty(self) -> bool:
        """Check if pipeline has any filters."""
        return len(self.filters) == 0

    def output_name(self, base_name: str) -> str:
        """Name of the image produced by running this pipeline on `base_name`."""
        return compose_output_name(base_name, self.filters)

    def filter_ids(self) -> List[str]:
        return [f.filter_id for f in self.filters]

    def __len__(self) -> int:
        """Return number of filters in pipeline."""
        return len(self.filters)

    def __iter__(self):
        """Iterate over filters in pipeline."""
        return iter(self.filters)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pipeline to dictionary."""
        return {"filters": self.filter_ids()}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "ProcessingPipeline":
        """Deserialize pipeline from dictionary."""
        names = data.get("filters", [])
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise ValueError("'filters' must be a list of filter names")
        return ProcessingPipeline.from_names(names)
