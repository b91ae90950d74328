"""
Recipe serialization and deserialization.

A recipe is a saved filter chain in JSON format, so the same sequence of
filters can be replayed on other images.
"""

import json
from pathlib import Path
from typing import Any, Dict

from ..core import RecipeError
from ..processing import ProcessingPipeline


class RecipeSerializer:
    """
    Serializes and deserializes ProcessingPipeline to/from JSON.

    The version field allows older recipe files to keep loading.
    """

    # Format version for future compatibility
    FORMAT_VERSION = "1.0"

    @staticmethod
    def serialize(pipeline: ProcessingPipeline) -> Dict[str, Any]:
        """Convert a pipeline to a serializable dictionary."""
        data = {"format_version": RecipeSerializer.FORMAT_VERSION}
        data.update(pipeline.to_dict())
        return data

    @staticmethod
    def deserialize(data: Dict[str, Any]) -> ProcessingPipeline:
        """
        Convert a dictionary back to a pipeline.

        Unknown filter ids become the no-op filter, with a warning on the
        returned pipeline.
        """
        if not isinstance(data, dict):
            raise RecipeError("Recipe must be a JSON object")

        version = data.get("format_version", RecipeSerializer.FORMAT_VERSION)
        if str(version).split(".")[0] != RecipeSerializer.FORMAT_VERSION.split(".")[0]:
            raise RecipeError(f"Unsupported recipe format version: {version}")

        try:
            return ProcessingPipeline.from_dict(data)
        except ValueError as e:
            raise RecipeError(f"Invalid recipe: {e}")

    @staticmethod
    def save_to_file(pipeline: ProcessingPipeline, filepath: str) -> None:
        """Save a pipeline to a JSON file."""
        path = Path(filepath)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(RecipeSerializer.serialize(pipeline), f, indent=2)
        except OSError as e:
            raise RecipeError(f"Could not save recipe to {filepath}: {e}")

    @staticmethod
    def load_from_file(filepath: str) -> ProcessingPipeline:
        """Load a pipeline from a JSON file."""
        path = Path(filepath)
        if not path.exists():
            raise RecipeError(f"Recipe not found: {filepath}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RecipeError(f"Could not read recipe {filepath}: {e}")

        return RecipeSerializer.deserialize(data)
