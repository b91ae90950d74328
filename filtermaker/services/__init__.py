"""Services module initialization."""
from .settings import Settings
from .export_runner import ExportRunner, ExportResult
from .recipe_serializer import RecipeSerializer

__all__ = ["Settings", "ExportRunner", "ExportResult", "RecipeSerializer"]
