"""
Export runner for a single filter run.

Performs validation, decoding, filtering and writing, and reports the
outcome as an ExportResult instead of raising.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..core import ExportSpec, FilterMakerError, ValidationIssue, ValidationSeverity
from ..core.validation import ValidationEngine
from ..logging_config import get_logger
from ..oiio import OiioAdapter
from ..processing import ProcessingExecutor, ProcessingPipeline

logger = get_logger("export")


@dataclass
class ExportResult:
    """Outcome of an export."""
    success: bool
    message: str
    output_path: Optional[str] = None
    issues: List[ValidationIssue] = field(default_factory=list)


class ExportRunner:
    """Runs one image through a filter pipeline and writes the result."""

    def __init__(
        self,
        export_spec: ExportSpec,
        pipeline: Optional[ProcessingPipeline] = None,
        executor: Optional[ProcessingExecutor] = None,
    ):
        self.export_spec = export_spec
        self.pipeline = pipeline if pipeline is not None else ProcessingPipeline.from_names(
            export_spec.filter_names
        )
        self.executor = executor or ProcessingExecutor()

    def output_path(self) -> Path:
        """
        Path of the file this export writes.

        The base name is the source file name without its extension; the
        pipeline appends one suffix per filter.
        """
        source = Path(self.export_spec.source_path)
        if self.export_spec.output_dir:
            output_dir = Path(self.export_spec.output_dir).expanduser()
        else:
            output_dir = source.parent
        name = self.pipeline.output_name(source.stem)
        return output_dir / f"{name}.{self.export_spec.extension.lstrip('.')}"

    def run(self, dry_run: bool = False) -> ExportResult:
        """Validate, filter and write. Never raises Filter Maker errors."""
        output_path = self.output_path()

        self._log("=" * 60)
        self._log(f"Source image: {self.export_spec.source_path}")
        self._log(f"Filters: {', '.join(self.pipeline.filter_ids()) or '(none)'}")
        self._log(f"Output image: {output_path}")
        self._log("=" * 60)

        issues = ValidationEngine.validate_export(
            self.export_spec, self.pipeline.warnings, output_path
        )
        for issue in issues:
            if issue.severity == ValidationSeverity.WARNING:
                self._log(issue.message, logging.WARNING)
            else:
                self._log(issue.message, logging.ERROR)

        if ValidationEngine.has_errors(issues):
            errors = [i for i in issues if i.severity == ValidationSeverity.ERROR]
            return ExportResult(
                success=False,
                message=errors[0].message if len(errors) == 1
                else f"Export blocked: {len(errors)} validation errors",
                output_path=str(output_path),
                issues=issues,
            )

        if dry_run:
            return ExportResult(
                success=True,
                message=f"Dry run: would write {output_path}",
                output_path=str(output_path),
                issues=issues,
            )

        try:
            image = OiioAdapter.read_image(self.export_spec.source_path)
            self._log(f"Decoded {image.width}x{image.height} image", logging.DEBUG)

            result = self.executor.execute(image, self.pipeline)

            OiioAdapter.write_image(result, str(output_path), self.export_spec.quality)
        except FilterMakerError as e:
            self._log(f"FATAL: {e.message}", logging.ERROR)
            return ExportResult(
                success=False,
                message=e.message,
                output_path=str(output_path),
                issues=issues,
            )

        self._log(f"Wrote: {output_path}")
        return ExportResult(
            success=True,
            message="Export completed successfully!",
            output_path=str(output_path),
            issues=issues,
        )

    def _log(self, message: str, level: int = logging.INFO) -> None:
        """Emit a log message."""
        logger.log(level, message)
