"""
Validation engine for filter runs.

Structured validation rules checked before any pixel is decoded.
Returns ValidationIssue list; ERROR severity blocks the export.
"""

from pathlib import Path
from typing import List

from ..oiio import OiioAdapter
from ..oiio.adapter import JPEG_EXTENSIONS
from .types import ExportSpec, ValidationIssue, ValidationSeverity


class ValidationEngine:
    """Validates export configurations."""

    @staticmethod
    def validate_export(
        export_spec: ExportSpec,
        warnings: List[str],
        output_path: Path,
    ) -> List[ValidationIssue]:
        """
        Validate an export spec, its filter warnings and its output path.

        Returns list of ValidationIssue; export is blocked if any ERROR present.
        """
        issues = []

        # 1. Source image
        issues.extend(ValidationEngine._validate_source(export_spec))

        # 2. Filter names
        issues.extend(ValidationEngine._validate_filters(warnings))

        # 3. Output path and format
        issues.extend(ValidationEngine._validate_output(export_spec, output_path))

        return issues

    @staticmethod
    def has_errors(issues: List[ValidationIssue]) -> bool:
        """True if any issue blocks the export."""
        return any(i.severity == ValidationSeverity.ERROR for i in issues)

    @staticmethod
    def _validate_source(export_spec: ExportSpec) -> List[ValidationIssue]:
        """Validate the source image path."""
        source = Path(export_spec.source_path)

        if not source.exists():
            return [
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="SOURCE_NOT_FOUND",
                    message=f"The image can't be found: {source}",
                    context={"path": str(source)},
                )
            ]

        if not source.is_file():
            return [
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="SOURCE_NOT_A_FILE",
                    message=f"Source is not a file: {source}",
                    context={"path": str(source)},
                )
            ]

        snapshot = OiioAdapter.probe_file(str(source))
        if snapshot is None:
            return [
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="SOURCE_UNREADABLE",
                    message=f"Cannot read image: {source}",
                    context={"path": str(source)},
                )
            ]

        if snapshot.nchannels < 3:
            return [
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="SOURCE_NOT_RGB",
                    message=f"{source} has {snapshot.nchannels} channel(s), an RGB image is required",
                    context={"path": str(source), "channels": snapshot.channelnames},
                )
            ]

        return []

    @staticmethod
    def _validate_filters(warnings: List[str]) -> List[ValidationIssue]:
        """Turn filter resolution warnings into validation warnings."""
        return [
            ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="UNKNOWN_FILTER",
                message=warning,
            )
            for warning in warnings
        ]

    @staticmethod
    def _validate_output(export_spec: ExportSpec, output_path: Path) -> List[ValidationIssue]:
        """Validate output format, quality and destination."""
        issues = []

        if not OiioAdapter.supports_output(export_spec.extension):
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="UNSUPPORTED_EXTENSION",
                    message=f"No image writer available for '.{export_spec.extension}' files",
                    context={"extension": export_spec.extension},
                )
            )

        is_jpeg = export_spec.extension.lstrip(".").lower() in JPEG_EXTENSIONS
        if is_jpeg and not 1 <= export_spec.quality <= 100:
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="INVALID_QUALITY",
                    message=f"Quality must be between 1 and 100, got {export_spec.quality}",
                    context={"quality": export_spec.quality},
                )
            )

        source = Path(export_spec.source_path)
        if source.exists() and output_path.exists() and output_path.resolve() == source.resolve():
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    code="OUTPUT_OVERWRITES_SOURCE",
                    message=f"The source image will be replaced: {output_path}",
                    context={"path": str(output_path)},
                )
            )

        return issues
