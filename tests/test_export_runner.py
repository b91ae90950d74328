import logging
from pathlib import Path

import numpy as np
import OpenImageIO as oiio

from filtermaker.core import ExportSpec, ValidationSeverity
from filtermaker.oiio import OiioAdapter
from filtermaker.processing import FILTER_REGISTRY, FilterKind, ProcessingPipeline
from filtermaker.services import ExportRunner


def spec_for(source, *filters, **kwargs):
    kwargs.setdefault("extension", "png")
    return ExportSpec(source_path=str(source), filter_names=list(filters), **kwargs)


class TestOutputPath:
    def test_beside_source(self, tmp_path):
        runner = ExportRunner(spec_for(tmp_path / "photo.jpg", "invert", "grayscale", extension="jpg"))
        assert runner.output_path() == tmp_path / "photo_invert_grayscale.jpg"

    def test_empty_chain_keeps_name(self, tmp_path):
        runner = ExportRunner(spec_for(tmp_path / "photo.png"))
        assert runner.output_path() == tmp_path / "photo.png"

    def test_output_dir(self, tmp_path):
        runner = ExportRunner(spec_for(tmp_path / "photo.png", "red", output_dir=str(tmp_path / "out")))
        assert runner.output_path() == tmp_path / "out" / "photo_red.png"

    def test_output_dir_expands_home(self, tmp_path):
        runner = ExportRunner(spec_for(tmp_path / "photo.png", "red", output_dir="~/exports"))
        assert runner.output_path() == Path.home() / "exports" / "photo_red.png"

    def test_explicit_pipeline_wins(self, tmp_path):
        pipeline = ProcessingPipeline.from_names(["light"])
        runner = ExportRunner(spec_for(tmp_path / "photo.png", "invert"), pipeline)
        assert runner.output_path().name == "photo_light.png"


class TestRun:
    def test_writes_filtered_image(self, source_png, gradient_image):
        result = ExportRunner(spec_for(source_png, "invert", "grayscale")).run()

        assert result.success
        assert result.output_path == str(source_png.parent / "photo_invert_grayscale.png")
        written = OiioAdapter.read_image(result.output_path)
        expected = FILTER_REGISTRY[FilterKind.GRAYSCALE].apply(
            FILTER_REGISTRY[FilterKind.INVERT].apply(gradient_image)
        )
        assert written == expected

    def test_empty_chain_copies_pixels(self, tmp_path, source_png, gradient_image):
        out_dir = tmp_path / "copies"
        result = ExportRunner(spec_for(source_png, output_dir=str(out_dir))).run()
        assert result.success
        assert OiioAdapter.read_image(str(out_dir / "photo.png")) == gradient_image

    def test_overwriting_source_warns(self, source_png, gradient_image):
        result = ExportRunner(spec_for(source_png)).run()
        assert result.success
        assert [i.code for i in result.issues] == ["OUTPUT_OVERWRITES_SOURCE"]
        assert OiioAdapter.read_image(str(source_png)) == gradient_image

    def test_unknown_filter_warns_and_continues(self, source_png, caplog):
        with caplog.at_level(logging.WARNING, logger="filtermaker"):
            result = ExportRunner(spec_for(source_png, "sparkle", "invert")).run()

        assert result.success
        assert result.output_path.endswith("photo_invert.png")
        assert [i.code for i in result.issues] == ["UNKNOWN_FILTER"]
        assert result.issues[0].severity == ValidationSeverity.WARNING
        assert "Unknown filter: sparkle" in caplog.text

    def test_missing_source_fails(self, tmp_path):
        result = ExportRunner(spec_for(tmp_path / "missing.png", "invert")).run()
        assert not result.success
        assert "can't be found" in result.message
        assert [i.code for i in result.issues] == ["SOURCE_NOT_FOUND"]
        assert not (tmp_path / "missing_invert.png").exists()

    def test_directory_source_fails(self, tmp_path):
        folder = tmp_path / "folder.png"
        folder.mkdir()
        result = ExportRunner(spec_for(folder)).run()
        assert not result.success
        assert result.issues[0].code == "SOURCE_NOT_A_FILE"

    def test_undecodable_source_fails(self, tmp_path):
        source = tmp_path / "broken.png"
        source.write_bytes(b"\x00\x01garbage")
        result = ExportRunner(spec_for(source, "invert")).run()
        assert not result.success
        assert [i.code for i in result.issues] == ["SOURCE_UNREADABLE"]
        assert not (tmp_path / "broken_invert.png").exists()

    def test_unsupported_extension_blocks(self, source_png):
        result = ExportRunner(spec_for(source_png, "invert", extension="notaformat")).run()
        assert not result.success
        assert any(i.code == "UNSUPPORTED_EXTENSION" for i in result.issues)

    def test_invalid_quality_blocks(self, source_png):
        result = ExportRunner(spec_for(source_png, "invert", extension="jpg", quality=0)).run()
        assert not result.success
        assert any(i.code == "INVALID_QUALITY" for i in result.issues)

    def test_quality_ignored_for_png(self, source_png):
        result = ExportRunner(spec_for(source_png, "invert", quality=0)).run()
        assert result.success
        assert not any(i.code == "INVALID_QUALITY" for i in result.issues)
        assert (source_png.parent / "photo_invert.png").exists()

    def test_single_channel_source_blocks(self, tmp_path):
        source = tmp_path / "mask.png"
        out = oiio.ImageOutput.create(str(source))
        out.open(str(source), oiio.ImageSpec(3, 2, 1, oiio.UINT8))
        out.write_image(np.full((2, 3, 1), 128, dtype=np.uint8))
        out.close()

        result = ExportRunner(spec_for(source, "invert")).run()
        assert not result.success
        assert [i.code for i in result.issues] == ["SOURCE_NOT_RGB"]
        assert "1 channel(s)" in result.message
        assert not (tmp_path / "mask_invert.png").exists()

    def test_multiple_errors_are_counted(self, tmp_path):
        result = ExportRunner(
            spec_for(tmp_path / "missing.png", extension="notaformat")
        ).run()
        assert not result.success
        assert result.message == "Export blocked: 2 validation errors"

    def test_dry_run_writes_nothing(self, source_png):
        result = ExportRunner(spec_for(source_png, "invert")).run(dry_run=True)
        assert result.success
        assert result.message.startswith("Dry run")
        assert not (source_png.parent / "photo_invert.png").exists()
