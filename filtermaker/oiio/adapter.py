"""
OpenImageIO adapter for reading and writing 8-bit RGB images.

Keeps every OIIO call behind one class so the rest of the code only sees
ImageGrid objects and Filter Maker errors.
"""

from pathlib import Path
from typing import Optional

import numpy as np
import OpenImageIO as oiio

from ..core import (
    DecodeError,
    EncodeError,
    ImageGrid,
    ImageSpecSnapshot,
    SourceNotFoundError,
)
from ..logging_config import get_logger

logger = get_logger("oiio")

JPEG_EXTENSIONS = {"jpg", "jpeg", "jpe"}


class OiioAdapter:
    """Thin wrapper for robust OIIO bindings."""

    @staticmethod
    def read_image(filepath: str) -> ImageGrid:
        """
        Decode an image file into an RGB grid.

        Raises SourceNotFoundError if the path does not exist and DecodeError
        if OIIO cannot read it or it has fewer than three channels. Channels
        beyond RGB (alpha, depth...) are dropped.
        """
        path = Path(filepath)
        if not path.exists():
            raise SourceNotFoundError(str(filepath))

        inp = oiio.ImageInput.open(str(path))
        if not inp:
            raise DecodeError(f"Cannot open {filepath}: {oiio.geterror()}")

        try:
            spec = inp.spec()
            if spec.nchannels < 3:
                raise DecodeError(
                    f"{filepath} has {spec.nchannels} channel(s), an RGB image is required"
                )
            pixels = inp.read_image(oiio.UINT8)
            if pixels is None:
                raise DecodeError(f"Cannot read pixels of {filepath}: {inp.geterror()}")
        finally:
            inp.close()

        pixels = np.asarray(pixels)
        if pixels.ndim == 2:
            # Some bindings return (height, width * nchannels)
            pixels = pixels.reshape(spec.height, spec.width, spec.nchannels)
        if spec.nchannels > 3:
            logger.debug(f"Dropping {spec.nchannels - 3} extra channel(s) from {filepath}")

        return ImageGrid(np.ascontiguousarray(pixels[:, :, :3], dtype=np.uint8))

    @staticmethod
    def write_image(image: ImageGrid, filepath: str, quality: int = 90) -> None:
        """
        Encode an RGB grid to a file, the format follows the extension.

        Raises EncodeError if OIIO has no writer for the extension or the file
        cannot be written.
        """
        path = Path(filepath)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise EncodeError(f"Could not create output directory {path.parent}: {e}")

        out_spec = oiio.ImageSpec(image.width, image.height, 3, oiio.UINT8)
        if OiioAdapter.extension_of(str(path)) in JPEG_EXTENSIONS:
            out_spec.attribute("Compression", f"jpeg:{quality}")

        out = oiio.ImageOutput.create(str(path))
        if not out:
            raise EncodeError(f"Cannot create output {filepath}: {oiio.geterror()}")

        try:
            if not out.open(str(path), out_spec):
                raise EncodeError(f"Cannot open output for writing {filepath}: {out.geterror()}")
            if not out.write_image(np.ascontiguousarray(image.pixels)):
                raise EncodeError(f"write_image failed for {filepath}: {out.geterror()}")
        finally:
            out.close()

        logger.debug(f"Wrote {image.width}x{image.height} image to {filepath}")

    @staticmethod
    def probe_file(filepath: str) -> Optional[ImageSpecSnapshot]:
        """
        Read the header of a file without decoding pixels.
        Returns None if file cannot be read.
        """
        inp = oiio.ImageInput.open(str(filepath))
        if not inp:
            logger.debug(f"[OIIO] Error probing {filepath}: {oiio.geterror()}")
            return None

        spec = inp.spec()
        inp.close()

        channel_names = list(spec.channelnames) if hasattr(spec, "channelnames") else []
        if not channel_names:
            channel_names = [f"channel{i}" for i in range(spec.nchannels)]

        return ImageSpecSnapshot(
            width=spec.width,
            height=spec.height,
            nchannels=spec.nchannels,
            channelnames=channel_names,
            format=str(spec.format) if hasattr(spec, "format") else "unknown",
        )

    @staticmethod
    def supports_output(extension: str) -> bool:
        """True if OIIO has a writer for files with this extension."""
        out = oiio.ImageOutput.create(f"probe.{extension.lstrip('.')}")
        if not out:
            # Clear the pending global error so it doesn't leak into later messages
            oiio.geterror()
            return False
        return True

    @staticmethod
    def extension_of(filepath: str) -> str:
        """Lowercase extension without the dot."""
        return Path(filepath).suffix.lstrip(".").lower()

    @staticmethod
    def get_oiio_version() -> str:
        """Return OIIO version string."""
        return str(getattr(oiio, "__version__", "unknown"))
