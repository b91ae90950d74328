"""
Core data types for Filter Maker.

All types use @dataclass and Enum for structured, immutable representations.
Pixel data lives in numpy arrays; no loose nested lists at the internal API
boundary.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np


class ValidationSeverity(Enum):
    """Validation issue severity."""
    ERROR = auto()
    WARNING = auto()


def clamp_channel(value: int) -> int:
    """Clamp a single channel value to [0, 255]."""
    return max(0, min(255, int(value)))


@dataclass(frozen=True)
class Pixel:
    """Immutable RGB triple, every channel in [0, 255]."""
    red: int
    green: int
    blue: int

    def __post_init__(self):
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be in [0, 255], got {value}")

    @classmethod
    def clamped(cls, red: int, green: int, blue: int) -> "Pixel":
        """Build a pixel, clamping out-of-range channels instead of failing."""
        return cls(clamp_channel(red), clamp_channel(green), clamp_channel(blue))

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.red, self.green, self.blue)


@dataclass(eq=False)
class ImageGrid:
    """
    Rectangular grid of RGB pixels.

    Backed by a uint8 array of shape (height, width, 3). Pixels are addressed
    by (x, y) with x the column and y the row.
    """
    pixels: np.ndarray

    def __post_init__(self):
        array = np.asarray(self.pixels)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(
                f"ImageGrid needs an array of shape (height, width, 3), got {array.shape}"
            )
        if array.dtype != np.uint8:
            array = np.clip(array, 0, 255).astype(np.uint8)
        self.pixels = array

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Iterable[int]]]) -> "ImageGrid":
        """Build a grid from rows of (r, g, b) triples, top row first."""
        widths = {len(row) for row in rows}
        if len(widths) > 1:
            raise ValueError("All rows of an image must have the same length")
        return cls(np.array([[tuple(p) for p in row] for row in rows], dtype=np.int32))

    @classmethod
    def filled(cls, width: int, height: int, pixel: Pixel) -> "ImageGrid":
        """Build a grid of the given size where every pixel is `pixel`."""
        array = np.empty((height, width, 3), dtype=np.uint8)
        array[:, :] = pixel.as_tuple()
        return cls(array)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) tuple."""
        return self.width, self.height

    def pixel_at(self, x: int, y: int) -> Pixel:
        """Return the pixel at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        r, g, b = self.pixels[y, x]
        return Pixel(int(r), int(g), int(b))

    def channels(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Red, green and blue planes widened to int32 for overflow-free math."""
        wide = self.pixels.astype(np.int32)
        return wide[:, :, 0], wide[:, :, 1], wide[:, :, 2]

    def copy(self) -> "ImageGrid":
        return ImageGrid(self.pixels.copy())

    def __eq__(self, other) -> bool:
        if not isinstance(other, ImageGrid):
            return NotImplemented
        return self.pixels.shape == other.pixels.shape and bool(
            np.array_equal(self.pixels, other.pixels)
        )

    def __repr__(self) -> str:
        return f"ImageGrid(width={self.width}, height={self.height})"


@dataclass
class ImageSpecSnapshot:
    """Immutable snapshot of OIIO ImageSpec fields we care about."""
    width: int
    height: int
    nchannels: int
    channelnames: list[str]
    format: str = "unknown"  # pixel format


@dataclass
class ValidationIssue:
    """A validation problem."""
    severity: ValidationSeverity
    code: str
    message: str
    context: dict = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.severity.name}] {self.code}: {self.message}"


@dataclass
class ExportSpec:
    """Complete specification of one filter run."""
    source_path: str
    filter_names: list[str] = field(default_factory=list)
    output_dir: Optional[str] = None  # None = beside the source
    extension: str = "jpg"
    quality: int = 90
