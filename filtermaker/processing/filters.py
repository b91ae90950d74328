"""
Filter definitions for the processing pipeline.

Each filter is a fixed, parameterless transform made of two stages: a pixel
transform that maps one RGB triple to another, and an image transform that
sees the whole grid once every pixel has been mapped. Pixel transforms are
written with numpy element-wise operations, so the same function maps a
single triple of ints or whole channel planes of a grid.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from ..core import ImageGrid, Pixel


Channels = Tuple[np.ndarray, np.ndarray, np.ndarray]
PixelTransform = Callable[[np.ndarray, np.ndarray, np.ndarray], Channels]
ImageTransform = Callable[[ImageGrid], ImageGrid]


class FilterKind(Enum):
    """The closed set of filters, in listing order."""
    COLOR = auto()
    LIGHT = auto()
    INVERT = auto()
    ANTIALIASING = auto()
    GRAYSCALE = auto()
    RED = auto()
    REDLAYER = auto()
    NOTHING = auto()


# ============================================================================
# PIXEL TRANSFORMS
# ============================================================================

def _unchanged_pixel(r, g, b):
    return r, g, b


def _invert(r, g, b):
    return 255 - r, 255 - g, 255 - b


def _grayscale(r, g, b):
    lightest = np.maximum(np.maximum(r, g), b)
    return lightest, lightest, lightest


def _red_layer(r, g, b):
    return r, r, r


def _red(r, g, b):
    """Keep reddish pixels, turn everything else gray."""
    keep = (r > g) & (r > b) & (np.abs(g - b) < 32)
    gray, _, _ = _grayscale(r, g, b)
    return np.where(keep, r, gray), np.where(keep, g, gray), np.where(keep, b, gray)


def _reflect(first, second, third):
    """Mirror `first` around the midpoint of the triple's extremes."""
    high = np.maximum(np.maximum(first, second), third)
    low = np.minimum(np.minimum(first, second), third)
    median = (high + low) // 2
    return np.clip(2 * median - first, 0, 255)


def _color(r, g, b):
    return _reflect(r, g, b), _reflect(g, b, r), _reflect(b, r, g)


def _light(r, g, b):
    return _invert(*_color(r, g, b))


# ============================================================================
# IMAGE TRANSFORMS
# ============================================================================

def _unchanged_image(image: ImageGrid) -> ImageGrid:
    return image


def _cross_average(image: ImageGrid) -> ImageGrid:
    """
    Average every interior pixel with its four direct neighbours.

    Border pixels are copied as they are. Division truncates, so a uniform
    neighbourhood keeps its exact value.
    """
    if image.width < 3 or image.height < 3:
        return image.copy()

    src = image.pixels.astype(np.int32)
    out = src.copy()
    out[1:-1, 1:-1] = (
        src[1:-1, 1:-1]
        + src[1:-1, :-2]
        + src[1:-1, 2:]
        + src[:-2, 1:-1]
        + src[2:, 1:-1]
    ) // 5
    return ImageGrid(out.astype(np.uint8))


# ============================================================================
# FILTER DEFINITION
# ============================================================================

@dataclass(frozen=True)
class ProcessingFilter:
    """A named filter: pixel stage, image stage and output-name suffix."""
    kind: FilterKind
    name: str
    category: str
    suffix: str
    pixel_transform: PixelTransform
    image_transform: ImageTransform = _unchanged_image
    description: str = ""

    @property
    def filter_id(self) -> str:
        """Lowercase name used on the command line and in recipes."""
        return self.kind.name.lower()

    def map_pixel(self, pixel: Pixel) -> Pixel:
        """Run the pixel stage on a single pixel."""
        r, g, b = self.pixel_transform(pixel.red, pixel.green, pixel.blue)
        return Pixel.clamped(int(r), int(g), int(b))

    def apply(self, image: ImageGrid) -> ImageGrid:
        """
        Apply the filter to an image and return the resulting image.

        The pixel stage runs over every pixel first, then the image stage
        runs once over the mapped grid. The input grid is left untouched.
        """
        r, g, b = image.channels()
        mapped = np.stack(np.broadcast_arrays(*self.pixel_transform(r, g, b)), axis=-1)
        stage_one = ImageGrid(np.clip(mapped, 0, 255).astype(np.uint8))
        return self.image_transform(stage_one)

    def __repr__(self) -> str:
        return f"ProcessingFilter(filter_id='{self.filter_id}')"


# Registry of all available filters
FILTER_REGISTRY: Dict[FilterKind, ProcessingFilter] = {
    FilterKind.COLOR: ProcessingFilter(
        kind=FilterKind.COLOR,
        name="Color",
        category="Color Transforms",
        suffix="_color",
        pixel_transform=_color,
        description="Inverts the hue without changing the light. Light red becomes light cyan.",
    ),
    FilterKind.LIGHT: ProcessingFilter(
        kind=FilterKind.LIGHT,
        name="Light",
        category="Color Transforms",
        suffix="_light",
        pixel_transform=_light,
        description="Inverts the light without changing the hue. Light red becomes dark red.",
    ),
    FilterKind.INVERT: ProcessingFilter(
        kind=FilterKind.INVERT,
        name="Invert",
        category="Color Transforms",
        suffix="_invert",
        pixel_transform=_invert,
        description="Inverts the colors. Light red becomes dark cyan.",
    ),
    FilterKind.ANTIALIASING: ProcessingFilter(
        kind=FilterKind.ANTIALIASING,
        name="Antialiasing",
        category="Filtering & Repair",
        suffix="_antialiasing",
        pixel_transform=_unchanged_pixel,
        image_transform=_cross_average,
        description="Smooths the image so that sharp pixels fade into their neighbours.",
    ),
    FilterKind.GRAYSCALE: ProcessingFilter(
        kind=FilterKind.GRAYSCALE,
        name="Grayscale",
        category="Channel Operations",
        suffix="_grayscale",
        pixel_transform=_grayscale,
        description="Turns every color into the gray of its brightest channel.",
    ),
    FilterKind.RED: ProcessingFilter(
        kind=FilterKind.RED,
        name="Red",
        category="Channel Operations",
        suffix="_red",
        pixel_transform=_red,
        description="Grayscale, except pixels whose red clearly dominates similar green and blue.",
    ),
    FilterKind.REDLAYER: ProcessingFilter(
        kind=FilterKind.REDLAYER,
        name="Red Layer",
        category="Channel Operations",
        suffix="_redlayer",
        pixel_transform=_red_layer,
        description="Gray image of the red channel. No red is black, full red is white.",
    ),
    FilterKind.NOTHING: ProcessingFilter(
        kind=FilterKind.NOTHING,
        name="Nothing",
        category="Filtering & Repair",
        suffix="",
        pixel_transform=_unchanged_pixel,
        description="Returns the source image.",
    ),
}

IDENTITY_FILTER = FILTER_REGISTRY[FilterKind.NOTHING]


@dataclass(frozen=True)
class FilterResolution:
    """Outcome of looking up a filter by name."""
    token: str
    filter: ProcessingFilter
    warning: Optional[str] = None

    @property
    def recognized(self) -> bool:
        return self.warning is None


def available_filter_names() -> List[str]:
    """Lowercase ids of every filter, in listing order."""
    return [f.filter_id for f in FILTER_REGISTRY.values()]


def create_filter(name: str) -> Optional[ProcessingFilter]:
    """Look up a filter by case-insensitive name. Returns None if not found."""
    try:
        kind = FilterKind[name.strip().upper()]
    except KeyError:
        return None
    return FILTER_REGISTRY[kind]


def resolve_filter(name: str) -> FilterResolution:
    """
    Resolve a filter name, falling back to the no-op filter.

    An unknown name never fails: it yields NOTHING and a warning that lists
    the valid names, so processing can carry on.
    """
    found = create_filter(name)
    if found is not None:
        return FilterResolution(token=name, filter=found)

    warning = (
        f"Unknown filter: {name}, the list of filters are: "
        f"{', '.join(available_filter_names())}."
    )
    return FilterResolution(token=name, filter=IDENTITY_FILTER, warning=warning)


def get_filters_by_category(category: str) -> List[ProcessingFilter]:
    """Get all filters in a specific category."""
    return [f for f in FILTER_REGISTRY.values() if f.category == category]


def get_all_categories() -> List[str]:
    """Get all filter categories in order."""
    categories = []
    for f in FILTER_REGISTRY.values():
        if f.category not in categories:
            categories.append(f.category)

    preferred_order = [
        "Color Transforms",
        "Channel Operations",
        "Filtering & Repair",
    ]

    # Return in preferred order, then any others
    result = [cat for cat in preferred_order if cat in categories]
    result.extend(cat for cat in categories if cat not in result)
    return result
