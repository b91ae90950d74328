"""Filter Maker: apply a named chain of image filters to an RGB image."""

__version__ = "1.0.0"
