"""void-type: a modular 5x5 typeface engine with raster and SVG output."""

__version__ = "0.1.0"
