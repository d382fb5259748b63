"""EcoViz — carbon footprint calculation API."""

__version__ = "1.0.0"
