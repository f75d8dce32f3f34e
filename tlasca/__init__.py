"""Temporal laser speckle contrast analysis of numbered PNG frame sequences."""

__version__ = "0.1.0"
__all__ = ["__version__"]