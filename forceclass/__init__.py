"""Unit-capability classification for force generation."""

__version__ = "1.0.0"
