"""GeoTutor - self-paced geometry learning with gated stages and spaced review."""

__version__ = "0.1.0"
