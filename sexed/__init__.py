"""Campus sexual-health education backend."""

__version__ = "1.0.0"
