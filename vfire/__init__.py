"""V-FIRE Inspect: fire-safety certification workflow portal."""

__version__ = "1.0.0"
