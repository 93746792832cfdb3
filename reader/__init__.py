"""Scripture Reader: REST backend and API client for reading texts with per-user progress."""

__version__ = "0.1.0"
