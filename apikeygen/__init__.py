"""apikeygen - provision API keys for the backend service."""

from apikeygen.version import __version__

__all__ = ["__version__"]
