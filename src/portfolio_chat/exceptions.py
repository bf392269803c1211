from __future__ import annotations


class ConfigurationError(Exception):
    """Raised for invalid or missing configuration."""


class DocumentLoadError(Exception):
    """Raised when a single object (or the object listing) cannot be read."""


class GenerationError(Exception):
    """Raised when the hosted text-completion call fails in transport."""
