"""Exceptions raised by pipeline components.

Only environment problems are raised. Build failures, timeouts and failed
health checks are reported as values inside results.
"""

from pathlib import Path


class AuditError(Exception):
    """Base exception for audit pipeline errors."""

    pass


class SourceTreeError(AuditError):
    """A source tree is missing or unusable."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path


class ManifestNotFoundError(SourceTreeError):
    """A source tree has no dependency manifest."""

    pass
