"""Error hierarchy shared by the header customizer."""
from __future__ import annotations


class CustomizerError(RuntimeError):
    """Base exception for every handled failure; the CLI maps it to exit code 1."""


class EnvironmentUnsupported(CustomizerError):
    """Raised when the host OS or a required external tool is missing."""


class PathNotFound(CustomizerError):
    """Raised when the IDE directory or a requested backup does not exist."""


class PermissionDenied(CustomizerError):
    """Raised when the target or backup location cannot be written."""


class NoCandidateFiles(CustomizerError):
    """Raised when classification finds nothing to act on."""


class PartialIOFailure(CustomizerError):
    """Raised when individual files failed inside an otherwise completed batch."""

    def __init__(self, message: str, failures=None) -> None:
        super().__init__(message)
        self.failures = list(failures or [])


__all__ = [
    "CustomizerError",
    "EnvironmentUnsupported",
    "NoCandidateFiles",
    "PartialIOFailure",
    "PathNotFound",
    "PermissionDenied",
]
