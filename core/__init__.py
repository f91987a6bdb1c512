"""Shared plumbing for the Xcode template header customizer."""
from __future__ import annotations

__version__ = "2.0.0"

__all__ = ["__version__"]
