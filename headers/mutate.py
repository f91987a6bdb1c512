"""Strip the comment prefix from a template's first line."""
from __future__ import annotations

import logging

from .classify import COMMENT_PREFIX, RAW_MARKER, CandidateFile, MarkerState

LOGGER = logging.getLogger("xcheader.mutate")

_RAW = RAW_MARKER.encode("utf-8")
_PREFIX_LEN = len(COMMENT_PREFIX.encode("utf-8"))


def strip_marker_prefix(content: bytes) -> bytes:
    """Return *content* with ``//`` removed from the first line when it holds the raw marker."""

    if not content.startswith(_RAW):
        return content
    return content[_PREFIX_LEN:]


def apply_mutation(candidate: CandidateFile) -> bool:
    """Rewrite *candidate* in place; return True only when bytes changed.

    Callers must have backed the file up first.
    """
    if candidate.state is MarkerState.NONE:
        raise ValueError(f"{candidate.path} carries no header marker")
    if candidate.state is MarkerState.MODIFIED:
        LOGGER.info("Processed (already correct format): %s", candidate.path)
        return False
    original = candidate.path.read_bytes()
    updated = strip_marker_prefix(original)
    if updated == original:
        LOGGER.info("No modification needed: %s", candidate.path)
        return False
    candidate.path.write_bytes(updated)
    LOGGER.info("Modified (removed // prefix): %s", candidate.path)
    return True


__all__ = ["apply_mutation", "strip_marker_prefix"]
