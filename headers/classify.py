"""Classify template files by the marker on their first line."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional

LOGGER = logging.getLogger("xcheader.classify")

MARKER_TOKEN = "___FILEHEADER___"
COMMENT_PREFIX = "//"
RAW_MARKER = COMMENT_PREFIX + MARKER_TOKEN
DEFAULT_EXTENSION = ".swift"


class MarkerState(str, Enum):
    UNMODIFIED = "unmodified"
    MODIFIED = "modified"
    NONE = "none"


@dataclass(slots=True)
class CandidateFile:
    path: Path
    state: MarkerState


@dataclass(slots=True)
class StateCounts:
    unmodified: int = 0
    modified: int = 0

    @property
    def total(self) -> int:
        return self.unmodified + self.modified


def classify_first_line(line: str) -> MarkerState:
    if line.startswith(RAW_MARKER):
        return MarkerState.UNMODIFIED
    if line.startswith(MARKER_TOKEN):
        return MarkerState.MODIFIED
    return MarkerState.NONE


def read_first_line(path: Path) -> str:
    """Return the first line of *path* without its line terminator.

    Raises ``OSError`` or ``UnicodeDecodeError``; callers decide whether that is fatal.
    """
    with path.open("rb") as handle:
        raw = handle.readline()
    return raw.decode("utf-8").rstrip("\r\n")


def iter_template_files(root: Path, extension: str = DEFAULT_EXTENSION) -> Iterator[Path]:
    for item in sorted(root.rglob(f"*{extension}")):
        if item.is_file():
            yield item


def classify_file(path: Path) -> Optional[MarkerState]:
    try:
        return classify_first_line(read_first_line(path))
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.warning("Skipping unreadable file %s: %s", path, exc)
        return None


def classify(root: Path, *, extension: str = DEFAULT_EXTENSION) -> List[CandidateFile]:
    """Return every file under *root* that carries either marker form."""

    root = Path(root).resolve()
    candidates: List[CandidateFile] = []
    for path in iter_template_files(root, extension):
        state = classify_file(path)
        if state is None or state is MarkerState.NONE:
            continue
        candidates.append(CandidateFile(path=path, state=state))
    LOGGER.debug("Classified %d candidate files under %s", len(candidates), root)
    return candidates


def count_states(candidates: List[CandidateFile]) -> StateCounts:
    counts = StateCounts()
    for candidate in candidates:
        if candidate.state is MarkerState.UNMODIFIED:
            counts.unmodified += 1
        elif candidate.state is MarkerState.MODIFIED:
            counts.modified += 1
    return counts


def detect_state(root: Path, *, extension: str = DEFAULT_EXTENSION) -> StateCounts:
    return count_states(classify(root, extension=extension))


__all__ = [
    "COMMENT_PREFIX",
    "CandidateFile",
    "MARKER_TOKEN",
    "MarkerState",
    "RAW_MARKER",
    "StateCounts",
    "classify",
    "classify_file",
    "classify_first_line",
    "count_states",
    "detect_state",
    "iter_template_files",
    "read_first_line",
]
