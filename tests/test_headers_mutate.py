from pathlib import Path

import pytest

from headers.classify import CandidateFile, MarkerState, classify_file
from headers.mutate import apply_mutation, strip_marker_prefix


def test_strip_marker_prefix_only_touches_first_line():
    content = b"//___FILEHEADER___\r\n//___FILEHEADER___\r\nlet x = 1\r\n"
    assert strip_marker_prefix(content) == b"___FILEHEADER___\r\n//___FILEHEADER___\r\nlet x = 1\r\n"
    assert strip_marker_prefix(b"import UIKit\n") == b"import UIKit\n"


def test_apply_mutation_then_reclassify_is_modified_and_idempotent(tmp_path):
    path = tmp_path / "File.swift"
    body = b"\nimport Foundation\n\n// keep //___FILEHEADER___ here\n"
    path.write_bytes(b"//___FILEHEADER___" + body)

    changed = apply_mutation(CandidateFile(path=path, state=MarkerState.UNMODIFIED))

    assert changed is True
    assert path.read_bytes() == b"___FILEHEADER___" + body
    state = classify_file(path)
    assert state is MarkerState.MODIFIED

    assert apply_mutation(CandidateFile(path=path, state=state)) is False
    assert path.read_bytes() == b"___FILEHEADER___" + body


def test_stale_classification_does_not_rewrite(tmp_path):
    path = tmp_path / "File.swift"
    path.write_bytes(b"___FILEHEADER___\nbody\n")
    before = path.stat().st_mtime_ns

    assert apply_mutation(CandidateFile(path=path, state=MarkerState.UNMODIFIED)) is False
    assert path.read_bytes() == b"___FILEHEADER___\nbody\n"
    assert path.stat().st_mtime_ns == before


def test_apply_mutation_rejects_unmarked_files(tmp_path):
    path = tmp_path / "File.swift"
    path.write_bytes(b"import UIKit\n")
    with pytest.raises(ValueError):
        apply_mutation(CandidateFile(path=Path(path), state=MarkerState.NONE))
