from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from qml_mode.exceptions import SourceFileError
from qml_mode.filesystem import (
    collect_file_stat,
    contains_symlink,
    enforce_file_size,
    ensure_file_unchanged,
    get_max_file_size,
    normalize_filepath,
    read_document,
    safe_read,
    write_document,
)
from qml_mode.models import Document


def test_get_max_file_size_defaults(monkeypatch):
    monkeypatch.delenv("QML_MODE_MAX_FILE_SIZE", raising=False)
    assert get_max_file_size(default=123) == 123


def test_get_max_file_size_reads_environment(monkeypatch):
    monkeypatch.setenv("QML_MODE_MAX_FILE_SIZE", "2048")
    assert get_max_file_size() == 2048


def test_get_max_file_size_rejects_non_integer(monkeypatch):
    monkeypatch.setenv("QML_MODE_MAX_FILE_SIZE", "invalid")
    with pytest.raises(ValueError, match="expected positive integer"):
        get_max_file_size()


def test_get_max_file_size_rejects_non_positive(monkeypatch):
    monkeypatch.setenv("QML_MODE_MAX_FILE_SIZE", "0")
    with pytest.raises(ValueError, match="must be a positive integer"):
        get_max_file_size()


def test_normalize_filepath_missing_file(tmp_path: Path):
    with pytest.raises(ValueError, match="does not exist"):
        normalize_filepath(str(tmp_path / "missing.qml"), tmp_path)


def test_normalize_filepath_rejects_directory(tmp_path: Path):
    folder = tmp_path / "folder.qml"
    folder.mkdir()
    with pytest.raises(ValueError, match="not a regular file"):
        normalize_filepath(str(folder), tmp_path)


def test_normalize_filepath_accepts_uppercase_suffix(tmp_path: Path):
    target = tmp_path / "Main.QML"
    target.write_text("Item {}\n", encoding="utf-8")
    assert normalize_filepath(str(target), tmp_path) == target.resolve()


def test_normalize_filepath_uses_given_extensions(tmp_path: Path):
    target = tmp_path / "main.qml"
    target.write_text("Item {}\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Supported extensions are: .qmltypes"):
        normalize_filepath(str(target), tmp_path, extensions=(".qmltypes",))


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="Symlink support is required")
def test_contains_symlink_detects_parent_link(tmp_path: Path):
    real = tmp_path / "real"
    real.mkdir()
    link = tmp_path / "link"
    try:
        os.symlink(real, link, target_is_directory=True)
    except OSError as error:  # pragma: no cover - platform dependent
        pytest.skip(f"Unable to create symlink: {error}")

    assert contains_symlink(link / "child.qml")
    assert not contains_symlink(real / "child.qml")


def test_collect_file_stat_rejects_directory(tmp_path: Path):
    with pytest.raises(IOError, match="not a regular file"):
        collect_file_stat(tmp_path)


def test_collect_file_stat_missing(tmp_path: Path):
    with pytest.raises(IOError, match="Error accessing"):
        collect_file_stat(tmp_path / "missing.qml")


def test_enforce_file_size(tmp_path: Path):
    target = tmp_path / "main.qml"
    target.write_text("Item {}\n", encoding="utf-8")
    stat_result = collect_file_stat(target)

    enforce_file_size(stat_result, 100, target)
    with pytest.raises(IOError, match="maximum allowed size of 3 bytes"):
        enforce_file_size(stat_result, 3, target)


def test_ensure_file_unchanged_detects_modification(tmp_path: Path):
    target = tmp_path / "main.qml"
    target.write_text("Item {}\n", encoding="utf-8")
    before = collect_file_stat(target)
    target.write_text("Item { width: 1 }\n", encoding="utf-8")
    after = collect_file_stat(target)

    ensure_file_unchanged(before, before, target)
    with pytest.raises(IOError, match="changed during processing"):
        ensure_file_unchanged(before, after, target)


def test_safe_read_missing_file(tmp_path: Path):
    with pytest.raises(IOError, match="Error accessing"):
        safe_read(tmp_path / "missing.qml")


def test_read_document(tmp_path: Path):
    target = tmp_path / "main.qml"
    target.write_bytes(b"Item {\r\n}\r\n")

    document = read_document(target)

    assert document.lines == ["Item {", "}"]
    assert document.newline == "\r\n"


def test_read_document_wraps_errors(tmp_path: Path):
    with pytest.raises(SourceFileError):
        read_document(tmp_path / "missing.qml")

    target = tmp_path / "bad.qml"
    target.write_bytes(b"\xff\xfe")
    with pytest.raises(SourceFileError, match="Invalid UTF-8"):
        read_document(target)


def test_write_document_replaces_content_and_keeps_mode(tmp_path: Path):
    target = tmp_path / "main.qml"
    target.write_text("Item {\n}\n", encoding="utf-8")
    target.chmod(0o600)
    initial = collect_file_stat(target)

    write_document(Document(lines=["Item {", "  x: 1", "}"], trailing_newline=True), target, initial)

    assert target.read_text(encoding="utf-8") == "Item {\n  x: 1\n}\n"
    assert stat.S_IMODE(target.stat().st_mode) == 0o600
    assert [path.name for path in tmp_path.iterdir()] == ["main.qml"]


def test_write_document_refuses_changed_file(tmp_path: Path):
    target = tmp_path / "main.qml"
    target.write_text("Item {\n}\n", encoding="utf-8")
    initial = collect_file_stat(target)
    target.write_text("Other {\n}\n", encoding="utf-8")
    os.utime(target, ns=(0, 0))

    with pytest.raises(IOError, match="changed during processing"):
        write_document(Document(lines=["x"]), target, initial)

    assert target.read_text(encoding="utf-8") == "Other {\n}\n"


def test_write_document_warns_when_ownership_is_lost(tmp_path: Path, monkeypatch):
    if not hasattr(os, "chown"):
        pytest.skip("chown is not available")
    target = tmp_path / "main.qml"
    target.write_text("Item {\n}\n", encoding="utf-8")
    initial = collect_file_stat(target)
    warnings: list[str] = []

    def deny(*args, **kwargs):
        raise PermissionError("denied")

    monkeypatch.setattr(os, "chown", deny)
    write_document(Document(lines=["Item {", "}"]), target, initial, warn=warnings.append)

    assert len(warnings) == 1
    assert "Could not preserve file ownership for main.qml" in warnings[0]
