from __future__ import annotations

from pathlib import Path

import pytest

import create_project.directory as directory
from create_project.services.errors import IoFailedError


def test_classify_absent_and_empty(tmp_path: Path) -> None:
    assert directory.classify(tmp_path / "missing") is directory.DirectoryState.ABSENT
    assert directory.classify(tmp_path) is directory.DirectoryState.PRESENT_EMPTY


def test_classify_ignorable_only(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    (tmp_path / ".editorconfig").write_text("root = true\n", encoding="utf-8")

    assert directory.classify(tmp_path) is directory.DirectoryState.PRESENT_IGNORABLE_ONLY
    assert directory.can_skip_emptying(tmp_path) is True


def test_classify_with_content(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    (tmp_path / "README.md").write_text("hi\n", encoding="utf-8")

    assert directory.classify(tmp_path) is directory.DirectoryState.PRESENT_WITH_CONTENT
    assert directory.can_skip_emptying(tmp_path) is False


def test_classify_file_counts_as_content(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")

    assert directory.classify(target) is directory.DirectoryState.PRESENT_WITH_CONTENT


def test_empty_dir_keeps_ignorable_entries(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    (tmp_path / ".editorconfig").write_text("root = true\n", encoding="utf-8")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.ts").write_text("", encoding="utf-8")
    (tmp_path / "package.json").write_text("{}", encoding="utf-8")

    directory.empty_dir(tmp_path)

    assert sorted(entry.name for entry in tmp_path.iterdir()) == [".editorconfig", ".git"]
    assert (tmp_path / ".git" / "HEAD").exists()


def test_empty_dir_missing_path_is_noop(tmp_path: Path) -> None:
    directory.empty_dir(tmp_path / "missing")

    assert not (tmp_path / "missing").exists()


def test_empty_dir_wraps_os_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "file.txt").write_text("x", encoding="utf-8")

    def boom(entry: Path) -> None:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(directory, "_remove_entry", boom)

    with pytest.raises(IoFailedError) as exc_info:
        directory.empty_dir(tmp_path)

    assert exc_info.value.code == "io_failed"
    assert "Permission denied" in exc_info.value.message


def test_empty_dir_snapshots_entries_before_removing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    for index in range(20):
        (tmp_path / f"file-{index}.txt").write_text("x", encoding="utf-8")
        (tmp_path / f"dir-{index}").mkdir()
    (tmp_path / ".git").mkdir()
    removed: list[str] = []
    remove_entry = directory._remove_entry

    def record(entry: Path) -> None:
        removed.append(entry.name)
        remove_entry(entry)
        (tmp_path / f"late-{len(removed)}").write_text("", encoding="utf-8")

    monkeypatch.setattr(directory, "_remove_entry", record)

    directory.empty_dir(tmp_path)

    assert len(removed) == len(set(removed)) == 40
    assert not any(name.startswith("late-") for name in removed)
    remaining = {entry.name for entry in tmp_path.iterdir()}
    assert ".git" in remaining
    assert not any(name.startswith(("file-", "dir-")) for name in remaining)


def test_prepare_target_dir_creates_missing(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "app"

    state = directory.prepare_target_dir(target, should_overwrite=False)

    assert state is directory.DirectoryState.ABSENT
    assert target.is_dir()


def test_prepare_target_dir_empties_when_overwriting(tmp_path: Path) -> None:
    (tmp_path / "old.txt").write_text("x", encoding="utf-8")

    state = directory.prepare_target_dir(tmp_path, should_overwrite=True)

    assert state is directory.DirectoryState.PRESENT_WITH_CONTENT
    assert list(tmp_path.iterdir()) == []


def test_prepare_target_dir_leaves_content_without_overwrite(tmp_path: Path) -> None:
    (tmp_path / "old.txt").write_text("x", encoding="utf-8")

    directory.prepare_target_dir(tmp_path, should_overwrite=False)

    assert (tmp_path / "old.txt").exists()


def test_prepare_target_dir_skips_emptying_ignorable_only(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / ".git").mkdir()
    calls: list[Path] = []
    monkeypatch.setattr(directory, "empty_dir", calls.append)

    state = directory.prepare_target_dir(tmp_path, should_overwrite=True)

    assert state is directory.DirectoryState.PRESENT_IGNORABLE_ONLY
    assert calls == []


def test_prepare_target_dir_rejects_file_target(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")

    with pytest.raises(IoFailedError):
        directory.prepare_target_dir(target, should_overwrite=True)
