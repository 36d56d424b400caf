"""Tests for file-system corpus access."""

from __future__ import annotations

from pathlib import Path

import pytest

from mail_categorizer.corpus import FileSystemSource


@pytest.fixture
def source() -> FileSystemSource:
    return FileSystemSource()


class TestFileSystemSource:
    def test_read_returns_raw_bytes(self, source: FileSystemSource, tmp_path: Path) -> None:
        path = tmp_path / "mail.txt"
        path.write_bytes(b"free \xff money")
        assert source.read(path) == b"free \xff money"

    def test_read_missing_file_raises(self, source: FileSystemSource, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            source.read(tmp_path / "missing.txt")

    def test_read_directory_raises(self, source: FileSystemSource, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            source.read(tmp_path)

    def test_list_files_is_recursive(self, source: FileSystemSource, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / "sub" / "deeper").mkdir(parents=True)
        (tmp_path / "sub" / "b.txt").write_text("b")
        (tmp_path / "sub" / "deeper" / "c.txt").write_text("c")

        files = set(source.list_files(tmp_path))
        assert files == {
            tmp_path / "a.txt",
            tmp_path / "sub" / "b.txt",
            tmp_path / "sub" / "deeper" / "c.txt",
        }

    def test_list_files_skips_directories(self, source: FileSystemSource, tmp_path: Path) -> None:
        (tmp_path / "empty").mkdir()
        assert list(source.list_files(tmp_path)) == []

    def test_list_files_missing_root_raises(self, source: FileSystemSource, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            list(source.list_files(tmp_path / "nope"))

    def test_list_files_on_file_raises(self, source: FileSystemSource, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_text("a")
        with pytest.raises(OSError):
            list(source.list_files(path))

    def test_has_files(self, source: FileSystemSource, tmp_path: Path) -> None:
        (tmp_path / "sub").mkdir()
        assert source.has_files(tmp_path) is False
        (tmp_path / "sub" / "a.txt").write_text("a")
        assert source.has_files(tmp_path) is True

    def test_list_files_follows_symlinked_directories(
        self, source: FileSystemSource, tmp_path: Path
    ) -> None:
        real = tmp_path / "real"
        real.mkdir()
        (real / "mail.txt").write_text("free")
        (tmp_path / "ham").mkdir()
        (tmp_path / "ham" / "link").symlink_to(real, target_is_directory=True)

        assert list(source.list_files(tmp_path / "ham")) == [tmp_path / "ham" / "link" / "mail.txt"]
