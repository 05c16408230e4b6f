"""Tests for the SHA-256 hashing primitives."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

import pytest

from stackprint.fingerprint.hashing import (
    hash_content,
    hash_directory_tree,
    hash_file,
    hash_multiple,
)
from tests.conftest import write_tree


class TestHashContent:
    def test_matches_hashlib(self) -> None:
        assert hash_content(b"abc") == hashlib.sha256(b"abc").hexdigest()

    def test_str_is_utf8_encoded(self) -> None:
        assert hash_content("héllo") == hash_content("héllo".encode())

    def test_digest_is_64_hex_chars(self) -> None:
        digest = hash_content("")
        assert len(digest) == 64
        assert all(c in "0123456789abcdef" for c in digest)


class TestHashMultiple:
    def test_joins_with_separator(self) -> None:
        assert hash_multiple(["a", "b"]) == hash_content("a::b")

    def test_order_matters(self) -> None:
        assert hash_multiple(["a", "b"]) != hash_multiple(["b", "a"])


class TestHashFile:
    def test_hashes_file_bytes(self, tmp_path: Path) -> None:
        path = tmp_path / "f.bin"
        path.write_bytes(b"\x00\x01payload")
        assert hash_file(path) == hash_content(b"\x00\x01payload")

    def test_missing_file_returns_none_and_warns(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="stackprint.fingerprint.hashing"):
            assert hash_file(tmp_path / "absent") is None
        assert "hash_file_skipped" in caplog.text


class TestHashDirectoryTree:
    def test_deterministic(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"src/a.py": "x", "README.md": "y"})
        assert hash_directory_tree(tmp_path) == hash_directory_tree(tmp_path)

    def test_ignores_file_contents(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"src/a.py": "x"})
        before = hash_directory_tree(tmp_path)
        (tmp_path / "src" / "a.py").write_text("changed")
        assert hash_directory_tree(tmp_path) == before

    def test_new_directory_changes_hash(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"src/a.py": "x"})
        before = hash_directory_tree(tmp_path)
        (tmp_path / "docs").mkdir()
        assert hash_directory_tree(tmp_path) != before

    def test_removed_file_changes_hash(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"src/a.py": "x", "src/b.py": "y"})
        before = hash_directory_tree(tmp_path)
        (tmp_path / "src" / "b.py").unlink()
        assert hash_directory_tree(tmp_path) != before

    def test_file_and_directory_of_same_name_differ(
        self, tmp_path: Path
    ) -> None:
        a = tmp_path / "a"
        b = tmp_path / "b"
        write_tree(a, {"thing": "x"})
        write_tree(b, {"thing/": ""})
        assert hash_directory_tree(a) != hash_directory_tree(b)

    def test_ignored_directories_skipped(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"src/a.py": "x"})
        before = hash_directory_tree(tmp_path)
        write_tree(tmp_path, {"node_modules/pkg/index.js": "", ".git/HEAD": ""})
        assert hash_directory_tree(tmp_path) == before

    def test_custom_ignore_list(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"src/a.py": "x"})
        before = hash_directory_tree(tmp_path, ignored=("generated",))
        write_tree(tmp_path, {"generated/out.py": ""})
        assert hash_directory_tree(tmp_path, ignored=("generated",)) == before

    def test_depth_limit(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"a/b/c/deep.txt": ""})
        shallow = hash_directory_tree(tmp_path, max_depth=2)
        (tmp_path / "a" / "b" / "c" / "deeper.txt").write_text("")
        assert hash_directory_tree(tmp_path, max_depth=2) == shallow
        assert hash_directory_tree(tmp_path) != shallow

    def test_empty_directory_is_stable(self, tmp_path: Path) -> None:
        assert hash_directory_tree(tmp_path) == hash_content("")
