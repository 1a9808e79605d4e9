"""Tests for skill content hashing."""

import shutil

import pytest

from local_skills.core.content_hash import compute_content_hash, list_relative_files
from local_skills.core.errors import FsError


class TestListRelativeFiles:
    """Test file enumeration."""

    def test_sorted_posix_paths(self, skill_tree):
        """Test nested files are listed relative to the root, sorted."""
        assert list_relative_files(skill_tree) == ["SKILL.md", "scripts/check.sh"]

    def test_directories_are_not_listed(self, tmp_path):
        """Test empty directories contribute nothing."""
        (tmp_path / "empty").mkdir()
        (tmp_path / "a.txt").write_text("a")

        assert list_relative_files(tmp_path) == ["a.txt"]


class TestComputeContentHash:
    """Test the directory fingerprint."""

    def test_is_hex_sha256(self, skill_tree):
        digest = compute_content_hash(skill_tree)

        assert len(digest) == 64
        assert all(c in "0123456789abcdef" for c in digest)

    def test_idempotent(self, skill_tree):
        """Test hashing twice without changes gives the same digest."""
        assert compute_content_hash(skill_tree) == compute_content_hash(skill_tree)

    def test_copy_hashes_equal(self, skill_tree, tmp_path):
        """Test a copied tree has the same digest as the original."""
        copy = tmp_path / "copy"
        shutil.copytree(skill_tree, copy)

        assert compute_content_hash(copy) == compute_content_hash(skill_tree)

    def test_creation_order_does_not_matter(self, tmp_path):
        """Test the digest is independent of the order files were written."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()

        for name in ["a.md", "b.md", "c.md"]:
            (first / name).write_text(name)
        for name in ["c.md", "a.md", "b.md"]:
            (second / name).write_text(name)

        assert compute_content_hash(first) == compute_content_hash(second)

    def test_content_change(self, skill_tree):
        """Test editing a file changes the digest."""
        before = compute_content_hash(skill_tree)
        (skill_tree / "SKILL.md").write_text("edited\n")

        assert compute_content_hash(skill_tree) != before

    def test_added_file(self, skill_tree):
        before = compute_content_hash(skill_tree)
        (skill_tree / "notes.md").write_text("")

        assert compute_content_hash(skill_tree) != before

    def test_removed_file(self, skill_tree):
        before = compute_content_hash(skill_tree)
        (skill_tree / "scripts" / "check.sh").unlink()

        assert compute_content_hash(skill_tree) != before

    def test_renamed_file(self, skill_tree):
        """Test paths are part of the digest, not just contents."""
        before = compute_content_hash(skill_tree)
        (skill_tree / "scripts" / "check.sh").rename(skill_tree / "scripts" / "run.sh")

        assert compute_content_hash(skill_tree) != before

    def test_path_and_content_boundary(self, tmp_path):
        """Test moving bytes between a name and its content changes the digest."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        (first / "ab").write_text("c")
        (second / "a").write_text("bc")

        assert compute_content_hash(first) != compute_content_hash(second)

    def test_empty_directory(self, tmp_path):
        """Test an empty directory hashes to the SHA-256 of nothing."""
        empty = tmp_path / "empty"
        empty.mkdir()

        assert compute_content_hash(empty) == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FsError):
            compute_content_hash(tmp_path / "missing")
