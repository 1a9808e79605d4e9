"""Tests for scratch clone cleanup."""

import shutil

import pytest

from local_skills.core.errors import CloneFailedError, FsError, SkillNotFoundError
from local_skills.fetch.temp_clone import temp_clone


class FakeGit:
    """Git client that writes a single file instead of cloning."""

    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def clone(self, url, target_dir, ref=None):
        self.calls.append((url, target_dir, ref))
        if self.fail:
            raise CloneFailedError(f'Failed to clone "{url}": boom')
        target_dir.mkdir(parents=True)
        (target_dir / "README.md").write_text(url)

    def head_sha(self, repo_dir):
        return "0" * 40


class TestTempClone:
    """Test the temp_clone context manager."""

    def test_yields_clone_and_cleans_up(self, scratch_root):
        git = FakeGit()

        with temp_clone(git, "https://example.com/r.git", "v1", temp_root=scratch_root) as path:
            assert (path / "README.md").read_text() == "https://example.com/r.git"
            assert path.parent.parent == scratch_root

        assert list(scratch_root.iterdir()) == []
        assert git.calls[0][2] == "v1"

    def test_prefix(self, scratch_root):
        with temp_clone(FakeGit(), "u", prefix="local-skills-test-", temp_root=scratch_root) as path:
            assert path.parent.name.startswith("local-skills-test-")

    def test_cleans_up_when_block_raises(self, scratch_root):
        """Test the scratch dir is removed and the block's error propagates."""
        with pytest.raises(SkillNotFoundError):
            with temp_clone(FakeGit(), "u", temp_root=scratch_root):
                raise SkillNotFoundError("missing")

        assert list(scratch_root.iterdir()) == []

    def test_cleans_up_when_clone_fails(self, scratch_root):
        with pytest.raises(CloneFailedError):
            with temp_clone(FakeGit(fail=True), "u", temp_root=scratch_root):
                pytest.fail("block must not run when the clone fails")

        assert list(scratch_root.iterdir()) == []

    def test_cleans_up_when_block_already_removed_dir(self, scratch_root):
        """Test a scratch dir removed inside the block does not mask success."""
        with temp_clone(FakeGit(), "u", temp_root=scratch_root) as path:
            shutil.rmtree(path.parent)

        assert list(scratch_root.iterdir()) == []

    def test_unusable_temp_root(self, tmp_path):
        with pytest.raises(FsError):
            with temp_clone(FakeGit(), "u", temp_root=tmp_path / "missing" / "dir"):
                pass
