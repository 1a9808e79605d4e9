"""Tests for removing skills."""

import json
import shutil

import pytest

from local_skills.commands.add import add
from local_skills.commands.remove import remove
from local_skills.core.errors import InvalidSpecifierError, SkillNotInstalledError
from local_skills.core.specifier import parse_specifier

from conftest import requires_git

pytestmark = requires_git


@pytest.fixture
def installed(project, marketplace):
    add(project, parse_specifier(f"superpowers@{marketplace.url}:*"))
    return project


class TestRemove:
    """Test the remove command."""

    def test_removes_directory_and_entry(self, installed):
        remove(installed, "tdd")

        assert not installed.skill_path("tdd").exists()
        assert set(installed.manifest_store().load().skills) == {"debugging"}
        assert installed.skill_path("debugging").is_dir()

    def test_state_entry_is_kept(self, installed):
        """Test the state file is left alone."""
        state_before = installed.state_store().path.read_text()

        remove(installed, "tdd")

        assert installed.state_store().path.read_text() == state_before

    def test_directory_already_gone(self, installed):
        shutil.rmtree(installed.skill_path("tdd"))

        remove(installed, "tdd")

        assert "tdd" not in installed.manifest_store().load().skills

    def test_not_installed(self, installed):
        manifest_before = installed.manifest_store().path.read_text()

        with pytest.raises(SkillNotInstalledError):
            remove(installed, "nope")

        assert installed.manifest_store().path.read_text() == manifest_before

    def test_manifest_key_outside_skills_dir(self, installed):
        """Test a hand-edited manifest key cannot make remove delete outside the cache."""
        outside = installed.base_dir / "secret"
        outside.mkdir()
        manifest_path = installed.manifest_store().path
        data = json.loads(manifest_path.read_text())
        data["skills"]["../secret"] = data["skills"]["tdd"]
        manifest_path.write_text(json.dumps(data))

        with pytest.raises(InvalidSpecifierError):
            remove(installed, "../secret")

        assert outside.is_dir()
        assert "../secret" in json.loads(manifest_path.read_text())["skills"]

    def test_reinstall_after_remove(self, installed, marketplace):
        """Test a removed skill can be added again."""
        remove(installed, "tdd")

        add(installed, parse_specifier(f"superpowers@{marketplace.url}:tdd"))

        assert installed.skill_path("tdd").is_dir()
        assert "tdd" in installed.manifest_store().load().skills
