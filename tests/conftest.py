"""Shared pytest fixtures for local-skills tests."""

import json
import shutil
import subprocess
from pathlib import Path

import pytest

from local_skills.commands.context import ProjectContext
from local_skills.config.schema import SettingsConfig


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def run_git(cwd: Path, *args: str) -> str:
    """Run git in ``cwd`` with a throwaway identity and return stdout."""
    result = subprocess.run(
        [
            "git",
            "-c", "user.name=Test",
            "-c", "user.email=test@example.com",
            "-c", "commit.gpgsign=false",
            "-c", "tag.gpgsign=false",
            *args,
        ],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


TDD_SKILL_MD = """---
name: tdd
description: Test-driven development workflow
---

# TDD

Write the test first.
"""

DEBUGGING_SKILL_MD = """---
name: debugging
description: Systematic debugging
---

# Debugging
"""


class GitRepo:
    """A throwaway git repository used as a marketplace or plugin source."""

    def __init__(self, path: Path):
        self.path = path
        path.mkdir(parents=True)
        run_git(path, "init", "--quiet")

    @property
    def url(self) -> str:
        return str(self.path)

    def write(self, relative: str, content: str) -> None:
        target = self.path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)

    def delete(self, relative: str) -> None:
        target = self.path / relative
        if target.is_dir():
            shutil.rmtree(target)
        else:
            target.unlink()

    def write_marketplace(self, plugins: list, metadata: dict | None = None) -> None:
        document = {"plugins": plugins}
        if metadata is not None:
            document["metadata"] = metadata
        self.write(".claude-plugin/marketplace.json", json.dumps(document, indent=2))

    def commit(self, message: str = "update") -> str:
        run_git(self.path, "add", "-A")
        run_git(self.path, "commit", "--quiet", "-m", message)
        return self.head()

    def head(self) -> str:
        return run_git(self.path, "rev-parse", "HEAD")


@pytest.fixture
def marketplace(tmp_path):
    """A marketplace repo with a 'superpowers' plugin holding 'tdd' and 'debugging'.

    It also lists 'empty', a plugin without a skills directory.
    """
    repo = GitRepo(tmp_path / "marketplace")
    repo.write_marketplace(
        [
            {"name": "superpowers", "source": "./plugins/superpowers"},
            {"name": "empty", "source": "./plugins/empty"},
        ]
    )
    repo.write("plugins/superpowers/skills/tdd/SKILL.md", TDD_SKILL_MD)
    repo.write("plugins/superpowers/skills/tdd/scripts/check.sh", "#!/bin/sh\necho ok\n")
    repo.write("plugins/superpowers/skills/debugging/SKILL.md", DEBUGGING_SKILL_MD)
    repo.write("plugins/empty/README.md", "Nothing here yet\n")
    repo.commit("initial")
    return repo


@pytest.fixture
def scratch_root(tmp_path):
    """Parent directory for scratch clones, so tests can check cleanup."""
    root = tmp_path / "scratch"
    root.mkdir()
    return root


@pytest.fixture
def project(tmp_path, scratch_root):
    """A ProjectContext for an empty project using the real git client."""
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    return ProjectContext(
        project_dir=project_dir,
        settings=SettingsConfig(temp_dir=str(scratch_root)),
    )


@pytest.fixture
def skill_tree(tmp_path):
    """A small skill directory for hashing tests."""
    skill_dir = tmp_path / "skill"
    (skill_dir / "scripts").mkdir(parents=True)
    (skill_dir / "SKILL.md").write_text(TDD_SKILL_MD)
    (skill_dir / "scripts" / "check.sh").write_text("#!/bin/sh\necho ok\n")
    return skill_dir
