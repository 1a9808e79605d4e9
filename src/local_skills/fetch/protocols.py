"""Interface to the git client used to fetch marketplaces."""

from pathlib import Path
from typing import Optional, Protocol


class GitClient(Protocol):
    """The git operations local-skills needs."""

    def clone(self, url: str, target_dir: Path, ref: Optional[str] = None) -> None:
        """Clone a repository.

        Args:
            url: Clone URL, ``file://`` URI or local path
            target_dir: Empty directory to clone into
            ref: Branch, tag or commit SHA (None for the default branch)

        Raises:
            CloneFailedError: If the clone fails
        """
        ...

    def head_sha(self, repo_dir: Path) -> str:
        """Return the commit SHA checked out in ``repo_dir``.

        Raises:
            ExecError: If git cannot resolve HEAD
        """
        ...
