"""Git client backed by the ``git`` executable."""

import logging
import re
import subprocess
from pathlib import Path
from typing import Optional

from local_skills.core.errors import CloneFailedError, ExecError

logger = logging.getLogger(__name__)

_SHA_PATTERN = re.compile(r"^[0-9a-f]{40}$")


def is_sha_ref(ref: str) -> bool:
    """Return True if ``ref`` is a full, lowercase 40 character commit SHA."""
    return bool(_SHA_PATTERN.match(ref))


class SubprocessGit:
    """Runs git as an external process.

    Branches and tags are cloned shallowly. A full commit SHA cannot be passed
    to ``git clone --branch``, so those are cloned in full and checked out.
    """

    def __init__(self, executable: str = "git"):
        """Initialize the client.

        Args:
            executable: Name or path of the git executable
        """
        self.executable = executable

    def clone(self, url: str, target_dir: Path, ref: Optional[str] = None) -> None:
        """Clone ``url`` into ``target_dir`` at ``ref``.

        Raises:
            CloneFailedError: If git fails or is not installed
        """
        pinned = ref is not None and is_sha_ref(ref)

        args = ["clone", "--quiet"]
        if not pinned:
            args += ["--depth", "1"]
            if ref is not None:
                args += ["--branch", ref]
        args += [url, str(target_dir)]

        logger.debug("Cloning %s (ref=%s) into %s", url, ref or "default", target_dir)
        try:
            self._run(args)
            if pinned:
                self._run(["checkout", "--quiet", "--detach", ref], cwd=target_dir)
        except ExecError as e:
            raise CloneFailedError(f'Failed to clone "{url}": {e.message}') from e

    def head_sha(self, repo_dir: Path) -> str:
        """Return the SHA of HEAD in ``repo_dir``."""
        return self._run(["rev-parse", "HEAD"], cwd=repo_dir).strip()

    def _run(self, args: list[str], cwd: Optional[Path] = None) -> str:
        command = [self.executable, *args]
        try:
            result = subprocess.run(
                command,
                cwd=str(cwd) if cwd is not None else None,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise ExecError(f'Command "{self.executable}" failed: {e}') from e

        if result.returncode != 0:
            detail = result.stderr.strip() or result.stdout.strip() or f"exit code {result.returncode}"
            raise ExecError(f'Command "{" ".join(command)}" failed: {detail}')

        return result.stdout
