"""Scratch clones that are always cleaned up."""

import logging
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from local_skills.core.errors import FsError
from local_skills.fetch.protocols import GitClient

logger = logging.getLogger(__name__)


@contextmanager
def temp_clone(
    git: GitClient,
    url: str,
    ref: Optional[str] = None,
    *,
    prefix: str = "local-skills-clone-",
    temp_root: Optional[Path] = None,
) -> Iterator[Path]:
    """Clone ``url`` into a fresh scratch directory and yield its path.

    The directory is removed when the block exits, whether it succeeds or
    raises. A failure to remove it is logged and never replaces the error
    raised inside the block.

    Args:
        git: Git client used for the clone
        url: Repository to clone
        ref: Branch, tag or SHA (None for the default branch)
        prefix: Name prefix of the scratch directory
        temp_root: Parent directory (defaults to the system temp dir)

    Raises:
        FsError: If the scratch directory cannot be created
        CloneFailedError: If the clone fails
    """
    try:
        scratch = Path(tempfile.mkdtemp(prefix=prefix, dir=temp_root))
    except OSError as e:
        raise FsError(f"Failed to create temporary directory: {e}") from e

    clone_dir = scratch / "repo"
    try:
        git.clone(url, clone_dir, ref)
        yield clone_dir
    finally:
        try:
            shutil.rmtree(scratch)
        except OSError as e:
            logger.warning("Could not remove temporary clone %s: %s", scratch, e)
