"""Filesystem helpers used by the stores and commands.

Failures are re-raised as :class:`FsError` so commands only deal with the
local-skills error taxonomy.
"""

import shutil
from pathlib import Path

from local_skills.core.errors import FsError


def expand_path(path: str) -> Path:
    """Expand and normalize a path, resolving ~ and relative paths.

    Args:
        path: Path string that may contain ~ or be relative

    Returns:
        Absolute Path object
    """
    return Path(path).expanduser().resolve()


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists

    Returns:
        The path that was ensured
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def remove_tree(path: Path) -> None:
    """Remove a file or directory tree. A missing path is not an error."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)
    except FileNotFoundError:
        return
    except OSError as e:
        raise FsError(f'Failed to remove "{path}": {e}') from e


def copy_tree(src: Path, dest: Path) -> None:
    """Copy a directory tree, creating ``dest``'s parents as needed.

    Raises:
        FsError: If the copy fails (including when ``dest`` already exists)
    """
    try:
        ensure_dir(dest.parent)
        shutil.copytree(src, dest)
    except OSError as e:
        raise FsError(f'Failed to copy "{src}" to "{dest}": {e}') from e
