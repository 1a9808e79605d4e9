"""Content fingerprint of a skill directory.

The digest covers every regular file below the directory: its path relative to
the root and its raw bytes. Paths are sorted before hashing so the result does
not depend on filesystem enumeration order.
"""

import hashlib
from pathlib import Path

from local_skills.core.errors import FsError


def list_relative_files(directory: Path) -> list[str]:
    """Return sorted POSIX paths of all regular files below ``directory``."""
    root = Path(directory)
    return sorted(path.relative_to(root).as_posix() for path in root.rglob("*") if path.is_file())


def compute_content_hash(directory: Path) -> str:
    """Compute the SHA-256 fingerprint of a directory's files.

    Args:
        directory: Directory to fingerprint

    Returns:
        Hex-encoded digest

    Raises:
        FsError: If the directory is missing or a file cannot be read
    """
    root = Path(directory)
    if not root.is_dir():
        raise FsError(f'Cannot hash "{root}": not a directory')

    digest = hashlib.sha256()
    try:
        for relative in list_relative_files(root):
            digest.update(relative.encode("utf-8"))
            digest.update(b"\0")
            digest.update((root / relative).read_bytes())
    except OSError as e:
        raise FsError(f'Failed to hash "{root}": {e}') from e

    return digest.hexdigest()
