"""Manifest and state stores for installed skills.

The manifest (``local-skills.json``) records where each installed skill came
from. The state file (``local-skills-state.json``) records the content hash of
each skill as last written by local-skills. Both share the same behaviour:

- a missing file loads as an empty collection
- malformed JSON or a schema violation is a hard error
- saving rewrites the whole document, pretty-printed with a trailing newline
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Generic, TypeVar, Union

from pydantic import BaseModel, ValidationError

from local_skills.core.errors import (
    FsError,
    ManifestParseError,
    SkillAlreadyExistsError,
    SkillNotInstalledError,
)
from local_skills.core.schemas import Manifest, ManifestEntry, StateEntry, StateFile

logger = logging.getLogger(__name__)

T = TypeVar("T", Manifest, StateFile)


class JsonStore(Generic[T]):
    """A JSON document holding a ``skills`` mapping, loaded and saved whole."""

    model: type[BaseModel]
    kind = "file"

    def __init__(self, path: Path):
        """Initialize the store.

        Args:
            path: Location of the JSON file
        """
        self.path = Path(path)

    def load(self) -> T:
        """Load the collection from disk.

        Returns:
            The parsed collection, or an empty one if the file doesn't exist

        Raises:
            ManifestParseError: If the file is not valid JSON or fails validation
            FsError: If the file exists but cannot be read
        """
        if not self.path.exists():
            logger.debug("No %s at %s, starting empty", self.kind, self.path)
            return self.model()

        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise FsError(f'Failed to read "{self.path}": {e}') from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ManifestParseError(f'Invalid JSON in {self.kind} "{self.path}": {e}') from e

        try:
            return self.model.model_validate(data)
        except ValidationError as e:
            raise ManifestParseError(f'Invalid {self.kind} schema in "{self.path}"') from e

    def save(self, collection: T) -> None:
        """Write the whole collection to disk.

        The document is written to a temporary file next to the target and
        then moved into place, so readers never see a half-written file.

        Raises:
            FsError: If the file cannot be written
        """
        content = json.dumps(collection.model_dump(by_alias=True), indent=2, ensure_ascii=False)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                    f.write("\n")
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise FsError(f'Failed to write "{self.path}": {e}') from e

        logger.debug("Saved %s with %d skill(s) to %s", self.kind, len(collection.skills), self.path)


class ManifestStore(JsonStore[Manifest]):
    """Store for ``local-skills.json``."""

    model = Manifest
    kind = "manifest"


class StateStore(JsonStore[StateFile]):
    """Store for ``local-skills-state.json``."""

    model = StateFile
    kind = "state file"


def add_entry(manifest: Manifest, name: str, entry: ManifestEntry) -> Manifest:
    """Return a new manifest with ``name`` added.

    Raises:
        SkillAlreadyExistsError: If the skill is already in the manifest
    """
    if name in manifest.skills:
        raise SkillAlreadyExistsError(f'Skill "{name}" is already installed')
    return Manifest(skills={**manifest.skills, name: entry})


def remove_entry(manifest: Manifest, name: str) -> Manifest:
    """Return a new manifest without ``name``.

    Raises:
        SkillNotInstalledError: If the skill is not in the manifest
    """
    if name not in manifest.skills:
        raise SkillNotInstalledError(f'Skill "{name}" is not installed')
    return Manifest(skills={key: value for key, value in manifest.skills.items() if key != name})


def set_entry(collection: T, name: str, entry: Union[ManifestEntry, StateEntry]) -> T:
    """Return a copy of ``collection`` with ``name`` replaced by ``entry``."""
    return collection.model_copy(update={"skills": {**collection.skills, name: entry}})
