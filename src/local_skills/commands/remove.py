"""Remove an installed skill."""

import logging

from local_skills.commands.context import ProjectContext
from local_skills.core.registry import remove_entry
from local_skills.utils.paths import remove_tree

logger = logging.getLogger(__name__)


def remove(ctx: ProjectContext, name: str) -> None:
    """Delete a skill's directory and drop it from the manifest.

    A directory that is already gone is not an error. The skill's state entry
    is left in place and is overwritten if the skill is added again.

    Raises:
        SkillNotInstalledError: If the skill is not in the manifest
    """
    manifest_store = ctx.manifest_store()
    updated = remove_entry(manifest_store.load(), name)

    remove_tree(ctx.skill_path(name))
    manifest_store.save(updated)
    logger.info("Removed skill %s", name)
