"""Update an installed skill to the latest commit of its recorded ref.

Before anything is fetched the skill is checked for local edits: if a content
hash was recorded at install time and the files on disk no longer match it,
the update is refused unless forced. Skills without a recorded hash are
updated without that check. Skills pinned to a full commit SHA are never
updated.
"""

import logging

from local_skills.commands.checkout import checkout_marketplace, checkout_plugin
from local_skills.commands.context import ProjectContext
from local_skills.core.content_hash import compute_content_hash
from local_skills.core.errors import SkillModifiedError, SkillNotFoundError, SkillNotInstalledError
from local_skills.core.marketplace import skill_dir
from local_skills.core.models import DEFAULT_REF, UpdateResult, UpdateStatus
from local_skills.core.registry import set_entry
from local_skills.core.schemas import ManifestEntry, StateEntry
from local_skills.core.specifier import parse_source_label
from local_skills.fetch.git import is_sha_ref
from local_skills.utils.paths import copy_tree, remove_tree

logger = logging.getLogger(__name__)


def update(ctx: ProjectContext, name: str, force: bool = False) -> UpdateResult:
    """Update one installed skill.

    Args:
        ctx: Project context
        name: Installed skill name
        force: Overwrite the skill even if it was edited locally

    Returns:
        UpdateResult describing what happened

    Raises:
        SkillNotInstalledError: If the skill is not in the manifest
        SkillModifiedError: If the skill was edited locally and force is off
        CloneFailedError: If the marketplace cannot be cloned
        SkillNotFoundError: If the skill no longer exists upstream
    """
    manifest_store = ctx.manifest_store()
    manifest = manifest_store.load()

    entry = manifest.skills.get(name)
    if entry is None:
        raise SkillNotInstalledError(f'Skill "{name}" is not installed')

    if is_sha_ref(entry.ref):
        logger.info("Skill %s is pinned to %s", name, entry.ref)
        return UpdateResult(UpdateStatus.SKIPPED_PINNED, entry.sha, entry.sha)

    plugin_name, marketplace = parse_source_label(entry.source)

    if not force:
        check_unmodified(ctx, name)

    ref = None if entry.ref == DEFAULT_REF else entry.ref
    with checkout_marketplace(ctx, ctx.clone_url(marketplace), ref, "update") as checkout:
        new_sha = checkout.sha
        if new_sha == entry.sha:
            return UpdateResult(UpdateStatus.ALREADY_UP_TO_DATE, entry.sha, new_sha)

        with checkout_plugin(checkout, plugin_name) as plugin_dir:
            src = skill_dir(plugin_dir, name)
            if not src.is_dir():
                raise SkillNotFoundError(f'Skill "{name}" not found in plugin "{plugin_name}"')

            state_store = ctx.state_store()
            state = state_store.load()

            dest = ctx.skill_path(name)
            remove_tree(dest)
            copy_tree(src, dest)

    content_hash = compute_content_hash(dest)
    state_store.save(set_entry(state, name, StateEntry(content_hash=content_hash)))
    manifest_store.save(
        set_entry(manifest, name, ManifestEntry(source=entry.source, ref=entry.ref, sha=new_sha))
    )

    logger.info("Updated skill %s from %s to %s", name, entry.sha[:7], new_sha[:7])
    return UpdateResult(UpdateStatus.UPDATED, entry.sha, new_sha)


def check_unmodified(ctx: ProjectContext, name: str) -> None:
    """Fail if a skill's files differ from the hash recorded for it.

    Raises:
        SkillModifiedError: If a hash is recorded and does not match
    """
    recorded = ctx.state_store().load().skills.get(name)
    if recorded is None:
        logger.debug("No recorded hash for %s, skipping modification check", name)
        return

    path = ctx.skill_path(name)
    if not path.is_dir():
        raise SkillModifiedError(
            f'Skill "{name}" is missing from "{path}". Use --force to reinstall.'
        )

    current = compute_content_hash(path)
    if current != recorded.content_hash:
        raise SkillModifiedError(
            f'Skill "{name}" has been locally modified. Use --force to overwrite.'
        )
