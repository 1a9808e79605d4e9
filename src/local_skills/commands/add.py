"""Add skills from a marketplace to the project.

For each selected skill this:
1. Clones the marketplace at the requested ref (and the plugin repository,
   when the plugin lives elsewhere)
2. Copies ``<plugin>/skills/<name>`` into the project's skills directory
3. Records provenance in the manifest and the content hash in the state file

A wildcard installs every skill of the plugin one after another. The first
failure stops the run; skills installed before it stay installed.
"""

import logging
from pathlib import Path

from local_skills.commands.checkout import checkout_marketplace, checkout_plugin
from local_skills.commands.context import ProjectContext
from local_skills.core.content_hash import compute_content_hash
from local_skills.core.errors import (
    InvalidSpecifierError,
    LocalSkillsError,
    SkillAlreadyExistsError,
    SkillNotFoundError,
)
from local_skills.core.marketplace import list_skills, skill_dir
from local_skills.core.models import DEFAULT_REF, ParsedSpecifier
from local_skills.core.registry import add_entry, set_entry
from local_skills.core.schemas import ManifestEntry, StateEntry
from local_skills.core.specifier import check_skill_name, source_label
from local_skills.utils.paths import copy_tree, remove_tree

logger = logging.getLogger(__name__)


def add(ctx: ProjectContext, spec: ParsedSpecifier) -> list[str]:
    """Install the skill(s) named by a specifier.

    Args:
        ctx: Project context
        spec: Parsed specifier; ``spec.skill`` must be a name or ``*``

    Returns:
        Names of the skills installed, in installation order

    Raises:
        InvalidSpecifierError: If the specifier names no skill
        SkillAlreadyExistsError: If a selected skill is already installed
        CloneFailedError: If the marketplace or plugin cannot be cloned
        PluginNotFoundError: If the plugin is not in the marketplace
        SkillNotFoundError: If the skill (or the plugin's skills dir) is missing
    """
    label = source_label(spec.plugin, spec.marketplace)
    if spec.skill is None:
        raise InvalidSpecifierError(
            f'No skill given for "{label}": append ":<skill>" or ":*" for all skills'
        )
    check_skill_name(spec.skill)

    if not spec.is_wildcard and spec.skill in ctx.manifest_store().load().skills:
        raise SkillAlreadyExistsError(f'Skill "{spec.skill}" is already installed')

    url = ctx.clone_url(spec.marketplace)
    with checkout_marketplace(ctx, url, spec.ref, "clone") as checkout:
        with checkout_plugin(checkout, spec.plugin) as plugin_dir:
            names = list_skills(plugin_dir) if spec.is_wildcard else [spec.skill]

            installed = []
            for name in names:
                install_skill(ctx, spec, plugin_dir, name, checkout.sha)
                installed.append(name)

    return installed


def install_skill(
    ctx: ProjectContext, spec: ParsedSpecifier, plugin_dir: Path, name: str, sha: str
) -> None:
    """Copy one skill out of a checked-out plugin and record it.

    Nothing is recorded unless the copy succeeds. If recording the manifest
    fails the copied directory is removed again.
    """
    src = skill_dir(plugin_dir, name)
    if not src.is_dir():
        raise SkillNotFoundError(f'Skill "{name}" not found in plugin "{spec.plugin}"')

    manifest_store = ctx.manifest_store()
    state_store = ctx.state_store()

    entry = ManifestEntry(
        source=source_label(spec.plugin, spec.marketplace),
        ref=spec.ref or DEFAULT_REF,
        sha=sha,
    )
    manifest = add_entry(manifest_store.load(), name, entry)
    state = state_store.load()

    dest = ctx.skill_path(name)
    if dest.exists():
        raise SkillAlreadyExistsError(
            f'Skill directory "{dest}" already exists but is not tracked; remove it first'
        )

    copy_tree(src, dest)
    try:
        content_hash = compute_content_hash(dest)
        manifest_store.save(manifest)
    except LocalSkillsError:
        remove_tree(dest)
        raise

    state_store.save(set_entry(state, name, StateEntry(content_hash=content_hash)))
    logger.info("Installed skill %s from %s at %s", name, entry.source, sha[:7])
