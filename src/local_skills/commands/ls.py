"""List installed skills or the skills offered by a marketplace."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from local_skills.commands.checkout import MarketplaceCheckout, checkout_marketplace
from local_skills.commands.context import ProjectContext
from local_skills.core.errors import SkillNotFoundError
from local_skills.core.marketplace import list_skills, skill_dir
from local_skills.core.models import LocalPluginDir, MarketplaceRef
from local_skills.core.skill import skill_description
from local_skills.core.specifier import source_label


@dataclass(frozen=True)
class InstalledQuery:
    """Skills recorded in the project manifest."""


@dataclass(frozen=True)
class MarketplaceQuery:
    """Every skill of every locally hosted plugin in a marketplace."""

    marketplace: MarketplaceRef
    ref: Optional[str] = None


@dataclass(frozen=True)
class PluginQuery:
    """Every skill of one plugin."""

    plugin: str
    marketplace: MarketplaceRef
    ref: Optional[str] = None


LsQuery = Union[InstalledQuery, MarketplaceQuery, PluginQuery]


class ListFilter(str, Enum):
    INSTALLED = "installed"
    NOT_INSTALLED = "not-installed"


@dataclass(frozen=True)
class LsEntry:
    """One listed skill.

    Attributes:
        name: Skill name
        source: ``plugin@marketplace`` label the skill comes from
        installed: Whether a skill with this name is in the manifest
        description: SKILL.md description (only for long listings)
    """

    name: str
    source: str
    installed: bool = False
    description: Optional[str] = None


def ls(
    ctx: ProjectContext,
    query: LsQuery,
    long: bool = False,
    filter: Optional[ListFilter] = None,
) -> list[LsEntry]:
    """List skills.

    Args:
        ctx: Project context
        query: What to list
        long: Include descriptions from SKILL.md front matter
        filter: Keep only installed or only not-installed skills

    Raises:
        CloneFailedError: If the marketplace cannot be cloned
        PluginNotFoundError: If a PluginQuery names an unknown plugin
        RemoteSourceError: If a PluginQuery names a plugin hosted elsewhere
        SkillNotFoundError: If a PluginQuery's plugin has no skills directory
    """
    if isinstance(query, InstalledQuery):
        entries = _ls_installed(ctx, long)
    else:
        entries = _ls_remote(ctx, query, long)

    if filter is ListFilter.INSTALLED:
        return [entry for entry in entries if entry.installed]
    if filter is ListFilter.NOT_INSTALLED:
        return [entry for entry in entries if not entry.installed]
    return entries


def _ls_installed(ctx: ProjectContext, long: bool) -> list[LsEntry]:
    manifest = ctx.manifest_store().load()
    return [
        LsEntry(
            name=name,
            source=entry.source,
            installed=True,
            description=skill_description(ctx.skill_path(name)) if long else None,
        )
        for name, entry in sorted(manifest.skills.items())
    ]


def _ls_remote(
    ctx: ProjectContext, query: Union[MarketplaceQuery, PluginQuery], long: bool
) -> list[LsEntry]:
    installed = set(ctx.manifest_store().load().skills)
    url = ctx.clone_url(query.marketplace)

    with checkout_marketplace(ctx, url, query.ref, "ls") as checkout:
        if isinstance(query, PluginQuery):
            plugin_dirs = [(query.plugin, checkout.local_plugin_dir(query.plugin))]
        else:
            plugin_dirs = _local_plugin_dirs(checkout)

        entries = []
        for plugin_name, plugin_dir in plugin_dirs:
            if isinstance(query, PluginQuery):
                names = list_skills(plugin_dir)
            else:
                try:
                    names = list_skills(plugin_dir)
                except SkillNotFoundError:
                    names = []

            label = source_label(plugin_name, query.marketplace)
            for name in names:
                entries.append(
                    LsEntry(
                        name=name,
                        source=label,
                        installed=name in installed,
                        description=skill_description(skill_dir(plugin_dir, name)) if long else None,
                    )
                )

    return entries


def _local_plugin_dirs(checkout: MarketplaceCheckout) -> list[tuple[str, Path]]:
    """Plugins stored inside the marketplace clone; remote plugins are skipped."""
    plugin_dirs = []
    for plugin in checkout.config.plugins:
        location = checkout.locate(plugin.name)
        if isinstance(location, LocalPluginDir):
            plugin_dirs.append((plugin.name, location.path))
    return plugin_dirs
