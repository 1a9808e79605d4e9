"""Show details about an installed or remote skill."""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from local_skills.commands.checkout import checkout_marketplace
from local_skills.commands.context import ProjectContext
from local_skills.core.errors import SkillNotFoundError, SkillNotInstalledError
from local_skills.core.marketplace import skill_dir
from local_skills.core.models import MarketplaceRef
from local_skills.core.skill import SKILL_FILENAME, parse_front_matter, read_front_matter


@dataclass(frozen=True)
class InstalledSkillQuery:
    name: str


@dataclass(frozen=True)
class RemoteSkillQuery:
    plugin: str
    marketplace: MarketplaceRef
    name: str
    ref: Optional[str] = None


InfoQuery = Union[InstalledSkillQuery, RemoteSkillQuery]


@dataclass(frozen=True)
class InfoResult:
    """Details about one skill.

    ``source``, ``ref`` and ``sha`` come from the manifest and are only set
    for installed skills. ``installed_sha`` is set whenever a skill with this
    name is installed in the project.
    """

    name: str
    source: Optional[str] = None
    ref: Optional[str] = None
    sha: Optional[str] = None
    installed_sha: Optional[str] = None
    front_matter: dict[str, Any] = field(default_factory=dict)


def info(ctx: ProjectContext, query: InfoQuery) -> InfoResult:
    """Describe a skill.

    Raises:
        SkillNotInstalledError: If an installed skill is not in the manifest
        CloneFailedError: If a remote marketplace cannot be cloned
        PluginNotFoundError: If the remote plugin does not exist
        RemoteSourceError: If the remote plugin is hosted in another repository
        SkillNotFoundError: If the remote skill has no SKILL.md
    """
    if isinstance(query, InstalledSkillQuery):
        return _info_installed(ctx, query.name)
    return _info_remote(ctx, query)


def _info_installed(ctx: ProjectContext, name: str) -> InfoResult:
    entry = ctx.manifest_store().load().skills.get(name)
    if entry is None:
        raise SkillNotInstalledError(f'Skill "{name}" is not installed')

    return InfoResult(
        name=name,
        source=entry.source,
        ref=entry.ref,
        sha=entry.sha,
        installed_sha=entry.sha,
        front_matter=read_front_matter(ctx.skill_path(name)),
    )


def _info_remote(ctx: ProjectContext, query: RemoteSkillQuery) -> InfoResult:
    url = ctx.clone_url(query.marketplace)

    with checkout_marketplace(ctx, url, query.ref, "info") as checkout:
        plugin_dir = checkout.local_plugin_dir(query.plugin)
        skill_md = skill_dir(plugin_dir, query.name) / SKILL_FILENAME
        try:
            content = skill_md.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SkillNotFoundError(
                f'Skill "{query.name}" not found in plugin "{query.plugin}"'
            ) from e

    entry = ctx.manifest_store().load().skills.get(query.name)
    return InfoResult(
        name=query.name,
        installed_sha=entry.sha if entry else None,
        front_matter=parse_front_matter(content),
    )
