"""Core value types shared by the parser, resolver and commands."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

# Skill token selecting every skill in a plugin
WILDCARD = "*"

# Manifest ref recorded when no ref was requested
DEFAULT_REF = "HEAD"


@dataclass(frozen=True)
class GitHubMarketplace:
    """A marketplace given as GitHub ``owner/repo`` shorthand."""

    owner: str
    repo: str

    @property
    def locator(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class UrlMarketplace:
    """A marketplace given as a git URL, ``file://`` URI or absolute path."""

    url: str

    @property
    def locator(self) -> str:
        return self.url


MarketplaceRef = Union[GitHubMarketplace, UrlMarketplace]


@dataclass(frozen=True)
class ParsedSpecifier:
    """A parsed ``plugin@marketplace[:ref][:skill]`` specifier.

    Attributes:
        plugin: Plugin name as declared in the marketplace manifest
        marketplace: Where the marketplace repository lives
        ref: Git branch, tag or commit (None means the default branch)
        skill: Skill name, ``*`` for every skill, or None for browsing
    """

    plugin: str
    marketplace: MarketplaceRef
    ref: Optional[str] = None
    skill: Optional[str] = None

    @property
    def is_wildcard(self) -> bool:
        return self.skill == WILDCARD


@dataclass(frozen=True)
class ParsedMarketplaceRef:
    """A parsed ``marketplace[:ref]`` reference used for browsing."""

    marketplace: MarketplaceRef
    ref: Optional[str] = None


@dataclass(frozen=True)
class LocalPluginDir:
    """A plugin whose files live inside the cloned marketplace."""

    path: Path


@dataclass(frozen=True)
class RemotePluginRepo:
    """A plugin that lives in its own repository and needs another clone."""

    url: str


PluginLocation = Union[LocalPluginDir, RemotePluginRepo]


class UpdateStatus(str, Enum):
    """Outcome of an update."""

    UPDATED = "updated"
    ALREADY_UP_TO_DATE = "already-up-to-date"
    SKIPPED_PINNED = "skipped-pinned"


@dataclass(frozen=True)
class UpdateResult:
    """Result of updating one skill.

    For the no-op outcomes ``old_sha`` and ``new_sha`` are the same commit.
    """

    status: UpdateStatus
    old_sha: str
    new_sha: str
