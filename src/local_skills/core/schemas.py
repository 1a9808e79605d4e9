"""Pydantic models for the JSON documents local-skills reads and writes.

- ``.claude-plugin/marketplace.json`` inside a marketplace (read only)
- ``.claude/local-skills.json`` manifest of installed skills
- ``.claude/local-skills-state.json`` content hashes of installed skills
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class GitHubPluginSource(BaseModel):
    """Plugin hosted in its own GitHub repository."""

    source: Literal["github"]
    repo: str = Field(description="Repository in format 'owner/repo'")


class UrlPluginSource(BaseModel):
    """Plugin hosted in an arbitrary git repository."""

    source: Literal["url"]
    url: str = Field(description="Git clone URL")


# A plain string is a path relative to the marketplace root
PluginSource = Union[str, GitHubPluginSource, UrlPluginSource]


class MarketplacePlugin(BaseModel):
    """A plugin entry in marketplace.json."""

    model_config = ConfigDict(extra="ignore")

    name: str
    source: PluginSource


class MarketplaceMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    plugin_root: Optional[str] = Field(default=None, alias="pluginRoot")


class MarketplaceConfig(BaseModel):
    """Top-level structure of marketplace.json."""

    model_config = ConfigDict(extra="ignore")

    plugins: list[MarketplacePlugin]
    metadata: Optional[MarketplaceMetadata] = None

    @property
    def plugin_root(self) -> Optional[str]:
        return self.metadata.plugin_root if self.metadata else None


class ManifestEntry(BaseModel):
    """Provenance of one installed skill."""

    source: str = Field(description="Source label, e.g. 'superpowers@anthropics/claude-code'")
    ref: str = Field(description="Requested git ref, or HEAD for the default branch")
    sha: str = Field(description="Commit SHA at install or last update")


class Manifest(BaseModel):
    """The full manifest file."""

    skills: dict[str, ManifestEntry] = Field(default_factory=dict)


class StateEntry(BaseModel):
    """Last content hash written by local-skills for one skill."""

    model_config = ConfigDict(populate_by_name=True)

    content_hash: str = Field(alias="contentHash")


class StateFile(BaseModel):
    """The full state file."""

    skills: dict[str, StateEntry] = Field(default_factory=dict)
