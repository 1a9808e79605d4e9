"""Pydantic models for local-skills configuration."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class SettingsConfig(BaseModel):
    """Global settings for local-skills."""

    base_dir: str = Field(
        default=".claude",
        description="Directory, relative to the project, holding skills and manifests",
    )
    skills_dir: str = Field(
        default="skills", description="Subdirectory of base_dir where skills are installed"
    )
    manifest_file: str = Field(
        default="local-skills.json", description="Manifest file name inside base_dir"
    )
    state_file: str = Field(
        default="local-skills-state.json", description="State file name inside base_dir"
    )
    git_executable: str = Field(default="git", description="git executable to run")
    temp_dir: Optional[str] = Field(
        default=None, description="Parent directory for scratch clones (system temp dir if unset)"
    )
    github_url: str = Field(
        default="https://github.com",
        description="Base URL used to clone owner/repo marketplaces",
    )

    @field_validator("skills_dir", "manifest_file", "state_file")
    @classmethod
    def validate_relative_name(cls, v: str) -> str:
        """Reject empty names and names escaping base_dir."""
        if not v or v.startswith("/") or ".." in v.split("/"):
            raise ValueError(f"Must be a relative path inside base_dir: {v!r}")
        return v


class LocalSkillsConfig(BaseModel):
    """Root configuration for local-skills."""

    version: str = Field(description="Config schema version")
    settings: SettingsConfig = Field(default_factory=SettingsConfig)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Validate version format."""
        if not v.startswith("1."):
            raise ValueError(
                f"Unsupported config version: {v}. Only version 1.x is supported."
            )
        return v
