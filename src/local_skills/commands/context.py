"""Per-invocation context shared by all commands."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from local_skills.config.schema import SettingsConfig
from local_skills.core.models import MarketplaceRef
from local_skills.core.registry import ManifestStore, StateStore
from local_skills.core.specifier import check_skill_name, marketplace_url
from local_skills.fetch.git import SubprocessGit
from local_skills.fetch.protocols import GitClient


@dataclass
class ProjectContext:
    """Context for running commands against one project.

    Attributes:
        project_dir: Root of the project owning the skills cache
        settings: Effective settings
        git: Git client used for clones
    """

    project_dir: Path
    settings: SettingsConfig = field(default_factory=SettingsConfig)
    git: Optional[GitClient] = None

    def __post_init__(self):
        self.project_dir = Path(self.project_dir)
        if self.git is None:
            self.git = SubprocessGit(self.settings.git_executable)

    @property
    def base_dir(self) -> Path:
        return self.project_dir / self.settings.base_dir

    @property
    def skills_dir(self) -> Path:
        return self.base_dir / self.settings.skills_dir

    @property
    def temp_root(self) -> Optional[Path]:
        return Path(self.settings.temp_dir).expanduser() if self.settings.temp_dir else None

    def skill_path(self, name: str) -> Path:
        """Where an installed skill lives.

        Raises:
            InvalidSpecifierError: If the name would point outside the skills directory
        """
        check_skill_name(name)
        return self.skills_dir / name

    def manifest_store(self) -> ManifestStore:
        return ManifestStore(self.base_dir / self.settings.manifest_file)

    def state_store(self) -> StateStore:
        return StateStore(self.base_dir / self.settings.state_file)

    def clone_url(self, marketplace: MarketplaceRef) -> str:
        return marketplace_url(marketplace, self.settings.github_url)
