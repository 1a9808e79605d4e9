"""Fetching marketplaces with git."""

from local_skills.fetch.git import SubprocessGit, is_sha_ref
from local_skills.fetch.protocols import GitClient
from local_skills.fetch.temp_clone import temp_clone

__all__ = ["GitClient", "SubprocessGit", "is_sha_ref", "temp_clone"]
