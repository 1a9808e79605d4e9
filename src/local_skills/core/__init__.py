"""Core parsing, resolution, hashing and storage."""

from local_skills.core.errors import ErrorCode, LocalSkillsError
from local_skills.core.models import ParsedMarketplaceRef, ParsedSpecifier, UpdateResult, UpdateStatus
from local_skills.core.registry import ManifestStore, StateStore
from local_skills.core.specifier import parse_marketplace_ref, parse_specifier

__all__ = [
    "ErrorCode",
    "LocalSkillsError",
    "ManifestStore",
    "ParsedMarketplaceRef",
    "ParsedSpecifier",
    "StateStore",
    "UpdateResult",
    "UpdateStatus",
    "parse_marketplace_ref",
    "parse_specifier",
]
