"""Error taxonomy for local-skills.

Every expected failure is raised as a subclass of :class:`LocalSkillsError`.
Each subclass carries a stable :class:`ErrorCode` so callers can branch on the
kind of failure (retry a clone, surface a parse problem, ignore a missing
skill) without string matching.
"""

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Stable identifiers for each kind of failure."""

    INVALID_SPECIFIER = "INVALID_SPECIFIER"
    CLONE_FAILED = "CLONE_FAILED"
    MARKETPLACE_NOT_FOUND = "MARKETPLACE_NOT_FOUND"
    MARKETPLACE_PARSE_ERROR = "MARKETPLACE_PARSE_ERROR"
    MANIFEST_PARSE_ERROR = "MANIFEST_PARSE_ERROR"
    PLUGIN_NOT_FOUND = "PLUGIN_NOT_FOUND"
    SKILL_NOT_FOUND = "SKILL_NOT_FOUND"
    SKILL_ALREADY_EXISTS = "SKILL_ALREADY_EXISTS"
    SKILL_NOT_INSTALLED = "SKILL_NOT_INSTALLED"
    SKILL_MODIFIED = "SKILL_MODIFIED"
    FS_ERROR = "FS_ERROR"
    EXEC_ERROR = "EXEC_ERROR"
    REMOTE_SOURCE = "REMOTE_SOURCE"


class LocalSkillsError(Exception):
    """Base class for all expected local-skills failures.

    Attributes:
        code: The kind of failure
        message: Human-readable description
    """

    code: ErrorCode = ErrorCode.EXEC_ERROR

    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return self.message


class InvalidSpecifierError(LocalSkillsError):
    code = ErrorCode.INVALID_SPECIFIER


class CloneFailedError(LocalSkillsError):
    code = ErrorCode.CLONE_FAILED


class MarketplaceNotFoundError(LocalSkillsError):
    code = ErrorCode.MARKETPLACE_NOT_FOUND


class MarketplaceParseError(LocalSkillsError):
    code = ErrorCode.MARKETPLACE_PARSE_ERROR


class ManifestParseError(LocalSkillsError):
    """Raised for malformed manifest, state or stored source labels."""

    code = ErrorCode.MANIFEST_PARSE_ERROR


class PluginNotFoundError(LocalSkillsError):
    code = ErrorCode.PLUGIN_NOT_FOUND


class SkillNotFoundError(LocalSkillsError):
    code = ErrorCode.SKILL_NOT_FOUND


class SkillAlreadyExistsError(LocalSkillsError):
    code = ErrorCode.SKILL_ALREADY_EXISTS


class SkillNotInstalledError(LocalSkillsError):
    code = ErrorCode.SKILL_NOT_INSTALLED


class SkillModifiedError(LocalSkillsError):
    """Raised when an installed skill no longer matches its recorded hash."""

    code = ErrorCode.SKILL_MODIFIED


class FsError(LocalSkillsError):
    code = ErrorCode.FS_ERROR


class ExecError(LocalSkillsError):
    code = ErrorCode.EXEC_ERROR


class RemoteSourceError(LocalSkillsError):
    """Raised when a plugin lives in another repository and cannot be listed."""

    code = ErrorCode.REMOTE_SOURCE
