"""Parser for skill specifiers.

A specifier names a plugin inside a marketplace and optionally a git ref and a
skill:

- ``plugin@owner/repo[:ref][:skill]`` (GitHub shorthand)
- ``plugin@https://host[:port]/path/repo.git[:ref][:skill]``
- ``plugin@file:///abs/path[:ref][:skill]`` or ``plugin@/abs/path[:ref][:skill]``

The skill may be ``*`` to select every skill of the plugin. Because URLs carry
colons of their own, the locator ends at the first ``:`` after the URL
authority. A colon right after the host followed only by digits is a port, so
``https://host:8443:main`` reads as host ``host:8443`` and ref ``main``; a
numeric ref cannot directly follow a path-less URL.

Skill names are single directory names: ``.``, ``..`` and names containing
``/`` or ``\\`` are rejected.

A single trailing segment is ambiguous. It is read as a ref when it looks like
one (``v`` followed by a digit, or 7 to 40 lowercase hex characters) and as a
skill otherwise, so a skill literally named ``v1`` or ``cafebabe`` cannot be
selected without also giving a ref (``plugin@owner/repo::v1``).
"""

import re
from typing import Optional

from local_skills.core.errors import InvalidSpecifierError, ManifestParseError
from local_skills.core.models import (
    WILDCARD,
    GitHubMarketplace,
    MarketplaceRef,
    ParsedMarketplaceRef,
    ParsedSpecifier,
    UrlMarketplace,
)

PROTOCOL_SEPARATOR = "://"
DEFAULT_GITHUB_URL = "https://github.com"

_REF_PATTERN = re.compile(r"^(v\d.*|[0-9a-f]{7,40})$")

# host[:port] of a URL; a colon followed by digits is a port
_AUTHORITY_PATTERN = re.compile(r"[^/:]*(?::\d+(?=[/:]|$))?")


def parse_specifier(text: str) -> ParsedSpecifier:
    """Parse a ``plugin@marketplace[:ref][:skill]`` specifier.

    Args:
        text: Specifier as typed by the user

    Returns:
        ParsedSpecifier with plugin and marketplace always set

    Raises:
        InvalidSpecifierError: If the text does not follow the grammar
    """
    at_index = text.find("@")
    if at_index <= 0:
        raise InvalidSpecifierError(
            f'Invalid specifier "{text}": must contain "@" with a plugin name before it'
        )

    plugin = text[:at_index]
    remainder = text[at_index + 1:]
    if not remainder:
        raise InvalidSpecifierError(f'Invalid specifier "{text}": empty marketplace after "@"')

    locator, segments = _split_locator(remainder)
    marketplace = _parse_locator(locator, text)
    ref, skill = _classify_segments(segments, text)

    return ParsedSpecifier(plugin=plugin, marketplace=marketplace, ref=ref, skill=skill)


def parse_marketplace_ref(text: str) -> ParsedMarketplaceRef:
    """Parse a marketplace-only reference such as ``owner/repo:v1.0``.

    Args:
        text: Marketplace locator with an optional trailing ref

    Returns:
        ParsedMarketplaceRef

    Raises:
        InvalidSpecifierError: If the locator is invalid or more than one
            trailing segment is given
    """
    if not text:
        raise InvalidSpecifierError("Invalid marketplace: empty marketplace")

    locator, segments = _split_locator(text)
    marketplace = _parse_locator(locator, text)

    if len(segments) > 1:
        raise InvalidSpecifierError(
            f'Invalid marketplace "{text}": Too many ":" segments, expected marketplace[:ref]'
        )

    ref = segments[0] if segments and segments[0] else None
    return ParsedMarketplaceRef(marketplace=marketplace, ref=ref)


def looks_like_ref(segment: str) -> bool:
    """Return True if a lone trailing segment should be read as a git ref."""
    return bool(_REF_PATTERN.match(segment))


def check_skill_name(name: str) -> None:
    """Reject skill names that are not a single directory name.

    ``*`` is accepted as the wildcard.

    Raises:
        InvalidSpecifierError: If the name is empty, ``.``, ``..`` or contains
            a path separator
    """
    if name == WILDCARD:
        return
    if name in ("", ".", "..") or "/" in name or "\\" in name:
        raise InvalidSpecifierError(
            f'Invalid skill name "{name}": must be a single directory name'
        )


def source_label(plugin: str, marketplace: MarketplaceRef) -> str:
    """Render the ``plugin@locator`` label stored in the manifest."""
    return f"{plugin}@{marketplace.locator}"


def parse_source_label(label: str) -> tuple[str, MarketplaceRef]:
    """Recover plugin name and marketplace from a stored source label.

    Raises:
        ManifestParseError: If the label cannot be parsed
    """
    try:
        parsed = parse_specifier(label)
    except InvalidSpecifierError as e:
        raise ManifestParseError(f'Invalid source in manifest: "{label}"') from e

    if parsed.ref is not None or parsed.skill is not None:
        raise ManifestParseError(f'Invalid source in manifest: "{label}"')

    return parsed.plugin, parsed.marketplace


def marketplace_url(marketplace: MarketplaceRef, github_url: str = DEFAULT_GITHUB_URL) -> str:
    """Return the git clone target for a marketplace."""
    if isinstance(marketplace, GitHubMarketplace):
        return f"{github_url.rstrip('/')}/{marketplace.owner}/{marketplace.repo}.git"
    return marketplace.url


def _split_locator(text: str) -> tuple[str, list[str]]:
    """Split text into the marketplace locator and its trailing segments."""
    search_from = 0
    protocol_index = text.find(PROTOCOL_SEPARATOR)
    if protocol_index != -1:
        authority_start = protocol_index + len(PROTOCOL_SEPARATOR)
        search_from = _AUTHORITY_PATTERN.match(text, authority_start).end()

    boundary = text.find(":", search_from)
    if boundary == -1:
        return text, []

    return text[:boundary], text[boundary + 1:].split(":")


def _parse_locator(locator: str, original: str) -> MarketplaceRef:
    if not locator:
        raise InvalidSpecifierError(f'Invalid specifier "{original}": empty marketplace')

    if PROTOCOL_SEPARATOR in locator or locator.startswith("/"):
        return UrlMarketplace(url=locator)

    owner, _, repo = locator.partition("/")
    if not owner or not repo:
        raise InvalidSpecifierError(
            f'Invalid GitHub marketplace "{locator}": expected owner/repo'
        )
    return GitHubMarketplace(owner=owner, repo=repo)


def _classify_segments(
    segments: list[str], original: str
) -> tuple[Optional[str], Optional[str]]:
    """Map trailing segments to (ref, skill)."""
    if len(segments) > 2:
        raise InvalidSpecifierError(
            f'Invalid specifier "{original}": Too many ":" segments, '
            "expected plugin@marketplace[:ref][:skill]"
        )

    if not segments:
        return None, None

    if len(segments) == 1:
        segment = segments[0]
        if looks_like_ref(segment):
            return segment, None
        ref, skill = None, segment or None
    else:
        ref, skill = segments[0] or None, segments[1] or None

    if skill is not None:
        check_skill_name(skill)
    return ref, skill
