"""SKILL.md front matter, used for display only."""

import re
from pathlib import Path
from typing import Any

import yaml

SKILL_FILENAME = "SKILL.md"

# YAML front matter: --- at start, content, --- to close
_FRONT_MATTER = re.compile(r"^---\s*\n(.*?)\n---\s*(\n|$)", re.DOTALL)


def parse_front_matter(content: str) -> dict[str, Any]:
    """Extract the YAML front matter of a markdown document.

    Returns an empty dict when there is no front matter or it is not a YAML
    mapping. Display code should never fail because of a sloppy SKILL.md.
    """
    match = _FRONT_MATTER.match(content)
    if not match:
        return {}

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError:
        return {}

    if not isinstance(data, dict):
        return {}
    return {str(key): value for key, value in data.items()}


def read_front_matter(skill_dir: Path) -> dict[str, Any]:
    """Front matter of ``<skill_dir>/SKILL.md``, or {} if the file is missing."""
    skill_md = Path(skill_dir) / SKILL_FILENAME
    try:
        content = skill_md.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return {}
    return parse_front_matter(content)


def skill_description(skill_dir: Path) -> str | None:
    """The ``description`` field of a skill, if it has one."""
    description = read_front_matter(skill_dir).get("description")
    return str(description) if description is not None else None
