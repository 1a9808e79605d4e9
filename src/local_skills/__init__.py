"""Extract skills from Claude Code plugin marketplaces into a project."""

__version__ = "0.1.0"
