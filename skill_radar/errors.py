"""Exception types raised by skill-radar."""

from __future__ import annotations


class SkillRadarError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(SkillRadarError, ValueError):
    """Tool input rejected before any scoring took place."""

    def __init__(self, field: str, detail: str) -> None:
        super().__init__(f"Invalid input for '{field}': {detail}")
        self.field = field
        self.detail = detail


class ConfigError(SkillRadarError, ValueError):
    pass


class CatalogError(SkillRadarError):
    """The skills directory could not be scanned."""


class FrontmatterError(SkillRadarError, ValueError):
    """A SKILL.md file has missing or unparsable frontmatter."""


class SkillNotFoundError(SkillRadarError):
    pass


class SecurityError(SkillRadarError):
    """A requested name would resolve outside the skills directory."""


class SessionStateError(SkillRadarError):
    """The session tracker file could not be read, validated or written."""
