"""Input validation shared by every tool.

All checks run before any catalog access or scoring, so a rejected call never
produces a partial result.
"""

from __future__ import annotations

from typing import Any

from skill_radar.config import DEFAULT_MAX_PROMPT_LENGTH
from skill_radar.errors import InvalidInputError, SecurityError
from skill_radar.models import MatchContext


def required_text(value: Any, field: str, max_length: int | None = None) -> str:
    if value is None:
        raise InvalidInputError(field, "is required")
    if not isinstance(value, str):
        raise InvalidInputError(field, f"must be a string, got {type(value).__name__}")
    text = value.strip()
    if not text:
        raise InvalidInputError(field, "cannot be empty")
    if max_length is not None and len(text) > max_length:
        raise InvalidInputError(field, f"too long (max {max_length} chars): {len(text)}")
    return text


def optional_text(value: Any, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidInputError(field, f"must be a string, got {type(value).__name__}")
    return value.strip() or None


def string_list(value: Any, field: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise InvalidInputError(field, "must be a list of strings")
    for item in value:
        if not isinstance(item, str):
            raise InvalidInputError(field, f"must contain only strings, got {type(item).__name__}")
    return tuple(value)


def normalize_prompt(prompt: Any, max_length: int = DEFAULT_MAX_PROMPT_LENGTH) -> str:
    """Trim, bound and lower-case a prompt."""
    return required_text(prompt, "prompt", max_length=max_length).lower()


def build_match_context(
    prompt: Any,
    open_files: Any = None,
    working_directory: Any = None,
    max_length: int = DEFAULT_MAX_PROMPT_LENGTH,
) -> MatchContext:
    normalized = normalize_prompt(prompt, max_length=max_length)
    files = tuple(f.strip() for f in string_list(open_files, "open_files") if f.strip())
    return MatchContext(
        prompt=normalized,
        open_files=files,
        working_directory=optional_text(working_directory, "working_directory"),
    )


def validate_skill_name(value: Any) -> str:
    """Return a skill directory name that cannot escape the skills directory."""
    name = required_text(value, "skill_name")
    if "/" in name or "\\" in name or name in (".", "..") or name.startswith("."):
        raise SecurityError(f"Illegal skill name: {name!r}")
    return name
