from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable

import yaml

from skill_radar.errors import FrontmatterError


_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
_KEYWORDS_RE = re.compile(r"Keywords?:\s*([^\n]+)", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedFrontmatter:
    data: dict[str, Any]
    body: str


def parse_skill_markdown(text: str) -> ParsedFrontmatter:
    """Split a SKILL.md document into its YAML frontmatter and markdown body."""
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        raise FrontmatterError("No frontmatter found")
    raw = match.group(1)
    if not raw.strip():
        raise FrontmatterError("Empty frontmatter")
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"Invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise FrontmatterError("Frontmatter must be a mapping")
    return ParsedFrontmatter(data=data, body=text[match.end():])


def normalize_signals(values: Iterable[Any]) -> tuple[str, ...]:
    """Lower-case and trim signal strings, dropping empties and duplicates.

    Non-string entries are dropped one by one instead of failing the skill.
    """
    out: list[str] = []
    seen: set[str] = set()
    for value in values:
        if not isinstance(value, str):
            continue
        signal = value.strip().lower()
        if not signal or signal in seen:
            continue
        seen.add(signal)
        out.append(signal)
    return tuple(out)


def extract_keywords(body: str) -> tuple[str, ...]:
    """Read the first ``Keywords: a, b, c`` line of the body."""
    match = _KEYWORDS_RE.search(body)
    if match is None:
        return ()
    return normalize_signals(match.group(1).split(","))


def _trigger_list(data: dict[str, Any], kind: str) -> list[Any]:
    triggers = data.get("triggers")
    if not isinstance(triggers, dict):
        return []
    section = triggers.get(kind)
    if not isinstance(section, dict):
        return []
    include = section.get("include")
    if not isinstance(include, list):
        return []
    return include


def extract_file_patterns(data: dict[str, Any]) -> tuple[str, ...]:
    """``triggers.files.include`` as a tuple of non-empty glob strings."""
    patterns: list[str] = []
    for value in _trigger_list(data, "files"):
        if isinstance(value, str) and value.strip() and value.strip() not in patterns:
            patterns.append(value.strip())
    return tuple(patterns)


def extract_content_patterns(data: dict[str, Any]) -> tuple[str, ...]:
    """``triggers.content.include``: phrases matched against the prompt text."""
    return normalize_signals(_trigger_list(data, "content"))
