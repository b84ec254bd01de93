from __future__ import annotations

import logging
import time
from pathlib import Path

from skill_radar.errors import CatalogError, FrontmatterError
from skill_radar.frontmatter import (
    extract_content_patterns,
    extract_file_patterns,
    extract_keywords,
    parse_skill_markdown,
)
from skill_radar.models import SkillRecord


_logger = logging.getLogger(__name__)


def _required_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise FrontmatterError(f"'{key}' must be a non-empty string")
    return value.strip()


def load_skill(skill_md_path: Path) -> SkillRecord:
    """Parse one SKILL.md into a SkillRecord.

    Raises OSError when the file cannot be read and FrontmatterError when its
    frontmatter is missing or invalid.
    """
    text = skill_md_path.read_text(encoding="utf-8")
    parsed = parse_skill_markdown(text)
    return SkillRecord(
        name=_required_str(parsed.data, "name"),
        description=_required_str(parsed.data, "description"),
        keywords=extract_keywords(parsed.body),
        file_patterns=extract_file_patterns(parsed.data),
        content_patterns=extract_content_patterns(parsed.data),
        skill_path=skill_md_path.parent,
        skill_md_path=skill_md_path,
    )


def scan_skills(skills_dir: Path) -> tuple[SkillRecord, ...]:
    """Load every ``<skills_dir>/<entry>/SKILL.md`` in sorted entry order.

    A skill that cannot be read or parsed is logged and skipped; it never
    blocks the rest of the catalog.
    """
    root = Path(skills_dir)
    if not root.is_dir():
        raise CatalogError(f"Skills directory not found: {root}")

    start = time.perf_counter()
    skills: list[SkillRecord] = []
    names: set[str] = set()
    try:
        entries = sorted(p for p in root.iterdir() if p.is_dir())
    except OSError as exc:
        raise CatalogError(f"Cannot list skills directory {root}: {exc}") from exc

    for entry in entries:
        if entry.name.startswith("."):
            continue
        skill_md = entry / "SKILL.md"
        if not skill_md.is_file():
            continue
        try:
            skill = load_skill(skill_md)
        except OSError as exc:
            _logger.warning("Cannot read SKILL.md for %s: %s", entry.name, exc)
            continue
        except FrontmatterError as exc:
            _logger.warning("Skipping skill %s: invalid frontmatter (%s)", entry.name, exc)
            continue
        if skill.name in names:
            _logger.warning("Skipping skill %s: duplicate name %r", entry.name, skill.name)
            continue
        names.add(skill.name)
        skills.append(skill)

    duration = time.perf_counter() - start
    _logger.info("Scanned %s in %.3fs (skills=%s)", root, duration, len(skills))
    return tuple(skills)
