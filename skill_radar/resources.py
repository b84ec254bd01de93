"""Progressive disclosure: pick the relevant files from a skill's resources/."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from skill_radar.errors import CatalogError, SkillNotFoundError
from skill_radar.models import ResourceFile, ResourceReport
from skill_radar.ranking import rank_resources


_logger = logging.getLogger(__name__)


def extract_topic(file_name: str) -> str:
    """``react-19-2-features.md`` -> ``react 19 2 features``"""
    stem = file_name[:-3] if file_name.endswith(".md") else file_name
    return stem.replace("-", " ")


def discover_resources(skills_dir: Path, skill_name: str) -> tuple[ResourceFile, ...]:
    skill_path = Path(skills_dir) / skill_name
    if not skill_path.is_dir():
        raise SkillNotFoundError(f"Skill not found: {skill_name}")

    resources_dir = skill_path / "resources"
    if not resources_dir.is_dir():
        return ()

    try:
        entries = sorted(resources_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise CatalogError(f"Cannot list resources of {skill_name}: {exc}") from exc

    resources: list[ResourceFile] = []
    for entry in entries:
        if entry.name.startswith(".") or not entry.name.endswith(".md"):
            continue
        try:
            if not entry.is_file():
                continue
        except OSError:
            _logger.warning("Cannot stat resource %s", entry)
            continue
        resources.append(
            ResourceFile(
                file_name=entry.name,
                file_path=entry,
                topic=extract_topic(entry.name),
                skill_name=skill_name,
            )
        )
    return tuple(resources)


def recommend_resources(
    skills_dir: Path,
    skill_name: str,
    topic: str | None = None,
    keywords: Sequence[str] = (),
) -> ResourceReport:
    resources = discover_resources(skills_dir, skill_name)
    return rank_resources(resources, topic=topic, keywords=keywords)
