from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from skill_radar.config import AppConfig


def write_skill(skills_dir: Path, entry: str, text: str) -> Path:
    skill_dir = skills_dir / entry
    skill_dir.mkdir(parents=True, exist_ok=True)
    path = skill_dir / "SKILL.md"
    path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
    return path


@pytest.fixture
def skills_dir(tmp_path: Path) -> Path:
    root = tmp_path / "skills"
    root.mkdir()
    write_skill(
        root,
        "convex-patterns",
        """
        ---
        name: convex-patterns
        description: Convex backend patterns
        triggers:
          files:
            include: ["**/convex/**/*.ts", "convex.json"]
          content:
            include: ["webhook", "real-time", "scheduled job"]
        ---

        # Convex patterns

        Keywords: convex, mutation, query, action
        """,
    )
    write_skill(
        root,
        "react-ui",
        """
        ---
        name: react-ui
        description: React component guidelines
        triggers:
          files:
            include: ["**/*.tsx"]
        ---

        Keywords: react, component, hook
        """,
    )
    return root


@pytest.fixture
def config(tmp_path: Path, skills_dir: Path) -> AppConfig:
    project_root = tmp_path / "project"
    project_root.mkdir()
    return AppConfig(skills_dir=skills_dir, project_root=project_root)
