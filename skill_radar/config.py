from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from skill_radar.errors import ConfigError


DEFAULT_MAX_PROMPT_LENGTH = 10_000
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class AppConfig:
    skills_dir: Path
    project_root: Path
    max_prompt_length: int = DEFAULT_MAX_PROMPT_LENGTH
    log_level: str = DEFAULT_LOG_LEVEL


def _parse_positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def load_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    """Build the server configuration from environment variables.

    SKILL_RADAR_SKILLS_DIR      skills directory (default: ./skills)
    SKILL_RADAR_PROJECT_ROOT    root for session state and briefs (default: cwd)
    SKILL_RADAR_MAX_PROMPT_LENGTH
    SKILL_RADAR_LOG_LEVEL
    """
    env = os.environ if environ is None else environ
    cwd = Path.cwd()

    project_root = Path(env.get("SKILL_RADAR_PROJECT_ROOT") or cwd).expanduser().resolve()
    skills_raw = env.get("SKILL_RADAR_SKILLS_DIR")
    skills_dir = Path(skills_raw).expanduser().resolve() if skills_raw else (cwd / "skills").resolve()

    max_len_raw = env.get("SKILL_RADAR_MAX_PROMPT_LENGTH")
    max_prompt_length = (
        _parse_positive_int("SKILL_RADAR_MAX_PROMPT_LENGTH", max_len_raw)
        if max_len_raw
        else DEFAULT_MAX_PROMPT_LENGTH
    )

    log_level = (env.get("SKILL_RADAR_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()

    return AppConfig(
        skills_dir=skills_dir,
        project_root=project_root,
        max_prompt_length=max_prompt_length,
        log_level=log_level,
    )
