from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Sequence

from skill_radar.models import SkillRecord
from skill_radar.scanner import scan_skills


_logger = logging.getLogger(__name__)

Loader = Callable[[Path], Sequence[SkillRecord]]


class SkillCatalog:
    """Skills loaded once on first use and shared read-only afterwards.

    The first successful load is cached until ``reset()`` is called. A failed
    load is not cached, so the next call tries again.
    """

    def __init__(self, skills_dir: Path, loader: Loader = scan_skills) -> None:
        self.skills_dir = Path(skills_dir)
        self._loader = loader
        self._lock = threading.Lock()
        self._skills: tuple[SkillRecord, ...] | None = None

    @property
    def loaded(self) -> bool:
        return self._skills is not None

    def get(self) -> tuple[SkillRecord, ...]:
        skills = self._skills
        if skills is not None:
            return skills
        with self._lock:
            if self._skills is None:
                self._skills = tuple(self._loader(self.skills_dir))
                _logger.info("Skill catalog ready (skills=%s)", len(self._skills))
            return self._skills

    def reset(self) -> None:
        with self._lock:
            self._skills = None
        _logger.info("Skill catalog reset")
