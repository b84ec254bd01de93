from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Category(str, Enum):
    """Signal categories a skill can be matched on."""

    KEYWORD = "keyword"
    FILE = "file"
    CONTENT = "content"


@dataclass(frozen=True)
class SkillRecord:
    name: str
    description: str
    keywords: tuple[str, ...] = ()
    file_patterns: tuple[str, ...] = ()
    content_patterns: tuple[str, ...] = ()
    skill_path: Path | None = None
    skill_md_path: Path | None = None


@dataclass(frozen=True)
class AgentReasoning:
    """Data that drives the reasoning sentence of an agent recommendation.

    highlight_note is emitted when any of highlight_signals matched in the
    sub-category named by highlight_source ("complexity" or "domain").
    domain_prefix introduces up to three matched domain signals.
    duration_threshold, when non-zero, adds the estimated duration once that
    many distinct signals matched. closing is always appended.
    """

    highlight_signals: tuple[str, ...] = ()
    highlight_source: str = "complexity"
    highlight_note: str = ""
    domain_prefix: str = ""
    duration_threshold: int = 0
    closing: str = ""


@dataclass(frozen=True)
class AgentRecord:
    name: str
    description: str
    when_to_use: str
    complexity_signals: tuple[str, ...] = ()
    domain_signals: tuple[str, ...] = ()
    estimated_duration: str = ""
    reasoning: AgentReasoning = field(default_factory=AgentReasoning)


@dataclass(frozen=True)
class MatchContext:
    """Input of one scoring call. ``prompt`` is already lower-cased."""

    prompt: str
    open_files: tuple[str, ...] = ()
    working_directory: str | None = None


@dataclass(frozen=True)
class SignalHitSet:
    """Evidence for one item in one category.

    ``applicable`` is False when there was nothing to check against (no open
    files supplied, or the item declares no signals in this category). That is
    different from an applicable category with zero hits.
    """

    category: Category
    hits: tuple[str, ...] = ()
    declared: int = 0
    applicable: bool = True

    @property
    def hit_count(self) -> int:
        return len(self.hits)


@dataclass(frozen=True)
class CategoryScores:
    """Per-category percentages (0-100); categories that did not apply are 0."""

    keyword: int = 0
    file: int = 0
    content: int = 0

    def get(self, category: Category) -> int:
        return getattr(self, category.value)

    def as_dict(self) -> dict[str, int]:
        return {"keyword": self.keyword, "file": self.file, "content": self.content}


@dataclass(frozen=True)
class ScoredSkill:
    skill: SkillRecord
    confidence: int
    matched_signals: tuple[str, ...]
    scores: CategoryScores
    hit_sets: tuple[SignalHitSet, ...] = ()


@dataclass(frozen=True)
class SkillMatchReport:
    matches: tuple[ScoredSkill, ...]
    total_scanned: int


@dataclass(frozen=True)
class AgentSignalHits:
    complexity: tuple[str, ...] = ()
    domain: tuple[str, ...] = ()

    @property
    def matched(self) -> tuple[str, ...]:
        """Distinct matched signals, complexity first, in catalog order."""
        seen: dict[str, None] = {}
        for signal in self.complexity + self.domain:
            seen.setdefault(signal, None)
        return tuple(seen)


@dataclass(frozen=True)
class AgentRecommendation:
    agent: AgentRecord
    confidence: int
    matched_signals: tuple[str, ...]
    reasoning: str
    hits: AgentSignalHits = field(default_factory=AgentSignalHits)


@dataclass(frozen=True)
class ResourceFile:
    file_name: str
    file_path: Path
    topic: str
    skill_name: str


@dataclass(frozen=True)
class ResourceRecommendation:
    resource: ResourceFile
    relevance: int
    reasoning: str


@dataclass(frozen=True)
class ResourceReport:
    recommendations: tuple[ResourceRecommendation, ...]
    total_resources: int
