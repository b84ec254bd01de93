"""Confidence scoring for skills and agents.

Skills
    Each category has a nominal weight (keywords 40, files 30, content 30).
    Only categories that apply to this call take part: their weights are
    renormalised to sum to 1, so a prompt-only query can still reach 100.
    A category's percentage is

        min(100, max(100 * hits / declared, HIT_BASE + HIT_STEP * (hits - 1)))

    for hits > 0, and 0 otherwise. The first term lets a full match saturate,
    the second keeps large signal lists from burying a single strong hit.
    Both are non-decreasing in the number of hits.

Agents
    60 for the first distinct matched signal, +10 for each further one,
    capped at 95. No weighting and no redistribution.
"""

from __future__ import annotations

import math
from typing import Iterable, Mapping

from skill_radar.agents import generate_reasoning
from skill_radar.models import (
    AgentRecommendation,
    AgentRecord,
    Category,
    CategoryScores,
    MatchContext,
    ScoredSkill,
    SignalHitSet,
    SkillRecord,
)
from skill_radar.signals import extract_skill_signals, match_agent_signals


NOMINAL_WEIGHTS: Mapping[Category, int] = {
    Category.KEYWORD: 40,
    Category.FILE: 30,
    Category.CONTENT: 30,
}

HIT_BASE = 50
HIT_STEP = 25

AGENT_BASE_CONFIDENCE = 60
AGENT_BONUS_PER_MATCH = 10
AGENT_MAX_CONFIDENCE = 95


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def redistribute_weights(
    applicable: Iterable[Category],
    nominal: Mapping[Category, int] = NOMINAL_WEIGHTS,
) -> dict[Category, float]:
    """Normalised weights over the applicable categories (empty when none apply)."""
    categories = [c for c in dict.fromkeys(applicable) if nominal.get(c, 0) > 0]
    total = sum(nominal[c] for c in categories)
    if total <= 0:
        return {}
    return {c: nominal[c] / total for c in categories}


def category_percent(hit_set: SignalHitSet) -> float:
    hits = hit_set.hit_count
    if not hit_set.applicable or hits == 0:
        return 0.0
    declared = max(hit_set.declared, hits)
    fraction = 100.0 * hits / declared
    bonus = HIT_BASE + HIT_STEP * (hits - 1)
    return min(100.0, max(fraction, float(bonus)))


def combine(hit_sets: Iterable[SignalHitSet]) -> tuple[int, CategoryScores]:
    """Weighted confidence plus the per-category percentages that produced it."""
    hit_sets = tuple(hit_sets)
    weights = redistribute_weights(h.category for h in hit_sets if h.applicable)
    percents = {h.category: category_percent(h) for h in hit_sets}

    total = sum(weights[c] * percents.get(c, 0.0) for c in weights)
    scores = CategoryScores(
        keyword=round_half_up(percents.get(Category.KEYWORD, 0.0)),
        file=round_half_up(percents.get(Category.FILE, 0.0)),
        content=round_half_up(percents.get(Category.CONTENT, 0.0)),
    )
    return clamp(round_half_up(total)), scores


def score_skill(context: MatchContext, skill: SkillRecord) -> ScoredSkill | None:
    """Score one skill; ``None`` when nothing matched."""
    hit_sets = extract_skill_signals(context, skill)
    confidence, scores = combine(hit_sets)
    if confidence <= 0:
        return None
    matched: list[str] = []
    for hit_set in hit_sets:
        matched.extend(hit_set.hits)
    return ScoredSkill(
        skill=skill,
        confidence=confidence,
        matched_signals=tuple(matched),
        scores=scores,
        hit_sets=hit_sets,
    )


def score_skills(context: MatchContext, skills: Iterable[SkillRecord]) -> list[ScoredSkill]:
    """Scored skills in catalog order, zero-confidence ones left out."""
    results = []
    for skill in skills:
        scored = score_skill(context, skill)
        if scored is not None:
            results.append(scored)
    return results


def agent_confidence(match_count: int) -> int:
    if match_count <= 0:
        return 0
    return min(
        AGENT_MAX_CONFIDENCE,
        AGENT_BASE_CONFIDENCE + (match_count - 1) * AGENT_BONUS_PER_MATCH,
    )


def score_agent(prompt: str, agent: AgentRecord) -> AgentRecommendation:
    """Score one agent against a lower-cased prompt.

    Agents with no match come back with confidence 0 and empty reasoning;
    the inclusion threshold is applied by the ranker.
    """
    hits = match_agent_signals(prompt, agent)
    matched = hits.matched
    confidence = agent_confidence(len(matched))
    reasoning = generate_reasoning(agent, hits) if matched else ""
    return AgentRecommendation(
        agent=agent,
        confidence=confidence,
        matched_signals=matched,
        reasoning=reasoning,
        hits=hits,
    )


def score_agents(prompt: str, agents: Iterable[AgentRecord]) -> list[AgentRecommendation]:
    return [score_agent(prompt, agent) for agent in agents]
