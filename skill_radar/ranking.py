from __future__ import annotations

from typing import Iterable, Sequence

from skill_radar.models import (
    AgentRecommendation,
    AgentRecord,
    MatchContext,
    ResourceFile,
    ResourceRecommendation,
    ResourceReport,
    SkillMatchReport,
    SkillRecord,
)
from skill_radar.scoring import clamp, score_agents, score_skills


AGENT_MIN_CONFIDENCE = 50

RESOURCE_BASE_RELEVANCE = 50
RESOURCE_TOPIC_BONUS = 40
RESOURCE_KEYWORD_BONUS = 10
RESOURCE_MIN_RELEVANCE = 40


def rank_skills(context: MatchContext, skills: Sequence[SkillRecord]) -> SkillMatchReport:
    """Every matching skill, highest confidence first, catalog order on ties."""
    scored = score_skills(context, skills)
    scored.sort(key=lambda s: s.confidence, reverse=True)
    return SkillMatchReport(matches=tuple(scored), total_scanned=len(skills))


def rank_agents(
    prompt: str,
    agents: Iterable[AgentRecord],
    min_confidence: int = AGENT_MIN_CONFIDENCE,
) -> list[AgentRecommendation]:
    """Agents at or above ``min_confidence``. This is the only place the
    threshold is applied."""
    recommendations = [r for r in score_agents(prompt, agents) if r.confidence >= min_confidence]
    recommendations.sort(key=lambda r: r.confidence, reverse=True)
    return recommendations


def score_resource(
    resource: ResourceFile,
    topic: str | None = None,
    keywords: Sequence[str] = (),
) -> ResourceRecommendation:
    resource_topic = resource.topic.lower()
    matched_terms: list[str] = []
    relevance = RESOURCE_BASE_RELEVANCE

    if topic and topic.strip():
        if topic.strip().lower() in resource_topic:
            relevance += RESOURCE_TOPIC_BONUS
            matched_terms.append(f'topic: "{topic.strip()}"')

    # Every entry counts, repeats included; only zero-length ones never match.
    for keyword in keywords:
        if keyword and keyword.lower() in resource_topic:
            relevance += RESOURCE_KEYWORD_BONUS
            matched_terms.append(f'keyword: "{keyword}"')

    reasoning = (
        f"Matches {', '.join(matched_terms)}" if matched_terms else "General resource for this skill"
    )
    return ResourceRecommendation(resource=resource, relevance=clamp(relevance), reasoning=reasoning)


def rank_resources(
    resources: Sequence[ResourceFile],
    topic: str | None = None,
    keywords: Sequence[str] = (),
) -> ResourceReport:
    scored = [score_resource(r, topic, keywords) for r in resources]
    scored.sort(key=lambda r: r.relevance, reverse=True)
    kept = tuple(r for r in scored if r.relevance > RESOURCE_MIN_RELEVANCE)
    return ResourceReport(recommendations=kept, total_resources=len(resources))
