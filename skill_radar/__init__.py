"""
skill-radar - MCP server that recommends skills and agents for a prompt

Scores a small catalog of skills (keywords, file globs, content phrases) and
agents (complexity and domain signals) and returns them ranked by confidence.
"""

__version__ = "0.1.0"
__author__ = "skill-radar Contributors"

from skill_radar.models import (
    AgentRecommendation,
    AgentRecord,
    Category,
    CategoryScores,
    MatchContext,
    ScoredSkill,
    SignalHitSet,
    SkillMatchReport,
    SkillRecord,
)
from skill_radar.config import AppConfig, load_config
from skill_radar.errors import InvalidInputError, SkillRadarError
from skill_radar.catalog import SkillCatalog
from skill_radar.scanner import scan_skills
from skill_radar.agents import AGENTS
from skill_radar.scoring import redistribute_weights, score_agent, score_skill
from skill_radar.ranking import rank_agents, rank_resources, rank_skills
from skill_radar.validation import build_match_context

__all__ = [
    "__version__",
    # Models
    "AgentRecommendation",
    "AgentRecord",
    "Category",
    "CategoryScores",
    "MatchContext",
    "ScoredSkill",
    "SignalHitSet",
    "SkillMatchReport",
    "SkillRecord",
    # Config
    "AppConfig",
    "load_config",
    # Errors
    "InvalidInputError",
    "SkillRadarError",
    # Catalog
    "SkillCatalog",
    "scan_skills",
    "AGENTS",
    # Scoring
    "redistribute_weights",
    "score_agent",
    "score_skill",
    "rank_agents",
    "rank_resources",
    "rank_skills",
    "build_match_context",
]
