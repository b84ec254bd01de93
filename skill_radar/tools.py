"""Tool handlers behind the MCP server.

Every handler returns the ``{"ok": ...}`` dict the server hands back to the
client, with a compact one-line-per-item ``summary`` next to the structured
data. Failures are logged in full and reported with a sanitised
message.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from skill_radar.agents import AGENTS
from skill_radar.brief import BriefRequest, create_continuation_brief as write_brief
from skill_radar.catalog import SkillCatalog
from skill_radar.config import AppConfig
from skill_radar.errors import (
    CatalogError,
    InvalidInputError,
    SecurityError,
    SessionStateError,
    SkillNotFoundError,
    SkillRadarError,
)
from skill_radar.models import (
    AgentRecommendation,
    AgentRecord,
    ResourceReport,
    ScoredSkill,
    SkillMatchReport,
)
from skill_radar.ranking import rank_agents, rank_skills
from skill_radar.resources import recommend_resources
from skill_radar.session_tracker import (
    CheckpointAdvice,
    load_session_tracker,
    should_create_checkpoint as checkpoint_advice,
    update_session_tracker as record_progress,
)
from skill_radar.validation import (
    build_match_context,
    normalize_prompt,
    optional_text,
    required_text,
    string_list,
    validate_skill_name,
)


_logger = logging.getLogger(__name__)


def error_result(tool: str, exc: Exception) -> dict:
    """Log the full error and return a message that leaks no paths.

    Must be called from inside the ``except`` block that caught ``exc``.
    """
    if isinstance(exc, SkillRadarError):
        _logger.error("Tool %s failed: %s: %s", tool, type(exc).__name__, exc)
    else:
        _logger.exception("Tool %s failed unexpectedly", tool)
    if isinstance(exc, InvalidInputError):
        return {
            "ok": False,
            "error": "invalid_input",
            "field": exc.field,
            "detail": f"{tool} failed: {exc.detail}",
        }
    if isinstance(exc, SecurityError):
        return {"ok": False, "error": "access_denied", "detail": "Access denied: Invalid path or permission error"}
    if isinstance(exc, SkillNotFoundError):
        return {"ok": False, "error": "not_found", "detail": f"{tool} failed: Resource not found"}
    if isinstance(exc, CatalogError):
        return {"ok": False, "error": "catalog_unavailable", "detail": f"{tool} failed: Skill catalog unavailable"}
    if isinstance(exc, SessionStateError):
        return {"ok": False, "error": "session_state_error", "detail": f"{tool} failed: Session state unavailable"}
    return {"ok": False, "error": "internal_error", "detail": f"{tool} failed: Please check your input and try again"}


def _summarize_match(match: ScoredSkill) -> dict:
    return {
        "name": match.skill.name,
        "description": match.skill.description,
        "confidence": match.confidence,
        "scores": match.scores.as_dict(),
        "matched_signals": list(match.matched_signals),
    }


def _summarize_recommendation(rec: AgentRecommendation) -> dict:
    return {
        "name": rec.agent.name,
        "description": rec.agent.description,
        "when_to_use": rec.agent.when_to_use,
        "estimated_duration": rec.agent.estimated_duration,
        "confidence": rec.confidence,
        "matched_signals": list(rec.matched_signals),
        "complexity_signals": list(rec.hits.complexity),
        "domain_signals": list(rec.hits.domain),
        "reasoning": rec.reasoning,
    }


def format_skill_summary(report: SkillMatchReport) -> str:
    if not report.matches:
        return f"0/{report.total_scanned} skills"
    lines = [f"{len(report.matches)}/{report.total_scanned}:"]
    for match in report.matches:
        parts = []
        if match.scores.keyword > 0:
            parts.append(f"kw{match.scores.keyword}%")
        if match.scores.file > 0:
            parts.append(f"file{match.scores.file}%")
        if match.scores.content > 0:
            parts.append(f"ct{match.scores.content}%")
        detail = f" [{','.join(parts)}]" if parts else ""
        lines.append(f"{match.skill.name}:{match.confidence}%{detail}")
    return "\n".join(lines)


def format_agent_summary(recommendations: Sequence[AgentRecommendation]) -> str:
    if not recommendations:
        return "0 agents"
    return "\n".join(
        f"{r.agent.name}:{r.confidence}% [{','.join(r.matched_signals)}]" for r in recommendations
    )


def format_resource_summary(report: ResourceReport) -> str:
    if not report.recommendations:
        return f"0/{report.total_resources} resources"
    lines = [f"{len(report.recommendations)}/{report.total_resources}:"]
    lines.extend(
        f"{r.resource.file_name}:{r.relevance}% {r.resource.file_path}" for r in report.recommendations
    )
    return "\n".join(lines)


def format_checkpoint_summary(advice: CheckpointAdvice) -> str:
    return (
        f"{advice.status}:{'SAVE' if advice.should_save else 'OK'} "
        f"c{advice.commits_since_checkpoint} f{advice.files_modified} "
        f"w{advice.work_completed} {advice.session_duration}"
    )


def get_relevant_skills(
    config: AppConfig,
    catalog: SkillCatalog,
    prompt: Any,
    open_files: Any = None,
    working_directory: Any = None,
) -> dict:
    try:
        context = build_match_context(
            prompt,
            open_files=open_files,
            working_directory=working_directory,
            max_length=config.max_prompt_length,
        )
        report = rank_skills(context, catalog.get())
    except Exception as exc:
        return error_result("get_relevant_skills", exc)
    return {
        "ok": True,
        "total_skills_scanned": report.total_scanned,
        "matches": [_summarize_match(m) for m in report.matches],
        "summary": format_skill_summary(report),
    }


def suggest_agent(
    config: AppConfig,
    prompt: Any,
    agents: Sequence[AgentRecord] = AGENTS,
) -> dict:
    try:
        normalized = normalize_prompt(prompt, max_length=config.max_prompt_length)
        recommendations = rank_agents(normalized, agents)
    except Exception as exc:
        return error_result("suggest_agent", exc)
    return {
        "ok": True,
        "recommendations": [_summarize_recommendation(r) for r in recommendations],
        "summary": format_agent_summary(recommendations),
    }


def get_skill_resources(
    config: AppConfig,
    skill_name: Any,
    topic: Any = None,
    keywords: Any = None,
) -> dict:
    try:
        name = validate_skill_name(skill_name)
        report = recommend_resources(
            config.skills_dir,
            name,
            topic=optional_text(topic, "topic"),
            keywords=string_list(keywords, "keywords"),
        )
    except Exception as exc:
        return error_result("get_skill_resources", exc)
    return {
        "ok": True,
        "total_resources": report.total_resources,
        "recommendations": [
            {
                "file_name": r.resource.file_name,
                "file_path": str(r.resource.file_path),
                "topic": r.resource.topic,
                "skill_name": r.resource.skill_name,
                "relevance": r.relevance,
                "reasoning": r.reasoning,
            }
            for r in report.recommendations
        ],
        "summary": format_resource_summary(report),
    }


def update_session_tracker(
    config: AppConfig,
    current_phase: Any = None,
    completed_work: Any = None,
    in_progress: Any = None,
    files_modified: Any = None,
    commit_made: Any = False,
    last_commit: Any = None,
) -> dict:
    try:
        if not isinstance(commit_made, bool):
            raise InvalidInputError("commit_made", "must be a boolean")
        tracker = record_progress(
            config.project_root,
            current_phase=optional_text(current_phase, "current_phase"),
            completed_work=optional_text(completed_work, "completed_work"),
            in_progress=optional_text(in_progress, "in_progress"),
            files_modified=string_list(files_modified, "files_modified"),
            commit_made=commit_made,
            last_commit=optional_text(last_commit, "last_commit"),
        )
    except Exception as exc:
        return error_result("update_session_tracker", exc)
    return {
        "ok": True,
        "message": "Session tracker updated successfully",
        "checkpoint_status": tracker.checkpoint_status,
        "summary": f"tracker:{tracker.checkpoint_status}",
    }


def should_create_checkpoint(config: AppConfig) -> dict:
    try:
        advice = checkpoint_advice(load_session_tracker(config.project_root))
    except Exception as exc:
        return error_result("should_create_checkpoint", exc)
    return {
        "ok": True,
        "status": advice.status,
        "should_save": advice.should_save,
        "reasoning": advice.reasoning,
        "stats": {
            "session_duration": advice.session_duration,
            "commits_since_checkpoint": advice.commits_since_checkpoint,
            "files_modified": advice.files_modified,
            "work_completed": advice.work_completed,
        },
        "summary": format_checkpoint_summary(advice),
    }


def create_continuation_brief(
    config: AppConfig,
    reason: Any,
    context_to_load: Any,
    completed_work: Any,
    next_steps: Any,
    in_progress_file: Any = None,
    in_progress_description: Any = None,
    estimated_completion: Any = None,
) -> dict:
    try:
        request = BriefRequest(
            reason=required_text(reason, "reason"),
            context_to_load=string_list(context_to_load, "context_to_load"),
            completed_work=string_list(completed_work, "completed_work"),
            next_steps=string_list(next_steps, "next_steps"),
            in_progress_file=optional_text(in_progress_file, "in_progress_file"),
            in_progress_description=optional_text(in_progress_description, "in_progress_description"),
            estimated_completion=optional_text(estimated_completion, "estimated_completion"),
        )
        brief_path = write_brief(config.project_root, request)
    except Exception as exc:
        return error_result("create_continuation_brief", exc)
    return {
        "ok": True,
        "brief_path": str(brief_path),
        "message": f"Continuation brief created: {brief_path.name}",
        "summary": f"brief:{brief_path}",
    }


def reload_skills(catalog: SkillCatalog) -> dict:
    catalog.reset()
    try:
        skills = catalog.get()
    except Exception as exc:
        return error_result("reload_skills", exc)
    return {"ok": True, "count": len(skills), "skills": [s.name for s in skills]}
