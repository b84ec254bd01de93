"""Continuation briefs: a dense markdown snapshot to resume a session from."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from skill_radar.errors import SessionStateError
from skill_radar.session_tracker import (
    SessionTracker,
    load_session_tracker,
    reset_checkpoint,
    save_session_tracker,
)


_logger = logging.getLogger(__name__)

ARCHIVE_DIR = "archive"


@dataclass(frozen=True)
class BriefRequest:
    reason: str
    context_to_load: tuple[str, ...] = ()
    completed_work: tuple[str, ...] = ()
    next_steps: tuple[str, ...] = ()
    in_progress_file: str | None = None
    in_progress_description: str | None = None
    estimated_completion: str | None = None


def brief_timestamp(now: datetime) -> str:
    """``2026-10-19T08:15:00`` -> ``2026-10-19T08-15-00``"""
    return now.strftime("%Y-%m-%dT%H-%M-%S")


def render_brief(
    request: BriefRequest,
    tracker: SessionTracker,
    timestamp: str,
    brief_filename: str,
    now: datetime,
) -> str:
    lines: list[str] = [
        f"# SESSION_CONTINUATION_BRIEF_{timestamp}",
        "",
        f"**SAVE_REASON:** {request.reason}",
        f"**SESSION_START:** {tracker.session_start}",
        f"**CHECKPOINT_TIME:** {now.isoformat()}",
        f"**CURRENT_PHASE:** {tracker.current_phase}",
        "",
        "## CONTEXT_LOAD_PRIORITY",
        "",
    ]
    lines.extend(f"{i}. {path}" for i, path in enumerate(request.context_to_load, start=1))
    lines.extend(["", "## COMPLETED_WORK", ""])
    lines.extend(f"- [x] {work}" for work in request.completed_work)
    lines.extend(["", "## IN_PROGRESS", ""])
    if request.in_progress_file:
        lines.append(f"**File:** {request.in_progress_file}")
    if request.in_progress_description:
        lines.append(f"**Status:** {request.in_progress_description}")
    if not request.in_progress_file and not request.in_progress_description:
        lines.append("None (checkpoint at clean breakpoint)")
    lines.extend(["", "## NEXT_STEPS", ""])
    lines.extend(f"{i}. {step}" for i, step in enumerate(request.next_steps, start=1))
    lines.extend(
        [
            "",
            "## STATE_SNAPSHOT",
            "",
            f"commits_made={tracker.commits_since_checkpoint}",
            f"files_modified={len(tracker.files_modified)}",
            f"work_completed={len(request.completed_work)}",
        ]
    )
    if tracker.last_commit:
        lines.append(f"last_commit={tracker.last_commit}")
    if request.estimated_completion:
        lines.append(f"estimated_completion={request.estimated_completion}")
    lines.append("")

    if tracker.files_modified:
        lines.extend(["## FILES_MODIFIED", ""])
        lines.extend(f"- {path}" for path in tracker.files_modified)
        lines.append("")

    lines.extend(["## RESUME_COMMAND", "", "```", f"Read {ARCHIVE_DIR}/{brief_filename}"])
    if request.context_to_load:
        lines.append(f"Then load: {request.context_to_load[0]}")
    lines.extend(
        [
            "```",
            "",
            "---",
            "",
            "**Format:** AI-optimized continuation brief",
            "**Purpose:** Seamless session resumption without context loss",
            "**Next Session:** Load this brief first, then resume work",
        ]
    )
    return "\n".join(lines)


def create_continuation_brief(
    project_root: Path,
    request: BriefRequest,
    now: datetime | None = None,
) -> Path:
    """Write the brief under ``archive/`` and reset the checkpoint counters.

    The brief is the deliverable: if resetting the tracker fails afterwards
    the failure is logged and the brief path is still returned.
    """
    now = now or datetime.now(timezone.utc)
    tracker = load_session_tracker(project_root)

    timestamp = brief_timestamp(now)
    brief_filename = f"continuation-brief-{timestamp}.md"
    brief_path = Path(project_root) / ARCHIVE_DIR / brief_filename
    content = render_brief(request, tracker, timestamp, brief_filename, now)

    try:
        brief_path.parent.mkdir(parents=True, exist_ok=True)
        brief_path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise SessionStateError(f"Cannot write continuation brief {brief_path}: {exc}") from exc

    try:
        save_session_tracker(reset_checkpoint(tracker, now), project_root)
    except SessionStateError as exc:
        _logger.warning("Failed to reset checkpoint after writing brief: %s", exc)

    _logger.info("Continuation brief created: %s", brief_path)
    return brief_path
