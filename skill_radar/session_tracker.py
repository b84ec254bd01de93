"""Session progress file and checkpoint recommendations.

The tracker lives in ``<project_root>/.claude/SESSION_TRACKER.json`` and only
counts milestones: commits, modified files and completed pieces of work.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from skill_radar.errors import SessionStateError


_logger = logging.getLogger(__name__)

SESSION_STATE_FILE = Path(".claude") / "SESSION_TRACKER.json"

CHECKPOINT_STATUSES = ("none", "suggested", "recommended", "urgent")

# (commits, files_modified)
URGENT_THRESHOLDS = (5, 20)
RECOMMENDED_THRESHOLDS = (3, 10)
SUGGESTED_THRESHOLDS = (2, 5)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionTracker:
    session_start: str
    last_checkpoint: str
    current_phase: str = "Unknown"
    completed_since_checkpoint: tuple[str, ...] = ()
    in_progress: str = "Session started"
    files_modified: tuple[str, ...] = ()
    commits_since_checkpoint: int = 0
    last_commit: str | None = None
    checkpoint_status: str = "none"

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["completed_since_checkpoint"] = list(self.completed_since_checkpoint)
        data["files_modified"] = list(self.files_modified)
        if data["last_commit"] is None:
            del data["last_commit"]
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "SessionTracker":
        if not isinstance(data, dict):
            raise SessionStateError("Invalid session tracker format: expected an object")

        def text(key: str, default: str | None = None) -> str:
            value = data.get(key, default)
            if not isinstance(value, str):
                raise SessionStateError(f"Invalid session tracker format: '{key}' must be a string")
            return value

        def text_list(key: str) -> tuple[str, ...]:
            value = data.get(key, [])
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise SessionStateError(f"Invalid session tracker format: '{key}' must be a list of strings")
            return tuple(value)

        commits = data.get("commits_since_checkpoint", 0)
        if isinstance(commits, bool) or not isinstance(commits, int) or commits < 0:
            raise SessionStateError(
                "Invalid session tracker format: 'commits_since_checkpoint' must be a non-negative integer"
            )
        status = text("checkpoint_status", "none")
        if status not in CHECKPOINT_STATUSES:
            raise SessionStateError(f"Invalid session tracker format: unknown status {status!r}")
        last_commit = data.get("last_commit")
        if last_commit is not None and not isinstance(last_commit, str):
            raise SessionStateError("Invalid session tracker format: 'last_commit' must be a string")

        return cls(
            session_start=text("session_start"),
            last_checkpoint=text("last_checkpoint"),
            current_phase=text("current_phase", "Unknown"),
            completed_since_checkpoint=text_list("completed_since_checkpoint"),
            in_progress=text("in_progress", ""),
            files_modified=text_list("files_modified"),
            commits_since_checkpoint=commits,
            last_commit=last_commit,
            checkpoint_status=status,
        )


@dataclass(frozen=True)
class CheckpointAdvice:
    status: str
    should_save: bool
    reasoning: str
    session_duration: str
    commits_since_checkpoint: int
    files_modified: int
    work_completed: int


def new_tracker(now: datetime | None = None) -> SessionTracker:
    stamp = (now or _utcnow()).isoformat()
    return SessionTracker(session_start=stamp, last_checkpoint=stamp)


def state_path(project_root: Path) -> Path:
    return Path(project_root) / SESSION_STATE_FILE


def load_session_tracker(project_root: Path) -> SessionTracker:
    """Read the tracker, or start a fresh one when no file exists yet."""
    path = state_path(project_root)
    if not path.exists():
        return new_tracker()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise SessionStateError(f"Cannot read session tracker {path}: {exc}") from exc
    return SessionTracker.from_dict(data)


def save_session_tracker(tracker: SessionTracker, project_root: Path) -> Path:
    path = state_path(project_root)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(tracker.to_dict(), indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise SessionStateError(f"Cannot write session tracker {path}: {exc}") from exc
    return path


def calculate_checkpoint_status(tracker: SessionTracker) -> str:
    commits = tracker.commits_since_checkpoint
    files = len(tracker.files_modified)

    if commits >= URGENT_THRESHOLDS[0] or files >= URGENT_THRESHOLDS[1]:
        return "urgent"
    if commits >= RECOMMENDED_THRESHOLDS[0] or files >= RECOMMENDED_THRESHOLDS[1]:
        return "recommended"
    if (
        commits >= SUGGESTED_THRESHOLDS[0]
        or files >= SUGGESTED_THRESHOLDS[1]
        or tracker.completed_since_checkpoint
    ):
        return "suggested"
    return "none"


def checkpoint_reasoning(status: str, tracker: SessionTracker) -> str:
    reasons = []
    if tracker.commits_since_checkpoint > 0:
        reasons.append(f"{tracker.commits_since_checkpoint} commit(s) made")
    if tracker.files_modified:
        reasons.append(f"{len(tracker.files_modified)} file(s) modified")
    if tracker.completed_since_checkpoint:
        reasons.append(f"{len(tracker.completed_since_checkpoint)} milestone(s) completed")
    reason_text = ", ".join(reasons)

    if status == "urgent":
        return f"URGENT: {reason_text}. Save now to preserve significant work."
    if status == "recommended":
        return f"Recommended: {reason_text}. Good checkpoint for context save."
    if status == "suggested":
        return f"Suggested: {reason_text}. Consider saving at this natural breakpoint."
    return "No checkpoint needed yet. Continue working."


def _parse_timestamp(value: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def session_duration(start: str, now: datetime | None = None) -> str:
    started = _parse_timestamp(start)
    if started is None:
        return "0m"
    elapsed = max(0, int(((now or _utcnow()) - started).total_seconds()))
    hours, remainder = divmod(elapsed, 3600)
    minutes = remainder // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def should_create_checkpoint(tracker: SessionTracker, now: datetime | None = None) -> CheckpointAdvice:
    status = calculate_checkpoint_status(tracker)
    duration = session_duration(tracker.session_start, now)
    return CheckpointAdvice(
        status=status,
        should_save=status in ("recommended", "urgent"),
        reasoning=checkpoint_reasoning(status, tracker),
        session_duration=duration,
        commits_since_checkpoint=tracker.commits_since_checkpoint,
        files_modified=len(tracker.files_modified),
        work_completed=len(tracker.completed_since_checkpoint),
    )


def apply_update(
    tracker: SessionTracker,
    current_phase: str | None = None,
    completed_work: str | None = None,
    in_progress: str | None = None,
    files_modified: Sequence[str] = (),
    commit_made: bool = False,
    last_commit: str | None = None,
) -> SessionTracker:
    """Fold one progress report into the tracker and recompute its status."""
    changes: dict[str, Any] = {}
    if current_phase:
        changes["current_phase"] = current_phase
    if completed_work:
        changes["completed_since_checkpoint"] = tracker.completed_since_checkpoint + (completed_work,)
    if in_progress:
        changes["in_progress"] = in_progress
    if files_modified:
        known = list(tracker.files_modified)
        for path in files_modified:
            if path not in known:
                known.append(path)
        changes["files_modified"] = tuple(known)
    if commit_made:
        changes["commits_since_checkpoint"] = tracker.commits_since_checkpoint + 1
    if last_commit:
        changes["last_commit"] = last_commit

    updated = replace(tracker, **changes)
    return replace(updated, checkpoint_status=calculate_checkpoint_status(updated))


def reset_checkpoint(tracker: SessionTracker, now: datetime | None = None) -> SessionTracker:
    return replace(
        tracker,
        last_checkpoint=(now or _utcnow()).isoformat(),
        completed_since_checkpoint=(),
        files_modified=(),
        commits_since_checkpoint=0,
        checkpoint_status="none",
    )


def update_session_tracker(project_root: Path, **updates: Any) -> SessionTracker:
    tracker = apply_update(load_session_tracker(project_root), **updates)
    save_session_tracker(tracker, project_root)
    _logger.info("Session tracker updated (status=%s)", tracker.checkpoint_status)
    return tracker
