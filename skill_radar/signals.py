"""Signal extractors.

Each extractor turns a MatchContext into raw evidence for one item in one
category. Matching is plain case-insensitive substring containment (globs for
file paths); nothing here weights or caps anything.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable

from skill_radar.frontmatter import normalize_signals
from skill_radar.models import (
    AgentRecord,
    AgentSignalHits,
    Category,
    MatchContext,
    SignalHitSet,
    SkillRecord,
)


def find_substrings(text: str, signals: Iterable[str]) -> tuple[str, ...]:
    """Signals contained in ``text``, in declaration order."""
    return tuple(s for s in normalize_signals(signals) if s in text)


def _normalize_path(path: str, working_directory: str | None) -> str:
    normalized = path.strip().replace("\\", "/").lower()
    if working_directory:
        root = working_directory.strip().replace("\\", "/").lower().rstrip("/")
        if root and normalized.startswith(root + "/"):
            normalized = normalized[len(root) + 1:]
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


@lru_cache(maxsize=256)
def _glob_regex(pattern: str) -> re.Pattern[str]:
    # `*` and `?` stay inside one path segment; only `**` crosses `/`.
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
            continue
        if pattern.startswith("**", i):
            parts.append(".*")
            i += 2
            continue
        if ch == "*":
            parts.append("[^/]*")
        elif ch == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(ch))
        i += 1
    return re.compile("".join(parts), re.DOTALL)


def path_matches(path: str, pattern: str) -> bool:
    """Glob match where ``*`` stays within a segment and ``**/`` may also
    match zero directories.

    Relative patterns are tried against every trailing part of the path, so
    ``convex/*.ts`` matches ``/repo/convex/users.ts`` but not
    ``convex/lib/users.ts``.
    """
    if not path or not pattern:
        return False
    candidates = [path]
    if not pattern.startswith("/"):
        candidates.extend(path[i + 1:] for i, ch in enumerate(path) if ch == "/")
    regex = _glob_regex(pattern)
    return any(regex.fullmatch(c) for c in candidates if c)


def extract_keyword_hits(context: MatchContext, skill: SkillRecord) -> SignalHitSet:
    keywords = normalize_signals(skill.keywords)
    return SignalHitSet(
        category=Category.KEYWORD,
        hits=find_substrings(context.prompt, keywords),
        declared=len(keywords),
        applicable=bool(keywords),
    )


def extract_file_hits(context: MatchContext, skill: SkillRecord) -> SignalHitSet:
    """Hits are the declared patterns matched by at least one open file."""
    patterns = normalize_signals(skill.file_patterns)
    files = [_normalize_path(f, context.working_directory) for f in context.open_files]
    files = [f for f in files if f]
    if not patterns or not files:
        return SignalHitSet(category=Category.FILE, declared=len(patterns), applicable=False)
    hits = tuple(p for p in patterns if any(path_matches(f, p) for f in files))
    return SignalHitSet(category=Category.FILE, hits=hits, declared=len(patterns), applicable=True)


def extract_content_hits(context: MatchContext, skill: SkillRecord) -> SignalHitSet:
    phrases = normalize_signals(skill.content_patterns)
    return SignalHitSet(
        category=Category.CONTENT,
        hits=find_substrings(context.prompt, phrases),
        declared=len(phrases),
        applicable=bool(phrases),
    )


def extract_skill_signals(context: MatchContext, skill: SkillRecord) -> tuple[SignalHitSet, ...]:
    return (
        extract_keyword_hits(context, skill),
        extract_file_hits(context, skill),
        extract_content_hits(context, skill),
    )


def match_agent_signals(prompt: str, agent: AgentRecord) -> AgentSignalHits:
    return AgentSignalHits(
        complexity=find_substrings(prompt, agent.complexity_signals),
        domain=find_substrings(prompt, agent.domain_signals),
    )
