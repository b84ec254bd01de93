import pytest

from skill_radar.agents import AGENTS
from skill_radar.models import AgentRecord, Category, MatchContext, SignalHitSet, SkillRecord
from skill_radar.scoring import (
    agent_confidence,
    category_percent,
    combine,
    redistribute_weights,
    round_half_up,
    score_agent,
    score_skill,
)


CONVEX = SkillRecord(
    name="convex-patterns",
    description="Convex backend patterns",
    keywords=("convex", "mutation", "query"),
    file_patterns=("**/convex/**/*.ts",),
    content_patterns=("webhook", "scheduled job"),
)


def test_weights_sum_to_one_for_every_applicable_subset():
    subsets = [
        [Category.KEYWORD, Category.FILE, Category.CONTENT],
        [Category.KEYWORD, Category.CONTENT],
        [Category.KEYWORD, Category.FILE],
        [Category.FILE],
    ]
    for subset in subsets:
        weights = redistribute_weights(subset)
        assert set(weights) == set(subset)
        assert sum(weights.values()) == pytest.approx(1.0)


def test_redistribution_is_proportional():
    weights = redistribute_weights([Category.KEYWORD, Category.CONTENT])
    assert weights[Category.KEYWORD] == pytest.approx(40 / 70)
    assert weights[Category.CONTENT] == pytest.approx(30 / 70)


def test_no_applicable_category_gives_no_weights():
    assert redistribute_weights([]) == {}


def test_category_percent_saturates_and_is_monotonic():
    previous = 0.0
    for hits in range(0, 8):
        hit_set = SignalHitSet(
            category=Category.KEYWORD,
            hits=tuple(f"k{i}" for i in range(hits)),
            declared=10,
        )
        percent = category_percent(hit_set)
        assert previous <= percent <= 100.0
        previous = percent
    assert previous == 100.0


def test_category_percent_full_match_is_100():
    hit_set = SignalHitSet(category=Category.CONTENT, hits=("a", "b", "c"), declared=3)
    assert category_percent(hit_set) == 100.0


def test_category_percent_not_applicable_is_zero():
    hit_set = SignalHitSet(category=Category.FILE, hits=(), declared=2, applicable=False)
    assert category_percent(hit_set) == 0.0


def test_round_half_up():
    assert round_half_up(64.5) == 65
    assert round_half_up(64.49) == 64
    assert round_half_up(0.5) == 1


def test_full_keyword_match_without_other_signals_scores_100():
    skill = SkillRecord(name="convex", description="Convex", keywords=("convex", "mutation"))
    result = score_skill(MatchContext(prompt="create a convex mutation"), skill)
    assert result is not None
    assert result.confidence == 100
    assert result.scores.keyword == 100
    assert result.scores.file == 0
    assert result.scores.content == 0
    assert result.matched_signals == ("convex", "mutation")


def test_unrelated_prompt_is_excluded():
    skill = SkillRecord(name="convex", description="Convex", keywords=("convex", "mutation"))
    assert score_skill(MatchContext(prompt="unrelated text about cooking"), skill) is None


def test_prompt_only_query_can_reach_100():
    prompt = "convex mutation and query behind a webhook as a scheduled job"
    result = score_skill(MatchContext(prompt=prompt), CONVEX)
    assert result.confidence == 100


def test_supplied_files_that_miss_cap_the_score():
    prompt = "convex mutation and query behind a webhook as a scheduled job"
    ctx = MatchContext(prompt=prompt, open_files=("web/app.tsx",))
    result = score_skill(ctx, CONVEX)
    assert result.confidence == 70
    assert result.scores.file == 0


def test_partial_matches_use_weighted_sum():
    result = score_skill(MatchContext(prompt="convex mutation webhook"), CONVEX)
    # keyword 75% * 4/7 + content 50% * 3/7
    assert result.confidence == 64
    assert result.scores.as_dict() == {"keyword": 75, "file": 0, "content": 50}
    assert result.matched_signals == ("convex", "mutation", "webhook")


def test_file_hit_alone_is_enough_to_be_included():
    ctx = MatchContext(prompt="fix the bug", open_files=("convex/users.ts",))
    result = score_skill(ctx, CONVEX)
    assert result is not None
    assert result.scores.file == 100
    assert result.confidence == 30


def test_adding_a_keyword_never_lowers_confidence():
    words = ["convex", "mutation", "query"]
    previous = 0
    for n in range(1, len(words) + 1):
        prompt = " ".join(words[:n]) + " webhook"
        result = score_skill(MatchContext(prompt=prompt), CONVEX)
        assert result.confidence >= previous
        previous = result.confidence


def test_confidence_is_bounded():
    confidence, _ = combine(
        [
            SignalHitSet(category=Category.KEYWORD, hits=tuple("abcdefgh"), declared=2),
            SignalHitSet(category=Category.FILE, hits=("x",), declared=1),
            SignalHitSet(category=Category.CONTENT, hits=("y",), declared=1),
        ]
    )
    assert 0 <= confidence <= 100


def test_agent_confidence_curve():
    assert agent_confidence(0) == 0
    assert agent_confidence(1) == 60
    assert agent_confidence(3) == 80
    assert agent_confidence(4) == 90
    assert agent_confidence(5) == 95
    assert agent_confidence(12) == 95


def test_agent_three_signals_score_80():
    agent = AgentRecord(
        name="auditor",
        description="",
        when_to_use="",
        complexity_signals=("review",),
        domain_signals=("security", "auth"),
    )
    rec = score_agent("please review this for security and auth issues", agent)
    assert rec.confidence == 80
    assert rec.matched_signals == ("review", "security", "auth")


def test_agent_single_signal_scores_base():
    agent = AgentRecord(name="auditor", description="", when_to_use="", domain_signals=("audit",))
    rec = score_agent("audit this", agent)
    assert rec.confidence == 60


def test_agent_without_match_scores_zero_and_has_no_reasoning():
    rec = score_agent("bake bread", AGENTS[2])
    assert rec.confidence == 0
    assert rec.matched_signals == ()
    assert rec.reasoning == ""


def test_security_auditor_reasoning_lists_domain_matches():
    security = next(a for a in AGENTS if a.name == "security-auditor")
    rec = score_agent("audit the auth flow for xss and csrf", security)
    assert rec.reasoning.startswith("Security concerns: auth, xss, csrf")
    assert rec.reasoning.endswith("recommend mitigations")


def test_task_spec_reasoning_mentions_duration_after_three_signals():
    task_spec = next(a for a in AGENTS if a.name == "task-spec-creator")
    rec = score_agent("redesign the complex workflow architecture", task_spec)
    assert "This appears to be a complex, multi-step task" in rec.reasoning
    assert "Estimated as a >4 hours task" in rec.reasoning


def test_plan_reviewer_highlight_comes_from_domain_signals():
    reviewer = next(a for a in AGENTS if a.name == "plan-reviewer")
    rec = score_agent("review my plan", reviewer)
    assert rec.reasoning.startswith("Plan or specification review requested")
