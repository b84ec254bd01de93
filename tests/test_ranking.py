from pathlib import Path

from skill_radar.agents import AGENTS
from skill_radar.models import AgentRecord, MatchContext, ResourceFile, SkillRecord
from skill_radar.ranking import rank_agents, rank_resources, rank_skills, score_resource


def _skill(name, *keywords):
    return SkillRecord(name=name, description=name, keywords=keywords)


def _resource(file_name, topic):
    return ResourceFile(file_name=file_name, file_path=Path(file_name), topic=topic, skill_name="react")


def test_skills_sorted_by_confidence_with_stable_ties():
    skills = [
        _skill("alpha", "auth", "login", "session"),
        _skill("beta", "auth"),
        _skill("gamma", "cooking"),
        _skill("delta", "auth"),
    ]
    report = rank_skills(MatchContext(prompt="fix auth login"), skills)
    assert [m.skill.name for m in report.matches] == ["beta", "delta", "alpha"]
    assert [m.confidence for m in report.matches] == [100, 100, 75]
    assert report.total_scanned == 4


def test_empty_catalog_is_not_an_error():
    report = rank_skills(MatchContext(prompt="anything"), [])
    assert report.matches == ()
    assert report.total_scanned == 0


def test_ranking_is_deterministic():
    skills = [_skill("a", "x", "y"), _skill("b", "y"), _skill("c", "x")]
    ctx = MatchContext(prompt="x y")
    assert rank_skills(ctx, skills) == rank_skills(ctx, skills)


def test_agents_below_threshold_are_dropped():
    agents = [
        AgentRecord(name="one", description="", when_to_use="", domain_signals=("audit",)),
        AgentRecord(name="none", description="", when_to_use="", domain_signals=("bread",)),
        AgentRecord(name="three", description="", when_to_use="", domain_signals=("audit", "this", "code")),
    ]
    recs = rank_agents("audit this code", agents)
    assert [(r.agent.name, r.confidence) for r in recs] == [("three", 80), ("one", 60)]


def test_agent_threshold_is_configurable():
    recs = rank_agents("audit this code", AGENTS, min_confidence=96)
    assert recs == []


def test_builtin_agents_for_security_review():
    recs = rank_agents("please review this for security and auth issues", AGENTS)
    names = [r.agent.name for r in recs]
    assert names[0] == "security-auditor"
    assert recs[0].confidence == 80
    assert "plan-reviewer" in names
    assert all(50 <= r.confidence <= 95 for r in recs)


def test_resource_topic_match_adds_40():
    rec = score_resource(_resource("react-19-2-features.md", "react 19 2 features"), topic="react 19")
    assert rec.relevance == 90
    assert rec.reasoning == 'Matches topic: "react 19"'


def test_resource_keywords_add_10_each_and_clamp():
    rec = score_resource(
        _resource("react-19-2-features.md", "react 19 2 features"),
        topic="React",
        keywords=["features", "19", "react", "hooks"],
    )
    assert rec.relevance == 100


def test_resource_without_matches_keeps_base_relevance():
    rec = score_resource(_resource("testing.md", "testing"), topic="routing", keywords=[""])
    assert rec.relevance == 50
    assert rec.reasoning == "General resource for this skill"


def test_rank_resources_orders_and_counts():
    resources = [
        _resource("testing.md", "testing"),
        _resource("server-components.md", "server components"),
    ]
    report = rank_resources(resources, topic="server")
    assert [r.resource.file_name for r in report.recommendations] == ["server-components.md", "testing.md"]
    assert report.total_resources == 2


def test_resource_keywords_count_every_entry():
    rec = score_resource(_resource("react-19-2-features.md", "react 19 2 features"), keywords=["react", "React"])
    assert rec.relevance == 70
    assert rec.reasoning == 'Matches keyword: "react", keyword: "React"'


def test_resource_keywords_are_not_trimmed():
    rec = score_resource(_resource("react-19-2-features.md", "react 19 2 features"), keywords=[" react"])
    assert rec.relevance == 50
