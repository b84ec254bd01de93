"""Built-in agent catalog and the reasoning text attached to recommendations."""

from __future__ import annotations

from skill_radar.models import AgentReasoning, AgentRecord, AgentSignalHits


AGENTS: tuple[AgentRecord, ...] = (
    AgentRecord(
        name="task-spec-creator",
        description="Creates detailed task specifications for complex features",
        when_to_use="Multi-step features, architectural changes, tasks >4 hours",
        complexity_signals=(
            "multi-step",
            "architecture",
            "refactor entire",
            "redesign",
            "rebuild",
            "major feature",
            "complex",
            "system",
            "build",
            "implement new",
            "add feature",
        ),
        domain_signals=("feature", "system", "workflow", "integration"),
        estimated_duration=">4 hours",
        reasoning=AgentReasoning(
            highlight_signals=("multi-step", "architecture", "complex", "major feature"),
            highlight_source="complexity",
            highlight_note="This appears to be a complex, multi-step task",
            duration_threshold=3,
            closing=(
                "task-spec-creator will create a detailed specification with phases, "
                "context strategy, and success criteria"
            ),
        ),
    ),
    AgentRecord(
        name="convex-architect",
        description="Expert in Convex backend implementation with security best practices",
        when_to_use="Convex backend work, mutations, queries, schemas, database design",
        complexity_signals=("implement", "create", "build", "design", "refactor"),
        domain_signals=(
            "convex",
            "mutation",
            "query",
            "action",
            "schema",
            "database",
            "backend",
            "api",
            "server",
        ),
        estimated_duration="1-4 hours",
        reasoning=AgentReasoning(
            domain_prefix="Convex-specific work detected",
            closing="convex-architect specializes in backend implementation with security best practices",
        ),
    ),
    AgentRecord(
        name="security-auditor",
        description="Reviews code for security vulnerabilities and best practices",
        when_to_use="Security reviews, auth implementation, vulnerability assessment",
        complexity_signals=("audit", "review", "check", "verify", "assess", "analyze"),
        domain_signals=(
            "security",
            "auth",
            "authentication",
            "authorization",
            "validation",
            "sanitize",
            "vulnerability",
            "exploit",
            "xss",
            "sql injection",
            "csrf",
        ),
        estimated_duration="1-2 hours",
        reasoning=AgentReasoning(
            domain_prefix="Security concerns",
            closing="security-auditor will review for vulnerabilities and recommend mitigations",
        ),
    ),
    AgentRecord(
        name="plan-reviewer",
        description="Reviews task specifications and implementation plans",
        when_to_use="Reviewing plans, assessing feasibility, catching issues early",
        complexity_signals=("review", "assess", "evaluate", "check", "validate"),
        domain_signals=("plan", "specification", "task spec", "design", "approach", "strategy"),
        estimated_duration="30 minutes - 1 hour",
        reasoning=AgentReasoning(
            highlight_signals=("plan", "specification"),
            highlight_source="domain",
            highlight_note="Plan or specification review requested",
            closing="plan-reviewer will assess feasibility and catch potential issues early",
        ),
    ),
)


def generate_reasoning(agent: AgentRecord, hits: AgentSignalHits) -> str:
    """Explain a recommendation from which sub-category each signal matched in."""
    rules = agent.reasoning
    reasons: list[str] = []

    source = hits.domain if rules.highlight_source == "domain" else hits.complexity
    if rules.highlight_note and any(s in rules.highlight_signals for s in source):
        reasons.append(rules.highlight_note)
    if rules.domain_prefix and hits.domain:
        reasons.append(f"{rules.domain_prefix}: {', '.join(hits.domain[:3])}")
    if rules.duration_threshold and len(hits.matched) >= rules.duration_threshold:
        reasons.append(f"Estimated as a {agent.estimated_duration} task")
    if rules.closing:
        reasons.append(rules.closing)

    return ". ".join(reasons)
