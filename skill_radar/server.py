from __future__ import annotations

import logging
import sys

from skill_radar import tools
from skill_radar.catalog import SkillCatalog
from skill_radar.config import AppConfig, load_config
from skill_radar.errors import ConfigError, SkillRadarError


_logger = logging.getLogger("skill_radar")


def _setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(getattr(logging, level, logging.INFO))


def _warm_catalog(catalog: SkillCatalog) -> None:
    try:
        catalog.get()
    except SkillRadarError as exc:
        _logger.warning("Skill catalog not loaded at startup: %s", exc)


def build_server(config: AppConfig, catalog: SkillCatalog):
    from mcp.server.fastmcp import FastMCP

    mcp = FastMCP("skill-radar")

    @mcp.tool()
    def get_relevant_skills(
        prompt: str,
        open_files: list[str] | None = None,
        working_directory: str | None = None,
    ) -> dict:
        """Match skills to a prompt.

        Weighted scoring: keywords 40%, files 30%, content 30%. Categories
        with nothing to check are left out and their weight is spread over
        the others.

        Args:
            prompt: Prompt to analyze
            open_files: Paths of files open in the editor
            working_directory: Project directory the paths are relative to
        """
        return tools.get_relevant_skills(config, catalog, prompt, open_files, working_directory)

    @mcp.tool()
    def suggest_agent(prompt: str) -> dict:
        """Recommend agents for complex tasks: task-spec, convex, security, plan review."""
        return tools.suggest_agent(config, prompt)

    @mcp.tool()
    def get_skill_resources(
        skill_name: str,
        topic: str | None = None,
        keywords: list[str] | None = None,
    ) -> dict:
        """Find relevant files in <skill>/resources/ by topic and keywords."""
        return tools.get_skill_resources(config, skill_name, topic, keywords)

    @mcp.tool()
    def update_session_tracker(
        current_phase: str | None = None,
        completed_work: str | None = None,
        in_progress: str | None = None,
        files_modified: list[str] | None = None,
        commit_made: bool = False,
        last_commit: str | None = None,
    ) -> dict:
        """Record progress (commits, files, phases) for checkpoint recommendations."""
        return tools.update_session_tracker(
            config,
            current_phase=current_phase,
            completed_work=completed_work,
            in_progress=in_progress,
            files_modified=files_modified,
            commit_made=commit_made,
            last_commit=last_commit,
        )

    @mcp.tool()
    def should_create_checkpoint() -> dict:
        """Check whether a checkpoint is recommended (none/suggested/recommended/urgent)."""
        return tools.should_create_checkpoint(config)

    @mcp.tool()
    def create_continuation_brief(
        reason: str,
        context_to_load: list[str],
        completed_work: list[str],
        next_steps: list[str],
        in_progress_file: str | None = None,
        in_progress_description: str | None = None,
        estimated_completion: str | None = None,
    ) -> dict:
        """Write archive/continuation-brief-<timestamp>.md and reset the checkpoint."""
        return tools.create_continuation_brief(
            config,
            reason,
            context_to_load,
            completed_work,
            next_steps,
            in_progress_file=in_progress_file,
            in_progress_description=in_progress_description,
            estimated_completion=estimated_completion,
        )

    @mcp.tool()
    def reload_skills() -> dict:
        """Drop the cached skill catalog and scan the skills directory again."""
        return tools.reload_skills(catalog)

    return mcp


def main() -> None:
    _setup_logging()
    try:
        sys.stderr.reconfigure(line_buffering=True, write_through=True)
    except (AttributeError, ValueError):
        pass

    try:
        config = load_config()
    except ConfigError as exc:
        _logger.error("Invalid configuration: %s", exc)
        raise
    _setup_logging(config.log_level)

    _logger.info("Starting skill-radar")
    _logger.info("skills_dir=%s", str(config.skills_dir))
    _logger.info("project_root=%s", str(config.project_root))

    try:
        import mcp  # noqa: F401
    except ImportError as exc:
        _logger.error("Missing dependency 'mcp': %s", exc)
        print(
            "Missing dependency 'mcp'. Install dependencies first, e.g. `pip install -e .`\n"
            + f"Import error: {exc}",
            file=sys.stderr,
        )
        raise

    catalog = SkillCatalog(config.skills_dir)
    _warm_catalog(catalog)
    build_server(config, catalog).run()


if __name__ == "__main__":
    main()
