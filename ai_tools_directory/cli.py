"""Command line entry points for the directory maintenance jobs."""

import asyncio
import logging
import os
from collections import Counter
from pathlib import Path
from typing import Optional

import click

from .classifier import ToolClassifier
from .completion_utils import build_completion_client
from .config import TOOLS_FILE
from .config import MissingCredentialsError
from .config import require_env
from .data_manager import backup_tools
from .data_manager import load_tools
from .data_manager import save_tools
from .descriptions import DescriptionRewriter
from .descriptions import cleanup_descriptions
from .descriptions import needs_fixing
from .descriptions import quick_fix_descriptions
from .discovery import DEFAULT_MAX_PER_QUERY
from .discovery import run_discovery
from .logging_config import setup_logging
from .logging_utils import run_summary
from .logos import LogoResolver
from .maintenance import backfill_dates
from .maintenance import is_recently_added
from .popularity import backfill_popularity
from .popularity import needs_popularity
from .popularity import top_tools
from .search import QUICK_SEARCH_QUERIES
from .search import SEARCH_QUERIES
from .search import BraveSearchClient

logger = logging.getLogger(__name__)


def _credentials(*names: str) -> list[str]:
    """Fetch every key up front so a missing one aborts before any work starts."""
    try:
        return [require_env(name) for name in names]
    except MissingCredentialsError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    "--tools-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=TOOLS_FILE,
    show_default=True,
    help="JSON array of directory entries.",
)
@click.option("--log-level", default="INFO", show_default=True, help="Root log level.")
@click.pass_context
def main(ctx: click.Context, tools_file: Path, log_level: str) -> None:
    """AI tools directory maintenance."""
    try:
        setup_logging(log_level)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level") from e
    ctx.obj = {"tools_file": tools_file}


@main.command()
@click.argument("max_per_query", type=int, default=DEFAULT_MAX_PER_QUERY, required=False)
@click.option("--quick", is_flag=True, help="Only run the short query list.")
@click.option("--backup", "make_backup", is_flag=True, help="Copy the tools file to <file>.backup first.")
@click.option("--no-popularity", is_flag=True, help="Skip popularity lookups for new tools.")
@click.pass_obj
def discover(obj: dict, max_per_query: int, quick: bool, make_backup: bool, no_popularity: bool) -> None:
    """Search for new AI tools and add up to MAX_PER_QUERY per search phrase."""
    brave_key, groq_key = _credentials("BRAVE_API_KEY", "GROQ_API_KEY")
    if max_per_query < 1:
        logger.warning(f"MAX_PER_QUERY must be positive, using {DEFAULT_MAX_PER_QUERY}")
        max_per_query = DEFAULT_MAX_PER_QUERY
    tools_file = obj["tools_file"]
    if make_backup:
        backup_tools(tools_file)

    async def _run() -> None:
        search_client = BraveSearchClient(brave_key)
        logo_resolver = LogoResolver()
        try:
            with run_summary("discovery") as summary:
                result = await run_discovery(
                    search_client=search_client,
                    classifier=ToolClassifier(build_completion_client(groq_key)),
                    logo_resolver=logo_resolver,
                    tools_file=tools_file,
                    queries=QUICK_SEARCH_QUERIES if quick else SEARCH_QUERIES,
                    max_per_query=max_per_query,
                    score_popularity=not no_popularity,
                )
                for name, value in vars(result.stats).items():
                    summary.add_metric(name, value)
        finally:
            await search_client.aclose()
            await logo_resolver.aclose()

    asyncio.run(_run())


@main.command("backfill-popularity")
@click.option(
    "--max-tools",
    type=int,
    default=lambda: int(os.getenv("MAX_TOOLS") or 0) or None,
    help="Limit how many tools are scored (also read from MAX_TOOLS).",
)
@click.pass_obj
def backfill_popularity_command(obj: dict, max_tools: Optional[int]) -> None:
    """Score tools that have no popularity value yet."""
    (brave_key,) = _credentials("BRAVE_API_KEY")
    tools_file = obj["tools_file"]
    tools = load_tools(tools_file)
    if not any(needs_popularity(tool) for tool in tools):
        logger.info("All tools already have popularity scores")
        return

    async def _run() -> int:
        search_client = BraveSearchClient(brave_key)
        try:
            return await backfill_popularity(tools, search_client, max_tools=max_tools)
        finally:
            await search_client.aclose()

    with run_summary("backfill_popularity") as summary:
        updated = asyncio.run(_run())
        summary.add_metric("updated", updated)
        if not save_tools(tools, tools_file):
            raise click.ClickException(f"Could not write {tools_file}")

    logger.info("Top 10 most popular tools:")
    for idx, tool in enumerate(top_tools(tools), 1):
        logger.info(f"  {idx}. {tool['name']} - {tool.get('popularity') or 50}")


@main.command("backfill-dates")
@click.pass_obj
def backfill_dates_command(obj: dict) -> None:
    """Give undated tools a dateAdded 30 days in the past."""
    tools_file = obj["tools_file"]
    tools = load_tools(tools_file)
    updated = backfill_dates(tools)
    if updated:
        save_tools(tools, tools_file)
    else:
        logger.info("No changes needed, all tools already have dateAdded")


@main.command("cleanup-descriptions")
@click.pass_obj
def cleanup_descriptions_command(obj: dict) -> None:
    """Rewrite poor descriptions with the completion model."""
    (groq_key,) = _credentials("GROQ_API_KEY")
    tools_file = obj["tools_file"]
    tools = load_tools(tools_file)

    with run_summary("cleanup_descriptions") as summary:
        rewriter = DescriptionRewriter(build_completion_client(groq_key))
        fixed = asyncio.run(cleanup_descriptions(tools, rewriter))
        summary.add_metric("fixed", fixed)
        if fixed:
            save_tools(tools, tools_file)


@main.command("quick-fix-descriptions")
@click.pass_obj
def quick_fix_descriptions_command(obj: dict) -> None:
    """Strip HTML, truncation and boilerplate from descriptions without any API."""
    tools_file = obj["tools_file"]
    tools = load_tools(tools_file)
    fixed = quick_fix_descriptions(tools)
    logger.info(f"Fixed {fixed} descriptions")
    if fixed:
        save_tools(tools, tools_file)


@main.command()
@click.pass_obj
def backup(obj: dict) -> None:
    """Copy the tools file to <file>.backup."""
    if backup_tools(obj["tools_file"]) is None:
        raise click.ClickException(f"{obj['tools_file']} does not exist")


@main.command()
@click.pass_obj
def stats(obj: dict) -> None:
    """Summarize the tools file: categories, recent additions and pending cleanups."""
    tools = load_tools(obj["tools_file"])
    by_category = Counter(tool.get("category", "") for tool in tools)

    click.echo(f"Total tools: {len(tools)}")
    for category, count in sorted(by_category.items()):
        click.echo(f"  {category or '(none)'}: {count}")
    click.echo(f"Recently added: {sum(1 for tool in tools if is_recently_added(tool))}")
    click.echo(f"Missing popularity: {sum(1 for tool in tools if needs_popularity(tool))}")
    click.echo(f"Descriptions needing a fix: {sum(1 for tool in tools if needs_fixing(tool.get('description', '')))}")


if __name__ == "__main__":
    main()
