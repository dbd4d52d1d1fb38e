# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands for harvesting note-count extremes, publishing them and inspecting the cache

from pathlib import Path

import asyncclick as click
import httpx
from rich.console import Console
from rich.panel import Panel

from arcwiki_extremes.config import get_config
from arcwiki_extremes.core.pipeline import HarvestPipeline, HarvestResult
from arcwiki_extremes.extraction.base import MalformedResponse
from arcwiki_extremes.extraction.wiki.client import WikiFetcher
from arcwiki_extremes.persistence import DirectoryContentCache, MemoryContentCache, compute_fetch_key
from arcwiki_extremes.services.wiki.publisher import PublishError, WikiPublisher
from arcwiki_extremes.utils.logging import (
    LoggingMode,
    configure_logging,
    create_pool_progress,
    get_logger,
    get_logging_status,
)
from arcwiki_extremes.utils.retry import FetchExhausted
from arcwiki_extremes.utils.rich_tables import (
    create_extremes_table,
    create_harvest_summary_table,
    create_logging_status_table,
    print_rich_table,
)

console = Console()
logger = get_logger(__name__)


def _display_harvest_results(result: HarvestResult) -> None:
    """Display the extremes and run summary as rich tables."""
    print_rich_table(console, create_extremes_table(result.artifact))
    print_rich_table(console, create_harvest_summary_table(result))


async def _run_pipeline(pipeline: HarvestPipeline, json_output: bool) -> HarvestResult:
    if json_output:
        return await pipeline.run()

    _progress, _task_id, tracker = create_pool_progress(console)
    with tracker:
        return await pipeline.run(on_progress=tracker)


@click.command()
@click.option("--concurrency", "-c", type=click.IntRange(min=1), help="Maximum chart pages fetched at once")
@click.option("--cache-dir", type=click.Path(file_okay=False, path_type=Path), help="Content cache directory")
@click.option("--no-cache", is_flag=True, help="Keep fetched content in memory only for this run")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write the artifact JSON here")
@click.option("--publish/--no-publish", default=False, help="Publish the artifact to the wiki after harvesting")
@click.pass_context
async def harvest(
    ctx,
    concurrency: int | None,
    cache_dir: Path | None,
    no_cache: bool,
    output: Path | None,
    publish: bool,
):
    """
    🎵 Harvest note-count extremes from the Arcaea wiki.

    Loads the song list, fetches every song page through the content cache,
    and reports the lowest and highest note-count chart of each rating.
    """
    json_output = ctx.obj["json_output"]
    config = get_config()

    cache = MemoryContentCache() if no_cache else DirectoryContentCache(cache_dir or config.cache_dir)
    fetcher = WikiFetcher(
        cache,
        base_url=config.base_url,
        max_retries=config.max_retries,
        timeout=config.request_timeout,
        user_agent=config.user_agent,
    )
    pipeline = HarvestPipeline(fetcher, concurrency=concurrency or config.concurrency)

    if not json_output:
        console.print(
            Panel.fit(f"🎶 [bold cyan]Arcwiki Extremes[/bold cyan]\n{fetcher.base_url}", border_style="magenta")
        )

    try:
        result = await _run_pipeline(pipeline, json_output)
    except (FetchExhausted, MalformedResponse, httpx.HTTPError) as e:
        logger.error("Harvest failed", error=str(e), error_type=type(e).__name__)
        console.print(f"[red]❌ Harvest failed: {e}[/red]")
        ctx.exit(1)
    finally:
        await fetcher.close()

    artifact_json = result.artifact_json
    if json_output:
        click.echo(artifact_json)
    else:
        _display_harvest_results(result)

    if output is not None:
        output.write_text(artifact_json, encoding="utf-8")
        logger.info("Artifact written", path=str(output), records=result.record_count)
        if not json_output:
            console.print(f"[green]💾 Artifact written to {output}[/green]")

    if publish and not await _publish(artifact_json, json_output):
        ctx.exit(1)


async def _publish(artifact_json: str, json_output: bool) -> bool:
    """Publish the artifact with the configured account, reporting the outcome."""
    config = get_config()
    publisher = WikiPublisher(
        f"{config.base_url.rstrip('/')}/api.php",
        config.bot_username,
        config.bot_password,
        user_agent=config.user_agent,
        timeout=config.request_timeout,
    )
    try:
        published = await publisher.publish(artifact_json, config.publish_title, config.publish_summary)
    except PublishError as e:
        logger.error("Publish failed", error=str(e))
        console.print(f"[red]❌ {e}[/red]")
        return False
    finally:
        await publisher.close()

    if not json_output:
        if published:
            console.print(f"[green]✅ Published to {config.publish_title}[/green]")
        else:
            console.print(f"[red]❌ The wiki rejected the edit to {config.publish_title}[/red]")
    return published


@click.command(name="cache-key")
@click.argument("target")
@click.argument("params", nargs=-1)
def cache_key(target: str, params: tuple[str, ...]):
    """
    🔑 Print the cache key and record path for a request.

    PARAMS are KEY=VALUE query parameters, e.g. title=Fracture+Ray action=raw.
    """
    query = {}
    for param in params:
        name, sep, value = param.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected KEY=VALUE, got {param!r}", param_hint="PARAMS")
        query[name] = value

    key = compute_fetch_key(target, query)
    click.echo(key)
    click.echo(str(DirectoryContentCache(get_config().cache_dir).path_for(key)))


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    try:
        config = get_config()
        mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

        # Use config defaults when CLI parameters are not provided
        final_log_level = log_level or config.log_level
        final_log_file = log_file or (str(config.log_file) if config.log_file else None)

        configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)
    except (FileNotFoundError, PermissionError, OSError):
        # Fall back to minimal logging configuration
        mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE
        configure_logging(mode=mode, log_level=log_level or "INFO", log_file=log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_rich_table(console, logging_table)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🎶 Arcwiki Extremes - note-count extremes for Arcaea charts

    Harvest every chart's note count from the Arcaea wiki and find the
    lightest and densest chart of each rating.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(harvest)
app.add_command(logging_status)
app.add_command(cache_key)


if __name__ == "__main__":
    app()
