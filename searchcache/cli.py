"""
Command-line interface for SearchCache.

Operator commands for the result cache:

    search-cache search "python asyncio timeouts" --ttl 600
    search-cache stats --window 3600 --top 5
    search-cache clear --stats
    search-cache serve

Settings come from environment variables / .env (see AppConfig).
"""

import asyncio
import json
import sys
from typing import Any, Awaitable, Callable, Optional, TypeVar

import click

from searchcache import __version__
from searchcache.config import AppConfig
from searchcache.exceptions import (
    CacheError,
    ConfigurationError,
    SearchFailedError,
    ValidationError,
)
from searchcache.models.analytics import AnalyticsSummary
from searchcache.services.factory import build_search_service
from searchcache.services.search_service import SearchService
from searchcache.utils.logger import setup_logging

T = TypeVar("T")

EXIT_FAILURE = 1
EXIT_USAGE = 2


def _run(
    settings: AppConfig,
    action: Callable[[SearchService], Awaitable[T]],
    require_provider: bool = False,
) -> T:
    """Build a service, run one action against it and close it."""

    async def runner() -> T:
        service = build_search_service(settings, require_provider=require_provider)
        try:
            return await action(service)
        finally:
            await service.close()

    try:
        return asyncio.run(runner())
    except ConfigurationError as e:
        raise click.ClickException(str(e))


def _echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _render_summary(summary: AnalyticsSummary) -> None:
    window = f"last {summary.window_seconds:g}s" if summary.window_seconds else "all time"
    click.echo(f"Lookups ({window}): {summary.total_lookups}")
    click.echo(f"  hits:     {summary.hits}")
    click.echo(f"  misses:   {summary.misses}")
    click.echo(f"  errors:   {summary.errors}")
    click.echo(
        f"  hit rate: {summary.hit_rate_percent:.2f}% ({summary.cache_efficiency})"
    )
    click.echo(
        f"  saved:    {summary.searches_saved} searches, "
        f"~{summary.estimated_time_saved_ms / 1000:.1f}s"
    )
    if summary.top_queries:
        click.echo("Top queries:")
        for item in summary.top_queries:
            click.echo(f"  {item.count:>5}  {item.query}")


@click.group()
@click.version_option(__version__, prog_name="search-cache")
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """search-cache - TTL result cache in front of an external search agent"""
    settings = AppConfig(debug=True) if debug else AppConfig()
    setup_logging(settings.effective_log_level)
    ctx.obj = settings


@cli.command("search")
@click.argument("query")
@click.option("--ttl", "ttl_seconds", type=float, help="TTL for a fresh result (seconds)")
@click.option("--refresh", is_flag=True, default=False, help="Bypass cached result")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON")
@click.pass_obj
def search_command(
    settings: AppConfig,
    query: str,
    ttl_seconds: Optional[float],
    refresh: bool,
    as_json: bool,
) -> None:
    """Look up QUERY in the cache, searching on a miss."""
    try:
        response = _run(
            settings,
            lambda service: service.lookup(
                query, ttl_seconds=ttl_seconds, force_refresh=refresh
            ),
            require_provider=True,
        )
    except ValidationError as e:
        click.echo(f"Invalid query: {e}", err=True)
        sys.exit(EXIT_USAGE)
    except SearchFailedError as e:
        click.echo(f"Search failed: {e}", err=True)
        sys.exit(EXIT_FAILURE)

    if as_json:
        _echo_json(response.model_dump(mode="json"))
        return

    source = "cache" if response.from_cache else "search"
    click.echo(f"[{source}, {response.latency_ms:.1f} ms]", err=True)
    result = response.result
    click.echo(result if isinstance(result, str) else json.dumps(result, indent=2))


@cli.command("stats")
@click.option("--window", "window_seconds", type=float, help="Only the last N seconds")
@click.option("--top", "top_n", type=int, help="Number of top queries")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON")
@click.pass_obj
def stats_command(
    settings: AppConfig,
    window_seconds: Optional[float],
    top_n: Optional[int],
    as_json: bool,
) -> None:
    """Show hit/miss statistics."""
    try:
        summary = _run(
            settings,
            lambda service: service.get_stats(window_seconds=window_seconds, top_n=top_n),
        )
    except ValidationError as e:
        raise click.BadParameter(str(e))

    if as_json:
        payload = summary.model_dump(mode="json")
        payload["hit_rate_percent"] = summary.hit_rate_percent
        _echo_json(payload)
        return

    _render_summary(summary)


@cli.command("clear")
@click.option(
    "--cache/--no-cache", "clear_cache", default=True, help="Remove cache entries"
)
@click.option("--stats", "reset_stats", is_flag=True, default=False, help="Reset analytics")
@click.pass_obj
def clear_command(settings: AppConfig, clear_cache: bool, reset_stats: bool) -> None:
    """Clear cached results and/or analytics."""
    if not clear_cache and not reset_stats:
        raise click.UsageError("Nothing to clear; pass --cache and/or --stats")

    async def action(service: SearchService) -> tuple:
        entries = await service.clear_cache() if clear_cache else 0
        records = await service.reset_stats() if reset_stats else 0
        return entries, records

    try:
        entries, records = _run(settings, action)
    except CacheError as e:
        click.echo(f"Cache unavailable: {e}", err=True)
        sys.exit(EXIT_FAILURE)

    if clear_cache:
        click.echo(f"Removed {entries} cache entries")
    if reset_stats:
        click.echo(f"Removed {records} analytics records")


@cli.command("serve")
@click.option("--host", help="Bind host (defaults to API_HOST)")
@click.option("--port", type=int, help="Bind port (defaults to API_PORT)")
@click.pass_obj
def serve_command(settings: AppConfig, host: Optional[str], port: Optional[int]) -> None:
    """Run the HTTP API."""
    from searchcache.main import run

    overrides = {}
    if host:
        overrides["api_host"] = host
    if port:
        overrides["api_port"] = port
    run(settings.model_copy(update=overrides))


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
