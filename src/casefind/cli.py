"""Typer CLI for casefind: palette window, one-shot query, recent and stats commands."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from result import Ok

from casefind.config import Config
from casefind.models.categories import ALL_CATEGORY_ID, CATEGORY_BY_ID, Role

app = typer.Typer(
    name="casefind",
    help="Case console search: command palette and search tooling.",
    invoke_without_command=True,
)

BaseUrlOption = Annotated[
    str | None,
    typer.Option("--base-url", help="Base URL of the case console backend"),
]
RoleOption = Annotated[
    Role | None,
    typer.Option("--role", help="Role whose categories and quick actions apply"),
]
CacheDirOption = Annotated[
    Path | None,
    typer.Option("--cache-dir", help="Directory holding the local search store"),
]


def _build_config(
    base_url: str | None = None,
    role: Role | None = None,
    cache_dir: Path | None = None,
) -> Config:
    defaults = Config()
    return Config(
        base_url=base_url or defaults.base_url,
        role=str(role) if role is not None else defaults.role,
        cache_dir=cache_dir or defaults.cache_dir,
    )


@app.callback(invoke_without_command=True)
def serve(
    ctx: typer.Context,
    base_url: BaseUrlOption = None,
    role: RoleOption = None,
    cache_dir: CacheDirOption = None,
) -> None:
    """Start the case console window with the search palette."""
    if ctx.invoked_subcommand is not None:
        return
    config = _build_config(base_url, role, cache_dir)
    from casefind.ui.app import run_app

    run_app(config)


@app.command()
def query(
    text: Annotated[str, typer.Argument(help="Search text")],
    category: Annotated[
        str, typer.Option("--category", "-c", help="Category id to search in")
    ] = ALL_CATEGORY_ID,
    base_url: BaseUrlOption = None,
    role: RoleOption = None,
    cache_dir: CacheDirOption = None,
) -> None:
    """Run one ranked search against the backend and print the results."""
    config = _build_config(base_url, role, cache_dir)
    known = CATEGORY_BY_ID.get(category)
    if known is None or not known.visible_to(config.role):
        typer.echo(f"Unknown category {category!r} for role {config.role}", err=True)
        raise typer.Exit(code=2)
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(_do_query(config, text, category))


async def _do_query(config: Config, text: str, category: str) -> None:
    """Execute the search and print one line per ranked result."""
    from casefind.services.container import ServiceContainer

    services = ServiceContainer.create(config)
    try:
        outcome = await services.controller.search(text, category)
    finally:
        await services.close()

    if not isinstance(outcome, Ok):
        typer.echo(outcome.err_value, err=True)
        raise typer.Exit(code=1)

    results = outcome.ok_value
    if not results.results:
        typer.echo(f'No results for "{text}".')
        return
    typer.echo(f"{len(results.results)} of {results.total_count} results for {text!r}:")
    for result in results.results:
        line = f"  [{result.relevance_score:>4}] {result.title}"
        if result.subtitle:
            line += f" · {result.subtitle}"
        if result.href:
            line += f"  -> {result.href}"
        typer.echo(line)


@app.command()
def recent(
    clear: Annotated[bool, typer.Option("--clear", help="Forget all recent searches")] = False,
    cache_dir: CacheDirOption = None,
) -> None:
    """List recently selected search results."""
    from casefind.data.recent_store import RecentSearchCache
    from casefind.data.storage import LocalStore

    config = _build_config(cache_dir=cache_dir)
    cache = RecentSearchCache(LocalStore(config.store_path), limit=config.recent_limit)
    if clear:
        cache.clear()
        typer.echo("Recent searches cleared.")
        return
    entries = cache.list()
    if not entries:
        typer.echo("No recent searches.")
        return
    for entry in entries:
        typer.echo(f'  "{entry.query}" -> {entry.result.title} ({entry.result.href or "-"})')


@app.command()
def stats(cache_dir: CacheDirOption = None) -> None:
    """Show search analytics and the most popular queries."""
    from casefind.data.storage import LocalStore
    from casefind.services.analytics import SearchAnalytics

    config = _build_config(cache_dir=cache_dir)
    analytics = SearchAnalytics(LocalStore(config.store_path))
    summary = analytics.stats()
    typer.echo(f"Total searches:        {summary.total_searches}")
    typer.echo(f"Searches today:        {summary.today_searches}")
    typer.echo(f"Top category:          {summary.most_searched_category}")
    typer.echo(f"Average result count:  {summary.average_result_count}")
    popular = analytics.popular_searches()
    if popular:
        typer.echo("Popular searches:")
        for item in popular:
            typer.echo(f"  {item.count:>3}x  {item.query}")
