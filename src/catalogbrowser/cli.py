"""CLI entry point for the catalog browser."""

from __future__ import annotations

import asyncio
import functools
import logging
import sys
from typing import Optional, Sequence

import click

from catalogbrowser.config.settings import Settings
from catalogbrowser.engine.catalog_loader import load_catalog
from catalogbrowser.engine.models import Course, FilterCriteria
from catalogbrowser.engine.session import CatalogSession, Phase
from catalogbrowser.engine.view import count_label, course_list_view, error_view


class EchoView:
    """Writes the catalog view to the terminal."""

    def __init__(self, show_list: bool = True):
        self.show_list = show_list
        self.departments: list[str] = []

    def show_departments(self, departments: Sequence[str]) -> None:
        self.departments = list(departments)

    def show_courses(self, courses: Sequence[Course]) -> None:
        if not self.show_list:
            return
        view = course_list_view(courses)
        if view.is_empty:
            click.echo(click.style(view.placeholder.title, bold=True))
            click.echo(view.placeholder.hint)
            return
        for card in view.cards:
            click.echo(
                click.style(card.code, bold=True)
                + f"  {card.title}  [{card.department}, {card.credits_label}]"
            )
            click.echo(f"    {card.description}")
            click.echo("    " + " | ".join(b.text for b in card.badges))

    def show_count(self, count: int) -> None:
        if self.show_list:
            click.echo(click.style(count_label(count), fg="cyan"))

    def show_error(self) -> None:
        placeholder = error_view()
        click.echo(click.style(placeholder.title, fg="red", bold=True), err=True)
        click.echo(placeholder.hint, err=True)


def _configure_logging(level: str, handler: Optional[logging.Handler] = None) -> None:
    handler = handler or logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s  %(name)s: %(message)s"))
    logging.basicConfig(level=level.upper(), handlers=[handler])


def _bootstrap(ctx: click.Context, view: EchoView) -> CatalogSession:
    settings: Settings = ctx.obj["settings"]
    session = CatalogSession(
        view=view,
        loader=functools.partial(load_catalog, timeout=settings.fetch_timeout),
    )
    phase = asyncio.run(session.bootstrap(ctx.obj["source"]))
    if phase == Phase.FAILED:
        ctx.exit(1)
    return session


@click.group(invoke_without_command=True)
@click.option("--source", default=None, help="Catalog JSON file path or http(s) URL")
@click.option("--log-level", default=None, help="Logging level (default from config)")
@click.pass_context
def main(ctx: click.Context, source: Optional[str], log_level: Optional[str]) -> None:
    """Catalog browser: filter a course catalog by text, department and level."""
    settings = Settings.load()
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["source"] = source or settings.data_source
    ctx.obj["log_level"] = log_level or settings.log_level
    if ctx.invoked_subcommand is None:
        ctx.invoke(launch)


@main.command()
@click.pass_context
def launch(ctx: click.Context) -> None:
    """Launch the interactive catalog browser."""
    from textual.logging import TextualHandler

    from catalogbrowser.app.main_app import CatalogApp

    _configure_logging(ctx.obj["log_level"], handler=TextualHandler())
    app = CatalogApp(settings=ctx.obj["settings"], source=ctx.obj["source"])
    app.run()


@main.command()
@click.argument("text", required=False, default="")
@click.option("--department", "-d", default="", help="Exact department name")
@click.option("--level", "-l", default="", help="Level bucket, e.g. 200")
@click.pass_context
def search(ctx: click.Context, text: str, department: str, level: str) -> None:
    """Print the courses matching TEXT and the given filters."""
    _configure_logging(ctx.obj["log_level"])
    try:
        criteria = FilterCriteria.from_inputs(text, department, level)
    except ValueError:
        raise click.BadParameter(f"{level!r} is not a number", param_hint="--level") from None

    session = _bootstrap(ctx, EchoView(show_list=False))
    session.view.show_list = True
    session.apply(criteria)


@main.command()
@click.pass_context
def departments(ctx: click.Context) -> None:
    """List the departments in the catalog."""
    _configure_logging(ctx.obj["log_level"])
    view = EchoView(show_list=False)
    _bootstrap(ctx, view)
    for dept in view.departments:
        click.echo(f"  {dept}")
