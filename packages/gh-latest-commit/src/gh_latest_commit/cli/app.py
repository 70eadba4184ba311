import asyncio
import logging

import typer
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..config import Settings, load_settings
from ..document import read_document, region_content, update_document
from ..errors import LatestCommitError
from ..pipeline import fetch_latest_commit, render_fragment, run_pipeline
from ..providers.github.client import GitHubRestClient
from ..providers.preview import PreviewClient

app = typer.Typer(add_completion=False, pretty_exceptions_show_locals=False)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _error_exit(exc: Exception) -> typer.Exit:
    typer.secho(f"error: {exc}", fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


@app.command()
def run(
    username: str | None = typer.Option(
        None, help="GitHub user whose public activity is read (env: GH_USERNAME)"
    ),
    document: str | None = typer.Option(None, help="Document holding the sentinel region"),
    preview: bool = typer.Option(False, "--preview", help="Render a preview image block"),
    preview_fallback: bool = typer.Option(
        False,
        "--preview-fallback",
        help="Use the plain line when the preview image cannot be fetched",
    ),
    no_push: bool = typer.Option(False, "--no-push", help="Commit but do not push"),
    dry_run: bool = typer.Option(False, help="Report the change without writing or committing"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Update the document with the user's latest pushed commit and publish it."""
    _configure_logging(verbose)
    try:
        settings = load_settings(
            username=username,
            document=document,
            preview=True if preview else None,
            preview_fallback=True if preview_fallback else None,
            push=False if no_push else None,
        )
        result = asyncio.run(run_pipeline(settings, dry_run=dry_run))
    except LatestCommitError as exc:
        raise _error_exit(exc)
    target = escape(f"{result.record.repo_name}@{result.record.sha}")
    path = escape(settings.document)
    if result.status == "unchanged":
        print(f"[bold]Up to date[/bold] {path} already shows {target}")
    elif result.status == "dry_run":
        print(f"[bold]Dry run[/bold] {path} would show:\n{escape(result.fragment)}")
    else:
        print(f"[bold green]Updated[/bold green] {path} -> {target}")


async def _show(settings: Settings) -> str:
    async with GitHubRestClient(base_url=settings.api_url, timeout=settings.timeout) as source:
        record = await fetch_latest_commit(settings, source)
    if not settings.preview:
        return await render_fragment(record, settings, None)
    async with PreviewClient(service_url=settings.preview_url, timeout=settings.timeout) as preview:
        return await render_fragment(record, settings, preview)


@app.command()
def show(
    username: str | None = typer.Option(
        None, help="GitHub user whose public activity is read (env: GH_USERNAME)"
    ),
    document: str | None = typer.Option(None, help="Document checked by --check"),
    preview: bool = typer.Option(False, "--preview", help="Render a preview image block"),
    check: bool = typer.Option(
        False, "--check", help="Exit with code 1 when the document region is out of date"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Print the fragment for the user's latest pushed commit without touching files."""
    _configure_logging(verbose)
    try:
        settings = load_settings(
            username=username, document=document, preview=True if preview else None
        )
        settings.require_username()
        fragment = asyncio.run(_show(settings))
        current = region_content(read_document(settings.document)) if check else None
    except LatestCommitError as exc:
        raise _error_exit(exc)
    typer.echo(fragment)
    if not check:
        return
    if current == fragment:
        print(f"[bold]Up to date[/bold] {escape(settings.document)}")
        return
    typer.secho(f"{settings.document} is out of date", fg=typer.colors.YELLOW, err=True)
    raise typer.Exit(code=1)


@app.command()
def patch(
    text: str = typer.Option(..., help="Fragment to place between the sentinels"),
    document: str | None = typer.Option(None, help="Document holding the sentinel region"),
    dry_run: bool = typer.Option(False, help="Report the change without writing"),
):
    """Replace the sentinel region of a local document; no network or git."""
    _configure_logging(False)
    try:
        settings = load_settings(document=document)
        result = update_document(settings.document, text, dry_run=dry_run)
    except LatestCommitError as exc:
        raise _error_exit(exc)
    if result.changed:
        print(f"[bold green]Patched[/bold green] {escape(settings.document)}")
    else:
        print(f"[bold]Up to date[/bold] {escape(settings.document)}")
