"""Command-line interface for the Noor archive."""

import asyncio
import base64
import mimetypes
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from typing_extensions import Annotated

from .api.client import RemoteStoreClient
from .config import Settings, get_settings
from .exceptions import SubmissionValidationError
from .models.submission import (
    SubmissionDraft,
    SubmissionRecord,
    SubmissionType,
    ViewScope,
    dump_submissions,
)
from .presentation.cards import SubmissionCard, ViewerRole, build_cards
from .services.sync_coordinator import SyncCoordinator
from .storage.key_value import FileKeyValueStorage
from .storage.local_store import LocalSubmissionStore
from .utils.logging import setup_logging

app = typer.Typer(help="Noor Project - submit entries and browse the archive")

# Upper bound on how long a one-shot command waits for remote deliveries
DRAIN_TIMEOUT_SEC = 30.0


@app.callback()
def main(
    log_level: Annotated[Optional[str], typer.Option("--log-level", "-l", help="Logging level")] = None,
) -> None:
    """Noor Project submissions."""
    setup_logging(log_level)


def build_coordinator(settings: Settings, remote_client: RemoteStoreClient) -> SyncCoordinator:
    """Wire the local store from settings to the given remote client."""
    storage = FileKeyValueStorage(settings.data_dir)
    local_store = LocalSubmissionStore(storage, key=settings.storage_key)
    return SyncCoordinator(local_store, remote_client)


def read_drawing(path: Path) -> str:
    """Embed an image file as a data URL."""
    mime_type, _ = mimetypes.guess_type(path.name)
    if not mime_type or not mime_type.startswith("image/"):
        mime_type = "image/png"
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def _print_cards(cards: List[SubmissionCard]) -> None:
    if not cards:
        typer.echo("No submissions yet.")
        return
    for card in cards:
        typer.echo(card.meta_line())
        if card.type is SubmissionType.DRAWING:
            typer.echo(f"[drawing, {len(card.content)} bytes]")
        else:
            typer.echo(card.content)
        if card.email is not None:
            typer.echo(f"Email: {card.email}")
        typer.echo("")


async def _submit(settings: Settings, draft: SubmissionDraft) -> SubmissionRecord:
    async with RemoteStoreClient() as remote_client:
        coordinator = build_coordinator(settings, remote_client)
        record = await coordinator.record_submission(draft)
        await coordinator.drain(timeout=DRAIN_TIMEOUT_SEC)
        return record


async def _list(settings: Settings, scope: ViewScope) -> List[SubmissionRecord]:
    async with RemoteStoreClient() as remote_client:
        coordinator = build_coordinator(settings, remote_client)
        return await coordinator.list_submissions(scope)


@app.command()
def submit(
    submission_type: Annotated[SubmissionType, typer.Option("--type", "-t", help="Kind of submission")] = SubmissionType.TEXT,
    content: Annotated[Optional[str], typer.Option("--content", "-c", help="Text content (rich-text markup allowed)")] = None,
    content_file: Annotated[Optional[Path], typer.Option("--content-file", "-f", exists=True, dir_okay=False, help="Read content from a file; drawings are embedded as data URLs")] = None,
    name: Annotated[str, typer.Option("--name", "-n", help="Author name")] = "",
    email: Annotated[str, typer.Option("--email", "-e", help="Contact email (visible to admins only)")] = "",
    anonymous: Annotated[bool, typer.Option("--anonymous/--named", help="Publish under a generated pseudonym")] = False,
    display: Annotated[bool, typer.Option("--display/--private", help="Show the entry in the public archive")] = False,
) -> None:
    """
    Record a new text or drawing submission.
    """
    if content is not None and content_file is not None:
        typer.echo("Use either --content or --content-file, not both.", err=True)
        raise typer.Exit(code=2)

    if content_file is not None:
        if submission_type is SubmissionType.DRAWING:
            content = read_drawing(content_file)
        else:
            content = content_file.read_text(encoding="utf-8")

    draft = SubmissionDraft(
        email=email,
        name=name,
        anonymous=anonymous,
        display=display,
        type=submission_type,
        content=content or "",
    )

    settings = get_settings()
    try:
        record = asyncio.run(_submit(settings, draft))
    except SubmissionValidationError as e:
        logger.warning(f"Submission rejected: {e.message}")
        typer.echo(e.message, err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Thank you for your submission, {record.display_name}!")


@app.command()
def archive(
    as_json: Annotated[bool, typer.Option("--json", help="Print the submission list as JSON")] = False,
) -> None:
    """
    Show published submissions, newest first.
    """
    records = asyncio.run(_list(get_settings(), ViewScope.PUBLISHED))
    if as_json:
        typer.echo(dump_submissions(records))
    else:
        _print_cards(build_cards(records, ViewerRole.PUBLIC))


@app.command()
def admin(
    as_json: Annotated[bool, typer.Option("--json", help="Print the submission list as JSON")] = False,
) -> None:
    """
    Show every submission with its status and contact email.
    """
    records = asyncio.run(_list(get_settings(), ViewScope.ALL))
    if as_json:
        typer.echo(dump_submissions(records))
    else:
        _print_cards(build_cards(records, ViewerRole.ADMIN))


if __name__ == "__main__":
    app()
