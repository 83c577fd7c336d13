"""CLI interface — thin wrapper over VidStoreService, the HTTP API and the MCP server.

The CLI works on the local document file directly and does not go through
the AccessGate; only the HTTP and MCP surfaces require the admin secret.
"""

import json
import logging
from pathlib import Path

import typer
from pydantic import ValidationError as PydanticValidationError

from vidstore.config import settings
from vidstore.errors import NotFoundError, StoreUnavailable, UploadFailed, ValidationError
from vidstore.models import Document, MediaFields
from vidstore.service import VidStoreService
from vidstore.storage.jsonfile import JSONDocumentStore


app = typer.Typer(
    name="vidstore",
    help="Manage a JSON-backed video catalogue with threaded comments.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", help="Log at DEBUG level."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _get_service() -> VidStoreService:
    """Create a service instance with default dependencies."""
    settings.ensure_dirs()
    store = JSONDocumentStore()
    store.initialize()
    return VidStoreService(store=store)


def _fail(e: object) -> None:
    typer.echo(f"❌ {e}", err=True)
    raise typer.Exit(code=1)


@app.command()
def init(
    seed: Path | None = typer.Option(None, "--seed", "-s", help="JSON document to seed a new store with."),
) -> None:
    """Create the document if it does not exist yet."""
    settings.ensure_dirs()
    document = None
    if seed is not None:
        try:
            document = Document.model_validate(json.loads(seed.read_text(encoding="utf-8")))
        except (OSError, ValueError, PydanticValidationError) as e:
            _fail(f"Invalid seed file {seed}: {e}")
    store = JSONDocumentStore()
    try:
        created = store.initialize(document)
    except StoreUnavailable as e:
        _fail(e)
    if created:
        typer.echo(f"✅ Created {store.path}")
    else:
        typer.echo(f"⚠️  {store.path} already exists, left unchanged.")


@app.command(name="list")
def list_videos() -> None:
    """List all videos, most recent first."""
    svc = _get_service()
    videos = svc.list_media()
    if not videos:
        typer.echo("Catalogue is empty. Use 'vidstore upload <file>' to add a video.")
        return
    for v in videos:
        typer.echo(f"  {v.id:>4}. {v.channel:<20s}  {v.title_key}  {v.video_src}")


@app.command()
def comments(
    video_id: int | None = typer.Argument(None, help="Video id. Omit to list every comment."),
) -> None:
    """List comments for one video, or all comments."""
    svc = _get_service()
    items = svc.list_all_comments() if video_id is None else svc.list_comments(video_id)
    if not items:
        typer.echo("No comments.")
        return
    for c in items:
        typer.echo(f"  {c.id:>4}. [video {c.video_id}] {c.timestamp}  {c.user}: {c.text}")


@app.command()
def comment(
    video_id: int = typer.Argument(..., help="Video id to comment on."),
    user: str = typer.Argument(..., help="Commenter name."),
    text: str = typer.Argument(..., help="Comment body."),
) -> None:
    """Post a comment on a video."""
    svc = _get_service()
    try:
        c = svc.add_comment(video_id, user, text)
        typer.echo(f"💬 Comment {c.id} added to video {c.video_id}")
    except ValidationError as e:
        _fail(e)


@app.command()
def stats() -> None:
    """Show video and comment counts."""
    s = _get_service().stats()
    typer.echo(f"Videos:   {s.media_count}")
    typer.echo(f"Comments: {s.comment_count}")


@app.command()
def remove(video_id: int = typer.Argument(..., help="Video id to delete.")) -> None:
    """Delete a video and all of its comments."""
    svc = _get_service()
    try:
        result = svc.remove_media(video_id)
        typer.echo(f"🗑️  Removed video {result.media_id} and {result.comments_removed} comment(s)")
    except NotFoundError as e:
        _fail(e)


@app.command()
def remove_comment(comment_id: int = typer.Argument(..., help="Comment id to delete.")) -> None:
    """Delete a single comment."""
    svc = _get_service()
    try:
        svc.remove_comment(comment_id)
        typer.echo(f"🗑️  Removed comment {comment_id}")
    except NotFoundError as e:
        _fail(e)


@app.command()
def upload(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Media file to upload."),
    title: str = typer.Option("", "--title", "-t", help="Title (or translation key)."),
    channel: str = typer.Option("", "--channel", "-c", help="Channel name."),
    description: str = typer.Option("", "--description", "-d", help="Description (or translation key)."),
    views: str = typer.Option("", "--views", help="View count label (or translation key)."),
    subs: str = typer.Option("", "--subs", help="Subscriber count label (or translation key)."),
    resource_type: str = typer.Option("video", "--resource-type", help="Hosting hint: video, image, raw, auto."),
) -> None:
    """Upload a media file to the hosting service and add it to the catalogue."""
    svc = _get_service()
    fields = MediaFields(
        title_key=title, channel=channel, desc_key=description, views_key=views, subs_key=subs
    )
    try:
        typer.echo(f"⏫ Uploading {file.name}...")
        item = svc.upload_media(
            file.read_bytes(), fields, filename=file.name, resource_type=resource_type
        )
        typer.echo(f"✅ Added video {item.id}")
        typer.echo(f"   Source: {item.video_src}")
        typer.echo(f"   Poster: {item.poster_src}")
    except (UploadFailed, ValidationError) as e:
        _fail(e)


@app.command()
def serve(
    host: str = typer.Option(settings.host, "--host", help="Host to bind to."),
    port: int = typer.Option(settings.port, "--port", help="Port to bind to."),
    reload: bool = typer.Option(False, "--reload", help="Enable hot-reload for development."),
) -> None:
    """Start the HTTP API server."""
    import uvicorn

    # The store must exist before the first request is served.
    _get_service()
    typer.echo(f"Starting vidstore API on http://{host}:{port}")
    uvicorn.run("vidstore.api:app", host=host, port=port, reload=reload)


@app.command()
def mcp(
    stdio: bool = typer.Option(False, "--stdio", help="Use stdio transport instead of HTTP."),
    host: str = typer.Option(settings.host, "--host", help="Host to bind to."),
    port: int = typer.Option(9093, "--port", help="Port to bind to."),
) -> None:
    """Start the vidstore MCP server."""
    from vidstore.server import mcp as mcp_server

    if stdio:
        typer.echo("Starting vidstore MCP server (stdio)...", err=True)
        mcp_server.run(transport="stdio")
    else:
        typer.echo(f"Starting vidstore MCP server on http://{host}:{port}/mcp")
        mcp_server.run(transport="streamable-http", host=host, port=port)
