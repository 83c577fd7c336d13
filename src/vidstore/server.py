"""FastMCP server — thin wrapper exposing VidStoreService as MCP tools."""

import threading

from fastmcp import FastMCP

from vidstore.access import AccessGate
from vidstore.config import settings
from vidstore.errors import AccessDenied, NotFoundError, ValidationError
from vidstore.models import MediaFields, MediaItem
from vidstore.service import VidStoreService
from vidstore.storage.jsonfile import JSONDocumentStore


mcp = FastMCP(
    name="vidstore",
    instructions=(
        "vidstore manages a small video catalogue and its comments. "
        "Use list_videos and list_comments to browse, add_comment to post. "
        "Admin tools (stats, list_all_comments, create_video, remove_video, "
        "remove_comment) need the admin_secret argument."
    ),
)

_service: VidStoreService | None = None
_gate: AccessGate | None = None
_init_lock = threading.Lock()


def _get_service() -> VidStoreService:
    """Lazy-initialise the service singleton with default dependencies."""
    global _service
    if _service is None:
        with _init_lock:
            if _service is None:
                settings.ensure_dirs()
                store = JSONDocumentStore()
                store.initialize()
                _service = VidStoreService(store=store)
    return _service


def _get_gate() -> AccessGate:
    global _gate
    if _gate is None:
        with _init_lock:
            if _gate is None:
                _gate = AccessGate(settings.admin_secret)
    return _gate


@mcp.tool(annotations={"readOnlyHint": True})
def list_videos() -> list[dict]:
    """List all videos in the catalogue, most recent first."""
    return [_media_summary(m) for m in _get_service().list_media()]


@mcp.tool(annotations={"readOnlyHint": True})
def list_comments(video_id: int) -> list[dict]:
    """List the comments posted on one video, oldest first.

    Args:
        video_id: Numeric id of the video.
    """
    return [c.model_dump(by_alias=True) for c in _get_service().list_comments(video_id)]


@mcp.tool(annotations={"readOnlyHint": False, "idempotentHint": False})
def add_comment(video_id: int, user: str, text: str) -> dict:
    """Post a comment on a video.

    Args:
        video_id: Numeric id of the video.
        user: Display name of the commenter.
        text: Comment body.
    """
    try:
        return _get_service().add_comment(video_id, user, text).model_dump(by_alias=True)
    except ValidationError as e:
        return {"error": str(e)}


@mcp.tool(annotations={"readOnlyHint": True})
def list_all_comments(admin_secret: str) -> list[dict] | dict:
    """List every comment across all videos (admin).

    Args:
        admin_secret: Shared admin secret.
    """
    try:
        _get_gate().require(admin_secret)
    except AccessDenied as e:
        return {"error": str(e)}
    return [c.model_dump(by_alias=True) for c in _get_service().list_all_comments()]


@mcp.tool(annotations={"readOnlyHint": True})
def stats(admin_secret: str) -> dict:
    """Video and comment counts (admin).

    Args:
        admin_secret: Shared admin secret.
    """
    try:
        _get_gate().require(admin_secret)
        return _get_service().stats().model_dump(by_alias=True)
    except AccessDenied as e:
        return {"error": str(e)}


@mcp.tool(annotations={"readOnlyHint": False, "idempotentHint": False})
def create_video(
    admin_secret: str,
    video_src: str,
    title_key: str = "",
    channel: str = "",
    desc_key: str = "",
    views_key: str = "",
    subs_key: str = "",
) -> dict:
    """Register a video that is already hosted at ``video_src`` (admin).

    Poster, thumbnail and channel avatar URLs are derived automatically.

    Args:
        admin_secret: Shared admin secret.
        video_src: Public URL of the hosted video file.
        title_key: Title (or translation key).
        channel: Channel name.
        desc_key: Description (or translation key).
        views_key: View count label (or translation key).
        subs_key: Subscriber count label (or translation key).
    """
    try:
        _get_gate().require(admin_secret)
        fields = MediaFields(
            video_src=video_src,
            title_key=title_key,
            channel=channel,
            desc_key=desc_key,
            views_key=views_key,
            subs_key=subs_key,
        )
        return _media_summary(_get_service().create_media(fields))
    except (AccessDenied, ValidationError) as e:
        return {"error": str(e)}


@mcp.tool(annotations={"destructiveHint": True})
def remove_video(video_id: int, admin_secret: str) -> dict:
    """Remove a video and all of its comments (admin).

    Args:
        video_id: Numeric id of the video.
        admin_secret: Shared admin secret.
    """
    try:
        _get_gate().require(admin_secret)
        result = _get_service().remove_media(video_id)
        return {
            "status": "removed",
            "video_id": result.media_id,
            "comments_removed": result.comments_removed,
        }
    except (AccessDenied, NotFoundError) as e:
        return {"error": str(e)}


@mcp.tool(annotations={"destructiveHint": True})
def remove_comment(comment_id: int, admin_secret: str) -> dict:
    """Remove a single comment (admin).

    Args:
        comment_id: Numeric id of the comment.
        admin_secret: Shared admin secret.
    """
    try:
        _get_gate().require(admin_secret)
        _get_service().remove_comment(comment_id)
        return {"status": "removed", "comment_id": comment_id}
    except (AccessDenied, NotFoundError) as e:
        return {"error": str(e)}


def _media_summary(item: MediaItem) -> dict:
    """Create a concise dict for tool responses."""
    return {
        "id": item.id,
        "title": item.title_key,
        "channel": item.channel,
        "video_src": item.video_src,
        "poster_src": item.poster_src,
    }
