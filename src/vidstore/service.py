"""Core business logic for vidstore."""

import logging

from vidstore.errors import UploadFailed, ValidationError
from vidstore.models import Comment, MediaFields, MediaItem, Stats
from vidstore.storage.comments import CommentRepository
from vidstore.storage.media import DeleteResult, MediaRepository
from vidstore.storage.store import DocumentStore
from vidstore.upload import CloudinaryUploader, MediaUploader

logger = logging.getLogger(__name__)


class VidStoreService:
    """Core service layer — single orchestration point for all vidstore operations.

    The HTTP API, the MCP server and the CLI are thin wrappers over this
    class. Privilege checks belong to those surfaces (see AccessGate); the
    service itself trusts its caller. Dependencies are injected via the
    constructor so tests can swap the store and the uploader.
    """

    # Upload-created items must carry every descriptive field.
    _UPLOAD_REQUIRED = ("title_key", "channel", "desc_key", "views_key", "subs_key")

    def __init__(
        self,
        store: DocumentStore,
        uploader: MediaUploader | None = None,
        media: MediaRepository | None = None,
        comments: CommentRepository | None = None,
    ) -> None:
        self._store = store
        self._uploader = uploader or CloudinaryUploader()
        self._media = media or MediaRepository(store)
        self._comments = comments or CommentRepository(store)

    # -- media --------------------------------------------------------------

    def list_media(self) -> list[MediaItem]:
        """List every media item, most recent first."""
        return self._media.list_all()

    def get_media(self, media_id: int) -> MediaItem:
        """Raises NotFoundError if the item does not exist."""
        return self._media.get(media_id)

    def create_media(self, fields: MediaFields) -> MediaItem:
        """Create a media item whose ``video_src`` is already hosted remotely."""
        return self._media.create(fields)

    def upload_media(
        self,
        payload: bytes,
        fields: MediaFields,
        *,
        filename: str | None = None,
        resource_type: str = "video",
    ) -> MediaItem:
        """Upload a binary payload, then create a media item pointing at it.

        The upload completes before the document is touched, so a failed
        upload never leaves a partial item behind.

        Args:
            payload: Raw media bytes.
            fields: Descriptive metadata; ``video_src`` is overwritten with
                    the hosted URL.
            filename: Original file name (MIME hint for the uploader).
            resource_type: Hosting hint forwarded to the uploader.

        Returns:
            The created MediaItem.

        Raises:
            ValidationError: If the payload or any descriptive field is empty.
            UploadFailed: If the upload bridge fails.
        """
        if not payload:
            raise ValidationError("A media file is required.")
        missing = [name for name in self._UPLOAD_REQUIRED if not getattr(fields, name).strip()]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}.")
        try:
            url = self._uploader.upload(payload, resource_type=resource_type, filename=filename)
        except UploadFailed as e:
            logger.warning("Upload failed, document left untouched: %s", e)
            raise
        return self._media.create(fields.model_copy(update={"video_src": url}))

    def remove_media(self, media_id: int) -> DeleteResult:
        """Delete a media item and cascade to its comments.

        Raises:
            NotFoundError: If the item does not exist.
        """
        return self._media.delete(media_id)

    # -- comments -----------------------------------------------------------

    def list_comments(self, video_id: int) -> list[Comment]:
        """Comments for one media item, oldest first. Empty if none."""
        return self._comments.list_for_video(video_id)

    def list_all_comments(self) -> list[Comment]:
        return self._comments.list_all()

    def add_comment(self, video_id: int, user: str, text: str) -> Comment:
        """Add a comment. The media id is not checked for existence.

        Raises:
            ValidationError: If user or text is empty.
        """
        return self._comments.create(video_id, user, text)

    def remove_comment(self, comment_id: int) -> Comment:
        """Raises NotFoundError if the comment does not exist."""
        return self._comments.delete(comment_id)

    # -- admin --------------------------------------------------------------

    def stats(self) -> Stats:
        """Counts of both collections taken from one consistent read."""
        doc = self._store.read()
        return Stats(media_count=len(doc.media), comment_count=len(doc.comments))
