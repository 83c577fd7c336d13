"""Media repository over the ``videos`` collection."""

import logging
from dataclasses import dataclass

from vidstore.derive import AvatarDeriver, PosterDeriver, channel_avatar, poster_from_video
from vidstore.errors import NotFoundError, ValidationError
from vidstore.models import MediaFields, MediaItem
from vidstore.storage.identity import next_id
from vidstore.storage.store import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class DeleteResult:
    """Outcome of a cascading media delete."""

    media_id: int
    comments_removed: int


class MediaRepository:
    """Typed operations on media items, built on a DocumentStore.

    Newly created items are prepended, so the stored order is
    most-recent-first. Deleting an item cascades to its comments in the
    same save.
    """

    def __init__(
        self,
        store: DocumentStore,
        *,
        derive_poster: PosterDeriver = poster_from_video,
        derive_avatar: AvatarDeriver = channel_avatar,
    ) -> None:
        self._store = store
        self._derive_poster = derive_poster
        self._derive_avatar = derive_avatar

    def list_all(self) -> list[MediaItem]:
        """All media items in stored order."""
        return self._store.read().media

    def get(self, media_id: int) -> MediaItem:
        """Retrieve one media item.

        Raises:
            NotFoundError: If no item has this id.
        """
        for item in self._store.read().media:
            if item.id == media_id:
                return item
        raise NotFoundError(f"Video not found: {media_id}")

    def create(self, fields: MediaFields) -> MediaItem:
        """Create a media item from a known remote ``video_src``.

        Args:
            fields: Descriptive fields plus the uploaded media URL.

        Returns:
            The created item, already persisted.

        Raises:
            ValidationError: If ``video_src`` is empty.
        """
        if not fields.video_src.strip():
            raise ValidationError("video_src is required.")

        poster = self._derive_poster(fields.video_src)
        with self._store.transaction() as doc:
            item = MediaItem(
                id=next_id(doc.media),
                **fields.model_dump(),
                poster_src=poster,
                thumbnail_src=poster,
                avatar_src=self._derive_avatar(fields.channel),
            )
            doc.media.insert(0, item)

        logger.info("Media created: %d (%s)", item.id, item.video_src)
        return item

    def delete(self, media_id: int) -> DeleteResult:
        """Remove a media item and every comment that references it.

        Raises:
            NotFoundError: If no item has this id. Nothing is written.
        """
        with self._store.transaction() as doc:
            remaining = [m for m in doc.media if m.id != media_id]
            if len(remaining) == len(doc.media):
                raise NotFoundError(f"Video not found: {media_id}")
            kept_comments = [c for c in doc.comments if c.video_id != media_id]
            removed = len(doc.comments) - len(kept_comments)
            doc.media = remaining
            doc.comments = kept_comments

        logger.info("Media removed: %d (%d comments cascaded)", media_id, removed)
        return DeleteResult(media_id=media_id, comments_removed=removed)
