"""Comment repository over the ``comments`` collection."""

import logging

from vidstore.derive import AvatarDeriver, comment_avatar
from vidstore.errors import NotFoundError, ValidationError
from vidstore.models import Comment, utc_timestamp
from vidstore.storage.identity import next_id
from vidstore.storage.store import DocumentStore

logger = logging.getLogger(__name__)


class CommentRepository:
    """Typed operations on comments, built on a DocumentStore.

    ``create`` does not check that ``video_id`` names an existing media
    item; referential integrity is enforced only by the cascading delete
    in MediaRepository.
    """

    def __init__(self, store: DocumentStore, *, derive_avatar: AvatarDeriver = comment_avatar) -> None:
        self._store = store
        self._derive_avatar = derive_avatar

    def list_for_video(self, video_id: int) -> list[Comment]:
        """Comments whose ``videoId`` equals ``video_id``, in stored order."""
        return [c for c in self._store.read().comments if c.video_id == video_id]

    def list_all(self) -> list[Comment]:
        return self._store.read().comments

    def create(self, video_id: int, user: str, text: str) -> Comment:
        """Append a new comment.

        Raises:
            ValidationError: If ``user`` or ``text`` is empty.
        """
        if not user or not user.strip() or not text or not text.strip():
            raise ValidationError("User and text are required.")

        with self._store.transaction() as doc:
            comment = Comment(
                id=next_id(doc.comments),
                video_id=video_id,
                user=user,
                avatar=self._derive_avatar(user),
                text=text,
                timestamp=utc_timestamp(),
            )
            doc.comments.append(comment)

        logger.info("Comment %d added to video %d by %s", comment.id, video_id, user)
        return comment

    def delete(self, comment_id: int) -> Comment:
        """Remove one comment and return it.

        Raises:
            NotFoundError: If no comment has this id. Nothing is written.
        """
        with self._store.transaction() as doc:
            for index, comment in enumerate(doc.comments):
                if comment.id == comment_id:
                    break
            else:
                raise NotFoundError(f"Comment not found: {comment_id}")
            del doc.comments[index]

        logger.info("Comment removed: %d", comment_id)
        return comment
