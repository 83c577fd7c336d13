"""Domain models for vidstore."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def utc_timestamp(moment: datetime | None = None) -> str:
    """Format an instant as sortable ISO-8601 UTC with millisecond precision.

    Example: ``2025-06-15T12:00:00.000Z``.
    """
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class MediaItem(BaseModel):
    """A media entry in the ``videos`` collection."""

    model_config = ConfigDict(extra="forbid")

    id: int = Field(gt=0)
    title_key: str = ""
    channel: str = ""
    desc_key: str = ""
    views_key: str = ""
    subs_key: str = ""
    video_src: str
    poster_src: str = ""
    thumbnail_src: str = ""
    avatar_src: str = ""


class MediaFields(BaseModel):
    """Caller-supplied fields for a new media item (no id, no derived URLs)."""

    video_src: str = ""
    title_key: str = ""
    channel: str = ""
    desc_key: str = ""
    views_key: str = ""
    subs_key: str = ""


class Comment(BaseModel):
    """A comment attached to a media item through ``videoId``."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    id: int = Field(gt=0)
    video_id: int = Field(alias="videoId")
    user: str
    avatar: str
    text: str
    timestamp: str = Field(default_factory=utc_timestamp)


class Document(BaseModel):
    """The whole persisted state: both collections, always present."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    media: list[MediaItem] = Field(default_factory=list, alias="videos")
    comments: list[Comment] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        """Serialize with the on-disk field names (``videos``, ``videoId``)."""
        return self.model_dump(mode="json", by_alias=True)


class Stats(BaseModel):
    """Collection cardinalities for the admin dashboard."""

    model_config = ConfigDict(populate_by_name=True)

    media_count: int = Field(alias="mediaCount")
    comment_count: int = Field(alias="commentCount")
