# tests/conftest.py
"""Shared fixtures for vidstore tests."""

import pytest
from unittest.mock import MagicMock

from vidstore.models import Comment, Document, MediaItem
from vidstore.service import VidStoreService
from vidstore.storage.jsonfile import JSONDocumentStore
from vidstore.upload import MediaUploader


@pytest.fixture
def sample_media():
    """Two media items in stored (most-recent-first) order."""
    return [
        MediaItem(
            id=2,
            title_key="video2_title",
            channel="Nature Hub",
            desc_key="video2_desc",
            views_key="video2_views",
            subs_key="video2_subs",
            video_src="https://res.cloudinary.com/demo/video/upload/forest.mp4",
            poster_src="https://res.cloudinary.com/demo/video/upload/forest.jpg",
            thumbnail_src="https://res.cloudinary.com/demo/video/upload/forest.jpg",
            avatar_src="https://i.pravatar.cc/48?u=NatureHub",
        ),
        MediaItem(
            id=1,
            title_key="video1_title",
            channel="Tech Talks",
            video_src="https://res.cloudinary.com/demo/video/upload/intro.mp4",
            poster_src="https://res.cloudinary.com/demo/video/upload/intro.jpg",
            thumbnail_src="https://res.cloudinary.com/demo/video/upload/intro.jpg",
            avatar_src="https://i.pravatar.cc/48?u=TechTalks",
        ),
    ]


@pytest.fixture
def sample_comments():
    return [
        Comment(id=1, video_id=1, user="Alice", avatar="https://i.pravatar.cc/40?u=Alice",
                text="Great intro!", timestamp="2025-06-15T12:00:00.000Z"),
        Comment(id=2, video_id=2, user="Bob", avatar="https://i.pravatar.cc/40?u=Bob",
                text="Beautiful forest.", timestamp="2025-06-15T12:05:00.000Z"),
        Comment(id=3, video_id=1, user="Carol D", avatar="https://i.pravatar.cc/40?u=CarolD",
                text="Thanks for sharing.", timestamp="2025-06-15T12:10:00.000Z"),
    ]


@pytest.fixture
def sample_document(sample_media, sample_comments):
    return Document(media=sample_media, comments=sample_comments)


@pytest.fixture
def store(tmp_path):
    """Initialised JSONDocumentStore with empty collections."""
    s = JSONDocumentStore(tmp_path / "db.json")
    s.initialize()
    return s


@pytest.fixture
def seeded_store(tmp_path, sample_document):
    """JSONDocumentStore seeded with sample media and comments."""
    s = JSONDocumentStore(tmp_path / "db.json")
    s.initialize(sample_document)
    return s


@pytest.fixture
def mock_uploader():
    """MediaUploader returning a fixed hosted URL."""
    uploader = MagicMock(spec=MediaUploader)
    uploader.upload.return_value = "https://res.cloudinary.com/demo/video/upload/v1/clip.mp4"
    return uploader


@pytest.fixture
def service(store, mock_uploader):
    """VidStoreService over an empty store with a mocked uploader."""
    return VidStoreService(store=store, uploader=mock_uploader)


@pytest.fixture
def seeded_service(seeded_store, mock_uploader):
    return VidStoreService(store=seeded_store, uploader=mock_uploader)
