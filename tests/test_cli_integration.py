# tests/test_cli_integration.py
"""CLI integration tests using Typer's CliRunner."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from vidstore.cli import app
from vidstore.config import settings
from vidstore.errors import UploadFailed


runner = CliRunner()
UPLOAD_OPTS = [
    "--title", "Clip",
    "--channel", "Bob",
    "--description", "A short clip",
    "--views", "1K",
    "--subs", "10K",
]


@pytest.fixture
def mock_service(seeded_service):
    """Patch _get_service to return a service over a seeded temp store."""
    with patch("vidstore.cli._get_service", return_value=seeded_service):
        yield seeded_service


class TestCLI:
    def test_list(self, mock_service):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "Nature Hub" in result.stdout
        assert "Tech Talks" in result.stdout

    def test_comments_for_video(self, mock_service):
        result = runner.invoke(app, ["comments", "1"])
        assert result.exit_code == 0
        assert "Great intro!" in result.stdout
        assert "Beautiful forest." not in result.stdout

    def test_comments_all(self, mock_service):
        result = runner.invoke(app, ["comments"])
        assert "Beautiful forest." in result.stdout

    def test_comment_and_stats(self, mock_service):
        result = runner.invoke(app, ["comment", "2", "Zed", "Nice one"])
        assert result.exit_code == 0
        assert "Comment 4" in result.stdout

        result = runner.invoke(app, ["stats"])
        assert "Comments: 4" in result.stdout

    def test_comment_empty_text(self, mock_service):
        result = runner.invoke(app, ["comment", "2", "Zed", ""])
        assert result.exit_code == 1

    def test_remove(self, mock_service):
        result = runner.invoke(app, ["remove", "1"])
        assert result.exit_code == 0
        assert "2 comment(s)" in result.stdout

    def test_remove_not_found(self, mock_service):
        result = runner.invoke(app, ["remove", "99"])
        assert result.exit_code == 1

    def test_remove_comment(self, mock_service):
        result = runner.invoke(app, ["remove-comment", "2"])
        assert result.exit_code == 0
        assert len(mock_service.list_all_comments()) == 2

    def test_upload(self, mock_service, tmp_path):
        f = tmp_path / "clip.mp4"
        f.write_bytes(b"fake-video")
        result = runner.invoke(app, ["upload", str(f), *UPLOAD_OPTS])
        assert result.exit_code == 0
        assert "Added video 3" in result.stdout
        item = mock_service.get_media(3)
        assert (item.views_key, item.subs_key) == ("1K", "10K")

    def test_upload_failed(self, mock_service, mock_uploader, tmp_path):
        mock_uploader.upload.side_effect = UploadFailed("no credentials")
        f = tmp_path / "clip.mp4"
        f.write_bytes(b"fake-video")
        result = runner.invoke(app, ["upload", str(f), *UPLOAD_OPTS])
        assert result.exit_code == 1
        assert len(mock_service.list_media()) == 2
        mock_uploader.upload.assert_called_once()

    def test_upload_missing_fields(self, mock_service, mock_uploader, tmp_path):
        f = tmp_path / "clip.mp4"
        f.write_bytes(b"fake-video")
        result = runner.invoke(app, ["upload", str(f), "--title", "Clip"])
        assert result.exit_code == 1
        mock_uploader.upload.assert_not_called()
        assert len(mock_service.list_media()) == 2

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "vidstore" in result.output.lower()


class TestInit:
    def test_init_with_seed(self, tmp_path, sample_document):
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps(sample_document.to_json_dict()), encoding="utf-8")
        with patch.object(settings, "data_dir", tmp_path / "data"):
            result = runner.invoke(app, ["init", "--seed", str(seed)])
            assert result.exit_code == 0
            assert "Created" in result.stdout
            stored = json.loads(settings.db_path.read_text(encoding="utf-8"))
            assert len(stored["videos"]) == 2

            result = runner.invoke(app, ["init"])
            assert "already exists" in result.stdout

    def test_init_bad_seed(self, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text('{"videos": "nope"}', encoding="utf-8")
        with patch.object(settings, "data_dir", tmp_path / "data"):
            result = runner.invoke(app, ["init", "--seed", str(seed)])
        assert result.exit_code == 1
