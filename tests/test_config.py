# tests/test_config.py
"""Tests for vidstore configuration."""

from pathlib import Path
from unittest.mock import patch

from vidstore.config import Settings


class TestSettings:
    def test_default_settings(self):
        with patch.dict("os.environ", {}, clear=True):
            s = Settings()
            assert s.data_dir == Path.home() / ".vidstore"
        assert s.host == "127.0.0.1"
        assert s.port == 3000
        assert s.admin_secret == "mysecretkey"

    def test_db_path_derived(self):
        s = Settings(data_dir=Path("/tmp/vs"))
        assert s.db_path == Path("/tmp/vs/db.json")

    def test_ensure_dirs_creates(self, tmp_path):
        s = Settings(data_dir=tmp_path / "testdata")
        s.ensure_dirs()
        assert s.data_dir.exists()

    def test_env_override(self):
        with patch.dict("os.environ", {"VIDSTORE_PORT": "1234", "VIDSTORE_ADMIN_SECRET": "hunter2"}):
            s = Settings()
            assert s.port == 1234
            assert s.admin_secret == "hunter2"

    def test_cloudinary_from_env(self):
        env = {
            "VIDSTORE_CLOUDINARY_CLOUD_NAME": "demo",
            "VIDSTORE_CLOUDINARY_API_KEY": "k",
            "VIDSTORE_CLOUDINARY_API_SECRET": "s",
        }
        with patch.dict("os.environ", env):
            s = Settings()
            assert (s.cloudinary_cloud_name, s.cloudinary_api_key, s.cloudinary_api_secret) == ("demo", "k", "s")
