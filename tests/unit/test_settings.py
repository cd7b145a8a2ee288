"""Unit tests for settings models and loader."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from src.commons.settings.loader import SettingsLoader, get_settings, reset_settings
from src.commons.settings.models import (
    AppSettings,
    AuthSettings,
    BlobStorageSettings,
    DocumentDBSettings,
    ProcessingSettings,
    ServerSettings,
    Settings,
    TelemetrySettings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop any TUBELY__ variables from the surrounding environment."""
    import os

    for key in list(os.environ):
        if key.startswith("TUBELY__"):
            monkeypatch.delenv(key)


def write_json(path: Path, data: dict) -> None:
    with path.open("w") as f:
        json.dump(data, f)


class TestAppSettings:
    """Tests for AppSettings model."""

    def test_default_values(self):
        settings = AppSettings()
        assert settings.name == "tubely"
        assert settings.environment == "dev"
        assert settings.log_level == "INFO"

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            AppSettings(environment="invalid")  # type: ignore[arg-type]

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            AppSettings(log_level="TRACE")  # type: ignore[arg-type]


class TestServerSettings:
    """Tests for ServerSettings model."""

    def test_default_values(self):
        settings = ServerSettings()
        assert settings.port == 8091
        assert settings.api_prefix == "/api"
        assert settings.cors_origins == ["*"]

    @pytest.mark.parametrize("port", [0, 70000])
    def test_port_validation(self, port):
        with pytest.raises(ValidationError):
            ServerSettings(port=port)


class TestBlobStorageSettings:
    """Tests for BlobStorageSettings model."""

    def test_default_values(self):
        settings = BlobStorageSettings()
        assert settings.use_ssl is True
        assert settings.region == "us-east-1"
        assert settings.buckets.videos == "tubely-videos"
        assert settings.public_base_url is None
        assert settings.auto_create_buckets is False


class TestProcessingSettings:
    """Tests for ProcessingSettings model."""

    def test_default_values(self):
        settings = ProcessingSettings()
        assert settings.ffmpeg_path == "ffmpeg"
        assert settings.ffprobe_path == "ffprobe"
        assert settings.max_upload_size_bytes == 1 << 30
        assert settings.temp_dir is None
        assert settings.aspect_ratio_labels == "orientation"
        assert settings.aspect_ratio_prefix is True

    def test_unknown_label_convention(self):
        with pytest.raises(ValidationError):
            ProcessingSettings(aspect_ratio_labels="cinema")  # type: ignore[arg-type]

    def test_max_upload_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            ProcessingSettings(max_upload_size_bytes=0)


class TestRootSettings:
    """Tests for root Settings model."""

    def test_default_sections(self):
        settings = Settings()
        assert isinstance(settings.app, AppSettings)
        assert isinstance(settings.server, ServerSettings)
        assert isinstance(settings.auth, AuthSettings)
        assert isinstance(settings.blob_storage, BlobStorageSettings)
        assert isinstance(settings.document_db, DocumentDBSettings)
        assert isinstance(settings.processing, ProcessingSettings)
        assert isinstance(settings.telemetry, TelemetrySettings)

    def test_auth_defaults(self):
        settings = Settings()
        assert settings.auth.token_issuer == "tubely-access"
        assert settings.auth.jwt_secret == ""


class TestSettingsLoader:
    """Tests for SettingsLoader."""

    def test_load_empty_config(self, tmp_path):
        settings = SettingsLoader(config_dir=tmp_path, environment="dev").load()
        assert settings.app.name == "tubely"

    def test_load_base_config(self, tmp_path):
        write_json(
            tmp_path / "appsettings.json",
            {
                "app": {"name": "test-app"},
                "blob_storage": {"buckets": {"videos": "my-videos"}},
            },
        )

        settings = SettingsLoader(config_dir=tmp_path, environment="dev").load()

        assert settings.app.name == "test-app"
        assert settings.blob_storage.buckets.videos == "my-videos"

    def test_load_environment_override(self, tmp_path):
        write_json(
            tmp_path / "appsettings.json",
            {"processing": {"ffmpeg_path": "ffmpeg", "temp_dir": "/tmp"}},
        )
        write_json(
            tmp_path / "appsettings.prod.json",
            {"processing": {"ffmpeg_path": "/opt/ffmpeg/bin/ffmpeg"}},
        )

        settings = SettingsLoader(config_dir=tmp_path, environment="prod").load()

        assert settings.processing.ffmpeg_path == "/opt/ffmpeg/bin/ffmpeg"
        assert settings.processing.temp_dir == "/tmp"

    def test_env_vars_override_files(self, tmp_path, monkeypatch):
        write_json(tmp_path / "appsettings.json", {"blob_storage": {"region": "a"}})
        monkeypatch.setenv("TUBELY__BLOB_STORAGE__REGION", "us-east-2")
        monkeypatch.setenv("TUBELY__PROCESSING__MAX_UPLOAD_SIZE_BYTES", "2048")

        settings = SettingsLoader(config_dir=tmp_path, environment="dev").load()

        assert settings.blob_storage.region == "us-east-2"
        assert settings.processing.max_upload_size_bytes == 2048

    def test_numeric_secret_stays_string(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TUBELY__AUTH__JWT_SECRET", "123456")

        settings = SettingsLoader(config_dir=tmp_path, environment="dev").load()

        assert settings.auth.jwt_secret == "123456"

    def test_unknown_keys_are_ignored(self, tmp_path):
        write_json(
            tmp_path / "appsettings.json",
            {
                "auth": {"token_ttl_seconds": 60},
                "blob_storage": {"provider": "minio", "region": "eu-west-1"},
            },
        )

        settings = SettingsLoader(config_dir=tmp_path, environment="dev").load()

        assert settings.blob_storage.region == "eu-west-1"
        assert not hasattr(settings.blob_storage, "provider")
        assert not hasattr(settings.auth, "token_ttl_seconds")

    def test_json_list_env_var(self, tmp_path, monkeypatch):
        monkeypatch.setenv(
            "TUBELY__SERVER__CORS_ORIGINS", '["https://a.example", "https://b.example"]'
        )

        settings = SettingsLoader(config_dir=tmp_path, environment="dev").load()

        assert settings.server.cors_origins == ["https://a.example", "https://b.example"]

    def test_deep_merge(self):
        loader = SettingsLoader()
        base = {"a": {"b": 1, "c": 2}, "d": 3}
        override = {"a": {"b": 10, "e": 4}, "f": 5}

        result = loader._deep_merge(base, override)

        assert result == {"a": {"b": 10, "c": 2, "e": 4}, "d": 3, "f": 5}
        assert base == {"a": {"b": 1, "c": 2}, "d": 3}


class TestGetSettings:
    """Tests for get_settings function."""

    def setup_method(self):
        reset_settings()

    def teardown_method(self):
        reset_settings()

    def test_get_settings_cached(self, tmp_path):
        settings1 = get_settings(config_dir=tmp_path)
        settings2 = get_settings(config_dir=tmp_path)
        assert settings1 is settings2

    def test_get_settings_reload(self, tmp_path):
        settings1 = get_settings(config_dir=tmp_path)
        settings2 = get_settings(config_dir=tmp_path, reload=True)
        assert settings1 is not settings2

    def test_reset_settings(self, tmp_path):
        settings1 = get_settings(config_dir=tmp_path)
        reset_settings()
        settings2 = get_settings(config_dir=tmp_path)
        assert settings1 is not settings2
