"""Pydantic settings models for application configuration."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseModel):
    """Application-level settings."""

    name: str = "tubely"
    version: str = "0.1.0"
    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class ServerSettings(BaseModel):
    """HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = Field(default=8091, ge=1, le=65535)
    workers: int = Field(default=1, ge=1, le=32)
    reload: bool = False
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    api_prefix: str = "/api"
    docs_enabled: bool = True


class AuthSettings(BaseModel):
    """Bearer token validation settings."""

    jwt_secret: str = ""
    token_issuer: str = "tubely-access"


class BucketSettings(BaseModel):
    """Bucket name configuration."""

    videos: str = "tubely-videos"


class BlobStorageSettings(BaseModel):
    """Blob storage settings (MinIO/S3)."""

    endpoint: str = "s3.amazonaws.com"
    access_key: str = ""
    secret_key: str = ""
    use_ssl: bool = True
    region: str = "us-east-1"
    buckets: BucketSettings = Field(default_factory=BucketSettings)
    public_base_url: str | None = None
    auto_create_buckets: bool = False


class DocumentCollectionSettings(BaseModel):
    """Document DB collection names."""

    videos: str = "videos"


class DocumentDBSettings(BaseModel):
    """Document database settings (MongoDB)."""

    host: str = "localhost"
    port: int = 27017
    username: str = ""
    password: str = ""
    database: str = "tubely"
    auth_source: str = "admin"
    collections: DocumentCollectionSettings = Field(
        default_factory=DocumentCollectionSettings
    )


class ProcessingSettings(BaseModel):
    """Video upload processing settings."""

    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"
    max_upload_size_bytes: int = Field(default=1 << 30, ge=1)  # 1 GiB
    temp_dir: str | None = None
    aspect_ratio_labels: Literal["orientation", "ratio"] = "orientation"
    aspect_ratio_prefix: bool = True


class TelemetrySettings(BaseModel):
    """Telemetry and observability settings."""

    log_format: Literal["json", "text"] = "json"
    log_level: str = "INFO"


class Settings(BaseSettings):
    """Root settings container with environment loading."""

    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    blob_storage: BlobStorageSettings = Field(default_factory=BlobStorageSettings)
    document_db: DocumentDBSettings = Field(default_factory=DocumentDBSettings)
    processing: ProcessingSettings = Field(default_factory=ProcessingSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TUBELY__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
