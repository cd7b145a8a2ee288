"""Settings management module."""

from src.commons.settings.loader import SettingsLoader, get_settings, reset_settings
from src.commons.settings.models import (
    AppSettings,
    AuthSettings,
    BlobStorageSettings,
    BucketSettings,
    DocumentCollectionSettings,
    DocumentDBSettings,
    ProcessingSettings,
    ServerSettings,
    Settings,
    TelemetrySettings,
)

__all__ = [
    # Loader
    "SettingsLoader",
    "get_settings",
    "reset_settings",
    # Main settings
    "Settings",
    "AppSettings",
    "ServerSettings",
    "AuthSettings",
    # Storage
    "BlobStorageSettings",
    "BucketSettings",
    "DocumentDBSettings",
    "DocumentCollectionSettings",
    # Processing & telemetry
    "ProcessingSettings",
    "TelemetrySettings",
]
