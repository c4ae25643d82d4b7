"""Data models for the application."""

from epgstation_cleaner.models.recorded import (
    VIDEO_TYPE_ENCODED,
    VIDEO_TYPE_TS,
    RecordedItem,
    Records,
    VideoFile,
)

__all__ = [
    "VIDEO_TYPE_ENCODED",
    "VIDEO_TYPE_TS",
    "RecordedItem",
    "Records",
    "VideoFile",
]
