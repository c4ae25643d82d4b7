"""Service layer implementations."""

from epgstation_cleaner.services.cleanup import CleanupResult, CleanupService
from epgstation_cleaner.services.policy import (
    DEFAULT_RETAIN_DURATION,
    DeletionPolicy,
    scan_video_types,
    select_for_deletion,
)

__all__ = [
    # Cleanup
    "CleanupResult",
    "CleanupService",
    # Retention policy
    "DEFAULT_RETAIN_DURATION",
    "DeletionPolicy",
    "scan_video_types",
    "select_for_deletion",
]
