"""Deletion of raw video files for recordings past retention."""

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from epgstation_cleaner.client.epgstation import EPGStationClient
from epgstation_cleaner.client.exceptions import EPGStationError
from epgstation_cleaner.core.errors import describe_error
from epgstation_cleaner.core.logging import get_logger
from epgstation_cleaner.models.recorded import RecordedItem


@dataclass
class CleanupResult:
    """Result of a cleanup run."""

    recordings_selected: int = 0
    files_deleted: int = 0
    files_failed: int = 0
    files_skipped: int = 0  # dry-run only
    bytes_reclaimed: int = 0
    dry_run: bool = False


class CleanupService:
    """Deletes the raw ``ts`` files of the recordings it is given.

    Encoded output and files of any other type are never touched. A failed
    deletion is logged and the run continues with the next file.
    """

    def __init__(
        self,
        client: EPGStationClient,
        dry_run: bool = False,
        logger: Optional[Any] = None,
    ) -> None:
        self.client = client
        self.dry_run = dry_run
        self.logger = logger or get_logger(__name__)

    def run(self, recordings: Iterable[RecordedItem]) -> CleanupResult:
        """Delete (or, in dry-run mode, report) the ts files of ``recordings``.

        Args:
            recordings: Recordings already selected by the retention policy.

        Returns:
            CleanupResult with per-file counters.
        """
        result = CleanupResult(dry_run=self.dry_run)

        for record in recordings:
            result.recordings_selected += 1

            for video_file in record.ts_files:
                if self.dry_run:
                    self.logger.info(
                        "[DRY-RUN] video_file_delete",
                        record_id=record.id,
                        video_file_id=video_file.id,
                        filename=video_file.filename,
                    )
                    result.files_skipped += 1
                    continue

                self.logger.info(
                    "video_file_delete",
                    record_id=record.id,
                    video_file_id=video_file.id,
                    filename=video_file.filename,
                )
                try:
                    self.client.delete_video_file(video_file.id)
                except EPGStationError as e:
                    result.files_failed += 1
                    self.logger.error(
                        "video_file_delete_failed",
                        record_id=record.id,
                        video_file_id=video_file.id,
                        filename=video_file.filename,
                        **describe_error(e),
                    )
                    continue

                result.files_deleted += 1
                result.bytes_reclaimed += video_file.size
                self.logger.info(
                    "video_file_deleted",
                    record_id=record.id,
                    video_file_id=video_file.id,
                    size_bytes=video_file.size,
                    size_mb=round(video_file.size / (1024 * 1024), 2),
                )

        self.logger.info(
            "cleanup_completed",
            recordings_selected=result.recordings_selected,
            files_deleted=result.files_deleted,
            files_failed=result.files_failed,
            files_skipped=result.files_skipped,
            bytes_reclaimed=result.bytes_reclaimed,
            bytes_reclaimed_mb=round(result.bytes_reclaimed / (1024 * 1024), 2),
            dry_run=result.dry_run,
        )

        return result
