"""Retention policy for recorded programs.

A recording is eligible for cleanup when all of the following hold:

- it is not protected,
- it has at least one raw ``ts`` file and at least one ``encoded`` file,
- its start time lies strictly more than the retention duration in the past.

Only the raw ``ts`` files of an eligible recording are deleted afterwards;
encoded output is always kept.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, List, Optional, Tuple

from epgstation_cleaner.core.duration import parse_duration
from epgstation_cleaner.core.logging import get_logger
from epgstation_cleaner.models.recorded import VIDEO_TYPE_ENCODED, VIDEO_TYPE_TS, RecordedItem

# Two weeks
DEFAULT_RETAIN_DURATION = timedelta(hours=336)


def scan_video_types(record: RecordedItem) -> Tuple[bool, bool]:
    """Return ``(has_ts, has_encoded)`` in a single pass over the video files."""
    has_ts = False
    has_encoded = False
    for video_file in record.video_files:
        if video_file.type == VIDEO_TYPE_TS:
            has_ts = True
        elif video_file.type == VIDEO_TYPE_ENCODED:
            has_encoded = True
    return has_ts, has_encoded


def select_for_deletion(
    records: Iterable[RecordedItem],
    retain_duration: timedelta,
    now: Optional[datetime] = None,
    logger: Optional[Any] = None,
) -> List[RecordedItem]:
    """Select the recordings whose raw files may be deleted.

    Args:
        records: Recordings as listed by the service.
        retain_duration: Minimum age a recording must exceed.
        now: Reference time, defaults to the current UTC time.
        logger: Structured logger; the module logger is used when omitted.

    Returns:
        Eligible recordings, in input order.
    """
    log = logger or get_logger(__name__)
    if now is None:
        now = datetime.now(timezone.utc)

    selected: List[RecordedItem] = []
    for record in records:
        has_ts, has_encoded = scan_video_types(record)
        elapsed = record.age(now)

        log.debug(
            "retention_check",
            record_id=record.id,
            name=record.name,
            protected=record.is_protected,
            has_ts=has_ts,
            has_encoded=has_encoded,
            elapsed=str(elapsed),
        )

        if not record.is_protected and has_ts and has_encoded and elapsed > retain_duration:
            selected.append(record)

    return selected


@dataclass(frozen=True)
class DeletionPolicy:
    """Age-based retention policy."""

    retain_duration: timedelta = DEFAULT_RETAIN_DURATION

    @classmethod
    def from_expression(cls, expression: str) -> "DeletionPolicy":
        """Build a policy from an hour count or duration expression.

        Raises:
            DurationError: If the expression is malformed.
        """
        return cls(retain_duration=parse_duration(expression))

    def select(
        self,
        records: Iterable[RecordedItem],
        now: Optional[datetime] = None,
        logger: Optional[Any] = None,
    ) -> List[RecordedItem]:
        """Apply the policy; see :func:`select_for_deletion`."""
        return select_for_deletion(records, self.retain_duration, now=now, logger=logger)
