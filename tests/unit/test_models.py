"""Tests for EPGStation recorded-program models."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from epgstation_cleaner.models.recorded import RecordedItem, Records, VideoFile
from tests.factories import listing_payload, recorded_payload


class TestRecordsDecoding:
    """Tests for decoding the listing body."""

    def test_decode_listing(self) -> None:
        """Test camelCase keys map onto model fields."""
        payload = listing_payload(recorded_payload(1, 1_700_000_000_000, protected=True))

        records = Records.model_validate(payload)

        assert records.total == 1
        item = records.records[0]
        assert item.id == 1
        assert item.name == "Program 1"
        assert item.is_protected is True
        assert item.is_encoding is False
        assert item.start_at == 1_700_000_000_000
        assert item.end_at == 1_700_000_000_000 + 30 * 60 * 1000
        assert [vf.type for vf in item.video_files] == ["ts", "encoded"]
        assert item.video_files[0].filename == "1_0.m2ts"

    def test_unknown_keys_ignored(self) -> None:
        payload = recorded_payload(1, 0)
        payload["ruleId"] = 12

        item = RecordedItem.model_validate(payload)

        assert not hasattr(item, "ruleId")

    def test_missing_optional_fields(self) -> None:
        """Test minimal items decode with defaults."""
        item = RecordedItem.model_validate({"id": 5, "startAt": 0})

        assert item.name == ""
        assert item.is_protected is False
        assert item.video_files == []

    def test_missing_start_at_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RecordedItem.model_validate({"id": 5})

    def test_empty_listing(self) -> None:
        records = Records.model_validate({})

        assert records.records == []
        assert records.total == 0

    def test_video_file_without_filename(self) -> None:
        video_file = VideoFile.model_validate({"id": 3, "type": "encoded"})

        assert video_file.filename is None
        assert video_file.size == 0


class TestRecordedItemHelpers:
    """Tests for derived properties."""

    def test_started_at(self) -> None:
        item = RecordedItem.model_validate({"id": 1, "startAt": 1_000})

        assert item.started_at == datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)

    def test_age(self) -> None:
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        start_ms = int(start.timestamp() * 1000)
        item = RecordedItem.model_validate({"id": 1, "startAt": start_ms})

        assert item.age(start + timedelta(hours=2)) == timedelta(hours=2)

    def test_ts_files(self) -> None:
        item = RecordedItem.model_validate(recorded_payload(2, 0, types=("ts", "ts", "thumbnail")))

        assert [vf.id for vf in item.ts_files] == [200, 201]

    def test_models_are_frozen(self) -> None:
        item = RecordedItem.model_validate(recorded_payload(1, 0))

        with pytest.raises(ValidationError):
            item.is_protected = True  # type: ignore[misc]
