"""EPGStation recorded-program models.

These mirror the JSON returned by ``GET /api/recorded``. Field names follow
Python conventions and map to the upstream camelCase keys through aliases.
Unknown upstream keys are ignored.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

VIDEO_TYPE_TS = "ts"
VIDEO_TYPE_ENCODED = "encoded"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class VideoFile(BaseModel):
    """A media file attached to a recording."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int = Field(..., examples=[42])
    name: str = Field("", examples=["TS"])
    filename: Optional[str] = Field(None, examples=["20240115_2100_news.m2ts"])
    type: str = Field("", description="'ts' or 'encoded'", examples=["ts"])
    size: int = Field(0, description="Size in bytes", examples=[3221225472])


class RecordedItem(BaseModel):
    """A recorded program and its video files."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int = Field(..., examples=[1])
    name: str = Field("", examples=["Evening News"])
    is_encoding: bool = Field(False, alias="isEncoding")
    is_protected: bool = Field(False, alias="isProtected")
    start_at: int = Field(..., alias="startAt", description="Epoch milliseconds")
    end_at: int = Field(0, alias="endAt", description="Epoch milliseconds")
    video_files: List[VideoFile] = Field(default_factory=list, alias="videoFiles")

    @property
    def started_at(self) -> datetime:
        """Start time as an aware UTC datetime (millisecond precision)."""
        return _EPOCH + timedelta(milliseconds=self.start_at)

    def age(self, now: datetime) -> timedelta:
        """Time elapsed between the start of the recording and ``now``."""
        return now - self.started_at

    @property
    def ts_files(self) -> List[VideoFile]:
        """Raw transport-stream files of this recording."""
        return [vf for vf in self.video_files if vf.type == VIDEO_TYPE_TS]


class Records(BaseModel):
    """Response body of the recorded-program listing."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    records: List[RecordedItem] = Field(default_factory=list)
    total: int = 0
