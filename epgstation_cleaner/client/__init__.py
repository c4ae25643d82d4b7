"""EPGStation API client."""

from epgstation_cleaner.client.epgstation import EPGStationClient
from epgstation_cleaner.client.exceptions import (
    EPGStationConnectionError,
    EPGStationError,
    EPGStationProtocolError,
    RecordsDecodeError,
    UnexpectedStatusError,
)

__all__ = [
    "EPGStationClient",
    "EPGStationError",
    "EPGStationConnectionError",
    "EPGStationProtocolError",
    "UnexpectedStatusError",
    "RecordsDecodeError",
]
