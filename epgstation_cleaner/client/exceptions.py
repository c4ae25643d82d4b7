"""Recording-service client exceptions."""

from typing import Optional


class EPGStationError(Exception):
    """Base exception for recording-service errors."""

    pass


class EPGStationConnectionError(EPGStationError):
    """Raised when the service cannot be reached or the transfer fails."""

    pass


class UnexpectedStatusError(EPGStationError):
    """Raised when the service answers with a status other than the expected one."""

    def __init__(self, status_code: int, url: str, body: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        self.body = body
        message = f"Unexpected status code {status_code} from {url}"
        if body:
            message = f"{message}: {body}"
        super().__init__(message)


class RecordsDecodeError(EPGStationError):
    """Raised when the recorded-program listing cannot be decoded."""

    pass


class EPGStationProtocolError(EPGStationError):
    """Raised when a response cannot be processed at the HTTP level.

    Covers undecodable content encodings and redirect loops.
    """

    pass
