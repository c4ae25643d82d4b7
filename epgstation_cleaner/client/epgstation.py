"""HTTP client for the EPGStation REST API.

Only the two calls the cleaner needs are wrapped: listing recorded programs
and deleting a single video file.
"""

from types import TracebackType
from typing import Any, Optional, Type

import httpx
from pydantic import ValidationError

from epgstation_cleaner.client.exceptions import (
    EPGStationConnectionError,
    EPGStationProtocolError,
    RecordsDecodeError,
    UnexpectedStatusError,
)
from epgstation_cleaner.core.config import Config
from epgstation_cleaner.core.logging import get_logger
from epgstation_cleaner.models.recorded import Records

RECORDED_PATH = "/api/recorded"
VIDEOS_PATH = "/api/videos"

# Listing parameters: half-width names, no pagination limit
RECORDED_PARAMS = {"isHalfWidth": "true", "limit": 0}

# Longest response body excerpt carried by UnexpectedStatusError
MAX_ERROR_BODY = 500


class EPGStationClient:
    """Synchronous EPGStation API client.

    One ``httpx.Client`` is shared by every call made through this object.
    With ``trust_all_certificates`` enabled, TLS certificate verification is
    turned off so a self-signed certificate on the recording server is
    accepted.
    """

    def __init__(
        self,
        base_url: str,
        trust_all_certificates: bool = True,
        timeout: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
        logger: Optional[Any] = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Root URL of the EPGStation server, e.g. http://localhost:8888.
            trust_all_certificates: Disable TLS certificate verification.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (tests inject a MockTransport).
            logger: Structured logger; the module logger is used when omitted.
        """
        self.base_url = base_url.rstrip("/")
        self.trust_all_certificates = trust_all_certificates
        self.logger = logger or get_logger(__name__)
        self._client = httpx.Client(
            base_url=self.base_url,
            verify=not trust_all_certificates,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: Config,
        transport: Optional[httpx.BaseTransport] = None,
        logger: Optional[Any] = None,
    ) -> "EPGStationClient":
        """Build a client from the loaded configuration."""
        return cls(
            base_url=config.base_url,
            trust_all_certificates=config.trust_all_certificates,
            timeout=config.timeout,
            transport=transport,
            logger=logger,
        )

    def get_recorded(self) -> Records:
        """List every recorded program.

        Returns:
            The decoded listing.

        Raises:
            EPGStationConnectionError: If the request could not be completed.
            EPGStationProtocolError: If the response could not be processed.
            UnexpectedStatusError: If the service does not answer with a 2xx status.
            RecordsDecodeError: If the body is not a valid listing.
        """
        response = self._request("GET", RECORDED_PATH, params=RECORDED_PARAMS)

        if not response.is_success:
            raise UnexpectedStatusError(
                response.status_code, str(response.request.url), _excerpt(response)
            )

        try:
            records = Records.model_validate_json(response.content)
        except ValidationError as e:
            raise RecordsDecodeError(
                f"Malformed recorded listing from {response.request.url}: "
                f"{e.error_count()} validation error(s)"
            ) from e

        self.logger.debug(
            "recorded_listing_fetched",
            records=len(records.records),
            total=records.total,
        )
        return records

    def delete_video_file(self, video_file_id: int) -> None:
        """Delete one video file.

        Args:
            video_file_id: EPGStation video file id.

        Raises:
            EPGStationConnectionError: If the request could not be completed.
            EPGStationProtocolError: If the response could not be processed.
            UnexpectedStatusError: If the service answers with anything but 200.
        """
        response = self._request("DELETE", f"{VIDEOS_PATH}/{video_file_id}")

        if response.status_code != httpx.codes.OK:
            raise UnexpectedStatusError(
                response.status_code, str(response.request.url), _excerpt(response)
            )

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        self.logger.debug("epgstation_request", method=method, url=f"{self.base_url}{path}")
        try:
            return self._client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            raise EPGStationConnectionError(
                f"{method} {self.base_url}{path} failed: {e}"
            ) from e
        except httpx.RequestError as e:
            # DecodingError, TooManyRedirects
            raise EPGStationProtocolError(
                f"{method} {self.base_url}{path} failed: {e}"
            ) from e

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> "EPGStationClient":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()


def _excerpt(response: httpx.Response) -> str:
    text = response.text.strip()
    if len(text) > MAX_ERROR_BODY:
        return text[:MAX_ERROR_BODY] + "..."
    return text
