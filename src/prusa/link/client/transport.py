"""HTTP transport for PrusaLink.

The client only needs one capability from the network: send an authenticated
GET and hand back the body text. `PrinterTransport` describes that capability,
`RequestsTransport` implements it on top of a pooled `requests.Session`.
"""

import typing

import requests
import structlog
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from prusa.link.client import consts, exceptions
from prusa.link.client.__version__ import __version__

logger = structlog.get_logger(__name__)


class PrinterTransport(typing.Protocol):
    """Protocol for anything able to fetch a PrusaLink endpoint."""

    def fetch(self, url: str, api_key: str) -> str:
        """GET `url` with the API key header and return the response body.

        Raises:
            exceptions.PrusaLinkNetworkError: The printer could not be reached.
        """
        ...

    def close(self) -> None:
        """Release any pooled connections."""
        ...


class RequestsTransport:
    """`PrinterTransport` backed by `requests`.

    Connection failures are retried at the socket level by urllib3; HTTP
    statuses are never retried. By default the body is returned whatever the
    status code, leaving interpretation to the snapshot decoder. With
    `strict_status=True`, non-2xx responses raise instead.
    """

    def __init__(self, timeout: float = consts.DEFAULT_TIMEOUT, strict_status: bool = False) -> None:
        """Initializes the transport.

        Args:
            timeout: Timeout for each request in seconds.
            strict_status: Raise `PrusaLinkApiError` / `PrusaLinkAuthError` on non-2xx responses.
        """
        self._timeout = timeout
        self._strict_status = strict_status
        self._session = requests.Session()

        # Configure Retries
        retries = Retry(
            total=3,
            backoff_factor=0.5,
            respect_retry_after_header=False,
            allowed_methods={"GET"},
        )
        adapter = HTTPAdapter(max_retries=retries)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

        self._session.headers.update(
            {
                "User-Agent": f"prusa-link-python/{__version__}",
                "Accept": "application/json",
            }
        )

    def fetch(self, url: str, api_key: str) -> str:
        """GET `url` with the `X-Api-Key` header and return the body text.

        Raises:
            exceptions.PrusaLinkNetworkError: On connection/timeout issues.
            exceptions.PrusaLinkAuthError: On 401/403 when strict status handling is enabled.
            exceptions.PrusaLinkApiError: On other non-2xx statuses when strict status handling is enabled.
        """
        try:
            logger.debug("API Request", method="GET", url=url)
            response = self._session.get(url, headers={consts.API_KEY_HEADER: api_key}, timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Network error", url=url, error=str(e))
            raise exceptions.PrusaLinkNetworkError(f"Failed to connect to printer at {url}: {e}") from e

        logger.debug("API Response", status_code=response.status_code, body_len=len(response.content))

        if self._strict_status and response.status_code >= 400:
            if response.status_code in (401, 403):
                raise exceptions.PrusaLinkAuthError(
                    "Invalid API key.", status_code=response.status_code, response_body=response.text[:500]
                )
            raise exceptions.PrusaLinkApiError(
                message=f"Request failed: {response.reason}",
                status_code=response.status_code,
                response_body=response.text[:500],
            )

        return response.text

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()
