"""
HTTP transport for TradeSatoshi requests.

Executes exactly one HTTP call per send: GET for public requests, signed POST
for private ones. No retries and no status interpretation beyond "2xx or
not"; the response envelope is left to the decoder.
"""

import logging
from typing import Optional

import requests

from .errors import ConfigurationError, TransportError
from .request import DEFAULT_BASE_URL, Request
from .signer import Signer


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "tradesatoshi-client/0.1.0 (+python-requests)"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class Transport:
    """Sends built requests over HTTP with a bounded timeout."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT,
                 user_agent: str = DEFAULT_USER_AGENT,
                 log_requests: bool = False):
        """
        Args:
            timeout: Connect/read timeout in seconds
            user_agent: Client identifier sent as User-Agent
            log_requests: Log each request URL at DEBUG level
        """
        if timeout is None or timeout <= 0:
            raise ConfigurationError(f"Transport timeout must be positive, got {timeout!r}")
        self.timeout = timeout
        self.user_agent = user_agent
        self.log_requests = log_requests

    def send(self, request: Request, base_url: str = DEFAULT_BASE_URL,
             signer: Optional[Signer] = None) -> str:
        """
        Execute a request and return the raw response body.

        Args:
            request: Request to send
            base_url: API root, e.g. ``https://tradesatoshi.com/api/``
            signer: Required for private requests

        Returns:
            str: Response body text

        Raises:
            ConfigurationError: Private request without a signer
            TransportError: Network/TLS/timeout failure or non-2xx status
        """
        url = request.url(base_url)

        if request.is_private:
            if signer is None:
                raise ConfigurationError(
                    f"Credentials are required for private endpoint '{request.endpoint}'"
                )
            body = request.body()
            headers = {
                'Content-Type': JSON_CONTENT_TYPE,
                'User-Agent': self.user_agent,
                'Authorization': signer.authorization('POST', url, body),
            }
            if self.log_requests:
                logger.debug(f"POST {url}")
            return self._execute('POST', url, headers=headers, data=body.encode('utf-8'))

        if self.log_requests:
            logger.debug(f"GET {url}")
        return self._execute('GET', url, headers={'User-Agent': self.user_agent})

    def _execute(self, method: str, url: str, headers: dict,
                 data: Optional[bytes] = None) -> str:
        try:
            if method == 'POST':
                response = requests.post(url, data=data, headers=headers, timeout=self.timeout)
            else:
                response = requests.get(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.SSLError as e:
            raise TransportError(f"TLS error: {e}", url, cause=e) from e
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timed out after {self.timeout}s", url, cause=e) from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection failed: {e}", url, cause=e) from e
        except requests.RequestException as e:
            raise TransportError(f"Request failed: {e}", url, cause=e) from e

        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"HTTP {response.status_code} {response.reason or ''}".strip(),
                url,
                status_code=response.status_code,
            )

        return response.text
