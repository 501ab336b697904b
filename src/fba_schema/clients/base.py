"""Shared HTTP plumbing for service clients.

Provides:
- A requests session with JSON headers and a project User-Agent
- A minimum delay between consecutive requests
- POST-and-decode with a per-request timeout
"""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

logger = logging.getLogger(__name__)

DEFAULT_RATE_LIMIT_DELAY = 0.1  # seconds between requests
DEFAULT_TIMEOUT = 30.0  # request timeout in seconds
DEFAULT_USER_AGENT = "fba-schema/0.1.0"


class HTTPClientBase:
    """Base class for service clients.

    Subclasses set ``url`` (or pass it in) and build their calls on
    :meth:`_post_json`.
    """

    url: str = ""

    def __init__(
        self,
        url: str | None = None,
        rate_limit_delay: float = DEFAULT_RATE_LIMIT_DELAY,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str | None = None,
    ):
        """Initialize the client.

        Args:
            url: Service endpoint (defaults to the class attribute)
            rate_limit_delay: Minimum seconds between requests
            timeout: Request timeout in seconds
            user_agent: Custom User-Agent string
        """
        if url is not None:
            self.url = url
        self.rate_limit_delay = rate_limit_delay
        self.timeout = timeout
        self._last_request_time = 0.0
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
                "User-Agent": user_agent or DEFAULT_USER_AGENT,
            }
        )

    def _throttle(self) -> None:
        elapsed = time.time() - self._last_request_time
        if elapsed < self.rate_limit_delay:
            time.sleep(self.rate_limit_delay - elapsed)
        self._last_request_time = time.time()

    def _post_json(self, payload: dict[str, Any], url: str | None = None) -> Any:
        """POST a JSON body and return the decoded response.

        Args:
            payload: JSON body
            url: Endpoint, if not the client's own

        Returns:
            Decoded JSON response

        Raises:
            requests.RequestException: On network or HTTP errors
            ValueError: If the response body is not JSON
        """
        target = url or self.url
        self._throttle()
        logger.debug(f"POST {target}")
        response = self._session.post(target, json=payload, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> HTTPClientBase:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
