"""ID server client.

The ID server hands out ranges of integers per prefix over JSON-RPC
(``IDServerAPI.allocate_id_range``). The client satisfies the
:class:`~fba_schema.ids.IdAllocator` protocol and can be passed to the
builders.
"""

from __future__ import annotations

import logging
from itertools import count as counter
from typing import Any

import requests

from fba_schema.clients.base import DEFAULT_TIMEOUT, HTTPClientBase

logger = logging.getLogger(__name__)

DEFAULT_IDSERVER_URL = "http://bio-data-1.mcs.anl.gov/services/idserver"
ALLOCATE_METHOD = "IDServerAPI.allocate_id_range"


class IDServerError(RuntimeError):
    """The ID server could not be reached or returned an error."""


class IDServerClient(HTTPClientBase):
    """JSON-RPC client for the ID server.

    Example:
        >>> with IDServerClient() as ids:
        ...     first = ids.allocate("kb|fbamdl.", 5)
    """

    url = DEFAULT_IDSERVER_URL

    def __init__(self, url: str | None = None, timeout: float = DEFAULT_TIMEOUT, **kwargs: Any):
        super().__init__(url=url, timeout=timeout, **kwargs)
        self._request_ids = counter(1)

    def _call(self, method: str, params: list[Any]) -> Any:
        payload = {
            "version": "1.1",
            "id": str(next(self._request_ids)),
            "method": method,
            "params": params,
        }
        try:
            body = self._post_json(payload)
        except ValueError as e:
            raise IDServerError(f"{method} returned a non-JSON response") from e
        except requests.RequestException as e:
            raise IDServerError(f"{method} failed: {e}") from e

        if not isinstance(body, dict):
            raise IDServerError(f"{method} returned an unexpected response: {body!r}")
        if body.get("error"):
            error = body["error"]
            message = error.get("message", error) if isinstance(error, dict) else error
            raise IDServerError(f"{method} failed: {message}")
        if "result" not in body:
            raise IDServerError(f"{method} returned no result")
        return body["result"]

    def allocate(self, prefix: str, count: int = 1) -> int:
        """Reserve ``count`` consecutive ids for ``prefix``.

        Returns:
            The first integer of the reserved range

        Raises:
            IDServerError: On transport failure or a malformed reply
        """
        result = self._call(ALLOCATE_METHOD, [prefix, count])
        # JSON-RPC 1.1 services wrap return values in a list
        first = result[0] if isinstance(result, list) and result else result
        if isinstance(first, bool) or not isinstance(first, int):
            raise IDServerError(f"{ALLOCATE_METHOD} returned a non-integer: {result!r}")
        logger.debug(f"Allocated {count} id(s) for {prefix} starting at {first}")
        return first
