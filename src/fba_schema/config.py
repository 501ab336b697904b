"""Runtime settings read from the environment.

Variables (a ``.env`` file found by python-dotenv is honoured when
``load_env=True``):

    FBA_SCHEMA_IDSERVER_URL  ID server endpoint
    FBA_SCHEMA_ID_PREFIX     Namespace prepended to allocated ids
    FBA_SCHEMA_VERBOSE       Truthy to write verbose messages to stderr
    FBA_SCHEMA_TIMEOUT       HTTP timeout in seconds
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv

from fba_schema.clients.base import DEFAULT_TIMEOUT
from fba_schema.clients.idserver import DEFAULT_IDSERVER_URL, IDServerClient
from fba_schema.ids import DEFAULT_NAMESPACE

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"", "0", "false", "no", "off"})


def parse_flag(name: str, value: str) -> bool:
    """Read a boolean environment value.

    Raises:
        ValueError: If the value is not a recognised boolean
    """
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (1/0, true/false, yes/no), got {value!r}")


@dataclass(frozen=True)
class Settings:
    """Process-wide settings."""

    idserver_url: str = DEFAULT_IDSERVER_URL
    id_namespace: str = DEFAULT_NAMESPACE
    verbose: bool = False
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, load_env: bool = False) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Variables to read (defaults to ``os.environ``)
            load_env: Load a ``.env`` file into ``os.environ`` first

        Raises:
            ValueError: If a variable holds an invalid value
        """
        if load_env:
            load_dotenv()
        env = os.environ if environ is None else environ

        timeout = DEFAULT_TIMEOUT
        raw_timeout = env.get("FBA_SCHEMA_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"FBA_SCHEMA_TIMEOUT must be a number, got {raw_timeout!r}") from None
            if timeout <= 0:
                raise ValueError(f"FBA_SCHEMA_TIMEOUT must be positive, got {raw_timeout!r}")

        url = env.get("FBA_SCHEMA_IDSERVER_URL") or DEFAULT_IDSERVER_URL
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"FBA_SCHEMA_IDSERVER_URL must be an http(s) URL, got {url!r}")

        return cls(
            idserver_url=url,
            id_namespace=env.get("FBA_SCHEMA_ID_PREFIX", DEFAULT_NAMESPACE),
            verbose=parse_flag("FBA_SCHEMA_VERBOSE", env.get("FBA_SCHEMA_VERBOSE", "")),
            timeout=timeout,
        )

    def id_allocator(self) -> IDServerClient:
        """ID server client for the configured endpoint and timeout."""
        return IDServerClient(self.idserver_url, timeout=self.timeout)
