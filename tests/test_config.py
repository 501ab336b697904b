"""Tests for environment settings."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from fba_schema.clients.idserver import DEFAULT_IDSERVER_URL, IDServerClient
from fba_schema.config import Settings, parse_flag


class TestParseFlag:
    """Tests for parse_flag()."""

    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_true(self, value: str) -> None:
        assert parse_flag("X", value) is True

    @pytest.mark.parametrize("value", ["", "0", "False", "no", "off"])
    def test_false(self, value: str) -> None:
        assert parse_flag("X", value) is False

    def test_invalid(self) -> None:
        with pytest.raises(ValueError, match="FBA_SCHEMA_VERBOSE must be a boolean"):
            parse_flag("FBA_SCHEMA_VERBOSE", "maybe")


class TestSettings:
    """Tests for Settings.from_env()."""

    def test_defaults(self) -> None:
        settings = Settings.from_env({})
        assert settings == Settings()
        assert settings.idserver_url == DEFAULT_IDSERVER_URL
        assert settings.id_namespace == "kb|"
        assert settings.verbose is False

    def test_values(self) -> None:
        settings = Settings.from_env(
            {
                "FBA_SCHEMA_IDSERVER_URL": "https://ids.example.org/rpc",
                "FBA_SCHEMA_ID_PREFIX": "test|",
                "FBA_SCHEMA_VERBOSE": "1",
                "FBA_SCHEMA_TIMEOUT": "5",
            }
        )
        assert settings == Settings("https://ids.example.org/rpc", "test|", True, 5.0)

    def test_empty_prefix_allowed(self) -> None:
        assert Settings.from_env({"FBA_SCHEMA_ID_PREFIX": ""}).id_namespace == ""

    @pytest.mark.parametrize(
        ("env", "match"),
        [
            ({"FBA_SCHEMA_TIMEOUT": "soon"}, "must be a number"),
            ({"FBA_SCHEMA_TIMEOUT": "0"}, "must be positive"),
            ({"FBA_SCHEMA_IDSERVER_URL": "ftp://ids"}, "http"),
            ({"FBA_SCHEMA_VERBOSE": "loud"}, "boolean"),
        ],
    )
    def test_invalid(self, env: dict[str, str], match: str) -> None:
        with pytest.raises(ValueError, match=match):
            Settings.from_env(env)

    def test_reads_os_environ(self) -> None:
        with patch.dict(os.environ, {"FBA_SCHEMA_VERBOSE": "yes"}, clear=True):
            assert Settings.from_env().verbose is True

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Settings().verbose = True  # type: ignore[misc]

    def test_id_allocator(self) -> None:
        settings = Settings.from_env(
            {"FBA_SCHEMA_IDSERVER_URL": "https://ids.example.org/rpc", "FBA_SCHEMA_TIMEOUT": "5"}
        )
        client = settings.id_allocator()
        assert isinstance(client, IDServerClient)
        assert (client.url, client.timeout) == ("https://ids.example.org/rpc", 5.0)
