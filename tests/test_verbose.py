"""Tests for the verbose message sink."""

from __future__ import annotations

import io
import sys

import pytest

from fba_schema.verbose import VerboseSink


class TestVerboseSink:
    """Tests for VerboseSink."""

    def test_writes_lines(self) -> None:
        stream = io.StringIO()
        sink = VerboseSink(stream)
        assert sink("first", "second") is True
        assert stream.getvalue() == "first\nsecond\n"

    def test_no_lines(self) -> None:
        stream = io.StringIO()
        assert VerboseSink(stream)() is True
        assert stream.getvalue() == ""

    def test_disabled(self) -> None:
        sink = VerboseSink.disabled()
        assert not sink.enabled
        assert sink("ignored") is False

    @pytest.mark.parametrize("setting", [None, False])
    def test_from_setting_disabled(self, setting: bool | None) -> None:
        assert not VerboseSink.from_setting(setting).enabled

    def test_from_setting_true_is_stderr(self) -> None:
        assert VerboseSink.from_setting(True).stream is sys.stderr

    def test_from_setting_stream(self) -> None:
        stream = io.StringIO()
        assert VerboseSink.from_setting(stream).stream is stream

    def test_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        VerboseSink.stderr()("to stderr")
        assert capsys.readouterr().err == "to stderr\n"

    def test_repr(self) -> None:
        assert repr(VerboseSink.disabled()) == "VerboseSink(disabled)"
        assert repr(VerboseSink(io.StringIO())) == "VerboseSink(StringIO)"
