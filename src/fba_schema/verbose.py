"""Verbose progress messages.

A :class:`VerboseSink` is handed to the operations that report progress
(integration, the CLI). A disabled sink swallows messages and reports
``False`` so callers can skip building expensive output.
"""

from __future__ import annotations

import sys
from typing import TextIO


class VerboseSink:
    """Line-oriented message sink writing to a text stream, or nowhere."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    @classmethod
    def stderr(cls) -> VerboseSink:
        return cls(sys.stderr)

    @classmethod
    def disabled(cls) -> VerboseSink:
        return cls(None)

    @classmethod
    def from_setting(cls, setting: bool | TextIO | None) -> VerboseSink:
        """Build a sink from a flag or a stream.

        ``True`` selects stderr, a stream is used as given, anything else
        disables output.
        """
        if setting is True:
            return cls.stderr()
        if setting is None or setting is False:
            return cls.disabled()
        return cls(setting)

    @property
    def enabled(self) -> bool:
        return self.stream is not None

    def __call__(self, *lines: str) -> bool:
        """Write each line followed by a newline.

        Returns:
            Whether the sink is enabled
        """
        if self.stream is None:
            return False
        if lines:
            self.stream.write("\n".join(lines) + "\n")
        return True

    def __repr__(self) -> str:
        target = getattr(self.stream, "name", type(self.stream).__name__) if self.stream else "disabled"
        return f"VerboseSink({target})"
