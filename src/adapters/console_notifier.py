"""Dry-run notification adapter.

Writes messages to a local stream instead of Slack so configs can be
previewed safely.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO


class ConsoleNotifier:
    """Notifier adapter that prints messages rather than posting them."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def post(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(f"{text}\n")
        stream.flush()
