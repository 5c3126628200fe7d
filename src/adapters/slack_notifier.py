"""Slack incoming-webhook notification adapter.

Posts the rendered text with the configured channel, bot name and icon.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request

from core.config import SlackConfig
from core.errors import SlackPostError

LOGGER = logging.getLogger(__name__)


class SlackWebhookNotifier:
    """Notifier adapter that sends messages through a Slack incoming webhook."""

    def __init__(self, config: SlackConfig, timeout: float = 10) -> None:
        self._config = config
        self._timeout = timeout

    def build_payload(self, text: str) -> dict:
        return {
            "text": text,
            "username": self._config.username,
            "icon_emoji": self._config.icon_emoji,
            "icon_url": self._config.icon_url,
            "channel": self._config.channel,
        }

    def post(self, text: str) -> None:
        """Send ``text`` as a form-encoded ``payload`` field."""

        payload = json.dumps(self.build_payload(text))
        data = urllib.parse.urlencode({"payload": payload}).encode("utf-8")
        request = urllib.request.Request(self._config.webhook_url, data=data, method="POST")
        request.add_header("Content-Type", "application/x-www-form-urlencoded")
        # Blocking call; one connection per post, closed by the with-block.
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                status = response.status
                body = response.read().decode("utf-8", errors="replace")
        except urllib.error.HTTPError as e:
            raise SlackPostError(status=e.code, body=e.read().decode("utf-8", errors="replace")) from e
        except urllib.error.URLError as e:
            raise SlackPostError(f"Slack webhook unreachable: {e.reason}") from e

        if not 200 <= status < 300:
            raise SlackPostError(status=status, body=body)
        LOGGER.info("post message: %s", body)
