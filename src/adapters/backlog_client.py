"""Backlog issue search adapter.

Implements the core IssueSourcePort against the Backlog REST API
(``GET /api/v2/issues``).
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, List, Mapping, Optional, Tuple

from adapters.backlog_mapper import issues_from_payload
from core.errors import BacklogApiError
from core.models import Issue

LOGGER = logging.getLogger(__name__)

ISSUES_PATH = "/api/v2/issues"


def encode_query(query: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Flatten a condition map into Backlog query parameters.

    Backlog expects array filters as repeated ``key[]`` parameters, e.g.
    ``projectId[]=1&projectId[]=2``.
    """

    params: List[Tuple[str, str]] = []
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            array_key = key if key.endswith("[]") else f"{key}[]"
            params.extend((array_key, _encode_value(item)) for item in value)
        else:
            params.append((key, _encode_value(value)))
    return params


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class BacklogIssueSource:
    """Blocking Backlog API client that satisfies the IssueSourcePort contract."""

    def __init__(self, api_key: str, base_url: str, timeout: float = 30) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def _endpoint(self, query: Mapping[str, Any]) -> str:
        params = [("apiKey", self._api_key)] + encode_query(query)
        return f"{self._base_url}{ISSUES_PATH}?{urllib.parse.urlencode(params)}"

    def search_issues(self, query: Mapping[str, Any]) -> List[Optional[Issue]]:
        """Return issues matching ``query`` in the order Backlog sends them."""

        request = urllib.request.Request(self._endpoint(query), method="GET")
        request.add_header("Accept", "application/json")
        LOGGER.debug("Searching Backlog issues: %s", encode_query(query))
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                body = response.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            raise BacklogApiError(status=e.code, body=e.read().decode("utf-8", errors="replace")) from e
        except urllib.error.URLError as e:
            raise BacklogApiError(f"Backlog API unreachable: {e.reason}") from e

        try:
            payload = json.loads(body)
        except ValueError as e:
            raise BacklogApiError(f"Backlog API returned invalid JSON: {body[:200]}") from e
        if not isinstance(payload, list):
            raise BacklogApiError(f"Backlog API returned unexpected payload: {body[:200]}")
        return issues_from_payload(payload)
