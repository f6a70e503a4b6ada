"""
Minimal JSON-over-HTTP transport using stdlib urllib.

HTTP error statuses are returned, not raised, so callers can decide which
upstream failures are fatal.
"""

from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any

USER_AGENT = "JiraOrchestrator/1.0"
TIMEOUT_SECONDS = 10

# Raised by `request` for failures below HTTP status level: connection errors,
# truncated or malformed responses, unusable URLs.
TRANSPORT_ERRORS = (OSError, http.client.HTTPException, ValueError)


@dataclass(frozen=True)
class Response:
    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        try:
            return json.loads(self.text) if self.text else {}
        except ValueError:
            return {}


def request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    body: Any = None,
) -> Response:
    data = None
    hdrs = {"User-Agent": USER_AGENT}
    if body is not None:
        data = json.dumps(body, ensure_ascii=False).encode("utf-8")
        hdrs["Content-Type"] = "application/json"
    hdrs.update(headers or {})
    req = urllib.request.Request(url, data=data, headers=hdrs, method=method)
    try:
        with urllib.request.urlopen(req, timeout=TIMEOUT_SECONDS) as resp:  # nosec B310
            return Response(resp.status, resp.read().decode("utf-8", "replace"))
    except urllib.error.HTTPError as e:
        return Response(e.code, e.read().decode("utf-8", "replace"))
