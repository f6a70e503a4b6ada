"""
Minimal Jira Cloud REST client (v3) using basic auth.

`api_base` is either the site URL or the scoped token gateway
(`https://api.atlassian.com/ex/jira/{cloudId}`).
"""

from __future__ import annotations

import base64
import urllib.parse
from typing import Any

from . import transport
from .transport import Response


def basic_auth(email: str, api_token: str) -> str:
    raw = f"{email}:{api_token}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


class JiraClient:
    def __init__(self, api_base: str, email: str, api_token: str) -> None:
        self.base_api = api_base.rstrip("/") + "/rest/api/3"
        self.headers = {
            "Authorization": basic_auth(email, api_token),
            "Accept": "application/json",
        }

    def _issue_url(self, issue_key: str, suffix: str) -> str:
        return f"{self.base_api}/issue/{urllib.parse.quote(issue_key)}/{suffix}"

    def list_comments(self, issue_key: str) -> Response:
        url = self._issue_url(issue_key, "comment") + "?expand=renderedBody"
        return transport.request("GET", url, self.headers)

    def list_transitions(self, issue_key: str) -> Response:
        return transport.request("GET", self._issue_url(issue_key, "transitions"), self.headers)

    def apply_transition(self, issue_key: str, transition_id: str) -> Response:
        body = {"transition": {"id": transition_id}}
        return transport.request(
            "POST", self._issue_url(issue_key, "transitions"), self.headers, body
        )

    def post_comment(self, issue_key: str, document: dict[str, Any]) -> Response:
        return transport.request(
            "POST", self._issue_url(issue_key, "comment"), self.headers, {"body": document}
        )
