"""
Minimal GitHub REST client (issues search + create).
"""

from __future__ import annotations

import urllib.parse
from typing import Any

from . import transport
from .transport import Response

API_BASE = "https://api.github.com"
API_VERSION = "2022-11-28"


class GitHubClient:
    def __init__(self, token: str, api_base: str = API_BASE) -> None:
        self.api_base = api_base.rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }

    def search_issues(self, query: str) -> Response:
        url = self.api_base + "/search/issues?" + urllib.parse.urlencode({"q": query})
        return transport.request("GET", url, self.headers)

    def create_issue(
        self, owner: str, name: str, title: str, body: str, labels: list[str]
    ) -> Response:
        path = f"/repos/{urllib.parse.quote(owner)}/{urllib.parse.quote(name)}/issues"
        payload: dict[str, Any] = {"title": title, "body": body, "labels": labels}
        return transport.request("POST", self.api_base + path, self.headers, payload)
