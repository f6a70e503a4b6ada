"""
Settings resolution from an injected secret provider.

Secrets are resolved once per invocation; nothing is cached across invocations.
"""

from __future__ import annotations

import importlib
import json
import os
from dataclasses import dataclass
from typing import Protocol

GATEWAY_BASE = "https://api.atlassian.com/ex/jira"


def _boto3():
    # Allow tests to monkeypatch module-level `boto3` symbol.
    return globals().get("boto3") or importlib.import_module("boto3")


class ConfigError(RuntimeError):
    pass


class SecretProvider(Protocol):
    def get(self, name: str) -> str | None: ...


class EnvSecretProvider:
    """Read secrets from the process environment."""

    def get(self, name: str) -> str | None:
        v = os.getenv(name)
        return v if v else None


class SecretsManagerProvider:
    """Read secrets from one JSON SecretString in AWS Secrets Manager."""

    def __init__(self, secret_id: str) -> None:
        self.secret_id = secret_id
        self._values: dict[str, str] | None = None

    def _load(self) -> dict[str, str]:
        if self._values is None:
            client = _boto3().client("secretsmanager")
            resp = client.get_secret_value(SecretId=self.secret_id)
            data = json.loads(resp.get("SecretString") or "{}")
            self._values = {k: str(v) for k, v in data.items() if v is not None}
        return self._values

    def get(self, name: str) -> str | None:
        return self._load().get(name) or None


def default_provider() -> SecretProvider:
    secret_id = os.getenv("SECRETS_MANAGER_SECRET_ID")
    if secret_id:
        return SecretsManagerProvider(secret_id)
    return EnvSecretProvider()


@dataclass(frozen=True)
class Settings:
    github_token: str
    webhook_secret: str | None
    jira_base: str
    jira_cloud_id: str | None
    jira_email: str
    jira_api_token: str

    @property
    def jira_api_base(self) -> str:
        """REST base, routed through the scoped token gateway when a cloud id is set."""
        if self.jira_cloud_id:
            return f"{GATEWAY_BASE}/{self.jira_cloud_id}"
        return self.jira_base

    def browse_url(self, issue_key: str) -> str:
        return f"{self.jira_base}/browse/{issue_key}"


def load_settings(provider: SecretProvider) -> Settings:
    def _require(name: str) -> str:
        v = provider.get(name)
        if not v:
            raise ConfigError(f"{name} not configured")
        return v

    return Settings(
        github_token=_require("GH_TOKEN"),
        webhook_secret=provider.get("WEBHOOK_SECRET"),
        jira_base=_require("JIRA_BASE").rstrip("/"),
        jira_cloud_id=provider.get("JIRA_CLOUD_ID"),
        jira_email=_require("JIRA_EMAIL"),
        jira_api_token=_require("JIRA_API_TOKEN"),
    )
