import json

import pytest
from fakes import FakeSecrets

import jira_orchestrator.config as cfg


def test_load_settings():
    s = cfg.load_settings(FakeSecrets(JIRA_BASE="https://acme.atlassian.net/"))
    assert s.github_token == "gh-token"
    assert s.webhook_secret == "secret"
    assert s.jira_base == "https://acme.atlassian.net"
    assert s.jira_api_base == "https://acme.atlassian.net"
    assert s.browse_url("PROJ-1") == "https://acme.atlassian.net/browse/PROJ-1"


def test_cloud_id_routes_through_gateway():
    s = cfg.load_settings(FakeSecrets(JIRA_CLOUD_ID="abc-123"))
    assert s.jira_api_base == "https://api.atlassian.com/ex/jira/abc-123"
    assert s.browse_url("PROJ-1") == "https://acme.atlassian.net/browse/PROJ-1"


@pytest.mark.parametrize("name", ["GH_TOKEN", "JIRA_BASE", "JIRA_EMAIL", "JIRA_API_TOKEN"])
def test_required_secret_missing(name):
    with pytest.raises(cfg.ConfigError, match=name):
        cfg.load_settings(FakeSecrets(**{name: ""}))


def test_webhook_secret_optional():
    assert cfg.load_settings(FakeSecrets(WEBHOOK_SECRET=None)).webhook_secret is None


def test_env_provider(monkeypatch):
    monkeypatch.setenv("GH_TOKEN", "t")
    monkeypatch.setenv("JIRA_CLOUD_ID", "")
    p = cfg.EnvSecretProvider()
    assert p.get("GH_TOKEN") == "t"
    assert p.get("JIRA_CLOUD_ID") is None


def test_secrets_manager_provider(monkeypatch):
    calls = []

    class FakeSM:
        def get_secret_value(self, SecretId: str):
            calls.append(SecretId)
            return {"SecretString": json.dumps({"GH_TOKEN": "from-sm", "JIRA_CLOUD_ID": None})}

    class BotoModule:
        def client(self, name: str):
            if name == "secretsmanager":
                return FakeSM()
            raise ValueError(name)

    monkeypatch.setitem(cfg.__dict__, "boto3", BotoModule())
    p = cfg.SecretsManagerProvider("jira-orchestrator")
    assert p.get("GH_TOKEN") == "from-sm"
    assert p.get("JIRA_CLOUD_ID") is None
    assert p.get("MISSING") is None
    assert calls == ["jira-orchestrator"]


def test_default_provider_selection(monkeypatch):
    monkeypatch.delenv("SECRETS_MANAGER_SECRET_ID", raising=False)
    assert isinstance(cfg.default_provider(), cfg.EnvSecretProvider)
    monkeypatch.setenv("SECRETS_MANAGER_SECRET_ID", "s")
    p = cfg.default_provider()
    assert isinstance(p, cfg.SecretsManagerProvider)
    assert p.secret_id == "s"
