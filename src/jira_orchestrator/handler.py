"""
AWS Lambda handlers for Jira Automation webhooks -> GitHub issue for an AI agent.

`implement_handler` and `research_handler` are the two Function URL targets.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any

from . import workflow
from .config import SecretProvider, default_provider, load_settings
from .github import GitHubClient
from .jira import JiraClient
from .logs import configure_logging, log, logger, request_id
from .models import (
    IMPLEMENT,
    REQUIRED_FIELDS,
    RESEARCH,
    RequestProfile,
    TicketEvent,
    valid_repo,
)

SECRET_HEADER = "x-webhook-secret"


def _response(status: int, body: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, ensure_ascii=False),
    }


def _get_method(event: dict[str, Any]) -> str:
    http = (event.get("requestContext") or {}).get("http") or {}
    # Direct invocations carry no method.
    return (http.get("method") or event.get("httpMethod") or "POST").upper()


def _get_body(event: dict[str, Any]) -> dict[str, Any]:
    body = event.get("body")
    if isinstance(body, dict):
        return body
    try:
        if event.get("isBase64Encoded"):
            body = base64.b64decode(body or b"")
        if isinstance(body, (bytes, bytearray)):
            body = body.decode("utf-8")
        data = json.loads(body or "{}")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _get_header(event: dict[str, Any], name: str) -> str | None:
    headers = event.get("headers") or {}
    for k, v in headers.items():
        if k.lower() == name.lower():
            return v
    return None


def handle(
    event: dict[str, Any],
    profile: RequestProfile,
    context: Any = None,
    secrets: SecretProvider | None = None,
) -> dict[str, Any]:
    configure_logging()
    rid = request_id(context)
    try:
        method = _get_method(event)
        if method != "POST":
            log("rejected_method", rid=rid, method=method)
            return _response(405, {"error": "method_not_allowed"})

        settings = load_settings(secrets or default_provider())

        # A missing or empty header is accepted; only a mismatching one is rejected.
        supplied = _get_header(event, SECRET_HEADER)
        if supplied and supplied != settings.webhook_secret:
            log("auth_failed", logging.WARNING, rid=rid, reason="secret_mismatch")
            return _response(401, {"error": "invalid_secret"})

        ticket = TicketEvent.from_payload(_get_body(event))
        if ticket is None:
            log("rejected_missing_fields", rid=rid)
            return _response(400, {"error": "missing_fields", "required": REQUIRED_FIELDS})
        if not valid_repo(ticket.repo):
            log("rejected_invalid_repo", rid=rid, repo=ticket.repo)
            return _response(400, {"error": "invalid_repo", "repo": ticket.repo})

        log("request_accepted", rid=rid, issueKey=ticket.issue_key, action=profile.action)
        gh = GitHubClient(settings.github_token)
        jira = JiraClient(settings.jira_api_base, settings.jira_email, settings.jira_api_token)
        status, body = workflow.run(ticket, profile, settings, gh, jira, rid)
        return _response(status, body)
    except Exception as e:
        logger.exception("Unhandled error")
        log("internal_error", logging.ERROR, rid=rid, error=str(e))
        return _response(500, {"error": "internal", "message": str(e)})


def implement_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    return handle(event, IMPLEMENT, context)


def research_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    return handle(event, RESEARCH, context)
