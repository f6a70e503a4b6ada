"""
Ticket → GitHub issue pipeline shared by the implement and research handlers.

Only issue creation is fatal. Dedup, comment fetch, transition and
notification degrade to defaults and are reported, never raised.
"""

from __future__ import annotations

import logging
from typing import Any

from .config import Settings
from .formatting import (
    NO_COMMENTS,
    adf_document,
    build_issue_body,
    build_title,
    parse_comment,
    render_comments,
)
from .github import GitHubClient
from .jira import JiraClient
from .logs import log
from .models import (
    CreatedIssueRef,
    NotificationResult,
    RequestProfile,
    TicketEvent,
    TransitionResult,
)
from .transport import TRANSPORT_ERRORS


def _as_dict(data: Any) -> dict[str, Any]:
    return data if isinstance(data, dict) else {}


def _warn(msg: str, rid: str | None, issue_key: str, **fields: Any) -> None:
    log(msg, logging.WARNING, rid=rid, issueKey=issue_key, **fields)


def _name(transition: dict[str, Any]) -> str:
    return str(transition.get("name") or "")


def search_query(event: TicketEvent, profile: RequestProfile) -> str:
    return " ".join([event.issue_key, f"repo:{event.repo}", *profile.search_qualifiers])


def find_existing_issue(
    gh: GitHubClient, event: TicketEvent, profile: RequestProfile, rid: str | None = None
) -> int | None:
    """Return the number of an already created issue, or None (also on failure)."""
    try:
        resp = gh.search_issues(search_query(event, profile))
    except TRANSPORT_ERRORS as e:
        _warn("dedup_search_error", rid, event.issue_key, error=str(e))
        return None
    if not resp.ok:
        _warn("dedup_search_failed", rid, event.issue_key, status=resp.status)
        return None
    data = _as_dict(resp.json())
    items = data.get("items") or []
    if not data.get("total_count") or not isinstance(items, list) or not items:
        return None
    number = _as_dict(items[0]).get("number")
    return number if isinstance(number, int) else None


def fetch_comments_markdown(jira: JiraClient, issue_key: str, rid: str | None = None) -> str:
    try:
        resp = jira.list_comments(issue_key)
    except TRANSPORT_ERRORS as e:
        _warn("comments_fetch_error", rid, issue_key, error=str(e))
        return NO_COMMENTS
    if not resp.ok:
        _warn("comments_fetch_failed", rid, issue_key, status=resp.status)
        return NO_COMMENTS
    raw = _as_dict(resp.json()).get("comments")
    if not isinstance(raw, list):
        return NO_COMMENTS
    return render_comments([parse_comment(c) for c in raw if isinstance(c, dict)])


def match_transition(
    transitions: list[dict[str, Any]], targets: tuple[str, ...]
) -> dict[str, Any] | None:
    # Fragment order decides, not transition order.
    for fragment in targets:
        for t in transitions:
            if fragment in _name(t).lower():
                return t
    return None


def transition_ticket(
    jira: JiraClient, issue_key: str, targets: tuple[str, ...], rid: str | None = None
) -> TransitionResult:
    try:
        resp = jira.list_transitions(issue_key)
        if not resp.ok:
            _warn("transitions_unavailable", rid, issue_key, status=resp.status)
            return TransitionResult(
                success=False,
                error_kind="transitions_unavailable",
                status=resp.status,
                details=resp.text,
            )
        raw = _as_dict(resp.json()).get("transitions")
        if not isinstance(raw, list):
            raw = []
        transitions = [t for t in raw if isinstance(t, dict)]
        target = match_transition(transitions, targets)
        if target is None:
            available = [_name(t) for t in transitions]
            _warn("transition_not_found", rid, issue_key, available=available)
            return TransitionResult(
                success=False, error_kind="transition_not_found", available_names=available
            )
        applied = jira.apply_transition(issue_key, str(target.get("id")))
        if not applied.ok:
            _warn("transition_failed", rid, issue_key, status=applied.status)
            return TransitionResult(
                success=False,
                matched_name=_name(target),
                error_kind="transition_failed",
                status=applied.status,
                details=applied.text,
            )
    except TRANSPORT_ERRORS as e:
        _warn("transition_error", rid, issue_key, error=str(e))
        return TransitionResult(success=False, error_kind="transition_error", details=str(e))
    log("transition_ok", rid=rid, issueKey=issue_key, transition=_name(target))
    return TransitionResult(success=True, matched_name=_name(target))


def notify_ticket(
    jira: JiraClient,
    issue_key: str,
    text: str,
    rid: str | None = None,
) -> NotificationResult:
    try:
        resp = jira.post_comment(issue_key, adf_document(text))
    except TRANSPORT_ERRORS as e:
        _warn("notification_error", rid, issue_key, error=str(e))
        return NotificationResult(success=False, details=str(e))
    if not resp.ok:
        _warn("notification_failed", rid, issue_key, status=resp.status)
        return NotificationResult(success=False, status=resp.status, details=resp.text)
    return NotificationResult(success=True)


def run(
    event: TicketEvent,
    profile: RequestProfile,
    settings: Settings,
    gh: GitHubClient,
    jira: JiraClient,
    rid: str | None = None,
) -> tuple[int, dict[str, Any]]:
    """Run the pipeline and return (status code, response body)."""
    existing = find_existing_issue(gh, event, profile, rid)
    if existing is not None:
        log("dedup_skipped", rid=rid, issueKey=event.issue_key, issueNumber=existing)
        return 200, {
            "ok": True,
            "skipped": True,
            "reason": "issue_exists",
            "issue_number": existing,
            "action": profile.action,
        }

    comments_md = fetch_comments_markdown(jira, event.issue_key, rid)
    title = build_title(event, profile)
    body = build_issue_body(event, profile, comments_md, settings.browse_url(event.issue_key))

    created = gh.create_issue(event.owner, event.name, title, body, list(profile.labels))
    if not created.ok:
        log(
            "github_create_failed",
            logging.ERROR,
            rid=rid,
            issueKey=event.issue_key,
            status=created.status,
        )
        return 502, {"error": "github_request_failed", "details": created.text}
    data = _as_dict(created.json())
    number = data.get("number")
    if not isinstance(number, int):
        log("github_create_unreadable", logging.ERROR, rid=rid, issueKey=event.issue_key)
        return 502, {"error": "github_request_failed", "details": created.text}
    issue = CreatedIssueRef(number=number, url=str(data.get("html_url") or ""))
    log("issue_created", rid=rid, issueKey=event.issue_key, issueNumber=issue.number)

    out: dict[str, Any] = {
        "ok": True,
        "issue_number": issue.number,
        "issue_url": issue.url,
        "action": profile.action,
    }
    if profile.transition:
        result = transition_ticket(jira, event.issue_key, profile.transition_targets, rid)
        out["jira_transition"] = result.to_dict()
    text = profile.notification.format(number=issue.number, url=issue.url)
    out["jira_notification"] = notify_ticket(jira, event.issue_key, text, rid).to_dict()
    return 200, out
