"""
Text rendering: Jira comments, GitHub issue title/body, ADF comment documents.
"""

from __future__ import annotations

import re
from typing import Any

from .models import RequestProfile, TicketComment, TicketEvent

NO_COMMENTS = "_No comments_"
NO_DESCRIPTION = "(no description)"
PREVIEW_MAX_CHARS = 1000
TAG_RE = re.compile(r"<[^>]+>")


def strip_html(html: str | None) -> str:
    return TAG_RE.sub("", html or "").strip()


def preview(text: str, n: int = PREVIEW_MAX_CHARS) -> str:
    return text if len(text) <= n else text[:n] + "…"


def adf_text(node: Any) -> str:
    """Flatten an Atlassian Document Format node to its text nodes."""
    if isinstance(node, list):
        return "".join(adf_text(n) for n in node)
    if not isinstance(node, dict):
        return ""
    if node.get("type") == "text":
        return str(node.get("text") or "")
    inner = adf_text(node.get("content") or [])
    if node.get("type") in ("paragraph", "heading", "listItem", "codeBlock"):
        return inner + "\n"
    return inner


def plain_text(value: Any) -> str:
    """Plain strings as is, ADF documents flattened, anything else via str()."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return adf_text(value).strip()
    return str(value)


def parse_comment(raw: dict[str, Any]) -> TicketComment:
    author = raw.get("author")
    if not isinstance(author, dict):
        author = {}
    name = str(author.get("displayName") or author.get("name") or "unknown")
    created = plain_text(raw.get("created"))[:10]
    if isinstance(raw.get("renderedBody"), str) and raw["renderedBody"]:
        body = strip_html(raw["renderedBody"])
    else:
        body = plain_text(raw.get("body"))
    return TicketComment(author=name, created=created, body=preview(body))


def render_comments(comments: list[TicketComment]) -> str:
    if not comments:
        return NO_COMMENTS
    return "\n\n".join(f"- {c.author} ({c.created}):\n  {c.body}" for c in comments)


def build_title(event: TicketEvent, profile: RequestProfile) -> str:
    summary = f"{profile.title_tag} {event.summary}" if profile.title_tag else event.summary
    return f"{event.issue_key}: {summary}"


def split_title(title: str) -> tuple[str, str]:
    key, _, summary = title.partition(": ")
    return key, summary


def render_sections(sections: list[tuple[str, str]]) -> str:
    parts: list[str] = []
    for title, body in sections:
        parts.append(f"## {title}")
        parts.append(body)
        parts.append("")
    return "\n".join(parts).rstrip("\n")


def build_issue_body(
    event: TicketEvent,
    profile: RequestProfile,
    comments_markdown: str,
    browse_url: str,
) -> str:
    sections = [
        ("Jira Description", plain_text(event.description) or NO_DESCRIPTION),
        ("Jira Comments", comments_markdown),
        ("Source", f"- Jira: {browse_url}"),
    ]
    if profile.instructions:
        sections.append(("Instructions", profile.instructions))
    directive = profile.directive.format(ref=event.ref)
    return directive + "\n\n" + render_sections(sections)


def adf_document(text: str) -> dict[str, Any]:
    return {
        "type": "doc",
        "version": 1,
        "content": [{"type": "paragraph", "content": [{"type": "text", "text": text}]}],
    }
