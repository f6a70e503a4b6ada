"""
Transient request/response values and the two request profiles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

REQUIRED_FIELDS = ["issueKey", "summary", "repo"]


@dataclass(frozen=True)
class TicketEvent:
    issue_key: str
    summary: str
    repo: str
    # Plain text or an ADF document, as sent by Jira Automation.
    description: Any = None
    ref: str = "main"

    @property
    def owner(self) -> str:
        return self.repo.split("/", 1)[0]

    @property
    def name(self) -> str:
        return self.repo.split("/", 1)[1]

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> TicketEvent | None:
        """Return None when a required field is missing or empty."""
        values = {f: str(payload.get(f) or "").strip() for f in REQUIRED_FIELDS}
        if not all(values.values()):
            return None
        return cls(
            issue_key=values["issueKey"],
            summary=values["summary"],
            repo=values["repo"],
            description=payload.get("description") or None,
            ref=str(payload.get("ref") or "").strip() or "main",
        )


def valid_repo(repo: str) -> bool:
    parts = repo.split("/")
    return len(parts) == 2 and all(parts)


@dataclass(frozen=True)
class TicketComment:
    author: str
    created: str
    body: str


@dataclass(frozen=True)
class CreatedIssueRef:
    number: int
    url: str


@dataclass(frozen=True)
class TransitionResult:
    success: bool
    matched_name: str | None = None
    error_kind: str | None = None
    available_names: list[str] | None = None
    status: int | None = None
    details: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"success": self.success}
        for key, val in [
            ("transition", self.matched_name),
            ("error", self.error_kind),
            ("available", self.available_names),
            ("status", self.status),
            ("details", self.details),
        ]:
            if val is not None:
                out[key] = val
        return out


@dataclass(frozen=True)
class NotificationResult:
    success: bool
    status: int | None = None
    details: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"success": self.success}
        if self.status is not None:
            out["status"] = self.status
        if self.details is not None:
            out["details"] = self.details
        return out


@dataclass(frozen=True)
class RequestProfile:
    action: str
    labels: tuple[str, ...]
    search_qualifiers: tuple[str, ...]
    directive: str
    notification: str
    title_tag: str | None = None
    instructions: str | None = None
    transition: bool = False
    transition_targets: tuple[str, ...] = ()


IMPLEMENT = RequestProfile(
    action="implement",
    labels=("from-jira", "ai-task"),
    search_qualifiers=("type:issue",),
    directive=(
        "@claude please implement this Jira ticket. "
        "Branch from `{ref}` and open a pull request."
    ),
    notification=(
        "🤖 An AI agent has started working on this ticket. "
        "GitHub issue #{number}: {url}"
    ),
    transition=True,
    transition_targets=("in progress", "start progress", "begin", "start work", "working"),
)

RESEARCH = RequestProfile(
    action="research",
    labels=("from-jira", "ai-research"),
    search_qualifiers=("type:issue", "label:ai-research", "state:open"),
    directive=(
        "@claude please research this Jira ticket and write an implementation plan. "
        "Do not change code or open a pull request."
    ),
    notification=(
        "🤖 An AI agent has started researching this ticket. "
        "The plan will be posted here. GitHub issue #{number}: {url}"
    ),
    title_tag="[AI Research]",
    instructions="\n".join(
        [
            "1. Post the research findings and implementation plan as a Jira comment.",
            '2. Move the Jira ticket to "To Do".',
            "3. Unassign the Jira ticket.",
        ]
    ),
)
