"""
Jira -> GitHub orchestrator (Lambda)

Where: AWS Lambda via Function URL (Jira Automation webhook target).
What:  Dedup against GitHub issues, build an issue from the Jira ticket and its
       comments, create it, then transition and comment on the Jira ticket.
Why:   Hand Jira tickets to an AI coding agent that works from GitHub issues.
"""

__all__ = [
    "config",
    "handler",
    "formatting",
    "github",
    "jira",
    "logs",
    "models",
    "transport",
    "workflow",
]
