import json

from jira_orchestrator.transport import Response


class FakeSecrets:
    def __init__(self, **overrides):
        self.values = {
            "GH_TOKEN": "gh-token",
            "WEBHOOK_SECRET": "secret",
            "JIRA_BASE": "https://acme.atlassian.net",
            "JIRA_EMAIL": "bot@acme.test",
            "JIRA_API_TOKEN": "jira-token",
        }
        self.values.update(overrides)

    def get(self, name: str):
        return self.values.get(name)


class FakeGitHub:
    def __init__(self, search=None, create=None):
        self.search = search or Response(200, '{"total_count": 0, "items": []}')
        self.create = create or Response(
            201, '{"number": 7, "html_url": "https://github.com/acme/app/issues/7"}'
        )
        self.queries = []
        self.created = []

    def search_issues(self, query: str):
        self.queries.append(query)
        return self.search

    def create_issue(self, owner, name, title, body, labels):
        self.created.append(
            {"owner": owner, "name": name, "title": title, "body": body, "labels": labels}
        )
        return self.create


class FakeJira:
    def __init__(self, comments=None, transitions=None, apply=None, post=None):
        self.comments = comments or Response(200, '{"comments": []}')
        self.transitions = transitions or Response(200, '{"transitions": []}')
        self.apply = apply or Response(204, "")
        self.post = post or Response(201, "{}")
        self.calls = []
        self.applied = []
        self.posted = []

    def list_comments(self, issue_key: str):
        self.calls.append(("list_comments", issue_key))
        return self.comments

    def list_transitions(self, issue_key: str):
        self.calls.append(("list_transitions", issue_key))
        return self.transitions

    def apply_transition(self, issue_key: str, transition_id: str):
        self.calls.append(("apply_transition", issue_key))
        self.applied.append(transition_id)
        return self.apply

    def post_comment(self, issue_key: str, document):
        self.calls.append(("post_comment", issue_key))
        self.posted.append(document)
        return self.post


def make_event(body, secret="secret", method="POST"):
    headers = {"content-type": "application/json"}
    if secret is not None:
        headers["X-Webhook-Secret"] = secret
    return {
        "requestContext": {"http": {"method": method}},
        "headers": headers,
        "body": body if isinstance(body, str) else json.dumps(body),
        "isBase64Encoded": False,
    }
