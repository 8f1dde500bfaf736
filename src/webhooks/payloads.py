"""Notification payload builders.

Push events are rendered in a GitHub-webhook-like shape; issue and pull
request events in a chat-attachment shape understood by Slack-style incoming
webhooks. The two shapes serve different consumers and share no schema.
"""

import json
from datetime import datetime, timezone
from typing import Any, Optional

from src.core.config import get_settings
from src.core.exceptions import PayloadException
from src.webhooks.messages import Localizer, MessageCatalog
from src.webhooks.models import (
    CommitInfo,
    EventType,
    IssueEvent,
    Project,
    PullRequestEvent,
    PushEvent,
    User,
)

settings = get_settings()

COMMIT_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
# Historical 12-hour rendering kept for subscribers that parse it byte for byte.
LEGACY_COMMIT_TIME_FORMAT = "%Y-%m-%dT%I:%M:%S%z"

ISSUE_VERBS = {
    EventType.NEW_ISSUE.value: "notification.type.new.issue",
    EventType.ISSUE_STATE_CHANGED.value: "notification.type.issue.state.changed",
}
PULL_REQUEST_VERBS = {
    EventType.NEW_PULL_REQUEST.value: "notification.type.new.pullrequest",
}


def format_commit_time(commit_time: int, legacy: bool = False) -> str:
    """Render epoch seconds as a UTC timestamp with a +0000 offset."""
    moment = datetime.fromtimestamp(commit_time, tz=timezone.utc)
    return moment.strftime(LEGACY_COMMIT_TIME_FORMAT if legacy else COMMIT_TIME_FORMAT)


def project_html_url(project: Project, base_url: str) -> str:
    """Canonical browser URL of a project."""
    return f"{base_url.rstrip('/')}/{project.owner}/{project.name}"


def serialize(document: dict[str, Any]) -> bytes:
    """Encode a notification document as UTF-8 JSON."""
    return json.dumps(document, ensure_ascii=False).encode("utf-8")


class PayloadBuilder:
    """Builds notification documents for domain events."""

    def __init__(
        self,
        localizer: Optional[Localizer] = None,
        locale: Optional[str] = None,
        site_base_url: Optional[str] = None,
        legacy_timestamps: Optional[bool] = None,
    ) -> None:
        """Initialize payload builder.

        Args:
            localizer: Message lookup (default: bundled message catalog)
            locale: Locale for human-readable text (default from settings)
            site_base_url: Base URL for canonical project links (default from settings)
            legacy_timestamps: Render commit times with the 12-hour pattern
        """
        self.localizer = localizer or MessageCatalog()
        self.locale = locale or settings.default_locale
        self.site_base_url = site_base_url or settings.site_base_url
        self.legacy_timestamps = (
            settings.webhook_legacy_timestamps if legacy_timestamps is None else legacy_timestamps
        )

    def build(self, project: Project, event: PushEvent | IssueEvent | PullRequestEvent) -> dict[str, Any]:
        """Build the document matching the event's family."""
        if isinstance(event, PushEvent):
            return self.build_push(project, event)
        if isinstance(event, IssueEvent):
            return self.build_issue(project, event)
        if isinstance(event, PullRequestEvent):
            return self.build_pull_request(project, event)
        raise PayloadException(f"Unsupported event: {type(event).__name__}")

    def build_push(self, project: Project, event: PushEvent) -> dict[str, Any]:
        """Build a push notification.

        Raises:
            PayloadException: If the event carries no commits
        """
        if not event.commits:
            raise PayloadException(
                "Push payload requires at least one commit",
                details={"project_id": project.id, "ref": list(event.ref_names)},
            )

        commits = [self._commit(project, commit) for commit in event.commits]
        return {
            "ref": list(event.ref_names),
            "commits": commits,
            "head_commit": commits[0],
            "sender": self._sender(event.sender),
            "pusher": {
                "name": event.sender.name,
                "email": event.sender.email,
            },
            "repository": {
                "id": project.id,
                "name": project.name,
                "owner": project.owner,
                "html_url": project_html_url(project, self.site_base_url),
                "overview": project.overview,
                "private": project.is_private,
            },
        }

    def build_issue(self, project: Project, event: IssueEvent) -> dict[str, Any]:
        """Build a chat-style issue notification."""
        issue = event.issue
        text = self._headline(
            project,
            event.sender,
            ISSUE_VERBS.get(event.kind),
            f"{project.site_url}/issue/{issue.id}",
            f"#{issue.id}: {issue.title}",
        )
        fields = [
            self._field("issue.assignee", issue.assignee_name),
            self._field("issue.state", issue.state.value),
        ]
        return {"text": text, "attachments": [{"text": issue.body, "fields": fields}]}

    def build_pull_request(self, project: Project, event: PullRequestEvent) -> dict[str, Any]:
        """Build a chat-style pull request notification."""
        pull_request = event.pull_request
        text = self._headline(
            project,
            event.sender,
            PULL_REQUEST_VERBS.get(event.kind),
            f"{project.site_url}/pullRequest/{pull_request.id}",
            f"#{pull_request.id}: {pull_request.title}",
        )
        fields = [
            self._field("pullRequest.sender", pull_request.contributor_name),
            self._field("pullRequest.from", pull_request.from_branch),
            self._field("pullRequest.to", pull_request.to_branch),
        ]
        return {"text": text, "attachments": [{"text": pull_request.body, "fields": fields}]}

    def _headline(
        self,
        project: Project,
        sender: User,
        verb_id: Optional[str],
        link: str,
        label: str,
    ) -> str:
        verb = self.localizer(verb_id, self.locale) if verb_id else ""
        return f"[{project.name}] {sender.name} {verb} <{link}|{label}>"

    def _field(self, title_id: str, value: str) -> dict[str, str]:
        return {"title": self.localizer(title_id, self.locale), "value": value}

    @staticmethod
    def _sender(user: User) -> dict[str, Any]:
        return {
            "login": user.login_id,
            "id": user.id,
            "avatar_url": user.avatar_url,
            "type": "User",
            "site_admin": user.is_site_admin,
        }

    def _commit(self, project: Project, commit: CommitInfo) -> dict[str, Any]:
        # TODO: include added/removed/modified file lists once CommitInfo carries a diff summary
        return {
            "id": commit.full_id,
            "message": commit.message,
            "timestamp": format_commit_time(commit.commit_time, self.legacy_timestamps),
            "url": f"{project.site_url}/commit/{commit.full_id}",
            "author": {
                "name": commit.author_name,
                "email": commit.author_email,
            },
            "committer": {
                "name": commit.committer_name,
                "email": commit.committer_email,
            },
        }
