"""Domain snapshots consumed by the webhook dispatcher.

Projects, users, issues and pull requests are owned elsewhere; these models
are read-only copies of already committed state taken when an event fires.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class WebhookScope(str, Enum):
    """Which events a subscription asked for."""

    ALL_EVENTS = "all_events"
    PUSH_ONLY = "push_only"


class EventFamily(str, Enum):
    """Event classification used for payload shape and recipient filtering."""

    PUSH = "push"
    ISSUE = "issue"
    PULL_REQUEST = "pull_request"


class EventType(str, Enum):
    """Issue and pull request event kinds that produce notifications."""

    NEW_ISSUE = "NEW_ISSUE"
    ISSUE_STATE_CHANGED = "ISSUE_STATE_CHANGED"
    NEW_PULL_REQUEST = "NEW_PULL_REQUEST"


class IssueState(str, Enum):
    """Issue state label."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class Snapshot(BaseModel):
    """Immutable base for domain snapshots."""

    model_config = ConfigDict(frozen=True)


class Project(Snapshot):
    id: int
    name: str
    owner: str
    overview: str = ""
    is_private: bool = False
    site_url: str


class User(Snapshot):
    id: int
    login_id: str
    name: str
    email: str = ""
    avatar_url: str = ""
    is_site_admin: bool = False


class Issue(Snapshot):
    id: int
    title: str
    body: str = ""
    assignee_name: str = ""
    state: IssueState = IssueState.OPEN


class PullRequest(Snapshot):
    id: int
    title: str
    body: str = ""
    contributor_name: str
    from_branch: str
    to_branch: str


class CommitInfo(Snapshot):
    """Projection of a version control commit."""

    full_id: str
    message: str
    author_name: str
    author_email: str
    committer_name: str
    committer_email: str
    commit_time: int  # epoch seconds


class PushEvent(Snapshot):
    family: Literal["push"] = "push"
    event_type_labels: list[str] = Field(default_factory=list)
    commits: list[CommitInfo]
    ref_names: list[str]
    sender: User
    title: str = ""


class IssueEvent(Snapshot):
    family: Literal["issue"] = "issue"
    kind: Literal["NEW_ISSUE", "ISSUE_STATE_CHANGED"]
    sender: User
    issue: Issue


class PullRequestEvent(Snapshot):
    family: Literal["pull_request"] = "pull_request"
    kind: Literal["NEW_PULL_REQUEST"] = "NEW_PULL_REQUEST"
    sender: User
    pull_request: PullRequest


DomainEvent = Annotated[
    Union[PushEvent, IssueEvent, PullRequestEvent],
    Field(discriminator="family"),
]


class WebhookSubscription(Snapshot):
    """A project's registered webhook endpoint."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    project_id: int
    payload_url: str
    secret: str = ""
    scope: WebhookScope = WebhookScope.ALL_EVENTS
    created_at: Optional[datetime] = None

    @property
    def is_deliverable(self) -> bool:
        """A subscription stored with an empty URL is never sent to."""
        return bool(self.payload_url)
