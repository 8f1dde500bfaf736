"""Shared fixtures for webhook tests."""

import pytest

from src.webhooks.models import (
    CommitInfo,
    Issue,
    IssueEvent,
    IssueState,
    Project,
    PullRequest,
    PullRequestEvent,
    PushEvent,
    User,
)


@pytest.fixture
def project() -> Project:
    return Project(
        id=7,
        name="hookshot",
        owner="dev",
        overview="Webhook sender",
        is_private=False,
        site_url="http://yobi.example.com/dev/hookshot",
    )


@pytest.fixture
def sender() -> User:
    return User(
        id=3,
        login_id="alice",
        name="Alice",
        email="alice@example.com",
        avatar_url="http://yobi.example.com/avatars/3",
        is_site_admin=False,
    )


@pytest.fixture
def commit() -> CommitInfo:
    return CommitInfo(
        full_id="0123456789abcdef0123456789abcdef01234567",
        message="Fix login redirect",
        author_name="Alice",
        author_email="alice@example.com",
        committer_name="Bob",
        committer_email="bob@example.com",
        commit_time=1700000000,
    )


@pytest.fixture
def push_event(commit: CommitInfo, sender: User) -> PushEvent:
    return PushEvent(
        event_type_labels=["push"],
        commits=[commit],
        ref_names=["refs/heads/master"],
        sender=sender,
        title="pushed to master",
    )


@pytest.fixture
def issue_event(sender: User) -> IssueEvent:
    return IssueEvent(
        kind="NEW_ISSUE",
        sender=sender,
        issue=Issue(
            id=42,
            title="Bug A",
            body="Steps to reproduce",
            assignee_name="Bob",
            state=IssueState.OPEN,
        ),
    )


@pytest.fixture
def pull_request_event(sender: User) -> PullRequestEvent:
    return PullRequestEvent(
        sender=sender,
        pull_request=PullRequest(
            id=5,
            title="Add webhooks",
            body="Sends notifications",
            contributor_name="Alice",
            from_branch="feature/webhooks",
            to_branch="master",
        ),
    )
