"""Tests for webhook Celery tasks."""

import pytest
from pytest_mock import MockerFixture

from src.tasks import webhook_tasks
from src.tasks.webhook_tasks import dispatch_webhook_event_task, enqueue_event
from src.webhooks.models import IssueEvent, Project, PushEvent


def test_task_decodes_tagged_event(
    project: Project,
    push_event: PushEvent,
    mocker: MockerFixture,
) -> None:
    """Test JSON arguments are turned back into domain models."""
    dispatch = mocker.patch.object(
        webhook_tasks,
        "_dispatch_async",
        new_callable=mocker.AsyncMock,
        return_value={"status": "completed", "attempted": 2},
    )

    result = dispatch_webhook_event_task(
        project.model_dump(mode="json"),
        push_event.model_dump(mode="json"),
    )

    assert result == {"status": "completed", "attempted": 2}
    decoded_project, decoded_event = dispatch.await_args.args
    assert decoded_project == project
    assert isinstance(decoded_event, PushEvent)
    assert decoded_event == push_event


def test_task_rejects_invalid_event(project: Project, mocker: MockerFixture) -> None:
    """Test malformed events are reported, not raised."""
    dispatch = mocker.patch.object(webhook_tasks, "_dispatch_async", new_callable=mocker.AsyncMock)

    result = dispatch_webhook_event_task(project.model_dump(mode="json"), {"family": "wiki"})

    assert result["status"] == "invalid"
    dispatch.assert_not_called()


@pytest.mark.asyncio
async def test_dispatch_async_reports_failure(
    project: Project,
    issue_event: IssueEvent,
    mocker: MockerFixture,
) -> None:
    """Test storage errors end up in the task result."""
    session = mocker.AsyncMock()
    session.execute.side_effect = RuntimeError("no such table: webhooks")
    session_factory = mocker.patch.object(webhook_tasks, "AsyncSessionLocal")
    session_factory.return_value.__aenter__.return_value = session

    result = await webhook_tasks._dispatch_async(project, issue_event)

    assert result["status"] == "failed"
    assert "no such table" in result["error"]


def test_enqueue_event_serializes(
    project: Project,
    issue_event: IssueEvent,
    mocker: MockerFixture,
) -> None:
    """Test events are queued as JSON-compatible arguments."""
    task = mocker.patch.object(webhook_tasks, "dispatch_webhook_event_task")

    enqueue_event(project, issue_event, countdown=1)

    kwargs = task.apply_async.call_args.kwargs
    project_json, event_json = kwargs["args"]
    assert project_json["id"] == project.id
    assert event_json["family"] == "issue"
    assert event_json["kind"] == "NEW_ISSUE"
    assert kwargs["countdown"] == 1
