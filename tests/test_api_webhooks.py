"""Tests for webhook registration and event ingest routes."""

import json
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from src.api.app import app
from src.api.dependencies import get_subscription_store, get_webhook_client
from src.webhooks.models import IssueEvent, Project, PushEvent
from src.webhooks.store import InMemorySubscriptionStore


class FakeClient:
    """Delivery client that records instead of sending."""

    def __init__(self) -> None:
        self.deliveries: list[tuple[str, bytes]] = []

    async def deliver(self, url: str, body: bytes) -> Optional[int]:
        self.deliveries.append((url, body))
        return 200

    async def close(self) -> None:
        pass


@pytest.fixture
def store() -> InMemorySubscriptionStore:
    return InMemorySubscriptionStore(strict=True)


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def client(store: InMemorySubscriptionStore, fake_client: FakeClient):
    app.dependency_overrides[get_subscription_store] = lambda: store
    app.dependency_overrides[get_webhook_client] = lambda: fake_client
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client: TestClient) -> None:
    """Test health endpoint."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_and_list_webhooks(client: TestClient) -> None:
    """Test registering webhooks on a project."""
    response = client.post(
        "/api/projects/7/webhooks",
        json={"payload_url": "http://hooks.example.com/in", "secret": "s", "send_all_cases": False},
    )

    assert response.status_code == 201
    created = response.json()
    assert created["project_id"] == 7
    assert created["scope"] == "push_only"
    assert "secret" not in created

    listed = client.get("/api/projects/7/webhooks").json()
    assert [w["id"] for w in listed] == [created["id"]]
    assert client.get("/api/projects/8/webhooks").json() == []


def test_create_webhook_without_url(client: TestClient) -> None:
    """Test an empty payload URL is rejected."""
    response = client.post("/api/projects/7/webhooks", json={"payload_url": ""})

    assert response.status_code == 400
    assert client.get("/api/projects/7/webhooks").json() == []


def test_create_webhook_lenient_mode_still_reports(
    client: TestClient,
    store: InMemorySubscriptionStore,
) -> None:
    """Test lenient registration drops the webhook and says so."""
    store.strict = False

    response = client.post("/api/projects/7/webhooks", json={"payload_url": ""})

    assert response.status_code == 400


def test_create_webhook_url_too_long(client: TestClient) -> None:
    """Test an over-long payload URL is a bad request."""
    url = "http://hooks.example.com/" + "a" * 2000

    response = client.post("/api/projects/7/webhooks", json={"payload_url": url})

    assert response.status_code == 400
    assert response.json()["detail"] == "Payload URL is too long"
    assert client.get("/api/projects/7/webhooks").json() == []


def test_create_webhook_secret_too_long(client: TestClient) -> None:
    """Test an over-long secret is a bad request."""
    response = client.post(
        "/api/projects/7/webhooks",
        json={"payload_url": "http://hooks.example.com/in", "secret": "s" * 300},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Secret is too long"


def test_delete_webhook(client: TestClient) -> None:
    """Test deleting a webhook."""
    created = client.post(
        "/api/projects/7/webhooks", json={"payload_url": "http://hooks.example.com/in"}
    ).json()

    response = client.delete(f"/api/projects/7/webhooks/{created['id']}")

    assert response.status_code == 204
    assert client.get("/api/projects/7/webhooks").json() == []


def test_delete_missing_webhook(client: TestClient) -> None:
    """Test deleting an unknown webhook."""
    response = client.delete("/api/projects/7/webhooks/999")

    assert response.status_code == 404


def test_push_event_delivered(
    client: TestClient,
    fake_client: FakeClient,
    project: Project,
    push_event: PushEvent,
) -> None:
    """Test an accepted push is delivered to every project webhook."""
    client.post("/api/projects/7/webhooks", json={"payload_url": "http://a.example.com/hook"})
    client.post(
        "/api/projects/7/webhooks",
        json={"payload_url": "http://b.example.com/hook", "send_all_cases": False},
    )

    response = client.post(
        "/api/events",
        json={
            "project": project.model_dump(mode="json"),
            "event": push_event.model_dump(mode="json"),
        },
    )

    assert response.status_code == 202
    assert response.json() == {"recipients": 2}
    assert sorted(url for url, _ in fake_client.deliveries) == [
        "http://a.example.com/hook",
        "http://b.example.com/hook",
    ]
    document = json.loads(fake_client.deliveries[0][1])
    assert document["ref"] == ["refs/heads/master"]


def test_issue_event_delivered(
    client: TestClient,
    fake_client: FakeClient,
    project: Project,
    issue_event: IssueEvent,
) -> None:
    """Test an issue event renders a chat message."""
    client.post("/api/projects/7/webhooks", json={"payload_url": "http://a.example.com/hook"})

    response = client.post(
        "/api/events",
        json={
            "project": project.model_dump(mode="json"),
            "event": issue_event.model_dump(mode="json"),
        },
    )

    assert response.status_code == 202
    document = json.loads(fake_client.deliveries[0][1])
    assert document["text"].endswith(f"<{project.site_url}/issue/42|#42: Bug A>")


def test_unknown_event_family_rejected(client: TestClient, project: Project) -> None:
    """Test events outside the three families are refused."""
    response = client.post(
        "/api/events",
        json={"project": project.model_dump(mode="json"), "event": {"family": "wiki"}},
    )

    assert response.status_code == 422


def test_push_without_commits_rejected(
    client: TestClient,
    fake_client: FakeClient,
    project: Project,
    push_event: PushEvent,
) -> None:
    """Test a push with no commits is refused instead of accepted and dropped."""
    client.post("/api/projects/7/webhooks", json={"payload_url": "http://a.example.com/hook"})
    empty_push = push_event.model_copy(update={"commits": []})

    response = client.post(
        "/api/events",
        json={
            "project": project.model_dump(mode="json"),
            "event": empty_push.model_dump(mode="json"),
        },
    )

    assert response.status_code == 400
    assert fake_client.deliveries == []
