"""Tests for CLI commands."""

from pytest_mock import MockerFixture
from typer.testing import CliRunner

from src.cli.commands import app
from src.webhooks.client import WebhookClient

runner = CliRunner()


def test_version() -> None:
    """Test version output."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "Hookshot v0.1.0" in result.stdout


def test_ping_success(mocker: MockerFixture) -> None:
    """Test ping against a healthy endpoint."""
    deliver = mocker.patch.object(WebhookClient, "deliver", new_callable=mocker.AsyncMock, return_value=200)

    result = runner.invoke(app, ["ping", "http://hooks.example.com/in", "--message", "hello"])

    assert result.exit_code == 0
    assert "responded 200" in result.stdout
    url, body = deliver.await_args.args
    assert url == "http://hooks.example.com/in"
    assert b'"text": "hello"' in body


def test_ping_unreachable(mocker: MockerFixture) -> None:
    """Test ping exits non-zero when the request fails."""
    mocker.patch.object(WebhookClient, "deliver", new_callable=mocker.AsyncMock, return_value=None)

    result = runner.invoke(app, ["ping", "http://dead.example.com/in"])

    assert result.exit_code == 1
    assert "Request failed" in result.stdout


def test_ping_error_status(mocker: MockerFixture) -> None:
    """Test ping exits non-zero on a non-2xx response."""
    mocker.patch.object(WebhookClient, "deliver", new_callable=mocker.AsyncMock, return_value=404)

    result = runner.invoke(app, ["ping", "http://hooks.example.com/in"])

    assert result.exit_code == 1
    assert "responded 404" in result.stdout


def test_serve_passes_workers(mocker: MockerFixture) -> None:
    """Test the worker count reaches uvicorn."""
    run = mocker.patch("uvicorn.run")

    result = runner.invoke(app, ["serve", "--workers", "2"])

    assert result.exit_code == 0
    assert run.call_args.kwargs["workers"] == 2
    assert run.call_args.kwargs["reload"] is False


def test_serve_reload_runs_single_process(mocker: MockerFixture) -> None:
    """Test reload mode drops the worker count."""
    run = mocker.patch("uvicorn.run")

    result = runner.invoke(app, ["serve", "--reload"])

    assert result.exit_code == 0
    assert run.call_args.kwargs["workers"] is None
