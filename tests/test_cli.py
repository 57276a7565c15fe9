from datetime import timedelta

import pytest
from typer.testing import CliRunner

from conftest import NOW
from goal_tracker import cli
from goal_tracker.client import AuthError
from goal_tracker.models import TimeEntry
from goal_tracker.monitor import PollState

runner = CliRunner()


class FakeClient:
    instances = []

    def __init__(self, config, timeout=None):
        self.config = config
        self.workspace_ids = config.workspace_ids
        self.timeout = timeout
        self.result = FakeClient.result
        FakeClient.instances.append(self)

    def fetch_today_entries(self, now):
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result


@pytest.fixture(autouse=True)
def fake_client(monkeypatch):
    FakeClient.instances = []
    FakeClient.result = []
    notifications = []
    monkeypatch.setattr(cli, "TogglClient", FakeClient)
    monkeypatch.setattr(cli, "send_notification", lambda title, message: notifications.append(message))
    monkeypatch.setenv("TOGGL_API_TOKEN", "secret")
    monkeypatch.delenv("TOGGL_WORKSPACE_IDS", raising=False)
    return notifications


def invoke(*args):
    return runner.invoke(cli.app, ["--no-log-file", *args])


def test_missing_goal_prints_usage():
    result = invoke()
    assert result.exit_code == 1
    assert "Usage: goal-tracker <daily_goal_time>" in result.output
    assert FakeClient.instances == []


def test_unparsable_goal():
    result = invoke("six")
    assert result.exit_code == 1
    assert "Could not parse goal time" in result.output


def test_missing_token(monkeypatch):
    monkeypatch.delenv("TOGGL_API_TOKEN")
    monkeypatch.setattr("goal_tracker.config.load_dotenv", lambda: False)
    result = invoke("6")
    assert result.exit_code == 1
    assert "TOGGL_API_TOKEN" in result.output
    assert FakeClient.instances == []


def test_goal_reached_exits_successfully(fake_client):
    FakeClient.result = [TimeEntry(workspace_id=1, start=NOW - timedelta(hours=7), duration=6 * 3600)]
    result = invoke("6:00", "--workspace", "1", "--workspace", "2")

    assert result.exit_code == 0
    assert "Goal: 6:00" in result.output
    assert "Goal reached! You have tracked 6h 0m today." in result.output
    assert fake_client == ["You have reached your daily goal of 6h!"]
    assert FakeClient.instances[0].workspace_ids == frozenset({1, 2})


def test_auth_failure_exits_with_error():
    FakeClient.result = AuthError("Toggl API request failed with status 401")
    result = invoke("7:25")
    assert result.exit_code == 1
    assert "Goal: 7:25" in result.output
    assert "Authentication failed" in result.output


@pytest.mark.parametrize("args", [(), ("six",)])
def test_invalid_goal_does_not_set_up_logging(monkeypatch, args):
    calls = []
    monkeypatch.setattr(cli, "setup_logging", lambda verbose, log_file: calls.append(log_file))
    monkeypatch.setattr(cli, "get_log_path", lambda: calls.append("log path"))

    result = runner.invoke(cli.app, list(args))

    assert result.exit_code == 1
    assert calls == []


@pytest.mark.parametrize(("flag", "expected"), [("--title", True), ("--no-title", False)])
def test_title_flag_reaches_printer(monkeypatch, flag, expected):
    seen = []

    class RecordingMonitor:
        def __init__(self, source, goal_minutes, settings, printer, notifier):
            seen.append((settings.update_title, printer.update_title))

        def run_forever(self):
            return PollState.REACHED

    monkeypatch.setattr(cli, "GoalMonitor", RecordingMonitor)
    result = invoke("6", flag)

    assert result.exit_code == 0
    assert seen == [(expected, expected)]
