from datetime import timedelta

import pytest

from goal_tracker.config import (
    DEFAULT_API_URL,
    ConfigError,
    MonitorSettings,
    TogglConfig,
    parse_workspace_ids,
)


def test_from_env_requires_token():
    with pytest.raises(ConfigError, match="TOGGL_API_TOKEN"):
        TogglConfig.from_env({})


def test_from_env_defaults():
    config = TogglConfig.from_env({"TOGGL_API_TOKEN": "abc"})
    assert config.api_token == "abc"
    assert config.workspace_ids == frozenset()
    assert config.api_url == DEFAULT_API_URL


def test_from_env_reads_workspaces_and_url():
    config = TogglConfig.from_env(
        {
            "TOGGL_API_TOKEN": "abc",
            "TOGGL_WORKSPACE_IDS": "1150757, 5431223,",
            "TOGGL_API_URL": "https://example.test/v9",
        }
    )
    assert config.workspace_ids == frozenset({1150757, 5431223})
    assert config.api_url == "https://example.test/v9"


def test_invalid_workspace_id():
    with pytest.raises(ConfigError, match="workspace"):
        parse_workspace_ids(["12", "twelve"])


def test_with_workspaces_replaces_filter():
    config = TogglConfig(api_token="abc", workspace_ids=frozenset({1}))
    assert config.with_workspaces([2, 3]).workspace_ids == frozenset({2, 3})
    assert config.workspace_ids == frozenset({1})


def test_monitor_settings_from_intervals():
    settings = MonitorSettings.from_intervals(poll_seconds=45, notify=False)
    assert settings.poll_interval == timedelta(seconds=45)
    assert settings.notify is False
    assert settings.console_bar_length == 60
    assert settings.title_bar_length == 10
    assert MonitorSettings().poll_interval == timedelta(seconds=30)
