import json
from datetime import datetime, timezone

import pytest
import requests

from goal_tracker.config import TogglConfig

NOW = datetime(2024, 5, 1, 15, 30, 0, tzinfo=timezone.utc)


def make_response(status_code, payload=None, *, body=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = body if body is not None else json.dumps(payload).encode()
    response.headers["Content-Type"] = "application/json"
    return response


class StubSession(requests.Session):
    """Session that returns queued responses instead of touching the network."""

    def __init__(self, *results):
        super().__init__()
        self.results = list(results)
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        result = self.results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture
def toggl_config():
    return TogglConfig(api_token="secret-token", workspace_ids=frozenset({1150757}))
