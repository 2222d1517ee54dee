import io
import json
import os
import tempfile

os.environ.setdefault("STEAM_LOGS_DIR", tempfile.mkdtemp(prefix="steam-client-logs-"))

import pytest
import requests
from unittest.mock import MagicMock

from tools.rate_limiter import service_limit


def _make_response(body=None, status_code=200, url="https://steamcommunity.com/test") -> requests.Response:
    if isinstance(body, (bytes, bytearray)):
        content = bytes(body)
    elif isinstance(body, str):
        content = body.encode("utf-8")
    else:
        content = json.dumps(body).encode("utf-8")

    response = requests.Response()
    response.status_code = status_code
    response.reason = "OK" if status_code == 200 else "Error"
    response.url = url
    response.encoding = "utf-8"
    response._content = content
    response._content_consumed = True
    response.raw = io.BytesIO(content)
    return response


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def session():
    """Mock authenticated session."""
    session = MagicMock(spec=requests.Session)
    session.cookies = requests.cookies.RequestsCookieJar()
    return session


@pytest.fixture(autouse=True)
def no_rate_limit_sleep(monkeypatch):
    monkeypatch.setattr(service_limit.time, "sleep", lambda seconds: None)
