# tests/conftest.py
import json
import pytest
from unittest.mock import MagicMock
from pathlib import Path

import requests

from apifs.config import Settings, get_settings


def build_response(body, status_code=200):
    """Builds a real requests.Response carrying the given JSON body."""
    response = requests.Response()
    response.status_code = status_code
    response.headers["Content-Type"] = "application/json"
    response.encoding = "utf-8"
    response._content = body if isinstance(body, bytes) else json.dumps(body).encode()
    return response


class FakeStorageSession:
    """
    In-memory stand-in for requests.Session that answers like the remote
    storage API, keeping files in a dict.
    """

    def __init__(self, base_url="http://storage.test/api"):
        self.base_url = base_url
        self.files = {}
        self.calls = []
        self.closed = False

    def _endpoint(self, url):
        assert url.startswith(self.base_url + "/")
        return url[len(self.base_url) + 1:]

    def get(self, url, params=None, **kwargs):
        endpoint = self._endpoint(url)
        self.calls.append(("GET", endpoint, params, kwargs))
        path = (params or {}).get("path")

        if endpoint == "has":
            return build_response({"response": path in self.files})
        if endpoint == "read":
            if path not in self.files:
                return build_response({"response": False, "message": "not found"})
            return build_response({"response": self.files[path]})
        if endpoint == "list-contents":
            directory = params["directory"]
            prefix = f"{directory}/" if directory else ""
            entries = []
            for name in sorted(self.files):
                if not name.startswith(prefix):
                    continue
                if not params["recursive"] and "/" in name[len(prefix):]:
                    continue
                entries.append({"type": "file", "path": name})
            return build_response({"response": entries})
        if endpoint == "get-size":
            if path not in self.files:
                return build_response({"response": False, "message": "not found"})
            return build_response({"response": {"size": len(self.files[path])}})
        return build_response({"response": False, "message": "unknown endpoint"}, 404)

    def post(self, url, json=None, data=None, params=None, **kwargs):
        endpoint = self._endpoint(url)
        self.calls.append(("POST", endpoint, json if json is not None else params, kwargs))

        if data is not None:
            raw = data.read() if hasattr(data, "read") else data
            self.files[params["path"]] = raw.decode("utf-8")
            return build_response({"response": True})
        if endpoint in ("write", "update"):
            self.files[json["path"]] = json["contents"]
            return build_response({"response": True})
        if endpoint == "delete":
            if self.files.pop(json["path"], None) is None:
                return build_response({"response": False, "message": "not found"})
            return build_response({"response": True})
        if endpoint in ("rename", "copy"):
            if json["path"] not in self.files:
                return build_response({"response": False, "message": "not found"})
            self.files[json["newpath"]] = self.files[json["path"]]
            if endpoint == "rename":
                del self.files[json["path"]]
            return build_response({"response": True})
        return build_response({"response": False, "message": "unknown endpoint"}, 404)

    def close(self):
        self.closed = True


@pytest.fixture
def make_response():
    """Factory fixture for JSON responses."""
    return build_response


@pytest.fixture
def fake_session():
    return FakeStorageSession()


@pytest.fixture
def mock_settings():
    """
    Provides a mock of the application settings for testing.
    This avoids the need for environment variables during tests.
    """
    settings = MagicMock(spec=Settings)
    settings.API_BASE_URL = "http://storage.test/api"
    settings.API_TIMEOUT_SECONDS = 5.0
    settings.API_VERIFY_SSL = True
    settings.LOG_LEVEL = "INFO"
    settings.LOG_FILE_NAME = "apifs.log"
    settings.BASE_DIR = Path("/tmp")
    settings.LOG_FILE = Path("/tmp/apifs.log")
    return settings


@pytest.fixture(autouse=True)
def patch_settings_class(monkeypatch, mock_settings):
    """
    Replaces the `Settings` constructor so that any call to `get_settings()`
    during a test receives `mock_settings` instead of reading the environment.
    """
    get_settings.cache_clear()
    monkeypatch.setattr("apifs.config.Settings", lambda *args, **kwargs: mock_settings)
    yield
    get_settings.cache_clear()
