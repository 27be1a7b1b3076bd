"""Fixtures wiring the booking client to the Flask mock backend in-process."""
from urllib.parse import urlsplit

import pytest

import mock_api
from medibook.context import AppContext
from medibook.http_client import BackendClient
from medibook.notifications import Navigator, Notifier


class FlaskResponse:
    """The slice of requests.Response the client reads."""

    def __init__(self, response):
        self.status_code = response.status_code
        self.headers = response.headers
        self._body = response.get_json(silent=True)

    def json(self):
        if self._body is None:
            raise ValueError("response is not JSON")
        return self._body


class FlaskTestSession:
    """Routes BackendClient requests to the Flask test client."""

    def __init__(self, app):
        self.test_client = app.test_client()
        self.requests = []

    def request(self, method, url, headers=None, json=None, timeout=None):
        path = urlsplit(url).path
        self.requests.append((method, path))
        response = self.test_client.open(path, method=method, headers=headers or {}, json=json)
        return FlaskResponse(response)


@pytest.fixture(autouse=True)
def fresh_backend():
    mock_api.reset_state()
    yield
    mock_api.reset_state()


@pytest.fixture
def flask_session():
    return FlaskTestSession(mock_api.app)


@pytest.fixture
def backend_client(flask_session):
    return BackendClient(base_url="http://mock.test", session=flask_session)


@pytest.fixture
def make_context(backend_client):
    """Context factory for a given user token, doctor cache loaded."""
    def _make(token="test-token"):
        context = AppContext(
            backend_client, token=token, notifier=Notifier(), navigator=Navigator()
        )
        assert context.refresh_doctors() is True
        return context
    return _make
