import json

import pytest
import requests


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """
    Stands in for requests.Session. `responder(url, params)` returns a
    FakeResponse or raises a requests exception.
    """

    def __init__(self, responder):
        self.responder = responder
        self.headers = {}
        self.calls = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, dict(params) if params else None))
        return self.responder(url, params)

    def close(self):
        self.closed = True


def release(rid, title="", description=None, **extra):
    """Builds a minimal OCDS release dict."""
    tender = {"title": title}
    if description is not None:
        tender["description"] = description
    tender.update(extra.pop("tender", {}))
    record = {"id": rid, "tender": tender}
    record.update(extra)
    return record


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def make_release():
    return release


@pytest.fixture
def timeout_error():
    return requests.exceptions.Timeout("read timed out")
