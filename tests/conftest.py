"""Fakes shared by the api engine tests. Nothing here touches the network."""

import json

import pytest

from api_client import APIClient


class FakeResponse:
    def __init__(self, status_code, text):
        self.status_code = status_code
        self.text = text

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Records every call and answers with a canned response or raises."""

    def __init__(self, status_code=200, text="{}", exc=None):
        self.status_code = status_code
        self.text = text
        self.exc = exc
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.exc is not None:
            raise self.exc
        return FakeResponse(self.status_code, self.text)

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def make_client():
    def _make(status_code=200, text="{}", exc=None, **kwargs):
        session = FakeSession(status_code, text, exc)
        kwargs.setdefault("reachability_host", None)
        return APIClient(session=session, **kwargs), session
    return _make
