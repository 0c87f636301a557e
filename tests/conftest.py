import json

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from wp_api import ApiClient, ClientConfig

ENDPOINT = "https://blog.example.com/wp-json/wp/v2/"


def make_response(status=200, body=None, headers=None, url=ENDPOINT, raw=None):
    """Build a real requests.Response so raise_for_status()/json() behave as in production."""
    resp = requests.Response()
    resp.status_code = status
    resp.url = url
    resp.reason = "OK" if status < 400 else "Error"
    resp.encoding = "utf-8"
    resp.headers = CaseInsensitiveDict(headers or {})
    if raw is not None:
        resp._content = raw.encode("utf-8")
    elif body is not None:
        resp._content = json.dumps(body).encode("utf-8")
    else:
        resp._content = b""
    return resp


class FakeSession:
    """Records every GET and replays a queued outcome (Response or exception)."""

    def __init__(self, outcome=None):
        self.calls = []
        self.outcome = outcome if outcome is not None else make_response(body=[])

    def get(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return ApiClient(ClientConfig(endpoint=ENDPOINT), session=session)


class StubAdapter(BaseAdapter):
    """Transport adapter for a real requests.Session: keeps each PreparedRequest, answers with a canned Response."""

    def __init__(self, status=200, body=None, headers=None):
        super().__init__()
        self.sent = []
        self.status = status
        self.body = body if body is not None else []
        self.headers = headers

    def send(self, request, **kwargs):
        self.sent.append(request)
        resp = make_response(status=self.status, body=self.body, headers=self.headers, url=request.url)
        resp.request = request
        return resp

    def close(self):
        pass


def real_session(adapter):
    s = requests.Session()
    s.mount("https://blog.example.com/", adapter)
    return s
