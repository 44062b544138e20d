"""Shared fixtures."""

import json

import pytest


def _mock_aiohttp_session(responses, calls=None, sessions=None):
    """Return a mock that replaces aiohttp.ClientSession.

    responses: list of (status, body) tuples, consumed in order by successive
    get()/post() calls. A str body is served raw; an exception body is raised
    when the request is made. Each request is appended to calls, and each
    session's constructor kwargs to sessions, if given.
    """
    call_idx = 0

    class FakeResponse:
        def __init__(self, status, body):
            self.status = status
            self._body = body

        async def json(self, **kwargs):
            if isinstance(self._body, str):
                return json.loads(self._body)
            return self._body

        async def text(self):
            if isinstance(self._body, str):
                return self._body
            return json.dumps(self._body)

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    class FakeSession:
        def __init__(self, *args, **kwargs):
            if sessions is not None:
                sessions.append(kwargs)

        def _request(self, method, url, **kwargs):
            nonlocal call_idx
            if calls is not None:
                calls.append({"method": method, "url": url, **kwargs})
            status, body = responses[call_idx]
            call_idx += 1
            if isinstance(body, BaseException):
                raise body
            return FakeResponse(status, body)

        def get(self, url, **kwargs):
            return self._request("GET", url, **kwargs)

        def post(self, url, **kwargs):
            return self._request("POST", url, **kwargs)

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    return FakeSession


@pytest.fixture
def mock_session():
    """Factory fixture: mock_session(responses, calls=None, sessions=None)."""
    return _mock_aiohttp_session
