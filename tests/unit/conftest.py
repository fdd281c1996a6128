import httpx
import pytest

from percolator import transport as percolator_transport
from percolator.structures import Result


class SyncClientStub:
    def __init__(self, outcomes, calls, timeout=None):
        self.outcomes = outcomes
        self.calls = calls
        self.timeout = timeout

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def request(self, method, url, content=None, headers=None):
        self.calls.append({"method": method, "url": url, "content": content, "headers": headers, "timeout": self.timeout})
        outcome = self.outcomes[min(len(self.calls), len(self.outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class AsyncClientStub:
    def __init__(self, outcomes, calls):
        self.outcomes = outcomes
        self.calls = calls

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def request(self, method, url, content=None, headers=None):
        self.calls.append({"method": method, "url": url, "content": content, "headers": headers})
        outcome = self.outcomes[min(len(self.calls), len(self.outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RequestsSessionStub:
    def __init__(self, response, calls):
        self.response = response
        self.calls = calls

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def request(self, method, url, data=None, headers=None, timeout=None):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "content": data,
                "headers": headers,
                "timeout": timeout,
            }
        )
        return self.response


@pytest.fixture
def response_factory():
    def _factory(status_code, json=None, text="", headers=None, url="http://test.local/"):
        request = httpx.Request("GET", url)
        if json is not None:
            return httpx.Response(status_code, json=json, headers=headers, request=request)
        return httpx.Response(status_code, text=text, headers=headers, request=request)

    return _factory


@pytest.fixture
def mock_sync_client(monkeypatch):
    """Replace ``httpx.Client``; outcomes are served in order, the last one repeats."""

    def _install(*outcomes):
        calls = []

        def client_factory(*_args, **kwargs):
            return SyncClientStub(list(outcomes), calls, kwargs.get("timeout"))

        monkeypatch.setattr(percolator_transport.httpx, "Client", client_factory)
        return calls

    return _install


@pytest.fixture
def mock_async_client(monkeypatch):
    def _install(*outcomes):
        calls = []

        def async_client_factory(*_args, **_kwargs):
            return AsyncClientStub(list(outcomes), calls)

        monkeypatch.setattr(percolator_transport.httpx, "AsyncClient", async_client_factory)
        return calls

    return _install


@pytest.fixture
def mock_requests_session(monkeypatch):
    def _install(response):
        if percolator_transport.requests is None:
            pytest.skip("requests is not installed")
        calls = []

        def session_factory(*_args, **_kwargs):
            return RequestsSessionStub(response, calls)

        monkeypatch.setattr(percolator_transport.requests, "Session", session_factory)
        return calls

    return _install


@pytest.fixture
def recording_make_request():
    """Dispatcher double that records its arguments and succeeds with a fixed result."""

    calls = []

    def make_request(request, request_options, callback):
        calls.append({"request": request, "options": request_options})
        return callback(None, Result(body={"matches": []}, status_code=200))

    make_request.calls = calls
    return make_request
