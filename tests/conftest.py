import json
from typing import Callable, Optional

import pytest

INDEX_URL = "https://api.nuget.org/v3/index.json"
SEARCH_URL = "https://azuresearch-usnc.nuget.org/query"

SERVICE_INDEX = {
    "version": "3.0.0",
    "resources": [
        {"@id": "https://api.nuget.org/v3/registration5-semver1/", "@type": "RegistrationsBaseUrl"},
        {"@id": SEARCH_URL, "@type": ["SearchQueryService", "SearchQueryService/3.0.0-rc"]},
        {"@id": "https://azuresearch-ussc.nuget.org/query", "@type": "SearchQueryService/3.5.0"},
    ],
}


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        return self._payload


class FakeSession:
    """Answers the service index and routes search calls to ``handler``."""

    def __init__(
        self,
        handler: Callable[[dict], FakeResponse],
        index: Optional[FakeResponse] = None,
    ):
        self.handler = handler
        self.index = index or FakeResponse(200, SERVICE_INDEX)
        self.calls: list[tuple[str, Optional[dict]]] = []
        self.headers: dict = {}

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params))
        if url == INDEX_URL:
            return self.index
        return self.handler(params)

    @property
    def search_calls(self) -> list[dict]:
        return [params for url, params in self.calls if url == SEARCH_URL]


def make_entries(count: int, prefix: str = "Cerbi.Pkg") -> list[dict]:
    return [
        {"id": f"{prefix}{i:04d}", "totalDownloads": i, "version": "1.0.0", "versions": []}
        for i in range(count)
    ]


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def entries():
    return make_entries


class HtmlResponse(FakeResponse):
    """A 200 response whose body is not JSON."""

    def json(self):
        raise json.JSONDecodeError("Expecting value", "<html>", 0)
