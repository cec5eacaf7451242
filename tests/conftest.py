from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Any
from urllib.parse import urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.cookies import cookiejar_from_dict
from requests.structures import CaseInsensitiveDict

from shared import http_client
from shared.common import set_verbose_enabled
from incident.utils import session as session_module


@dataclass
class RecordedRequest:
    method: str
    url: str
    path: str
    headers: CaseInsensitiveDict
    body: bytes | None
    verify: Any
    timeout: Any

    def json(self) -> Any:
        return json.loads(self.body or b"null")


@dataclass
class Route:
    status: int = 200
    reason: str = "OK"
    cookies: dict[str, str] | None = None
    error: Exception | None = None


class FakeAdapter(BaseAdapter):
    """Transport adapter that records requests and replays scripted responses."""

    def __init__(self) -> None:
        super().__init__()
        self.routes: dict[tuple[str, str], Route] = {}
        self.calls: list[RecordedRequest] = []

    def add(self, method: str, path: str, **kwargs: Any) -> None:
        self.routes[(method, path)] = Route(**kwargs)

    def calls_to(self, path: str) -> list[RecordedRequest]:
        return [c for c in self.calls if c.path == path]

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        path = urlsplit(request.url).path or "/"
        body = request.body.encode("utf-8") if isinstance(request.body, str) else request.body
        self.calls.append(
            RecordedRequest(
                method=request.method,
                url=request.url,
                path=path,
                headers=CaseInsensitiveDict(request.headers),
                body=body,
                verify=verify,
                timeout=timeout,
            )
        )

        route = self.routes.get((request.method, path))
        if route is None:
            raise requests.exceptions.ConnectionError(f"no route for {request.method} {request.url}")
        if route.error is not None:
            raise route.error

        resp = requests.Response()
        resp.status_code = route.status
        resp.reason = route.reason
        resp.url = request.url
        resp.request = request
        resp.encoding = "utf-8"
        resp.headers = CaseInsensitiveDict({"Content-Type": "application/json"})
        resp._content = b"{}"
        resp.cookies = cookiejar_from_dict(route.cookies or {})
        return resp

    def close(self) -> None:
        pass


ENV_OVERRIDES = (
    "REQUESTS_CA_BUNDLE",
    "CURL_CA_BUNDLE",
    "HTTP_PROXY",
    "HTTPS_PROXY",
    "ALL_PROXY",
    "http_proxy",
    "https_proxy",
    "all_proxy",
)


@pytest.fixture(autouse=True)
def _clean_requests_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _quiet_verbose():
    set_verbose_enabled(False)
    yield
    set_verbose_enabled(False)


@pytest.fixture
def adapter() -> FakeAdapter:
    fake = FakeAdapter()
    fake.add("GET", "/", cookies={"XSRF-TOKEN": "tok1"})
    fake.add("POST", "/login")
    fake.add("POST", "/incident")
    return fake


@pytest.fixture
def patched_client(monkeypatch: pytest.MonkeyPatch, adapter: FakeAdapter) -> FakeAdapter:
    """Route every client built during login through ``adapter``."""
    real_new_client = http_client.new_client

    def _new_client(config):
        return real_new_client(replace(config, adapter=adapter))

    monkeypatch.setattr(session_module, "new_client", _new_client)
    return adapter


@pytest.fixture
def configuration() -> dict[str, str]:
    return {
        "base_url": "https://h",
        "username": "u",
        "password": "p",
        "name": "Alert X",
        "severity": "High",
        "details": "d",
        "investigate": "1",
        "labels": "src:ids",
        "occured": "1700000000",
    }
