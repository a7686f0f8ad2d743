"""
Pytest configuration and fixtures for the rokka client tests.
Provides a scripted transport adapter so that no request leaves the process.
"""

import json
from collections.abc import Callable
from typing import Any

import pytest
import requests
from requests.adapters import BaseAdapter

from rokka_client.clients.image import ImageClient
from rokka_client.clients.user import UserClient
from rokka_client.core.infrastructure.http.session import ApiSession

BASE_URL = "https://api.rokka.io"
ORGANIZATION = "testorg"
API_KEY = "apiKey"
API_SECRET = "apiSecret"


class ScriptedAdapter(BaseAdapter):
    """Adapter answering requests with queued responses or exceptions."""

    def __init__(self) -> None:
        super().__init__()
        self.outcomes: list[requests.Response | Exception] = []
        self.requests: list[requests.PreparedRequest] = []
        self.send_kwargs: list[dict[str, Any]] = []

    def queue(self, *outcomes: requests.Response | Exception) -> None:
        self.outcomes.extend(outcomes)

    @property
    def last_request(self) -> requests.PreparedRequest:
        return self.requests[-1]

    def send(self, request, **kwargs):  # type: ignore[override]
        self.requests.append(request)
        self.send_kwargs.append(kwargs)

        if not self.outcomes:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")

        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome

        outcome.request = request
        outcome.url = request.url
        return outcome

    def close(self) -> None:
        pass


def build_response(
    status_code: int = 200,
    *,
    json_body: Any = None,
    content: bytes = b"",
    headers: dict[str, str] | None = None,
) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(json_body).encode("utf-8") if json_body is not None else content
    response._content_consumed = True
    response.encoding = "utf-8"
    response.headers.update(headers or {})
    return response


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    return build_response


@pytest.fixture
def adapter() -> ScriptedAdapter:
    return ScriptedAdapter()


@pytest.fixture
def session(adapter: ScriptedAdapter) -> ApiSession:
    api_session = ApiSession(BASE_URL)
    api_session.mount("https://", adapter)
    api_session.mount("http://", adapter)
    return api_session


@pytest.fixture
def image_client(session: ApiSession) -> ImageClient:
    return ImageClient(session, ORGANIZATION, API_KEY, API_SECRET)


@pytest.fixture
def user_client(session: ApiSession) -> UserClient:
    return UserClient(session)


@pytest.fixture
def source_image_payload() -> Callable[..., dict[str, Any]]:
    def _payload(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "organization": ORGANIZATION,
            "binary_hash": "0dcabb34e1d20f5d2e3d7bd0a2d2f6a1c1a3e2b1",
            "hash": "c421f4e8cefe0fd3aab22832f51e85bacda0a47a",
            "name": "cat.jpg",
            "format": "jpg",
            "size": 28213,
            "width": 640,
            "height": 480,
            "user_metadata": {},
            "dynamic_metadata": {},
            "created": "2024-01-15T10:42:31+00:00",
            "link": "/sourceimages/testorg/c421f4e8cefe0fd3aab22832f51e85bacda0a47a",
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def stack_payload() -> Callable[..., dict[str, Any]]:
    def _payload(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "organization": ORGANIZATION,
            "name": "thumbnail",
            "created": "2024-01-15T10:42:31+00:00",
            "stack_operations": [
                {"name": "resize", "options": {"width": 200, "height": 200}},
                {"name": "rotate", "options": {"angle": 90}},
            ],
        }
        payload.update(overrides)
        return payload

    return _payload
