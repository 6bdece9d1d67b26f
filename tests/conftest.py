from __future__ import annotations

from typing import Any, NamedTuple

import pytest
from httpx import AsyncClient as HttpxAsyncClient
from httpx import Request, Response

from solrdrv import AsyncClient

BASE_URL = "http://localhost:8983/solr"


class Call(NamedTuple):
    method: str
    url: str
    content: Any
    headers: dict[str, str] | None


def solr_response(
    body: Any = None,
    status_code: int = 200,
    *,
    text: str | None = None,
    q_time: int = 1,
) -> Response:
    request = Request("GET", url=BASE_URL)
    if text is not None:
        return Response(status_code, text=text, request=request)

    if body is None:
        body = {"responseHeader": {"status": 0, "QTime": q_time}}

    return Response(status_code, json=body, request=request)


def error_response(msg: str, code: int = 400, **extra: Any) -> Response:
    body = {
        "responseHeader": {"status": code, "QTime": 0},
        "error": {"msg": msg, "code": code, **extra},
    }
    return solr_response(body, code)


class FakeSolr:
    """Stands in for the Solr server by replacing httpx's get and post.

    Queued responses are returned in order, an exception in the queue is raised instead. When the
    queue is empty a plain success envelope is returned.
    """

    def __init__(self) -> None:
        self.calls: list[Call] = []
        self._queue: list[Response | Exception] = []

    def respond(self, body: Any = None, status_code: int = 200) -> None:
        self._queue.append(solr_response(body, status_code))

    def respond_error(self, msg: str, code: int = 400, **extra: Any) -> None:
        self._queue.append(error_response(msg, code, **extra))

    def respond_text(self, text: str, status_code: int = 200) -> None:
        self._queue.append(solr_response(status_code=status_code, text=text))

    def raise_error(self, err: Exception) -> None:
        self._queue.append(err)

    async def handle(self, method: str, url: str, kwargs: dict[str, Any]) -> Response:
        self.calls.append(Call(method, url, kwargs.get("content"), kwargs.get("headers")))
        item = self._queue.pop(0) if self._queue else solr_response()
        if isinstance(item, Exception):
            raise item

        return item


@pytest.fixture
def fake_solr(monkeypatch):
    fake = FakeSolr()

    async def mock_get(self, url, **kwargs):
        return await fake.handle("GET", url, kwargs)

    async def mock_post(self, url, **kwargs):
        return await fake.handle("POST", url, kwargs)

    monkeypatch.setattr(HttpxAsyncClient, "get", mock_get)
    monkeypatch.setattr(HttpxAsyncClient, "post", mock_post)

    return fake


@pytest.fixture
async def client():
    async with AsyncClient("http", "localhost", 8983) as client:
        yield client


@pytest.fixture
def users(client):
    return client.collection("users")


@pytest.fixture
def user_docs():
    return [
        {"id": "1", "name": "Some", "age": 21},
        {"id": "2", "name": "Dude", "age": 21},
    ]


@pytest.fixture
def select_response(user_docs):
    return {
        "responseHeader": {"status": 0, "QTime": 3, "params": {"q": "age:21"}},
        "response": {"numFound": 2, "start": 0, "numFoundExact": True, "docs": user_docs},
    }
