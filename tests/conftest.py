from __future__ import annotations

import json
import os
import re
import tempfile
from typing import Any, Callable, Dict, List, Optional, Union

_TMP_DIR = tempfile.mkdtemp(prefix="codesync-tests-")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("FRONTEND_ORIGIN", "http://localhost:3000")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["SMTP_HOST"] = "smtp.test"

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from codesync import models  # noqa: E402,F401
from codesync.core.database import engine  # noqa: E402
from codesync.services.http import contest_cache  # noqa: E402
from codesync.services.mail import MailError  # noqa: E402

Handler = Callable[[httpx.Request], httpx.Response]
_OPERATION_RE = re.compile(r"query\s+(\w+)")


class Upstream:
    """Routes outgoing requests by host + path to canned responses."""

    def __init__(self) -> None:
        self.routes: Dict[str, Handler] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        url: str,
        payload: Any = None,
        *,
        text: Optional[str] = None,
        status: int = 200,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status, text=text)
            return httpx.Response(status, json=payload)

        self.routes[url] = respond

    def add_graphql(self, url: str, operations: Dict[str, Union[dict, int]]) -> None:
        """Answer GraphQL POSTs by operation name; an int value is an HTTP status."""

        def respond(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            match = _OPERATION_RE.search(body["query"])
            result = operations.get(match.group(1) if match else "", 404)
            if isinstance(result, int):
                return httpx.Response(result, json={"errors": ["boom"]})
            return httpx.Response(200, json={"data": result})

        self.routes[url] = respond

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.url.host}{request.url.path}"
        route = self.routes.get(key)
        if route is None:
            return httpx.Response(404, json={"error": f"no route for {key}"})
        return route(request)

    def client(self, **_: Any) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def hits(self, url: str) -> int:
        return sum(1 for r in self.requests if f"{r.url.host}{r.url.path}" == url)


class FakeMailer:
    def __init__(self, fail_for: tuple = ()) -> None:
        self.sent: List[Dict[str, str]] = []
        self.fail_for = set(fail_for)

    def send(self, to: str, subject: str, body: str) -> None:
        if to in self.fail_for:
            raise MailError(f"relay rejected {to}")
        self.sent.append({"to": to, "subject": subject, "html": body})


@pytest.fixture(autouse=True)
def database():
    SQLModel.metadata.create_all(engine)
    yield
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(autouse=True)
def clear_contest_cache():
    contest_cache.clear()
    yield
    contest_cache.clear()


@pytest.fixture
def session():
    with Session(engine) as session:
        yield session


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def api(upstream, mailer, monkeypatch):
    from fastapi.testclient import TestClient

    from codesync.app import app
    from codesync.services import search
    from codesync.services.http import get_http_client
    from codesync.services.mail import get_mailer

    async def client_override():
        async with upstream.client() as client:
            yield client

    app.dependency_overrides[get_http_client] = client_override
    app.dependency_overrides[get_mailer] = lambda: mailer
    monkeypatch.setattr(search, "build_client", upstream.client)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
