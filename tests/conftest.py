# Test configuration
import json
import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio

REPO_ROOT = Path(__file__).parent.parent

# Add repo root to path so tests can import modules
sys.path.insert(0, str(REPO_ROOT))

BETA_URL = "https://api.ggleap.com/beta"
AUTH_URL = f"{BETA_URL}/authorization/public-api/auth"


class FakeClock:
    """Manually advanced wall clock, in seconds."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGGLeap:
    """In-memory GGLeap backend served through httpx.MockTransport.

    The auth endpoint hands out JWTs "T1", "T2", ... in order. Other paths
    answer from `routes` (path -> response factory), defaulting to 404.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.auth_status = 200
        self.issued = 0

    @property
    def auth_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/authorization/public-api/auth")]

    @property
    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if not r.url.path.endswith("/authorization/public-api/auth")]

    def route(self, path: str, response: Any = None, status_code: int = 200) -> None:
        self.routes[path] = lambda request: httpx.Response(status_code, json=response)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/authorization/public-api/auth"):
            if self.auth_status != 200:
                return httpx.Response(self.auth_status)
            self.issued += 1
            return httpx.Response(200, json={"Jwt": f"T{self.issued}"})

        for prefix in ("/beta", "/production"):
            if path.startswith(prefix):
                path = path[len(prefix):]
                break
        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404, text="Not Found")
        return route(request)


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend() -> FakeGGLeap:
    return FakeGGLeap()


@pytest_asyncio.fixture
async def http_client(backend):
    async with httpx.AsyncClient(transport=httpx.MockTransport(backend.handler)) as client:
        yield client
