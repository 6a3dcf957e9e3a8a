"""Shared pytest fixtures and fakes for the Pharmaventory client tests."""

import json
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import pytest
import requests

from pharmaventory.auth.manager import SessionManager
from pharmaventory.utils.api_client import PharmaventoryAPIClient
from pharmaventory.utils.notices import NoticeBoard

BASE_URL = "https://pharma.test"

ADA = {"email": "ada@example.com", "full_name": "Ada Lovelace", "role": "pharmacist"}

PARACETAMOL = {
    "id": 1,
    "name": "Paracetamol",
    "generic_name": "Acetaminophen",
    "category": "Analgesic",
    "manufacturer": "Acme",
    "quantity": 120,
    "unit": "tablets",
    "reorder_level": 20,
    "unit_price": 0.5,
    "batch_number": "B-001",
    "expiry_date": "2027-01-15T00:00:00Z",
    "location": "Shelf A",
    "description": "",
}

ANALYTICS = {
    "total_medicines": 1,
    "low_stock_count": 0,
    "expiring_soon_count": 0,
    "expired_count": 0,
    "total_value": 60.0,
    "low_stock_items": [],
    "expiring_soon_items": [],
}


def make_response(status: int = 200, body: Any = None, raw: Optional[str] = None) -> requests.Response:
    """Build a real requests.Response with canned content."""
    response = requests.Response()
    response.status_code = status
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    if raw is not None:
        response._content = raw.encode("utf-8")
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = b""
    return response


@dataclass
class FakeCall:
    method: str
    path: str
    json: Any
    headers: Dict[str, str]
    timeout: Any


@dataclass
class Route:
    status: int = 200
    body: Any = None
    raw: Optional[str] = None
    error: Optional[Exception] = None
    before: Optional[Callable[[], None]] = None


@dataclass
class FakeHTTP:
    """Mimic requests.Session.request with canned routes keyed by (method, path)."""
    base_url: str = BASE_URL
    routes: Dict[tuple, Route] = field(default_factory=dict)
    calls: list = field(default_factory=list)
    _lock: Any = field(default_factory=threading.Lock)

    def add(self, method: str, path: str, status: int = 200, body: Any = None, **kwargs) -> None:
        self.routes[(method, path)] = Route(status=status, body=body, **kwargs)

    def request(self, method, url, json=None, headers=None, timeout=None):
        path = url[len(self.base_url):]
        with self._lock:
            self.calls.append(FakeCall(method, path, json, dict(headers or {}), timeout))

        route = self.routes.get((method, path))
        if route is None:
            return make_response(404, {"detail": "Not Found"})
        if route.before:
            route.before()
        if route.error:
            raise route.error
        return make_response(route.status, route.body, route.raw)

    def calls_to(self, method: str, path: str) -> list:
        return [c for c in self.calls if c.method == method and c.path == path]


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def http() -> FakeHTTP:
    return FakeHTTP()


@pytest.fixture
def backend(http: FakeHTTP) -> FakeHTTP:
    """Fake backend with a healthy session for Ada."""
    http.add("POST", "/api/auth/login", body={"access_token": "t1", "token_type": "bearer", "user": ADA})
    http.add("POST", "/api/auth/register", body={"access_token": "t1", "user": ADA})
    http.add("GET", "/api/auth/me", body=ADA)
    http.add("GET", "/api/medicines", body=[PARACETAMOL])
    http.add("GET", "/api/analytics/dashboard", body=ANALYTICS)
    return http


@pytest.fixture
def api(http: FakeHTTP) -> PharmaventoryAPIClient:
    return PharmaventoryAPIClient(BASE_URL, timeout=5, http=http)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notices(clock: FakeClock) -> NoticeBoard:
    return NoticeBoard(duration=4, clock=clock)


@pytest.fixture
def storage() -> dict:
    return {}


@pytest.fixture
def manager(api, storage, notices) -> SessionManager:
    return SessionManager(api, storage, notices)
