from __future__ import annotations

from io import BytesIO
from typing import Callable, Dict, List, Tuple

import pytest
import requests
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from docbundle.config import get_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Fresh settings per test; never open a real browser."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "downloads"))
    monkeypatch.setenv("OPEN_FALLBACK_IN_BROWSER", "false")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _pdf_with_markers(markers: List[str]) -> bytes:
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    for marker in markers:
        c.setFont("Helvetica", 24)
        c.drawString(72, 720, marker)
        c.showPage()
    c.save()
    return buffer.getvalue()


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """make_pdf("f1", 3) -> PDF with pages marked f1p1, f1p2, f1p3."""

    def _make(prefix: str, pages: int) -> bytes:
        return _pdf_with_markers([f"{prefix}p{i}" for i in range(1, pages + 1)])

    return _make


class FakeResponse:
    def __init__(self, status_code: int = 200, content: bytes = b"", reason: str = "OK", json_data=None):
        self.status_code = status_code
        self.content = content
        self.reason = reason
        self._json = json_data
        self.closed = False

    @property
    def ok(self) -> bool:
        # same rule as requests.Response.ok
        return self.status_code < 400

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json

    def iter_content(self, chunk_size: int = 8192):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i : i + chunk_size]

    def close(self) -> None:
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class FakeSession:
    """Stands in for requests.Session; routes map URL -> FakeResponse or exception."""

    def __init__(self, routes: Dict[str, object] | None = None):
        self.routes = dict(routes or {})
        self.headers: Dict[str, str] = {}
        self.calls: List[Tuple[str, dict]] = []

    def get(self, url: str, **kwargs):
        self.calls.append((url, kwargs))
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(404, reason="Not Found")
        if isinstance(route, Exception):
            raise route
        return route


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def response() -> Callable[..., FakeResponse]:
    return FakeResponse


class RecordingSink:
    def __init__(self, fail_on_trigger: bool = False):
        self.triggered: List[Tuple[object, str]] = []
        self.opened: List[str] = []
        self.fail_on_trigger = fail_on_trigger

    def trigger(self, payload, filename: str) -> None:
        if self.fail_on_trigger:
            raise OSError("disk full")
        self.triggered.append((payload, filename))

    def open_url(self, url: str) -> None:
        self.opened.append(url)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def connection_error() -> Exception:
    return requests.ConnectionError("connection refused")
