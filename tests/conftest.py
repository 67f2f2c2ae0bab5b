from __future__ import annotations

import io
import json
import sys
import urllib.error
import urllib.parse
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

# Ensure tests always import the local tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from core.config import SocrataConfig  # noqa: E402
from core.socrata import SocrataClient  # noqa: E402


class _Response:
    def __init__(self, body: bytes):
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeSocrata:
    """Stands in for urllib.request.urlopen and answers by (method, path)."""

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[SimpleNamespace] = []

    def add(self, method: str, path: str, payload: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, payload)

    def calls(self, method: str | None = None) -> list[SimpleNamespace]:
        return [r for r in self.requests if method is None or r.method == method]

    def __call__(self, req, timeout=None):
        parsed = urllib.parse.urlsplit(req.full_url)
        self.requests.append(
            SimpleNamespace(
                method=req.get_method(),
                url=req.full_url,
                path=parsed.path,
                query=dict(urllib.parse.parse_qsl(parsed.query)),
                body=json.loads(req.data) if req.data else None,
                headers=dict(req.header_items()),
                timeout=timeout,
            )
        )

        key = (req.get_method(), parsed.path)
        status, payload = self.routes.get(key, (404, {"message": "not found"}))
        body = json.dumps(payload).encode() if payload is not None else b""
        if status >= 400:
            reason = "Not Found" if status == 404 else "Error"
            raise urllib.error.HTTPError(req.full_url, status, reason, {}, io.BytesIO(body))
        return _Response(body)


@pytest.fixture
def fake_socrata() -> FakeSocrata:
    return FakeSocrata()


@pytest.fixture
def client(fake_socrata: FakeSocrata) -> SocrataClient:
    return SocrataClient(SocrataConfig(), urlopen=fake_socrata)
