from typing import Callable, Tuple

import pytest
from starlette.requests import Request


@pytest.fixture(scope="module")
def anyio_backend() -> Tuple[str, dict]:
    return ("asyncio", {"debug": True})


@pytest.fixture
def make_request() -> Callable[..., Request]:
    def _make_request(cookie: str = "") -> Request:
        headers = [(b"cookie", cookie.encode("latin-1"))] if cookie else []
        return Request(scope={"type": "http", "headers": headers})

    return _make_request
