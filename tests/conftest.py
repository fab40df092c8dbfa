# tests/conftest.py
import base64
import json
import time
from datetime import datetime, timezone
from typing import Callable, List

import httpx
import pytest

from chefood.client.http import ApiClient
from chefood.client.session import TokenSession
from chefood.client.storage import MemoryStorage
from chefood.models.recipe_models import SavedRecipe


def make_jwt(exp: float | None = None) -> str:
    """Unsigned JWT with the given exp claim; enough for the client-side expiry check."""
    def b64(data: dict) -> str:
        return base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()

    payload = {"sub": "42"}
    if exp is not None:
        payload["exp"] = exp
    return f"{b64({'alg': 'HS256', 'typ': 'JWT'})}.{b64(payload)}.signature"


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def session(storage: MemoryStorage) -> TokenSession:
    return TokenSession(storage)


@pytest.fixture
def authed_session(session: TokenSession) -> TokenSession:
    session.set_tokens(make_jwt(exp=time.time() + 3600), "refresh-token")
    return session


@pytest.fixture
def make_client(authed_session: TokenSession) -> Callable[..., ApiClient]:
    """
    Build an ApiClient whose requests are answered by `handler` instead of the
    network. Every request seen is appended to `client.sent`.
    """
    def _make(handler, session: TokenSession | None = None) -> ApiClient:
        sent: List[httpx.Request] = []

        def recording(request: httpx.Request):
            sent.append(request)
            return handler(request)

        client = ApiClient(
            session or authed_session,
            base_url="http://backend.test",
            transport=httpx.MockTransport(recording),
        )
        client.sent = sent
        return client

    return _make


@pytest.fixture
def saved_recipes() -> List[SavedRecipe]:
    """Two saved recipes, newest first, as the store keeps them."""
    return [
        SavedRecipe(
            id="2",
            title="Shakshuka",
            cuisine_type="Middle Eastern",
            prep_time=10,
            cook_time=25,
            saved_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
        ),
        SavedRecipe(
            id="1",
            title="Pancakes",
            cuisine_type="American",
            saved_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ),
    ]
