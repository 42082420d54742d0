"""
Shared fixtures: an app wired to a mock LLM gateway and a fake Supabase client.
"""
import json
import time
from typing import Any, Callable, Dict, Generator, List, Optional

import httpx
import pytest
from authlib.jose import jwt
from fastapi.testclient import TestClient

from main import create_app
from wellness.api.endpoints.chat import get_chat_relay_controller
from wellness.config.database import get_supabase
from wellness.config.settings import Settings, get_settings
from wellness.controllers.chat_controller import ChatRelayController

TEST_JWT_SECRET = "test-jwt-secret-for-wellness-tests"
TEST_GATEWAY_URL = "https://gateway.test/v1/chat/completions"
TEST_API_KEY = "test-gateway-key"


class MockGateway:
    """Records forwarded requests and answers with a configurable response."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, content=b"data: [DONE]\n\n")
        )

    def respond_with(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last_payload(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


class FakeRpcResult:
    def __init__(self, data):
        self.data = data


class FakeRpcCall:
    def __init__(self, data):
        self._data = data

    def execute(self) -> FakeRpcResult:
        return FakeRpcResult(self._data)


class FakeSupabase:
    """Stands in for the Supabase client; only ``rpc`` is used."""

    def __init__(self, admin_ids=()):
        self.admin_ids = set(admin_ids)
        self.calls: List[tuple] = []

    def rpc(self, name: str, params: dict) -> FakeRpcCall:
        self.calls.append((name, params))
        is_admin = name == "has_role" and params["_role"] == "admin" and params["_user_id"] in self.admin_ids
        return FakeRpcCall(is_admin)


def make_settings(api_key: Optional[str] = TEST_API_KEY) -> Settings:
    return Settings(
        _env_file=None,
        ai_gateway_api_key=api_key or "",
        ai_gateway_url=TEST_GATEWAY_URL,
        supabase_jwt_secret=TEST_JWT_SECRET,
        enable_request_logging=True,
    )


def make_token(
    sub: str = "user-1",
    expires_in: int = 3600,
    secret: str = TEST_JWT_SECRET,
    **extra_claims: Any,
) -> str:
    claims = {"sub": sub, "exp": int(time.time()) + expires_in, "role": "authenticated"}
    claims.update(extra_claims)
    return jwt.encode({"alg": "HS256"}, claims, secret).decode("utf-8")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """decode_jwt_local reads settings directly, so point the environment at the test secret."""
    monkeypatch.setenv("SUPABASE_JWT_SECRET", TEST_JWT_SECRET)
    for name in ("AI_GATEWAY_API_KEY", "LOVABLE_API_KEY", "SYSTEM_ENVIRONMENT", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def gateway() -> MockGateway:
    return MockGateway()


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase(admin_ids={"admin-1"})


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def client(
    settings: Settings, gateway: MockGateway, supabase: FakeSupabase
) -> Generator[TestClient, None, None]:
    app = create_app()
    transport = httpx.MockTransport(gateway.handler)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_chat_relay_controller] = lambda: ChatRelayController(
        settings, transport=transport
    )
    app.dependency_overrides[get_supabase] = lambda: supabase
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    return make_settings


@pytest.fixture
def token_factory() -> Callable[..., str]:
    return make_token
