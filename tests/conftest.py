from collections.abc import Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from stubs import SUPABASE_URL, Upstream


@pytest.fixture
def settings() -> Settings:
    return Settings(
        SUPABASE_URL=SUPABASE_URL,
        SUPABASE_ANON_KEY="anon-key",
        OPENAI_API_KEY="sk-test",
        CONTENT_STRATEGY="inferred",
    )


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def http(upstream: Upstream) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def client(settings: Settings, http: httpx.AsyncClient) -> Generator[TestClient]:
    app = create_app(settings, http=http)
    with TestClient(app) as test_client:
        yield test_client
