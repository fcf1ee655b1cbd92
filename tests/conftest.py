import httpx
import pytest
from httpx import ASGITransport


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("HOTEL_API_BASE_URL", "http://hotel.test/api")
    monkeypatch.setenv("HOTEL_API_TOKEN", "service-token")
    monkeypatch.setenv("HOTEL_API_USER_ID", "1")
    monkeypatch.setenv("TAX_RATE", "0")


@pytest.fixture
async def client(mock_env):
    from booking_engine.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c
