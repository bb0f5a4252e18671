from __future__ import annotations

import asyncio
import inspect
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import httpx
import pytest

from hotelbridge.services.gateway import AmadeusGateway
from hotelbridge.services.hotel_discovery import HotelDiscovery
from hotelbridge.services.hotel_service import HotelService
from hotelbridge.services.token_manager import TokenManager

BASE_URL = "https://test.api.amadeus.com"
TOKEN_PATH = "/v1/security/oauth2/token"
BY_CITY_PATH = "/v1/reference-data/locations/hotels/by-city"
OFFERS_PATH = "/v3/shopping/hotel-offers"
BOOKINGS_PATH = "/v1/booking/hotel-bookings"


def make_hotel(hotel_id: str, name: str, rating: int | None = 4) -> dict[str, Any]:
    hotel: dict[str, Any] = {
        "hotelId": hotel_id,
        "name": name,
        "address": {"countryCode": "FR", "cityName": "PARIS"},
        "geoCode": {"latitude": 48.85, "longitude": 2.35},
    }
    if rating is not None:
        hotel["rating"] = rating
    return hotel


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeUpstream:
    """Routes requests by (method, path) to canned responders."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], Any]] = {}
        self.calls: list[httpx.Request] = []
        self.token_values = iter(f"token-{i}" for i in range(1, 1000))
        self.expires_in = 1799
        self.token_delay = 0.0
        self.route("POST", TOKEN_PATH, self._token)

    async def _token(self, request: httpx.Request) -> httpx.Response:
        if self.token_delay:
            await asyncio.sleep(self.token_delay)
        return httpx.Response(
            200,
            json={"access_token": next(self.token_values), "expires_in": self.expires_in},
        )

    def route(self, method: str, path: str, responder: Callable[[httpx.Request], Any]) -> None:
        self.routes[(method, path)] = responder

    def json(self, method: str, path: str, payload: Any, status: int = 200) -> None:
        self.route(method, path, lambda request: httpx.Response(status, json=payload))

    def fail(self, method: str, path: str, status: int = 500, text: str = "upstream exploded") -> None:
        self.route(method, path, lambda request: httpx.Response(status, text=text))

    def hotels(self, hotels: list[dict[str, Any]]) -> None:
        self.json("GET", BY_CITY_PATH, {"data": hotels})

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [c for c in self.calls if c.url.path == path]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        responder = self.routes.get((request.method, request.url.path))
        if responder is None:
            return httpx.Response(404, text=f"no route for {request.method} {request.url.path}")
        result = responder(request)
        if inspect.isawaitable(result):
            result = await result
        return result


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def http_client(upstream: FakeUpstream) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(upstream))


@pytest.fixture
def tokens(http_client: httpx.AsyncClient, clock: FakeClock) -> TokenManager:
    return TokenManager(
        client=http_client,
        api_key="test-key",
        api_secret="test-secret",
        safety_margin_seconds=60,
        clock=clock,
    )


@pytest.fixture
def gateway(tokens: TokenManager, http_client: httpx.AsyncClient) -> AmadeusGateway:
    return AmadeusGateway(tokens=tokens, client=http_client, timeout=5.0)


@pytest.fixture
def discovery(gateway: AmadeusGateway) -> HotelDiscovery:
    return HotelDiscovery(gateway, max_hotels=5)


@pytest.fixture
def service(gateway: AmadeusGateway, discovery: HotelDiscovery) -> HotelService:
    return HotelService(gateway, discovery)
