"""OAuth2 client-credentials token cache for the Amadeus API."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import httpx

from hotelbridge.config import settings
from hotelbridge.errors import AuthFailure

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/security/oauth2/token"
DEFAULT_EXPIRES_IN = 1799


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AccessToken:
    value: str
    expires_at: datetime

    def is_valid(self, now: datetime) -> bool:
        return now < self.expires_at


class TokenManager:
    """Owns the bearer token; renewals are serialized behind a lock."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        safety_margin_seconds: int | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._client = client
        self._api_key = api_key
        self._api_secret = api_secret
        self._safety_margin = timedelta(
            seconds=settings.token_safety_margin_seconds
            if safety_margin_seconds is None
            else safety_margin_seconds
        )
        self._clock = clock
        self._token: AccessToken | None = None
        self._lock = asyncio.Lock()
        self.exchange_count = 0

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=settings.amadeus_base_url,
                timeout=settings.request_timeout_seconds,
            )
        return self._client

    @property
    def current(self) -> AccessToken | None:
        return self._token

    async def acquire_token(self) -> AccessToken:
        """Return the cached token, renewing it first if it has expired."""
        token = self._token
        if token and token.is_valid(self._clock()):
            return token

        async with self._lock:
            # Another caller may have renewed while we waited on the lock
            token = self._token
            if token and token.is_valid(self._clock()):
                return token
            self._token = await self._exchange()
            return self._token

    def invalidate(self) -> None:
        self._token = None

    async def _exchange(self) -> AccessToken:
        api_key = self._api_key or settings.amadeus_api_key
        api_secret = self._api_secret or settings.amadeus_api_secret
        if not api_key or not api_secret:
            raise AuthFailure(
                "AMADEUS_API_KEY and AMADEUS_API_SECRET environment variables are required"
            )

        logger.info("Requesting new Amadeus access token")
        client = await self._get_client()
        self.exchange_count += 1
        issued_at = self._clock()
        try:
            resp = await client.post(
                TOKEN_PATH,
                data={
                    "grant_type": "client_credentials",
                    "client_id": api_key,
                    "client_secret": api_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            raise AuthFailure(
                f"Failed to get access token: {e.response.status_code} "
                f"{e.response.reason_phrase}\n{e.response.text}"
            ) from e
        except httpx.RequestError as e:
            raise AuthFailure(f"Failed to get access token: {e!r}") from e
        except ValueError as e:
            raise AuthFailure("Failed to get access token: response was not JSON") from e

        if not isinstance(data, dict):
            raise AuthFailure("Failed to get access token: response was not a JSON object")
        value = data.get("access_token")
        if not value or not isinstance(value, str):
            raise AuthFailure("Failed to get access token: no access_token in response")

        raw_expires_in = data.get("expires_in", DEFAULT_EXPIRES_IN)
        try:
            expires_in = int(raw_expires_in)
        except (TypeError, ValueError) as e:
            raise AuthFailure(
                f"Failed to get access token: invalid expires_in {raw_expires_in!r}"
            ) from e
        if expires_in <= 0:
            raise AuthFailure(f"Failed to get access token: expires_in={expires_in}")
        lifetime = timedelta(seconds=expires_in)
        # Lifetimes shorter than the margin keep half their advertised window
        if lifetime <= self._safety_margin:
            expires_at = issued_at + lifetime / 2
        else:
            expires_at = issued_at + lifetime - self._safety_margin
        logger.info(f"Amadeus token refreshed, valid for {expires_in}s")
        return AccessToken(value=value, expires_at=expires_at)

    async def aclose(self):
        if self._client:
            await self._client.aclose()
            self._client = None


token_manager = TokenManager()
