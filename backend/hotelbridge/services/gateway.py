"""Authenticated request gateway — the single path for every Amadeus call."""

import json
import logging
import re
from typing import Any

import httpx

from hotelbridge.config import settings
from hotelbridge.errors import ErrorClassification, UpstreamError, classify_status
from hotelbridge.services.token_manager import TokenManager, token_manager

logger = logging.getLogger(__name__)

CARD_NUMBER_RE = re.compile(r"\d{12,19}")


class AmadeusGateway:
    """Performs one authenticated HTTP call and classifies its failure.

    No retries happen here: whether to retry or degrade is left to the
    orchestrators in ``hotel_service``.
    """

    def __init__(
        self,
        tokens: TokenManager | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self._tokens = tokens or token_manager
        self._client = client
        self._timeout = settings.request_timeout_seconds if timeout is None else timeout

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=settings.amadeus_base_url,
                timeout=self._timeout,
            )
        return self._client

    async def execute(
        self,
        endpoint: str,
        method: str = "GET",
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Call ``endpoint`` with the current bearer token and return its JSON."""
        token = await self._tokens.acquire_token()
        client = await self._get_client()

        path = "/" + endpoint.lstrip("/")
        headers = {
            "Authorization": f"Bearer {token.value}",
            "Accept": "application/json",
        }
        content = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            content = json.dumps(body)
            preview = content[:200] + ("..." if len(content) > 200 else "")
            logger.debug(f"Request body: {_redact(preview)}")

        logger.info(f"Amadeus {method} {path}")
        try:
            resp = await client.request(
                method,
                path,
                params=_clean_params(params),
                content=content,
                headers=headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            raise UpstreamError(
                ErrorClassification.TRANSIENT,
                f"Request to {path} timed out after {self._timeout}s",
            ) from e
        except httpx.RequestError as e:
            raise UpstreamError(
                ErrorClassification.TRANSIENT,
                f"Request to {path} failed: {e!r}",
            ) from e

        if not resp.is_success:
            error_text = resp.text
            logger.error(f"Amadeus API error response ({resp.status_code}): {error_text}")
            classification = classify_status(resp.status_code)
            if classification == ErrorClassification.UNAUTHORIZED:
                self._tokens.invalidate()
            raise UpstreamError(
                classification,
                error_text,
                status_code=resp.status_code,
                reason_phrase=resp.reason_phrase,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamError(
                ErrorClassification.UNKNOWN,
                f"Response from {path} was not valid JSON: {resp.text[:200]}",
                status_code=None,
            ) from e

    async def aclose(self):
        if self._client:
            await self._client.aclose()
            self._client = None


def _clean_params(params: dict[str, Any] | None) -> dict[str, str] | None:
    """Drop unset values and join list values with commas."""
    if not params:
        return None
    cleaned: dict[str, str] = {}
    for key, value in params.items():
        if value is None or value == "" or value == []:
            continue
        if isinstance(value, (list, tuple)):
            cleaned[key] = ",".join(str(v) for v in value)
        elif isinstance(value, bool):
            cleaned[key] = "true" if value else "false"
        else:
            cleaned[key] = str(value)
    return cleaned


def _redact(text: str) -> str:
    """Mask anything that looks like a card number in a logged body."""
    return CARD_NUMBER_RE.sub(lambda m: "*" * (len(m.group()) - 4) + m.group()[-4:], text)


gateway = AmadeusGateway()
