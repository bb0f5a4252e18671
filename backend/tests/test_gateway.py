from __future__ import annotations

import json

import httpx
import pytest

from hotelbridge.errors import ErrorClassification, UpstreamError
from hotelbridge.services.gateway import AmadeusGateway, _clean_params, _redact

from conftest import BOOKINGS_PATH, BY_CITY_PATH, OFFERS_PATH, TOKEN_PATH


@pytest.mark.asyncio
async def test_injects_bearer_token_and_returns_json(gateway, upstream):
    upstream.json("GET", BY_CITY_PATH, {"data": [{"hotelId": "HLPAR001"}]})

    result = await gateway.execute("v1/reference-data/locations/hotels/by-city", params={"cityCode": "PAR"})

    assert result == {"data": [{"hotelId": "HLPAR001"}]}
    request = upstream.calls_to(BY_CITY_PATH)[0]
    assert request.headers["authorization"] == "Bearer token-1"
    assert request.headers["accept"] == "application/json"
    assert request.url.params["cityCode"] == "PAR"


@pytest.mark.asyncio
async def test_serializes_body_as_json(gateway, upstream):
    upstream.json("POST", BOOKINGS_PATH, {"data": {"id": "BK1"}})

    await gateway.execute(BOOKINGS_PATH, "POST", body={"data": {"offerId": "X"}})

    request = upstream.calls_to(BOOKINGS_PATH)[0]
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == {"data": {"offerId": "X"}}


@pytest.mark.asyncio
async def test_list_params_are_comma_joined_and_empty_values_dropped(gateway, upstream):
    upstream.json("GET", OFFERS_PATH, {"data": []})

    await gateway.execute(
        OFFERS_PATH,
        params={"hotelIds": ["A", "B"], "currency": None, "boardType": "", "adults": 2},
    )

    params = upstream.calls_to(OFFERS_PATH)[0].url.params
    assert params["hotelIds"] == "A,B"
    assert params["adults"] == "2"
    assert "currency" not in params
    assert "boardType" not in params


@pytest.mark.asyncio
async def test_not_found_lists_probable_causes_and_raw_body(gateway, upstream):
    upstream.fail("GET", BY_CITY_PATH, status=404, text='{"errors":[{"code":895}]}')

    with pytest.raises(UpstreamError) as exc:
        await gateway.execute(BY_CITY_PATH, params={"cityCode": "XXX"})

    error = exc.value
    assert error.classification == ErrorClassification.NOT_FOUND
    assert error.status_code == 404
    message = str(error)
    assert '{"errors":[{"code":895}]}' in message
    assert "Invalid city code" in message
    assert "No hotels found" in message


@pytest.mark.asyncio
async def test_bad_request_lists_probable_causes(gateway, upstream):
    upstream.fail("GET", OFFERS_PATH, status=400, text="INVALID DATE")

    with pytest.raises(UpstreamError) as exc:
        await gateway.execute(OFFERS_PATH)

    assert exc.value.classification == ErrorClassification.BAD_REQUEST
    assert "INVALID DATE" in str(exc.value)
    assert "YYYY-MM-DD" in str(exc.value)


@pytest.mark.parametrize(
    "status, expected",
    [
        (500, ErrorClassification.TRANSIENT),
        (503, ErrorClassification.TRANSIENT),
        (429, ErrorClassification.TRANSIENT),
        (403, ErrorClassification.UNAUTHORIZED),
        (409, ErrorClassification.UNKNOWN),
    ],
)
@pytest.mark.asyncio
async def test_other_statuses_are_classified(gateway, upstream, status, expected):
    upstream.fail("GET", OFFERS_PATH, status=status, text="boom")

    with pytest.raises(UpstreamError) as exc:
        await gateway.execute(OFFERS_PATH)

    assert exc.value.classification == expected
    assert "boom" in str(exc.value)


@pytest.mark.asyncio
async def test_unauthorized_drops_cached_token(gateway, tokens, upstream):
    upstream.fail("GET", OFFERS_PATH, status=401, text="expired")

    with pytest.raises(UpstreamError) as exc:
        await gateway.execute(OFFERS_PATH)

    assert exc.value.classification == ErrorClassification.UNAUTHORIZED
    assert tokens.current is None

    upstream.json("GET", OFFERS_PATH, {"data": []})
    await gateway.execute(OFFERS_PATH)
    assert len(upstream.calls_to(TOKEN_PATH)) == 2


@pytest.mark.asyncio
async def test_timeout_is_transient(gateway, upstream):
    def slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    upstream.route("GET", OFFERS_PATH, slow)

    with pytest.raises(UpstreamError) as exc:
        await gateway.execute(OFFERS_PATH)

    assert exc.value.classification == ErrorClassification.TRANSIENT
    assert exc.value.is_transient


@pytest.mark.asyncio
async def test_non_json_success_is_unknown(gateway, upstream):
    upstream.route("GET", OFFERS_PATH, lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(UpstreamError) as exc:
        await gateway.execute(OFFERS_PATH)

    assert exc.value.classification == ErrorClassification.UNKNOWN


@pytest.mark.asyncio
async def test_gateway_closes_its_client(tokens, http_client):
    gw = AmadeusGateway(tokens=tokens, client=http_client)

    await gw.aclose()

    assert http_client.is_closed


def test_clean_params_handles_booleans_and_empty():
    assert _clean_params(None) is None
    assert _clean_params({"a": True, "b": False, "c": []}) == {"a": "true", "b": "false"}


def test_redact_masks_card_numbers_only():
    text = '{"cardNumber": "4111111111111111", "expiryDate": "2026-08"}'

    redacted = _redact(text)

    assert "4111111111111111" not in redacted
    assert "************1111" in redacted
    assert "2026-08" in redacted
