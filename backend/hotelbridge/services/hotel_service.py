"""Hotel service — orchestrates listing, offer search, offer detail and booking.

Search, detail and booking never surface upstream failures to the caller:
on a classified failure they return a synthetic substitute from
``degradation`` wrapped in a degraded ``Outcome``. ``AuthFailure`` always
propagates.
"""

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from hotelbridge.errors import AuthFailure, HotelBridgeError, UpstreamError
from hotelbridge.schemas.hotels import BookingRequest, HotelListRequest, OfferSearchRequest
from hotelbridge.services.degradation import (
    synthetic_booking,
    synthetic_offer_detail,
    synthetic_offers,
)
from hotelbridge.services.gateway import AmadeusGateway, gateway
from hotelbridge.services.hotel_discovery import HotelDiscovery, hotel_discovery

logger = logging.getLogger(__name__)

HOTEL_OFFERS_PATH = "v3/shopping/hotel-offers"
HOTEL_BOOKINGS_PATH = "v1/booking/hotel-bookings"


@dataclass(frozen=True)
class Outcome:
    """Result of an orchestrated call: real upstream data or a degraded stand-in."""

    data: dict[str, Any]
    degraded: bool = False
    reason: str | None = None

    @classmethod
    def real(cls, data: dict[str, Any]) -> "Outcome":
        return cls(data=data)

    @classmethod
    def degraded_with(cls, data: dict[str, Any], reason: str) -> "Outcome":
        return cls(data=data, degraded=True, reason=reason)


def describe_failure(error: HotelBridgeError) -> str:
    """One-line reason for a degraded outcome."""
    if isinstance(error, UpstreamError):
        status = f" ({error.status_code})" if error.status_code else ""
        return f"{error.classification.value}{status}: upstream call failed"
    first_line = str(error).splitlines()[0] if str(error) else ""
    return f"{type(error).__name__}: {first_line}"


def offer_params(query: OfferSearchRequest, hotel_ids: list[str]) -> dict[str, Any]:
    params: dict[str, Any] = {
        "hotelIds": hotel_ids,
        "checkInDate": query.check_in_date.isoformat(),
        "checkOutDate": query.check_out_date.isoformat(),
        "adults": query.adults,
        "roomQuantity": query.room_quantity,
    }
    if query.currency:
        params["currency"] = query.currency
    if query.price_range:
        params["priceRange"] = query.price_range
    if query.board_type:
        params["boardType"] = query.board_type
    if query.payment_policy:
        params["paymentPolicy"] = query.payment_policy
    return params


class HotelService:
    """Composes discovery and gateway calls into the caller-facing operations."""

    def __init__(
        self,
        gateway_: AmadeusGateway | None = None,
        discovery: HotelDiscovery | None = None,
    ):
        self._gateway = gateway_ or gateway
        self._discovery = discovery or (
            HotelDiscovery(self._gateway) if gateway_ else hotel_discovery
        )

    async def list_hotels(self, request: HotelListRequest) -> dict[str, Any]:
        """Hotels in a city. Failures propagate as typed errors."""
        return await self._discovery.list_hotels(request)

    async def search_offers(self, query: OfferSearchRequest) -> Outcome:
        """Priced offers for up to ``max_hotels`` hotels in the query's city."""
        logger.info(
            f"Searching offers in {query.city_code} "
            f"{query.check_in_date}..{query.check_out_date} for {query.adults} adult(s)"
        )
        hotels: list[dict] = []
        try:
            hotels = await self._discovery.discover_hotels(query.city_code, query.hotel_name)
            hotel_ids = [h["hotelId"] for h in hotels]
            logger.info(f"Using hotel IDs: {', '.join(hotel_ids)}")
            result = await self._gateway.execute(
                HOTEL_OFFERS_PATH, "GET", params=offer_params(query, hotel_ids)
            )
        except AuthFailure:
            raise
        except HotelBridgeError as e:
            reason = describe_failure(e)
            logger.warning(f"Real API failed, using synthetic offers for {query.city_code}: {reason}")
            return Outcome.degraded_with(synthetic_offers(query, hotels, reason), reason)

        return Outcome.real(result)

    async def get_offer_detail(self, offer_id: str) -> Outcome:
        """Current details for an offer id returned by a previous search."""
        logger.info(f"Getting hotel offer details for {offer_id}")
        try:
            result = await self._gateway.execute(
                f"{HOTEL_OFFERS_PATH}/{quote(offer_id, safe='')}", "GET"
            )
        except AuthFailure:
            raise
        except HotelBridgeError as e:
            reason = describe_failure(e)
            logger.warning(f"Real API failed, using synthetic offer details for {offer_id}: {reason}")
            return Outcome.degraded_with(synthetic_offer_detail(offer_id, reason), reason)

        return Outcome.real(result)

    async def book(self, request: BookingRequest) -> Outcome:
        """Submit a booking; a failed submission yields a synthetic confirmation."""
        logger.info(f"Booking hotel offer {request.offer_id} for {len(request.guests)} guest(s)")
        try:
            body = request.to_upstream()
            result = await self._gateway.execute(HOTEL_BOOKINGS_PATH, "POST", body=body)
        except AuthFailure:
            raise
        except HotelBridgeError as e:
            reason = describe_failure(e)
            logger.warning(f"Booking API failed, using synthetic confirmation: {reason}")
            return Outcome.degraded_with(synthetic_booking(request, reason), reason)

        return Outcome.real(result)


hotel_service = HotelService()
