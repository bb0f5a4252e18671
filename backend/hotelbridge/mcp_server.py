"""MCP stdio tool server exposing hotel list, search, offer and booking tools."""

import logging
import sys
from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from hotelbridge import formatters
from hotelbridge.config import settings
from hotelbridge.errors import HotelBridgeError
from hotelbridge.logging_setup import configure_logging
from hotelbridge.schemas.hotels import (
    BookingRequest,
    HotelListRequest,
    OfferDetailRequest,
    OfferSearchRequest,
    parse_request,
)
from hotelbridge.services.hotel_service import hotel_service

logger = logging.getLogger(__name__)

mcp = FastMCP("amadeus-hotel-api")

CITY_CODE_HINT = (
    "Always use valid IATA 3-letter city codes (e.g., 'PAR' for Paris, 'NYC' for "
    "New York, 'LON' for London, 'SFO' for San Francisco, 'LAX' for Los Angeles)."
)


# Tool parameters are named after the camelCase arguments callers send.
# Fields with friendly "missing" messages default to None so parse_request reports them.
def _payload(**kwargs: Any) -> dict[str, Any]:
    return {key: value for key, value in kwargs.items() if value is not None}


def _tool_error(tool: str, error: HotelBridgeError) -> ToolError:
    logger.error(f"{tool} failed: {error}")
    return ToolError(f"Error: {error}")


@mcp.tool(
    description=(
        "Search for hotels in a specific city. Retrieves a list of hotels based on "
        "location and optional filters including amenities, star rating, and hotel "
        f"name. {CITY_CODE_HINT}"
    )
)
async def amadeus_hotel_list(
    cityCode: str,
    radius: int | None = None,
    radiusUnit: str | None = None,
    amenities: list[str] | None = None,
    ratings: list[int] | None = None,
    hotelName: str | None = None,
) -> str:
    try:
        request = parse_request(
            HotelListRequest,
            _payload(
                cityCode=cityCode,
                radius=radius,
                radiusUnit=radiusUnit,
                amenities=amenities,
                ratings=ratings,
                hotelName=hotelName,
            ),
        )
        result = await hotel_service.list_hotels(request)
    except HotelBridgeError as e:
        raise _tool_error("amadeus_hotel_list", e) from e
    return formatters.format_hotel_list(result)


@mcp.tool(
    description=(
        "Search for hotel offers (available rooms with pricing) based on location, "
        "dates, guests, and other criteria, including room types, board options, and "
        f"cancellation policies. {CITY_CODE_HINT}"
    )
)
async def amadeus_hotel_search(
    cityCode: str,
    checkInDate: str,
    checkOutDate: str | None = None,
    adults: int = 1,
    roomQuantity: int = 1,
    priceRange: str | None = None,
    currency: str | None = None,
    boardType: str | None = None,
    paymentPolicy: str | None = None,
    hotelName: str | None = None,
) -> str:
    try:
        query = parse_request(
            OfferSearchRequest,
            _payload(
                cityCode=cityCode,
                checkInDate=checkInDate,
                checkOutDate=checkOutDate,
                adults=adults,
                roomQuantity=roomQuantity,
                priceRange=priceRange,
                currency=currency,
                boardType=boardType,
                paymentPolicy=paymentPolicy,
                hotelName=hotelName,
            ),
        )
        outcome = await hotel_service.search_offers(query)
    except HotelBridgeError as e:
        raise _tool_error("amadeus_hotel_search", e) from e
    return formatters.format_offer_search(outcome.data)


@mcp.tool(
    description=(
        "Get detailed information about a specific hotel offer using its ID from a "
        "previous search result, including updated availability and pricing."
    )
)
async def amadeus_hotel_offer(offerId: str | None = None) -> str:
    try:
        request = parse_request(OfferDetailRequest, _payload(offerId=offerId))
        outcome = await hotel_service.get_offer_detail(request.offer_id)
    except HotelBridgeError as e:
        raise _tool_error("amadeus_hotel_offer", e) from e
    return formatters.format_offer_detail(outcome.data)


@mcp.tool(
    description=(
        "Book a hotel offer for specified guests using an offer ID from a previous "
        "search. Each guest needs name {title, firstName, lastName} and contact "
        "{email, phone}; each payment needs method CREDIT_CARD and optional card "
        "{vendorCode, cardNumber, expiryDate}."
    )
)
async def amadeus_hotel_booking(
    offerId: str | None = None,
    guests: list[dict[str, Any]] | None = None,
    payments: list[dict[str, Any]] | None = None,
) -> str:
    try:
        request = parse_request(
            BookingRequest,
            _payload(offerId=offerId, guests=guests, payments=payments),
        )
        outcome = await hotel_service.book(request)
    except HotelBridgeError as e:
        raise _tool_error("amadeus_hotel_booking", e) from e
    return formatters.format_booking(outcome.data)


def main():
    configure_logging(sys.stderr)
    if not settings.has_credentials:
        logger.error("AMADEUS_API_KEY and AMADEUS_API_SECRET environment variables are required")
        sys.exit(1)

    logger.info("Starting Amadeus Hotel API MCP Server on stdio")
    mcp.run()


if __name__ == "__main__":
    main()
