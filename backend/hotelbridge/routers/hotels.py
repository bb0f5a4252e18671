"""Hotel router — city listing, offer search, offer detail and booking."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from hotelbridge.errors import (
    AuthFailure,
    ErrorClassification,
    HotelBridgeError,
    NoInventory,
    UpstreamError,
    ValidationFailure,
)
from hotelbridge.schemas.hotels import (
    BookingRequest,
    HotelListRequest,
    OfferSearchRequest,
    parse_request,
)
from hotelbridge.services.hotel_service import HotelService, hotel_service

logger = logging.getLogger(__name__)

router = APIRouter()

UPSTREAM_STATUS = {
    ErrorClassification.NOT_FOUND: 404,
    ErrorClassification.BAD_REQUEST: 400,
}


def get_hotel_service() -> HotelService:
    return hotel_service


def _http_error(error: HotelBridgeError) -> HTTPException:
    """Translate a service error into an HTTP response."""
    if isinstance(error, ValidationFailure):
        return HTTPException(status_code=422, detail=str(error))
    if isinstance(error, NoInventory):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, AuthFailure):
        return HTTPException(status_code=503, detail="Upstream authentication failed")
    if isinstance(error, UpstreamError):
        return HTTPException(
            status_code=UPSTREAM_STATUS.get(error.classification, 502),
            detail=str(error),
        )
    return HTTPException(status_code=500, detail=str(error))


@router.get("/by-city")
async def list_hotels(
    city_code: str = Query(..., alias="cityCode", min_length=1),
    radius: int | None = Query(None, ge=1),
    amenities: list[str] | None = Query(None),
    ratings: list[int] | None = Query(None),
    hotel_name: str | None = Query(None, alias="hotelName"),
    service: HotelService = Depends(get_hotel_service),
):
    """List hotels in a city."""
    try:
        payload = {
            "cityCode": city_code,
            "radius": radius,
            "amenities": amenities or [],
            "ratings": ratings or [],
            "hotelName": hotel_name,
        }
        request = parse_request(
            HotelListRequest, {k: v for k, v in payload.items() if v is not None}
        )
        return await service.list_hotels(request)
    except HotelBridgeError as e:
        raise _http_error(e)


@router.post("/offers/search")
async def search_offers(
    req: OfferSearchRequest,
    service: HotelService = Depends(get_hotel_service),
):
    """Search priced offers; falls back to generated offers when Amadeus fails."""
    try:
        outcome = await service.search_offers(req)
    except HotelBridgeError as e:
        raise _http_error(e)
    return outcome.data


@router.get("/offers/{offer_id}")
async def get_offer(
    offer_id: str,
    service: HotelService = Depends(get_hotel_service),
):
    try:
        outcome = await service.get_offer_detail(offer_id)
    except HotelBridgeError as e:
        raise _http_error(e)
    return outcome.data


@router.post("/bookings")
async def create_booking(
    req: BookingRequest,
    service: HotelService = Depends(get_hotel_service),
):
    """Book an offer. Always yields a confirmation unless authentication fails."""
    try:
        outcome = await service.book(req)
    except HotelBridgeError as e:
        raise _http_error(e)
    return outcome.data
