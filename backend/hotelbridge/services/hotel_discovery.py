"""Hotel discovery — resolves a city code into a bounded set of hotels."""

import logging
from typing import Any

from hotelbridge.config import settings
from hotelbridge.errors import NoInventory
from hotelbridge.schemas.hotels import HotelListRequest
from hotelbridge.services.gateway import AmadeusGateway, gateway

logger = logging.getLogger(__name__)

HOTELS_BY_CITY_PATH = "v1/reference-data/locations/hotels/by-city"


def filter_by_name(hotels: list[dict], name_filter: str | None) -> list[dict]:
    """Case-insensitive substring match on hotel names.

    The filter is advisory: when nothing matches, the unfiltered list is
    returned instead of an empty one.
    """
    if not name_filter:
        return hotels

    term = name_filter.lower()
    matches = [h for h in hotels if h.get("name") and term in h["name"].lower()]
    logger.info(f"Found {len(matches)} of {len(hotels)} hotels matching {name_filter!r}")
    if not matches:
        logger.info(f"No hotels matching {name_filter!r}, using unfiltered list")
        return hotels
    return matches


class HotelDiscovery:
    """Runs the by-city listing and narrows it for the offers query."""

    def __init__(self, gateway_: AmadeusGateway | None = None, max_hotels: int | None = None):
        self._gateway = gateway_ or gateway
        self.max_hotels = settings.discovery_max_hotels if max_hotels is None else max_hotels

    async def list_hotels(self, request: HotelListRequest) -> dict[str, Any]:
        """Raw by-city listing with the name filter applied client-side."""
        logger.info(f"Listing hotels in {request.city_code}")
        result = await self._gateway.execute(
            HOTELS_BY_CITY_PATH, "GET", params=request.listing_params()
        )
        if request.hotel_name and isinstance(result, dict):
            result = {**result, "data": filter_by_name(result.get("data") or [], request.hotel_name)}
        return result

    async def discover_hotels(
        self,
        city_code: str,
        name_filter: str | None = None,
        amenities: list[str] | None = None,
        ratings: list[int] | None = None,
    ) -> list[dict]:
        """Hotels for ``city_code``, name-filtered and capped at ``max_hotels``.

        Raises ``NoInventory`` when the city itself has no hotels. A name filter
        that matches nothing is not an error.
        """
        request = HotelListRequest(
            city_code=city_code,
            amenities=amenities or [],
            ratings=ratings or [],
        )
        logger.info(
            f"Fetching hotels in city {request.city_code}"
            + (f" with name {name_filter!r}" if name_filter else "")
        )
        result = await self._gateway.execute(
            HOTELS_BY_CITY_PATH, "GET", params=request.listing_params()
        )
        hotels = result.get("data") if isinstance(result, dict) else None
        if not hotels:
            raise NoInventory(request.city_code)
        logger.info(f"Found {len(hotels)} hotels in {request.city_code}")

        candidates = [h for h in filter_by_name(hotels, name_filter) if h.get("hotelId")]
        if not candidates:
            raise NoInventory(request.city_code, "Could not extract valid hotel IDs")
        return candidates[: self.max_hotels]

    async def discover_hotel_ids(
        self,
        city_code: str,
        name_filter: str | None = None,
        amenities: list[str] | None = None,
        ratings: list[int] | None = None,
    ) -> list[str]:
        hotels = await self.discover_hotels(city_code, name_filter, amenities, ratings)
        return [h["hotelId"] for h in hotels]


hotel_discovery = HotelDiscovery()
