"""Synthetic stand-ins for hotel search, offer detail and booking responses.

Used when the real Amadeus call fails. Every builder returns the same
``{"data": ...}`` shape as the corresponding upstream endpoint so formatting
code never has to branch on where a result came from. Each payload also
carries ``meta.source == "synthetic"`` so callers can tell.
"""

import hashlib
import uuid
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal

from hotelbridge.config import settings
from hotelbridge.schemas.hotels import BookingRequest, OfferSearchRequest

OFFER_PREFIX = "OFF-"
PLACEHOLDER_HOTEL_ID = "MOCK-HOTEL"
DEFAULT_RATING = 4
CANCELLATION_NOTICE_DAYS = 3
CHECK_IN_TIME = "15:00"
CHECK_OUT_TIME = "11:00"
BOARD_TYPE = "BREAKFAST_INCLUDED"

CENTS = Decimal("0.01")
TAX_RATE = Decimal("0.1")
CANCELLATION_FEE_RATE = Decimal("0.2")


@dataclass(frozen=True)
class OfferId:
    """Structured offer identifier, rendered as ``OFF-<hotelId>-<suffix>``.

    The suffix never contains ``-`` so hotel ids that do still round-trip.
    """

    hotel_id: str
    suffix: str

    def __post_init__(self):
        if not self.hotel_id or not self.suffix or "-" in self.suffix:
            raise ValueError(f"invalid offer id parts: {self.hotel_id!r}, {self.suffix!r}")

    def __str__(self) -> str:
        return f"{OFFER_PREFIX}{self.hotel_id}-{self.suffix}"

    @classmethod
    def for_stay(cls, hotel_id: str, check_in: date, check_out: date) -> "OfferId":
        seed_str = f"{hotel_id}{check_in.isoformat()}{check_out.isoformat()}"
        suffix = hashlib.md5(seed_str.encode()).hexdigest()[:10].upper()
        return cls(hotel_id=hotel_id, suffix=suffix)

    @classmethod
    def parse(cls, text: str) -> "OfferId | None":
        if not text or not text.upper().startswith(OFFER_PREFIX):
            return None
        hotel_id, sep, suffix = text[len(OFFER_PREFIX):].rpartition("-")
        if not sep or not hotel_id or not suffix:
            return None
        return cls(hotel_id=hotel_id, suffix=suffix)


def synthetic_meta(reason: str) -> dict:
    return {"source": "synthetic", "reason": reason}


def _rating_of(hotel: dict) -> int:
    try:
        rating = int(hotel.get("rating") or DEFAULT_RATING)
    except (TypeError, ValueError):
        return DEFAULT_RATING
    return min(max(rating, 1), 5)


def _money(value: Decimal) -> str:
    return str(value.quantize(CENTS, rounding=ROUND_HALF_UP))


def _price_block(rating: int, currency: str) -> dict:
    base = Decimal(100 + rating * 50)
    return {
        "currency": currency,
        "base": str(base),
        "total": _money(base + base * TAX_RATE),
        "taxes": [
            {
                "amount": _money(base * TAX_RATE),
                "currency": currency,
                "included": True,
            }
        ],
    }


def _room_block(rating: int) -> dict:
    category = "SUITE" if rating >= 5 else "STANDARD"
    return {
        "type": category,
        "typeEstimated": {"category": category, "beds": 1, "bedType": "KING"},
        "description": {
            "text": (
                f"Beautiful {'suite' if rating >= 5 else 'room'} with "
                f"{'luxury' if rating >= 5 else 'standard'} amenities."
            )
        },
    }


def _policies_block(rating: int, check_in: date) -> dict:
    base = Decimal(100 + rating * 50)
    deadline = datetime.combine(
        check_in - timedelta(days=CANCELLATION_NOTICE_DAYS), time.min, tzinfo=timezone.utc
    )
    return {
        "cancellations": [
            {
                "deadline": deadline.isoformat(),
                "amount": _money(base * CANCELLATION_FEE_RATE),
                "type": "PARTIAL",
                "description": {
                    "text": (
                        f"Cancellation is free until {CANCELLATION_NOTICE_DAYS} days "
                        "before check-in. After that, a fee applies."
                    )
                },
            }
        ],
        "checkInOut": {"checkIn": CHECK_IN_TIME, "checkOut": CHECK_OUT_TIME},
    }


def _offer(offer_id: str, hotel: dict, check_in: date, check_out: date, currency: str) -> dict:
    rating = _rating_of(hotel)
    return {
        "id": offer_id,
        "checkInDate": check_in.isoformat(),
        "checkOutDate": check_out.isoformat(),
        "room": _room_block(rating),
        "price": _price_block(rating, currency),
        "boardType": BOARD_TYPE,
        "policies": _policies_block(rating, check_in),
    }


def synthetic_hotel(city_code: str) -> dict:
    return {
        "name": f"{city_code} Grand Hotel",
        "hotelId": f"MOCK-{city_code}-001",
        "address": {
            "lines": ["123 Main Street"],
            "cityName": city_code,
            "countryCode": "US",
        },
        "rating": DEFAULT_RATING,
        "amenities": ["WIFI", "RESTAURANT", "GYM"],
    }


def synthetic_offers(
    query: OfferSearchRequest,
    hotels: list[dict] | None,
    reason: str,
) -> dict:
    """One offer per known hotel, or one synthetic hotel when none are known."""
    known = [h for h in (hotels or []) if h.get("hotelId")]
    if not known:
        known = [synthetic_hotel(query.city_code)]

    currency = query.currency or settings.default_currency
    data = []
    for hotel in known:
        offer_id = OfferId.for_stay(hotel["hotelId"], query.check_in_date, query.check_out_date)
        data.append({
            "type": "hotel-offers",
            "hotel": hotel,
            "available": True,
            "offers": [
                _offer(str(offer_id), hotel, query.check_in_date, query.check_out_date, currency)
            ],
        })
    return {"data": data, "meta": synthetic_meta(reason)}


def synthetic_offer_detail(offer_id: str, reason: str, today: date | None = None) -> dict:
    """A complete offer record whose hotel id is recovered from ``offer_id``."""
    parsed = OfferId.parse(offer_id)
    hotel_id = parsed.hotel_id if parsed else PLACEHOLDER_HOTEL_ID

    check_in = (today or date.today()) + timedelta(days=30)
    check_out = check_in + timedelta(days=4)
    hotel = {
        "name": f"Hotel {hotel_id}",
        "hotelId": hotel_id,
        "address": {
            "lines": ["123 Main Street"],
            "cityName": "Example City",
            "countryCode": "US",
            "postalCode": "12345",
        },
        "geoCode": {"latitude": 37.7749, "longitude": -122.4194},
        "rating": DEFAULT_RATING,
        "amenities": ["WIFI", "RESTAURANT", "GYM", "SWIMMING_POOL"],
        "contact": {"phone": "+1-555-123-4567", "email": "info@example.com"},
    }
    offer = _offer(offer_id, hotel, check_in, check_out, settings.default_currency)
    offer["hotel"] = hotel
    return {"data": offer, "meta": synthetic_meta(reason)}


def synthetic_booking(request: BookingRequest, reason: str) -> dict:
    """Fresh booking and provider confirmation ids echoing the submitted guests."""
    token = uuid.uuid4().hex[:12].upper()
    return {
        "data": {
            "id": f"BK{token}",
            "providerConfirmationId": f"PC{token}",
            "associatedRecords": [{"reference": f"REF{token}", "originSystemCode": "MOCK"}],
            "guests": request.guests_payload(),
            "offerId": request.offer_id,
        },
        "meta": synthetic_meta(reason),
    }
