"""Plain-text renderers for tool responses."""

from datetime import datetime
from typing import Any

SYNTHETIC_NOTICE = (
    "⚠️ Live Amadeus data was unavailable; the results below are generated "
    "placeholders and do not reflect real availability."
)


def _rows(data: Any) -> list[dict]:
    if isinstance(data, list):
        return [row for row in data if isinstance(row, dict)]
    if isinstance(data, dict):
        return [data]
    return []


def _address_line(address: dict | None, with_postal: bool = False) -> str:
    if not address:
        return ""
    parts = [
        ", ".join(address.get("lines") or []),
        address.get("cityName"),
        address.get("postalCode") if with_postal else None,
        address.get("countryCode"),
    ]
    return ", ".join(p for p in parts if p)


def _date(value: str | None, with_time: bool = False) -> str:
    if not value:
        return "Check with hotel"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.strftime("%Y-%m-%d %H:%M %Z").strip() if with_time else parsed.date().isoformat()


def _notice(payload: dict) -> str:
    meta = payload.get("meta") or {}
    return f"{SYNTHETIC_NOTICE}\n\n" if meta.get("source") == "synthetic" else ""


def format_hotel_list(payload: dict) -> str:
    hotels = _rows(payload.get("data"))
    if not hotels:
        return "No hotels found matching your criteria."

    result = f"Found {len(hotels)} hotels:\n\n"
    for hotel in hotels:
        result += f"🏨 {hotel.get('name') or 'Unnamed Hotel'}\n"
        if hotel.get("hotelId"):
            result += f"🆔 ID: {hotel['hotelId']}\n"
        address = _address_line(hotel.get("address"))
        if address:
            result += f"📍 {address}\n"
        geo = hotel.get("geoCode")
        if geo:
            result += f"📌 Coordinates: {geo.get('latitude')}, {geo.get('longitude')}\n"
        if hotel.get("rating"):
            result += f"⭐ Rating: {hotel['rating']}\n"
        if hotel.get("amenities"):
            result += f"🛎️ Amenities: {', '.join(hotel['amenities'])}\n"
        result += "\n"
    return result


def format_offer_search(payload: dict) -> str:
    entries = _rows(payload.get("data"))
    if not entries:
        return "No hotel offers found matching your criteria."

    result = _notice(payload) + f"Found {len(entries)} hotel offers:\n\n"
    for entry in entries:
        hotel = entry.get("hotel") or {}
        result += f"🏨 {hotel.get('name') or 'Unnamed Hotel'} (ID: {hotel.get('hotelId') or 'Unknown'})\n"
        address = _address_line(hotel.get("address"))
        if address:
            result += f"📍 {address}\n"
        if hotel.get("rating"):
            result += f"⭐ {hotel['rating']} stars\n"
        amenities = hotel.get("amenities") or []
        if amenities:
            more = "..." if len(amenities) > 5 else ""
            result += f"🛎️ Amenities: {', '.join(amenities[:5])}{more}\n"

        offers = entry.get("offers") or []
        if offers:
            best = offers[0]
            price = best.get("price") or {}
            result += f"💰 Price: {price.get('total', 'N/A')} {price.get('currency', '')}\n"
            room = best.get("room")
            if room:
                category = (room.get("typeEstimated") or {}).get("category") or room.get("type")
                result += f"🛏️ Room: {category or 'Standard Room'}\n"
            if best.get("boardType"):
                result += f"🍽️ Board: {best['boardType']}\n"
            cancellations = (best.get("policies") or {}).get("cancellations") or []
            if cancellations:
                result += f"❗ Cancellation: {_date(cancellations[0].get('deadline'))}\n"
            result += f"🔖 Offer ID: {best.get('id')}\n"
        result += "\n"

    result += (
        "Note: Use 'amadeus_hotel_offer' with an offer ID to get detailed "
        "information about a specific offer."
    )
    return result


def format_offer_detail(payload: dict) -> str:
    offers = _rows(payload.get("data"))
    if not offers:
        return "No hotel offer details found."

    offer = offers[0]
    hotel = offer.get("hotel") or {}
    result = _notice(payload)
    result += f"🏨 {hotel.get('name') or 'Unnamed Hotel'} (ID: {hotel.get('hotelId') or 'Unknown'})\n\n"

    address = _address_line(hotel.get("address"), with_postal=True)
    if address:
        result += f"📍 Location\nAddress: {address}\n\n"
    result += f"⭐ Rating: {hotel.get('rating') or 'Not rated'} stars\n\n"
    if hotel.get("amenities"):
        result += f"🛎️ Amenities\n{', '.join(hotel['amenities'])}\n\n"

    contact = hotel.get("contact")
    if contact:
        result += "📞 Contact\n"
        for label, key in (("Phone", "phone"), ("Fax", "fax"), ("Email", "email")):
            if contact.get(key):
                result += f"{label}: {contact[key]}\n"
        result += "\n"

    result += f"🔖 Offer ID: {offer.get('id')}\n\n"

    room = offer.get("room")
    if room:
        category = (room.get("typeEstimated") or {}).get("category") or room.get("type")
        result += f"🛏️ Room Information\nType: {category or 'Standard Room'}\n"
        description = (room.get("description") or {}).get("text")
        if description:
            result += f"Description: {description}\n"
        result += "\n"

    price = offer.get("price")
    if price:
        currency = price.get("currency", "")
        result += "💰 Price Details\n"
        result += f"Total: {price.get('total')} {currency}\n"
        result += f"Base: {price.get('base')} {currency}\n"
        taxes = price.get("taxes") or []
        if taxes:
            rendered = ", ".join(
                f"{t.get('amount')} {t.get('currency')} "
                f"({'Included' if t.get('included') else 'Not included'})"
                for t in taxes
            )
            result += f"Taxes: {rendered}\n"
        result += "\n"

    policies = offer.get("policies") or {}
    cancellations = policies.get("cancellations") or []
    if cancellations:
        result += "📋 Cancellation Policy\n"
        for index, policy in enumerate(cancellations, start=1):
            result += f"Policy #{index}:\n"
            if policy.get("deadline"):
                result += f"Deadline: {_date(policy['deadline'], with_time=True)}\n"
            if policy.get("amount"):
                result += f"Fee: {policy['amount']}\n"
            if policy.get("type"):
                result += f"Type: {policy['type']}\n"
            details = (policy.get("description") or {}).get("text")
            if details:
                result += f"Details: {details}\n"
            result += "\n"

    check_in_out = policies.get("checkInOut")
    if check_in_out:
        result += "🕒 Check-in/out Information\n"
        if check_in_out.get("checkIn"):
            result += f"Check-in: {check_in_out['checkIn']}\n"
        if check_in_out.get("checkOut"):
            result += f"Check-out: {check_in_out['checkOut']}\n"
        result += "\n"

    return result


def format_booking(payload: dict) -> str:
    booking = payload.get("data")
    if isinstance(booking, list):
        booking = booking[0] if booking else None
    if not booking:
        return "No booking confirmation received."

    result = _notice(payload) + "✅ Hotel Booking Confirmed!\n\n"
    if booking.get("id"):
        result += f"🔖 Booking ID: {booking['id']}\n"
    if booking.get("providerConfirmationId"):
        result += f"🏷️ Provider Confirmation: {booking['providerConfirmationId']}\n"
    records = booking.get("associatedRecords") or []
    if records:
        result += "📝 Associated Records:\n"
        for record in records:
            result += f"- {record.get('reference')} ({record.get('originSystemCode')})\n"
    result += "\n📞 Contact the hotel directly for any changes or cancellations."
    return result
