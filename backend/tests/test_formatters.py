from __future__ import annotations

from hotelbridge import formatters
from hotelbridge.schemas.hotels import BookingRequest, OfferSearchRequest
from hotelbridge.services.degradation import synthetic_booking, synthetic_offer_detail, synthetic_offers

from conftest import make_hotel


def _query() -> OfferSearchRequest:
    return OfferSearchRequest.model_validate(
        {"cityCode": "PAR", "checkInDate": "2025-04-01", "checkOutDate": "2025-04-05"}
    )


def test_hotel_list_renders_each_hotel():
    payload = {"data": [make_hotel("HLPAR001", "Le Palace", rating=5)]}

    text = formatters.format_hotel_list(payload)

    assert text.startswith("Found 1 hotels:")
    assert "Le Palace" in text
    assert "ID: HLPAR001" in text
    assert "PARIS, FR" in text
    assert "Coordinates: 48.85, 2.35" in text


def test_empty_results_have_plain_messages():
    assert formatters.format_hotel_list({"data": []}) == "No hotels found matching your criteria."
    assert formatters.format_offer_search({}) == "No hotel offers found matching your criteria."
    assert formatters.format_offer_detail({}) == "No hotel offer details found."
    assert formatters.format_booking({}) == "No booking confirmation received."


def test_real_search_has_no_synthetic_notice():
    payload = {
        "data": [
            {
                "hotel": {"hotelId": "HLPAR001", "name": "Le Palace", "amenities": list("ABCDEFG")},
                "offers": [{"id": "TSX1", "price": {"total": "410.00", "currency": "EUR"}, "room": {"type": "DBL"}}],
            }
        ]
    }

    text = formatters.format_offer_search(payload)

    assert formatters.SYNTHETIC_NOTICE not in text
    assert "Price: 410.00 EUR" in text
    assert "Room: DBL" in text
    assert "Amenities: A, B, C, D, E..." in text
    assert "Offer ID: TSX1" in text
    assert "amadeus_hotel_offer" in text


def test_synthetic_search_is_flagged():
    payload = synthetic_offers(_query(), [make_hotel("HLPAR001", "Le Palace", rating=5)], "Transient")

    text = formatters.format_offer_search(payload)

    assert text.startswith(formatters.SYNTHETIC_NOTICE)
    assert "Room: SUITE" in text
    assert "Cancellation: 2025-03-29" in text


def test_offer_detail_renders_sections():
    payload = synthetic_offer_detail("OFF-HLPAR001-ABC", "NotFound")

    text = formatters.format_offer_detail(payload)

    assert "Hotel HLPAR001 (ID: HLPAR001)" in text
    assert "Base: 300 USD" in text
    assert "Taxes: 30.00 USD (Included)" in text
    assert "Policy #1:" in text
    assert "Check-in: 15:00" in text
    assert "Phone: +1-555-123-4567" in text


def test_booking_confirmation():
    request = BookingRequest.model_validate({
        "offerId": "X",
        "guests": [{
            "name": {"title": "MR", "firstName": "A", "lastName": "B"},
            "contact": {"email": "a@b.co", "phone": "1"},
        }],
        "payments": [{"method": "CREDIT_CARD"}],
    })
    payload = synthetic_booking(request, "Transient")

    text = formatters.format_booking(payload)

    assert "Hotel Booking Confirmed!" in text
    assert f"Booking ID: {payload['data']['id']}" in text
    assert "(MOCK)" in text


def test_booking_accepts_list_shaped_data():
    text = formatters.format_booking({"data": [{"id": "XK1", "providerConfirmationId": "P1"}]})

    assert "Booking ID: XK1" in text
    assert "Provider Confirmation: P1" in text
