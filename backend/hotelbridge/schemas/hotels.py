"""Caller-facing request models for the hotel list/search/offer/booking operations.

Field names follow the Amadeus camelCase wire names through aliases, so the
same models validate tool arguments, HTTP bodies and build upstream payloads.
"""

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from hotelbridge.errors import ValidationFailure

DATE_HINT = "YYYY-MM-DD"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class HotelListRequest(_CamelModel):
    city_code: str = Field(min_length=1)
    radius: int | None = Field(default=None, ge=1)
    radius_unit: Literal["KM"] = "KM"
    amenities: list[str] = Field(default_factory=list)
    ratings: list[int] = Field(default_factory=list)
    hotel_name: str | None = None

    @field_validator("city_code")
    @classmethod
    def _upper_city(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("cityCode cannot be empty")
        return v

    @field_validator("ratings")
    @classmethod
    def _ratings_in_range(cls, v: list[int]) -> list[int]:
        for rating in v:
            if not 1 <= rating <= 5:
                raise ValueError("ratings must be between 1 and 5")
        return v

    def listing_params(self) -> dict[str, Any]:
        """Query params for the by-city endpoint. hotelName is filtered locally."""
        params: dict[str, Any] = {"cityCode": self.city_code}
        if self.radius is not None:
            params["radius"] = self.radius
            params["radiusUnit"] = self.radius_unit
        if self.amenities:
            params["amenities"] = self.amenities
        if self.ratings:
            params["ratings"] = self.ratings
        return params


class OfferSearchRequest(_CamelModel):
    city_code: str = Field(min_length=1)
    check_in_date: date
    check_out_date: date
    adults: int = Field(default=1, ge=1)
    room_quantity: int = Field(default=1, ge=1)
    price_range: str | None = Field(default=None, pattern=r"^\d*-?\d*$")
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    board_type: str | None = None
    payment_policy: Literal["GUARANTEE", "DEPOSIT", "NONE"] | None = None
    hotel_name: str | None = None

    @field_validator("city_code")
    @classmethod
    def _upper_city(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("cityCode cannot be empty")
        return v

    @field_validator("check_out_date")
    @classmethod
    def _dates_in_order(cls, v: date, info: ValidationInfo) -> date:
        check_in = info.data.get("check_in_date")
        if check_in is not None and v <= check_in:
            raise ValueError("checkOutDate must be after checkInDate")
        return v

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days


class OfferDetailRequest(_CamelModel):
    offer_id: str = Field(min_length=1)


class GuestName(_CamelModel):
    title: Literal["MR", "MS", "MRS", "MISS", "DR"]
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)


class GuestContact(_CamelModel):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str = Field(min_length=1)


class Guest(_CamelModel):
    name: GuestName
    contact: GuestContact


class PaymentCard(_CamelModel):
    vendor_code: Literal["VI", "MC", "AX", "DC"]
    card_number: str = Field(pattern=r"^\d{12,19}$")
    expiry_date: str = Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")

    @field_validator("card_number", mode="before")
    @classmethod
    def _strip_separators(cls, v: Any) -> Any:
        # "4111 1111 1111 1111" and "4111-1111-1111-1111" are sent as bare digits
        if isinstance(v, str):
            return v.replace(" ", "").replace("-", "")
        return v


class Payment(_CamelModel):
    method: Literal["CREDIT_CARD"]
    card: PaymentCard | None = None


class BookingRequest(_CamelModel):
    offer_id: str = Field(min_length=1)
    guests: list[Guest] = Field(min_length=1)
    payments: list[Payment] = Field(min_length=1)

    def to_upstream(self) -> dict[str, Any]:
        """The ``{data: {offerId, guests, payments}}`` body for hotel-bookings."""
        return {"data": self.model_dump(mode="json", by_alias=True, exclude_none=True)}

    def guests_payload(self) -> list[dict[str, Any]]:
        return [g.model_dump(mode="json", by_alias=True) for g in self.guests]


# Friendly messages for the most common omissions, checked before pydantic
_PRECHECKS: dict[type[BaseModel], list[tuple[str, str]]] = {
    OfferSearchRequest: [
        (
            "checkOutDate",
            "Missing required parameter: 'checkOutDate'. "
            f"Please provide a check-out date in {DATE_HINT} format.",
        ),
        (
            "checkInDate",
            "Invalid parameter: 'checkInDate' cannot be empty. "
            f"Please provide a check-in date in {DATE_HINT} format.",
        ),
    ],
    OfferDetailRequest: [
        (
            "offerId",
            "Missing required parameter: 'offerId'. Please provide a valid hotel offer ID.",
        ),
    ],
    BookingRequest: [
        (
            "offerId",
            "Missing required parameter: 'offerId'. Please provide a valid hotel offer ID.",
        ),
        (
            "guests",
            "Missing required parameter: 'guests'. "
            "Please provide at least one guest's information.",
        ),
        (
            "payments",
            "Missing required parameter: 'payments'. Please provide payment information.",
        ),
    ],
}


def parse_request(model: type[BaseModel], payload: dict[str, Any] | None) -> Any:
    """Validate ``payload`` into ``model`` or raise ``ValidationFailure``."""
    if payload is None:
        raise ValidationFailure([("arguments", "No arguments provided")], message="No arguments provided")

    for field, message in _PRECHECKS.get(model, []):
        value = payload.get(field)
        if value is None or value == "" or value == []:
            raise ValidationFailure([(field, "required")], message=message)

    try:
        return model.model_validate(payload)
    except ValidationError as e:
        errors = []
        for err in e.errors():
            loc = ".".join(str(part) for part in err["loc"]) or "arguments"
            errors.append((loc, err["msg"]))
        raise ValidationFailure(errors) from e
