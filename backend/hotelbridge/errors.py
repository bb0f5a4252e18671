"""Error taxonomy for upstream calls, discovery and caller validation."""

from enum import Enum


class ErrorClassification(str, Enum):
    NOT_FOUND = "NotFound"
    BAD_REQUEST = "BadRequest"
    UNAUTHORIZED = "Unauthorized"
    TRANSIENT = "Transient"
    UNKNOWN = "Unknown"


TRANSIENT_STATUSES = {408, 425, 429}

NOT_FOUND_CAUSES = (
    "1. Invalid city code - Make sure to use valid IATA 3-letter city codes "
    "(e.g., 'PAR' for Paris, 'NYC' for New York)",
    "2. No hotels found with the specified criteria",
    "3. API endpoint may have changed - Please check Amadeus API documentation",
)

BAD_REQUEST_CAUSES = (
    "1. Invalid parameters - Check the format of all parameters",
    "2. Missing required parameters",
    "3. Invalid date format - Use YYYY-MM-DD format",
)


def classify_status(status_code: int) -> ErrorClassification:
    """Map an upstream HTTP status to an error classification."""
    if status_code == 404:
        return ErrorClassification.NOT_FOUND
    if status_code == 400:
        return ErrorClassification.BAD_REQUEST
    if status_code in (401, 403):
        return ErrorClassification.UNAUTHORIZED
    if status_code in TRANSIENT_STATUSES or status_code >= 500:
        return ErrorClassification.TRANSIENT
    return ErrorClassification.UNKNOWN


class HotelBridgeError(Exception):
    """Base class for every error raised by the hotel services."""


class AuthFailure(HotelBridgeError):
    """The client-credentials exchange could not complete."""


class UpstreamError(HotelBridgeError):
    """A call through the gateway failed."""

    def __init__(
        self,
        classification: ErrorClassification,
        detail: str,
        status_code: int | None = None,
        reason_phrase: str = "",
    ):
        self.classification = classification
        self.detail = detail
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if self.status_code is None:
            return f"Amadeus API error ({self.classification.value}): {self.detail}"

        head = f"Amadeus API error: {self.status_code} {self.reason_phrase}".rstrip()
        message = f"{head}\n{self.detail}"
        causes = {
            ErrorClassification.NOT_FOUND: NOT_FOUND_CAUSES,
            ErrorClassification.BAD_REQUEST: BAD_REQUEST_CAUSES,
        }.get(self.classification)
        if causes:
            message += "\n\nThis could be due to:\n" + "\n".join(causes)
        return message

    @property
    def is_transient(self) -> bool:
        return self.classification == ErrorClassification.TRANSIENT


class NoInventory(HotelBridgeError):
    """A city code returned zero usable hotels."""

    def __init__(self, city_code: str, message: str | None = None):
        self.city_code = city_code
        super().__init__(message or f"No hotels found in city: {city_code}")


class ValidationFailure(HotelBridgeError):
    """Caller-supplied parameters are missing or malformed.

    ``errors`` holds ``(field, message)`` pairs in the order they were found.
    """

    def __init__(self, errors: list[tuple[str, str]], message: str | None = None):
        self.errors = errors
        if message is None:
            fields = ", ".join(f"'{field}' ({msg})" for field, msg in errors)
            message = (
                f"Missing or invalid parameters: {fields}. "
                "Please provide all required fields in the correct format."
            )
        super().__init__(message)
