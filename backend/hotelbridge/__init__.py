"""HotelBridge — hotel search, offer lookup and booking over Amadeus."""

__version__ = "0.1.0"
