import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hotelbridge import __version__
from hotelbridge.config import settings
from hotelbridge.logging_setup import configure_logging
from hotelbridge.routers import hotels
from hotelbridge.services.gateway import gateway
from hotelbridge.services.token_manager import token_manager

configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup — credentials are required before serving anything
    if not settings.has_credentials:
        raise RuntimeError(
            "AMADEUS_API_KEY and AMADEUS_API_SECRET environment variables are required"
        )
    logger.info("HotelBridge API starting")

    yield

    # Shutdown
    await gateway.aclose()
    await token_manager.aclose()
    logger.info("Amadeus HTTP clients closed")


app = FastAPI(
    title="HotelBridge",
    description="Hotel search, offer lookup and booking over Amadeus",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(hotels.router, prefix="/api/hotels", tags=["hotels"])


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "hotelbridge"}
