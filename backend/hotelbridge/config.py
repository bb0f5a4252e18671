from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Amadeus
    amadeus_api_key: str = ""
    amadeus_api_secret: str = ""
    amadeus_base_url: str = "https://test.api.amadeus.com"

    # Upstream calls
    request_timeout_seconds: float = 30.0
    token_safety_margin_seconds: int = 60

    # Hotel discovery
    discovery_max_hotels: int = 5

    # Synthetic fallback
    default_currency: str = "USD"

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.amadeus_api_key and self.amadeus_api_secret)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
