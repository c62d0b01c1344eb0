from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    SHIPROCKET_TOKEN: str = ""
    SHIPROCKET_API_URL: str = "https://apiv2.shiprocket.in"
    SHIPROCKET_PICKUP_LOCATION: str = "Primary"
    SHIPROCKET_TIMEOUT: float = 10.0

    ORDER_COMMENT: str = "Order from Janata Books Point"
    ORDER_COUNTRY: str = "India"

    IP_LOOKUP_URL: str = "https://api.ipify.org?format=json"
    IP_LOOKUP_TIMEOUT: float = 5.0

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    class Config:
        env_file = ".env"

@lru_cache
def get_settings() -> Settings:
    """Build the settings once per process"""
    return Settings()
