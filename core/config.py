import os
from dotenv import load_dotenv

# Load .env file
load_dotenv()

class Settings:
    # Google Maps API
    GOOGLE_MAPS_API_KEY: str = os.getenv("GOOGLE_MAPS_API_KEY", "")
    GOOGLE_MAPS_TIMEOUT: float = float(os.getenv("GOOGLE_MAPS_TIMEOUT", "10"))

    # Endpoints (overridable for staging proxies)
    GOOGLE_GEOCODE_URL: str = os.getenv(
        "GOOGLE_GEOCODE_URL",
        "https://maps.googleapis.com/maps/api/geocode/json"
    )
    GOOGLE_ELEVATION_URL: str = os.getenv(
        "GOOGLE_ELEVATION_URL",
        "https://maps.googleapis.com/maps/api/elevation/json"
    )

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

settings = Settings()
