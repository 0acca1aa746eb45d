"""Pydantic models for location resolution"""

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """Geographic coordinates (ranges are validated by the provider, not here)"""

    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")


class Elevation(BaseModel):
    """Elevation of a point in meters above sea level (MASL)"""

    meters: float = Field(..., description="Elevation in meters above sea level")
    resolution: float | None = Field(
        None, description="Max distance in meters between the points the elevation was interpolated from"
    )


class LocationFix(BaseModel):
    """Coordinates plus elevation for a resolved place"""

    place: str
    coordinates: Coordinates
    elevation: Elevation
