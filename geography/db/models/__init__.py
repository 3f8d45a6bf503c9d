from geography.db.models.airport import Airport, Frequency, Runway, RunwaySide
from geography.db.models.country import Country, Region
from geography.db.base import Base

__all__ = [
    "Base",
    "Country",
    "Region",
    "Airport",
    "Runway",
    "RunwaySide",
    "Frequency",
]
