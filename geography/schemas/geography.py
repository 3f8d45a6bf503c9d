from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CountryItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str = Field(..., min_length=2, max_length=2)
    name: str | None = None
    continent: str | None = None
    wikipedia: str | None = None


class CountryListResponse(BaseModel):
    items: list[CountryItem]


class RegionItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    name: str | None = None
    wikipedia: str | None = None
    country_code: str = Field(..., min_length=2, max_length=2)


class RegionListResponse(BaseModel):
    items: list[RegionItem]


class RunwaySideItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    latitude: float | None = None
    longitude: float | None = None
    elevation: int | None = None
    heading: int | None = None
    threshold: int | None = None


class RunwayItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    length: int
    width: int | None = None
    surface: str | None = None
    lighted: bool = False
    closed: bool = False
    low_end: RunwaySideItem
    high_end: RunwaySideItem | None = None


class FrequencyItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: str
    description: str | None = None
    mhz: float


class AirportItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str = Field(..., min_length=2, max_length=4)
    name: str | None = None
    type: str | None = None
    latitude: float
    longitude: float
    elevation: int | None = None
    country_code: str = Field(..., min_length=2, max_length=2)
    region_code: str
    municipality: str | None = None
    iata_code: str | None = Field(default=None, min_length=3, max_length=3)
    website: str | None = None
    wikipedia: str | None = None
    runways: list[RunwayItem] = Field(default_factory=list)
    frequencies: list[FrequencyItem] = Field(default_factory=list)


class AirportListResponse(BaseModel):
    items: list[AirportItem]


class RunwayViewItem(BaseModel):
    """A single runway end; ``alt_runway_code`` names the opposite end."""

    model_config = ConfigDict(from_attributes=True)

    airport_code: str
    runway_code: str
    alt_runway_code: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    elevation: int | None = None
    heading: int | None = None
    threshold: int | None = None
    length: int
    width: int | None = None
    surface: str | None = None
    lighted: bool = False
    closed: bool = False


class RunwayViewListResponse(BaseModel):
    items: list[RunwayViewItem]


class FrequencyListResponse(BaseModel):
    items: list[FrequencyItem]


class ErrorResponse(BaseModel):
    detail: str
    message: str
