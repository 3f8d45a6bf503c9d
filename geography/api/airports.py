from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from geography.db.session import get_db
from geography.schemas.geography import (
    AirportItem,
    AirportListResponse,
    FrequencyItem,
    FrequencyListResponse,
    RunwayViewItem,
    RunwayViewListResponse,
)
from geography.services.directory import AirportDirectoryService, RunwayFilter


router = APIRouter(tags=["airports"])


@router.get("/airports", response_model=AirportListResponse)
def list_airports(
    country: str | None = Query(None, description="ISO country code"),
    region: str | None = Query(None, description="ISO region code, e.g. NL-NH"),
    from_code: str | None = Query(None, alias="from", description="ICAO code lower bound"),
    until_code: str | None = Query(None, alias="until", description="ICAO code upper bound"),
    from_iata: str | None = Query(None, alias="from-iata", description="IATA code lower bound"),
    until_iata: str | None = Query(None, alias="until-iata", description="IATA code upper bound"),
    db: Session = Depends(get_db),
) -> AirportListResponse:
    service = AirportDirectoryService(db)
    items = service.list(
        country_code=country,
        region_code=region,
        from_code=from_code,
        until_code=until_code,
        from_iata=from_iata,
        until_iata=until_iata,
    )
    return AirportListResponse(items=[AirportItem.model_validate(item) for item in items])


@router.get("/airports/{airport_code}", response_model=AirportItem)
def get_airport(airport_code: str, db: Session = Depends(get_db)) -> AirportItem:
    service = AirportDirectoryService(db)
    return AirportItem.model_validate(service.get(airport_code))


@router.get("/iata/{iata_code}", response_model=AirportItem)
def get_airport_by_iata(iata_code: str, db: Session = Depends(get_db)) -> AirportItem:
    service = AirportDirectoryService(db)
    return AirportItem.model_validate(service.get_by_iata(iata_code))


@router.get("/airports/{airport_code}/runways", response_model=RunwayViewListResponse)
def list_runways(
    airport_code: str,
    from_code: str | None = Query(None, alias="from", description="Runway code lower bound"),
    until_code: str | None = Query(None, alias="until", description="Runway code upper bound"),
    from_heading: str | None = Query(None, alias="from-heading", description="Minimum heading (deg)"),
    until_heading: str | None = Query(None, alias="until-heading", description="Maximum heading (deg)"),
    from_length: str | None = Query(None, alias="from-length", description="Minimum length (ft)"),
    until_length: str | None = Query(None, alias="until-length", description="Maximum length (ft)"),
    closed: str | None = Query(None, description="1 for closed runways only, 0 for open ones"),
    db: Session = Depends(get_db),
) -> RunwayViewListResponse:
    service = AirportDirectoryService(db)
    runway_filter = RunwayFilter(
        from_code=from_code,
        until_code=until_code,
        from_heading=from_heading,
        until_heading=until_heading,
        from_length=from_length,
        until_length=until_length,
        closed=closed,
    )
    items = service.runways(airport_code, runway_filter)
    return RunwayViewListResponse(items=[RunwayViewItem.model_validate(item) for item in items])


@router.get("/airports/{airport_code}/runways/{runway_code}", response_model=RunwayViewItem)
def get_runway(airport_code: str, runway_code: str, db: Session = Depends(get_db)) -> RunwayViewItem:
    service = AirportDirectoryService(db)
    return RunwayViewItem.model_validate(service.runway(airport_code, runway_code))


@router.get("/airports/{airport_code}/frequencies", response_model=FrequencyListResponse)
def list_frequencies(
    airport_code: str,
    from_type: str | None = Query(None, alias="from", description="Frequency type lower bound"),
    until_type: str | None = Query(None, alias="until", description="Frequency type upper bound"),
    db: Session = Depends(get_db),
) -> FrequencyListResponse:
    service = AirportDirectoryService(db)
    items = service.frequencies(airport_code, from_type=from_type, until_type=until_type)
    return FrequencyListResponse(items=[FrequencyItem.model_validate(item) for item in items])


@router.get("/airports/{airport_code}/frequencies/{frequency_type}", response_model=FrequencyItem)
def get_frequency(airport_code: str, frequency_type: str, db: Session = Depends(get_db)) -> FrequencyItem:
    service = AirportDirectoryService(db)
    return FrequencyItem.model_validate(service.frequency(airport_code, frequency_type))
