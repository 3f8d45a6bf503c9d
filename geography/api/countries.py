from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from geography.db.session import get_db
from geography.schemas.geography import (
    CountryItem,
    CountryListResponse,
    RegionItem,
    RegionListResponse,
)
from geography.services.directory import CountryDirectoryService


router = APIRouter(prefix="/countries", tags=["countries"])


@router.get("", response_model=CountryListResponse)
def list_countries(
    from_code: str | None = Query(None, alias="from", description="ISO country code lower bound (inclusive)"),
    until_code: str | None = Query(None, alias="until", description="ISO country code upper bound (inclusive)"),
    db: Session = Depends(get_db),
) -> CountryListResponse:
    service = CountryDirectoryService(db)
    items = service.list(from_code=from_code, until_code=until_code)
    return CountryListResponse(items=[CountryItem.model_validate(item) for item in items])


@router.get("/{country_code}", response_model=CountryItem)
def get_country(country_code: str, db: Session = Depends(get_db)) -> CountryItem:
    service = CountryDirectoryService(db)
    return CountryItem.model_validate(service.get(country_code))


@router.get("/{country_code}/regions", response_model=RegionListResponse)
def list_country_regions(
    country_code: str,
    from_code: str | None = Query(None, alias="from", description="Region code lower bound"),
    until_code: str | None = Query(None, alias="until", description="Region code upper bound"),
    db: Session = Depends(get_db),
) -> RegionListResponse:
    service = CountryDirectoryService(db)
    items = service.regions(country_code, from_code=from_code, until_code=until_code)
    return RegionListResponse(items=[RegionItem.model_validate(item) for item in items])
