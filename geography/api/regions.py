from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from geography.db.session import get_db
from geography.schemas.geography import RegionItem, RegionListResponse
from geography.services.directory import RegionDirectoryService


router = APIRouter(prefix="/regions", tags=["regions"])


@router.get("", response_model=RegionListResponse)
def list_regions(
    country: str | None = Query(None, description="ISO country code"),
    from_code: str | None = Query(None, alias="from", description="Region code lower bound"),
    until_code: str | None = Query(None, alias="until", description="Region code upper bound"),
    db: Session = Depends(get_db),
) -> RegionListResponse:
    service = RegionDirectoryService(db)
    items = service.list(country_code=country, from_code=from_code, until_code=until_code)
    return RegionListResponse(items=[RegionItem.model_validate(item) for item in items])


@router.get("/{region_code}", response_model=RegionItem)
def get_region(region_code: str, db: Session = Depends(get_db)) -> RegionItem:
    service = RegionDirectoryService(db)
    return RegionItem.model_validate(service.get(region_code))
