from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from geography.core.config import settings
from geography.core.errors import NotFoundError, TooManyResultsError, ValidationError
from geography.db.models import Airport, Country, Frequency, Region, Runway, RunwaySide
from geography.services import validators


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RunwayView:
    """One physical runway end together with the attributes shared by both ends."""

    airport_code: str
    runway_code: str
    alt_runway_code: str | None
    latitude: float | None
    longitude: float | None
    elevation: int | None
    heading: int | None
    threshold: int | None
    length: int
    width: int | None
    surface: str | None
    lighted: bool
    closed: bool

    @classmethod
    def from_side(
        cls,
        airport_code: str,
        runway: Runway,
        side: RunwaySide,
        other: RunwaySide | None,
    ) -> "RunwayView":
        return cls(
            airport_code=airport_code,
            runway_code=side.code,
            alt_runway_code=other.code if other else None,
            latitude=side.latitude,
            longitude=side.longitude,
            elevation=side.elevation,
            heading=side.heading,
            threshold=side.threshold,
            length=runway.length,
            width=runway.width,
            surface=runway.surface,
            lighted=runway.lighted,
            closed=runway.closed,
        )


@dataclass(slots=True)
class RunwayFilter:
    """Raw runway filter values as received from a caller; blank means unbounded."""

    from_code: str | None = None
    until_code: str | None = None
    from_heading: str | None = None
    until_heading: str | None = None
    from_length: str | None = None
    until_length: str | None = None
    closed: str | None = None


def runway_views(airport: Airport) -> list[RunwayView]:
    views: list[RunwayView] = []
    for runway in airport.runways:
        low_end = runway.low_end
        high_end = runway.high_end
        views.append(RunwayView.from_side(airport.code, runway, low_end, high_end))
        if high_end is not None:
            views.append(RunwayView.from_side(airport.code, runway, high_end, low_end))
    return views


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _code_range(column, from_code: str | None, until_code: str | None, validator: Callable[..., str]) -> list:
    clauses = []
    lower = validator(from_code, partial=True, empty=True)
    upper = validator(until_code, partial=True, empty=True)
    if lower:
        clauses.append(column >= lower)
    if upper:
        clauses.append(column <= upper)
    return clauses


def _number_bound(value: str | None, validator: Callable[..., int]) -> int | None:
    if _blank(value):
        return None
    return validator(value, empty=True)


class _DirectoryService:
    def __init__(self, db: Session, max_results: int | None = None) -> None:
        self.db = db
        self.max_results = settings.max_results if max_results is None else max_results

    def _scan(self, stmt: Select) -> list:
        """Run a range query; more rows than the ceiling or none at all is an error."""
        rows = list(self.db.scalars(stmt.limit(self.max_results + 1)))
        if len(rows) > self.max_results:
            logger.info("Range query exceeded %s results", self.max_results)
            raise TooManyResultsError(self.max_results)
        if not rows:
            raise NotFoundError()
        return rows


class CountryDirectoryService(_DirectoryService):
    def get(self, code: str) -> Country:
        code = validators.iso_country_code(code)
        country = self.db.scalar(select(Country).where(Country.code == code))
        if country is None:
            raise NotFoundError(f"Country {code} not found")
        return country

    def list(self, from_code: str | None = None, until_code: str | None = None) -> list[Country]:
        stmt = (
            select(Country)
            .where(*_code_range(Country.code, from_code, until_code, validators.iso_country_code))
            .order_by(Country.code)
        )
        return self._scan(stmt)

    def regions(
        self,
        code: str,
        from_code: str | None = None,
        until_code: str | None = None,
    ) -> list[Region]:
        country = self.get(code)
        stmt = (
            select(Region)
            .where(
                Region.country_id == country.country_id,
                *_code_range(Region.code, from_code, until_code, validators.iso_region_code),
            )
            .order_by(Region.code)
        )
        return self._scan(stmt)


class RegionDirectoryService(_DirectoryService):
    def get(self, code: str) -> Region:
        code = validators.iso_region_code(code)
        region = self.db.scalar(select(Region).where(Region.code == code))
        if region is None:
            raise NotFoundError(f"Region {code} not found")
        return region

    def list(
        self,
        country_code: str | None = None,
        from_code: str | None = None,
        until_code: str | None = None,
    ) -> list[Region]:
        stmt = select(Region).join(Region.country)
        country_code = validators.iso_country_code(country_code, empty=True)
        if country_code:
            stmt = stmt.where(Country.code == country_code)
        stmt = stmt.where(
            *_code_range(Region.code, from_code, until_code, validators.iso_region_code)
        ).order_by(Region.code)
        return self._scan(stmt)


class AirportDirectoryService(_DirectoryService):
    def get(self, code: str) -> Airport:
        code = validators.icao_airport_code(code)
        airport = self.db.scalar(select(Airport).where(Airport.code == code))
        if airport is None:
            raise NotFoundError(f"Airport {code} not found")
        return airport

    def get_by_iata(self, iata_code: str) -> Airport:
        """IATA codes are not unique in the source; the lowest ICAO code wins."""
        iata_code = validators.iata_airport_code(iata_code)
        airport = self.db.scalar(
            select(Airport).where(Airport.iata_code == iata_code).order_by(Airport.code).limit(1)
        )
        if airport is None:
            raise NotFoundError(f"Airport with IATA code {iata_code} not found")
        return airport

    def list(
        self,
        country_code: str | None = None,
        region_code: str | None = None,
        from_code: str | None = None,
        until_code: str | None = None,
        from_iata: str | None = None,
        until_iata: str | None = None,
    ) -> list[Airport]:
        stmt = select(Airport)
        country_code = validators.iso_country_code(country_code, empty=True)
        if country_code:
            stmt = stmt.join(Airport.country).where(Country.code == country_code)
        region_code = validators.iso_region_code(region_code, empty=True)
        if region_code:
            stmt = stmt.join(Airport.region).where(Region.code == region_code)
        stmt = stmt.where(
            *_code_range(Airport.code, from_code, until_code, validators.icao_airport_code),
            *_code_range(Airport.iata_code, from_iata, until_iata, validators.iata_airport_code),
        ).order_by(Airport.code)
        return self._scan(stmt)

    def runways(self, code: str, runway_filter: RunwayFilter | None = None) -> list[RunwayView]:
        checks = self._runway_checks(runway_filter or RunwayFilter())
        airport = self.get(code)
        views = [view for view in runway_views(airport) if all(check(view) for check in checks)]
        if not views:
            raise NotFoundError(f"No runways found for {airport.code}")
        return views

    def runway(self, code: str, runway_code: str) -> RunwayView:
        runway_code = validators.runway_code(runway_code)
        airport = self.get(code)
        for view in runway_views(airport):
            if view.runway_code == runway_code:
                return view
        raise NotFoundError(f"Runway {runway_code} not found at {airport.code}")

    def frequencies(
        self,
        code: str,
        from_type: str | None = None,
        until_type: str | None = None,
    ) -> list[Frequency]:
        airport = self.get(code)
        stmt = select(Frequency).where(Frequency.airport_id == airport.airport_id)
        if not _blank(from_type):
            stmt = stmt.where(Frequency.type >= from_type.strip())
        if not _blank(until_type):
            stmt = stmt.where(Frequency.type <= until_type.strip())
        return self._scan(stmt.order_by(Frequency.type))

    def frequency(self, code: str, frequency_type: str) -> Frequency:
        airport = self.get(code)
        frequency_type = (frequency_type or "").strip()
        for frequency in airport.frequencies:
            if frequency.type == frequency_type:
                return frequency
        raise NotFoundError(f"Frequency {frequency_type} not found at {airport.code}")

    def runways_in_range(
        self,
        from_code: str | None = None,
        until_code: str | None = None,
        from_iata: str | None = None,
        until_iata: str | None = None,
        runway_filter: RunwayFilter | None = None,
    ) -> list[RunwayView]:
        """Runway ends of every airport in an ICAO and/or IATA range."""
        checks = self._runway_checks(runway_filter or RunwayFilter())
        views = [
            view
            for airport in self._selection(from_code, until_code, from_iata, until_iata)
            for view in runway_views(airport)
            if all(check(view) for check in checks)
        ]
        if not views:
            raise NotFoundError("No runways found")
        return views

    def frequencies_in_range(
        self,
        from_code: str | None = None,
        until_code: str | None = None,
        from_iata: str | None = None,
        until_iata: str | None = None,
        from_type: str | None = None,
        until_type: str | None = None,
    ) -> list[Frequency]:
        lower = None if _blank(from_type) else from_type.strip()
        upper = None if _blank(until_type) else until_type.strip()
        items = [
            frequency
            for airport in self._selection(from_code, until_code, from_iata, until_iata)
            for frequency in sorted(airport.frequencies, key=lambda item: item.type)
            if (lower is None or frequency.type >= lower) and (upper is None or frequency.type <= upper)
        ]
        if not items:
            raise NotFoundError("No frequencies found")
        return items

    def _selection(
        self,
        from_code: str | None,
        until_code: str | None,
        from_iata: str | None,
        until_iata: str | None,
    ) -> list[Airport]:
        if all(_blank(bound) for bound in (from_code, until_code, from_iata, until_iata)):
            raise ValidationError("Airport Selection")
        return self.list(
            from_code=from_code,
            until_code=until_code,
            from_iata=from_iata,
            until_iata=until_iata,
        )

    @staticmethod
    def _runway_checks(runway_filter: RunwayFilter) -> list[Callable[[RunwayView], bool]]:
        checks: list[Callable[[RunwayView], bool]] = []

        lower = validators.runway_code(runway_filter.from_code, partial=True, empty=True)
        upper = validators.runway_code(runway_filter.until_code, partial=True, empty=True)
        if lower:
            checks.append(lambda view: view.runway_code >= lower)
        if upper:
            checks.append(lambda view: view.runway_code <= upper)

        min_heading = _number_bound(runway_filter.from_heading, validators.runway_heading)
        max_heading = _number_bound(runway_filter.until_heading, validators.runway_heading)
        if min_heading is not None:
            checks.append(lambda view: view.heading is not None and view.heading >= min_heading)
        if max_heading is not None:
            checks.append(lambda view: view.heading is not None and view.heading <= max_heading)

        min_length = _number_bound(runway_filter.from_length, validators.runway_length)
        max_length = _number_bound(runway_filter.until_length, validators.runway_length)
        if min_length is not None:
            checks.append(lambda view: view.length >= min_length)
        if max_length is not None:
            checks.append(lambda view: view.length <= max_length)

        if not _blank(runway_filter.closed):
            closed = validators.runway_closed(runway_filter.closed)
            checks.append(lambda view: view.closed == closed)

        return checks


__all__ = [
    "AirportDirectoryService",
    "CountryDirectoryService",
    "RegionDirectoryService",
    "RunwayFilter",
    "RunwayView",
    "runway_views",
]
