"""GraphQL view of the geography directory.

Every resolver goes through the directory services, so argument validation,
the result ceiling and not-found handling behave exactly as on the REST side.
Domain errors are reported as GraphQL errors carrying the error message.
Nested listings that match nothing resolve to an empty list.
"""

from typing import Callable, Optional

import strawberry
from fastapi import Depends
from sqlalchemy.orm import Session
from strawberry.fastapi import GraphQLRouter

from geography.core.errors import NotFoundError, ValidationError
from geography.db.models import Airport, Country, Frequency, Region
from geography.db.session import get_db
from geography.services.directory import (
    AirportDirectoryService,
    CountryDirectoryService,
    RegionDirectoryService,
    RunwayFilter,
    RunwayView,
)


def _db(info: strawberry.Info) -> Session:
    return info.context["db"]


def _or_empty(lookup: Callable[[], list]) -> list:
    try:
        return lookup()
    except NotFoundError:
        return []


def _flag(value: Optional[bool]) -> Optional[str]:
    if value is None:
        return None
    return "1" if value else "0"


def _number(value: Optional[int]) -> Optional[str]:
    return None if value is None else str(value)


def _runway_filter(
    from_code: Optional[str],
    until_code: Optional[str],
    from_heading: Optional[int],
    until_heading: Optional[int],
    from_length: Optional[int],
    until_length: Optional[int],
    closed: Optional[bool],
) -> RunwayFilter:
    return RunwayFilter(
        from_code=from_code,
        until_code=until_code,
        from_heading=_number(from_heading),
        until_heading=_number(until_heading),
        from_length=_number(from_length),
        until_length=_number(until_length),
        closed=_flag(closed),
    )


@strawberry.type(name="Country")
class CountryNode:
    code: str
    name: Optional[str]
    continent: Optional[str]
    wikipedia: Optional[str]
    model: strawberry.Private[Country]

    @classmethod
    def from_model(cls, model: Country) -> "CountryNode":
        return cls(
            code=model.code,
            name=model.name,
            continent=model.continent,
            wikipedia=model.wikipedia,
            model=model,
        )

    @strawberry.field
    def regions(
        self,
        info: strawberry.Info,
        from_code: Optional[str] = None,
        until_code: Optional[str] = None,
    ) -> list["RegionNode"]:
        service = CountryDirectoryService(_db(info))
        items = _or_empty(lambda: service.regions(self.code, from_code=from_code, until_code=until_code))
        return [RegionNode.from_model(item) for item in items]

    @strawberry.field
    def airports(
        self,
        info: strawberry.Info,
        region: Optional[str] = None,
        from_code: Optional[str] = None,
        until_code: Optional[str] = None,
        from_iata: Optional[str] = None,
        until_iata: Optional[str] = None,
    ) -> list["AirportNode"]:
        service = AirportDirectoryService(_db(info))
        items = _or_empty(
            lambda: service.list(
                country_code=self.code,
                region_code=region,
                from_code=from_code,
                until_code=until_code,
                from_iata=from_iata,
                until_iata=until_iata,
            )
        )
        return [AirportNode.from_model(item) for item in items]


@strawberry.type(name="Region")
class RegionNode:
    code: str
    name: Optional[str]
    wikipedia: Optional[str]
    country_code: str
    model: strawberry.Private[Region]

    @classmethod
    def from_model(cls, model: Region) -> "RegionNode":
        return cls(
            code=model.code,
            name=model.name,
            wikipedia=model.wikipedia,
            country_code=model.country_code,
            model=model,
        )

    @strawberry.field
    def country(self) -> CountryNode:
        return CountryNode.from_model(self.model.country)

    @strawberry.field
    def airports(
        self,
        info: strawberry.Info,
        from_code: Optional[str] = None,
        until_code: Optional[str] = None,
        from_iata: Optional[str] = None,
        until_iata: Optional[str] = None,
    ) -> list["AirportNode"]:
        service = AirportDirectoryService(_db(info))
        items = _or_empty(
            lambda: service.list(
                region_code=self.code,
                from_code=from_code,
                until_code=until_code,
                from_iata=from_iata,
                until_iata=until_iata,
            )
        )
        return [AirportNode.from_model(item) for item in items]


@strawberry.type(name="Airport")
class AirportNode:
    code: str
    name: Optional[str]
    type: Optional[str]
    latitude: float
    longitude: float
    elevation: Optional[int]
    country_code: str
    region_code: str
    municipality: Optional[str]
    iata_code: Optional[str]
    website: Optional[str]
    wikipedia: Optional[str]
    model: strawberry.Private[Airport]

    @classmethod
    def from_model(cls, model: Airport) -> "AirportNode":
        return cls(
            code=model.code,
            name=model.name,
            type=model.type,
            latitude=model.latitude,
            longitude=model.longitude,
            elevation=model.elevation,
            country_code=model.country_code,
            region_code=model.region_code,
            municipality=model.municipality,
            iata_code=model.iata_code,
            website=model.website,
            wikipedia=model.wikipedia,
            model=model,
        )

    @strawberry.field
    def country(self) -> CountryNode:
        return CountryNode.from_model(self.model.country)

    @strawberry.field
    def region(self) -> RegionNode:
        return RegionNode.from_model(self.model.region)

    @strawberry.field
    def runways(
        self,
        info: strawberry.Info,
        from_code: Optional[str] = None,
        until_code: Optional[str] = None,
        from_heading: Optional[int] = None,
        until_heading: Optional[int] = None,
        from_length: Optional[int] = None,
        until_length: Optional[int] = None,
        closed: Optional[bool] = None,
    ) -> list["RunwayNode"]:
        runway_filter = _runway_filter(
            from_code, until_code, from_heading, until_heading, from_length, until_length, closed
        )
        service = AirportDirectoryService(_db(info))
        views = _or_empty(lambda: service.runways(self.code, runway_filter))
        return [RunwayNode.from_view(view) for view in views]

    @strawberry.field
    def frequencies(
        self,
        info: strawberry.Info,
        from_type: Optional[str] = None,
        until_type: Optional[str] = None,
    ) -> list["FrequencyNode"]:
        service = AirportDirectoryService(_db(info))
        items = _or_empty(
            lambda: service.frequencies(self.code, from_type=from_type, until_type=until_type)
        )
        return [FrequencyNode.from_model(item) for item in items]


@strawberry.type(name="Runway")
class RunwayNode:
    airport_code: str
    runway_code: str
    alt_runway_code: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    elevation: Optional[int]
    heading: Optional[int]
    threshold: Optional[int]
    length: int
    width: Optional[int]
    surface: Optional[str]
    lighted: bool
    closed: bool

    @classmethod
    def from_view(cls, view: RunwayView) -> "RunwayNode":
        return cls(
            airport_code=view.airport_code,
            runway_code=view.runway_code,
            alt_runway_code=view.alt_runway_code,
            latitude=view.latitude,
            longitude=view.longitude,
            elevation=view.elevation,
            heading=view.heading,
            threshold=view.threshold,
            length=view.length,
            width=view.width,
            surface=view.surface,
            lighted=view.lighted,
            closed=view.closed,
        )

    @strawberry.field
    def airport(self, info: strawberry.Info) -> AirportNode:
        return AirportNode.from_model(AirportDirectoryService(_db(info)).get(self.airport_code))


@strawberry.type(name="Frequency")
class FrequencyNode:
    type: str
    description: Optional[str]
    mhz: float
    airport_code: str
    model: strawberry.Private[Frequency]

    @classmethod
    def from_model(cls, model: Frequency) -> "FrequencyNode":
        return cls(
            type=model.type,
            description=model.description,
            mhz=model.mhz,
            airport_code=model.airport.code,
            model=model,
        )

    @strawberry.field
    def airport(self) -> AirportNode:
        return AirportNode.from_model(self.model.airport)


@strawberry.type
class Query:
    @strawberry.field
    def country(self, info: strawberry.Info, code: str) -> CountryNode:
        return CountryNode.from_model(CountryDirectoryService(_db(info)).get(code))

    @strawberry.field
    def countries(
        self,
        info: strawberry.Info,
        from_code: Optional[str] = None,
        until_code: Optional[str] = None,
    ) -> list[CountryNode]:
        items = CountryDirectoryService(_db(info)).list(from_code=from_code, until_code=until_code)
        return [CountryNode.from_model(item) for item in items]

    @strawberry.field
    def region(self, info: strawberry.Info, code: str) -> RegionNode:
        return RegionNode.from_model(RegionDirectoryService(_db(info)).get(code))

    @strawberry.field
    def regions(
        self,
        info: strawberry.Info,
        country: Optional[str] = None,
        from_code: Optional[str] = None,
        until_code: Optional[str] = None,
    ) -> list[RegionNode]:
        items = RegionDirectoryService(_db(info)).list(
            country_code=country, from_code=from_code, until_code=until_code
        )
        return [RegionNode.from_model(item) for item in items]

    @strawberry.field
    def airport(
        self,
        info: strawberry.Info,
        icao: Optional[str] = None,
        iata: Optional[str] = None,
    ) -> AirportNode:
        service = AirportDirectoryService(_db(info))
        if icao:
            return AirportNode.from_model(service.get(icao))
        if iata:
            return AirportNode.from_model(service.get_by_iata(iata))
        raise ValidationError("Airport Code")

    @strawberry.field
    def airports(
        self,
        info: strawberry.Info,
        country: Optional[str] = None,
        region: Optional[str] = None,
        from_code: Optional[str] = None,
        until_code: Optional[str] = None,
        from_iata: Optional[str] = None,
        until_iata: Optional[str] = None,
    ) -> list[AirportNode]:
        items = AirportDirectoryService(_db(info)).list(
            country_code=country,
            region_code=region,
            from_code=from_code,
            until_code=until_code,
            from_iata=from_iata,
            until_iata=until_iata,
        )
        return [AirportNode.from_model(item) for item in items]

    @strawberry.field
    def runway(self, info: strawberry.Info, airport: str, code: str) -> RunwayNode:
        return RunwayNode.from_view(AirportDirectoryService(_db(info)).runway(airport, code))

    @strawberry.field
    def runways(
        self,
        info: strawberry.Info,
        icao: Optional[str] = None,
        iata: Optional[str] = None,
        from_icao: Optional[str] = None,
        until_icao: Optional[str] = None,
        from_iata: Optional[str] = None,
        until_iata: Optional[str] = None,
        from_code: Optional[str] = None,
        until_code: Optional[str] = None,
        from_heading: Optional[int] = None,
        until_heading: Optional[int] = None,
        from_length: Optional[int] = None,
        until_length: Optional[int] = None,
        closed: Optional[bool] = None,
    ) -> list[RunwayNode]:
        """Runway ends of one airport (``icao`` or ``iata``) or of an airport range."""
        runway_filter = _runway_filter(
            from_code, until_code, from_heading, until_heading, from_length, until_length, closed
        )
        service = AirportDirectoryService(_db(info))
        if icao or iata:
            code = icao or service.get_by_iata(iata).code
            views = service.runways(code, runway_filter)
        else:
            views = service.runways_in_range(
                from_code=from_icao,
                until_code=until_icao,
                from_iata=from_iata,
                until_iata=until_iata,
                runway_filter=runway_filter,
            )
        return [RunwayNode.from_view(view) for view in views]

    @strawberry.field
    def frequency(self, info: strawberry.Info, airport: str, frequency_type: str) -> FrequencyNode:
        return FrequencyNode.from_model(
            AirportDirectoryService(_db(info)).frequency(airport, frequency_type)
        )

    @strawberry.field
    def frequencies(
        self,
        info: strawberry.Info,
        icao: Optional[str] = None,
        iata: Optional[str] = None,
        from_icao: Optional[str] = None,
        until_icao: Optional[str] = None,
        from_iata: Optional[str] = None,
        until_iata: Optional[str] = None,
        from_type: Optional[str] = None,
        until_type: Optional[str] = None,
    ) -> list[FrequencyNode]:
        service = AirportDirectoryService(_db(info))
        if icao or iata:
            code = icao or service.get_by_iata(iata).code
            items = service.frequencies(code, from_type=from_type, until_type=until_type)
        else:
            items = service.frequencies_in_range(
                from_code=from_icao,
                until_code=until_icao,
                from_iata=from_iata,
                until_iata=until_iata,
                from_type=from_type,
                until_type=until_type,
            )
        return [FrequencyNode.from_model(item) for item in items]


schema = strawberry.Schema(query=Query)


def get_context(db: Session = Depends(get_db)) -> dict:
    return {"db": db}


graphql_router = GraphQLRouter(schema, context_getter=get_context)


__all__ = ["Query", "graphql_router", "schema"]
