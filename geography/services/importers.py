"""CSV import passes for countries, regions, airports, runways and frequencies.

Each pass reads one CSV source row by row. A row is validated, its parent
entity resolved by natural code and the result upserted: a record that already
exists under the same code is overwritten in place, anything else is added.
A row that fails is logged and skipped; the pass only stops when the source
itself cannot be read.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, ClassVar, Iterable, Sequence, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from geography.core.errors import ResolutionError, SourceError, ValidationError
from geography.db.models import Airport, Country, Frequency, Region, Runway, RunwaySide
from geography.services import validators


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class RowFailure:
    row_number: int
    column: str | None
    value: str | None
    message: str


@dataclass(slots=True)
class ImportResult:
    entity: str
    imported: int = 0
    skipped: int = 0
    failures: list[RowFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def replace_fields(target: Any, values: dict[str, Any]) -> None:
    """Overwrite every content field of ``target``; fields missing from ``values`` are cleared."""
    for name in type(target).content_fields:
        setattr(target, name, values.get(name))


def upsert_nested(
    items: list[T],
    values: dict[str, Any],
    key: str,
    factory: Callable[..., T],
) -> bool:
    """Replace the entry of ``items`` whose ``key`` matches ``values[key]``, else append one.

    Returns True when an existing entry was replaced.
    """
    for existing in items:
        if getattr(existing, key) == values[key]:
            replace_fields(existing, values)
            return True
    items.append(factory(**values))
    return False


class CsvImporter:
    """Drives one import pass; subclasses implement ``import_row``."""

    entity: ClassVar[str] = ""

    def __init__(self, db: Session) -> None:
        self.db = db

    def import_file(self, path: str | Path) -> ImportResult:
        path = Path(path)
        try:
            handle = path.open("r", encoding="utf-8-sig", newline="")
        except OSError as exc:
            raise SourceError(f"{self.entity}: cannot open {path}: {exc}") from exc

        with handle:
            reader = csv.reader(handle)
            try:
                next(reader)
            except StopIteration:
                raise SourceError(f"{self.entity}: {path} has no header line") from None
            except csv.Error as exc:
                raise SourceError(f"{self.entity}: cannot read header of {path}: {exc}") from exc
            return self.import_rows(reader)

    def import_rows(self, rows: Iterable[Sequence[str]], first_row_number: int = 2) -> ImportResult:
        """Import header-less rows; row numbers count file lines, so the header is line 1."""
        result = ImportResult(entity=self.entity)
        logger.info("%s: Start Import", self.entity)
        row_number = first_row_number - 1
        try:
            for row_number, row in enumerate(rows, start=first_row_number):
                self._import_one(row, row_number, result)
        except csv.Error as exc:
            raise SourceError(f"{self.entity}[{row_number + 1}]: unreadable row: {exc}") from exc
        logger.info(
            "%s: End Import (%s imported, %s skipped, %s failed)",
            self.entity,
            result.imported,
            result.skipped,
            len(result.failures),
        )
        return result

    def import_row(self, row: Sequence[str]) -> None:
        raise NotImplementedError

    def _import_one(self, row: Sequence[str], row_number: int, result: ImportResult) -> None:
        if not any(cell.strip() for cell in row):
            result.skipped += 1
            return

        try:
            self.import_row(row)
            self.db.commit()
        except (ValidationError, ResolutionError) as exc:
            self.db.rollback()
            failure = RowFailure(row_number, exc.column, exc.value, exc.message)
        except SQLAlchemyError as exc:
            self.db.rollback()
            failure = RowFailure(row_number, None, None, f"database error: {exc}")
        else:
            result.imported += 1
            return

        result.failures.append(failure)
        logger.warning(
            "%s[%d].%s(%r): %s",
            self.entity,
            failure.row_number,
            failure.column or "row",
            failure.value,
            failure.message,
        )

    # ------------------------------------------------------------------ #
    # Column helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def _raw(row: Sequence[str], index: int) -> str:
        return row[index] if index < len(row) else ""

    def _text(self, row: Sequence[str], index: int) -> str | None:
        value = self._raw(row, index).strip()
        return value or None

    def _field(self, row: Sequence[str], index: int, column: str, validator: Callable[..., T], **kwargs: Any) -> T:
        try:
            return validator(self._raw(row, index), **kwargs)
        except ValidationError as exc:
            exc.column = column
            raise

    def _optional(self, row: Sequence[str], index: int, column: str, validator: Callable[..., T]) -> T | None:
        """Validate a field that may be blank; a blank field is absent, not zero."""
        if not self._raw(row, index).strip():
            return None
        return self._field(row, index, column, validator)

    # ------------------------------------------------------------------ #
    # Parent lookups
    # ------------------------------------------------------------------ #
    def _country(self, row: Sequence[str], index: int, column: str) -> Country:
        code = self._field(row, index, column, validators.iso_country_code)
        country = self.db.scalar(select(Country).where(Country.code == code))
        if country is None:
            raise ResolutionError("Country", code, column)
        return country

    def _airport(self, row: Sequence[str], index: int, column: str) -> Airport:
        code = self._field(row, index, column, validators.icao_airport_code)
        airport = self.db.scalar(select(Airport).where(Airport.code == code))
        if airport is None:
            raise ResolutionError("Airport", code, column)
        return airport


class CountryImporter(CsvImporter):
    """countries.csv: id, code, name, continent, wikipedia_link, ..."""

    entity = "countries"

    def import_row(self, row: Sequence[str]) -> None:
        values = {
            "code": self._field(row, 1, "code", validators.iso_country_code),
            "name": self._text(row, 2),
            "continent": self._text(row, 3),
            "wikipedia": self._text(row, 4),
        }
        country = self.db.scalar(select(Country).where(Country.code == values["code"]))
        if country is None:
            self.db.add(Country(**values))
        else:
            # regions are owned by the regions pass and stay untouched
            replace_fields(country, values)


class RegionImporter(CsvImporter):
    """regions.csv: id, code, local_code, name, continent, iso_country, wikipedia_link, ..."""

    entity = "regions"

    def import_row(self, row: Sequence[str]) -> None:
        code = self._field(row, 1, "code", validators.iso_region_code)
        country = self._country(row, 5, "iso_country")
        values = {
            "code": code,
            "name": self._text(row, 3),
            "wikipedia": self._text(row, 6),
        }

        # region codes are globally unique; a region listed under another
        # country moves to the one this row names
        current = self.db.scalar(select(Region).where(Region.code == code))
        if current is not None and current.country is not country:
            logger.info("regions: moving %s from %s to %s", code, current.country.code, country.code)
            current.country.regions.remove(current)
            country.regions.append(current)

        upsert_nested(country.regions, values, "code", Region)


class AirportImporter(CsvImporter):
    """airports.csv: id, ident, type, name, latitude_deg, longitude_deg, elevation_ft,
    continent, iso_country, iso_region, municipality, scheduled_service, gps_code,
    iata_code, local_code, home_link, wikipedia_link, keywords"""

    entity = "airports"

    def import_row(self, row: Sequence[str]) -> None:
        code = self._field(row, 1, "ident", validators.icao_airport_code)
        iata = self._field(row, 13, "iata_code", validators.iata_airport_code, empty=True)
        country = self._country(row, 8, "iso_country")
        region = self._region(row, 9, "iso_region", country)

        values = {
            "code": code,
            "type": self._text(row, 2),
            "name": self._text(row, 3),
            "latitude": self._field(row, 4, "latitude_deg", validators.latitude),
            "longitude": self._field(row, 5, "longitude_deg", validators.longitude),
            "elevation": self._optional(row, 6, "elevation_ft", validators.elevation),
            "country": country,
            "region": region,
            "municipality": self._text(row, 10),
            "iata_code": iata or None,
            "website": self._text(row, 15),
            "wikipedia": self._text(row, 16),
        }

        airport = self.db.scalar(select(Airport).where(Airport.code == code))
        if airport is None:
            self.db.add(Airport(**values))
        else:
            # runways and frequencies are owned by their own passes
            replace_fields(airport, values)

    def _region(self, row: Sequence[str], index: int, column: str, country: Country) -> Region:
        key = self._raw(row, index)
        parts = key.split("-")
        if len(parts) != 2:
            raise ValidationError("Region Key", key, column)
        code = self._field(row, index, column, validators.iso_region_code)
        if parts[0].strip().upper() != country.code:
            raise ResolutionError("Region", code, column)

        for region in country.regions:
            if region.code == code:
                return region
        raise ResolutionError("Region", code, column)


class RunwayImporter(CsvImporter):
    """runways.csv: id, airport_ref, airport_ident, length_ft, width_ft, surface, lighted,
    closed, le_ident, le_latitude_deg, le_longitude_deg, le_elevation_ft, le_heading_degT,
    le_displaced_threshold_ft, he_ident, he_... (same five columns)"""

    entity = "runways"

    def import_row(self, row: Sequence[str]) -> None:
        airport = self._airport(row, 2, "airport_ident")

        values: dict[str, Any] = {
            "length": self._field(row, 3, "length_ft", validators.runway_length),
            "width": self._optional(row, 4, "width_ft", validators.runway_width),
            "surface": self._text(row, 5),
            "lighted": self._field(row, 6, "lighted", validators.runway_lighted, empty=True),
            "closed": self._field(row, 7, "closed", validators.runway_closed, empty=True),
        }

        low_end = self._side(row, 8, "le")
        values.update(_side_columns("le", low_end))

        high_end = None
        if self._raw(row, 14).strip():
            high_end = self._side(row, 14, "he")
            # single-threshold runways (heliports) repeat the low-end code
            if high_end.code == low_end.code:
                high_end = None
        values.update(_side_columns("he", high_end))

        upsert_nested(airport.runways, values, "le_code", Runway)

    def _side(self, row: Sequence[str], index: int, prefix: str) -> RunwaySide:
        return RunwaySide(
            code=self._field(row, index, f"{prefix}_ident", validators.runway_code),
            latitude=self._optional(row, index + 1, f"{prefix}_latitude_deg", validators.latitude),
            longitude=self._optional(row, index + 2, f"{prefix}_longitude_deg", validators.longitude),
            elevation=self._optional(row, index + 3, f"{prefix}_elevation_ft", validators.elevation),
            heading=self._optional(row, index + 4, f"{prefix}_heading_degT", validators.runway_heading),
            threshold=self._optional(
                row, index + 5, f"{prefix}_displaced_threshold_ft", validators.runway_threshold
            ),
        )


def _side_columns(prefix: str, side: RunwaySide | None) -> dict[str, Any]:
    if side is None:
        return {}
    return {
        f"{prefix}_code": side.code,
        f"{prefix}_latitude": side.latitude,
        f"{prefix}_longitude": side.longitude,
        f"{prefix}_elevation": side.elevation,
        f"{prefix}_heading": side.heading,
        f"{prefix}_threshold": side.threshold,
    }


class FrequencyImporter(CsvImporter):
    """airport-frequencies.csv: id, airport_ref, airport_ident, type, description, frequency_mhz"""

    entity = "frequencies"

    def import_row(self, row: Sequence[str]) -> None:
        airport = self._airport(row, 2, "airport_ident")
        values = {
            "type": self._raw(row, 3).strip(),
            "description": self._text(row, 4),
            "mhz": self._field(row, 5, "frequency_mhz", validators.frequency),
        }
        upsert_nested(airport.frequencies, values, "type", Frequency)


IMPORTERS: dict[str, type[CsvImporter]] = {
    CountryImporter.entity: CountryImporter,
    RegionImporter.entity: RegionImporter,
    AirportImporter.entity: AirportImporter,
    RunwayImporter.entity: RunwayImporter,
    FrequencyImporter.entity: FrequencyImporter,
}


__all__ = [
    "AirportImporter",
    "CountryImporter",
    "CsvImporter",
    "FrequencyImporter",
    "IMPORTERS",
    "ImportResult",
    "RegionImporter",
    "RowFailure",
    "RunwayImporter",
    "replace_fields",
    "upsert_nested",
]
