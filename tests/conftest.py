from __future__ import annotations

import csv
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from geography.db.models import Base
from geography.services.importers import (
    AirportImporter,
    CountryImporter,
    FrequencyImporter,
    RegionImporter,
    RunwayImporter,
)


COUNTRY_HEADER = ["id", "code", "name", "continent", "wikipedia_link", "keywords"]
COUNTRY_ROWS = [
    ["302672", "BE", "Belgium", "EU", "https://en.wikipedia.org/wiki/Belgium", ""],
    ["302721", "NL", "Netherlands", "EU", "https://en.wikipedia.org/wiki/Netherlands", "Holland"],
    ["302755", "US", "United States", "NA", "https://en.wikipedia.org/wiki/United_States", "America"],
]

REGION_HEADER = ["id", "code", "local_code", "name", "continent", "iso_country", "wikipedia_link", "keywords"]
REGION_ROWS = [
    ["303001", "BE-VAN", "VAN", "Antwerpen", "EU", "BE", "https://en.wikipedia.org/wiki/Antwerp_Province", ""],
    ["303002", "NL-NH", "NH", "Noord-Holland", "EU", "NL", "https://en.wikipedia.org/wiki/North_Holland", ""],
    ["303003", "NL-ZH", "ZH", "Zuid-Holland", "EU", "NL", "https://en.wikipedia.org/wiki/South_Holland", ""],
]

AIRPORT_HEADER = [
    "id", "ident", "type", "name", "latitude_deg", "longitude_deg", "elevation_ft",
    "continent", "iso_country", "iso_region", "municipality", "scheduled_service",
    "gps_code", "iata_code", "local_code", "home_link", "wikipedia_link", "keywords",
]
AIRPORT_ROWS = [
    [
        "2513", "EHAM", "large_airport", "Amsterdam Airport Schiphol", "52.308601", "4.76389", "-11",
        "EU", "NL", "NL-NH", "Amsterdam", "yes", "EHAM", "AMS", "", "https://www.schiphol.nl/",
        "https://en.wikipedia.org/wiki/Amsterdam_Airport_Schiphol", "",
    ],
    [
        "2522", "EHRD", "medium_airport", "Rotterdam The Hague Airport", "51.956902", "4.43722", "-15",
        "EU", "NL", "NL-ZH", "Rotterdam", "yes", "EHRD", "RTM", "", "", "", "",
    ],
    [
        "2440", "EBAW", "medium_airport", "Antwerp International Airport", "51.1894", "4.46028", "39",
        "EU", "BE", "BE-VAN", "Antwerpen", "yes", "EBAW", "ANR", "", "", "", "",
    ],
]

RUNWAY_HEADER = [
    "id", "airport_ref", "airport_ident", "length_ft", "width_ft", "surface", "lighted", "closed",
    "le_ident", "le_latitude_deg", "le_longitude_deg", "le_elevation_ft", "le_heading_degT",
    "le_displaced_threshold_ft", "he_ident", "he_latitude_deg", "he_longitude_deg",
    "he_elevation_ft", "he_heading_degT", "he_displaced_threshold_ft",
]
RUNWAY_ROWS = [
    ["1001", "2513", "EHAM", "12467", "197", "ASP", "1", "0", "18R", "52.3626", "4.7119", "-12", "183", "",
     "36L", "52.3287", "4.7089", "-12", "3", "1083"],
    ["1002", "2513", "EHAM", "6608", "148", "ASP", "1", "0", "04", "52.3003", "4.7834", "-12", "41", "",
     "22", "52.3139", "4.8029", "-11", "221", ""],
    ["1003", "2513", "EHAM", "100", "100", "CON", "0", "1", "H1", "52.3050", "4.7600", "-11", "", "",
     "H1", "", "", "", "", ""],
    ["1004", "2522", "EHRD", "7218", "148", "ASP", "1", "0", "06", "51.9511", "4.4247", "-14", "57", "",
     "24", "51.9617", "4.4498", "-15", "237", ""],
]

FREQUENCY_HEADER = ["id", "airport_ref", "airport_ident", "type", "description", "frequency_mhz"]
FREQUENCY_ROWS = [
    ["60001", "2513", "EHAM", "TWR", "Schiphol Tower", "118.1"],
    ["60002", "2513", "EHAM", "ATIS", "Schiphol Arrival ATIS", "132.975"],
    ["60003", "2522", "EHRD", "TWR", "Rotterdam Tower", "118.2"],
]

SOURCES = {
    "countries": ("countries.csv", COUNTRY_HEADER, COUNTRY_ROWS),
    "regions": ("regions.csv", REGION_HEADER, REGION_ROWS),
    "airports": ("airports.csv", AIRPORT_HEADER, AIRPORT_ROWS),
    "runways": ("runways.csv", RUNWAY_HEADER, RUNWAY_ROWS),
    "frequencies": ("airport-frequencies.csv", FREQUENCY_HEADER, FREQUENCY_ROWS),
}


def write_csv(path: Path, header: list[str], rows: list[list[str]]) -> Path:
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(header)
        writer.writerows(rows)
    return path


def seed_directory(session: Session) -> None:
    CountryImporter(session).import_rows(COUNTRY_ROWS)
    RegionImporter(session).import_rows(REGION_ROWS)
    AirportImporter(session).import_rows(AIRPORT_ROWS)
    RunwayImporter(session).import_rows(RUNWAY_ROWS)
    FrequencyImporter(session).import_rows(FREQUENCY_ROWS)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, future=True)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def seeded_session(db_session: Session) -> Session:
    seed_directory(db_session)
    return db_session


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    for filename, header, rows in SOURCES.values():
        write_csv(tmp_path / filename, header, rows)
    return tmp_path
