from __future__ import annotations

from sqlalchemy.orm import Session

from geography.core.config import settings
from geography.graphql.schema import schema


def _execute(session: Session, query: str, **variables):
    return schema.execute_sync(query, variable_values=variables or None, context_value={"db": session})


def test_airport_graph(seeded_session: Session):
    result = _execute(
        seeded_session,
        """
        query ($icao: String) {
          airport(icao: $icao) {
            code
            iataCode
            countryCode
            region { code country { name } }
            runways { runwayCode altRunwayCode }
            frequencies { type mhz }
          }
        }
        """,
        icao="eham",
    )

    assert result.errors is None
    airport = result.data["airport"]
    assert airport["code"] == "EHAM"
    assert airport["iataCode"] == "AMS"
    assert airport["region"] == {"code": "NL-NH", "country": {"name": "Netherlands"}}
    assert airport["runways"][0] == {"runwayCode": "18R", "altRunwayCode": "36L"}
    assert airport["frequencies"] == [{"type": "TWR", "mhz": 118.1}, {"type": "ATIS", "mhz": 132.975}]


def test_airport_by_iata_and_back_links(seeded_session: Session):
    result = _execute(
        seeded_session,
        """
        {
          airport(iata: "RTM") { code }
          runway(airport: "EHRD", code: "06") { heading airport { code } }
          frequency(airport: "EHRD", frequencyType: "TWR") { description airport { code } }
        }
        """,
    )

    assert result.errors is None
    assert result.data["airport"] == {"code": "EHRD"}
    assert result.data["runway"] == {"heading": 57, "airport": {"code": "EHRD"}}
    assert result.data["frequency"] == {"description": "Rotterdam Tower", "airport": {"code": "EHRD"}}


def test_list_queries(seeded_session: Session):
    result = _execute(
        seeded_session,
        """
        {
          countries(untilCode: "NL") { code regions { code } }
          regions(country: "NL") { code airports { code } }
          airports(fromIata: "AMS", untilIata: "ANR") { code }
          runways(icao: "EHAM", closed: true) { runwayCode }
          frequencies(iata: "AMS", fromType: "B") { type }
        }
        """,
    )

    assert result.errors is None
    assert result.data["countries"] == [
        {"code": "BE", "regions": [{"code": "BE-VAN"}]},
        {"code": "NL", "regions": [{"code": "NL-NH"}, {"code": "NL-ZH"}]},
    ]
    assert result.data["regions"] == [
        {"code": "NL-NH", "airports": [{"code": "EHAM"}]},
        {"code": "NL-ZH", "airports": [{"code": "EHRD"}]},
    ]
    assert [item["code"] for item in result.data["airports"]] == ["EBAW", "EHAM"]
    assert result.data["runways"] == [{"runwayCode": "H1"}]
    assert result.data["frequencies"] == [{"type": "TWR"}]


def test_country_airports_link(seeded_session: Session):
    result = _execute(seeded_session, '{ country(code: "NL") { airports { code regionCode } } }')

    assert result.errors is None
    assert result.data["country"]["airports"] == [
        {"code": "EHAM", "regionCode": "NL-NH"},
        {"code": "EHRD", "regionCode": "NL-ZH"},
    ]


def test_domain_errors_surface_as_graphql_errors(seeded_session: Session):
    missing = _execute(seeded_session, '{ country(code: "DE") { code } }')
    assert missing.data is None
    assert missing.errors[0].message == "Country DE not found"

    invalid = _execute(seeded_session, '{ airport(icao: "EHAMX") { code } }')
    assert invalid.errors[0].message == "Invalid ICAO Airport Code"

    no_code = _execute(seeded_session, "{ airport { code } }")
    assert no_code.errors[0].message == "Invalid Airport Code"


def test_nested_links_take_range_arguments(seeded_session: Session):
    result = _execute(
        seeded_session,
        """
        {
          country(code: "NL") {
            regions(fromCode: "NL-ZH") { code }
            airports(fromIata: "RTM") { code }
            none: airports(region: "NL-ZH", untilCode: "EHAA") { code }
          }
          region(code: "NL-NH") { airports(untilIata: "AMS") { code } }
          airport(icao: "EHAM") {
            runways(closed: true) { runwayCode }
            allRunways: runways(fromLength: 0) { runwayCode }
            frequencies(untilType: "B") { type }
          }
        }
        """,
    )

    assert result.errors is None
    assert result.data["country"] == {
        "regions": [{"code": "NL-ZH"}],
        "airports": [{"code": "EHRD"}],
        "none": [],
    }
    assert result.data["region"] == {"airports": [{"code": "EHAM"}]}
    airport = result.data["airport"]
    assert airport["runways"] == [{"runwayCode": "H1"}]
    assert len(airport["allRunways"]) == 5
    assert airport["frequencies"] == [{"type": "ATIS"}]


def test_nested_listings_respect_the_result_ceiling(seeded_session: Session, monkeypatch):
    monkeypatch.setattr(settings, "max_results", 1)

    airports = _execute(seeded_session, '{ country(code: "NL") { airports { code } } }')
    assert airports.errors[0].message == "Too many results (more than 1)"

    frequencies = _execute(seeded_session, '{ airport(icao: "EHAM") { frequencies { type } } }')
    assert frequencies.errors[0].message == "Too many results (more than 1)"


def test_runways_and_frequencies_by_airport_range(seeded_session: Session):
    result = _execute(
        seeded_session,
        """
        {
          runways(fromIcao: "EHAM", untilIcao: "EHRD", fromLength: 7000) { airportCode runwayCode }
          frequencies(fromIcao: "EH", fromType: "T") { airportCode type }
        }
        """,
    )

    assert result.errors is None
    assert result.data["runways"] == [
        {"airportCode": "EHAM", "runwayCode": "18R"},
        {"airportCode": "EHAM", "runwayCode": "36L"},
        {"airportCode": "EHRD", "runwayCode": "06"},
        {"airportCode": "EHRD", "runwayCode": "24"},
    ]
    assert result.data["frequencies"] == [
        {"airportCode": "EHAM", "type": "TWR"},
        {"airportCode": "EHRD", "type": "TWR"},
    ]

    unselected = _execute(seeded_session, "{ frequencies { type } }")
    assert unselected.errors[0].message == "Invalid Airport Selection"
