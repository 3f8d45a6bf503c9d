from __future__ import annotations

import pytest

from geography.core.errors import ValidationError
from geography.services import validators


CODE_VALIDATORS = [
    (validators.iso_country_code, ["nl", " be ", "Us"]),
    (validators.iso_region_code, ["nl-nh", " BE-VAN", "us-ca "]),
    (validators.icao_airport_code, ["eham", " EHRD ", "k jfk"]),
    (validators.iata_airport_code, ["ams", " RTM", "j f k"]),
    (validators.runway_code, ["18r", " 36L ", "h1"]),
]


@pytest.mark.parametrize("validator, samples", CODE_VALIDATORS)
def test_code_normalization_is_idempotent(validator, samples):
    for sample in samples:
        normalized = "".join(sample.split()).upper()
        assert validator(normalized) == validator(sample)


def test_country_code_examples():
    assert validators.iso_country_code("nl") == "NL"
    assert validators.iso_country_code("", empty=True) == ""
    with pytest.raises(ValidationError) as exc:
        validators.iso_country_code("")
    assert exc.value.message == "Invalid ISO Country Code"


@pytest.mark.parametrize("value", ["N", "NLD", "N1", "N-"])
def test_country_code_rejects_wrong_shape(value):
    with pytest.raises(ValidationError):
        validators.iso_country_code(value)


def test_partial_codes_are_allowed_for_range_bounds():
    assert validators.iso_country_code("n", partial=True) == "N"
    assert validators.icao_airport_code("E", partial=True) == "E"
    assert validators.iata_airport_code("a", partial=True) == "A"
    with pytest.raises(ValidationError):
        validators.iata_airport_code("AMSX", partial=True)


def test_icao_code_examples():
    assert validators.icao_airport_code(" EHAM ") == "EHAM"
    with pytest.raises(ValidationError) as exc:
        validators.icao_airport_code("EHAMX")
    assert exc.value.message == "Invalid ICAO Airport Code"
    assert exc.value.value == "EHAMX"


def test_region_and_runway_codes_accept_dashes_and_underscores():
    assert validators.iso_region_code("gb-eng") == "GB-ENG"
    assert validators.runway_code("h_1") == "H_1"
    with pytest.raises(ValidationError):
        validators.runway_code("  ")
    with pytest.raises(ValidationError):
        validators.iso_region_code("NL/NH")


def test_latitude_bounds():
    assert validators.latitude("90") == 90.0
    assert validators.latitude(" -45.5 ") == -45.5
    assert validators.latitude("", empty=True) == 0.0
    with pytest.raises(ValidationError) as exc:
        validators.latitude("90.0001")
    assert exc.value.message == "Invalid Latitude"
    with pytest.raises(ValidationError):
        validators.latitude("")


@pytest.mark.parametrize("value", ["north", "nan", "inf", "1_0", "12,5"])
def test_numbers_reject_garbage(value):
    with pytest.raises(ValidationError):
        validators.longitude(value)


def test_elevation_truncates_to_whole_feet():
    assert validators.elevation("-11.9") == -11
    assert validators.elevation("30000") == 30000
    with pytest.raises(ValidationError):
        validators.elevation("-45001")


def test_runway_length_only_allows_zero_when_empty_allowed():
    assert validators.runway_length("12467") == 12467
    assert validators.runway_length("", empty=True) == 0
    assert validators.runway_length("0", empty=True) == 0
    with pytest.raises(ValidationError):
        validators.runway_length("0")
    with pytest.raises(ValidationError):
        validators.runway_length("30001")


def test_runway_dimensions_and_heading():
    assert validators.runway_width("0") == 0
    assert validators.runway_heading("360") == 360
    assert validators.runway_threshold("1083") == 1083
    with pytest.raises(ValidationError) as exc:
        validators.runway_heading("361")
    assert exc.value.message == "Invalid Runway Heading"
    with pytest.raises(ValidationError) as exc:
        validators.runway_threshold("-1")
    assert exc.value.message == "Invalid Runway Threshold"


def test_flags_accept_only_zero_and_one():
    assert validators.runway_lighted("1") is True
    assert validators.runway_closed(" 0 ") is False
    assert validators.runway_closed("", empty=True) is False
    for value in ("yes", "true", "2", ""):
        with pytest.raises(ValidationError):
            validators.runway_lighted(value)


def test_frequency_band():
    assert validators.frequency("137.0") == 137.0
    assert validators.frequency("118") == 118.0
    with pytest.raises(ValidationError) as exc:
        validators.frequency("117.9")
    assert exc.value.message == "Invalid Frequency"
    with pytest.raises(ValidationError):
        validators.frequency("137.001")
