import json

from pipeline.etl import (
    STATE_FIELDS,
    normalize_airport,
    parse_states_body,
    project_states,
    wikipedia_title,
)

SAMPLE_STATE = ["abc123", "UAL123  ", "United States", 0, 0, -122.3, 47.6, 10000, False, 250.5, 90, 0]


def test_project_states_names_all_fields():
    flights = project_states({"states": [SAMPLE_STATE, SAMPLE_STATE]})

    assert len(flights) == 2
    assert all(list(f.keys()) == STATE_FIELDS for f in flights)


def test_sample_flight_is_trimmed_and_positioned():
    flight = project_states({"states": [SAMPLE_STATE]})[0]

    assert flight["callsign"] == "UAL123"
    assert flight["latitude"] == 47.6
    assert flight["longitude"] == -122.3
    assert flight["on_ground"] is False
    assert flight["velocity"] == 250.5


def test_missing_or_null_states_gives_empty_list():
    assert project_states({}) == []
    assert project_states({"states": None}) == []
    assert project_states({"time": 1700000000}) == []


def test_null_callsign_and_short_records():
    flight = project_states({"states": [["def456", None, "Canada"]]})[0]

    assert flight["callsign"] == ""
    assert flight["origin_country"] == "Canada"
    assert flight["latitude"] is None
    assert flight["vertical_rate"] is None


def test_non_list_records_are_skipped():
    flights = project_states({"states": [SAMPLE_STATE, {"icao24": "x"}, "junk"]})
    assert len(flights) == 1


def test_parse_states_body():
    body = json.dumps({"time": 1, "states": [SAMPLE_STATE]})
    assert parse_states_body(body)[0]["icao24"] == "abc123"
    assert parse_states_body("<html>not json</html>") == []
    assert parse_states_body("null") == []


AERODATABOX_SEA = {
    "icao": "KSEA",
    "iata": "SEA",
    "shortName": "Seattle-Tacoma",
    "fullName": "Seattle Seattle-Tacoma",
    "municipalityName": "Seattle",
    "location": {"lat": 47.449, "lon": -122.3093},
    "country": {"code": "US", "name": "United States"},
    "urls": {"wikipedia": "https://en.wikipedia.org/wiki/Seattle%E2%80%93Tacoma_International_Airport"},
}


def test_normalize_airport_from_aerodatabox_shape():
    record = normalize_airport("sea", AERODATABOX_SEA, "https://img/sea.jpg")

    assert record == {
        "code": "SEA",
        "name": "Seattle Seattle-Tacoma",
        "state": "Seattle",
        "lat": 47.449,
        "lon": -122.3093,
        "image": "https://img/sea.jpg",
    }


def test_normalize_airport_alternate_shapes():
    record = normalize_airport("XYZ", {"name": "Null Island", "lat": 0, "lon": "0.0",
                                       "country": {"code": "ZZ"}})

    assert record["lat"] == 0.0
    assert record["lon"] == 0.0
    assert record["state"] == "ZZ"
    assert record["image"] == ""


def test_normalize_airport_without_coordinates():
    assert normalize_airport("SEA", {"fullName": "Seattle"}) is None


def test_wikipedia_title():
    assert wikipedia_title(AERODATABOX_SEA) == "Seattle–Tacoma International Airport"
    assert wikipedia_title({"fullName": "Anchorage Ted Stevens"}) == "Anchorage Ted Stevens"
    assert wikipedia_title({}) is None


def test_non_finite_numbers_become_null():
    body = '{"states":[["abc123","UAL123","United States",0,0,NaN,47.6,Infinity,false,-Infinity,1e999,0]]}'

    flight = parse_states_body(body)[0]

    assert flight["longitude"] is None
    assert flight["baro_altitude"] is None
    assert flight["velocity"] is None
    assert flight["heading"] is None
    assert flight["latitude"] == 47.6
