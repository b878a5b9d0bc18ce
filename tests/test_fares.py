import random
from datetime import date

import pytest

import config
from pipeline.fares import build_fare_airports, generate_fares, load_airports_file, month_labels


def test_month_labels_wrap_into_next_year():
    labels = month_labels(date(2024, 11, 15))

    assert len(labels) == 12
    assert labels[:3] == ["11/2024", "12/2024", "01/2025"]
    assert labels[-1] == "10/2025"


def test_month_labels_january_start():
    assert month_labels(date(2026, 1, 1), count=12)[-1] == "12/2026"


def test_month_labels_default_to_current_month():
    assert month_labels()[0] == date.today().strftime("%m/%Y")


@pytest.mark.parametrize("kind", ["demo", "full"])
def test_generated_fares_stay_in_range(kind):
    low, high = config.FARE_RANGES[kind]
    rng = random.Random(7)

    for _ in range(50):
        fares = generate_fares(low, high, start=date(2025, 3, 1), rng=rng)
        assert len(fares) == 12
        assert all(low <= f["fare"] <= high for f in fares)
        assert all(isinstance(f["fare"], int) for f in fares)


def test_generate_fares_rejects_inverted_range():
    with pytest.raises(ValueError):
        generate_fares(500, 200)


def test_build_fare_airports_attaches_independent_fares():
    data = build_fare_airports(config.DEMO_AIRPORTS, (150, 600), start=date(2025, 12, 1),
                               rng=random.Random(1))

    assert [ap["code"] for ap in data] == ["SEA", "ANC"]
    for ap in data:
        assert set(ap) == {"code", "name", "state", "lat", "lon", "image", "fares"}
        assert [f["month"] for f in ap["fares"]][:2] == ["12/2025", "01/2026"]
    # source records are not mutated
    assert "fares" not in config.DEMO_AIRPORTS[0]


def test_load_airports_csv(tmp_path):
    path = tmp_path / "airports.csv"
    path.write_text(
        "code,name,state,lat,lon,image\n"
        "pdx,Portland Intl,OR,45.5887,-122.5975,\n"
        "BAD,No Coords,XX,,,\n",
        encoding="utf-8",
    )

    airports = load_airports_file(path)

    assert len(airports) == 1
    pdx = airports[0]
    assert (pdx["code"], pdx["name"], pdx["state"], pdx["image"]) == ("PDX", "Portland Intl", "OR", "")
    assert pdx["lat"] == pytest.approx(45.5887)
    assert pdx["lon"] == pytest.approx(-122.5975)


def test_load_airports_json(tmp_path):
    path = tmp_path / "airports.json"
    path.write_text(
        '[{"code":"JNU","name":"Juneau Intl","state":"AK","lat":58.3547,"lon":-134.5762,'
        '"image":"https://example.org/jnu.jpg"}]',
        encoding="utf-8",
    )

    airports = load_airports_file(path)

    assert airports[0]["code"] == "JNU"
    assert airports[0]["image"] == "https://example.org/jnu.jpg"


def test_load_airports_missing_columns(tmp_path):
    path = tmp_path / "airports.csv"
    path.write_text("code,name,lat,lon\nSEA,Seattle,47.4,-122.3\n", encoding="utf-8")

    with pytest.raises(ValueError, match="state, image"):
        load_airports_file(path)
