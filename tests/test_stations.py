from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from ghcn_rainfall.analysis.stations import drop_missing_elevation, filter_stations, record_span
from ghcn_rainfall.core.config import StationCriteria


def _station(**overrides) -> dict:
    row = {
        "id": "S",
        "name": "S",
        "latitude": -27.0,
        "longitude": 140.0,
        "elevation": 50.0,
        "element": "PRCP",
        "first_year": 1900,
        "last_year": 2015,
    }
    row.update(overrides)
    return row


def test_filter_keeps_only_matching_rows(metadata):
    out = filter_stations(metadata)

    assert out["id"].tolist() == ["ASN_A", "ASN_C", "ASN_D", "ASN_F"]
    assert (out["element"] == "PRCP").all()
    assert (record_span(out) >= 110).all()
    assert out["longitude"].between(138, 155).all()
    assert out["latitude"].between(-29.5, -26).all()


def test_filter_rejects_short_record():
    meta = pd.DataFrame(
        [
            _station(id="A", name="Station A", first_year=1900, last_year=2015, elevation=50.0),
            _station(id="B", name="Station B", first_year=1920, last_year=2010, elevation=30.0),
        ]
    )
    out = filter_stations(meta)
    assert out["name"].tolist() == ["Station A"]


def test_filter_bounds_are_inclusive():
    meta = pd.DataFrame(
        [
            _station(id="lo", longitude=138.0, latitude=-26.0, first_year=1900, last_year=2010),
            _station(id="hi", longitude=155.0, latitude=-29.5, first_year=1900, last_year=2010),
            _station(id="span", first_year=1901, last_year=2010),
        ]
    )
    out = filter_stations(meta)
    assert out["id"].tolist() == ["lo", "hi"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"element": "prcp"},
        {"element": "TMAX"},
        {"longitude": 137.99},
        {"longitude": 155.01},
        {"latitude": -25.99},
        {"latitude": -29.51},
    ],
)
def test_filter_excludes_just_outside(overrides):
    out = filter_stations(pd.DataFrame([_station(**overrides)]))
    assert out.empty


def test_filter_drops_missing_coordinates():
    meta = pd.DataFrame([_station(longitude=np.nan), _station(id="ok")])
    assert filter_stations(meta)["id"].tolist() == ["ok"]


def test_filter_custom_criteria():
    meta = pd.DataFrame([_station(first_year=1990, last_year=2015)])
    criteria = StationCriteria(min_record_years=20)
    assert len(filter_stations(meta, criteria)) == 1


def test_filter_missing_column_raises(metadata):
    with pytest.raises(ValueError, match="element"):
        filter_stations(metadata.drop(columns=["element"]))


def test_filter_does_not_mutate_input(metadata):
    before = metadata.copy()
    filter_stations(metadata)
    pd.testing.assert_frame_equal(metadata, before)


def test_sentinel_elevation_removed(metadata):
    filtered = filter_stations(metadata)
    cleaned = drop_missing_elevation(filtered)

    assert "Station C" not in cleaned["name"].tolist()
    assert (cleaned["elevation"] > -999).all()
    n_sentinel = int((filtered["elevation"] == -999).sum())
    assert len(filtered) - len(cleaned) == n_sentinel == 1


def test_filter_then_sanitize_is_idempotent(metadata):
    first = drop_missing_elevation(filter_stations(metadata))
    second = drop_missing_elevation(filter_stations(metadata))
    pd.testing.assert_frame_equal(first, second)
    pd.testing.assert_frame_equal(drop_missing_elevation(first), first)


def test_threshold_and_equality_modes_differ_below_sentinel():
    stations = pd.DataFrame(
        [
            _station(id="sentinel", elevation=-999.0),
            _station(id="below", elevation=-1000.0),
            _station(id="unknown", elevation=np.nan),
            _station(id="sea", elevation=0.0),
        ]
    )

    threshold = drop_missing_elevation(stations)
    equality = drop_missing_elevation(stations, mode="equality")

    assert threshold["id"].tolist() == ["sea"]
    assert equality["id"].tolist() == ["below", "unknown", "sea"]


def test_sanitizer_leaves_other_elevations_untouched():
    stations = pd.DataFrame([_station(id="a", elevation=12.5), _station(id="b", elevation=-3.0)])
    out = drop_missing_elevation(stations)
    assert out["elevation"].tolist() == [12.5, -3.0]


def test_unknown_mode_raises():
    with pytest.raises(ValueError, match="unknown elevation mode"):
        drop_missing_elevation(pd.DataFrame([_station()]), mode="nearest")
