from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402

META_COLUMNS = [
    "id",
    "latitude",
    "longitude",
    "elevation",
    "state",
    "name",
    "element",
    "first_year",
    "last_year",
]


@pytest.fixture
def metadata() -> pd.DataFrame:
    """Station metadata covering every selection edge case.

    Expected after filtering: ASN_A (PRCP), ASN_C, ASN_D, ASN_F.
    Expected after the sentinel drop: ASN_A, ASN_D, ASN_F.
    """
    rows = [
        ("ASN_A", -27.0, 140.0, 50.0, "QLD", "Station A", "PRCP", 1900, 2015),
        ("ASN_A", -27.0, 140.0, 50.0, "QLD", "Station A", "TMAX", 1900, 2015),
        ("ASN_B", -27.0, 140.0, 30.0, "QLD", "Station B", "PRCP", 1920, 2010),
        ("ASN_C", -28.0, 150.0, -999.0, "NSW", "Station C", "PRCP", 1890, 2020),
        ("ASN_D", -26.0, 138.0, 10.0, "QLD", "Boundary D", "PRCP", 1900, 2010),
        ("ASN_E", -27.0, 137.9, 100.0, "SA", "Outside E", "PRCP", 1880, 2000),
        ("ASN_F", -29.5, 155.0, 200.0, "NSW", "Corner F", "PRCP", 1870, 2000),
        ("ASN_G", -25.9, 145.0, 80.0, "QLD", "North G", "PRCP", 1880, 2010),
    ]
    return pd.DataFrame(rows, columns=META_COLUMNS)


@pytest.fixture
def observations() -> pd.DataFrame:
    rows = [
        ("ASN_A", "2000-01-01", 0.0),
        ("ASN_A", "2000-01-02", 2.0),
        ("ASN_A", "2000-01-03", 4.0),
        ("ASN_A", "2000-01-04", 0.0),
        ("ASN_A", "2000-01-05", 6.0),
        ("ASN_B", "2000-01-01", 5.0),
        ("ASN_D", "2000-01-01", 1.0),
        ("ASN_D", "2000-01-02", np.nan),
        ("ASN_D", "2000-01-03", 3.0),
        ("ASN_F", "2000-01-01", 0.0),
        ("ASN_F", "2000-01-02", 0.0),
        ("ASN_X", "2000-01-01", 7.0),
    ]
    df = pd.DataFrame(rows, columns=["id", "date", "prcp"])
    df["date"] = pd.to_datetime(df["date"])
    return df


@pytest.fixture
def raw_dir(tmp_path, metadata, observations):
    """`<tmp>/data/raw` populated with both input CSVs."""
    raw = tmp_path / "data" / "raw"
    raw.mkdir(parents=True)
    metadata.to_csv(raw / "ghcnd_meta_data.csv", index=False)
    observations.to_csv(raw / "station_data.csv", index=False)
    return raw
