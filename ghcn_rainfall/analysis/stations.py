"""Station selection: long-record precipitation stations inside the study box."""

from __future__ import annotations

import logging
from typing import Literal

import pandas as pd

from ghcn_rainfall.core.config import ELEVATION_SENTINEL, StationCriteria

LOGGER = logging.getLogger(__name__)

_FILTER_COLUMNS = ("element", "first_year", "last_year", "longitude", "latitude")


def _as_mask(cond: pd.Series) -> pd.Series:
    # nullable comparisons yield <NA>; a missing value never satisfies a predicate
    return cond.fillna(False).astype(bool)


def record_span(stations: pd.DataFrame) -> pd.Series:
    """Years between first and last active year (`last_year - first_year`)."""
    return stations["last_year"] - stations["first_year"]


def filter_stations(
    metadata: pd.DataFrame,
    criteria: StationCriteria | None = None,
) -> pd.DataFrame:
    """Select stations matching element, minimum record span and bounding box.

    All bounds are inclusive. Input row order is preserved.
    """
    criteria = criteria or StationCriteria()
    missing = [c for c in _FILTER_COLUMNS if c not in metadata.columns]
    if missing:
        raise ValueError(f"metadata missing required columns: {missing}")

    min_lon, min_lat, max_lon, max_lat = criteria.bbox
    lon = pd.to_numeric(metadata["longitude"])
    lat = pd.to_numeric(metadata["latitude"])

    keep = (
        _as_mask(metadata["element"] == criteria.element)
        & _as_mask(record_span(metadata) >= criteria.min_record_years)
        & _as_mask((lon >= min_lon) & (lon <= max_lon))
        & _as_mask((lat >= min_lat) & (lat <= max_lat))
    )
    out = metadata.loc[keep].reset_index(drop=True)
    LOGGER.info(
        "Station filter: %d of %d rows kept (element=%s, span>=%d, bbox=%s)",
        len(out),
        len(metadata),
        criteria.element,
        criteria.min_record_years,
        criteria.bbox,
    )
    return out


def drop_missing_elevation(
    stations: pd.DataFrame,
    *,
    sentinel: float = ELEVATION_SENTINEL,
    mode: Literal["threshold", "equality"] = "threshold",
) -> pd.DataFrame:
    """Remove stations whose elevation is the missing-data sentinel.

    `mode="threshold"` keeps `elevation > sentinel`, so NA elevations and any
    value at or below the sentinel are dropped. `mode="equality"` drops only
    rows equal to the sentinel and keeps everything else, NA included.
    """
    if "elevation" not in stations.columns:
        raise ValueError("stations must have 'elevation' column")

    elevation = pd.to_numeric(stations["elevation"])
    if mode == "threshold":
        keep = _as_mask(elevation > sentinel)
    elif mode == "equality":
        keep = ~_as_mask(elevation == sentinel)
    else:
        raise ValueError(f"unknown elevation mode {mode!r}; expected 'threshold' or 'equality'")

    out = stations.loc[keep].reset_index(drop=True)
    LOGGER.info(
        "Elevation sanitizer (%s, sentinel=%s): removed %d of %d rows",
        mode,
        sentinel,
        len(stations) - len(out),
        len(stations),
    )
    return out
