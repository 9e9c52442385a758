"""Observation join and per-station rainfall summaries."""

from __future__ import annotations

import logging

import pandas as pd

from ghcn_rainfall.models.schemas import RAINFALL_SUMMARY
from ghcn_rainfall.models.validate import validate_df

LOGGER = logging.getLogger(__name__)


def join_observations(
    observations: pd.DataFrame,
    stations: pd.DataFrame,
    *,
    on: str = "id",
) -> pd.DataFrame:
    """Inner-join daily observations to the cleaned station table on `on`.

    Observations keep their order; station columns that clash with observation
    columns are suffixed `_station`.
    """
    for label, df in (("observations", observations), ("stations", stations)):
        if on not in df.columns:
            raise ValueError(f"{label} must have {on!r} column")

    dup = stations[on].duplicated(keep=False)
    if dup.any():
        sample = sorted(stations.loc[dup, on].astype(str).unique().tolist())[:10]
        LOGGER.warning(
            "stations has %d rows with a repeated %r (e.g. %s); joined rows will fan out",
            int(dup.sum()),
            on,
            sample,
        )

    joined = observations.merge(
        stations, on=on, how="inner", sort=False, suffixes=("", "_station")
    )
    LOGGER.info(
        "Joined %d observation rows onto %d stations: %d rows across %d stations",
        len(observations),
        len(stations),
        len(joined),
        joined[on].nunique(),
    )
    return joined.reset_index(drop=True)


def positive_rainfall(
    joined: pd.DataFrame,
    *,
    value_col: str = "prcp",
    min_value: float = 0.0,
    dropna: bool = True,
) -> pd.DataFrame:
    """Rows with rain (`value_col > min_value`); dry days are excluded.

    With `dropna=False` rows whose value is missing are kept so that the
    aggregator can decide how to treat them.
    """
    if value_col not in joined.columns:
        raise ValueError(f"joined table must have {value_col!r} column")
    values = pd.to_numeric(joined[value_col])
    dry = (values <= min_value).fillna(False).astype(bool)
    keep = ~dry
    if dropna:
        keep &= values.notna()
    return joined.loc[keep].reset_index(drop=True)


def summarise_rainfall(
    joined: pd.DataFrame,
    *,
    value_col: str = "prcp",
    group_col: str = "name",
    skipna: bool = True,
    min_value: float = 0.0,
) -> pd.DataFrame:
    """Mean and median of wet-day rainfall per station name, sorted by name.

    Days with `value_col <= min_value` are excluded first. `skipna=True` ignores
    missing readings entirely; with `skipna=False` a group containing a missing
    reading gets a missing mean and median. Rows without a station name are
    dropped (and counted in the log).
    """
    if group_col not in joined.columns:
        raise ValueError(f"joined table must have {group_col!r} column")

    wet = positive_rainfall(joined, value_col=value_col, min_value=min_value, dropna=False)
    unnamed = wet[group_col].isna()
    if unnamed.any():
        LOGGER.warning(
            "Dropping %d wet-day rows with a missing %r from the summary",
            int(unnamed.sum()),
            group_col,
        )
        wet = wet.loc[~unnamed]
    values = pd.to_numeric(wet[value_col]).astype("Float64")
    grouped = values.groupby(wet[group_col], sort=True)

    summary = pd.DataFrame(
        {
            "mean_rainfall": grouped.agg(lambda s: s.mean(skipna=skipna)),
            "median_rainfall": grouped.agg(lambda s: s.median(skipna=skipna)),
        }
    )
    summary.index.name = "name"
    summary = (
        summary.reset_index()
        .sort_values("name", kind="mergesort")
        .reset_index(drop=True)
    )
    LOGGER.info("Summarised %d wet-day readings into %d stations", len(wet), len(summary))
    return validate_df(summary, RAINFALL_SUMMARY)
