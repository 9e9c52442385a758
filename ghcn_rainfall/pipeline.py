"""Run the rainfall report stages in order.

Stages: load -> filter_stations -> drop_missing_elevation -> join -> summarise,
then (optionally) render. Transformation failures abort with the stage name;
render failures are isolated per figure.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

import pandas as pd

from ghcn_rainfall.analysis.rainfall import (
    join_observations,
    positive_rainfall,
    summarise_rainfall,
)
from ghcn_rainfall.analysis.stations import drop_missing_elevation, filter_stations
from ghcn_rainfall.core.config import PipelineConfig
from ghcn_rainfall.core.data_loaders import RainfallInputs, load_inputs
from ghcn_rainfall.core.errors import (
    DataSourceError,
    EmptyResultWarning,
    PipelineStageError,
)
from ghcn_rainfall.vis.renderer import Renderer, RenderOutcome, render_all

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class PipelineResult:
    """Every intermediate table of one run, plus render outcomes."""

    inputs: RainfallInputs
    filtered: pd.DataFrame
    cleaned: pd.DataFrame
    joined: pd.DataFrame
    rain_positive: pd.DataFrame
    summary: pd.DataFrame
    renders: dict[str, RenderOutcome] = field(default_factory=dict)

    @property
    def counts(self) -> dict[str, int]:
        return {
            "metadata_rows": len(self.inputs.metadata),
            "observation_rows": len(self.inputs.observations),
            "filtered_stations": len(self.filtered),
            "cleaned_stations": len(self.cleaned),
            "sentinel_rows_removed": len(self.filtered) - len(self.cleaned),
            "joined_rows": len(self.joined),
            "wet_day_rows": len(self.rain_positive),
            "summary_stations": len(self.summary),
        }


def _stage(name: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    LOGGER.info("Stage %s...", name)
    try:
        return fn(*args, **kwargs)
    except (DataSourceError, PipelineStageError):
        raise
    except Exception as e:
        LOGGER.error("Stage %s failed: %s", name, e)
        raise PipelineStageError(name, str(e)) from e


def _warn_if_empty(df: pd.DataFrame, stage: str, hint: str) -> None:
    if df.empty:
        msg = f"{stage} produced 0 rows; {hint}"
        LOGGER.warning(msg)
        warnings.warn(msg, EmptyResultWarning, stacklevel=3)


def run_pipeline(
    paths=None,
    *,
    config: PipelineConfig | None = None,
    renderer: Renderer | None = None,
    inputs: RainfallInputs | None = None,
) -> PipelineResult:
    """Run every stage; pass `inputs` to skip reading from disk."""
    config = config or PipelineConfig()

    if inputs is None:
        inputs = _stage("load", load_inputs, paths, config=config)

    filtered = _stage("filter_stations", filter_stations, inputs.metadata, config.criteria)
    _warn_if_empty(filtered, "filter_stations", "check element/record-span/bounding-box criteria")

    cleaned = _stage(
        "drop_missing_elevation",
        drop_missing_elevation,
        filtered,
        sentinel=config.elevation_sentinel,
        mode=config.elevation_mode,
    )
    _warn_if_empty(cleaned, "drop_missing_elevation", "every selected station lacks elevation")

    joined = _stage("join", join_observations, inputs.observations, cleaned)
    _warn_if_empty(joined, "join", "no observations share an id with the selected stations")

    rain_positive = _stage("summarise", positive_rainfall, joined)
    summary = _stage("summarise", summarise_rainfall, joined, skipna=config.skipna)

    renders: dict[str, RenderOutcome] = {}
    if renderer is not None:
        renders = render_all(renderer, cleaned, rain_positive)
        failed = sorted(name for name, outcome in renders.items() if not outcome.ok)
        if failed:
            LOGGER.warning("Rendering finished with %d failed figure(s): %s", len(failed), failed)

    result = PipelineResult(
        inputs=inputs,
        filtered=filtered,
        cleaned=cleaned,
        joined=joined,
        rain_positive=rain_positive,
        summary=summary,
        renders=renders,
    )
    LOGGER.info("Pipeline complete: %s", result.counts)
    return result

