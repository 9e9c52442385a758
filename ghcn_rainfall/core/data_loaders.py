from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from ghcn_rainfall.core.config import PipelineConfig, get_paths
from ghcn_rainfall.io import read_csv_validated
from ghcn_rainfall.models.schemas import DAILY_OBSERVATIONS, STATION_METADATA

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RainfallInputs:
    """Raw GHCN-D tables as read from disk."""

    metadata: pd.DataFrame
    observations: pd.DataFrame

    # dataset name -> source file
    sources: dict[str, Path] = field(default_factory=dict)


def load_inputs(
    paths=None,
    *,
    config: PipelineConfig | None = None,
    metadata_path: Path | None = None,
    observations_path: Path | None = None,
) -> RainfallInputs:
    """Load and validate the station metadata and daily observation tables.

    Explicit `metadata_path` / `observations_path` override the configured
    locations under `data/raw/`.
    """
    if paths is None:
        paths = get_paths()
    config = config or PipelineConfig()

    meta_path = Path(metadata_path or paths.data_raw / config.inputs.metadata)
    obs_path = Path(observations_path or paths.data_raw / config.inputs.observations)

    LOGGER.info("Loading station metadata from %s", meta_path)
    metadata = read_csv_validated(meta_path, dtype={"id": "string"}, schema=STATION_METADATA)

    LOGGER.info("Loading daily observations from %s", obs_path)
    observations = read_csv_validated(
        obs_path, dtype={"id": "string"}, schema=DAILY_OBSERVATIONS
    )

    LOGGER.info(
        "Inputs loaded: %d metadata rows (%d stations), %d observation rows",
        len(metadata),
        metadata["id"].nunique(),
        len(observations),
    )
    return RainfallInputs(
        metadata=metadata,
        observations=observations,
        sources={STATION_METADATA.name: meta_path, DAILY_OBSERVATIONS.name: obs_path},
    )
