"""Project configuration (paths, selection criteria, basemap credential)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from ghcn_rainfall.core.errors import ConfigurationError

# Station selection
PRCP_ELEMENT: str = "PRCP"
MIN_RECORD_YEARS: int = 110
# (min_lon, min_lat, max_lon, max_lat), inclusive on every edge
STATION_BBOX_WGS84: tuple[float, float, float, float] = (138.0, -29.5, 155.0, -26.0)

# GHCN-D convention for "no elevation recorded"
ELEVATION_SENTINEL: float = -999.0

# Basemap window (left, bottom, right, top) and tile zoom
BASEMAP_BBOX_WGS84: tuple[float, float, float, float] = (138.0, -31.0, 155.0, -24.5)
BASEMAP_ZOOM: int = 6
STADIA_API_KEY_ENV: str = "STADIA_API_KEY"


def project_root() -> Path:
    """Return repository root assuming this file lives in `<root>/ghcn_rainfall/core/config.py`."""
    return Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Paths:
    root: Path
    data_raw: Path
    config_file: Path

    artifacts: Path
    figures: Path
    tests: Path


def get_paths(root: Path | None = None) -> Paths:
    r = project_root() if root is None else Path(root).resolve()
    return Paths(
        root=r,
        data_raw=r / "data" / "raw",
        config_file=r / "config" / "pipeline_config.yaml",
        artifacts=r / "artifacts",
        figures=r / "figures",
        tests=r / "tests",
    )


class StationCriteria(BaseModel, frozen=True):
    """Selection predicate for long-record precipitation stations."""

    element: str = PRCP_ELEMENT
    min_record_years: int = MIN_RECORD_YEARS
    bbox: tuple[float, float, float, float] = STATION_BBOX_WGS84


class InputFiles(BaseModel, frozen=True):
    metadata: str = "ghcnd_meta_data.csv"
    observations: str = "station_data.csv"


class BasemapSettings(BaseModel, frozen=True):
    bbox: tuple[float, float, float, float] = BASEMAP_BBOX_WGS84
    zoom: int = BASEMAP_ZOOM
    provider: str = "Stadia.StamenTerrain"


class PipelineConfig(BaseModel, frozen=True):
    inputs: InputFiles = Field(default_factory=InputFiles)
    criteria: StationCriteria = Field(default_factory=StationCriteria)
    elevation_sentinel: float = ELEVATION_SENTINEL
    # "threshold" keeps elevation > sentinel, "equality" drops only elevation == sentinel
    elevation_mode: Literal["threshold", "equality"] = "threshold"
    skipna: bool = True
    basemap: BasemapSettings = Field(default_factory=BasemapSettings)


def load_pipeline_config(path: Path | None = None) -> PipelineConfig:
    """Load the YAML pipeline config; a missing file means all defaults."""
    if path is None:
        path = get_paths().config_file
    path = Path(path)
    if not path.exists():
        return PipelineConfig()
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return PipelineConfig.model_validate(raw)
    except (yaml.YAMLError, ValueError) as exc:
        raise ConfigurationError(f"invalid pipeline config {path}: {exc}") from exc


@dataclass(frozen=True)
class BasemapConfig:
    """Credential + window for the terrain basemap; passed explicitly to the renderer."""

    api_key: str
    bbox: tuple[float, float, float, float] = BASEMAP_BBOX_WGS84
    zoom: int = BASEMAP_ZOOM
    provider: str = "Stadia.StamenTerrain"


def load_basemap_config(
    settings: BasemapSettings | None = None,
    *,
    environ: dict[str, str] | None = None,
) -> BasemapConfig:
    """Read the mapping-service key from the environment.

    Raises `ConfigurationError` when the key is unset or blank.
    """
    settings = settings or BasemapSettings()
    env = os.environ if environ is None else environ
    key = (env.get(STADIA_API_KEY_ENV) or "").strip()
    if not key:
        raise ConfigurationError(
            f"{STADIA_API_KEY_ENV} is not set; basemap rendering is disabled"
        )
    return BasemapConfig(
        api_key=key, bbox=settings.bbox, zoom=settings.zoom, provider=settings.provider
    )


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
