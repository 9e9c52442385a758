"""Renderer interface used by the pipeline, plus the matplotlib implementation.

The pipeline only depends on `Renderer`; tests can pass a stub without touching
the network or a graphics backend.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import matplotlib.pyplot as plt
import pandas as pd

from ghcn_rainfall.core.config import BasemapConfig
from ghcn_rainfall.core.errors import ConfigurationError
from ghcn_rainfall.io import ensure_parent_dir
from ghcn_rainfall.vis.vis_utils import (
    PlotStyle,
    plot_rainfall_boxplot,
    plot_station_basemap,
    plot_station_scatter,
)

LOGGER = logging.getLogger(__name__)

SCATTER = "station_scatter"
BASEMAP = "station_basemap"
BOXPLOT = "rainfall_boxplot"
BOXPLOT_LOG = "rainfall_boxplot_log"


class Renderer(Protocol):
    def scatter(self, stations: pd.DataFrame) -> Path: ...

    def basemap(self, stations: pd.DataFrame) -> Path: ...

    def boxplot(self, rain: pd.DataFrame, *, log_y: bool = False) -> Path: ...


@dataclass(frozen=True)
class RenderOutcome:
    name: str
    path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MatplotlibRenderer:
    """Write each figure as a PNG under `out_dir`.

    `basemap_config=None` means no credential was configured; the basemap plot
    then fails with `ConfigurationError` and the other plots are unaffected.
    """

    def __init__(
        self,
        out_dir: Path,
        *,
        basemap_config: BasemapConfig | None = None,
        style: PlotStyle | None = None,
    ) -> None:
        self.out_dir = Path(out_dir)
        self.basemap_config = basemap_config
        self.style = style or PlotStyle()

    def _save(self, fig: plt.Figure, name: str) -> Path:
        path = self.out_dir / f"{name}.png"
        ensure_parent_dir(path)
        try:
            fig.savefig(path, dpi=self.style.dpi, bbox_inches="tight")
        finally:
            plt.close(fig)
        LOGGER.info("Wrote %s", path)
        return path

    def scatter(self, stations: pd.DataFrame) -> Path:
        return self._save(plot_station_scatter(stations, self.style), SCATTER)

    def basemap(self, stations: pd.DataFrame) -> Path:
        if self.basemap_config is None:
            raise ConfigurationError("no basemap credential configured")
        fig = plot_station_basemap(stations, self.basemap_config, self.style)
        return self._save(fig, BASEMAP)

    def boxplot(self, rain: pd.DataFrame, *, log_y: bool = False) -> Path:
        fig = plot_rainfall_boxplot(rain, log_y=log_y, style=self.style)
        return self._save(fig, BOXPLOT_LOG if log_y else BOXPLOT)


def render_all(
    renderer: Renderer,
    stations: pd.DataFrame,
    rain: pd.DataFrame,
) -> dict[str, RenderOutcome]:
    """Attempt every figure independently; failures are logged and recorded."""
    jobs = [
        (SCATTER, lambda: renderer.scatter(stations.copy())),
        (BASEMAP, lambda: renderer.basemap(stations.copy())),
        (BOXPLOT, lambda: renderer.boxplot(rain.copy())),
        (BOXPLOT_LOG, lambda: renderer.boxplot(rain.copy(), log_y=True)),
    ]

    outcomes: dict[str, RenderOutcome] = {}
    for name, job in jobs:
        try:
            outcomes[name] = RenderOutcome(name=name, path=job())
        except ConfigurationError as e:
            LOGGER.warning("Skipping %s: %s", name, e)
            outcomes[name] = RenderOutcome(name=name, error=f"configuration: {e}")
        except Exception as e:  # noqa: BLE001 - one failed figure must not stop the others
            LOGGER.error("Failed to render %s: %s", name, e)
            outcomes[name] = RenderOutcome(name=name, error=f"{type(e).__name__}: {e}")
    return outcomes
