"""Shared plotting utilities for station maps and rainfall distributions."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import contextily as ctx
import geopandas as gpd
import matplotlib.pyplot as plt
import pandas as pd
import xyzservices
from shapely.geometry import box

from ghcn_rainfall.core.config import BasemapConfig

LOGGER = logging.getLogger(__name__)

CRS_WGS84 = "EPSG:4326"
CRS_WEB_MERCATOR = "EPSG:3857"


@dataclass(frozen=True)
class PlotStyle:
    """Consistent styling configuration for report figures."""

    # Figure configuration
    figsize_map: tuple[float, float] = (10.0, 6.0)
    figsize_box: tuple[float, float] = (12.0, 6.5)
    facecolor: str = "white"
    dpi: int = 150

    # Station markers
    cmap: str = "viridis"
    marker_size: float = 40.0
    marker_edgecolor: str = "#111827"

    # Boxplots
    box_facecolor: str = "#93c5fd"
    outlier_color: str = "#dc2626"
    mean_color: str = "#111827"
    label_rotation: float = 45.0


def stations_to_gdf(stations: pd.DataFrame) -> gpd.GeoDataFrame:
    """Convert a station table with longitude/latitude to a WGS84 GeoDataFrame."""
    required = {"longitude", "latitude", "elevation"}
    missing = required - set(stations.columns)
    if missing:
        raise ValueError(f"stations missing required columns: {sorted(missing)}")
    if stations.empty:
        raise ValueError("no stations to plot")

    df = stations.copy()
    df["elevation"] = pd.to_numeric(df["elevation"]).astype(float)
    geom = gpd.points_from_xy(
        pd.to_numeric(df["longitude"]).astype(float), pd.to_numeric(df["latitude"]).astype(float)
    )
    return gpd.GeoDataFrame(df, geometry=geom, crs=CRS_WGS84)


def _plot_stations(gdf: gpd.GeoDataFrame, ax: plt.Axes, style: PlotStyle) -> None:
    gdf.plot(
        ax=ax,
        column="elevation",
        cmap=style.cmap,
        markersize=style.marker_size,
        edgecolor=style.marker_edgecolor,
        linewidth=0.5,
        legend=True,
        legend_kwds={"label": "Elevation (m)", "shrink": 0.7},
        zorder=3,
    )


def plot_station_scatter(stations: pd.DataFrame, style: PlotStyle | None = None) -> plt.Figure:
    """Stations at (longitude, latitude), coloured by elevation."""
    style = style or PlotStyle()
    gdf = stations_to_gdf(stations)

    fig, ax = plt.subplots(figsize=style.figsize_map)
    ax.set_facecolor(style.facecolor)
    _plot_stations(gdf, ax, style)
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title(f"Long-record precipitation stations (n={len(gdf)})")
    return fig


def resolve_tile_provider(config: BasemapConfig) -> xyzservices.TileProvider:
    """Look up the configured tile provider and attach the API key."""
    provider = xyzservices.providers.query_name(config.provider)
    return provider(api_key=config.api_key)


def plot_station_basemap(
    stations: pd.DataFrame,
    config: BasemapConfig,
    style: PlotStyle | None = None,
) -> plt.Figure:
    """Station scatter layered over terrain tiles for the fixed basemap window.

    Fetches tiles over the network (contextily defaults for timeout/caching).
    """
    style = style or PlotStyle()
    gdf = stations_to_gdf(stations).to_crs(CRS_WEB_MERCATOR)
    minx, miny, maxx, maxy = (
        gpd.GeoSeries([box(*config.bbox)], crs=CRS_WGS84).to_crs(CRS_WEB_MERCATOR).total_bounds
    )

    fig, ax = plt.subplots(figsize=style.figsize_map)
    ax.set_xlim(minx, maxx)
    ax.set_ylim(miny, maxy)
    _plot_stations(gdf, ax, style)

    LOGGER.debug("Fetching %s tiles at zoom %d for %s", config.provider, config.zoom, config.bbox)
    ctx.add_basemap(
        ax,
        crs=CRS_WEB_MERCATOR,
        source=resolve_tile_provider(config),
        zoom=config.zoom,
        reset_extent=True,
    )

    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_title(f"Long-record precipitation stations on terrain (n={len(gdf)})")
    return fig


def plot_rainfall_boxplot(
    rain: pd.DataFrame,
    *,
    log_y: bool = False,
    value_col: str = "prcp",
    group_col: str = "name",
    style: PlotStyle | None = None,
) -> plt.Figure:
    """One box per station name; outliers in red, mean as a point marker.

    `log_y` switches the y axis to base-10 log to compress the wet-day tail.
    """
    style = style or PlotStyle()
    missing = {value_col, group_col} - set(rain.columns)
    if missing:
        raise ValueError(f"rainfall table missing required columns: {sorted(missing)}")

    values = pd.to_numeric(rain[value_col]).astype(float)
    groups = [
        (str(name), grp.dropna().to_numpy())
        for name, grp in values.groupby(rain[group_col], sort=True)
    ]
    groups = [(name, vals) for name, vals in groups if len(vals)]
    if not groups:
        raise ValueError("no rainfall values to plot")
    if log_y and any((vals <= 0).any() for _, vals in groups):
        raise ValueError("log-scaled boxplot requires strictly positive values")

    fig, ax = plt.subplots(figsize=style.figsize_box)
    ax.set_facecolor(style.facecolor)
    ax.boxplot(
        [vals for _, vals in groups],
        patch_artist=True,
        showmeans=True,
        boxprops={"facecolor": style.box_facecolor},
        flierprops={
            "marker": "o",
            "markerfacecolor": style.outlier_color,
            "markeredgecolor": style.outlier_color,
            "markersize": 3,
            "alpha": 0.6,
        },
        meanprops={
            "marker": "D",
            "markerfacecolor": style.mean_color,
            "markeredgecolor": style.mean_color,
            "markersize": 5,
        },
    )
    ax.set_xticks(range(1, len(groups) + 1))
    ax.set_xticklabels(
        [name for name, _ in groups], rotation=style.label_rotation, ha="right"
    )
    if log_y:
        ax.set_yscale("log", base=10)
    ax.set_xlabel("Station")
    ax.set_ylabel("Daily precipitation (mm)" + (", log scale" if log_y else ""))
    ax.set_title("Wet-day precipitation by station")
    fig.tight_layout()
    return fig
