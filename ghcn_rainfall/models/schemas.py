"""Schema definitions for pipeline dataframe contracts.

This module contains only:
- `TableSchema` (schema metadata container)
- concrete table schemas for the GHCN-D inputs and derived tables
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, Field


class TableSchema(BaseModel):
    """A simple schema for a pandas DataFrame (column-level contract)."""

    name: str
    required_columns: tuple[str, ...] = Field(default_factory=tuple)
    optional_columns: tuple[str, ...] = Field(default_factory=tuple)
    # pandas dtype strings, e.g. "string", "Float64", "Int64", "datetime64[ns]"
    dtypes: Mapping[str, str] = Field(default_factory=dict)
    non_null: tuple[str, ...] = Field(default_factory=tuple)

    def allowed_columns(self) -> set[str]:
        return set(self.required_columns) | set(self.optional_columns)


STATION_METADATA = TableSchema(
    name="ghcnd_meta_data",
    required_columns=(
        "id",
        "name",
        "latitude",
        "longitude",
        "elevation",
        "element",
        "first_year",
        "last_year",
    ),
    optional_columns=("state", "gsn_flag", "wmo_id"),
    dtypes={
        "id": "string",
        "name": "string",
        "latitude": "Float64",
        "longitude": "Float64",
        "elevation": "Float64",
        "element": "string",
        "first_year": "Int64",
        "last_year": "Int64",
        "state": "string",
        "gsn_flag": "string",
        "wmo_id": "string",
    },
    non_null=("id", "element", "first_year", "last_year"),
)

DAILY_OBSERVATIONS = TableSchema(
    name="station_data",
    required_columns=("id", "date", "prcp"),
    dtypes={
        "id": "string",
        "date": "datetime64[ns]",
        "prcp": "Float64",
    },
    non_null=("id", "date"),
)

JOINED_OBSERVATIONS = TableSchema(
    name="joined_observations",
    required_columns=("id", "date", "prcp", "name", "latitude", "longitude", "elevation"),
    non_null=("id",),
)

RAINFALL_SUMMARY = TableSchema(
    name="rainfall_summary",
    required_columns=("name", "mean_rainfall", "median_rainfall"),
    dtypes={
        "name": "string",
        "mean_rainfall": "Float64",
        "median_rainfall": "Float64",
    },
    non_null=("name",),
)
