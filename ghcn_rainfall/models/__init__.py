"""Pydantic models and dataframe schema validators.

These are contracts to keep the pipeline deterministic:
- Inputs are validated at the loader boundary.
- Stage logic lives in `ghcn_rainfall.analysis` pure functions; scripts orchestrate I/O.
"""

from __future__ import annotations

from ghcn_rainfall.models.schemas import (
    DAILY_OBSERVATIONS,
    JOINED_OBSERVATIONS,
    RAINFALL_SUMMARY,
    STATION_METADATA,
    TableSchema,
)
from ghcn_rainfall.models.validate import validate_df

__all__ = [
    "TableSchema",
    "validate_df",
    "STATION_METADATA",
    "DAILY_OBSERVATIONS",
    "JOINED_OBSERVATIONS",
    "RAINFALL_SUMMARY",
]
