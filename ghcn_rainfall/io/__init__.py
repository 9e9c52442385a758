"""Lightweight I/O helpers.

This module centralises:
- validated CSV reads (`read_csv_validated`) at pipeline boundaries
- simple JSON/text helpers used by the report writer
- input hashing for the QA record
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import pandas as pd

from ghcn_rainfall.core.errors import DataSourceError
from ghcn_rainfall.models.validate import validate_df


def ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def write_text(path: Path, text: str) -> None:
    ensure_parent_dir(path)
    path.write_text(text, encoding="utf-8")


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def write_json(obj: Any, path: Path) -> None:
    ensure_parent_dir(path)
    path.write_text(json.dumps(obj, ensure_ascii=False, indent=2), encoding="utf-8")


def read_csv_validated(
    path: Path,
    *,
    dtype: dict[str, str],
    schema: Any,
) -> pd.DataFrame:
    """Read a CSV and validate it against a schema-like object.

    Any failure (missing file, parse error, contract violation) is raised as
    `DataSourceError` naming the offending path.
    """
    required_attrs = ("name", "required_columns", "optional_columns", "dtypes", "non_null")
    missing = [a for a in required_attrs if not hasattr(schema, a)]
    if missing:
        raise TypeError(f"schema missing required attributes {missing}; got {type(schema)}")

    path = Path(path)
    if not path.is_file():
        raise DataSourceError(path, "file not found")

    try:
        df = pd.read_csv(path, dtype=dtype)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise DataSourceError(path, f"unreadable CSV: {exc}") from exc
    except OSError as exc:
        raise DataSourceError(path, f"cannot open: {exc}") from exc

    try:
        return validate_df(df, schema)
    except (ValueError, TypeError) as exc:
        raise DataSourceError(path, str(exc)) from exc


def sha256_file(path: Path) -> str:
    """Return SHA256 hex digest for a file."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()
