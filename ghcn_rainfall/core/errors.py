"""Error taxonomy for the rainfall pipeline."""

from __future__ import annotations

from pathlib import Path


class RainfallPipelineError(Exception):
    """Base class for pipeline errors."""


class DataSourceError(RainfallPipelineError):
    """An input table is missing, unreadable, or violates its column contract."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class ConfigurationError(RainfallPipelineError):
    """Missing or invalid configuration (e.g. the basemap API key)."""


class PipelineStageError(RainfallPipelineError):
    """A transformation stage failed; carries the stage name."""

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(f"[{stage}] {message}")


class EmptyResultWarning(UserWarning):
    """A filter or join produced zero rows."""
