from __future__ import annotations

import pytest

from ghcn_rainfall.core.config import (
    BASEMAP_BBOX_WGS84,
    PipelineConfig,
    StationCriteria,
    get_paths,
    load_basemap_config,
    load_pipeline_config,
)
from ghcn_rainfall.core.errors import ConfigurationError


def test_defaults():
    config = PipelineConfig()
    assert config.criteria == StationCriteria(
        element="PRCP", min_record_years=110, bbox=(138.0, -29.5, 155.0, -26.0)
    )
    assert config.elevation_sentinel == -999.0
    assert config.elevation_mode == "threshold"
    assert config.skipna is True
    assert config.basemap.bbox == BASEMAP_BBOX_WGS84 == (138.0, -31.0, 155.0, -24.5)


def test_repo_config_matches_defaults():
    assert load_pipeline_config(get_paths().config_file) == PipelineConfig()


def test_missing_config_file_uses_defaults(tmp_path):
    assert load_pipeline_config(tmp_path / "nope.yaml") == PipelineConfig()


def test_yaml_overrides(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text(
        "criteria:\n  min_record_years: 50\nelevation_mode: equality\n", encoding="utf-8"
    )
    config = load_pipeline_config(path)
    assert config.criteria.min_record_years == 50
    assert config.criteria.element == "PRCP"
    assert config.elevation_mode == "equality"


def test_invalid_yaml_value(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("elevation_mode: nearest\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="invalid pipeline config"):
        load_pipeline_config(path)


def test_basemap_key_from_environment():
    config = load_basemap_config(environ={"STADIA_API_KEY": " abc "})
    assert config.api_key == "abc"
    assert config.zoom == 6


@pytest.mark.parametrize("environ", [{}, {"STADIA_API_KEY": ""}, {"STADIA_API_KEY": "  "}])
def test_basemap_key_missing(environ):
    with pytest.raises(ConfigurationError, match="STADIA_API_KEY"):
        load_basemap_config(environ=environ)


def test_malformed_yaml(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("criteria: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="invalid pipeline config"):
        load_pipeline_config(path)
