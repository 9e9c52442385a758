"""Build the long-record rainfall report (tables, figures, HTML, QA record).

Run:
  STADIA_API_KEY=... python scripts/run_report.py
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Ensure repo root is on sys.path so `import ghcn_rainfall...` works when executing this file directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from ghcn_rainfall.core.config import (
    configure_logging,
    get_paths,
    load_basemap_config,
    load_pipeline_config,
)
from ghcn_rainfall.core.errors import ConfigurationError, RainfallPipelineError
from ghcn_rainfall.pipeline import run_pipeline
from ghcn_rainfall.report import write_qa, write_report
from ghcn_rainfall.vis.renderer import MatplotlibRenderer

LOGGER = logging.getLogger("run_report")


def main() -> int:
    configure_logging()
    paths = get_paths()

    try:
        config = load_pipeline_config(paths.config_file)
    except ConfigurationError as e:
        LOGGER.error("%s", e)
        return 2

    try:
        basemap = load_basemap_config(config.basemap)
    except ConfigurationError as e:
        LOGGER.warning("%s; continuing without the terrain basemap", e)
        basemap = None

    renderer = MatplotlibRenderer(paths.figures, basemap_config=basemap)
    try:
        result = run_pipeline(paths, config=config, renderer=renderer)
    except RainfallPipelineError as e:
        LOGGER.error("Aborting: %s", e)
        return 1

    write_report(result, paths.artifacts / "rainfall_report.html")
    write_qa(result, paths.artifacts / "qa.json")

    print(result.summary.to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
