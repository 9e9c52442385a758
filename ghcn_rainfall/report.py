"""Static HTML report and JSON QA record for a pipeline run."""

from __future__ import annotations

import html
import logging
import os
from pathlib import Path

from ghcn_rainfall.io import sha256_file, write_json, write_text
from ghcn_rainfall.pipeline import PipelineResult

LOGGER = logging.getLogger(__name__)


def input_hashes(result: PipelineResult) -> dict[str, str]:
    """sha256 per input file that exists on disk."""
    return {
        name: sha256_file(Path(path))
        for name, path in sorted(result.inputs.sources.items())
        if Path(path).is_file()
    }


def render_report_html(result: PipelineResult, *, base_dir: Path | None = None) -> str:
    """Build the report page; figure paths are written relative to `base_dir`."""
    parts = [
        "<!DOCTYPE html>",
        '<html lang="en"><head><meta charset="utf-8">',
        "<title>Long-record rainfall stations</title></head><body>",
        "<h1>Long-record rainfall stations</h1>",
        "<h2>Stage counts</h2><ul>",
    ]
    parts += [f"<li>{html.escape(k)}: {v}</li>" for k, v in result.counts.items()]
    parts.append("</ul>")

    if result.renders:
        parts.append("<h2>Figures</h2>")
        for name, outcome in result.renders.items():
            if outcome.ok and outcome.path is not None:
                src = Path(outcome.path)
                if base_dir is not None:
                    src = Path(os.path.relpath(src, base_dir))
                parts.append(
                    f'<figure><img src="{html.escape(src.as_posix())}" alt="{html.escape(name)}">'
                    f"<figcaption>{html.escape(name)}</figcaption></figure>"
                )
            else:
                parts.append(
                    f"<p><strong>{html.escape(name)}</strong> not rendered: "
                    f"{html.escape(outcome.error or 'unknown error')}</p>"
                )

    parts.append("<h2>Wet-day rainfall summary (mm)</h2>")
    table = result.summary.astype({"mean_rainfall": float, "median_rainfall": float})
    parts.append(table.to_html(index=False, float_format=lambda x: f"{x:.2f}", na_rep="NA"))
    parts.append("</body></html>")
    return "\n".join(parts) + "\n"


def write_report(result: PipelineResult, out_path: Path) -> Path:
    out_path = Path(out_path)
    write_text(out_path, render_report_html(result, base_dir=out_path.parent))
    LOGGER.info("Wrote report %s", out_path)
    return out_path


def write_qa(result: PipelineResult, out_path: Path) -> Path:
    """Write stage counts, input hashes and render outcomes as JSON."""
    out_path = Path(out_path)
    qa = {
        "counts": result.counts,
        "inputs": {name: str(path) for name, path in sorted(result.inputs.sources.items())},
        "input_sha256": input_hashes(result),
        "renders": {
            name: {"path": str(o.path) if o.path else None, "error": o.error}
            for name, o in result.renders.items()
        },
    }
    write_json(qa, out_path)
    LOGGER.info("Wrote QA record %s", out_path)
    return out_path
