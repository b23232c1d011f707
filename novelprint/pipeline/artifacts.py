"""Artifact payload builders for the novelprint pipeline."""

from __future__ import annotations

import json
from pathlib import Path

from ..config import PrintLayout
from ..models.datatypes import Page, PrintManifest


def page_artifact_path(page: Page) -> Path:
    """Return the relative artifact path for one page fragment."""

    return Path("pages") / f"page-{page.number:04d}.md"


def pages_payload(
    pages: list[Page], page_paths: list[Path], layout: PrintLayout
) -> dict[str, object]:
    """Serialize the page index handed to the external renderer."""

    return {
        "page_count": len(pages),
        "pages": [
            {"number": page.number, "label": page.label, "path": str(path)}
            for page, path in zip(pages, page_paths)
        ],
        "layout": layout.as_manifest_metadata(),
        "css_variables": layout.as_css_variables(),
    }


def manifest_payload(manifest: PrintManifest) -> dict[str, object]:
    """Serialize a run manifest into a JSON-safe payload."""

    return {
        "run_id": manifest.run_id,
        "source_path": str(manifest.source_path),
        "page_count": manifest.page_count,
        "page_paths": [str(path) for path in manifest.page_paths],
        "layout": dict(manifest.layout),
        "extra": json.loads(json.dumps(dict(manifest.extra))),
    }
