"""Pipeline orchestration for novelprint.

Responsibilities:
- Define the stage order for the read, normalize, paginate, write flow.
- Coordinate stage outputs into a reproducible run manifest.

Key types:
- `PrintPipeline`: orchestration facade.
"""

from __future__ import annotations

from collections.abc import Callable
from hashlib import sha256
import json
from pathlib import Path

from ..config import NovelprintConfig
from ..errors import PipelineStageError
from ..io.source_reader import SourceReader
from ..io.storage import ArtifactStore
from ..models.datatypes import Page, PrintManifest, SourceDocument
from ..telemetry.logger import RunLogger
from ..text.normalizer import MarkdownNormalizer
from ..text.paginator import Paginator
from .artifacts import manifest_payload, page_artifact_path, pages_payload
from .telemetry import PipelineTelemetryMixin


class PrintPipeline(PipelineTelemetryMixin):
    """Coordinate all stages for a single pagination run."""

    def __init__(
        self,
        run_logger: RunLogger | None = None,
        stage_progress_callback: Callable[[str, int, int], None] | None = None,
        source_reader: SourceReader | None = None,
    ) -> None:
        """Initialize optional runtime logging, progress hooks, and source reader."""

        self._run_logger = run_logger
        self._stage_progress_callback = stage_progress_callback
        self._source_reader = source_reader or SourceReader()
        self._paginator = Paginator()

    def paginate_text(self, raw_text: str, *, canonicalize_line_endings: bool = True) -> list[str]:
        """Normalize raw markdown and split it into page fragments."""

        if not isinstance(raw_text, str):
            raise TypeError(
                f"Pipeline input must be a string, got {type(raw_text).__name__}."
            )

        normalizer = MarkdownNormalizer(canonicalize_line_endings=canonicalize_line_endings)
        canonical = self._run_stage("normalize", lambda: normalizer.normalize(raw_text))
        return self._run_stage("paginate", lambda: self._paginator.paginate(canonical))

    def pages(self, raw_text: str, *, canonicalize_line_endings: bool = True) -> list[Page]:
        """Return numbered pages for raw markdown text."""

        fragments = self.paginate_text(
            raw_text, canonicalize_line_endings=canonicalize_line_endings
        )
        return _number_pages(fragments)

    def read_source(self, path: Path) -> SourceDocument:
        """Read the source file, reporting acquisition problems as warnings."""

        document = self._run_stage("read", lambda: self._source_reader.read(path))
        if document.error:
            self._on_stage_warning("read", document.error)
        return document

    def list_pages(self, config: NovelprintConfig) -> tuple[SourceDocument, list[Page]]:
        """Read and paginate a source file without writing artifacts."""

        document = self.read_source(config.input_path)
        pages = self.pages(
            document.text, canonicalize_line_endings=config.canonicalize_line_endings
        )
        return document, pages

    def run(self, config: NovelprintConfig) -> PrintManifest:
        """Run read, normalize, paginate, and write stages for one source file."""

        self._validate_config(config)
        document = self.read_source(config.input_path)

        normalizer = MarkdownNormalizer(
            canonicalize_line_endings=config.canonicalize_line_endings
        )
        canonical = self._run_stage("normalize", lambda: normalizer.normalize(document.text))
        fragments = self._run_stage("paginate", lambda: self._paginator.paginate(canonical))
        pages = _number_pages(fragments)

        run_id = f"run-{self._run_hash(config, document.text)[:12]}"
        store = ArtifactStore(config.output_dir / run_id)
        page_paths, artifact_paths = self._run_stage(
            "write",
            lambda: self._write_pages(store, config, document, canonical, pages),
        )

        return self._run_stage(
            "manifest",
            lambda: self._write_manifest(
                store=store,
                run_id=run_id,
                config=config,
                document=document,
                page_paths=page_paths,
                artifact_paths=artifact_paths,
            ),
        )

    def _validate_config(self, config: NovelprintConfig) -> None:
        """Validate config and map failures to stage-aware errors."""

        try:
            config.validate()
        except ValueError as exc:
            raise PipelineStageError(
                stage="config",
                detail=f"Invalid configuration: {exc}",
                hint="Adjust the layout options or config file values and rerun.",
            ) from exc

    def _write_pages(
        self,
        store: ArtifactStore,
        config: NovelprintConfig,
        document: SourceDocument,
        canonical: str,
        pages: list[Page],
    ) -> tuple[list[Path], dict[str, str]]:
        """Persist raw, canonical, and per-page markdown plus the page index."""

        try:
            raw_path = store.save_text(Path("text/raw.md"), document.text)
            canonical_path = store.save_text(Path("text/canonical.md"), canonical)
            page_paths = [
                store.save_text(page_artifact_path(page), page.text) for page in pages
            ]
            index_path = store.save_json(
                Path("pages.json"), pages_payload(pages, page_paths, config.layout)
            )
        except OSError as exc:
            raise PipelineStageError(
                stage="write",
                detail=f"Failed to write page artifacts under `{store.root}`: {exc}",
                hint="Verify the output directory is writable.",
            ) from exc

        artifact_paths = {
            "run_root": str(store.root),
            "raw_text": str(raw_path),
            "canonical_text": str(canonical_path),
            "pages_index": str(index_path),
        }
        if document.error:
            artifact_paths["source_error"] = document.error
        return page_paths, artifact_paths

    def _write_manifest(
        self,
        store: ArtifactStore,
        run_id: str,
        config: NovelprintConfig,
        document: SourceDocument,
        page_paths: list[Path],
        artifact_paths: dict[str, str],
    ) -> PrintManifest:
        """Build and persist a run manifest with deterministic identifiers."""

        manifest = PrintManifest(
            run_id=run_id,
            source_path=document.path,
            page_count=len(page_paths),
            page_paths=tuple(page_paths),
            layout=config.layout.as_manifest_metadata(),
            extra={**dict(config.extra), **artifact_paths},
        )
        try:
            manifest_path = store.save_json(
                Path("run_manifest.json"), manifest_payload(manifest)
            )
        except OSError as exc:
            raise PipelineStageError(
                stage="manifest",
                detail=f"Failed to write run manifest: {exc}",
                hint="Verify the output directory is writable.",
            ) from exc

        return PrintManifest(
            run_id=manifest.run_id,
            source_path=manifest.source_path,
            page_count=manifest.page_count,
            page_paths=manifest.page_paths,
            layout=manifest.layout,
            extra={**manifest.extra, "manifest_path": str(manifest_path)},
        )

    def _run_hash(self, config: NovelprintConfig, source_text: str) -> str:
        """Compute deterministic hash for run-defining inputs."""

        payload = {
            "source_sha256": sha256(source_text.encode("utf-8")).hexdigest(),
            "input_path": str(config.input_path),
            "layout": config.layout.as_manifest_metadata(),
            "canonicalize_line_endings": config.canonicalize_line_endings,
            "extra": dict(config.extra),
        }
        canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
        return sha256(canonical.encode("utf-8")).hexdigest()


def _number_pages(fragments: list[str]) -> list[Page]:
    """Attach positional 1-based page numbers to ordered fragments."""

    total = len(fragments)
    return [
        Page(number=index, total=total, text=fragment)
        for index, fragment in enumerate(fragments, start=1)
    ]
