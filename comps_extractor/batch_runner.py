"""Batch extraction of sale comparables over many documents."""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .pipeline import EXPORT_FORMATS, ExtractionPipeline

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


@dataclass
class BatchFileResult:
    """Outcome for one document in a batch."""

    file: str
    output: str
    json: Optional[str]
    success: bool
    skipped: bool = False
    records: int = 0
    derived_price_per_sf: int = 0
    rows_skipped: int = 0
    pages: int = 0
    layout_profile: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    error: Optional[str] = None
    processing_time: Optional[float] = None


@dataclass
class BatchRunSummary:
    """All per-document outcomes of a batch plus their totals."""

    root_directory: Optional[str]
    output_directory: str
    generated_at: str
    results: List[BatchFileResult]

    @property
    def totals(self) -> dict:
        """Counts across the batch (skipped files count as neither success nor failure)."""
        processed = [r for r in self.results if not r.skipped]
        succeeded = [r for r in processed if r.success]
        return {
            'processed': len(self.results),
            'successes': len(succeeded),
            'failures': len(processed) - len(succeeded),
            'skipped': len(self.results) - len(processed),
            'records': sum(r.records for r in succeeded),
            'derived_price_per_sf': sum(r.derived_price_per_sf for r in succeeded),
            'warnings': sum(len(r.warnings) for r in succeeded),
        }

    def to_manifest(self) -> dict:
        """Serialise the summary into a JSON-friendly manifest."""
        return {
            'root_directory': self.root_directory,
            'output_directory': self.output_directory,
            'generated_at': self.generated_at,
            'results': [asdict(result) for result in self.results],
            'totals': self.totals,
        }


def run_batch(
    files: Iterable[Path],
    output_dir: Path,
    *,
    format: str = 'xlsx',
    profile: Optional[str] = None,
    json_output_dir: Optional[Path] = None,
    skip_existing: bool = False,
    progress_callback: Optional[ProgressCallback] = None,
    root_directory: Optional[Path] = None,
    pipeline: Optional[ExtractionPipeline] = None,
) -> BatchRunSummary:
    """
    Extract comparables from every document and summarise the run.

    Args:
        files: PDF or positioned-text JSON documents
        output_dir: Directory for one export per document (``<stem>.<format>``)
        format: Export format ('xlsx', 'csv' or 'json')
        profile: Layout profile forced for every document (auto-detect if None)
        json_output_dir: Also write each result's JSON payload here
        skip_existing: Leave documents whose export already exists
        progress_callback: Called as (index, total, file name) after each document
        root_directory: Recorded in the manifest
        pipeline: Pipeline to reuse (a default one is created if None)

    Returns:
        BatchRunSummary, one result per document in input order

    Raises:
        ValueError: If the export format is not supported
    """
    export_format = format.lower()
    if export_format not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {format}")

    documents = list(files)
    output_dir.mkdir(parents=True, exist_ok=True)
    if json_output_dir:
        json_output_dir.mkdir(parents=True, exist_ok=True)

    pipeline = pipeline or ExtractionPipeline()
    results: List[BatchFileResult] = []

    for idx, file_path in enumerate(documents, start=1):
        output_path = output_dir / f"{file_path.stem}.{export_format}"
        json_path = json_output_dir / f"{file_path.stem}.json" if json_output_dir else None

        if skip_existing and output_path.exists():
            logger.info(f"Skipping {file_path.name}: {output_path.name} exists")
            results.append(BatchFileResult(
                file=file_path.name,
                output=str(output_path),
                json=str(json_path) if json_path else None,
                success=True,
                skipped=True,
            ))
        else:
            results.append(_extract_one(pipeline, file_path, output_path, export_format, profile, json_path))

        if progress_callback:
            progress_callback(idx, len(documents), file_path.name)

    summary = BatchRunSummary(
        root_directory=str(root_directory) if root_directory else None,
        output_directory=str(output_dir),
        generated_at=datetime.now(timezone.utc).isoformat(),
        results=results,
    )
    totals = summary.totals
    logger.info(
        f"Batch finished: {totals['successes']}/{totals['processed']} documents, "
        f"{totals['records']} comparables"
    )
    return summary


def _extract_one(
    pipeline: ExtractionPipeline,
    file_path: Path,
    output_path: Path,
    export_format: str,
    profile: Optional[str],
    json_path: Optional[Path],
) -> BatchFileResult:
    """Run one document; any failure is recorded on the result, never raised."""
    entry = BatchFileResult(
        file=file_path.name,
        output=str(output_path),
        json=str(json_path) if json_path else None,
        success=False,
    )

    try:
        result = pipeline.process(
            file_path=file_path,
            output_path=output_path,
            export_format=export_format,
            profile_name=profile,
        )
        if json_path:
            json_path.write_text(json.dumps(result.to_dict(), indent=2), encoding='utf-8')
    except Exception as exc:  # noqa: BLE001
        logger.error(f"✗ {file_path.name}: {exc}")
        entry.error = str(exc)
        return entry

    entry.success = result.success
    entry.records = result.record_count
    entry.derived_price_per_sf = len(result.derived_price_per_sf_records)
    entry.rows_skipped = result.rows_skipped
    entry.pages = result.page_count
    entry.layout_profile = result.layout_profile
    entry.warnings = list(result.warnings)
    entry.error = None if result.success else result.error_message
    entry.processing_time = result.processing_time
    return entry


def write_manifest(summary: BatchRunSummary, manifest_path: Path) -> None:
    """Persist a BatchRunSummary manifest to disk."""
    manifest_path.parent.mkdir(parents=True, exist_ok=True)
    manifest_path.write_text(json.dumps(summary.to_manifest(), indent=2), encoding='utf-8')
