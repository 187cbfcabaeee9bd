"""
Main extraction pipeline - ETL orchestration.

Coordinates document loading, row reconstruction, record extraction,
validation and export.
"""
import json
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Tuple

from .config import (
    DEFAULT_LAYOUT_PROFILE,
    LayoutProfile,
    default_layout_profile,
    get_layout_profile_loader,
)
from .extractors import ExtractionError, JSONExtractor, PDFExtractor
from .models import Document, ExtractionResult, Page, SaleComparable
from .parsers import ExtractionStats, RecordExtractor, backfill_price_per_sf, reconstruct_rows
from .validators import RecordValidator
from .exporters import CSVExporter, ExcelExporter, generate_output_filename
from .utils import setup_logger, log_extraction_audit

logger = setup_logger()

EXPORT_FORMATS = ('xlsx', 'csv', 'json')


class ExtractionPipeline:
    """
    Main pipeline for sale comparables extraction (ETL pattern).

    Phases:
    1. Extract - Load positioned text (pdfplumber for PDFs, JSON dumps as-is)
    2. Transform - Rebuild rows per page, extract records, backfill price/SF, validate
    3. Load - Export to Excel, CSV or JSON
    """

    def __init__(
        self,
        layout_profile: Optional[LayoutProfile] = None,
        max_workers: Optional[int] = None
    ):
        """
        Initialize pipeline.

        Args:
            layout_profile: Fixed profile; when None it is chosen per document
            max_workers: Pages processed concurrently (None or 1 = sequential)
        """
        self.profile_loader = get_layout_profile_loader()
        self.layout_profile = layout_profile
        self.max_workers = max_workers
        self.json_extractor = JSONExtractor()
        self.excel_exporter = ExcelExporter()
        self.csv_exporter = CSVExporter()

    def process(
        self,
        file_path: Path,
        output_path: Optional[Path] = None,
        export_format: Optional[str] = 'xlsx',
        profile_name: Optional[str] = None,
        perform_validation: bool = True,
        raise_on_error: bool = False
    ) -> ExtractionResult:
        """
        Process a document end-to-end.

        Args:
            file_path: Path to PDF or positioned-text JSON
            output_path: Output path (auto-generated if None)
            export_format: 'xlsx', 'csv', 'json' or None to skip export
            profile_name: Layout profile name (auto-detect if None)
            perform_validation: Whether to validate records
            raise_on_error: Re-raise unrecoverable input failures instead
                of returning a failed result

        Returns:
            ExtractionResult with all records and run metadata
        """
        logger.info("=" * 80)
        logger.info(f"Processing document: {file_path.name}")
        logger.info("=" * 80)

        start_time = time.time()
        profile_used = profile_name or DEFAULT_LAYOUT_PROFILE

        try:
            if export_format is not None and export_format not in EXPORT_FORMATS:
                raise ValueError(f"Unsupported export format: {export_format}")

            # Phase 1: EXTRACT
            logger.info("Phase 1: EXTRACT")
            requested = self.resolve_profile(profile_name=profile_name)
            document = self.load_document(file_path, requested)

            # Phase 2: TRANSFORM
            logger.info("Phase 2: TRANSFORM")
            profile = self.resolve_profile(document, profile_name)
            profile_used = profile.profile_name

            records, stats = self.run_pages(document, profile)

            warnings = []
            if perform_validation and records:
                validator = RecordValidator(cap_rate_max=profile.cap_rate_max)
                _, warnings = validator.validate(records)

            result = ExtractionResult(
                records=records,
                success=True,
                source=file_path.name,
                layout_profile=profile_used,
                page_count=document.page_count,
                rows_scanned=stats.rows_scanned,
                rows_skipped=stats.rows_skipped,
                warnings=warnings,
                processing_time=time.time() - start_time
            )

            # Phase 3: LOAD
            if export_format is not None:
                logger.info("Phase 3: LOAD (Export)")
                if output_path is None:
                    output_path = generate_output_filename(file_path.stem, export_format)
                self.export(result, output_path, export_format)
                logger.info(f"✓ Export complete: {output_path}")

            log_extraction_audit(
                file_path=file_path,
                layout_profile=profile_used,
                success=True,
                record_count=result.record_count,
                rows_skipped=result.rows_skipped
            )

            result.processing_time = time.time() - start_time
            logger.info("=" * 80)
            logger.info(f"Processing complete in {result.processing_time:.2f} seconds")
            logger.info(f"  Pages: {result.page_count}")
            logger.info(f"  Records: {result.record_count}")
            logger.info(f"  Skipped rows: {result.rows_skipped}")
            logger.info("=" * 80)

            return result

        except Exception as e:
            if raise_on_error:
                raise
            logger.exception(f"Pipeline failed: {e}")
            log_extraction_audit(
                file_path=file_path,
                layout_profile=profile_used,
                success=False,
                error=str(e)
            )
            return self._create_error_result(
                f"Extraction failed: {e}",
                source=file_path.name,
                processing_time=time.time() - start_time
            )

    def load_document(self, file_path: Path, profile: LayoutProfile) -> Document:
        """
        Load positioned text from a file.

        Args:
            file_path: PDF or JSON document
            profile: Layout profile (supplies pdfplumber word options)

        Returns:
            Document

        Raises:
            ExtractionError: If the file type is unsupported or unreadable
        """
        if self.json_extractor.can_handle(file_path):
            return self.json_extractor.extract(file_path)

        pdf_extractor = PDFExtractor(word_kwargs=profile.pdfplumber_word_kwargs)
        if pdf_extractor.can_handle(file_path):
            return pdf_extractor.extract(file_path)

        raise ExtractionError(f"Unsupported document type: {file_path.suffix or file_path.name}")

    def resolve_profile(
        self,
        document: Optional[Document] = None,
        profile_name: Optional[str] = None
    ) -> LayoutProfile:
        """
        Choose the layout profile for a document.

        Order: fixed pipeline profile, requested name, identifiers on the
        first page, the configured default, then environment settings.

        Raises:
            ValueError: If a requested profile name is unknown
        """
        if self.layout_profile is not None:
            return self.layout_profile

        if profile_name:
            profile = self.profile_loader.get_profile(profile_name)
            if profile is None:
                raise ValueError(
                    f"Unknown layout profile: {profile_name}. "
                    f"Available: {self.profile_loader.get_all_profiles()}"
                )
            return profile

        if document is not None and document.pages:
            detected = self.profile_loader.detect_profile(document.pages[0].text)
            if detected is not None:
                return detected

        return self.profile_loader.get_profile(DEFAULT_LAYOUT_PROFILE) or default_layout_profile()

    def extract_page(
        self,
        page: Page,
        profile: LayoutProfile
    ) -> Tuple[List[SaleComparable], ExtractionStats]:
        """
        Rebuild rows for one page and extract its records.

        Each call uses its own RecordExtractor, so pages share no state.
        """
        rows = reconstruct_rows(page.content, y_threshold=profile.y_threshold)
        extractor = RecordExtractor(
            x_threshold=profile.x_threshold,
            cap_rate_max=profile.cap_rate_max,
            min_primary_fragments=profile.min_primary_fragments
        )
        records = extractor.extract_records(rows, page_number=page.page_number)
        if records:
            logger.info(f"Page {page.page_number}: {len(records)} comparables")
        return records, extractor.stats

    def run_pages(
        self,
        document: Document,
        profile: LayoutProfile
    ) -> Tuple[List[SaleComparable], ExtractionStats]:
        """
        Extract records from every page, in page order, then backfill price/SF.

        Returns:
            Tuple of (records, combined stats)
        """
        workers = self.max_workers or 1
        if workers > 1 and document.page_count > 1:
            with ThreadPoolExecutor(max_workers=min(workers, document.page_count)) as pool:
                # map() yields results in submission order, i.e. page order
                page_results = list(pool.map(lambda p: self.extract_page(p, profile), document.pages))
        else:
            page_results = [self.extract_page(page, profile) for page in document.pages]

        records: List[SaleComparable] = []
        totals = ExtractionStats()
        for page_records, stats in page_results:
            records.extend(page_records)
            totals.rows_scanned += stats.rows_scanned
            totals.rows_skipped += stats.rows_skipped
            totals.continuations_merged += stats.continuations_merged
            totals.records += stats.records

        backfill_price_per_sf(records)
        logger.info(
            f"✓ Extracted {len(records)} comparables from {document.page_count} pages "
            f"({totals.continuations_merged} continuation rows merged)"
        )
        return records, totals

    def extract_records(
        self,
        document: Document,
        profile: Optional[LayoutProfile] = None
    ) -> List[SaleComparable]:
        """
        Run the core reconstruction over an in-memory document.

        Args:
            document: Pages of positioned fragments
            profile: Layout profile (resolved from the document if None)

        Returns:
            Records in page/row order
        """
        profile = profile or self.resolve_profile(document)
        records, _ = self.run_pages(document, profile)
        return records

    def export(self, result: ExtractionResult, output_path: Path, export_format: str) -> Path:
        """Write a result in the requested format."""
        if export_format == 'xlsx':
            return self.excel_exporter.export(result, output_path)
        if export_format == 'csv':
            return self.csv_exporter.export(result, output_path)
        if export_format == 'json':
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(json.dumps(result.to_dict(), indent=2), encoding='utf-8')
            return output_path
        raise ValueError(f"Unsupported export format: {export_format}")

    def _create_error_result(
        self,
        error_message: str,
        source: Optional[str],
        processing_time: float
    ) -> ExtractionResult:
        """Create error result."""
        logger.error(error_message)

        return ExtractionResult(
            records=[],
            success=False,
            source=source,
            error_message=error_message,
            processing_time=processing_time
        )
