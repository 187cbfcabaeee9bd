"""
Excel exporter for sale comparables.

Generates Excel workbook with 2 sheets:
1. Sales Comparables - One row per reconstructed record
2. Extraction Log - Run metadata, warnings and derived values
"""
import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter

from ..models import ExtractionResult
from ..utils.date_parser import parse_sale_month

logger = logging.getLogger(__name__)

HEADERS = [
    "Date",
    "Property Name",
    "Major Tenant",
    "Borough/Market",
    "SF",
    "Price",
    "Price/SF",
    "Cap Rate",
    "Purchaser",
    "Seller",
    "Notes",
    "Page",
]


class ExcelExporter:
    """Export extraction results to formatted Excel workbook."""

    # Colors
    HEADER_COLOR = "366092"  # Dark blue
    WARNING_COLOR = "FFC7CE"  # Light red
    SUCCESS_COLOR = "C6EFCE"  # Light green
    INFO_COLOR = "FFEB9C"  # Light yellow

    CURRENCY_FORMAT = '$#,##0'
    AREA_FORMAT = '#,##0'
    PERCENT_FORMAT = '0.00"%"'

    def export(
        self,
        result: ExtractionResult,
        output_path: Path,
        highlight_derived: bool = True
    ) -> Path:
        """
        Export extraction result to Excel.

        Args:
            result: Extraction result to export
            output_path: Path for output Excel file
            highlight_derived: Whether to shade computed price/SF cells

        Returns:
            Path to created Excel file
        """
        logger.info(f"Exporting to Excel: {output_path}")

        wb = openpyxl.Workbook()

        # Remove default sheet
        if "Sheet" in wb.sheetnames:
            wb.remove(wb["Sheet"])

        self._create_records_sheet(wb, result, highlight_derived)
        self._create_audit_log_sheet(wb, result)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        logger.info(f"Excel export complete: {output_path}")

        return output_path

    def _create_records_sheet(
        self,
        wb: openpyxl.Workbook,
        result: ExtractionResult,
        highlight_derived: bool
    ) -> None:
        """Create comparables sheet with formatted data."""
        ws = wb.create_sheet("Sales Comparables", 0)

        for col, header in enumerate(HEADERS, 1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = PatternFill(start_color=self.HEADER_COLOR, fill_type="solid")
            cell.alignment = Alignment(horizontal="center", vertical="center")

        for row, record in enumerate(result.records, 2):
            sale_month = parse_sale_month(record.date)
            date_cell = ws.cell(row=row, column=1, value=sale_month or record.date)
            if sale_month:
                date_cell.number_format = "mmm-yy"

            values = [
                record.property_name,
                record.major_tenant,
                record.borough_market,
                record.square_feet,
                record.price,
                record.price_per_sf,
                record.cap_rate,
                record.purchaser,
                record.seller,
                record.notes or "",
                record.page_number,
            ]
            for col, value in enumerate(values, 2):
                ws.cell(row=row, column=col, value=value)

            ws.cell(row=row, column=5).number_format = self.AREA_FORMAT
            ws.cell(row=row, column=6).number_format = self.CURRENCY_FORMAT
            ws.cell(row=row, column=7).number_format = self.CURRENCY_FORMAT
            ws.cell(row=row, column=8).number_format = self.PERCENT_FORMAT

            if highlight_derived and record.price_per_sf_derived:
                ws.cell(row=row, column=7).fill = PatternFill(
                    start_color=self.INFO_COLOR,
                    fill_type="solid"
                )

        for col in range(1, len(HEADERS) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 15

        # Text columns wider
        for letter in ("B", "I", "J", "K"):
            ws.column_dimensions[letter].width = 35

        # Freeze header row
        ws.freeze_panes = "A2"

    def _create_audit_log_sheet(
        self,
        wb: openpyxl.Workbook,
        result: ExtractionResult
    ) -> None:
        """Create audit log sheet."""
        ws = wb.create_sheet("Extraction Log", 1)

        ws.cell(row=1, column=1, value="Extraction Audit Log")
        ws.cell(row=1, column=1).font = Font(bold=True, size=14)

        row = 3

        ws.cell(row=row, column=1, value="Status:")
        ws.cell(row=row, column=2, value="SUCCESS" if result.success else "FAILED")
        ws.cell(row=row, column=2).font = Font(bold=True)
        ws.cell(row=row, column=2).fill = PatternFill(
            start_color=self.SUCCESS_COLOR if result.success else self.WARNING_COLOR,
            fill_type="solid"
        )
        row += 2

        metadata = [
            ("Source:", result.source or "N/A"),
            ("Layout Profile:", result.layout_profile),
            ("Pages:", result.page_count),
            ("Rows Scanned:", result.rows_scanned),
            ("Rows Skipped:", result.rows_skipped),
            ("Records:", result.record_count),
            ("Processing Time:", f"{result.processing_time:.2f} seconds"),
            ("Extracted At:", result.extracted_at.strftime("%Y-%m-%d %H:%M:%S")),
        ]
        for label, value in metadata:
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value)
            row += 1
        row += 1

        if result.warnings:
            ws.cell(row=row, column=1, value="Warnings:")
            ws.cell(row=row, column=1).font = Font(bold=True)
            row += 1

            for warning in result.warnings:
                ws.cell(row=row, column=2, value=f"⚠ {warning}")
                ws.cell(row=row, column=2).fill = PatternFill(
                    start_color=self.INFO_COLOR,
                    fill_type="solid"
                )
                row += 1

            row += 1

        if result.error_message:
            ws.cell(row=row, column=1, value="Error:")
            ws.cell(row=row, column=1).font = Font(bold=True)
            ws.cell(row=row, column=2, value=result.error_message)
            ws.cell(row=row, column=2).fill = PatternFill(
                start_color=self.WARNING_COLOR,
                fill_type="solid"
            )
            row += 2

        derived = result.derived_price_per_sf_records
        if derived:
            ws.cell(row=row, column=1, value=f"Derived Price/SF ({len(derived)}):")
            ws.cell(row=row, column=1).font = Font(bold=True)
            row += 1

            for col, label in enumerate(["Date", "Property", "Price/SF"], 1):
                ws.cell(row=row, column=col, value=label).font = Font(bold=True)
            row += 1

            for record in derived[:20]:  # Limit to 20
                ws.cell(row=row, column=1, value=record.date)
                ws.cell(row=row, column=2, value=record.property_name[:50])
                ws.cell(row=row, column=3, value=record.price_per_sf)
                row += 1

        ws.column_dimensions['A'].width = 30
        ws.column_dimensions['B'].width = 60
        ws.column_dimensions['C'].width = 15


def generate_output_filename(
    source_name: str,
    export_format: str = "xlsx",
    output_dir: Optional[Path] = None
) -> Path:
    """
    Generate standardized output filename.

    Format: {source}_comparables_{YYYY-MM-DD}_{timestamp}.{format}

    Args:
        source_name: Input file stem
        export_format: File extension
        output_dir: Output directory (default: ./output)

    Returns:
        Path for output file
    """
    from ..config.settings import OUTPUT_DIR

    if output_dir is None:
        output_dir = OUTPUT_DIR

    now = datetime.now()
    stem = source_name.lower().replace(" ", "_")
    filename = f"{stem}_comparables_{now:%Y-%m-%d}_{now:%H%M%S}.{export_format}"

    return output_dir / filename
