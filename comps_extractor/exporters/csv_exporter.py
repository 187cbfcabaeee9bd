"""CSV and DataFrame export for sale comparables."""
import logging
from pathlib import Path

import pandas as pd

from ..models import ExtractionResult, OUTPUT_KEYS

logger = logging.getLogger(__name__)

COLUMNS = list(OUTPUT_KEYS.values()) + ['notes', 'pageNumber', 'pricePerSFDerived']


def records_to_dataframe(result: ExtractionResult) -> pd.DataFrame:
    """
    Convert extraction records to a DataFrame.

    Columns follow the output keys (camelCase) in table order, followed by
    notes and provenance columns. An empty result gives an empty frame with
    the same columns.
    """
    rows = []
    for record in result.records:
        row = record.to_dict()
        row.setdefault('notes', '')
        row['pageNumber'] = record.page_number
        row['pricePerSFDerived'] = record.price_per_sf_derived
        rows.append(row)

    return pd.DataFrame(rows, columns=COLUMNS)


class CSVExporter:
    """Export extraction results to CSV."""

    def export(self, result: ExtractionResult, output_path: Path) -> Path:
        """
        Export extraction result to CSV.

        Args:
            result: Extraction result to export
            output_path: Path for output CSV file

        Returns:
            Path to created CSV file
        """
        logger.info(f"Exporting to CSV: {output_path}")

        output_path.parent.mkdir(parents=True, exist_ok=True)
        records_to_dataframe(result).to_csv(output_path, index=False, encoding='utf-8')

        logger.info(f"CSV export complete: {output_path} ({result.record_count} rows)")
        return output_path
