"""Exporters for extraction results."""
from .excel_exporter import ExcelExporter, generate_output_filename
from .csv_exporter import CSVExporter, records_to_dataframe

__all__ = ['ExcelExporter', 'CSVExporter', 'generate_output_filename', 'records_to_dataframe']
