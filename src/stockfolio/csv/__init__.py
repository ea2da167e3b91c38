"""CSV import/export of the portfolio file."""

from stockfolio.csv.importer import PortfolioCsvImporter, CSV_COLUMNS
from stockfolio.csv.exporter import PortfolioCsvExporter

__all__ = [
    "PortfolioCsvImporter",
    "PortfolioCsvExporter",
    "CSV_COLUMNS",
]
