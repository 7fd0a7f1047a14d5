"""Report generation."""

from investsim.reports.exporter import CsvExporter, TRADE_COLUMNS, PORTFOLIO_COLUMNS

__all__ = ["CsvExporter", "TRADE_COLUMNS", "PORTFOLIO_COLUMNS"]
