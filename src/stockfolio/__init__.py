"""Stockfolio: portfolio ledger, cached daily prices and trend analytics."""

__version__ = "0.1.0"
