"""Core utilities and shared functionality."""

from stockfolio.core.timezone import (
    now_eastern,
    today_eastern,
    parse_date,
    is_weekend,
    EASTERN_TZ,
)
from stockfolio.core.exceptions import (
    ErrorKind,
    AppError,
    ValidationError,
    EmptyNameError,
    DuplicateNameError,
    PortfolioNotFoundError,
    InvalidQuantityError,
    FutureDateError,
    WeekendDateError,
    DuplicateTransactionError,
    InvalidSymbolError,
    InsufficientQuantityError,
    InvalidDateRangeError,
    InvalidWindowError,
    NoPriceDataError,
    PersistenceError,
)
from stockfolio.core.result import Result, capture

__all__ = [
    "now_eastern",
    "today_eastern",
    "parse_date",
    "is_weekend",
    "EASTERN_TZ",
    "ErrorKind",
    "AppError",
    "ValidationError",
    "EmptyNameError",
    "DuplicateNameError",
    "PortfolioNotFoundError",
    "InvalidQuantityError",
    "FutureDateError",
    "WeekendDateError",
    "DuplicateTransactionError",
    "InvalidSymbolError",
    "InsufficientQuantityError",
    "InvalidDateRangeError",
    "InvalidWindowError",
    "NoPriceDataError",
    "PersistenceError",
    "Result",
    "capture",
]
