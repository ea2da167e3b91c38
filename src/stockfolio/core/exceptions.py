"""Application-level exceptions."""

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable error codes carried by every AppError."""

    APP_ERROR = "APP_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    EMPTY_NAME = "EMPTY_NAME"
    DUPLICATE_NAME = "DUPLICATE_NAME"
    PORTFOLIO_NOT_FOUND = "PORTFOLIO_NOT_FOUND"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    FUTURE_DATE = "FUTURE_DATE"
    WEEKEND_DATE = "WEEKEND_DATE"
    DUPLICATE_TRANSACTION = "DUPLICATE_TRANSACTION"
    INVALID_SYMBOL = "INVALID_SYMBOL"
    INSUFFICIENT_QUANTITY = "INSUFFICIENT_QUANTITY"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    INVALID_WINDOW = "INVALID_WINDOW"
    NO_PRICE_DATA = "NO_PRICE_DATA"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    IO_FAILURE = "IO_FAILURE"


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: ErrorKind = ErrorKind.APP_ERROR):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: ErrorKind = ErrorKind.VALIDATION_ERROR):
        super().__init__(message, code=code)


class EmptyNameError(ValidationError):
    """Raised when a portfolio name is blank."""

    def __init__(self):
        super().__init__("Portfolio name cannot be empty", code=ErrorKind.EMPTY_NAME)


class DuplicateNameError(ValidationError):
    """Raised when a portfolio name is already taken (case-insensitive)."""

    def __init__(self, name: str):
        super().__init__(f"Portfolio already exists: {name}", code=ErrorKind.DUPLICATE_NAME)


class PortfolioNotFoundError(AppError):
    """Raised when a requested portfolio does not exist."""

    def __init__(self, name: str):
        super().__init__(f"Portfolio not found: {name}", code=ErrorKind.PORTFOLIO_NOT_FOUND)


class InvalidQuantityError(ValidationError):
    """Raised when a trade quantity is not acceptable."""

    def __init__(self, quantity):
        super().__init__(f"Quantity must be positive: {quantity}", code=ErrorKind.INVALID_QUANTITY)


class FutureDateError(ValidationError):
    """Raised when a date lies after today."""

    def __init__(self, value):
        super().__init__(f"Date cannot be in the future: {value}", code=ErrorKind.FUTURE_DATE)


class WeekendDateError(ValidationError):
    """Raised when a trade is placed on a Saturday or Sunday."""

    def __init__(self, value):
        super().__init__(
            f"Trades can only be placed on weekdays: {value}", code=ErrorKind.WEEKEND_DATE
        )


class DuplicateTransactionError(ValidationError):
    """Raised when an instrument already has a transaction on the given date."""

    def __init__(self, symbol: str, value):
        super().__init__(
            f"Transaction already exists for {symbol} on {value}",
            code=ErrorKind.DUPLICATE_TRANSACTION,
        )


class InvalidSymbolError(AppError):
    """Raised when the price source does not recognise a symbol."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Invalid stock symbol: {symbol}", code=ErrorKind.INVALID_SYMBOL)


class InsufficientQuantityError(AppError):
    """Raised when attempting to sell more shares than held."""

    def __init__(self, symbol: str, requested: str, available: str):
        super().__init__(
            f"Insufficient shares of {symbol}: requested {requested}, available {available}",
            code=ErrorKind.INSUFFICIENT_QUANTITY,
        )


class InvalidDateRangeError(ValidationError):
    """Raised when an analysis date range is empty, reversed or in the future."""

    def __init__(self, message: str):
        super().__init__(message, code=ErrorKind.INVALID_DATE_RANGE)


class InvalidWindowError(ValidationError):
    """Raised when moving-average window parameters are unusable."""

    def __init__(self, message: str):
        super().__init__(message, code=ErrorKind.INVALID_WINDOW)


class NoPriceDataError(AppError):
    """Raised when an operation needs a price bar that the source does not have."""

    def __init__(self, symbol: str, value):
        super().__init__(
            f"Price data not available for {symbol} on {value}", code=ErrorKind.NO_PRICE_DATA
        )


class PersistenceError(AppError):
    """Raised when a cache or portfolio file cannot be read or written."""

    def __init__(self, message: str, code: ErrorKind = ErrorKind.IO_FAILURE):
        super().__init__(message, code=code)
