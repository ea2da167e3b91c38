"""Enumerations for domain models."""

from enum import Enum


class TransactionType(str, Enum):
    """Direction of a ledger transaction, derived from the quantity sign."""

    BUY = "BUY"
    SELL = "SELL"


class Resolution(str, Enum):
    """Sampling granularity for date-range series."""

    DAILY = "daily"
    EVERY_10_DAYS = "every 10 days"
    MONTHLY = "monthly"
    EVERY_3_MONTHS = "every 3 months"
    YEARLY = "yearly"


class GainLossDirection(str, Enum):
    """Outcome of comparing a day's close to its open."""

    GAINED = "GAINED"
    LOST = "LOST"
    UNCHANGED = "UNCHANGED"


class InvestmentFrequency(str, Enum):
    """Schedule step for recurring (dollar-cost averaging) investments."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"
