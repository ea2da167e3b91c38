"""Identifier tagged union: a stock symbol or a portfolio name."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Symbol:
    """A ticker symbol (stored upper-case)."""

    value: str


@dataclass(frozen=True)
class PortfolioName:
    """The name of a portfolio in the registry."""

    value: str


Identifier = Union[Symbol, PortfolioName]
