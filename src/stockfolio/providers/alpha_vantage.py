"""Alpha Vantage daily price source over HTTP."""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.alphavantage.co/query"


class AlphaVantagePriceSource:
    """
    Fetches full daily history from Alpha Vantage as CSV.

    The body is returned untouched; an unknown symbol comes back as a
    JSON document containing "Error Message", which the parser rejects.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout_seconds))

    def fetch_series(self, symbol: str) -> str:
        """Fetch TIME_SERIES_DAILY (full output size) for symbol."""
        params = {
            "function": "TIME_SERIES_DAILY",
            "symbol": symbol,
            "datatype": "csv",
            "outputsize": "full",
            "apikey": self._api_key,
        }
        logger.info("Fetching daily series for %s from Alpha Vantage", symbol)
        response = self._client.get(self._base_url, params=params)
        response.raise_for_status()
        return response.text

    def close(self) -> None:
        self._client.close()
