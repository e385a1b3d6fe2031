import logging
from typing import Optional

import requests

from ..config import Config
from ..utils import parse_currency
from .base import HttpJsonClient, UpstreamError

logger = logging.getLogger(__name__)


class RaydiumApiError(UpstreamError):
    pass


class RaydiumClient(HttpJsonClient):
    error_class = RaydiumApiError
    name = 'Raydium'

    def __init__(self, base_url: Optional[str] = None, price_endpoint: Optional[str] = None,
                 session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        super().__init__(session=session, timeout=timeout)
        self.base_url = base_url or Config.RAYDIUM_API_URL
        self.price_endpoint = price_endpoint or Config.RAYDIUM_PRICE_ENDPOINT

    def get_mint_price(self, mint_address: str) -> Optional[float]:
        """
        USD price of a mint from Raydium.

        Returns:
            float price, or None when Raydium has no (numeric) price for the mint

        Raises:
            RaydiumApiError: transport failure or non-2xx status
        """
        logger.debug(f'Fetching Raydium price for mint: {mint_address}')
        data = self._get_json(f'{self.base_url}{self.price_endpoint}', params={'mints': mint_address})
        logger.debug(f'Raydium API Response Data: {data}')

        prices = data.get('data') if isinstance(data, dict) else None
        if not isinstance(data, dict) or not data.get('success') or not isinstance(prices, dict) or not prices.get(mint_address):
            logger.warning(f'No price data found for mint: {mint_address}')
            return None

        price = parse_currency(prices[mint_address])
        if price is None:
            logger.warning(f'Invalid price data for mint: {mint_address} ({prices[mint_address]!r})')
            return None
        return price
