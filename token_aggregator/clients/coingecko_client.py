import logging
import time
from typing import Any, Dict, List, Optional

import requests

from ..config import Config
from .base import HttpJsonClient, MalformedResponseError, UpstreamError

logger = logging.getLogger(__name__)


class CoinGeckoApiError(UpstreamError):
    pass


class CoinGeckoClient(HttpJsonClient):
    error_class = CoinGeckoApiError
    name = 'CoinGecko'

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None, request_delay: Optional[float] = None):
        super().__init__(session=session, timeout=timeout)
        self.base_url = base_url or Config.COINGECKO_API_URL
        self.trending_endpoint = Config.COINGECKO_TRENDING_ENDPOINT
        self.simple_price_endpoint = Config.COINGECKO_SIMPLE_PRICE_ENDPOINT
        self.request_delay = Config.COINGECKO_REQUEST_DELAY_SECONDS if request_delay is None else request_delay

    def get_trending_items(self) -> List[Dict[str, Any]]:
        """
        Fetch the trending list and unwrap {"coins": [{"item": {...}}, ...]}.

        Raises:
            MalformedResponseError: "coins" missing or not a list
            CoinGeckoApiError: transport failure or non-2xx status
        """
        logger.info('Fetching trending tokens from CoinGecko')
        data = self._get_json(f'{self.base_url}{self.trending_endpoint}')
        coins = data.get('coins') if isinstance(data, dict) else None
        if not isinstance(coins, list):
            raise MalformedResponseError('Invalid response format from CoinGecko API')

        items = [coin['item'] for coin in coins if isinstance(coin, dict) and isinstance(coin.get('item'), dict)]
        logger.info(f'Successfully fetched {len(items)} trending tokens')
        return items

    def get_simple_price(self, coin_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch usd price, market cap, 24h volume and 24h change for one coin id.

        Returns:
            the coin's row ({"usd": ..., "usd_market_cap": ...}) or None when
            rate limited or the id is unknown
        """
        coin_id = coin_id.lower()
        if self.request_delay > 0:
            time.sleep(self.request_delay)

        resp = self._get_response(
            f'{self.base_url}{self.simple_price_endpoint}',
            params={
                'ids': coin_id,
                'vs_currencies': 'usd',
                'include_24hr_change': 'true',
                'include_market_cap': 'true',
                'include_24hr_vol': 'true',
            },
        )
        if resp.status_code == 429:
            logger.warning(f'CoinGecko API rate limited (id={coin_id})')
            return None
        data = self._decode(resp)

        row = data.get(coin_id) if isinstance(data, dict) else None
        if not isinstance(row, dict):
            logger.warning(f'Token not found in CoinGecko: {coin_id}')
            return None
        return row

    def get_coin_price(self, coin_id: str) -> float:
        """Plain USD price by CoinGecko id, 0 on any failure."""
        try:
            data = self._get_json(
                f'{self.base_url}{self.simple_price_endpoint}',
                params={'ids': coin_id, 'vs_currencies': 'usd'},
            )
        except UpstreamError as e:
            logger.error(f'Error fetching token price for {coin_id}: {e}')
            return 0.0
        try:
            return float(((data or {}).get(coin_id) or {}).get('usd') or 0)
        except (TypeError, ValueError, AttributeError):
            return 0.0
