import logging
from typing import Optional

from ..clients import CoinGeckoClient, RaydiumClient, UpstreamError
from ..models import PriceQuote
from ..utils import parse_currency
from .metadata_resolver import MetadataResolver

logger = logging.getLogger(__name__)


class PriceResolver:
    """
    Price lookup with an ordered fallback chain:
    Raydium by mint (plus CoinGecko market fields), then CoinGecko alone.
    """

    def __init__(self, metadata_resolver: MetadataResolver, dex_client: RaydiumClient, aggregator_client: CoinGeckoClient):
        self.metadata_resolver = metadata_resolver
        self.dex_client = dex_client
        self.aggregator_client = aggregator_client

    def _dex_price(self, mint_address: str) -> Optional[float]:
        try:
            return self.dex_client.get_mint_price(mint_address)
        except UpstreamError as e:
            logger.error(f'Error fetching price from Raydium for {mint_address}: {e}')
            return None

    def _aggregator_quote(self, symbol: str) -> Optional[PriceQuote]:
        try:
            row = self.aggregator_client.get_simple_price(symbol.lower())
        except UpstreamError as e:
            logger.error(f'Error fetching token data from CoinGecko for {symbol}: {e}')
            return None
        if row is None:
            return None
        return PriceQuote(
            price=parse_currency(row.get('usd')) or 0.0,
            market_cap=parse_currency(row.get('usd_market_cap')),
            volume_24h=parse_currency(row.get('usd_24h_vol')),
            price_change_percent_24h=parse_currency(row.get('usd_24h_change')),
        )

    def resolve_price(self, symbol: str) -> Optional[PriceQuote]:
        logger.debug(f'Fetching token data for symbol: {symbol}')

        mint_address = self.metadata_resolver.find_mint_address(symbol)
        if mint_address:
            dex_price = self._dex_price(mint_address)
            if dex_price is not None:
                logger.info(f'Raydium price for {symbol}: {dex_price}, trying CoinGecko for market data')
                extra = self._aggregator_quote(symbol)
                return PriceQuote(
                    price=dex_price,
                    market_cap=extra.market_cap if extra else None,
                    volume_24h=extra.volume_24h if extra else None,
                    price_change_percent_24h=extra.price_change_percent_24h if extra else None,
                )
            logger.warning(f'Raydium had no price for {symbol}, falling back to CoinGecko')
        else:
            logger.warning(f'No mint address found for {symbol}, trying CoinGecko')

        quote = self._aggregator_quote(symbol)
        if quote is not None:
            logger.info(f'CoinGecko fallback successful for {symbol}, price: {quote.price}')
            return quote

        logger.warning(f'All price sources failed for {symbol}')
        return None
