import logging
from typing import List, Optional

from ..clients import CoinGeckoClient, RaydiumClient, SolanaRpcClient, TokenListClient, UpstreamError
from ..models import CanonicalToken, TrendingEntry
from ..processors import MetadataResolver, PriceResolver, TokenListCache, TrendingFetcher
from .reconciliation import merge_token

logger = logging.getLogger(__name__)


class TokenDataService:
    """
    Owns the token-list cache and resolvers for one process and
    answers the two read operations exposed by the API.
    """

    def __init__(self, token_list_cache: TokenListCache, metadata_resolver: MetadataResolver,
                 price_resolver: PriceResolver, trending_fetcher: TrendingFetcher):
        self.token_list_cache = token_list_cache
        self.metadata_resolver = metadata_resolver
        self.price_resolver = price_resolver
        self.trending_fetcher = trending_fetcher

    @classmethod
    def from_config(cls) -> 'TokenDataService':
        logger.info('Initializing token data service')
        coingecko = CoinGeckoClient()
        cache = TokenListCache(TokenListClient().fetch_tokens)
        metadata_resolver = MetadataResolver(cache, SolanaRpcClient())
        price_resolver = PriceResolver(metadata_resolver, RaydiumClient(), coingecko)
        return cls(cache, metadata_resolver, price_resolver, TrendingFetcher(coingecko))

    def get_trending(self) -> List[TrendingEntry]:
        return self.trending_fetcher.get_trending()

    def _find_trending(self, symbol: str) -> Optional[TrendingEntry]:
        try:
            entry = self.trending_fetcher.find_by_symbol(symbol)
        except UpstreamError as e:
            logger.warning(f'Could not fetch trending data for {symbol}: {e}')
            return None
        if entry is not None:
            logger.info(f'Found {symbol} in trending data with CoinGecko ID {entry.id}')
        return entry

    def reconcile(self, symbol: str) -> Optional[CanonicalToken]:
        trending = self._find_trending(symbol)
        metadata = self.metadata_resolver.resolve_metadata(symbol)
        logger.debug(f'Solana metadata for {symbol}: {metadata}')
        quote = self.price_resolver.resolve_price(symbol)
        logger.debug(f'Price quote for {symbol}: {quote}')

        token = merge_token(symbol, trending, quote, metadata)
        if token is None:
            logger.warning(f'No data available for token {symbol}')
        else:
            logger.info(f'Returning combined token data for {symbol} (price={token.price})')
        return token
