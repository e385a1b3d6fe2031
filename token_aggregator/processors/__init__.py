from .token_list_cache import TokenListCache, is_fresh, now_ms
from .metadata_resolver import MetadataResolver
from .price_resolver import PriceResolver
from .trending_fetcher import TrendingFetcher

__all__ = ['TokenListCache', 'is_fresh', 'now_ms', 'MetadataResolver', 'PriceResolver', 'TrendingFetcher']
