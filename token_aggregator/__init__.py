"""
Solana token data aggregator: Jupiter directory + Solana RPC + Raydium + CoinGecko
merged into one token view behind a small read API.
"""

from .config import Config, setup_logging
from .core import TokenDataService, merge_token
from .models import CanonicalToken, PriceQuote, TokenListEntry, TokenMetadata, TrendingEntry

__all__ = [
    'Config',
    'setup_logging',
    'TokenDataService',
    'merge_token',
    'CanonicalToken',
    'PriceQuote',
    'TokenListEntry',
    'TokenMetadata',
    'TrendingEntry',
]
