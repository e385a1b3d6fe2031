"""
Merge the three token sources into one CanonicalToken.

Precedence per field (highest first):
    price / market cap / volume / 24h change %: trending entry, price quote, 0
    name / symbol:                              trending entry, metadata, SYMBOL
    solana.name / solana.symbol:                metadata, trending entry, SYMBOL
    solana.decimals / supply / mint:            metadata (9 / 0 / omitted)
    solana.logo_uri:                            metadata, trending thumb
    id:                                         trending id, symbol
"""
from typing import Any, Optional

from ..config import Config
from ..models import CanonicalToken, PriceQuote, SolanaInfo, TokenMetadata, TrendingEntry
from ..utils import parse_currency


def _first_number(*values: Any) -> float:
    for value in values:
        numeric = parse_currency(value)
        if numeric:
            return numeric
    return 0.0


def _first_text(*values: Optional[str]) -> str:
    for value in values:
        if value:
            return value
    return ''


def has_any_signal(trending: Optional[TrendingEntry], quote: Optional[PriceQuote],
                   metadata: Optional[TokenMetadata]) -> bool:
    return trending is not None or quote is not None or metadata is not None


def merge_token(symbol: str, trending: Optional[TrendingEntry], quote: Optional[PriceQuote],
                metadata: Optional[TokenMetadata]) -> Optional[CanonicalToken]:
    """Build the canonical record, None only when no source knows the symbol."""
    if not has_any_signal(trending, quote, metadata):
        return None

    upper_symbol = symbol.upper()
    market = trending.data if trending is not None else {}
    change = market.get('price_change_percentage_24h')
    trending_change = change.get('usd') if isinstance(change, dict) else None

    trending_name = trending.name if trending else None
    trending_symbol = trending.symbol if trending else None
    meta_name = metadata.name if metadata else None
    meta_symbol = metadata.symbol if metadata else None

    return CanonicalToken(
        id=_first_text(trending.id if trending else None, symbol.lower()),
        name=_first_text(trending_name, meta_name, upper_symbol),
        symbol=_first_text(trending_symbol, meta_symbol, upper_symbol),
        price=_first_number(market.get('price'), quote.price if quote else None),
        market_cap=_first_number(market.get('market_cap'), quote.market_cap if quote else None),
        volume_24h=_first_number(market.get('total_volume'), quote.volume_24h if quote else None),
        # No source reports an absolute 24h change
        price_change_24h=0.0,
        price_change_percent_24h=_first_number(trending_change, quote.price_change_percent_24h if quote else None),
        solana=SolanaInfo(
            name=_first_text(meta_name, trending_name, upper_symbol),
            symbol=_first_text(meta_symbol, trending_symbol, upper_symbol),
            supply=metadata.supply if metadata and metadata.supply else 0,
            decimals=metadata.decimals if metadata and metadata.decimals is not None else Config.DEFAULT_TOKEN_DECIMALS,
            mint_address=metadata.mint_address if metadata else None,
            logo_uri=(metadata.logo_uri if metadata else None) or (trending.thumb if trending else None),
        ),
    )
