from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class TokenListEntry:
    symbol: str
    mint_address: str
    decimals: int
    name: str = ''
    logo_uri: Optional[str] = None

    @classmethod
    def from_directory_item(cls, item: dict) -> Optional['TokenListEntry']:
        """Build an entry from a Jupiter token list item, None if it has no address/symbol."""
        address = item.get('address')
        symbol = item.get('symbol')
        if not address or not symbol:
            return None
        try:
            decimals = int(item.get('decimals') or 0)
        except (TypeError, ValueError):
            decimals = 0
        return cls(
            symbol=str(symbol),
            mint_address=str(address),
            decimals=decimals,
            name=str(item.get('name') or ''),
            logo_uri=item.get('logoURI') or None,
        )


@dataclass(frozen=True)
class CachedDirectory:
    entries: Tuple[TokenListEntry, ...]
    fetched_at: int  # epoch milliseconds


@dataclass
class PriceQuote:
    price: float
    market_cap: Optional[float] = None
    volume_24h: Optional[float] = None
    price_change_percent_24h: Optional[float] = None


@dataclass
class TrendingEntry:
    id: str
    symbol: str
    name: str
    market_cap_rank: Optional[int] = None
    thumb: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_item(cls, item: dict) -> 'TrendingEntry':
        return cls(
            id=str(item.get('id') or ''),
            symbol=str(item.get('symbol') or ''),
            name=str(item.get('name') or ''),
            market_cap_rank=item.get('market_cap_rank'),
            thumb=item.get('thumb') or None,
            data=item.get('data') if isinstance(item.get('data'), dict) else {},
            raw=item,
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.raw or {
            'id': self.id,
            'symbol': self.symbol,
            'name': self.name,
            'market_cap_rank': self.market_cap_rank,
            'thumb': self.thumb,
            'data': self.data,
        }


@dataclass
class TokenSupply:
    amount: int  # raw base units
    decimals: int
    ui_amount: float


@dataclass
class TokenMetadata:
    name: str
    symbol: str
    decimals: int
    supply: float
    mint_address: Optional[str] = None
    logo_uri: Optional[str] = None


@dataclass
class SolanaInfo:
    name: str
    symbol: str
    supply: float
    decimals: int
    mint_address: Optional[str] = None
    logo_uri: Optional[str] = None


@dataclass
class CanonicalToken:
    id: str
    name: str
    symbol: str
    price: float
    market_cap: float
    volume_24h: float
    price_change_24h: float
    price_change_percent_24h: float
    solana: SolanaInfo

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape served by /api/token/{symbol}."""
        solana = {
            'name': self.solana.name,
            'symbol': self.solana.symbol,
            'supply': self.solana.supply,
            'decimals': self.solana.decimals,
        }
        if self.solana.mint_address:
            solana['mintAddress'] = self.solana.mint_address
        if self.solana.logo_uri:
            solana['logoURI'] = self.solana.logo_uri
        return {
            'id': self.id,
            'name': self.name,
            'symbol': self.symbol,
            'price': self.price,
            'marketCap': self.market_cap,
            'volume24h': self.volume_24h,
            'priceChange24h': self.price_change_24h,
            'priceChangePercent24h': self.price_change_percent_24h,
            'solana': solana,
        }
