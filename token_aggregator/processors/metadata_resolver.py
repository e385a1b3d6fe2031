import logging
from typing import Optional

from ..clients import SolanaRpcClient, TokenListFetchError, UpstreamError
from ..models import TokenListEntry, TokenMetadata
from .token_list_cache import TokenListCache

logger = logging.getLogger(__name__)


class MetadataResolver:
    """Symbol -> token metadata from the Jupiter directory, enriched with live supply over RPC."""

    def __init__(self, token_list_cache: TokenListCache, rpc_client: SolanaRpcClient):
        self.token_list_cache = token_list_cache
        self.rpc_client = rpc_client

    def _lookup(self, symbol: str) -> Optional[TokenListEntry]:
        try:
            return self.token_list_cache.find(symbol)
        except TokenListFetchError as e:
            logger.error(f'Token list unavailable while looking up {symbol}: {e}')
            return None

    def find_mint_address(self, symbol: str) -> Optional[str]:
        entry = self._lookup(symbol)
        if entry is None:
            logger.debug(f'No mint address found for symbol: {symbol}')
            return None
        logger.debug(f'Found mint address for {symbol}: {entry.mint_address}')
        return entry.mint_address

    def resolve_metadata(self, symbol: str) -> Optional[TokenMetadata]:
        logger.debug(f'Getting metadata for symbol: {symbol}')
        entry = self._lookup(symbol)
        if entry is None:
            logger.debug(f'Token not found in Jupiter for {symbol}')
            return None

        logger.info(f'Found token in Jupiter: {entry.name} ({entry.symbol})')
        try:
            supply = self.rpc_client.get_token_supply(entry.mint_address)
        except UpstreamError as e:
            logger.warning(f'RPC failed for {symbol}, using Jupiter data without supply: {e}')
            return TokenMetadata(
                name=entry.name,
                symbol=entry.symbol,
                decimals=entry.decimals,
                supply=0,
                mint_address=entry.mint_address,
                logo_uri=entry.logo_uri,
            )

        logger.info(f'Successfully fetched real supply data for {symbol}')
        return TokenMetadata(
            name=entry.name,
            symbol=entry.symbol,
            decimals=supply.decimals,
            supply=supply.ui_amount,
            mint_address=entry.mint_address,
            logo_uri=entry.logo_uri,
        )
