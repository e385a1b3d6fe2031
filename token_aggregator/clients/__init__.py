from .base import UpstreamError, MalformedResponseError, HttpJsonClient
from .token_list_client import TokenListClient, TokenListFetchError
from .solana_rpc_client import SolanaRpcClient, SolanaRpcError, is_valid_pubkey
from .raydium_client import RaydiumClient, RaydiumApiError
from .coingecko_client import CoinGeckoClient, CoinGeckoApiError

__all__ = [
    'UpstreamError',
    'MalformedResponseError',
    'HttpJsonClient',
    'TokenListClient',
    'TokenListFetchError',
    'SolanaRpcClient',
    'SolanaRpcError',
    'is_valid_pubkey',
    'RaydiumClient',
    'RaydiumApiError',
    'CoinGeckoClient',
    'CoinGeckoApiError',
]
