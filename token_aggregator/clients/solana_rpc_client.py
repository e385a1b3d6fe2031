import logging
from typing import Any, List, Optional

import base58
import requests

from ..config import Config
from ..models import TokenSupply
from .base import HttpJsonClient, MalformedResponseError, UpstreamError

logger = logging.getLogger(__name__)

PUBKEY_LENGTH = 32


class SolanaRpcError(UpstreamError):
    pass


def is_valid_pubkey(address: str) -> bool:
    try:
        return len(base58.b58decode(address)) == PUBKEY_LENGTH
    except ValueError:
        return False


class SolanaRpcClient(HttpJsonClient):
    error_class = SolanaRpcError
    name = 'Solana RPC'

    def __init__(self, rpc_url: Optional[str] = None, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        super().__init__(session=session, timeout=timeout)
        self.rpc_url = rpc_url or Config.SOLANA_RPC_URL
        self._request_id = 0

    def _call(self, method: str, params: List[Any]) -> Any:
        self._request_id += 1
        payload = {
            'jsonrpc': '2.0',
            'id': self._request_id,
            'method': method,
            'params': params,
        }
        response = self._post_json(self.rpc_url, payload)
        if not isinstance(response, dict):
            raise MalformedResponseError(f'{method}: unexpected RPC payload {type(response).__name__}')
        if response.get('error'):
            error = response['error']
            message = error.get('message') if isinstance(error, dict) else error
            raise SolanaRpcError(f'{method} failed: {message}')
        if 'result' not in response:
            raise MalformedResponseError(f'{method}: RPC response has no result')
        return response['result']

    def _require_pubkey(self, address: str, label: str):
        if not address or not is_valid_pubkey(address):
            raise SolanaRpcError(f'Invalid {label} address: {address!r}')

    def get_token_supply(self, mint_address: str) -> TokenSupply:
        """
        Fetch total supply of an SPL mint.

        Raises:
            SolanaRpcError: invalid mint, transport failure or RPC error
        """
        self._require_pubkey(mint_address, 'mint')
        result = self._call('getTokenSupply', [mint_address])
        try:
            value = result['value']
            amount = int(value['amount'])
            decimals = int(value['decimals'])
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedResponseError(f'getTokenSupply: could not parse supply for {mint_address}: {e}') from e
        ui_amount = amount / (10 ** decimals)
        logger.debug(f'Supply for {mint_address[:8]}...: {ui_amount} ({decimals} decimals)')
        return TokenSupply(amount=amount, decimals=decimals, ui_amount=ui_amount)

    def get_token_balance(self, wallet_address: str, mint_address: str) -> float:
        """
        Return the wallet's UI balance of a mint.

        Returns 0 when the wallet holds no token account for the mint and on
        any failure (invalid address, transport, RPC error or odd payload).
        """
        try:
            self._require_pubkey(wallet_address, 'wallet')
            self._require_pubkey(mint_address, 'mint')
            accounts = self._call(
                'getTokenAccountsByOwner',
                [wallet_address, {'mint': mint_address}, {'encoding': 'jsonParsed'}],
            )
            value = accounts.get('value') if isinstance(accounts, dict) else None
            if not value or not isinstance(value[0], dict) or not value[0].get('pubkey'):
                return 0.0
            balance = self._call('getTokenAccountBalance', [value[0]['pubkey']])
            ui_amount = balance['value']['uiAmount']
            return float(ui_amount or 0)
        except UpstreamError as e:
            logger.error(f'Error fetching balance of {mint_address} for {wallet_address}: {e}')
            return 0.0
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f'Could not parse balance of {mint_address} for {wallet_address}: {e}')
            return 0.0
