import unittest
from unittest.mock import MagicMock

from token_aggregator.clients import SolanaRpcError, TokenListFetchError
from token_aggregator.models import TokenListEntry, TokenMetadata, TokenSupply
from token_aggregator.processors import MetadataResolver

BONK = TokenListEntry(
    symbol='Bonk',
    mint_address='DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263',
    decimals=5,
    name='Bonk',
    logo_uri='https://arweave.net/bonk.png',
)


class TestMetadataResolver(unittest.TestCase):
    def setUp(self):
        self.cache = MagicMock()
        self.cache.find.side_effect = lambda symbol: BONK if symbol.upper() == 'BONK' else None
        self.rpc = MagicMock()
        self.resolver = MetadataResolver(self.cache, self.rpc)

    def test_rpc_supply_and_decimals_take_precedence(self):
        self.rpc.get_token_supply.return_value = TokenSupply(amount=88_000_000_000_000_000, decimals=6, ui_amount=88_000_000_000.0)

        metadata = self.resolver.resolve_metadata('bonk')

        self.assertEqual(metadata.decimals, 6)
        self.assertEqual(metadata.supply, 88_000_000_000.0)
        self.assertEqual(metadata.mint_address, BONK.mint_address)
        self.assertEqual(metadata.logo_uri, BONK.logo_uri)
        self.rpc.get_token_supply.assert_called_once_with(BONK.mint_address)

    def test_rpc_failure_falls_back_to_directory(self):
        self.rpc.get_token_supply.side_effect = SolanaRpcError('getTokenSupply failed: timeout')

        metadata = self.resolver.resolve_metadata('BONK')

        self.assertEqual(metadata.decimals, 5)
        self.assertEqual(metadata.supply, 0)
        self.assertEqual(metadata.name, 'Bonk')

    def test_metadata_record(self):
        self.rpc.get_token_supply.side_effect = SolanaRpcError('getTokenSupply failed: timeout')

        metadata = self.resolver.resolve_metadata('bonk')

        self.assertEqual(metadata, TokenMetadata(
            name='Bonk',
            symbol='Bonk',
            decimals=5,
            supply=0,
            mint_address=BONK.mint_address,
            logo_uri=BONK.logo_uri,
        ))

    def test_unknown_symbol(self):
        self.assertIsNone(self.resolver.resolve_metadata('UNKNOWNXYZ'))
        self.rpc.get_token_supply.assert_not_called()

    def test_token_list_unavailable_is_not_found(self):
        self.cache.find.side_effect = TokenListFetchError('Token list unavailable')
        self.assertIsNone(self.resolver.resolve_metadata('BONK'))
        self.assertIsNone(self.resolver.find_mint_address('BONK'))

    def test_find_mint_address(self):
        self.assertEqual(self.resolver.find_mint_address('bonk'), BONK.mint_address)
        self.assertIsNone(self.resolver.find_mint_address('nope'))


if __name__ == '__main__':
    unittest.main()
