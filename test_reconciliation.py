import unittest
from unittest.mock import MagicMock

from token_aggregator.clients import CoinGeckoApiError, MalformedResponseError
from token_aggregator.core import TokenDataService, has_any_signal, merge_token
from token_aggregator.models import PriceQuote, TokenMetadata, TrendingEntry

SOL_TRENDING = TrendingEntry.from_item({
    'id': 'solana',
    'coin_id': 4128,
    'name': 'Solana',
    'symbol': 'SOL',
    'market_cap_rank': 3,
    'thumb': 'https://assets.coingecko.com/coins/images/4128/thumb/solana.png',
    'data': {
        'price': 150.00,
        'market_cap': '$70,123,456,789',
        'total_volume': '$3,456,789,012',
        'price_change_percentage_24h': {'usd': 5.2},
    },
})

SOL_METADATA = TokenMetadata(
    name='Wrapped SOL',
    symbol='SOL',
    decimals=9,
    supply=12_345.5,
    mint_address='So11111111111111111111111111111111111111112',
    logo_uri='https://raw.githubusercontent.com/solana-labs/token-list/main/assets/sol.png',
)


class TestMergeToken(unittest.TestCase):

    def test_trending_overrides_price_fields(self):
        quote = PriceQuote(price=149.1, market_cap=1.0, volume_24h=2.0, price_change_percent_24h=1.1)

        token = merge_token('SOL', SOL_TRENDING, quote, SOL_METADATA)

        self.assertEqual(token.price, 150.00)
        self.assertEqual(token.price_change_percent_24h, 5.2)
        self.assertEqual(token.market_cap, 70123456789.0)
        self.assertEqual(token.volume_24h, 3456789012.0)
        self.assertEqual(token.id, 'solana')
        self.assertEqual(token.price_change_24h, 0)

    def test_name_precedence(self):
        token = merge_token('sol', SOL_TRENDING, None, SOL_METADATA)

        self.assertEqual(token.name, 'Solana')
        self.assertEqual(token.solana.name, 'Wrapped SOL')
        self.assertEqual(token.solana.logo_uri, SOL_METADATA.logo_uri)
        self.assertEqual(token.solana.supply, 12_345.5)
        self.assertEqual(token.solana.mint_address, SOL_METADATA.mint_address)

    def test_trending_only_symbol(self):
        token = merge_token('sol', SOL_TRENDING, None, None)

        self.assertIsNotNone(token)
        self.assertEqual(token.price, 150.00)
        self.assertEqual(token.symbol, 'SOL')
        self.assertEqual(token.solana.decimals, 9)
        self.assertEqual(token.solana.supply, 0)
        self.assertEqual(token.solana.logo_uri, SOL_TRENDING.thumb)
        self.assertIsNone(token.solana.mint_address)

    def test_quote_fields_used_without_trending(self):
        quote = PriceQuote(price=0.5, market_cap=None, volume_24h=1000.0, price_change_percent_24h=-2.0)

        token = merge_token('abc', None, quote, None)

        self.assertEqual(token.id, 'abc')
        self.assertEqual(token.name, 'ABC')
        self.assertEqual(token.price, 0.5)
        self.assertEqual(token.market_cap, 0)
        self.assertEqual(token.volume_24h, 1000.0)
        self.assertEqual(token.price_change_percent_24h, -2.0)

    def test_unparsable_trending_value_falls_back_to_quote(self):
        trending = TrendingEntry.from_item({'id': 'x', 'symbol': 'X', 'name': 'X', 'data': {'market_cap': 'not-a-number'}})
        quote = PriceQuote(price=1.0, market_cap=42.0)

        token = merge_token('X', trending, quote, None)

        self.assertEqual(token.market_cap, 42.0)

    def test_metadata_only_defaults_price_to_zero(self):
        token = merge_token('sol', None, None, SOL_METADATA)

        self.assertEqual(token.price, 0)
        self.assertEqual(token.name, 'Wrapped SOL')
        self.assertEqual(token.id, 'sol')

    def test_absent_everywhere(self):
        self.assertFalse(has_any_signal(None, None, None))
        self.assertIsNone(merge_token('UNKNOWNXYZ', None, None, None))

    def test_to_dict_shape(self):
        data = merge_token('SOL', SOL_TRENDING, None, SOL_METADATA).to_dict()

        self.assertEqual(set(data), {'id', 'name', 'symbol', 'price', 'marketCap', 'volume24h',
                                     'priceChange24h', 'priceChangePercent24h', 'solana'})
        self.assertEqual(data['solana']['mintAddress'], SOL_METADATA.mint_address)
        self.assertIn('logoURI', data['solana'])

    def test_to_dict_omits_absent_optionals(self):
        data = merge_token('abc', None, PriceQuote(price=1.0), None).to_dict()
        self.assertNotIn('mintAddress', data['solana'])
        self.assertNotIn('logoURI', data['solana'])


class TestTokenDataService(unittest.TestCase):
    def setUp(self):
        self.trending = MagicMock()
        self.metadata = MagicMock()
        self.prices = MagicMock()
        self.service = TokenDataService(MagicMock(), self.metadata, self.prices, self.trending)

    def test_trending_failure_is_swallowed(self):
        self.trending.find_by_symbol.side_effect = MalformedResponseError('Invalid response format from CoinGecko API')
        self.metadata.resolve_metadata.return_value = SOL_METADATA
        self.prices.resolve_price.return_value = PriceQuote(price=148.0)

        token = self.service.reconcile('SOL')

        self.assertEqual(token.price, 148.0)
        self.assertEqual(token.id, 'sol')

    def test_all_lookups_attempted(self):
        self.trending.find_by_symbol.side_effect = CoinGeckoApiError('CoinGecko API error: 429')
        self.metadata.resolve_metadata.return_value = None
        self.prices.resolve_price.return_value = None

        self.assertIsNone(self.service.reconcile('UNKNOWNXYZ'))
        self.metadata.resolve_metadata.assert_called_once_with('UNKNOWNXYZ')
        self.prices.resolve_price.assert_called_once_with('UNKNOWNXYZ')

    def test_sol_trending_example(self):
        self.trending.find_by_symbol.return_value = SOL_TRENDING
        self.metadata.resolve_metadata.return_value = None
        self.prices.resolve_price.return_value = None

        token = self.service.reconcile('SOL')

        self.assertEqual(token.price, 150.00)
        self.assertEqual(token.price_change_percent_24h, 5.2)
        self.assertEqual(token.id, 'solana')


if __name__ == '__main__':
    unittest.main()
