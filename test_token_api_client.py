import unittest
from unittest.mock import MagicMock

import requests

from token_aggregator.client import ApiClientError, Poller, Prefetcher, QueryCache, TokenApiClient, exponential_delay

SOL_TOKEN = {'id': 'solana', 'symbol': 'SOL', 'price': 150.0}


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def make_response(payload, status=200):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.json.return_value = payload
    return resp


class TestTokenApiClient(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.session = MagicMock()
        self.sleeps = []
        self.client = TokenApiClient(
            'http://api.test/',
            session=self.session,
            sleep=self.sleeps.append,
            cache=QueryCache(clock=self.clock),
        )

    def test_get_token_uses_fresh_cache(self):
        self.session.get.return_value = make_response(SOL_TOKEN)

        self.assertEqual(self.client.get_token('SOL'), SOL_TOKEN)
        self.clock.now = 59
        self.assertEqual(self.client.get_token('sol'), SOL_TOKEN)

        self.session.get.assert_called_once()
        self.assertEqual(self.session.get.call_args.args[0], 'http://api.test/api/token/SOL')

    def test_symbol_is_url_quoted(self):
        self.session.get.return_value = make_response(SOL_TOKEN)

        self.client.fetch_token('a/b')

        self.assertEqual(self.session.get.call_args.args[0], 'http://api.test/api/token/a%2Fb')

    def test_get_token_refetches_when_stale(self):
        self.session.get.return_value = make_response(SOL_TOKEN)
        self.client.get_token('sol')
        self.clock.now = 60
        self.client.get_token('sol')
        self.assertEqual(self.session.get.call_count, 2)

    def test_retries_with_backoff_then_raises(self):
        self.session.get.return_value = make_response({'error': 'Token data not available'}, status=404)

        with self.assertRaises(ApiClientError) as ctx:
            self.client.fetch_token('UNKNOWNXYZ')

        self.assertEqual(str(ctx.exception), 'Token data not available')
        self.assertEqual(self.session.get.call_count, 3)
        self.assertEqual(self.sleeps, [1.0, 2.0])

    def test_retry_recovers(self):
        self.session.get.side_effect = [
            requests.exceptions.ConnectionError('refused'),
            make_response(SOL_TOKEN),
        ]
        self.assertEqual(self.client.fetch_token('sol'), SOL_TOKEN)
        self.assertEqual(self.sleeps, [1.0])

    def test_trending_unwraps_data(self):
        self.session.get.return_value = make_response({'success': True, 'data': [{'id': 'solana'}]})
        self.assertEqual(self.client.get_trending(), [{'id': 'solana'}])

    def test_trending_failure_message(self):
        self.client.retry = 0
        self.session.get.return_value = make_response({'success': False, 'error': 'Failed to fetch trending tokens'}, status=500)
        with self.assertRaises(ApiClientError) as ctx:
            self.client.fetch_trending()
        self.assertEqual(str(ctx.exception), 'Failed to fetch trending tokens')

    def test_exponential_delay_caps(self):
        self.assertEqual([exponential_delay(i) for i in range(6)], [1.0, 2.0, 4.0, 8.0, 16.0, 30.0])


class TestPrefetcher(unittest.TestCase):
    def setUp(self):
        self.api = MagicMock()
        self.api.has_fresh_token.return_value = False
        self.prefetcher = Prefetcher(self.api, delay=0)

    def test_prefetch_fetches_lowercased_symbol(self):
        self.assertTrue(self.prefetcher.prefetch_token('SOL'))
        self.prefetcher.wait(timeout=5)

        self.api.fetch_token.assert_called_once_with('sol')
        self.assertEqual(self.prefetcher.prefetching_count, 0)

    def test_skips_fresh_cache(self):
        self.api.has_fresh_token.return_value = True

        self.assertFalse(self.prefetcher.prefetch_token('SOL'))
        self.api.fetch_token.assert_not_called()

    def test_skips_in_flight(self):
        self.prefetcher._in_flight.add('sol')

        self.assertFalse(self.prefetcher.prefetch_token('Sol'))
        self.assertTrue(self.prefetcher.is_prefetching('SOL'))

    def test_in_flight_cleared_after_failure(self):
        self.api.fetch_token.side_effect = ApiClientError('Failed to fetch token data')

        self.prefetcher.prefetch_token('bonk')
        self.prefetcher.wait(timeout=5)

        self.assertFalse(self.prefetcher.is_prefetching('bonk'))
        self.assertTrue(self.prefetcher.prefetch_token('bonk'))
        self.prefetcher.wait(timeout=5)

    def test_debounce_replaces_pending_timer(self):
        prefetcher = Prefetcher(self.api, delay=10)
        prefetcher.prefetch_token('sol')
        first = prefetcher._timers['sol']
        prefetcher.prefetch_token('sol')

        self.assertIsNot(prefetcher._timers['sol'], first)
        self.assertTrue(first.finished.is_set())
        prefetcher._timers['sol'].cancel()

    def test_superseded_timer_does_not_fetch(self):
        prefetcher = Prefetcher(self.api, delay=10)
        prefetcher.prefetch_token('sol')
        prefetcher.prefetch_token('sol')

        # a replaced timer whose callback already started runs on a thread
        # that is no longer the registered timer for the symbol
        prefetcher._run('sol')

        self.api.fetch_token.assert_not_called()
        self.assertFalse(prefetcher.is_prefetching('sol'))
        self.assertIn('sol', prefetcher._timers)
        prefetcher._timers['sol'].cancel()

    def test_prefetch_multiple(self):
        self.assertEqual(self.prefetcher.prefetch_multiple(['sol', 'bonk', 'jup']), 3)
        self.prefetcher.wait(timeout=5)
        self.assertEqual(self.api.fetch_token.call_count, 3)


class TestPoller(unittest.TestCase):

    def test_runs_immediately_and_stops(self):
        fn = MagicMock(return_value=SOL_TOKEN)
        poller = Poller(fn, interval=60)

        poller.start()
        poller.stop(timeout=5)

        fn.assert_called_once()
        self.assertEqual(poller.last_result, SOL_TOKEN)
        self.assertFalse(poller.running)

    def test_errors_are_recorded(self):
        error = ApiClientError('Failed to fetch token data')
        poller = Poller(MagicMock(side_effect=error), interval=60)

        poller.start()
        poller.stop(timeout=5)

        self.assertIs(poller.last_error, error)


if __name__ == '__main__':
    unittest.main()
