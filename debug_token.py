#!/usr/bin/env python3
"""
Debug script to trace every source for a specific token symbol.
Shows: Jupiter entry, RPC supply, Raydium price, CoinGecko quote, trending match, merged record.

Usage: python debug_token.py <symbol>
Example: python debug_token.py BONK
"""

import argparse
import json

from token_aggregator.clients import UpstreamError
from token_aggregator.config import setup_logging
from token_aggregator.core import TokenDataService, merge_token
from token_aggregator.utils import format_market_cap, format_price, format_price_change, format_supply, format_volume


def section(title: str):
    print()
    print(title)
    print("-" * 100)


def debug_token(symbol: str):
    print("=" * 100)
    print(f"DEBUG TOKEN: {symbol}")
    print("=" * 100)

    service = TokenDataService.from_config()
    rpc_client = service.metadata_resolver.rpc_client

    section("1. JUPITER TOKEN LIST")
    try:
        directory = service.token_list_cache.get_directory()
        entry = service.token_list_cache.find(symbol)
        print(f"Directory size: {len(directory.entries):,} tokens")
        if entry:
            print(f"Match: {entry.name} ({entry.symbol}) mint={entry.mint_address} decimals={entry.decimals}")
        else:
            print("No match in token list")
    except UpstreamError as e:
        entry = None
        print(f"ERROR: token list unavailable: {e}")

    section("2. SOLANA RPC SUPPLY")
    if entry:
        try:
            supply = rpc_client.get_token_supply(entry.mint_address)
            print(f"Raw amount: {supply.amount}  Decimals: {supply.decimals}  Supply: {format_supply(supply.ui_amount)}")
        except UpstreamError as e:
            print(f"ERROR: {e}")
    else:
        print("Skipped (no mint address)")

    section("3. RAYDIUM PRICE")
    if entry:
        try:
            price = service.price_resolver.dex_client.get_mint_price(entry.mint_address)
            print(f"Price: {format_price(price) if price is not None else 'none'}")
        except UpstreamError as e:
            print(f"ERROR: {e}")
    else:
        print("Skipped (no mint address)")

    section("4. COINGECKO SIMPLE PRICE")
    try:
        row = service.price_resolver.aggregator_client.get_simple_price(symbol)
        print(json.dumps(row, indent=2) if row else "No CoinGecko row for this id")
    except UpstreamError as e:
        print(f"ERROR: {e}")

    section("5. TRENDING")
    try:
        trending = service.trending_fetcher.find_by_symbol(symbol)
        if trending:
            print(f"Match: {trending.name} id={trending.id} rank={trending.market_cap_rank}")
        else:
            print("Not trending")
    except UpstreamError as e:
        trending = None
        print(f"ERROR: {e}")

    section("6. MERGED RECORD")
    metadata = service.metadata_resolver.resolve_metadata(symbol)
    quote = service.price_resolver.resolve_price(symbol)
    token = merge_token(symbol, trending, quote, metadata)
    if token is None:
        print("No data available for this token (API would return 404)")
    else:
        print(json.dumps(token.to_dict(), indent=2))
        print()
        print(f"Price: {format_price(token.price)}  24h: {format_price_change(token.price_change_percent_24h)}")
        print(f"Market Cap: {format_market_cap(token.market_cap)}  Volume 24h: {format_volume(token.volume_24h)}")

    print()
    print("=" * 100)
    print("DEBUG COMPLETE")
    print("=" * 100)


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Trace every data source for a token symbol')
    parser.add_argument('symbol', type=str, help='Token symbol, e.g. SOL or BONK')
    parser.add_argument('--log-level', type=str, default=None, help='Override LOG_LEVEL')
    args = parser.parse_args()

    setup_logging(args.log_level)
    debug_token(args.symbol)
