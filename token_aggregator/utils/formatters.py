"""
Number parsing and display helpers.

CoinGecko's trending feed encodes market cap and volume as display strings
("$1,234.56"), so everything that consumes aggregator numbers goes through
parse_currency first.
"""
import math
from typing import Dict, Optional, Union

Number = Union[int, float, str, None]


def parse_currency(value: Number) -> Optional[float]:
    """
    Parse a number or currency-formatted string.

    Returns:
        float, or None when the value is missing or unparsable (never raises)
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        numeric = float(value)
    else:
        cleaned = str(value).replace('$', '').replace(',', '').strip()
        if not cleaned:
            return None
        try:
            numeric = float(cleaned)
        except ValueError:
            return None
    if math.isnan(numeric) or math.isinf(numeric):
        return None
    return numeric


def _with_units(value: float, prefix: str) -> str:
    if value >= 1e9:
        return f'{prefix}{value / 1e9:.2f}B'
    if value >= 1e6:
        return f'{prefix}{value / 1e6:.2f}M'
    if value >= 1e3:
        return f'{prefix}{value / 1e3:.2f}K'
    return f'{prefix}{value:.2f}'


def format_price(price: Number) -> str:
    """Format price with 8 decimals below one cent, 4 otherwise."""
    numeric = parse_currency(price)
    if not numeric:
        return '$0.00'
    if numeric < 0.01:
        return f'${numeric:.8f}'
    return f'${numeric:.4f}'


def format_market_cap(market_cap: Number) -> str:
    """Format market cap with K/M/B units. Accepts numbers or CoinGecko strings."""
    numeric = parse_currency(market_cap)
    if not numeric:
        return '$0.00'
    return _with_units(numeric, '$')


def format_volume(volume: Number) -> str:
    numeric = parse_currency(volume)
    if not numeric:
        return '$0.00'
    return _with_units(numeric, '$')


def format_supply(supply: Number) -> str:
    numeric = parse_currency(supply)
    if not numeric:
        return '0'
    return _with_units(numeric, '')


def format_price_change(change: Number) -> str:
    numeric = parse_currency(change)
    if not numeric:
        return '0.00%'
    sign = '+' if numeric >= 0 else ''
    return f'{sign}{numeric:.2f}%'


def format_number_with_commas(num: float) -> str:
    if float(num).is_integer():
        return f'{int(num):,}'
    return f'{num:,.3f}'.rstrip('0').rstrip('.')


def format_percentage(value: float) -> Dict[str, object]:
    is_positive = value >= 0
    sign = '+' if is_positive else ''
    return {'text': f'{sign}{value:.2f}%', 'is_positive': is_positive}
