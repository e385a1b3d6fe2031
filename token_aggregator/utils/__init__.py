from .formatters import (
    parse_currency,
    format_price,
    format_market_cap,
    format_volume,
    format_supply,
    format_price_change,
    format_number_with_commas,
    format_percentage,
)

__all__ = [
    'parse_currency',
    'format_price',
    'format_market_cap',
    'format_volume',
    'format_supply',
    'format_price_change',
    'format_number_with_commas',
    'format_percentage',
]
