import logging
from typing import List, Optional

from ..clients import CoinGeckoClient
from ..models import TrendingEntry

logger = logging.getLogger(__name__)


class TrendingFetcher:

    def __init__(self, aggregator_client: CoinGeckoClient):
        self.aggregator_client = aggregator_client

    def get_trending(self) -> List[TrendingEntry]:
        """
        Current CoinGecko trending list. Errors propagate: trending has no fallback source.
        """
        return [TrendingEntry.from_item(item) for item in self.aggregator_client.get_trending_items()]

    def find_by_symbol(self, symbol: str) -> Optional[TrendingEntry]:
        lower_symbol = symbol.lower()
        for entry in self.get_trending():
            if entry.symbol.lower() == lower_symbol:
                return entry
        return None
