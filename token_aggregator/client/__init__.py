from .api_client import ApiClientError, QueryCache, TokenApiClient, exponential_delay, token_key
from .prefetch import Prefetcher
from .polling import Poller

__all__ = ['ApiClientError', 'QueryCache', 'TokenApiClient', 'exponential_delay', 'token_key', 'Prefetcher', 'Poller']
