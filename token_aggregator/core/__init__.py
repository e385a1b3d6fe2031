from .reconciliation import merge_token, has_any_signal
from .service import TokenDataService

__all__ = ['merge_token', 'has_any_signal', 'TokenDataService']
