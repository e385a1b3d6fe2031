import logging
from typing import List, Optional

import requests

from ..config import Config
from ..models import TokenListEntry
from .base import HttpJsonClient, MalformedResponseError, UpstreamError

logger = logging.getLogger(__name__)


class TokenListFetchError(UpstreamError):
    """Raised when the Jupiter token directory cannot be fetched."""
    pass


class TokenListClient(HttpJsonClient):
    error_class = TokenListFetchError
    name = 'Jupiter'

    def __init__(self, url: Optional[str] = None, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        super().__init__(session=session, timeout=timeout)
        self.url = url or Config.JUPITER_TOKEN_LIST_URL

    def fetch_tokens(self) -> List[TokenListEntry]:
        """
        Download the full token directory.

        The endpoint has served both a bare JSON array and {"tokens": [...]}.
        """
        logger.info('Fetching fresh Jupiter token list')
        data = self._get_json(self.url)
        if isinstance(data, list):
            items = data
        elif isinstance(data, dict):
            items = data.get('tokens')
            if not isinstance(items, list):
                raise MalformedResponseError('Jupiter token list payload has no tokens array')
        else:
            raise MalformedResponseError(f'Unexpected Jupiter token list payload: {type(data).__name__}')

        entries = []
        for item in items:
            if not isinstance(item, dict):
                continue
            entry = TokenListEntry.from_directory_item(item)
            if entry is not None:
                entries.append(entry)
        logger.info(f'Fetched {len(entries)} tokens from Jupiter')
        return entries
