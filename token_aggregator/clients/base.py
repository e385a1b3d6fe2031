import logging
from typing import Any, Dict, Optional

import requests

from ..config import Config

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """Raised when an upstream API is unreachable or answers with a non-2xx status."""
    pass


class MalformedResponseError(UpstreamError):
    """Raised when an upstream answer is missing the fields we expect."""
    pass


class HttpJsonClient:
    """Shared requests.Session plumbing for the upstream JSON APIs."""

    error_class = UpstreamError
    name = 'upstream'

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self._session = session or requests.Session()
        self.timeout = timeout or Config.HTTP_TIMEOUT_SECONDS

    def _get_response(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        try:
            resp = self._session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise self.error_class(f'{self.name} request failed: {e}') from e
        logger.debug(f'{self.name} response status: {resp.status_code}')
        return resp

    def _decode(self, resp: requests.Response) -> Any:
        if not resp.ok:
            raise self.error_class(f'{self.name} API error: {resp.status_code}')
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedResponseError(f'{self.name} returned invalid JSON: {e}') from e

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._decode(self._get_response(url, params=params))

    def _post_json(self, url: str, payload: Any) -> Any:
        try:
            resp = self._session.post(
                url,
                json=payload,
                timeout=self.timeout,
                headers={'Content-Type': 'application/json'},
            )
        except requests.exceptions.RequestException as e:
            raise self.error_class(f'{self.name} request failed: {e}') from e
        return self._decode(resp)

    def close(self):
        self._session.close()
