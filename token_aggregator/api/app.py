import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from ..core import TokenDataService

logger = logging.getLogger(__name__)


def create_app(service: Optional[TokenDataService] = None) -> FastAPI:
    """
    Build the read API. The service (and its token-list cache) is created on
    first use unless one is injected.
    """
    app = FastAPI(title='Token Aggregator')
    app.state.service = service

    def get_service() -> TokenDataService:
        if app.state.service is None:
            app.state.service = TokenDataService.from_config()
        return app.state.service

    def missing_symbol() -> JSONResponse:
        return JSONResponse({'error': 'Token symbol is required'}, status_code=400)

    @app.get('/api/token/')
    def token_without_symbol():
        return missing_symbol()

    @app.get('/api/token/{symbol}')
    def get_token(symbol: str):
        symbol = symbol.strip()
        if not symbol:
            return missing_symbol()

        logger.info(f'API: fetching data for symbol {symbol}')
        try:
            token = get_service().reconcile(symbol)
        except Exception as e:
            logger.error(f'Error fetching token data for {symbol}: {e}', exc_info=True)
            return JSONResponse({'error': 'Failed to fetch token data'}, status_code=500)

        if token is None:
            return JSONResponse({'error': 'Token data not available'}, status_code=404)
        return token.to_dict()

    @app.get('/api/trending')
    def get_trending():
        logger.info('API: fetching trending tokens')
        try:
            tokens = get_service().get_trending()
        except Exception as e:
            logger.error(f'Error fetching trending tokens: {e}', exc_info=True)
            return JSONResponse({'success': False, 'error': 'Failed to fetch trending tokens'}, status_code=500)

        logger.info(f'Successfully fetched {len(tokens)} trending tokens')
        return {'success': True, 'data': [token.to_dict() for token in tokens]}

    @app.get('/api/health')
    def health():
        svc = app.state.service
        cached = svc is not None and svc.token_list_cache.snapshot is not None
        return {'status': 'ok', 'tokenListCached': cached}

    return app
