#!/usr/bin/env python3
"""
Start the token aggregator read API.

Examples:
  python run.py
  python run.py --port 8080 --reload
"""

import argparse
import logging

import uvicorn

from token_aggregator.config import Config, setup_logging

setup_logging()
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description='Token aggregator API server')
    parser.add_argument('--host', type=str, default=Config.API_HOST, help='Bind address')
    parser.add_argument('--port', type=int, default=Config.API_PORT, help='Bind port')
    parser.add_argument('--reload', action='store_true', help='Reload on code changes (development)')
    args = parser.parse_args()

    logger.info(f'Starting API on {args.host}:{args.port} (token list TTL {Config.TOKEN_LIST_CACHE_TTL_MS} ms)')
    uvicorn.run(
        'token_aggregator.api.main:app',
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=Config.LOG_LEVEL.lower(),
    )


if __name__ == '__main__':
    main()
