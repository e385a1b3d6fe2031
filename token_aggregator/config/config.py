import os
import logging
from dotenv import load_dotenv
load_dotenv()


class Config:
    # Raydium (DEX price by mint)
    RAYDIUM_API_URL = os.getenv('RAYDIUM_API_URL', 'https://api-v3.raydium.io')
    RAYDIUM_PRICE_ENDPOINT = os.getenv('RAYDIUM_PRICE_ENDPOINT', '/mint/price')

    # CoinGecko (trending + simple price)
    COINGECKO_API_URL = os.getenv('COINGECKO_API_URL', 'https://api.coingecko.com/api/v3')
    COINGECKO_TRENDING_ENDPOINT = os.getenv('COINGECKO_TRENDING_ENDPOINT', '/search/trending')
    COINGECKO_SIMPLE_PRICE_ENDPOINT = os.getenv('COINGECKO_SIMPLE_PRICE_ENDPOINT', '/simple/price')
    # Pause before each simple-price call, public tier rate limits aggressively
    COINGECKO_REQUEST_DELAY_SECONDS = float(os.getenv('COINGECKO_REQUEST_DELAY_SECONDS', '0.1'))

    # Solana RPC + Jupiter token directory
    SOLANA_RPC_URL = os.getenv('SOLANA_RPC_URL', 'https://api.mainnet-beta.solana.com')
    JUPITER_TOKEN_LIST_URL = os.getenv('JUPITER_TOKEN_LIST_URL', 'https://token.jup.ag/all')

    # Token list cache lifetime in milliseconds (5 minutes)
    TOKEN_LIST_CACHE_TTL_MS = int(os.getenv('CACHE_DURATION', '300000'))

    HTTP_TIMEOUT_SECONDS = float(os.getenv('HTTP_TIMEOUT_SECONDS', '10'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Request API
    API_HOST = os.getenv('API_HOST', '0.0.0.0')
    API_PORT = int(os.getenv('API_PORT', '8000'))

    # Constants
    DEFAULT_TOKEN_DECIMALS = 9

    @classmethod
    def validate(cls):
        required_fields = ['RAYDIUM_API_URL', 'COINGECKO_API_URL', 'SOLANA_RPC_URL', 'JUPITER_TOKEN_LIST_URL']
        missing = []
        for field in required_fields:
            if not getattr(cls, field):
                missing.append(field)
        if missing:
            raise ValueError(f"Missing required configuration: {', '.join(missing)}")
        if cls.TOKEN_LIST_CACHE_TTL_MS <= 0:
            raise ValueError(f'CACHE_DURATION must be positive, got {cls.TOKEN_LIST_CACHE_TTL_MS}')
        if cls.HTTP_TIMEOUT_SECONDS <= 0:
            raise ValueError(f'HTTP_TIMEOUT_SECONDS must be positive, got {cls.HTTP_TIMEOUT_SECONDS}')
        return True


def setup_logging(level: str | None = None):
    """Configure root logging once for scripts and the API server."""
    logging.basicConfig(
        level=getattr(logging, (level or Config.LOG_LEVEL).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    # urllib3 logs every connection at DEBUG
    logging.getLogger('urllib3').setLevel(logging.WARNING)


Config.validate()
