from pydantic import HttpUrl
from pydantic_settings import BaseSettings


class GasOracleConfig(BaseSettings):
    GAS_SOURCE: str = 'POLYGONSCAN'
    GAS_ORACLE_URL: HttpUrl = 'https://api.polygonscan.com/api'
    # Polygonscan serves the gas oracle without a registered key, rate limited.
    GAS_ORACLE_API_KEY: str = 'YourApiKeyToken'
