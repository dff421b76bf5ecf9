from pydantic_settings import SettingsConfigDict

from gas_price_resolver.config.apm import APMConfig
from gas_price_resolver.config.gas_oracle import GasOracleConfig
from gas_price_resolver.config.logger import LoggerConfig


class Config(APMConfig, LoggerConfig, GasOracleConfig):
    SERVER_HOST: str = 'localhost'
    SERVER_PORT: int = 8000
    RELOAD: bool = True
    VERSION: str = '0.0.1'
    API_VERSION: int = 1
    CORS_ORIGINS: list = ['*']
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: list = ['*']
    CORS_HEADERS: list = ['*']
    WORKERS_COUNT: int = 1

    model_config = SettingsConfigDict(env_file='.env', extra='ignore')


config = Config()
