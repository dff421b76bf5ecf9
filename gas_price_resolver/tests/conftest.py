from unittest.mock import AsyncMock

import pytest
from starlette.testclient import TestClient

from gas_price_resolver.clients.apm_client import ApmClient
from gas_price_resolver.config import Config
from gas_price_resolver.rest_api import dependencies
from gas_price_resolver.rest_api.create_app import create_app
from gas_price_resolver.tests.fixtures import *  # noqa: F401, F403


@pytest.fixture()
def config() -> Config:
    return Config(GAS_ORACLE_API_KEY='test_api_key')


@pytest.fixture()
def apm_client(config) -> ApmClient:
    return ApmClient(config)


@pytest.fixture()
def gas_service_mock(config) -> AsyncMock:
    service = AsyncMock(spec=dependencies.GasService)
    service.config = config
    return service


@pytest.fixture()
def trading_client(config, gas_service_mock) -> TestClient:
    app = create_app(config=config)
    app.dependency_overrides[dependencies.gas_service] = lambda: gas_service_mock
    with TestClient(app) as client:
        yield client
