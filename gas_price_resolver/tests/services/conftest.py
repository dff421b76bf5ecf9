from unittest.mock import Mock

import pytest

from gas_price_resolver.services.gas_service import GasService


@pytest.fixture()
def gas_service(config, apm_client, aiohttp_session) -> GasService:
    return GasService(config=config, apm_client=apm_client, session=aiohttp_session)


@pytest.fixture()
def resolver(config, apm_client) -> GasService:
    # Tier resolution never touches the network.
    return GasService(config=config, apm_client=apm_client, session=Mock())
