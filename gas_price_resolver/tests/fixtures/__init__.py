from gas_price_resolver.tests.fixtures.aiohttp_session import aiohttp_session  # noqa: F401
from gas_price_resolver.tests.fixtures.gas_oracle import (  # noqa: F401
    oracle_response,
    price_table,
)
