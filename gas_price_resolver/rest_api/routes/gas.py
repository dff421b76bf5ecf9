from time import time

from fastapi import Depends, Query
from fastapi.routing import APIRouter

from gas_price_resolver.models.gas_models import (
    GasPriceOptions,
    GasPriceResponse,
    GasSpeed,
    PriceTable,
)
from gas_price_resolver.rest_api import dependencies
from gas_price_resolver.utils.errors import responses
from gas_price_resolver.utils.units import MIN_GAS_PRICE

gas_routes = APIRouter()


@gas_routes.get('/', response_model=GasPriceResponse, responses=responses)
@gas_routes.get('', include_in_schema=False)
async def get_gas_price(
    speed: GasSpeed = Query(GasSpeed.standard, description='Speed tier of the gas price'),
    gas_service: dependencies.GasService = Depends(dependencies.gas_service),
) -> GasPriceResponse:
    """
    Returns the recommended gas price in base units (wei) for the speed tier.
    The price is the tier's max fee rounded up to whole gwei.
    """
    gas_price = await gas_service.get_gas_price(GasPriceOptions(speed=speed.value))
    return GasPriceResponse(
        source=gas_service.config.GAS_SOURCE,
        timestamp=int(time()),
        speed=speed,
        gas_price=gas_price,
        min_gas_price=MIN_GAS_PRICE,
    )


@gas_routes.get('/table', response_model=PriceTable, responses=responses)
@gas_routes.get('/table/', include_in_schema=False)
async def get_price_table(
    gas_service: dependencies.GasService = Depends(dependencies.gas_service),
) -> PriceTable:
    """Returns the per tier gas prices in gwei as reported by the gas oracle."""
    return await gas_service.fetch_price_table()
