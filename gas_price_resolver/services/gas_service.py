import asyncio
from decimal import ROUND_CEILING
from typing import Optional, Union

import ujson
from aiohttp import ClientError, ClientSession
from pydantic import ValidationError

from gas_price_resolver.clients.apm_client import ApmClient
from gas_price_resolver.config import Config
from gas_price_resolver.models.gas_models import (
    GasOracleResult,
    GasPriceOptions,
    GasSpeed,
    PriceTable,
    TierPrice,
)
from gas_price_resolver.utils.errors import (
    BaseGasPriceError,
    InvalidTierError,
    MalformedResponseError,
    UpstreamError,
)
from gas_price_resolver.utils.logger import LogArgs, get_logger
from gas_price_resolver.utils.units import to_base_units

GAS_ORACLE_SUCCESS_STATUS = '1'

logger = get_logger(__name__)


class GasService:
    """Resolves a single recommended gas price from the explorer gas oracle."""

    def __init__(
        self,
        config: Config,
        apm_client: ApmClient,
        session: ClientSession,
    ):
        self.config = config
        self.apm_client = apm_client
        self.aiohttp_session = session

    async def _get_response(self, url: str, params: Optional[dict] = None) -> dict:
        async with self.aiohttp_session.get(url, params=params) as response:
            logger.debug('Request GET %s', response.url)
            response.raise_for_status()
            return await response.json(content_type=None, loads=ujson.loads)

    async def fetch_price_table(self) -> PriceTable:
        source = self.config.GAS_SOURCE
        params = {
            'module': 'gastracker',
            'action': 'gasoracle',
            'apikey': self.config.GAS_ORACLE_API_KEY,
        }
        try:
            data = await self._get_response(str(self.config.GAS_ORACLE_URL), params)
        except (ClientError, asyncio.TimeoutError, ValueError) as e:
            raise self.handle_exception(e)

        if not isinstance(data, dict) or data.get('status') != GAS_ORACLE_SUCCESS_STATUS:
            # On failure the oracle puts the error text into `result`.
            reason = data.get('result') if isinstance(data, dict) else None
            raise self.handle_exception(UpstreamError(source, reason, response=data))

        try:
            result = GasOracleResult.model_validate(data['result'])
        except (KeyError, ValidationError) as e:
            raise self.handle_exception(e, response=data)

        base_fee = result.suggest_base_fee
        logger.debug(
            'Got gas prices for block %(block_number)s',
            {LogArgs.block_number: result.last_block},
        )
        return PriceTable(
            safe_low=TierPrice(
                max_priority_fee=result.safe_gas_price,
                max_fee=result.safe_gas_price + base_fee,
            ),
            standard=TierPrice(
                max_priority_fee=result.propose_gas_price,
                max_fee=result.propose_gas_price + base_fee,
            ),
            fast=TierPrice(
                max_priority_fee=result.fast_gas_price,
                max_fee=result.fast_gas_price + base_fee,
            ),
            estimated_base_fee=base_fee,
            # Not provided by the explorer API.
            block_time=0,
            block_number=result.last_block,
        )

    def resolve_tier_price(
        self,
        table: PriceTable,
        speed: Optional[Union[GasSpeed, str]] = None,
    ) -> int:
        """
        Picks the max fee of the tier matching the speed and rounds it up to whole gwei.
        Args:
            table:PriceTable: Gas prices fetched from the oracle
            speed:Optional[Union[GasSpeed, str]]=None: One of GasSpeed values, standard if empty

        Returns:
            Max fee of the tier in gwei, never below the oracle suggestion.
        """
        try:
            speed = GasSpeed(speed or GasSpeed.standard)
        except ValueError:
            raise InvalidTierError(self.config.GAS_SOURCE, f'Unknown gas speed {speed!r}', speed=speed)

        match speed:
            case GasSpeed.safe | GasSpeed.safe_low | GasSpeed.low:
                tier = table.safe_low
            case GasSpeed.std | GasSpeed.standard:
                tier = table.standard
            case GasSpeed.fast | GasSpeed.fastest:
                tier = table.fast
        return int(tier.max_fee.to_integral_value(rounding=ROUND_CEILING))

    async def get_gas_price(self, options: Optional[GasPriceOptions] = None) -> int:
        """
        Returns the gas price in base units for the requested speed.
        `max_gas_price` and `min_gas_price` of the options are not applied.
        """
        options = options or GasPriceOptions()
        table = await self.fetch_price_table()
        gas_price = to_base_units(self.resolve_tier_price(table, options.speed))
        logger.info(
            'Resolved gas price %(gas_price)s for speed %(speed)s',
            {LogArgs.gas_price: gas_price, LogArgs.speed: options.speed or GasSpeed.standard.value},
        )
        return gas_price

    def handle_exception(self, exception: Exception, **kwargs) -> BaseGasPriceError:
        source = self.config.GAS_SOURCE
        if isinstance(exception, BaseGasPriceError):
            exc = exception
        elif isinstance(exception, (KeyError, ValidationError)):
            exc = MalformedResponseError(source, str(exception), **kwargs)
        else:
            exc = UpstreamError(source, str(exception), **kwargs)
        # Errors built from a response body were never raised and carry no stack.
        if exception.__traceback__ is not None:
            self.apm_client.capture_exception((type(exception), exception, exception.__traceback__))
        logger.warning(*exc.to_log_args())
        return exc
