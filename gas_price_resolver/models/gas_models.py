from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


class GasSpeed(str, Enum):
    safe = 'safe'
    safe_low = 'safeLow'
    low = 'low'
    std = 'std'
    standard = 'standard'
    fast = 'fast'
    fastest = 'fastest'


class GasPriceOptions(BaseModel):
    # Raw speed value, checked when the tier is resolved.
    speed: Optional[Union[GasSpeed, str]] = None
    # Accepted but not applied to the resolved price.
    max_gas_price: Optional[int] = None
    min_gas_price: Optional[int] = None


class TierPrice(BaseModel):
    max_priority_fee: Decimal
    max_fee: Decimal


class PriceTable(BaseModel):
    safe_low: TierPrice
    standard: TierPrice
    fast: TierPrice
    estimated_base_fee: Decimal
    block_time: int = 0
    block_number: int


class GasOracleResult(BaseModel):
    """`result` object of the gastracker/gasoracle explorer API, amounts in gwei."""
    safe_gas_price: Decimal = Field(alias='SafeGasPrice', ge=0, allow_inf_nan=False)
    propose_gas_price: Decimal = Field(alias='ProposeGasPrice', ge=0, allow_inf_nan=False)
    fast_gas_price: Decimal = Field(alias='FastGasPrice', ge=0, allow_inf_nan=False)
    suggest_base_fee: Decimal = Field(alias='suggestBaseFee', ge=0, allow_inf_nan=False)
    last_block: int = Field(alias='LastBlock', ge=0)


class GasPriceResponse(BaseModel):
    source: str
    timestamp: int
    speed: GasSpeed
    gas_price: int
    min_gas_price: int
