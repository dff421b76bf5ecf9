from decimal import Decimal

import pytest
from pydantic import ValidationError

from gas_price_resolver.models.gas_models import GasOracleResult, GasPriceOptions, GasSpeed


def test_gas_oracle_result(oracle_response):
    result = GasOracleResult.model_validate(oracle_response['result'])
    assert result.safe_gas_price == Decimal('30.5')
    assert result.propose_gas_price == Decimal('33')
    assert result.fast_gas_price == Decimal('41')
    assert result.suggest_base_fee == Decimal('170')
    assert result.last_block == 100


@pytest.mark.parametrize('last_block', ['12.5', 'abc', '-1'])
def test_gas_oracle_result_invalid_block(oracle_response, last_block):
    oracle_response['result']['LastBlock'] = last_block
    with pytest.raises(ValidationError):
        GasOracleResult.model_validate(oracle_response['result'])


def test_gas_speed_values():
    assert [speed.value for speed in GasSpeed] == [
        'safe', 'safeLow', 'low', 'std', 'standard', 'fast', 'fastest',
    ]


def test_gas_price_options_speed():
    assert GasPriceOptions(speed=GasSpeed.fastest).speed == GasSpeed.fastest
    assert GasPriceOptions(speed='fast').speed == 'fast'
    # Unknown speeds are rejected when the tier is resolved.
    assert GasPriceOptions(speed='instant').speed == 'instant'
    assert GasPriceOptions().speed is None
