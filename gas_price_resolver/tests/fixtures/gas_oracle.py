from decimal import Decimal

import pytest

from gas_price_resolver.models.gas_models import PriceTable, TierPrice


@pytest.fixture()
def oracle_response() -> dict:
    return {
        'status': '1',
        'message': 'OK',
        'result': {
            'LastBlock': '100',
            'SafeGasPrice': '30.5',
            'ProposeGasPrice': '33',
            'FastGasPrice': '41',
            'suggestBaseFee': '170',
            'gasUsedRatio': '0.41,0.53,0.6,0.38,0.45',
            'UsdPrice': '0.52',
        },
    }


@pytest.fixture()
def price_table() -> PriceTable:
    # Real oracle answer for block 47540253.
    return PriceTable(
        safe_low=TierPrice(
            max_priority_fee=Decimal('30.546032838'),
            max_fee=Decimal('201.020433986'),
        ),
        standard=TierPrice(
            max_priority_fee=Decimal('32.928849981'),
            max_fee=Decimal('203.403251129'),
        ),
        fast=TierPrice(
            max_priority_fee=Decimal('40.969618987'),
            max_fee=Decimal('211.444020135'),
        ),
        estimated_base_fee=Decimal('170.474401148'),
        block_time=0,
        block_number=47540253,
    )
