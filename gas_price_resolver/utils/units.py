from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from web3 import Web3

GWEI_DECIMALS = 9


def to_base_units(amount: Union[int, float, str, Decimal]) -> int:
    """
    Converts a gwei amount into integer base units (1 gwei = 10**9).
    Floats go through their shortest repr, so 45.5 is scaled as Decimal('45.5')
    and not as its binary approximation.
    Raises ValueError for unparseable, negative, non-finite amounts and for amounts
    finer than one base unit.
    """
    if isinstance(amount, float):
        amount = str(amount)
    try:
        amount = Decimal(amount)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f'Gas price must be a number, got {amount!r}') from e
    if not amount.is_finite() or amount < 0:
        raise ValueError(f'Gas price must be a finite non-negative number, got {amount}')
    # Same precision Web3.to_wei scales with.
    with localcontext() as ctx:
        ctx.prec = 999
        base_units = amount.scaleb(GWEI_DECIMALS)
        if base_units != base_units.to_integral_value():
            raise ValueError(f'Gas price {amount} has more than {GWEI_DECIMALS} decimals')
    return Web3.to_wei(amount, 'gwei')


MIN_GAS_PRICE = to_base_units(30)
