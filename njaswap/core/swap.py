"""
Swap operation: quote, bound-check, and apply an exact-in trade to a pool record.
"""

from __future__ import annotations

from dataclasses import replace

from ..errors import SlippageExceeded
from ..kernels.python.cpmm_swap_v1 import quote_exact_in
from ..kernels.python.int_math import require_amount
from ..state.pools import PoolState, SwapDirection
from .types import SwapResult


def quote_and_apply_swap(
    pool: PoolState,
    amount_in: int,
    min_amount_out: int,
    direction: SwapDirection,
) -> SwapResult:
    """
    Exact-in swap against `pool` in `direction`.

    The input-side reserve grows by exactly `amount_in` and the output-side
    reserve shrinks by exactly the quoted `amount_out`; nothing else changes.

    Raises:
        InvalidAmount: amount_in is zero
        InsufficientLiquidity: either reserve is zero
        InvalidFee: stored fee out of range (cannot happen for a valid record)
        SlippageExceeded: amount_out < min_amount_out
        MathOverflow: an intermediate or the new input reserve exceeds its width
    """
    if not isinstance(direction, SwapDirection):
        raise TypeError("direction must be a SwapDirection")
    require_amount("min_amount_out", min_amount_out)

    reserve_in, reserve_out = pool.reserves_for(direction)
    quote = quote_exact_in(
        amount_in=amount_in,
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        fee_rate_bps=pool.fee_rate_bps,
    )

    if quote.amount_out < min_amount_out:
        raise SlippageExceeded(
            f"amount_out ({quote.amount_out}) < min_amount_out ({min_amount_out})"
        )

    if direction is SwapDirection.A_TO_B:
        updated = replace(pool, reserve_a=quote.new_reserve_in, reserve_b=quote.new_reserve_out)
    else:
        updated = replace(pool, reserve_a=quote.new_reserve_out, reserve_b=quote.new_reserve_in)

    return SwapResult(amount_out=quote.amount_out, fee_portion=quote.fee_portion, pool=updated)
