"""
Constant Product Market Maker (CPMM) quoting.

This module is the public quoting surface over the integer kernels in
`njaswap/kernels/python/`. Every function here is pure: it reads amounts and
reserves and returns numbers; it never builds or mutates a pool record.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per quote (O(log n) for the first-deposit isqrt)
- Invariant: after each swap, x' * y' >= x * y (strict when the fee is non-zero)
"""

from typing import Tuple

from ..kernels.python.cpmm_swap_v1 import quote_exact_in as _kernel_quote_exact_in
from ..kernels.python.int_math import isqrt
from ..kernels.python.lp_math_v1 import MINIMUM_LIQUIDITY
from ..kernels.python.lp_math_v1 import optimal_amounts as _kernel_optimal_amounts
from ..kernels.python.lp_math_v1 import quote_deposit as _kernel_quote_deposit
from ..kernels.python.lp_math_v1 import quote_withdrawal as _kernel_quote_withdrawal
from ..kernels.python.lp_math_v1 import OptimalAmounts


def quote_swap(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_rate_bps: int,
) -> int:
    """
    Compute the output amount for an exact-in swap.

    This implements the CPMM formula with the fee on the input leg:
        amount_in_net = amount_in * (10_000 - fee_rate_bps)
        amount_out    = floor(amount_in_net * reserve_out
                              / (reserve_in * 10_000 + amount_in_net))

    The minimum-output bound is the caller's concern; this only quotes.

    Args:
        amount_in: Exact input amount (> 0)
        reserve_in: Current reserve of the input asset (> 0)
        reserve_out: Current reserve of the output asset (> 0)
        fee_rate_bps: Fee in basis points (0-10000)

    Returns:
        amount_out (may be 0, e.g. at a 100% fee)

    Raises:
        InvalidAmount: amount_in is zero
        InsufficientLiquidity: either reserve is zero (ZeroReserves)
        InvalidFee: fee_rate_bps > 10000
        MathOverflow: an intermediate exceeds the 128-bit width
    """
    quote = _kernel_quote_exact_in(
        amount_in=amount_in,
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        fee_rate_bps=fee_rate_bps,
    )
    return quote.amount_out


def quote_deposit(
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    lp_supply: int,
) -> int:
    """
    Compute LP shares to issue for a deposit.

    For the first deposit (lp_supply == 0):
        shares = isqrt(amount_a * amount_b) - MINIMUM_LIQUIDITY

    For subsequent deposits:
        shares = min(amount_a * lp_supply // reserve_a, amount_b * lp_supply // reserve_b)

    Any excess on the larger side is not credited; returning it is the caller's job
    (see `quote_optimal_amounts`).

    Raises:
        InvalidAmount: a deposit amount is zero
        InsufficientLiquidity: isqrt(a*b) <= MINIMUM_LIQUIDITY (InitialLiquidityTooLow),
            zero reserves with outstanding shares (ZeroReserves), or a zero-share result
        MathOverflow: an intermediate exceeds its width
    """
    quote = _kernel_quote_deposit(
        amount_a=amount_a,
        amount_b=amount_b,
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        lp_supply=lp_supply,
    )
    return quote.shares_to_mint


def quote_withdrawal(
    shares: int,
    reserve_a: int,
    reserve_b: int,
    lp_supply: int,
) -> Tuple[int, int]:
    """
    Compute asset amounts returned for burning `shares`.

    Formula (floor rounding, the inverse of the deposit ratio):
        amount_a = reserve_a * shares // lp_supply
        amount_b = reserve_b * shares // lp_supply
    """
    quote = _kernel_quote_withdrawal(
        shares=shares,
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        lp_supply=lp_supply,
    )
    return quote.amount_a, quote.amount_b


def quote_optimal_amounts(
    amount_a_desired: int,
    amount_b_desired: int,
    reserve_a: int,
    reserve_b: int,
) -> OptimalAmounts:
    """Ratio-preserving amounts to actually deposit, plus the refund on each side."""
    return _kernel_optimal_amounts(
        amount_a_desired=amount_a_desired,
        amount_b_desired=amount_b_desired,
        reserve_a=reserve_a,
        reserve_b=reserve_b,
    )


__all__ = [
    "MINIMUM_LIQUIDITY",
    "isqrt",
    "quote_swap",
    "quote_deposit",
    "quote_withdrawal",
    "quote_optimal_amounts",
]
