"""
Liquidity math kernel (v1 semantics).

- First deposit: `liquidity = isqrt(amount_a * amount_b)`; `MINIMUM_LIQUIDITY` of it
  is withheld forever and the depositor receives the rest.
- Later deposits: `min(amount_a * supply // reserve_a, amount_b * supply // reserve_b)`.
  Taking the weaker side means an imbalanced deposit can never mint more than
  its smaller contribution is worth.
- Withdrawal: the floor inverse, `reserve * shares // supply` per side.

All rounding is floor, so every rounding loss stays in the pool.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...config import kernel_params
from ...errors import InitialLiquidityTooLow, InsufficientLiquidity, ZeroReserves
from .int_math import (
    U64_MAX,
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    isqrt,
    require_amount,
    to_u64,
)


MINIMUM_LIQUIDITY = kernel_params().minimum_liquidity


@dataclass(frozen=True)
class DepositQuote:
    shares_to_mint: int
    shares_locked: int
    new_reserve_a: int
    new_reserve_b: int


@dataclass(frozen=True)
class WithdrawalQuote:
    amount_a: int
    amount_b: int
    new_reserve_a: int
    new_reserve_b: int


@dataclass(frozen=True)
class OptimalAmounts:
    amount_a_used: int
    amount_b_used: int
    amount_a_refund: int
    amount_b_refund: int


def mint_initial(*, amount_a: int, amount_b: int) -> tuple[int, int]:
    """
    Shares for the first deposit.

    Returns (shares_to_mint, shares_locked).
    """
    product = checked_mul(amount_a, amount_b)
    liquidity = isqrt(product)
    if liquidity <= MINIMUM_LIQUIDITY:
        raise InitialLiquidityTooLow(
            f"isqrt(amount_a * amount_b) = {liquidity} must exceed {MINIMUM_LIQUIDITY}"
        )
    return to_u64("shares_to_mint", liquidity - MINIMUM_LIQUIDITY), MINIMUM_LIQUIDITY


def mint_proportional(
    *,
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    lp_supply: int,
) -> int:
    if reserve_a == 0 or reserve_b == 0:
        raise ZeroReserves("cannot mint into an empty pool when lp_supply > 0")

    shares_a = checked_div(checked_mul(amount_a, lp_supply), reserve_a)
    shares_b = checked_div(checked_mul(amount_b, lp_supply), reserve_b)
    shares = min(shares_a, shares_b)
    if shares == 0:
        raise InsufficientLiquidity("deposit too small to mint any shares")
    return to_u64("shares_to_mint", shares)


def quote_deposit(
    *,
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    lp_supply: int,
) -> DepositQuote:
    """Deposit quote + post-deposit reserves."""
    require_amount("amount_a", amount_a, positive=True)
    require_amount("amount_b", amount_b, positive=True)
    require_amount("reserve_a", reserve_a)
    require_amount("reserve_b", reserve_b)
    require_amount("lp_supply", lp_supply)

    if lp_supply == 0:
        if reserve_a != 0 or reserve_b != 0:
            raise InsufficientLiquidity("reserves must be zero when lp_supply is zero")
        minted, locked = mint_initial(amount_a=amount_a, amount_b=amount_b)
    else:
        minted = mint_proportional(
            amount_a=amount_a,
            amount_b=amount_b,
            reserve_a=reserve_a,
            reserve_b=reserve_b,
            lp_supply=lp_supply,
        )
        locked = 0

    checked_add(lp_supply, checked_add(minted, locked), limit=U64_MAX)

    return DepositQuote(
        shares_to_mint=minted,
        shares_locked=locked,
        new_reserve_a=checked_add(reserve_a, amount_a, limit=U64_MAX),
        new_reserve_b=checked_add(reserve_b, amount_b, limit=U64_MAX),
    )


def quote_withdrawal(
    *,
    shares: int,
    reserve_a: int,
    reserve_b: int,
    lp_supply: int,
) -> WithdrawalQuote:
    """Burn `shares` for a floor-rounded proportional slice of both reserves."""
    require_amount("shares", shares, positive=True)
    require_amount("reserve_a", reserve_a)
    require_amount("reserve_b", reserve_b)
    require_amount("lp_supply", lp_supply)

    if lp_supply == 0:
        raise InsufficientLiquidity("no shares outstanding")
    if shares > lp_supply:
        raise InsufficientLiquidity(f"cannot burn more than lp_supply: {shares} > {lp_supply}")

    amount_a = checked_div(checked_mul(reserve_a, shares), lp_supply)
    amount_b = checked_div(checked_mul(reserve_b, shares), lp_supply)
    if amount_a == 0 or amount_b == 0:
        raise InsufficientLiquidity(f"withdrawal rounds to zero on one side: ({amount_a}, {amount_b})")

    return WithdrawalQuote(
        amount_a=amount_a,
        amount_b=amount_b,
        new_reserve_a=checked_sub(reserve_a, amount_a),
        new_reserve_b=checked_sub(reserve_b, amount_b),
    )


def optimal_amounts(
    *,
    amount_a_desired: int,
    amount_b_desired: int,
    reserve_a: int,
    reserve_b: int,
) -> OptimalAmounts:
    """
    Ratio-preserving used amounts and refunds for a deposit.

    For an empty pool everything is used and nothing is refunded.
    """
    require_amount("amount_a_desired", amount_a_desired, positive=True)
    require_amount("amount_b_desired", amount_b_desired, positive=True)
    require_amount("reserve_a", reserve_a)
    require_amount("reserve_b", reserve_b)

    if reserve_a == 0 or reserve_b == 0:
        return OptimalAmounts(
            amount_a_used=amount_a_desired,
            amount_b_used=amount_b_desired,
            amount_a_refund=0,
            amount_b_refund=0,
        )

    amount_b_matching = checked_div(checked_mul(amount_a_desired, reserve_b), reserve_a)
    if amount_b_matching <= amount_b_desired:
        amount_a_used = amount_a_desired
        amount_b_used = amount_b_matching
    else:
        amount_a_used = checked_div(checked_mul(amount_b_desired, reserve_a), reserve_b)
        amount_b_used = amount_b_desired

    if amount_a_used == 0 or amount_b_used == 0:
        raise InsufficientLiquidity("deposit too small for the pool ratio")

    return OptimalAmounts(
        amount_a_used=amount_a_used,
        amount_b_used=amount_b_used,
        amount_a_refund=amount_a_desired - amount_a_used,
        amount_b_refund=amount_b_desired - amount_b_used,
    )
