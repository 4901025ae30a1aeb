"""
CPMM swap kernel (v1 semantics).

Semantics:
- The fee is applied to the input leg only, by scaling:
  `amount_in_net = amount_in * (10_000 - fee_rate_bps)` (input in 1/10_000 units).
- Pricing solves `reserve_in * reserve_out = k` for the post-trade output reserve:
  `amount_out = floor(amount_in_net * reserve_out / (reserve_in * 10_000 + amount_in_net))`.
- The whole gross input stays in the pool, so the fee accrues to LPs and
  floor rounding only ever favours the pool.

Every intermediate is checked against the 128-bit width; amounts against 64 bits.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...config import kernel_params
from ...errors import InvalidAmount, InvalidFee, ZeroReserves
from .int_math import (
    U128_MAX,
    U64_MAX,
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    require_amount,
    require_int,
    to_u64,
)


BPS_DENOM = kernel_params().bps_denom


@dataclass(frozen=True)
class SwapQuote:
    amount_in: int
    amount_out: int
    amount_in_net: int
    fee_portion: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


def validate_fee_rate(fee_rate_bps: int) -> None:
    require_int("fee_rate_bps", fee_rate_bps)
    if not (0 <= fee_rate_bps <= BPS_DENOM):
        raise InvalidFee(f"fee_rate_bps must be in [0, {BPS_DENOM}]: {fee_rate_bps}")


def apply_fee(*, amount_in: int, fee_rate_bps: int, limit: int = U128_MAX) -> int:
    """
    Compute `amount_in * (10_000 - fee_rate_bps)`, checked against the wide width.

    The result is the net input scaled by 10_000; divide by `BPS_DENOM` to get units.
    """
    require_int("amount_in", amount_in)
    validate_fee_rate(fee_rate_bps)
    if amount_in < 0:
        raise InvalidAmount(f"amount_in must be non-negative: {amount_in}")
    fee_multiplier = BPS_DENOM - fee_rate_bps
    return checked_mul(amount_in, fee_multiplier, limit=limit)


def compute_fee_portion(*, amount_in: int, fee_rate_bps: int) -> int:
    """`ceil(amount_in * fee_rate_bps / 10_000)`: the fee share of the input, in units."""
    require_int("amount_in", amount_in)
    validate_fee_rate(fee_rate_bps)
    if amount_in < 0:
        raise InvalidAmount(f"amount_in must be non-negative: {amount_in}")
    scaled = checked_mul(amount_in, fee_rate_bps)
    return checked_div(checked_add(scaled, BPS_DENOM - 1), BPS_DENOM)


def quote_exact_in(
    *,
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_rate_bps: int,
) -> SwapQuote:
    """
    Exact-in swap quote + post-trade reserves.

    Precondition order: amount (InvalidAmount), reserves (ZeroReserves), fee (InvalidFee).
    A zero `amount_out` (e.g. a 100% fee) is a valid quote, not an error.
    """
    require_amount("amount_in", amount_in, positive=True)
    require_amount("reserve_in", reserve_in)
    require_amount("reserve_out", reserve_out)
    if reserve_in == 0 or reserve_out == 0:
        raise ZeroReserves(f"cannot swap against an empty reserve: ({reserve_in}, {reserve_out})")
    validate_fee_rate(fee_rate_bps)

    amount_in_net = apply_fee(amount_in=amount_in, fee_rate_bps=fee_rate_bps)
    numerator = checked_mul(amount_in_net, reserve_out)
    denominator = checked_add(checked_mul(reserve_in, BPS_DENOM), amount_in_net)
    amount_out = checked_div(numerator, denominator)

    new_reserve_in = checked_add(reserve_in, amount_in, limit=U64_MAX)
    new_reserve_out = checked_sub(reserve_out, amount_out)

    return SwapQuote(
        amount_in=amount_in,
        amount_out=to_u64("amount_out", amount_out),
        amount_in_net=amount_in_net,
        fee_portion=compute_fee_portion(amount_in=amount_in, fee_rate_bps=fee_rate_bps),
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=reserve_in * reserve_out,
        k_after=new_reserve_in * new_reserve_out,
    )
