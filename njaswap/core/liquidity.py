"""
Liquidity management operations: create pool, add/remove liquidity.

Each `quote_and_apply_*` function validates, quotes, checks the caller's bound,
and only then builds the updated pool record. The input record is never
modified, so any failure leaves the caller's pool exactly as it was.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..config import kernel_params
from ..errors import InvalidTokenPair, SlippageExceeded
from ..kernels.python.cpmm_swap_v1 import validate_fee_rate
from ..kernels.python.int_math import require_amount
from ..kernels.python.lp_math_v1 import quote_deposit as _kernel_quote_deposit
from ..kernels.python.lp_math_v1 import quote_withdrawal as _kernel_quote_withdrawal
from ..state.pools import AssetId, PoolState, Ref
from .types import DepositResult, WithdrawalResult


DEFAULT_FEE_RATE_BPS = kernel_params().default_fee_rate_bps


def create_pool(
    asset_a_id: AssetId,
    asset_b_id: AssetId,
    fee_rate_bps: Optional[int] = None,
    *,
    authority_ref: Ref = "",
    vault_a_ref: Ref = "",
    vault_b_ref: Ref = "",
    share_mint_ref: Ref = "",
    authority_bump: int = 0,
) -> PoolState:
    """
    Create an empty pool record (Uninitialized -> Active).

    Reserves start at zero; the first deposit prices the pool. Uniqueness per pair
    is the registry's job, not checked here.

    Args:
        asset_a_id: First asset
        asset_b_id: Second asset (must differ from asset_a_id)
        fee_rate_bps: Fee in basis points (0-10000); defaults to the kernel default (30)
        authority_ref, vault_a_ref, vault_b_ref, share_mint_ref, authority_bump:
            host handles, stored unchanged

    Raises:
        InvalidTokenPair: asset ids are equal
        InvalidFee: fee_rate_bps > 10000
    """
    if asset_a_id == asset_b_id:
        raise InvalidTokenPair(f"asset ids must differ: {asset_a_id!r}")
    if fee_rate_bps is None:
        fee_rate_bps = DEFAULT_FEE_RATE_BPS
    validate_fee_rate(fee_rate_bps)

    return PoolState(
        asset_a_id=asset_a_id,
        asset_b_id=asset_b_id,
        fee_rate_bps=fee_rate_bps,
        reserve_a=0,
        reserve_b=0,
        authority_ref=authority_ref,
        vault_a_ref=vault_a_ref,
        vault_b_ref=vault_b_ref,
        share_mint_ref=share_mint_ref,
        authority_bump=authority_bump,
    )


def quote_and_apply_deposit(
    pool: PoolState,
    amount_a: int,
    amount_b: int,
    min_shares_out: int,
    lp_supply: int,
) -> DepositResult:
    """
    Add liquidity to a pool.

    Shares minted:
        first deposit:  isqrt(amount_a * amount_b) - MINIMUM_LIQUIDITY
                        (MINIMUM_LIQUIDITY is reported as `shares_locked`; the host
                        mints it to a holder that can never redeem)
        later deposits: min(amount_a * lp_supply // reserve_a,
                            amount_b * lp_supply // reserve_b)

    Reserves grow by the full `amount_a` / `amount_b`.

    Raises:
        InvalidAmount: an amount is zero
        InsufficientLiquidity: first deposit too small, or a zero-share result
        SlippageExceeded: shares_to_mint < min_shares_out
        MathOverflow: a reserve or supply would leave the 64-bit width
    """
    require_amount("min_shares_out", min_shares_out)

    quote = _kernel_quote_deposit(
        amount_a=amount_a,
        amount_b=amount_b,
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        lp_supply=lp_supply,
    )

    if quote.shares_to_mint < min_shares_out:
        raise SlippageExceeded(
            f"shares_to_mint ({quote.shares_to_mint}) < min_shares_out ({min_shares_out})"
        )

    updated = replace(pool, reserve_a=quote.new_reserve_a, reserve_b=quote.new_reserve_b)
    return DepositResult(
        shares_to_mint=quote.shares_to_mint,
        shares_locked=quote.shares_locked,
        pool=updated,
    )


def quote_and_apply_withdrawal(
    pool: PoolState,
    shares_in: int,
    min_amount_a: int,
    min_amount_b: int,
    lp_supply: int,
) -> WithdrawalResult:
    """
    Remove liquidity from a pool.

    Outputs:
        amount_a = reserve_a * shares_in // lp_supply
        amount_b = reserve_b * shares_in // lp_supply

    This is the floor-rounded inverse of the deposit ratio; rounding dust stays in
    the pool, so a deposit followed by a full withdrawal never returns more than
    was put in.

    Raises:
        InvalidAmount: shares_in is zero
        InsufficientLiquidity: no supply, shares_in > lp_supply, or a zero output leg
        SlippageExceeded: an output is below its minimum
    """
    require_amount("min_amount_a", min_amount_a)
    require_amount("min_amount_b", min_amount_b)

    quote = _kernel_quote_withdrawal(
        shares=shares_in,
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        lp_supply=lp_supply,
    )

    if quote.amount_a < min_amount_a:
        raise SlippageExceeded(f"amount_a ({quote.amount_a}) < min_amount_a ({min_amount_a})")
    if quote.amount_b < min_amount_b:
        raise SlippageExceeded(f"amount_b ({quote.amount_b}) < min_amount_b ({min_amount_b})")

    updated = replace(pool, reserve_a=quote.new_reserve_a, reserve_b=quote.new_reserve_b)
    return WithdrawalResult(
        amount_a=quote.amount_a,
        amount_b=quote.amount_b,
        shares_to_burn=shares_in,
        pool=updated,
    )
