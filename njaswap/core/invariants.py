"""Invariant checkers for pool records.

Each `inv_*` function returns True when the invariant holds. `check_all()` returns
the list of violated invariant ids for a single record (empty = all pass), and
`check_transition()` does the same for a before/after pair of one action.

`PoolState.__post_init__` already rejects most malformed records; these checks
exist so the engine can audit post-states independently of how they were built.
"""

from __future__ import annotations

from typing import Callable

from ..config import kernel_params
from ..kernels.python.int_math import U64_MAX
from ..state.pools import PoolState, compute_pool_id
from .types import Action


def inv_distinct_assets(p: PoolState) -> bool:
    return p.asset_a_id != p.asset_b_id


def inv_fee_in_range(p: PoolState) -> bool:
    return 0 <= p.fee_rate_bps <= kernel_params().bps_denom


def inv_reserves_in_width(p: PoolState) -> bool:
    return 0 <= p.reserve_a <= U64_MAX and 0 <= p.reserve_b <= U64_MAX


def inv_reserves_jointly_zero(p: PoolState) -> bool:
    # Either unfunded (both zero) or swappable (both positive).
    return (p.reserve_a == 0) == (p.reserve_b == 0)


def inv_pool_id_matches_pair(p: PoolState) -> bool:
    return p.pool_id == compute_pool_id(p.asset_a_id, p.asset_b_id)


INVARIANT_REGISTRY: dict[str, Callable[[PoolState], bool]] = {
    "inv_distinct_assets": inv_distinct_assets,
    "inv_fee_in_range": inv_fee_in_range,
    "inv_reserves_in_width": inv_reserves_in_width,
    "inv_reserves_jointly_zero": inv_reserves_jointly_zero,
    "inv_pool_id_matches_pair": inv_pool_id_matches_pair,
}


def check_all(p: PoolState) -> list[str]:
    """Return ids of violated invariants (empty = all pass)."""
    return [name for name, fn in INVARIANT_REGISTRY.items() if not fn(p)]


def check_transition(
    before: PoolState,
    after: PoolState,
    action: Action,
    *,
    supply_before: int = 0,
    supply_after: int = 0,
) -> list[str]:
    """
    Return ids of violated transition invariants for one action.

    - identity fields (pair, fee, refs) never change,
    - swaps never decrease k = reserve_a * reserve_b,
    - deposits never decrease and withdrawals never increase either reserve,
    - for deposits/withdrawals with share supplies given, the reserves backing
      each share never decrease (cross-multiplied: r_after * s_before >= r_before * s_after).
    """
    violations: list[str] = []

    identity = (
        "asset_a_id", "asset_b_id", "fee_rate_bps", "authority_ref",
        "vault_a_ref", "vault_b_ref", "share_mint_ref", "authority_bump", "pool_id",
    )
    if any(getattr(before, f) != getattr(after, f) for f in identity):
        violations.append("trans_identity_unchanged")

    if action is Action.SWAP:
        if after.get_constant_product() < before.get_constant_product():
            violations.append("trans_k_non_decreasing")
    elif action is Action.ADD_LIQUIDITY:
        if after.reserve_a < before.reserve_a or after.reserve_b < before.reserve_b:
            violations.append("trans_deposit_reserves_grow")
    elif action is Action.REMOVE_LIQUIDITY:
        if after.reserve_a > before.reserve_a or after.reserve_b > before.reserve_b:
            violations.append("trans_withdraw_reserves_shrink")

    if action is not Action.SWAP and supply_before > 0 and supply_after > 0:
        if (
            after.reserve_a * supply_before < before.reserve_a * supply_after
            or after.reserve_b * supply_before < before.reserve_b * supply_after
        ):
            violations.append("trans_share_backing_non_decreasing")

    return violations
