"""Dispatch-table engine for pool instructions.

``step(pool, params, lp_supply=...)`` is the single entry point. It:

1. Dispatches to the matching ``quote_and_apply_*`` operation.
2. Checks record and transition invariants on the post-state.
3. Builds the ``Effect`` the host must apply (transfers, mint/burn, event).
4. Returns a ``StepResult`` (accepted, or rejected with the typed error).

Domain failures never escape ``step()``; ``step_or_raise()`` re-raises them.
"""

from __future__ import annotations

import logging
from typing import Callable

from ..errors import DexError, InvariantViolation
from ..state.pools import PoolState
from .invariants import check_all, check_transition
from .liquidity import quote_and_apply_deposit, quote_and_apply_withdrawal
from .swap import quote_and_apply_swap
from .types import Action, ActionParams, Effect, Event, StepResult

logger = logging.getLogger(__name__)


def _apply_add_liquidity(pool: PoolState, params: ActionParams, lp_supply: int) -> tuple[PoolState, Effect, int]:
    res = quote_and_apply_deposit(
        pool,
        amount_a=params.amount_a,
        amount_b=params.amount_b,
        min_shares_out=params.min_shares_out,
        lp_supply=lp_supply,
    )
    effect = Effect(
        event=Event.LIQUIDITY_ADDED,
        pool_id=res.pool.pool_id,
        amount_a=params.amount_a,
        amount_b=params.amount_b,
        shares_minted=res.shares_to_mint,
        shares_locked=res.shares_locked,
        reserve_a_after=res.pool.reserve_a,
        reserve_b_after=res.pool.reserve_b,
    )
    return res.pool, effect, lp_supply + res.shares_to_mint + res.shares_locked


def _apply_remove_liquidity(pool: PoolState, params: ActionParams, lp_supply: int) -> tuple[PoolState, Effect, int]:
    res = quote_and_apply_withdrawal(
        pool,
        shares_in=params.shares_in,
        min_amount_a=params.min_amount_a,
        min_amount_b=params.min_amount_b,
        lp_supply=lp_supply,
    )
    effect = Effect(
        event=Event.LIQUIDITY_REMOVED,
        pool_id=res.pool.pool_id,
        amount_a=res.amount_a,
        amount_b=res.amount_b,
        shares_burned=res.shares_to_burn,
        reserve_a_after=res.pool.reserve_a,
        reserve_b_after=res.pool.reserve_b,
    )
    return res.pool, effect, lp_supply - res.shares_to_burn


def _apply_swap(pool: PoolState, params: ActionParams, lp_supply: int) -> tuple[PoolState, Effect, int]:
    res = quote_and_apply_swap(
        pool,
        amount_in=params.amount_in,
        min_amount_out=params.min_amount_out,
        direction=params.direction,
    )
    effect = Effect(
        event=Event.SWAP_EXECUTED,
        pool_id=res.pool.pool_id,
        amount_in=params.amount_in,
        amount_out=res.amount_out,
        fee_portion=res.fee_portion,
        is_a_to_b=params.direction.is_a_to_b,
        reserve_a_after=res.pool.reserve_a,
        reserve_b_after=res.pool.reserve_b,
    )
    return res.pool, effect, lp_supply


ApplyFn = Callable[[PoolState, ActionParams, int], tuple[PoolState, Effect, int]]

_DISPATCH: dict[Action, ApplyFn] = {
    Action.ADD_LIQUIDITY: _apply_add_liquidity,
    Action.REMOVE_LIQUIDITY: _apply_remove_liquidity,
    Action.SWAP: _apply_swap,
}


def step(pool: PoolState, params: ActionParams, *, lp_supply: int = 0) -> StepResult:
    """Execute one action against ``pool``.

    ``lp_supply`` is the host's current share supply (ignored by swaps).

    Returns ``StepResult`` with ``accepted=True`` and the new pool on success,
    or ``accepted=False`` with the ``DexError`` that rejected it. The input
    ``pool`` is never modified.
    """
    apply_fn = _DISPATCH.get(params.action)
    if apply_fn is None:
        raise ValueError(f"unknown action: {params.action!r}")

    try:
        new_pool, effect, new_supply = apply_fn(pool, params, lp_supply)
    except DexError as exc:
        logger.warning("pool %s: %s rejected: %s", pool.pool_id, params.action.value, exc)
        return StepResult(accepted=False, error=exc)

    violations = check_all(new_pool) + check_transition(
        pool,
        new_pool,
        params.action,
        supply_before=lp_supply,
        supply_after=new_supply,
    )
    if violations:
        logger.error("pool %s: %s broke invariants: %s", pool.pool_id, params.action.value, violations)
        return StepResult(accepted=False, error=InvariantViolation(violations))

    logger.debug(
        "pool %s: %s accepted, reserves (%d, %d) -> (%d, %d)",
        pool.pool_id, params.action.value,
        pool.reserve_a, pool.reserve_b, new_pool.reserve_a, new_pool.reserve_b,
    )
    return StepResult(accepted=True, pool=new_pool, effect=effect)


def step_or_raise(pool: PoolState, params: ActionParams, *, lp_supply: int = 0) -> StepResult:
    """Like ``step()`` but raises the rejecting ``DexError`` instead of returning it."""
    result = step(pool, params, lp_supply=lp_supply)
    if not result.accepted:
        assert result.error is not None
        raise result.error
    return result


def pool_initialized_effect(pool: PoolState) -> Effect:
    """Effect for a freshly created pool (creation is not a step on an existing record)."""
    return Effect(event=Event.POOL_INITIALIZED, pool_id=pool.pool_id)
