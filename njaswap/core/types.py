"""Data types for pool operations and the dispatch engine.

All types are frozen dataclasses (immutable).

Units/conventions:
- amounts and shares are integer smallest units (64-bit),
- `*_bps` rates are basis points (1/10_000).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique

from ..errors import DexError
from ..state.pools import PoolState, SwapDirection


@unique
class Action(Enum):
    """One member per mutating pool instruction."""
    ADD_LIQUIDITY = "add_liquidity"
    REMOVE_LIQUIDITY = "remove_liquidity"
    SWAP = "swap"


@unique
class Event(Enum):
    """Events emitted by successful operations."""
    POOL_INITIALIZED = "PoolInitialized"
    LIQUIDITY_ADDED = "LiquidityAdded"
    LIQUIDITY_REMOVED = "LiquidityRemoved"
    SWAP_EXECUTED = "SwapExecuted"


@dataclass(frozen=True)
class DepositResult:
    shares_to_mint: int
    shares_locked: int
    pool: PoolState


@dataclass(frozen=True)
class WithdrawalResult:
    amount_a: int
    amount_b: int
    shares_to_burn: int
    pool: PoolState


@dataclass(frozen=True)
class SwapResult:
    amount_out: int
    fee_portion: int
    pool: PoolState


@dataclass(frozen=True)
class ActionParams:
    """Parameters for an action. Unused fields default to 0."""

    action: Action
    amount_a: int = 0             # add_liquidity
    amount_b: int = 0             # add_liquidity
    min_shares_out: int = 0       # add_liquidity
    shares_in: int = 0            # remove_liquidity
    min_amount_a: int = 0         # remove_liquidity
    min_amount_b: int = 0         # remove_liquidity
    amount_in: int = 0            # swap
    min_amount_out: int = 0       # swap
    direction: SwapDirection = SwapDirection.A_TO_B  # swap


@dataclass(frozen=True)
class Effect:
    """Observables of a successful step; what the host must apply."""

    event: Event
    pool_id: str
    amount_a: int = 0             # deposited / withdrawn asset A
    amount_b: int = 0             # deposited / withdrawn asset B
    shares_minted: int = 0
    shares_locked: int = 0
    shares_burned: int = 0
    amount_in: int = 0
    amount_out: int = 0
    fee_portion: int = 0
    is_a_to_b: bool = False
    reserve_a_after: int = 0
    reserve_b_after: int = 0


@dataclass(frozen=True)
class StepResult:
    """Result of a single engine step."""

    accepted: bool
    pool: PoolState | None = None
    effect: Effect | None = None
    error: DexError | None = None

    @property
    def rejection(self) -> str | None:
        return None if self.error is None else self.error.name
