"""
Core pool algorithms
"""

from .cpmm import (
    MINIMUM_LIQUIDITY,
    isqrt,
    quote_swap,
    quote_deposit,
    quote_withdrawal,
    quote_optimal_amounts,
)
from .fees import BPS_DENOM, apply_fee, fee_portion, validate_fee_rate
from .liquidity import (
    DEFAULT_FEE_RATE_BPS,
    create_pool,
    quote_and_apply_deposit,
    quote_and_apply_withdrawal,
)
from .swap import quote_and_apply_swap
from .engine import step, step_or_raise
from .invariants import check_all, check_transition
from .types import (
    Action,
    ActionParams,
    DepositResult,
    Effect,
    Event,
    StepResult,
    SwapResult,
    WithdrawalResult,
)

__all__ = [
    "MINIMUM_LIQUIDITY",
    "isqrt",
    "quote_swap",
    "quote_deposit",
    "quote_withdrawal",
    "quote_optimal_amounts",
    "BPS_DENOM",
    "apply_fee",
    "fee_portion",
    "validate_fee_rate",
    "DEFAULT_FEE_RATE_BPS",
    "create_pool",
    "quote_and_apply_deposit",
    "quote_and_apply_withdrawal",
    "quote_and_apply_swap",
    "step",
    "step_or_raise",
    "check_all",
    "check_transition",
    "Action",
    "ActionParams",
    "DepositResult",
    "Effect",
    "Event",
    "StepResult",
    "SwapResult",
    "WithdrawalResult",
]
