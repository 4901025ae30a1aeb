"""
State management for njaswap pools
"""

from .balances import BalanceTable
from .pools import PoolState, SwapDirection, compute_pool_id, state_from_dict, state_to_dict
from .registry import PoolRegistry

__all__ = [
    "BalanceTable",
    "PoolState",
    "SwapDirection",
    "compute_pool_id",
    "state_from_dict",
    "state_to_dict",
    "PoolRegistry",
]
