"""
Fee model: basis-point fee applied to the input leg of a swap.

    apply_fee(amount_in, fee_rate_bps) = amount_in * (10_000 - fee_rate_bps)

The result is kept in 1/10_000 units (no division), so the fee never loses
precision before pricing. It is computed in the 128-bit working width.
"""

from __future__ import annotations

from ..kernels.python.cpmm_swap_v1 import BPS_DENOM
from ..kernels.python.cpmm_swap_v1 import apply_fee as _kernel_apply_fee
from ..kernels.python.cpmm_swap_v1 import compute_fee_portion as _kernel_compute_fee_portion
from ..kernels.python.cpmm_swap_v1 import validate_fee_rate
from ..kernels.python.int_math import U128_MAX


def apply_fee(amount_in: int, fee_rate_bps: int) -> int:
    """
    Net input scaled by `BPS_DENOM`.

    Raises:
        InvalidFee: fee_rate_bps outside [0, 10000]
        MathOverflow: the product exceeds the 128-bit width
    """
    return _kernel_apply_fee(amount_in=amount_in, fee_rate_bps=fee_rate_bps, limit=U128_MAX)


def fee_portion(amount_in: int, fee_rate_bps: int) -> int:
    """Fee share of `amount_in` in whole units, rounded up (reporting only)."""
    return _kernel_compute_fee_portion(amount_in=amount_in, fee_rate_bps=fee_rate_bps)


__all__ = ["BPS_DENOM", "apply_fee", "fee_portion", "validate_fee_rate"]
