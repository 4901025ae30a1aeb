"""
Integer kernels for pool pricing and share accounting.

- `int_math`: width-checked arithmetic and Newton isqrt,
- `cpmm_swap_v1`: exact-in swap quote with the input-side fee,
- `lp_math_v1`: LP share mint on deposit and floor-inverse withdrawal.

No floats. A value that leaves its width raises `MathOverflow` instead of wrapping.
"""
