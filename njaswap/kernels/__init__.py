"""
Kernel layer.

- `njaswap/kernels/dex/` holds `cpmm_pool_v1.yaml`, the widths and constants
  every kernel reads through `njaswap.config.kernel_params()`.
- `njaswap/kernels/python/` holds the pure integer kernels the core delegates to.
"""
