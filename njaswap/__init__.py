"""
njaswap: integer pricing and accounting core for a two-asset constant-product AMM.

Layout:
- `njaswap/kernels/` holds the kernel parameter file (.yaml) and the integer-only
  Python kernels (swap quote, LP mint/burn, checked arithmetic).
- `njaswap/core/` is the functional core: pool operations, the dispatch engine,
  invariant checks.
- `njaswap/state/` holds the pool record and the per-pair pool registry.
- `njaswap/integration/` is the imperative shell around a host ledger.
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
