"""
Kernel parameter loading.

The YAML file at `njaswap/kernels/dex/cpmm_pool_v1.yaml` is the source of truth
for widths, the basis-point denominator, the default fee, and the minimum
liquidity lock. It is parsed once and cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml


@dataclass(frozen=True)
class KernelParams:
    kernel: str
    version: int
    amount_bits: int
    wide_bits: int
    bps_denom: int
    default_fee_rate_bps: int
    minimum_liquidity: int
    pool_id_domain: str
    max_authority_bump: int

    def __post_init__(self) -> None:
        for name in (
            "version",
            "amount_bits",
            "wide_bits",
            "bps_denom",
            "default_fee_rate_bps",
            "minimum_liquidity",
            "max_authority_bump",
        ):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if self.amount_bits <= 0 or self.wide_bits < 2 * self.amount_bits:
            raise ValueError("wide_bits must hold the product of two amounts")
        if self.bps_denom <= 0:
            raise ValueError("bps_denom must be positive")
        if not (0 <= self.default_fee_rate_bps <= self.bps_denom):
            raise ValueError(f"default_fee_rate_bps must be in [0, {self.bps_denom}]")
        if self.minimum_liquidity <= 0:
            raise ValueError("minimum_liquidity must be positive")
        if not self.pool_id_domain:
            raise ValueError("pool_id_domain must be a non-empty string")

    @property
    def amount_max(self) -> int:
        return (1 << self.amount_bits) - 1

    @property
    def wide_max(self) -> int:
        return (1 << self.wide_bits) - 1


def default_params_path() -> Path:
    # njaswap/config.py -> njaswap/ -> kernels/dex/cpmm_pool_v1.yaml
    return Path(__file__).resolve().parent / "kernels" / "dex" / "cpmm_pool_v1.yaml"


def params_from_mapping(obj: Mapping[str, Any]) -> KernelParams:
    """Build `KernelParams` from the parsed YAML document. Raises KeyError on missing sections."""
    if not isinstance(obj, Mapping):
        raise TypeError("kernel params YAML must be a mapping")
    arithmetic = obj["arithmetic"]
    fees = obj["fees"]
    liquidity = obj["liquidity"]
    pool = obj["pool"]
    return KernelParams(
        kernel=str(obj["kernel"]),
        version=obj["version"],
        amount_bits=arithmetic["amount_bits"],
        wide_bits=arithmetic["wide_bits"],
        bps_denom=fees["bps_denom"],
        default_fee_rate_bps=fees["default_fee_rate_bps"],
        minimum_liquidity=liquidity["minimum_liquidity"],
        pool_id_domain=str(pool["pool_id_domain"]),
        max_authority_bump=pool["max_authority_bump"],
    )


def load_params(path: Path) -> KernelParams:
    obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    return params_from_mapping(obj)


@lru_cache(maxsize=1)
def kernel_params() -> KernelParams:
    """Cached parameters from the packaged kernel file."""
    return load_params(default_params_path())
