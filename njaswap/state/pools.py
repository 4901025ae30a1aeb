"""
Pool record for a two-asset constant-product pool.

The record is immutable; operations return a new `PoolState` built with
`dataclasses.replace`, so a rejected operation can never leave a half-updated pool.
Vault, mint and authority references are opaque handles owned by the host ledger;
they are carried through unchanged and never interpreted here.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Mapping, Tuple

from ..config import kernel_params
from ..errors import InvalidTokenPair
from ..kernels.python.cpmm_swap_v1 import validate_fee_rate
from ..kernels.python.int_math import require_amount, require_int

# Type aliases
AssetId = str
Ref = str
PoolId = str


@unique
class SwapDirection(Enum):
    A_TO_B = "a_to_b"
    B_TO_A = "b_to_a"

    @classmethod
    def from_flag(cls, is_a_to_b: bool) -> "SwapDirection":
        """Convert the host's `is_a_to_b` boolean."""
        if not isinstance(is_a_to_b, bool):
            raise TypeError("is_a_to_b must be a bool")
        return cls.A_TO_B if is_a_to_b else cls.B_TO_A

    @property
    def is_a_to_b(self) -> bool:
        return self is SwapDirection.A_TO_B


def canonical_pair(asset_a_id: AssetId, asset_b_id: AssetId) -> Tuple[AssetId, AssetId]:
    """Order-independent key for a pair: (smaller, larger)."""
    if asset_a_id == asset_b_id:
        raise InvalidTokenPair(f"asset ids must differ: {asset_a_id!r}")
    return (asset_a_id, asset_b_id) if asset_a_id < asset_b_id else (asset_b_id, asset_a_id)


def compute_pool_id(asset_a_id: AssetId, asset_b_id: AssetId) -> PoolId:
    """
    Deterministic pool id for an asset pair.

        pool_id = sha256(domain || 0x00 || lo || 0x00 || hi)

    where (lo, hi) is the lexicographically ordered pair, so (A, B) and (B, A)
    map to the same pool.
    """
    if not isinstance(asset_a_id, str) or not isinstance(asset_b_id, str):
        raise TypeError("asset ids must be strings")
    lo, hi = canonical_pair(asset_a_id, asset_b_id)
    data = (
        kernel_params().pool_id_domain.encode("utf-8")
        + b"\x00"
        + lo.encode("utf-8")
        + b"\x00"
        + hi.encode("utf-8")
    )
    return "0x" + hashlib.sha256(data).hexdigest()


@dataclass(frozen=True)
class PoolState:
    """
    State of one constant-product pool.

    Attributes:
        asset_a_id: First asset identifier
        asset_b_id: Second asset identifier (must differ from asset_a_id)
        fee_rate_bps: Input fee in basis points (0-10000), fixed at creation
        reserve_a: Reserve of asset A in smallest units (64-bit)
        reserve_b: Reserve of asset B in smallest units (64-bit)
        authority_ref: Opaque handle of the pool's signing authority
        vault_a_ref: Opaque handle of the vault holding asset A
        vault_b_ref: Opaque handle of the vault holding asset B
        share_mint_ref: Opaque handle of the LP share mint
        authority_bump: Opaque address-derivation nonce (0-255)
        pool_id: Deterministic id derived from the asset pair
    """
    asset_a_id: AssetId
    asset_b_id: AssetId
    fee_rate_bps: int
    reserve_a: int = 0
    reserve_b: int = 0
    authority_ref: Ref = ""
    vault_a_ref: Ref = ""
    vault_b_ref: Ref = ""
    share_mint_ref: Ref = ""
    authority_bump: int = 0
    pool_id: PoolId = ""

    def __post_init__(self) -> None:
        if not isinstance(self.asset_a_id, str) or not isinstance(self.asset_b_id, str):
            raise TypeError("asset ids must be strings")
        if self.asset_a_id == self.asset_b_id:
            raise InvalidTokenPair(f"asset ids must differ: {self.asset_a_id!r}")
        validate_fee_rate(self.fee_rate_bps)
        require_amount("reserve_a", self.reserve_a)
        require_amount("reserve_b", self.reserve_b)
        for name in ("authority_ref", "vault_a_ref", "vault_b_ref", "share_mint_ref"):
            if not isinstance(getattr(self, name), str):
                raise TypeError(f"{name} must be a string")
        require_int("authority_bump", self.authority_bump)
        if not (0 <= self.authority_bump <= kernel_params().max_authority_bump):
            raise ValueError(f"authority_bump out of range: {self.authority_bump}")

        expected_id = compute_pool_id(self.asset_a_id, self.asset_b_id)
        if not self.pool_id:
            object.__setattr__(self, "pool_id", expected_id)
        elif self.pool_id != expected_id:
            raise ValueError(f"pool_id does not match asset pair: {self.pool_id}")

    @property
    def is_funded(self) -> bool:
        return self.reserve_a > 0 and self.reserve_b > 0

    def reserves_for(self, direction: SwapDirection) -> Tuple[int, int]:
        """(reserve_in, reserve_out) for a swap in `direction`."""
        if direction is SwapDirection.A_TO_B:
            return self.reserve_a, self.reserve_b
        return self.reserve_b, self.reserve_a

    def assets_for(self, direction: SwapDirection) -> Tuple[AssetId, AssetId]:
        """(asset_in, asset_out) for a swap in `direction`."""
        if direction is SwapDirection.A_TO_B:
            return self.asset_a_id, self.asset_b_id
        return self.asset_b_id, self.asset_a_id

    def get_constant_product(self) -> int:
        return self.reserve_a * self.reserve_b

    def __repr__(self) -> str:
        return (
            f"PoolState(pool_id={self.pool_id[:18]}..., "
            f"assets=({self.asset_a_id}, {self.asset_b_id}), "
            f"reserves=({self.reserve_a}, {self.reserve_b}), "
            f"fee_rate_bps={self.fee_rate_bps})"
        )


# Auto-derived from PoolState field definitions.
STATE_VAR_NAMES: tuple[str, ...] = tuple(PoolState.__dataclass_fields__)


def state_to_dict(state: PoolState) -> dict[str, int | str]:
    """Serialize a PoolState to a plain dict (host storage format)."""
    return {name: getattr(state, name) for name in STATE_VAR_NAMES}


def state_from_dict(d: Mapping[str, Any]) -> PoolState:
    """Deserialize a dict to a PoolState. Raises KeyError on missing fields."""
    kwargs: dict[str, Any] = {}
    for name in STATE_VAR_NAMES:
        val = d[name]
        if isinstance(val, bool) or not isinstance(val, (int, str)):
            raise TypeError(f"pool field {name!r} must be int|str, got {type(val).__name__}")
        kwargs[name] = val
    return PoolState(**kwargs)
