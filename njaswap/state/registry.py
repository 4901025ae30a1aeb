"""
Per-pair pool registry.

One pool per unordered asset pair, keyed by `pool_id`. This is the host-side
uniqueness check; the pool core itself keeps no global state.
"""

from __future__ import annotations

from typing import Dict, Iterator

from ..errors import PoolAlreadyExists, PoolNotFound
from .pools import AssetId, PoolId, PoolState, compute_pool_id


class PoolRegistry:
    """Deterministic map pool_id -> PoolState."""

    def __init__(self) -> None:
        self._pools: Dict[PoolId, PoolState] = {}

    def __contains__(self, pool_id: object) -> bool:
        return pool_id in self._pools

    def __len__(self) -> int:
        return len(self._pools)

    def __iter__(self) -> Iterator[PoolState]:
        for pool_id in sorted(self._pools):
            yield self._pools[pool_id]

    def get(self, pool_id: PoolId) -> PoolState:
        try:
            return self._pools[pool_id]
        except KeyError:
            raise PoolNotFound(f"no pool registered for {pool_id}") from None

    def find(self, asset_a_id: AssetId, asset_b_id: AssetId) -> PoolState:
        """Look up by pair, in either order."""
        return self.get(compute_pool_id(asset_a_id, asset_b_id))

    def insert(self, pool: PoolState) -> None:
        """Register a new pool. Raises PoolAlreadyExists if the pair is taken."""
        if pool.pool_id in self._pools:
            raise PoolAlreadyExists(
                f"pool already exists for ({pool.asset_a_id}, {pool.asset_b_id}): {pool.pool_id}"
            )
        self._pools[pool.pool_id] = pool

    def commit(self, pool: PoolState) -> None:
        """Replace an existing pool record with its updated version."""
        current = self.get(pool.pool_id)
        if (current.asset_a_id, current.asset_b_id) != (pool.asset_a_id, pool.asset_b_id):
            raise ValueError("pool asset ids are immutable")
        if current.fee_rate_bps != pool.fee_rate_bps:
            raise ValueError("pool fee_rate_bps is immutable")
        self._pools[pool.pool_id] = pool

    def __repr__(self) -> str:
        return f"PoolRegistry({len(self._pools)} pools)"
