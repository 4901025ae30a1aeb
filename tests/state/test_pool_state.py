# [TESTER] v1

from __future__ import annotations

from dataclasses import replace

import pytest

from njaswap.errors import InvalidAmount, InvalidFee, InvalidTokenPair, MathOverflow, PoolAlreadyExists, PoolNotFound
from njaswap.kernels.python.int_math import U64_MAX
from njaswap.state import (
    BalanceTable,
    PoolRegistry,
    PoolState,
    SwapDirection,
    compute_pool_id,
    state_from_dict,
    state_to_dict,
)
from njaswap.state.pools import STATE_VAR_NAMES, canonical_pair


def _state(**kw) -> PoolState:
    base = dict(
        asset_a_id="asset-A",
        asset_b_id="asset-B",
        fee_rate_bps=30,
        reserve_a=10_000,
        reserve_b=40_000,
        authority_ref="auth",
        vault_a_ref="vault-A",
        vault_b_ref="vault-B",
        share_mint_ref="lp-mint",
        authority_bump=7,
    )
    base.update(kw)
    return PoolState(**base)


class TestPoolId:
    def test_order_independent(self):
        assert compute_pool_id("asset-A", "asset-B") == compute_pool_id("asset-B", "asset-A")
        assert compute_pool_id("asset-A", "asset-B") != compute_pool_id("asset-A", "asset-C")

    def test_format(self):
        pid = compute_pool_id("asset-A", "asset-B")
        assert pid.startswith("0x") and len(pid) == 66
        int(pid, 16)

    def test_separator_prevents_ambiguity(self):
        assert compute_pool_id("ab", "c") != compute_pool_id("a", "bc")

    def test_canonical_pair(self):
        assert canonical_pair("z", "a") == ("a", "z")
        with pytest.raises(InvalidTokenPair):
            canonical_pair("a", "a")


class TestPoolStateValidation:
    def test_pool_id_derived(self):
        s = _state()
        assert s.pool_id == compute_pool_id("asset-A", "asset-B")
        assert _state(pool_id=s.pool_id) == s

    def test_foreign_pool_id(self):
        with pytest.raises(ValueError, match="pool_id"):
            _state(pool_id="0x" + "ab" * 32)

    @pytest.mark.parametrize(
        "kw, exc",
        [
            ({"asset_b_id": "asset-A"}, InvalidTokenPair),
            ({"fee_rate_bps": 10_001}, InvalidFee),
            ({"reserve_a": -1}, InvalidAmount),
            ({"reserve_b": U64_MAX + 1}, MathOverflow),
            ({"authority_bump": 256}, ValueError),
            ({"authority_bump": -1}, ValueError),
            ({"asset_a_id": 1}, TypeError),
            ({"vault_a_ref": None}, TypeError),
            ({"reserve_a": 1.5}, TypeError),
        ],
    )
    def test_rejects(self, kw, exc):
        with pytest.raises(exc):
            _state(**kw)

    def test_frozen(self):
        s = _state()
        with pytest.raises(AttributeError):
            s.reserve_a = 1  # type: ignore[misc]

    def test_direction_views(self):
        s = _state()
        assert s.reserves_for(SwapDirection.A_TO_B) == (10_000, 40_000)
        assert s.reserves_for(SwapDirection.B_TO_A) == (40_000, 10_000)
        assert s.assets_for(SwapDirection.B_TO_A) == ("asset-B", "asset-A")
        assert s.get_constant_product() == 400_000_000
        assert s.is_funded
        assert not replace(s, reserve_a=0, reserve_b=0).is_funded

    def test_repr_is_short(self):
        assert "reserves=(10000, 40000)" in repr(_state())


class TestSwapDirection:
    def test_from_flag(self):
        assert SwapDirection.from_flag(True) is SwapDirection.A_TO_B
        assert SwapDirection.from_flag(False) is SwapDirection.B_TO_A
        assert SwapDirection.A_TO_B.is_a_to_b and not SwapDirection.B_TO_A.is_a_to_b

    def test_from_flag_requires_bool(self):
        with pytest.raises(TypeError):
            SwapDirection.from_flag(1)  # type: ignore[arg-type]


class TestSerialization:
    def test_round_trip(self):
        s = _state()
        d = state_to_dict(s)
        assert tuple(d) == STATE_VAR_NAMES
        assert state_from_dict(d) == s

    def test_missing_field(self):
        d = state_to_dict(_state())
        del d["reserve_a"]
        with pytest.raises(KeyError):
            state_from_dict(d)

    def test_bool_rejected(self):
        d = state_to_dict(_state())
        d["authority_bump"] = True
        with pytest.raises(TypeError):
            state_from_dict(d)


class TestRegistry:
    def test_insert_get_find(self):
        reg = PoolRegistry()
        s = _state()
        reg.insert(s)
        assert s.pool_id in reg and len(reg) == 1
        assert reg.get(s.pool_id) is s
        assert reg.find("asset-B", "asset-A") is s

    def test_pair_unique_in_either_order(self):
        reg = PoolRegistry()
        reg.insert(_state())
        with pytest.raises(PoolAlreadyExists):
            reg.insert(_state(asset_a_id="asset-B", asset_b_id="asset-A", fee_rate_bps=5))

    def test_missing(self):
        with pytest.raises(PoolNotFound):
            PoolRegistry().get("0x00")

    def test_commit(self):
        reg = PoolRegistry()
        s = _state()
        reg.insert(s)
        reg.commit(replace(s, reserve_a=11_000))
        assert reg.get(s.pool_id).reserve_a == 11_000
        with pytest.raises(ValueError):
            reg.commit(replace(s, fee_rate_bps=31))
        with pytest.raises(PoolNotFound):
            reg.commit(_state(asset_b_id="asset-C"))

    def test_iteration_sorted_by_id(self):
        reg = PoolRegistry()
        pools = [_state(asset_b_id=f"asset-{c}") for c in "BCDE"]
        for p in reversed(pools):
            reg.insert(p)
        ids = [p.pool_id for p in reg]
        assert ids == sorted(ids)


class TestBalanceTable:
    def test_basic(self):
        t = BalanceTable()
        t.add("alice", "X", 10)
        t.add("bob", "X", 5)
        t.subtract("alice", "X", 4)
        assert t.get("alice", "X") == 6
        assert t.total("X") == 11
        assert t.total("Y") == 0

    def test_no_negative(self):
        t = BalanceTable()
        with pytest.raises(ValueError):
            t.subtract("alice", "X", 1)
        with pytest.raises(ValueError):
            t.set("alice", "X", -1)

    def test_snapshot_restore(self):
        t = BalanceTable()
        t.add("alice", "X", 10)
        snap = t.snapshot()
        t.add("alice", "X", 5)
        t.restore(snap)
        assert t.get("alice", "X") == 10
