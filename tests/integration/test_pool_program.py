"""Tests for njaswap/integration: the program shell over the in-memory ledger.

Covers the full instruction flow (authorize -> core step -> ledger effects ->
registry commit) and rollback when the ledger refuses a transfer.
"""

from __future__ import annotations

import pytest

from njaswap.core import Event
from njaswap.errors import (
    InsufficientLiquidity,
    InvalidTokenPair,
    LedgerTransferError,
    PoolAlreadyExists,
    PoolNotFound,
    SlippageExceeded,
    Unauthorized,
)
from njaswap.integration import InMemoryLedger, LedgerHost, PoolProgram, ProgramConfig

USER = "user-1"
ASSET_A = "asset-A"
ASSET_B = "asset-B"
MINT = "lp-mint"


def _setup(fund_a: int = 10_000_000, fund_b: int = 10_000_000):
    ledger = InMemoryLedger()
    if fund_a:
        ledger.credit(USER, ASSET_A, fund_a)
    if fund_b:
        ledger.credit(USER, ASSET_B, fund_b)
    program = PoolProgram(ledger)
    pool, effect = program.initialize_pool(
        USER,
        ASSET_A,
        ASSET_B,
        30,
        authority_ref="pool-authority",
        vault_a_ref="vault-A",
        vault_b_ref="vault-B",
        share_mint_ref=MINT,
        authority_bump=254,
    )
    return ledger, program, pool, effect


def _assert_vaults_match(ledger: InMemoryLedger, program: PoolProgram, pool_id: str) -> None:
    p = program.registry.get(pool_id)
    assert ledger.balance_of(p.vault_a_ref, p.asset_a_id) == p.reserve_a
    assert ledger.balance_of(p.vault_b_ref, p.asset_b_id) == p.reserve_b


def test_in_memory_ledger_satisfies_protocol():
    assert isinstance(InMemoryLedger(), LedgerHost)


def test_initialize_pool():
    _, program, pool, effect = _setup()
    assert effect.event is Event.POOL_INITIALIZED
    assert effect.pool_id == pool.pool_id
    assert program.registry.find(ASSET_B, ASSET_A) is pool
    assert (pool.reserve_a, pool.reserve_b) == (0, 0)


def test_initialize_rejects_duplicate_and_same_asset():
    _, program, _, _ = _setup()
    with pytest.raises(PoolAlreadyExists):
        program.initialize_pool(
            USER, ASSET_B, ASSET_A, 5,
            authority_ref="x", vault_a_ref="y", vault_b_ref="z", share_mint_ref="w",
        )
    with pytest.raises(InvalidTokenPair):
        program.initialize_pool(
            USER, ASSET_A, ASSET_A,
            authority_ref="x", vault_a_ref="y", vault_b_ref="z", share_mint_ref="w",
        )


def test_first_deposit_mints_and_locks():
    ledger, program, pool, _ = _setup()
    res = program.add_liquidity(pool.pool_id, USER, USER, 1_000_000, 2_000_000, 1_413_213)
    assert res.accepted
    assert res.effect.shares_minted == 1_413_213
    assert res.effect.shares_locked == 1000
    assert ledger.shares_of(USER, MINT) == 1_413_213
    assert ledger.shares_of(ProgramConfig().locked_shares_ref, MINT) == 1000
    assert ledger.current_share_supply(MINT) == 1_414_213
    assert ledger.balance_of(USER, ASSET_A) == 9_000_000
    assert ledger.balance_of(USER, ASSET_B) == 8_000_000
    _assert_vaults_match(ledger, program, pool.pool_id)


def test_swap_moves_funds_both_ways():
    ledger, program, pool, _ = _setup()
    program.add_liquidity(pool.pool_id, USER, USER, 1_000_000, 2_000_000, 0)

    res = program.swap(pool.pool_id, USER, USER, 10_000, 19_743, True)
    assert res.effect.event is Event.SWAP_EXECUTED
    assert res.effect.amount_out == 19_743
    after = program.registry.get(pool.pool_id)
    assert (after.reserve_a, after.reserve_b) == (1_010_000, 1_980_257)
    assert ledger.balance_of(USER, ASSET_A) == 8_990_000
    assert ledger.balance_of(USER, ASSET_B) == 8_019_743
    _assert_vaults_match(ledger, program, pool.pool_id)

    program.swap(pool.pool_id, USER, USER, 19_743, 0, False)
    _assert_vaults_match(ledger, program, pool.pool_id)
    # Round trip at a non-zero fee loses value.
    assert ledger.balance_of(USER, ASSET_A) < 9_000_000


def test_swap_slippage_changes_nothing():
    ledger, program, pool, _ = _setup()
    program.add_liquidity(pool.pool_id, USER, USER, 1_000_000, 2_000_000, 0)
    before = program.registry.get(pool.pool_id)
    with pytest.raises(SlippageExceeded):
        program.swap(pool.pool_id, USER, USER, 10_000, 19_744, True)
    assert program.registry.get(pool.pool_id) is before
    assert ledger.balance_of(USER, ASSET_A) == 9_000_000


def test_remove_liquidity_leaves_locked_backing():
    ledger, program, pool, _ = _setup()
    program.add_liquidity(pool.pool_id, USER, USER, 1_000_000, 2_000_000, 0)
    shares = ledger.shares_of(USER, MINT)

    res = program.remove_liquidity(pool.pool_id, USER, USER, shares, 0, 0)
    assert res.effect.event is Event.LIQUIDITY_REMOVED
    assert res.effect.shares_burned == shares
    assert ledger.shares_of(USER, MINT) == 0
    assert ledger.current_share_supply(MINT) == 1000
    after = program.registry.get(pool.pool_id)
    assert after.is_funded
    assert ledger.balance_of(USER, ASSET_A) == 9_000_000 + res.effect.amount_a <= 10_000_000
    _assert_vaults_match(ledger, program, pool.pool_id)


def test_locked_liquidity_cannot_be_redeemed():
    ledger, program, pool, _ = _setup()
    program.add_liquidity(pool.pool_id, USER, USER, 1_000_000, 2_000_000, 0)
    program.remove_liquidity(pool.pool_id, USER, USER, ledger.shares_of(USER, MINT), 0, 0)
    locked = ProgramConfig().locked_shares_ref
    before = program.registry.get(pool.pool_id)

    with pytest.raises(Unauthorized):
        program.remove_liquidity(pool.pool_id, locked, locked, 1000, 0, 0)
    ledger.delegate("mallory", locked)
    with pytest.raises(Unauthorized):
        program.remove_liquidity(pool.pool_id, "mallory", locked, 1000, 0, 0)
    with pytest.raises(Unauthorized):
        program.swap(pool.pool_id, locked, locked, 10, 0, True)
    with pytest.raises(Unauthorized):
        program.add_liquidity(pool.pool_id, locked, USER, 1_000, 2_000, 0)

    assert ledger.current_share_supply(MINT) == 1000
    assert ledger.shares_of(locked, MINT) == 1000
    assert program.registry.get(pool.pool_id) is before
    assert before.is_funded


def test_failed_transfer_rolls_back():
    ledger, program, pool, _ = _setup(fund_b=0)
    with pytest.raises(LedgerTransferError):
        program.add_liquidity(pool.pool_id, USER, USER, 1_000_000, 2_000_000, 0)
    assert ledger.balance_of(USER, ASSET_A) == 10_000_000
    assert ledger.balance_of("vault-A", ASSET_A) == 0
    assert ledger.current_share_supply(MINT) == 0
    assert program.registry.get(pool.pool_id).reserve_a == 0


def test_burn_without_holding_rolls_back():
    ledger, program, pool, _ = _setup()
    program.add_liquidity(pool.pool_id, USER, USER, 1_000_000, 2_000_000, 0)
    before = program.registry.get(pool.pool_id)
    with pytest.raises(LedgerTransferError):
        program.remove_liquidity(pool.pool_id, "user-2", "user-2", 500, 0, 0)
    assert program.registry.get(pool.pool_id) is before
    _assert_vaults_match(ledger, program, pool.pool_id)


def test_core_rejection_raises_before_ledger():
    ledger, program, pool, _ = _setup()
    with pytest.raises(InsufficientLiquidity):
        program.swap(pool.pool_id, USER, USER, 100, 0, True)
    assert ledger.balance_of(USER, ASSET_A) == 10_000_000


def test_authorization():
    ledger, program, pool, _ = _setup()
    with pytest.raises(Unauthorized):
        program.add_liquidity(pool.pool_id, "mallory", USER, 1_000_000, 2_000_000, 0)
    ledger.delegate("router", USER)
    assert program.add_liquidity(pool.pool_id, "router", USER, 1_000_000, 2_000_000, 0).accepted


def test_unknown_pool():
    _, program, _, _ = _setup()
    with pytest.raises(PoolNotFound):
        program.swap("0x" + "00" * 32, USER, USER, 1, 0, True)
