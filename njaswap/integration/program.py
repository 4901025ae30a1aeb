"""
Pool program shell: the imperative wrapper around the functional core.

Every instruction runs the same sequence:
1. Look up the pool record and authorize the signer.
2. Read the share supply from the host and run the core step (pure; may reject).
3. Inside `host.atomic()`, perform the transfers and share mint/burn exactly as
   quoted. A refused transfer raises `LedgerTransferError` and rolls back.
4. Commit the new pool record to the registry.

Nothing is committed until the host has applied every ledger effect.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.engine import pool_initialized_effect, step_or_raise
from ..core.liquidity import create_pool
from ..core.types import Action, ActionParams, Effect, StepResult
from ..errors import LedgerTransferError, Unauthorized
from ..state.pools import AssetId, PoolId, PoolState, SwapDirection
from ..state.registry import PoolRegistry
from .host import LedgerHost

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgramConfig:
    # Holder of the minimum-liquidity shares minted on the first deposit.
    # The program refuses this ref as signer or account, so those shares are never redeemed.
    locked_shares_ref: str = "njaswap/locked-liquidity"


class PoolProgram:
    def __init__(
        self,
        host: LedgerHost,
        registry: Optional[PoolRegistry] = None,
        config: ProgramConfig = ProgramConfig(),
    ) -> None:
        self.host = host
        self.registry = registry if registry is not None else PoolRegistry()
        self.config = config

    # -- helpers ---------------------------------------------------------------

    def _require_signer(self, signer_ref: str, required_ref: str) -> None:
        locked = self.config.locked_shares_ref
        if locked in (signer_ref, required_ref):
            raise Unauthorized(f"{locked} holds locked liquidity and cannot act")
        if not self.host.authorize(signer_ref, required_ref):
            raise Unauthorized(f"{signer_ref} cannot act for {required_ref}")

    def _transfer(self, from_ref: str, to_ref: str, asset_ref: str, amount: int) -> None:
        if not self.host.transfer(from_ref, to_ref, asset_ref, amount):
            raise LedgerTransferError(f"transfer of {amount} {asset_ref} from {from_ref} to {to_ref} failed")

    def _commit(self, result: StepResult) -> None:
        assert result.pool is not None and result.effect is not None
        self.registry.commit(result.pool)
        logger.info(
            "pool %s: %s committed, reserves (%d, %d)",
            result.pool.pool_id, result.effect.event.value,
            result.pool.reserve_a, result.pool.reserve_b,
        )

    # -- instructions ----------------------------------------------------------

    def initialize_pool(
        self,
        payer_ref: str,
        asset_a_id: AssetId,
        asset_b_id: AssetId,
        fee_rate_bps: Optional[int] = None,
        *,
        authority_ref: str,
        vault_a_ref: str,
        vault_b_ref: str,
        share_mint_ref: str,
        authority_bump: int = 0,
    ) -> Tuple[PoolState, Effect]:
        """Create and register an empty pool. Raises PoolAlreadyExists for a taken pair."""
        pool = create_pool(
            asset_a_id,
            asset_b_id,
            fee_rate_bps,
            authority_ref=authority_ref,
            vault_a_ref=vault_a_ref,
            vault_b_ref=vault_b_ref,
            share_mint_ref=share_mint_ref,
            authority_bump=authority_bump,
        )
        self.registry.insert(pool)
        logger.info(
            "pool %s initialized by %s: %s/%s fee_rate_bps=%d",
            pool.pool_id, payer_ref, asset_a_id, asset_b_id, pool.fee_rate_bps,
        )
        return pool, pool_initialized_effect(pool)

    def add_liquidity(
        self,
        pool_id: PoolId,
        signer_ref: str,
        user_ref: str,
        amount_a: int,
        amount_b: int,
        min_shares_out: int,
    ) -> StepResult:
        pool = self.registry.get(pool_id)
        self._require_signer(signer_ref, user_ref)
        supply = self.host.current_share_supply(pool.share_mint_ref)

        result = step_or_raise(
            pool,
            ActionParams(
                action=Action.ADD_LIQUIDITY,
                amount_a=amount_a,
                amount_b=amount_b,
                min_shares_out=min_shares_out,
            ),
            lp_supply=supply,
        )
        effect = result.effect
        assert effect is not None

        with self.host.atomic():
            self._transfer(user_ref, pool.vault_a_ref, pool.asset_a_id, amount_a)
            self._transfer(user_ref, pool.vault_b_ref, pool.asset_b_id, amount_b)
            self.host.mint_shares(pool.share_mint_ref, user_ref, effect.shares_minted)
            if effect.shares_locked:
                self.host.mint_shares(pool.share_mint_ref, self.config.locked_shares_ref, effect.shares_locked)

        self._commit(result)
        return result

    def remove_liquidity(
        self,
        pool_id: PoolId,
        signer_ref: str,
        user_ref: str,
        shares_in: int,
        min_amount_a: int,
        min_amount_b: int,
    ) -> StepResult:
        pool = self.registry.get(pool_id)
        self._require_signer(signer_ref, user_ref)
        supply = self.host.current_share_supply(pool.share_mint_ref)

        result = step_or_raise(
            pool,
            ActionParams(
                action=Action.REMOVE_LIQUIDITY,
                shares_in=shares_in,
                min_amount_a=min_amount_a,
                min_amount_b=min_amount_b,
            ),
            lp_supply=supply,
        )
        effect = result.effect
        assert effect is not None

        with self.host.atomic():
            self.host.burn_shares(pool.share_mint_ref, user_ref, effect.shares_burned)
            self._transfer(pool.vault_a_ref, user_ref, pool.asset_a_id, effect.amount_a)
            self._transfer(pool.vault_b_ref, user_ref, pool.asset_b_id, effect.amount_b)

        self._commit(result)
        return result

    def swap(
        self,
        pool_id: PoolId,
        signer_ref: str,
        user_ref: str,
        amount_in: int,
        min_amount_out: int,
        is_a_to_b: bool,
    ) -> StepResult:
        pool = self.registry.get(pool_id)
        self._require_signer(signer_ref, user_ref)
        direction = SwapDirection.from_flag(is_a_to_b)

        result = step_or_raise(
            pool,
            ActionParams(
                action=Action.SWAP,
                amount_in=amount_in,
                min_amount_out=min_amount_out,
                direction=direction,
            ),
        )
        effect = result.effect
        assert effect is not None

        asset_in, asset_out = pool.assets_for(direction)
        if direction is SwapDirection.A_TO_B:
            vault_in, vault_out = pool.vault_a_ref, pool.vault_b_ref
        else:
            vault_in, vault_out = pool.vault_b_ref, pool.vault_a_ref

        with self.host.atomic():
            self._transfer(user_ref, vault_in, asset_in, amount_in)
            self._transfer(vault_out, user_ref, asset_out, effect.amount_out)

        self._commit(result)
        return result
