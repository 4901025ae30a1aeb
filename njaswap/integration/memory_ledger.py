"""
In-memory reference implementation of `LedgerHost`.

Used by tests, the offline demo, and any embedding that does not have a real
ledger behind it. Asset balances and LP share balances live in two
`BalanceTable`s; share supply is the sum of all holders of a mint.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Set, Tuple

from ..errors import LedgerTransferError
from ..kernels.python.int_math import U64_MAX
from ..state.balances import BalanceTable

logger = logging.getLogger(__name__)


class InMemoryLedger:
    def __init__(self) -> None:
        self.balances = BalanceTable()
        self.shares = BalanceTable()
        self._delegations: Set[Tuple[str, str]] = set()

    # -- setup helpers ---------------------------------------------------------

    def credit(self, owner_ref: str, asset_ref: str, amount: int) -> None:
        """Faucet: create `amount` of `asset_ref` out of thin air for `owner_ref`."""
        if amount < 0:
            raise ValueError(f"credit amount must be non-negative: {amount}")
        self.balances.add(owner_ref, asset_ref, amount)

    def delegate(self, signer_ref: str, account_ref: str) -> None:
        """Grant `signer_ref` rights over `account_ref` (e.g. pool authority over its vaults)."""
        self._delegations.add((signer_ref, account_ref))

    def balance_of(self, owner_ref: str, asset_ref: str) -> int:
        return self.balances.get(owner_ref, asset_ref)

    def shares_of(self, owner_ref: str, mint_ref: str) -> int:
        return self.shares.get(owner_ref, mint_ref)

    # -- LedgerHost ------------------------------------------------------------

    def transfer(self, from_ref: str, to_ref: str, asset_ref: str, amount: int) -> bool:
        if amount < 0 or amount > U64_MAX:
            return False
        if amount == 0:
            return True
        if self.balances.get(from_ref, asset_ref) < amount:
            logger.debug("transfer %s %s -> %s: insufficient balance", asset_ref, from_ref, to_ref)
            return False
        self.balances.subtract(from_ref, asset_ref, amount)
        self.balances.add(to_ref, asset_ref, amount)
        return True

    def mint_shares(self, mint_ref: str, to_ref: str, amount: int) -> None:
        if amount < 0:
            raise LedgerTransferError(f"cannot mint a negative share amount: {amount}")
        if self.current_share_supply(mint_ref) + amount > U64_MAX:
            raise LedgerTransferError(f"share supply of {mint_ref} would exceed 64 bits")
        self.shares.add(to_ref, mint_ref, amount)

    def burn_shares(self, mint_ref: str, from_ref: str, amount: int) -> None:
        held = self.shares.get(from_ref, mint_ref)
        if amount < 0 or amount > held:
            raise LedgerTransferError(f"cannot burn {amount} shares of {mint_ref}; {from_ref} holds {held}")
        self.shares.subtract(from_ref, mint_ref, amount)

    def current_share_supply(self, mint_ref: str) -> int:
        return self.shares.total(mint_ref)

    def authorize(self, signer_ref: str, required_ref: str) -> bool:
        return signer_ref == required_ref or (signer_ref, required_ref) in self._delegations

    @contextmanager
    def atomic(self) -> Iterator[None]:
        balances: Dict = self.balances.snapshot()
        shares: Dict = self.shares.snapshot()
        try:
            yield
        except BaseException:
            self.balances.restore(balances)
            self.shares.restore(shares)
            logger.debug("ledger section rolled back")
            raise

    def __repr__(self) -> str:
        return f"InMemoryLedger(balances={self.balances!r}, shares={self.shares!r})"
