"""
Host ledger boundary.

The pool core computes numbers; the host moves value. `LedgerHost` is the
contract the program shell relies on: custody transfers, LP share mint/burn,
share-supply reads, signer authorization, and an atomic section that undoes
every ledger effect if anything inside it fails.
"""

from __future__ import annotations

from typing import ContextManager, Protocol, runtime_checkable


@runtime_checkable
class LedgerHost(Protocol):
    def transfer(self, from_ref: str, to_ref: str, asset_ref: str, amount: int) -> bool:
        """Move `amount` of `asset_ref` from `from_ref` to `to_ref`. False on failure."""
        ...

    def mint_shares(self, mint_ref: str, to_ref: str, amount: int) -> None:
        ...

    def burn_shares(self, mint_ref: str, from_ref: str, amount: int) -> None:
        ...

    def current_share_supply(self, mint_ref: str) -> int:
        ...

    def authorize(self, signer_ref: str, required_ref: str) -> bool:
        """True iff `signer_ref` holds rights over `required_ref`."""
        ...

    def atomic(self) -> ContextManager[None]:
        """All ledger effects inside the block apply together or not at all."""
        ...
