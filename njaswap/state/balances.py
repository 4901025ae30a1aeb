"""
Asset balance tracking for the in-memory host ledger.

Implements BalanceTable[Ref, AssetId] -> Amount.
"""

from typing import Dict, Tuple


# Type aliases
Ref = str  # opaque account/vault handle
AssetId = str
Amount = int  # Non-negative integer


class BalanceTable:
    """
    Balance table mapping (owner_ref, asset) -> amount.

    Zero balances are omitted to keep the table sparse. Callers that need a
    stable order should sort keys explicitly.
    """

    def __init__(self) -> None:
        self._balances: Dict[Tuple[Ref, AssetId], Amount] = {}

    def get(self, owner: Ref, asset: AssetId) -> Amount:
        """Get balance for (owner, asset). Returns 0 if not found."""
        return self._balances.get((owner, asset), 0)

    def set(self, owner: Ref, asset: AssetId, amount: Amount) -> None:
        """
        Set balance for (owner, asset).

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop((owner, asset), None)
        else:
            self._balances[(owner, asset)] = amount

    def add(self, owner: Ref, asset: AssetId, delta: int) -> None:
        """Add delta to a balance (delta may be negative)."""
        current = self.get(owner, asset)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(owner, asset, new_balance)

    def subtract(self, owner: Ref, asset: AssetId, delta: Amount) -> None:
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(owner, asset, -delta)

    def total(self, asset: AssetId) -> Amount:
        """Sum of all balances of `asset`."""
        return sum(amount for (_, a), amount in self._balances.items() if a == asset)

    def snapshot(self) -> Dict[Tuple[Ref, AssetId], Amount]:
        return dict(self._balances)

    def restore(self, snapshot: Dict[Tuple[Ref, AssetId], Amount]) -> None:
        self._balances = dict(snapshot)

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
