"""
Host integration layer: ledger boundary, in-memory reference host, program shell.
"""

from .host import LedgerHost
from .memory_ledger import InMemoryLedger
from .program import PoolProgram, ProgramConfig

__all__ = [
    "LedgerHost",
    "InMemoryLedger",
    "PoolProgram",
    "ProgramConfig",
]
