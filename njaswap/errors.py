"""Exception types for the pool core and its host shell.

Every domain failure is a `DexError` subclass carrying a stable numeric `code`
(the program error numbering, 6000+) and a `name`. The engine converts them to
`StepResult` rejections; callers that prefer exceptions use the `quote_and_apply_*`
functions or `step_or_raise()` directly.

Non-int arguments raise `TypeError`; those are caller bugs, not domain failures.
"""

from __future__ import annotations


class DexError(Exception):
    """Base class for every expected pool-operation failure."""

    code: int = 0
    name: str = "DexError"
    default_message: str = "pool operation failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MathOverflow(DexError):
    code = 6000
    name = "MathOverflow"
    default_message = "Math overflow occurred"


class InvalidTokenPair(DexError):
    code = 6001
    name = "InvalidTokenPair"
    default_message = "Invalid token pair - must be different"


class InvalidAmount(DexError):
    code = 6002
    name = "InvalidAmount"
    default_message = "Amount cannot be zero"


class SlippageExceeded(DexError):
    code = 6003
    name = "SlippageExceeded"
    default_message = "Slippage tolerance exceeded"


class InsufficientLiquidity(DexError):
    code = 6004
    name = "InsufficientLiquidity"
    default_message = "Insufficient liquidity in pool"


class InvalidFee(DexError):
    code = 6005
    name = "InvalidFee"
    default_message = "Fee cannot be greater than 100%"


class InitialLiquidityTooLow(InsufficientLiquidity):
    code = 6006
    name = "InitialLiquidityTooLow"
    default_message = "Initial liquidity too low - must exceed minimum"


class ZeroReserves(InsufficientLiquidity):
    code = 6007
    name = "ZeroReserves"
    default_message = "Pool reserves cannot be zero"


# -- Host-side failures -------------------------------------------------------

class InvariantViolation(DexError):
    """Raised when a post-state fails one or more pool invariants."""

    code = 6100
    name = "InvariantViolation"

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")


class Unauthorized(DexError):
    code = 6101
    name = "Unauthorized"
    default_message = "Signer does not hold rights over the required account"


class LedgerTransferError(DexError):
    code = 6102
    name = "LedgerTransferError"
    default_message = "Host ledger rejected a transfer"


class PoolAlreadyExists(DexError):
    code = 6103
    name = "PoolAlreadyExists"
    default_message = "A pool already exists for this asset pair"


class PoolNotFound(DexError):
    code = 6104
    name = "PoolNotFound"
    default_message = "No pool registered for this id"


ERRORS_BY_CODE: dict[int, type[DexError]] = {
    cls.code: cls
    for cls in (
        MathOverflow,
        InvalidTokenPair,
        InvalidAmount,
        SlippageExceeded,
        InsufficientLiquidity,
        InvalidFee,
        InitialLiquidityTooLow,
        ZeroReserves,
        InvariantViolation,
        Unauthorized,
        LedgerTransferError,
        PoolAlreadyExists,
        PoolNotFound,
    )
}
