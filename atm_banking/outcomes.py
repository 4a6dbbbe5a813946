"""
Operation Outcomes

Invalid amounts, insufficient funds, failed logins and the like are expected
results of normal use. They are returned as values, never raised.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FailureReason(Enum):
    """Why an operation was rejected"""
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    SELF_TRANSFER = "self_transfer"
    ACCOUNT_NOT_FOUND = "account_not_found"
    AUTHENTICATION_FAILED = "authentication_failed"
    INVALID_PIN_FORMAT = "invalid_pin_format"
    PIN_MISMATCH = "pin_mismatch"
    LOCK_TIMEOUT = "lock_timeout"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a ledger or session operation"""
    ok: bool
    reason: Optional[FailureReason] = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, message: str = "") -> 'OperationResult':
        return cls(ok=True, message=message)

    @classmethod
    def failure(cls, reason: FailureReason, message: str = "") -> 'OperationResult':
        return cls(ok=False, reason=reason, message=message)
