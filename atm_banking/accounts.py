"""
Account Ledger Module

Bank accounts with a running balance and a bounded, most-recent-first
transaction history. Every mutation runs under the account's own lock so
concurrent callers observe a strict serialization of operations.
"""

from collections import deque
from datetime import datetime, timezone
from dataclasses import dataclass
from decimal import Decimal
from typing import Deque, List, Optional
import hmac
import threading

from .currency import MAX_AMOUNT, Money
from .logging_config import get_logger, log_action


DEFAULT_HISTORY_CAPACITY = 20


@dataclass(frozen=True)
class Transaction:
    """
    Immutable history entry

    amount is signed: positive for credits, negative for debits.
    balance_after is the account balance immediately after the entry applied.
    """
    timestamp: datetime
    type: str
    amount: Money
    balance_after: Money

    def to_string(self) -> str:
        """Format as a mini-statement line"""
        return (
            f"{self.timestamp:%Y-%m-%d %H:%M:%S} | {self.type:<18} | "
            f"{self.amount.amount:9.2f} | Bal: {self.balance_after.amount:8.2f}"
        )


class Account:
    """
    Bank account owning a balance, a PIN and its recent history
    """

    def __init__(
        self,
        account_number: str,
        pin: str,
        initial_balance: Money,
        owner_name: str,
        history_capacity: int = DEFAULT_HISTORY_CAPACITY,
        max_balance: Decimal = MAX_AMOUNT
    ):
        if initial_balance.is_negative():
            raise ValueError("Initial balance cannot be negative")
        if initial_balance.amount > max_balance:
            raise ValueError(f"Initial balance exceeds {max_balance}")
        if history_capacity <= 0:
            raise ValueError("History capacity must be positive")

        self._account_number = account_number
        self._owner_name = owner_name
        self._pin = pin
        self._balance = initial_balance
        self._max_balance = max_balance
        self._history: Deque[Transaction] = deque(maxlen=history_capacity)
        self._lock = threading.RLock()
        self.logger = get_logger("atm_banking.accounts")

        self._record("Account opened", initial_balance)

    @property
    def account_number(self) -> str:
        return self._account_number

    @property
    def owner_name(self) -> str:
        return self._owner_name

    @property
    def balance(self) -> Money:
        with self._lock:
            return self._balance

    @property
    def max_balance(self) -> Decimal:
        return self._max_balance

    @property
    def history_capacity(self) -> int:
        return self._history.maxlen

    # Locking

    def acquire(self, timeout: Optional[float] = None) -> bool:
        """
        Take the account lock, waiting at most timeout seconds

        Returns:
            True if the lock is now held by the calling thread
        """
        if timeout is None:
            return self._lock.acquire()
        return self._lock.acquire(timeout=timeout)

    def release(self) -> None:
        """Release a lock taken with acquire()"""
        self._lock.release()

    # Authentication

    def verify_pin(self, attempt: str) -> bool:
        """Check a PIN attempt in constant time"""
        if not isinstance(attempt, str):
            return False
        with self._lock:
            pin = self._pin
        return hmac.compare_digest(pin.encode('utf-8'), attempt.encode('utf-8'))

    def change_pin(self, new_pin: str) -> None:
        """Replace the PIN. Callers re-authenticate and validate the format first."""
        with self._lock:
            self._pin = new_pin
        log_action(
            self.logger, "info", "PIN changed",
            action="change_pin", account=self._account_number
        )

    # Balance mutations

    def deposit(self, amount: Money) -> bool:
        """Credit a positive amount that keeps the balance within max_balance"""
        with self._lock:
            reason = self._check_credit(amount)
            if reason is None:
                self._apply("Deposit", amount)
            balance_after = self._balance
        self._log_outcome("deposit", amount, reason, balance_after)
        return reason is None

    def withdraw(self, amount: Money) -> bool:
        """Debit a positive amount not exceeding the balance"""
        with self._lock:
            reason = self._check_debit(amount)
            if reason is None:
                self._apply("Withdraw", -amount)
            balance_after = self._balance
        self._log_outcome("withdraw", amount, reason, balance_after)
        return reason is None

    def can_credit(self, amount: Money) -> bool:
        """Check that a credit of amount would be accepted right now"""
        with self._lock:
            return self._check_credit(amount) is None

    def transfer_out(self, amount: Money, counterparty_id: str) -> bool:
        """
        Debit half of a transfer. Never touches the counterparty.

        Not logged here: the coordinator logs the transfer once its locks are free.
        """
        with self._lock:
            if self._check_debit(amount) is not None:
                return False
            self._apply(f"Transfer to {counterparty_id}", -amount)
            return True

    def transfer_in(self, amount: Money, counterparty_id: str) -> None:
        """
        Credit half of a transfer

        Has no failure mode: the coordinator checks can_credit and debits the
        paired transfer_out before this is called.
        """
        with self._lock:
            self._apply(f"Transfer from {counterparty_id}", amount)

    # History

    def get_history(self, count: int) -> List[Transaction]:
        """Return up to count most recent transactions, newest first"""
        if count <= 0:
            return []
        with self._lock:
            return list(self._history)[:count]

    # Private helper methods

    def _check_credit(self, amount: Money) -> Optional[str]:
        # Caller holds the lock
        if not amount.is_positive():
            return "invalid_amount"
        # Raw Decimal comparison: the oversized sum is never formed
        if amount.amount > self._max_balance - self._balance.amount:
            return "balance_limit"
        return None

    def _check_debit(self, amount: Money) -> Optional[str]:
        # Caller holds the lock
        if not amount.is_positive():
            return "invalid_amount"
        if amount > self._balance:
            return "insufficient_funds"
        return None

    def _apply(self, label: str, signed_amount: Money) -> None:
        # Caller holds the lock
        self._balance = self._balance + signed_amount
        self._record(label, signed_amount)

    def _record(self, label: str, signed_amount: Money) -> None:
        self._history.appendleft(Transaction(
            timestamp=datetime.now(timezone.utc),
            type=label,
            amount=signed_amount,
            balance_after=self._balance
        ))

    def _log_outcome(self, action: str, amount: Money, reason: Optional[str],
                     balance_after: Money) -> None:
        # Called after the lock is released
        if reason is not None:
            log_action(
                self.logger, "info", f"Rejected {action}: {reason}",
                action=action, account=self._account_number,
                extra={"amount": str(amount.amount), "reason": reason}
            )
            return
        log_action(
            self.logger, "debug", f"{action}: {amount.to_string()}",
            action=action, account=self._account_number,
            extra={
                "amount": str(amount.amount),
                "balance_after": str(balance_after.amount)
            }
        )

    def __repr__(self) -> str:
        return f"Account(account_number={self._account_number!r}, owner_name={self._owner_name!r})"
