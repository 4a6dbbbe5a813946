"""
Transfer Coordination Module

Moves funds between two accounts as one step. Both account locks are held
for the whole transfer and are always taken in account-number order, so
concurrent transfers in opposite directions cannot wait on each other.
"""

from typing import Optional, Tuple

from .accounts import Account
from .currency import Money
from .logging_config import get_logger, log_action
from .outcomes import FailureReason, OperationResult


class TransferCoordinator:
    """
    Orchestrates two-account transfers with a total lock order
    """

    def __init__(self, lock_timeout: Optional[float] = None):
        self.lock_timeout = lock_timeout
        self.logger = get_logger("atm_banking.transfers")

    @staticmethod
    def lock_order(first: Account, second: Account) -> Tuple[Account, Account]:
        """Return the two accounts in global lock-acquisition order"""
        if first.account_number <= second.account_number:
            return first, second
        return second, first

    def transfer(self, source: Account, destination: Account, amount: Money) -> OperationResult:
        """
        Transfer amount from source to destination

        Args:
            source: Account to debit
            destination: Account to credit
            amount: Positive amount to move

        Returns:
            OperationResult; on failure neither account has changed
        """
        if source.account_number == destination.account_number:
            return self._reject(
                source, destination, amount,
                FailureReason.SELF_TRANSFER, "Cannot transfer to same account."
            )

        if not amount.is_positive():
            return self._reject(
                source, destination, amount,
                FailureReason.INVALID_AMOUNT, "Invalid amount."
            )

        lower, higher = self.lock_order(source, destination)

        # Logging waits until both locks are released
        if not lower.acquire(self.lock_timeout):
            failure = (FailureReason.LOCK_TIMEOUT, f"Account {lower.account_number} is busy.")
        else:
            try:
                if not higher.acquire(self.lock_timeout):
                    failure = (FailureReason.LOCK_TIMEOUT, f"Account {higher.account_number} is busy.")
                else:
                    try:
                        failure = self._move(source, destination, amount)
                    finally:
                        higher.release()
            finally:
                lower.release()

        if failure is not None:
            return self._reject(source, destination, amount, *failure)

        log_action(
            self.logger, "info", "Transfer completed",
            action="transfer", account=source.account_number,
            resource=f"account:{destination.account_number}",
            extra={"amount": str(amount.amount)}
        )
        return OperationResult.success(
            f"Transferred {amount.to_string()} to {destination.owner_name}."
        )

    @staticmethod
    def _move(source: Account, destination: Account,
              amount: Money) -> Optional[Tuple[FailureReason, str]]:
        # Caller holds both locks. The credit is checked before anything is debited.
        if not destination.can_credit(amount):
            return (FailureReason.INVALID_AMOUNT,
                    "Transfer failed. Amount exceeds the destination balance limit.")
        if not source.transfer_out(amount, destination.account_number):
            return (FailureReason.INSUFFICIENT_FUNDS,
                    "Transfer failed. Check balance or amount.")
        destination.transfer_in(amount, source.account_number)
        return None

    def _reject(self, source: Account, destination: Account, amount: Money,
                reason: FailureReason, message: str) -> OperationResult:
        log_action(
            self.logger, "info" if reason != FailureReason.LOCK_TIMEOUT else "warning",
            f"Transfer rejected: {reason.value}",
            action="transfer", account=source.account_number,
            resource=f"account:{destination.account_number}",
            extra={"amount": str(amount.amount), "reason": reason.value}
        )
        return OperationResult.failure(reason, message)
