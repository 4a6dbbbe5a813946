"""
Session Module

A terminal session holds at most one authenticated account and routes the
user's requests to the account or to the transfer coordinator.
"""

import re
from typing import List, Optional

from .accounts import Account, Transaction
from .currency import Money
from .exceptions import NotAuthenticatedError
from .logging_config import get_logger, log_action
from .outcomes import FailureReason, OperationResult
from .registry import AccountRegistry
from .transfers import TransferCoordinator


PIN_PATTERN = re.compile(r'[0-9]{4}')

DEFAULT_STATEMENT_COUNT = 5


class Session:
    """
    Single-user terminal session
    """

    def __init__(
        self,
        registry: AccountRegistry,
        coordinator: Optional[TransferCoordinator] = None,
        default_statement_count: int = DEFAULT_STATEMENT_COUNT
    ):
        self.registry = registry
        self.coordinator = coordinator or TransferCoordinator()
        self.default_statement_count = default_statement_count
        self._account: Optional[Account] = None
        self.logger = get_logger("atm_banking.session")

    @property
    def current_account(self) -> Optional[Account]:
        return self._account

    @property
    def is_authenticated(self) -> bool:
        return self._account is not None

    # Authentication

    def login(self, account_number: str, pin: str) -> OperationResult:
        """Authenticate and make the account current"""
        account = self.registry.find(account_number)
        if account is None:
            log_action(
                self.logger, "info", "Login failed",
                action="login", account=account_number,
                extra={"reason": FailureReason.ACCOUNT_NOT_FOUND.value}
            )
            return OperationResult.failure(FailureReason.ACCOUNT_NOT_FOUND, "Account not found.")

        if not account.verify_pin(pin):
            log_action(
                self.logger, "warning", "Login failed",
                action="login", account=account_number,
                extra={"reason": FailureReason.AUTHENTICATION_FAILED.value}
            )
            return OperationResult.failure(FailureReason.AUTHENTICATION_FAILED, "Incorrect PIN.")

        self._account = account
        log_action(self.logger, "info", "Login succeeded", action="login", account=account_number)
        return OperationResult.success(f"Login successful. Welcome, {account.owner_name}!")

    def logout(self) -> Optional[Account]:
        """End the session, returning the account that was logged in"""
        account = self._account
        self._account = None
        if account is not None:
            log_action(self.logger, "info", "Logged out", action="logout",
                       account=account.account_number)
        return account

    # Account operations

    def balance(self) -> Money:
        return self._require_account().balance

    def deposit(self, amount: Money) -> OperationResult:
        account = self._require_account()
        if not account.deposit(amount):
            return OperationResult.failure(FailureReason.INVALID_AMOUNT, "Deposit failed.")
        return OperationResult.success(
            f"Deposited {amount.to_string()}. New balance: {account.balance.to_string()}"
        )

    def withdraw(self, amount: Money) -> OperationResult:
        account = self._require_account()
        if not account.withdraw(amount):
            reason = (FailureReason.INVALID_AMOUNT if not amount.is_positive()
                      else FailureReason.INSUFFICIENT_FUNDS)
            return OperationResult.failure(reason, "Withdrawal failed. Check balance or amount.")
        return OperationResult.success(
            f"Withdrawn {amount.to_string()}. New balance: {account.balance.to_string()}"
        )

    def transfer(self, destination_number: str, amount: Money) -> OperationResult:
        """Transfer from the current account to another registered account"""
        account = self._require_account()
        if destination_number == account.account_number:
            return OperationResult.failure(
                FailureReason.SELF_TRANSFER, "Cannot transfer to same account."
            )

        destination = self.registry.find(destination_number)
        if destination is None:
            return OperationResult.failure(
                FailureReason.ACCOUNT_NOT_FOUND, "Destination account not found."
            )

        result = self.coordinator.transfer(account, destination, amount)
        if not result:
            return result
        return OperationResult.success(
            f"Transferred {amount.to_string()} to {destination.owner_name}. "
            f"New balance: {account.balance.to_string()}"
        )

    def mini_statement(self, count: Optional[int] = None) -> List[Transaction]:
        if count is None:
            count = self.default_statement_count
        return self._require_account().get_history(count)

    def change_pin(self, current_pin: str, new_pin: str, confirm_pin: str) -> OperationResult:
        """Re-authenticate, validate the new PIN and replace it"""
        account = self._require_account()
        if not account.verify_pin(current_pin):
            log_action(
                self.logger, "warning", "PIN change rejected",
                action="change_pin", account=account.account_number,
                extra={"reason": FailureReason.AUTHENTICATION_FAILED.value}
            )
            return OperationResult.failure(
                FailureReason.AUTHENTICATION_FAILED, "Incorrect current PIN."
            )

        if not PIN_PATTERN.fullmatch(new_pin):
            return OperationResult.failure(FailureReason.INVALID_PIN_FORMAT, "Invalid PIN format.")

        if new_pin != confirm_pin:
            return OperationResult.failure(FailureReason.PIN_MISMATCH, "PINs do not match.")

        account.change_pin(new_pin)
        return OperationResult.success("PIN changed successfully.")

    def _require_account(self) -> Account:
        if self._account is None:
            raise NotAuthenticatedError("No account is logged in")
        return self._account
