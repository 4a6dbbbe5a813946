"""
Account Registry Module

Keyed lookup of accounts by account number, populated once at startup.
"""

from decimal import Decimal
from typing import Dict, Iterator, List, Optional
import threading

from .accounts import Account, DEFAULT_HISTORY_CAPACITY
from .currency import MAX_AMOUNT, Money
from .exceptions import DuplicateAccountError
from .logging_config import get_logger, log_action


DEMO_ACCOUNTS = (
    # (account number, PIN, opening balance, owner)
    ("1001", "1234", "5000.00", "Alice"),
    ("1002", "2222", "15000.50", "Bob"),
    ("1003", "3333", "250.75", "Charlie"),
)


class AccountRegistry:
    """In-memory account registry"""

    def __init__(self, history_capacity: int = DEFAULT_HISTORY_CAPACITY,
                 max_balance: Decimal = MAX_AMOUNT):
        self.history_capacity = history_capacity
        self.max_balance = max_balance
        self._accounts: Dict[str, Account] = {}
        self._lock = threading.RLock()
        self.logger = get_logger("atm_banking.registry")

    def register(self, account: Account) -> Account:
        """Add an account; account numbers are unique"""
        with self._lock:
            if account.account_number in self._accounts:
                raise DuplicateAccountError(
                    f"Account {account.account_number} already exists"
                )
            self._accounts[account.account_number] = account

        log_action(
            self.logger, "info", "Account registered",
            action="register", account=account.account_number,
            extra={"opening_balance": str(account.balance.amount)}
        )
        return account

    def create_account(self, account_number: str, pin: str, initial_balance,
                       owner_name: str) -> Account:
        """Create and register an account with this registry's capacity and balance limit"""
        if not isinstance(initial_balance, Money):
            initial_balance = Money(Decimal(str(initial_balance)))
        account = Account(
            account_number=account_number,
            pin=pin,
            initial_balance=initial_balance,
            owner_name=owner_name,
            history_capacity=self.history_capacity,
            max_balance=self.max_balance
        )
        return self.register(account)

    def find(self, account_number: str) -> Optional[Account]:
        """Get account by account number"""
        with self._lock:
            return self._accounts.get(account_number)

    def account_numbers(self) -> List[str]:
        with self._lock:
            return sorted(self._accounts)

    def seed_demo_accounts(self) -> None:
        """Populate the demo accounts used by the terminal"""
        for account_number, pin, balance, owner in DEMO_ACCOUNTS:
            self.create_account(account_number, pin, balance, owner)

    def __contains__(self, account_number: str) -> bool:
        with self._lock:
            return account_number in self._accounts

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        with self._lock:
            accounts = list(self._accounts.values())
        return iter(accounts)
