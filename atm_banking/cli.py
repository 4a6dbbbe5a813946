"""
ATM Terminal Module

Text menu loop. Reads commands through an input callable, calls into the
session and prints results through an output callable.
"""

from typing import Callable, Optional

from .config import AtmConfig, get_config
from .currency import parse_amount
from .exceptions import AmountFormatError
from .logging_config import get_logger
from .registry import AccountRegistry
from .session import PIN_PATTERN, Session
from .transfers import TransferCoordinator


LOGIN_MENU = "\n1) Login\n2) Exit"

MAIN_MENU = "\n".join([
    "\n--- Main Menu ---",
    "1) View Balance",
    "2) Deposit",
    "3) Withdraw",
    "4) Transfer",
    "5) Mini-statement",
    "6) Change PIN",
    "7) Logout",
])


class ATMTerminal:
    """
    Interactive terminal driving a single Session
    """

    def __init__(
        self,
        session: Session,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print
    ):
        self.session = session
        self._input = input_func
        self._output = output_func
        self._running = False
        self.logger = get_logger("atm_banking.cli")

    def run(self) -> None:
        """Run until the user exits or input is exhausted"""
        self._output("=== Welcome to the ATM ===")
        self._running = True
        try:
            while self._running:
                if self.session.is_authenticated:
                    self.show_main_menu()
                else:
                    self.show_login_menu()
        except EOFError:
            self.logger.info("Input closed, shutting down terminal")
            self._running = False

    def stop(self) -> None:
        self._running = False

    # Menus

    def show_login_menu(self) -> None:
        self._output(LOGIN_MENU)
        choice = self._ask("Choose: ")
        if choice == "1":
            self.login_flow()
        elif choice == "2":
            self._output("Goodbye!")
            self.stop()
        else:
            self._output("Invalid choice. Try again.")

    def show_main_menu(self) -> None:
        self._output(MAIN_MENU)
        choice = self._ask("Choose: ")
        handler = {
            "1": self.view_balance,
            "2": self.deposit_flow,
            "3": self.withdraw_flow,
            "4": self.transfer_flow,
            "5": self.mini_statement_flow,
            "6": self.change_pin_flow,
            "7": self.logout,
        }.get(choice)
        if handler is None:
            self._output("Invalid choice. Try again.")
        else:
            handler()

    # Flows

    def login_flow(self) -> None:
        account_number = self._ask("Enter account number: ")
        if self.session.registry.find(account_number) is None:
            self._output("Account not found.")
            return
        pin = self._ask("Enter 4-digit PIN: ")
        self._output(self.session.login(account_number, pin).message)

    def view_balance(self) -> None:
        self._output(f"Current balance: {self.session.balance().to_string()}")

    def deposit_flow(self) -> None:
        amount = self._ask_amount("Enter amount to deposit: ")
        if amount is not None:
            self._output(self.session.deposit(amount).message)

    def withdraw_flow(self) -> None:
        amount = self._ask_amount("Enter amount to withdraw: ")
        if amount is not None:
            self._output(self.session.withdraw(amount).message)

    def transfer_flow(self) -> None:
        destination_number = self._ask("Enter destination account number: ")
        current = self.session.current_account
        if destination_number == current.account_number:
            self._output("Cannot transfer to same account.")
            return
        if self.session.registry.find(destination_number) is None:
            self._output("Destination account not found.")
            return
        amount = self._ask_amount("Enter amount to transfer: ")
        if amount is not None:
            self._output(self.session.transfer(destination_number, amount).message)

    def mini_statement_flow(self) -> None:
        default = self.session.default_statement_count
        raw = self._ask(f"How many recent transactions? (default {default}): ")
        count = default
        if raw:
            try:
                count = max(1, int(raw))
            except ValueError:
                count = default

        transactions = self.session.mini_statement(count)
        self._output("\n--- Mini-statement ---")
        if not transactions:
            self._output("No transactions.")
        for transaction in transactions:
            self._output(transaction.to_string())

    def change_pin_flow(self) -> None:
        current_pin = self._ask("Enter current PIN: ")
        if not self.session.current_account.verify_pin(current_pin):
            self._output("Incorrect current PIN.")
            return
        new_pin = self._ask("Enter new 4-digit PIN: ")
        if not PIN_PATTERN.fullmatch(new_pin):
            self._output("Invalid PIN format.")
            return
        confirm_pin = self._ask("Confirm new PIN: ")
        self._output(self.session.change_pin(current_pin, new_pin, confirm_pin).message)

    def logout(self) -> None:
        account = self.session.logout()
        if account is not None:
            self._output(f"Logged out: {account.owner_name}")

    # Input helpers

    def _ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def _ask_amount(self, prompt: str):
        try:
            return parse_amount(self._ask(prompt))
        except AmountFormatError:
            self._output("Invalid amount.")
            return None


def build_terminal(
    config: Optional[AtmConfig] = None,
    input_func: Callable[[str], str] = input,
    output_func: Callable[[str], None] = print
) -> ATMTerminal:
    """Wire registry, coordinator and session from configuration"""
    config = config or get_config()

    registry = AccountRegistry(
        history_capacity=config.history_capacity,
        max_balance=config.max_balance
    )
    if config.seed_demo_accounts:
        registry.seed_demo_accounts()

    session = Session(
        registry,
        coordinator=TransferCoordinator(lock_timeout=config.lock_timeout_seconds),
        default_statement_count=config.default_statement_count
    )
    return ATMTerminal(session, input_func=input_func, output_func=output_func)
