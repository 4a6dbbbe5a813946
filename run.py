#!/usr/bin/env python3
"""
ATM Terminal Entry Point

Starts the interactive ATM terminal with the demo accounts.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from atm_banking.__main__ import main


if __name__ == "__main__":
    print("🏦 Starting ATM terminal...")
    print("💰 All balances use Decimal precision")
    print("🔒 Transfers lock both accounts in account-number order")
    print()

    try:
        main()
    except KeyboardInterrupt:
        print("\n👋 Shutting down ATM terminal...")
