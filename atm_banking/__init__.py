"""
ATM Banking Terminal

An in-memory banking terminal with per-account locking, deadlock-free
transfers and exact Decimal arithmetic for every monetary value.
"""

__version__ = "1.0.0"
