"""Exception hierarchy for faults that are not ordinary business outcomes."""


class AtmError(Exception):
    """Base exception for all ATM banking errors."""


class AmountFormatError(AtmError, ValueError):
    """Raised when raw text cannot be parsed into a positive amount."""


class DuplicateAccountError(AtmError):
    """Raised when an account number is registered twice."""


class NotAuthenticatedError(AtmError):
    """Raised when a session operation runs without a logged-in account."""
