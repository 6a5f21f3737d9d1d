"""
Precondition errors raised by a transfer before any account is locked.

Insufficient funds is not an error: ``Transaction.execute`` reports it by
returning ``False``.
"""


class TransferError(Exception):
    """Base class for transfer precondition violations."""


class InvalidArgumentError(TransferError, ValueError):
    """Raised when an argument is outside its domain (e.g. a negative amount)."""


class LogicalPreconditionError(TransferError):
    """
    Raised when arguments are well-formed but the transfer makes no sense:
    same source and destination, or an amount below the minimum unit.
    """
