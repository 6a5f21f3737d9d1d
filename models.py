from pydantic import BaseModel, Field, field_validator
from typing import Hashable, Union
from datetime import datetime
import threading


class Account:
    """Balance holder with its own exclusive, non re-entrant lock.

    The balance is only meant to be changed by whoever holds ``lock()``;
    ``change_balance`` does no bounds checking of its own.
    """

    def __init__(self, account_id: Hashable, balance: int = 0):
        self._id = account_id
        self._balance = balance
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Account(id={self._id!r}, balance={self._balance})"

    @property
    def id(self) -> Hashable:
        return self._id

    def get_balance(self) -> int:
        return self._balance

    def change_balance(self, delta: int) -> None:
        self._balance += delta

    def lock(self) -> None:
        """Block until the lock is held. Acquiring it twice deadlocks."""
        self._lock.acquire()

    def unlock(self) -> None:
        self._lock.release()

    def locked(self) -> bool:
        return self._lock.locked()


AccountId = Union[int, str]


class TransferRecord(BaseModel):
    transferId: str = Field(..., description="Unique transfer identifier")
    fromAccountId: AccountId = Field(..., description="Payer account identifier")
    toAccountId: AccountId = Field(..., description="Payee account identifier")
    amount: int = Field(..., description="Principal moved, fee excluded")
    fromBalance: int = Field(..., description="Payer balance after the attempt")
    toBalance: int = Field(..., description="Payee balance after the attempt")
    timestamp: datetime = Field(..., description="Time the transfer was persisted")

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v):
        if v < 0:
            raise ValueError("Amount must be non-negative")
        return v
