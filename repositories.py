from abc import ABC, abstractmethod
from typing import Dict, Hashable, List, Optional
from datetime import datetime
from zoneinfo import ZoneInfo
import threading
import uuid

from config import get_settings
from models import Account, TransferRecord


class AccountRepository(ABC):
    @abstractmethod
    def get_account(self, account_id: Hashable) -> Optional[Account]:
        """Get account by id. Returns None if account doesn't exist."""
        pass

    @abstractmethod
    def add_account(self, account: Account) -> None:
        """Register an account."""
        pass

    @abstractmethod
    def get_accounts_count(self) -> int:
        """Get total number of accounts."""
        pass


class TransferRepository(ABC):
    @abstractmethod
    def save_transfer(self, from_account: Account, to_account: Account, amount: int) -> TransferRecord:
        """Persist the outcome of a transfer attempt."""
        pass

    @abstractmethod
    def list_transfers(self) -> List[TransferRecord]:
        """Get stored transfers, oldest first."""
        pass

    @abstractmethod
    def get_transfers_count(self) -> int:
        """Get total number of stored transfers."""
        pass


class InMemoryAccountRepository(AccountRepository):
    def __init__(self):
        self.accounts: Dict[Hashable, Account] = {}

    def get_account(self, account_id: Hashable) -> Optional[Account]:
        return self.accounts.get(account_id)

    def add_account(self, account: Account) -> None:
        if account.id in self.accounts:
            raise ValueError(f"Account {account.id} already exists")
        self.accounts[account.id] = account

    def open_account(self, account_id: Hashable, balance: int = 0) -> Account:
        """Create and register a new account."""
        account = Account(account_id, balance)
        self.add_account(account)
        return account

    def get_accounts_count(self) -> int:
        return len(self.accounts)


class InMemoryTransferRepository(TransferRepository):
    def __init__(self, timezone: Optional[str] = None):
        self.store: List[TransferRecord] = []
        self.timezone = ZoneInfo(timezone or get_settings().timezone)
        # save_transfer runs after account locks are released
        self._guard = threading.Lock()

    def save_transfer(self, from_account: Account, to_account: Account, amount: int) -> TransferRecord:
        record = TransferRecord(
            transferId=str(uuid.uuid4()),
            fromAccountId=from_account.id,
            toAccountId=to_account.id,
            amount=amount,
            fromBalance=from_account.get_balance(),
            toBalance=to_account.get_balance(),
            timestamp=datetime.now(self.timezone),
        )
        with self._guard:
            self.store.append(record)
        return record

    def list_transfers(self) -> List[TransferRecord]:
        with self._guard:
            return list(self.store)

    def get_transfers_count(self) -> int:
        return len(self.store)

    def clear(self) -> None:
        """Clear all stored transfers (for testing)."""
        with self._guard:
            self.store.clear()


_account_repo = InMemoryAccountRepository()
_transfer_repo = InMemoryTransferRepository()


def get_account_repository() -> InMemoryAccountRepository:
    return _account_repo


def get_transfer_repository() -> InMemoryTransferRepository:
    return _transfer_repo


def reset_repositories():
    """Reset all repositories to initial state (for testing only)."""
    global _account_repo, _transfer_repo
    _account_repo = InMemoryAccountRepository()
    _transfer_repo = InMemoryTransferRepository()
