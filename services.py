from typing import Optional, TextIO, Tuple
import structlog

from config import Settings, get_settings
from errors import InvalidArgumentError, LogicalPreconditionError
from models import Account
from repositories import TransferRepository, get_transfer_repository

# Configure structured logging
logger = structlog.get_logger()


class Transaction:
    """Moves funds between two accounts under both of their locks.

    The payee is credited first and the payer debited second. If the payer
    can no longer cover ``amount + fee`` once the credit is in place, the
    credit is reversed. Holding only the fee, an instance can be shared by
    any number of threads.
    """

    def __init__(
        self,
        transfer_repo: Optional[TransferRepository] = None,
        fee: Optional[int] = None,
        min_amount: Optional[int] = None,
        out: Optional[TextIO] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.transfer_repo = transfer_repo if transfer_repo is not None else get_transfer_repository()
        self._fee = settings.default_fee if fee is None else fee
        self.min_amount = settings.min_transfer_amount if min_amount is None else min_amount
        self.report_enabled = settings.enable_report
        # None means sys.stdout at print time
        self._out = out

    @property
    def fee(self) -> int:
        return self._fee

    @fee.setter
    def fee(self, value: int) -> None:
        # Negative fees are accepted here; callers own that policy.
        self._fee = value

    def execute(self, from_account: Account, to_account: Account, amount: int) -> bool:
        """Transfer ``amount`` plus the fee out of ``from_account``.

        Raises ``LogicalPreconditionError`` or ``InvalidArgumentError`` before
        touching either account. Returns ``False`` when funds are
        insufficient, ``True`` once the payer has been debited.
        """
        self._validate(from_account, to_account, amount)

        logger.info(
            "Transfer requested",
            from_account=from_account.id,
            to_account=to_account.id,
            amount=amount,
            fee=self._fee
        )

        first, second = self._lock_order(from_account, to_account)
        first.lock()
        try:
            second.lock()
            try:
                debited = self._move_funds(from_account, to_account, amount)
            finally:
                second.unlock()
        finally:
            first.unlock()

        self.save_to_database(from_account, to_account, amount)
        self._report(from_account, to_account, amount)

        logger.info(
            "Transfer finished",
            from_account=from_account.id,
            to_account=to_account.id,
            amount=amount,
            success=debited
        )

        return debited

    def save_to_database(self, from_account: Account, to_account: Account, amount: int) -> None:
        """Persistence hook, called once per transfer after locks are released."""
        record = self.transfer_repo.save_transfer(from_account, to_account, amount)
        logger.debug(
            "Transfer persisted",
            transfer_id=record.transferId,
            from_account=from_account.id,
            to_account=to_account.id
        )

    def _validate(self, from_account: Account, to_account: Account, amount: int) -> None:
        if from_account.id == to_account.id:
            logger.warning("Transfer rejected: same account", account_id=from_account.id)
            raise LogicalPreconditionError("cannot transfer to the same account")

        if amount < 0:
            logger.warning("Transfer rejected: negative amount", amount=amount)
            raise InvalidArgumentError(f"transfer amount must be non-negative, got {amount}")

        if amount < self.min_amount:
            logger.warning(
                "Transfer rejected: amount below minimum",
                amount=amount,
                min_amount=self.min_amount
            )
            raise LogicalPreconditionError(
                f"transfer amount {amount} is below the minimum of {self.min_amount}"
            )

    @staticmethod
    def _lock_order(from_account: Account, to_account: Account) -> Tuple[Account, Account]:
        """Both locks are always taken in ascending id order."""
        if to_account.id < from_account.id:
            return to_account, from_account
        return from_account, to_account

    def _move_funds(self, from_account: Account, to_account: Account, amount: int) -> bool:
        """Credit then debit; both locks must be held by the caller."""
        total = amount + self._fee

        current_balance = from_account.get_balance()
        if current_balance < total:
            logger.warning(
                "Insufficient funds for transfer",
                account_id=from_account.id,
                current_balance=current_balance,
                required=total
            )
            return False

        to_account.change_balance(amount)

        current_balance = from_account.get_balance()
        if current_balance < total:
            to_account.change_balance(-amount)
            logger.warning(
                "Debit failed after credit, credit rolled back",
                from_account=from_account.id,
                to_account=to_account.id,
                amount=amount,
                current_balance=current_balance
            )
            return False

        from_account.change_balance(-total)
        return True

    def _report(self, from_account: Account, to_account: Account, amount: int) -> None:
        if not self.report_enabled:
            return
        print(f"{from_account.id} send to {to_account.id} ${amount}", file=self._out)
        print(f"Balance {from_account.id} is {from_account.get_balance()}", file=self._out)
        print(f"Balance {to_account.id} is {to_account.get_balance()}", file=self._out)


# Factory function for dependency injection
def get_transaction_service(
    transfer_repo: Optional[TransferRepository] = None,
    settings: Optional[Settings] = None
) -> Transaction:
    return Transaction(transfer_repo=transfer_repo, settings=settings)
