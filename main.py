from typing import Optional
import os

import structlog

from config import Settings, get_settings, get_settings_for_environment
from logging_config import configure_logging
from repositories import get_account_repository, get_transfer_repository
from services import Transaction, get_transaction_service

logger = structlog.get_logger()


def load_settings() -> Settings:
    """Pick settings from TRANSFER_ENV (development, production, testing)."""
    env = os.getenv("TRANSFER_ENV")
    if not env:
        return get_settings()
    return get_settings_for_environment(env)


def create_transaction(settings: Optional[Settings] = None) -> Transaction:
    """Wire a Transaction to the shared transfer repository."""
    settings = settings or get_settings()
    logger.info(
        "Transfer service ready",
        app_name=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        fee=settings.default_fee,
        min_transfer_amount=settings.min_transfer_amount
    )
    return get_transaction_service(get_transfer_repository(), settings)


def run_demo(settings: Optional[Settings] = None) -> bool:
    """Open two accounts and move 500 between them with no fee."""
    transaction = create_transaction(settings)
    transaction.fee = 0

    account_repo = get_account_repository()
    payer = account_repo.get_account(1) or account_repo.open_account(1, 1000)
    payee = account_repo.get_account(2) or account_repo.open_account(2, 2000)

    return transaction.execute(payer, payee, 500)


if __name__ == "__main__":
    settings = load_settings()
    configure_logging(settings)
    run_demo(settings)
