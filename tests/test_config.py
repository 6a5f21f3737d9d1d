import config
import main
import repositories
from models import Account
from services import Transaction


class TestSettings:
    def test_defaults(self):
        settings = config.Settings()

        assert settings.default_fee == 1
        assert settings.min_transfer_amount == 100
        assert settings.enable_report is True
        assert settings.log_format == "json"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TRANSFER_DEFAULT_FEE", "5")
        monkeypatch.setenv("TRANSFER_MIN_TRANSFER_AMOUNT", "250")

        settings = config.Settings()

        assert settings.default_fee == 5
        assert settings.min_transfer_amount == 250

    def test_get_settings_is_cached(self):
        assert config.get_settings() is config.get_settings()

    def test_settings_for_environment(self):
        assert isinstance(config.get_settings_for_environment("production"), config.ProductionSettings)
        assert config.get_settings_for_environment("testing").log_level == "WARNING"
        assert config.get_settings_for_environment("DEVELOPMENT").log_level == "DEBUG"
        assert type(config.get_settings_for_environment("staging")) is config.Settings

    def test_min_amount_from_settings(self):
        settings = config.TestingSettings(min_transfer_amount=10, enable_report=False)
        transaction = Transaction(transfer_repo=repositories.InMemoryTransferRepository("UTC"), settings=settings)

        assert transaction.execute(Account(1, 100), Account(2, 0), 10) is True


class TestBootstrap:
    def test_load_settings_default(self, monkeypatch):
        monkeypatch.delenv("TRANSFER_ENV", raising=False)

        assert main.load_settings() is config.get_settings()

    def test_load_settings_for_environment(self, monkeypatch):
        monkeypatch.setenv("TRANSFER_ENV", "production")

        settings = main.load_settings()

        assert isinstance(settings, config.ProductionSettings)
        assert settings.debug is False

        monkeypatch.setenv("TRANSFER_ENV", "development")

        assert main.load_settings().debug is True

    def test_create_transaction(self):
        transaction = main.create_transaction(config.TestingSettings())

        assert isinstance(transaction, Transaction)
        assert transaction.transfer_repo is repositories.get_transfer_repository()
        assert transaction.fee == 1

    def test_run_demo(self, capsys):
        assert main.run_demo(config.TestingSettings()) is True

        captured = capsys.readouterr()
        assert captured.out.splitlines() == [
            "1 send to 2 $500",
            "Balance 1 is 500",
            "Balance 2 is 2500",
        ]
        assert repositories.get_transfer_repository().get_transfers_count() == 1
