from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TRANSFER_",
        case_sensitive=False,
    )

    # Application settings
    app_name: str = "Locked Funds Transfer"
    app_version: str = "1.0.0"
    debug: bool = False

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    # Business logic settings
    default_fee: int = 1
    min_transfer_amount: int = 100

    # Report written to stdout after every transfer
    enable_report: bool = True

    # Timezone
    timezone: str = "America/Sao_Paulo"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Environment-specific configurations
class DevelopmentSettings(Settings):
    debug: bool = True
    log_level: str = "DEBUG"
    log_format: str = "text"


class ProductionSettings(Settings):
    debug: bool = False
    log_level: str = "INFO"
    log_format: str = "json"


class TestingSettings(Settings):
    debug: bool = True
    log_level: str = "WARNING"  # Reduce noise in tests
    log_format: str = "text"


def get_settings_for_environment(env: str = "development") -> Settings:
    """Get settings for specific environment."""
    settings_map = {
        "development": DevelopmentSettings,
        "production": ProductionSettings,
        "testing": TestingSettings,
    }

    settings_class = settings_map.get(env.lower(), Settings)
    return settings_class()
