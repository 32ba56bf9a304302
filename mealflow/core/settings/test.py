import logging

from pydantic import SecretStr

from mealflow.core.settings.app import AppSettings


class TestAppSettings(AppSettings):
    debug: bool = True
    title: str = "MealFlow API (test)"

    secret_key: SecretStr = SecretStr("secret-test")

    db_url: str | None = "sqlite+aiosqlite://"
    create_tables_on_startup: bool = True
    logging_level: int = logging.DEBUG
