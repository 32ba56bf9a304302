import logging

from pydantic import SecretStr

from mealflow.core.settings.app import AppSettings


class DevAppSettings(AppSettings):
    # fastapi_kwargs
    debug: bool = True
    title: str = "MealFlow API (dev)"

    # back-end app settings
    secret_key: SecretStr = SecretStr("secret-dev")

    db_url: str | None = "sqlite+aiosqlite:///./mealflow.db"
    create_tables_on_startup: bool = True
    logging_level: int = logging.DEBUG
