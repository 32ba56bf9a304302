import logging

from pydantic import SecretStr

from mealflow.core.settings.app import AppSettings


class ProdAppSettings(AppSettings):
    # fastapi_kwargs
    debug: bool = False
    title: str = "MealFlow API"

    # back-end app settings
    secret_key: SecretStr = SecretStr("secret-prod")

    db_url: str | None = None
    logging_level: int = logging.INFO
