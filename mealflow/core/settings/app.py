import logging
from pathlib import Path
from typing import Any

from pydantic import SecretStr

from mealflow.core.settings.base import BaseAppSettings

BASE_DIR = Path(__file__).resolve().parent.parent.parent


class AppSettings(BaseAppSettings):
    debug: bool = False
    docs_url: str = "/docs"
    openapi_url: str = "/openapi.json"
    redoc_url: str = "/redoc"
    title: str = "MealFlow API"
    version: str = "1.0.0"

    api_v1_prefix: str = "/api"

    secret_key: SecretStr
    access_token_expire_minutes: int = 7 * 24 * 60

    db_url: str | None = None
    create_tables_on_startup: bool = False

    allowed_hosts: list[str] = ["http://localhost:5173"]

    logging_level: int = logging.INFO
    logging_config_path: Path = BASE_DIR / "logging_conf.json"

    ingredients_config_path: Path = BASE_DIR / "ingredients_config.yaml"

    # admin account created or promoted at startup when both are set
    admin_email: str | None = None
    admin_password: SecretStr | None = None
    admin_name: str = "Admin User"

    @property
    def fastapi_kwargs(self) -> dict[str, Any]:
        return {
            "debug": self.debug,
            "docs_url": self.docs_url,
            "openapi_url": self.openapi_url,
            "redoc_url": self.redoc_url,
            "title": self.title,
            "version": self.version,
        }
