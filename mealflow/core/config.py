from functools import lru_cache

from mealflow.core.settings.app import AppSettings
from mealflow.core.settings.base import AppEnvTypes, BaseAppSettings
from mealflow.core.settings.dev import DevAppSettings
from mealflow.core.settings.prod import ProdAppSettings
from mealflow.core.settings.test import TestAppSettings

environments: dict[AppEnvTypes, type[AppSettings]] = {
    AppEnvTypes.dev: DevAppSettings,
    AppEnvTypes.prod: ProdAppSettings,
    AppEnvTypes.test: TestAppSettings,
}


@lru_cache
def get_app_settings() -> AppSettings:
    app_env = BaseAppSettings().app_env
    config = environments[app_env]
    return config()
