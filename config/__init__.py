import os

DEFAULT_SETTINGS_MODULE = "config.development"

_SETTINGS_BY_ENV = {
    "dev": "config.development",
    "development": "config.development",
    "test": "config.testing",
    "testing": "config.testing",
    "prod": "config.production",
    "production": "config.production",
}


def get_settings_module() -> str:
    """Settings module named by ``APP_ENV``; unknown values use development."""
    env = os.getenv("APP_ENV", "development").strip().lower()
    return _SETTINGS_BY_ENV.get(env, DEFAULT_SETTINGS_MODULE)
