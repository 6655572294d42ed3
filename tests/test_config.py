import pytest

from config import get_settings_module


@pytest.mark.parametrize(
    "env, module",
    [
        ("production", "config.production"),
        ("PROD", "config.production"),
        ("testing", "config.testing"),
        (" test ", "config.testing"),
        ("development", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_app_env_selects_settings_module(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == module


def test_missing_app_env_means_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)

    assert get_settings_module() == "config.development"
