import pytest

from config import get_settings_module


@pytest.mark.parametrize(
    "env, module",
    [
        ("production", "config.production"),
        ("PROD", "config.production"),
        ("test", "config.testing"),
        ("dev", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_explicit_environment(env, module):
    assert get_settings_module(env) == module


def test_app_env_variable(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    assert get_settings_module() == "config.testing"


def test_defaults_to_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)

    assert get_settings_module() == "config.development"
