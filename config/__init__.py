import os

_ALIASES = {
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
    "dev": "development",
    "development": "development",
}


def get_settings_module(env: str | None = None) -> str:
    """Map APP_ENV (or ``env``) to a settings module; unknown values fall back to development."""
    name = (env or os.getenv("APP_ENV") or "development").strip().lower()
    return f"config.{_ALIASES.get(name, 'development')}"
