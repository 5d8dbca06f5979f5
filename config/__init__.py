import os
from typing import Optional

_ENV_ALIASES = {
    "dev": "development",
    "development": "development",
    "test": "testing",
    "testing": "testing",
    "prod": "production",
    "production": "production",
}


def get_settings_module(env: Optional[str] = None) -> str:
    """Dotted path of the settings module for APP_ENV (development when unset or unknown)."""
    name = (env or os.getenv("APP_ENV") or "development").strip().lower()
    return f"config.{_ENV_ALIASES.get(name, 'development')}"
