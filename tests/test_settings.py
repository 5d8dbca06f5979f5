import importlib

from config import get_settings_module


def test_settings_module_from_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "PROD")
    assert get_settings_module() == "config.production"
    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "config.development"
    assert get_settings_module("whatever") == "config.development"


def test_testing_settings_use_separate_database():
    settings = importlib.import_module(get_settings_module("test"))
    assert settings.TESTING is True
    assert settings.DB_CONFIG["database"].endswith("_test")
