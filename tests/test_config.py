from pathlib import Path

import pytest

from registrar.config import OnStartPolicy, RegistrarSettings, load_settings
from registrar.errors import SettingsError


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("SCOPE", "SEARCH_ROOT", "SOURCE_ROOTS", "ON_START_POLICY", "IMPORT_MODULES"):
        monkeypatch.delenv(f"REGISTRAR_{name}", raising=False)


def test_defaults():
    settings = load_settings()

    assert settings.scope is None
    assert settings.search_root == Path(".")
    assert settings.source_roots == ["src"]
    assert settings.on_start_policy is OnStartPolicy.BOTH
    assert settings.import_modules is True


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("REGISTRAR_SCOPE", "myapp")
    monkeypatch.setenv("REGISTRAR_ON_START_POLICY", "meta")
    monkeypatch.setenv("REGISTRAR_SOURCE_ROOTS", '["src", "lib"]')
    monkeypatch.setenv("REGISTRAR_IMPORT_MODULES", "false")

    settings = load_settings()

    assert settings.scope == "myapp"
    assert settings.on_start_policy is OnStartPolicy.META
    assert settings.source_roots == ["src", "lib"]
    assert settings.import_modules is False


def test_overrides_take_precedence_over_environment(monkeypatch):
    monkeypatch.setenv("REGISTRAR_SCOPE", "myapp")

    assert load_settings(scope="other").scope == "other"


def test_invalid_policy_raises_settings_error(monkeypatch):
    monkeypatch.setenv("REGISTRAR_ON_START_POLICY", "sometimes")

    with pytest.raises(SettingsError) as exc_info:
        load_settings()

    assert exc_info.value.field == "on_start_policy"
    assert "on_start_policy" in exc_info.value.message


def test_settings_can_be_constructed_directly():
    assert RegistrarSettings(on_start_policy="direct").on_start_policy is OnStartPolicy.DIRECT
