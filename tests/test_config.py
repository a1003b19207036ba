import json

import pytest

from iban_helper.config import load_config
from iban_helper.core.config import env, env_flag, load_json
from iban_helper.registry.json_registry import JsonRegistry
from iban_helper.registry.storage import IbanStorage

_VARS = ("LOG_LEVEL", "IBAN_LOG_JSON", "IBAN_REGISTRY_PATH", "IBAN_REGISTRY_EXTEND")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    cfg = load_config()
    assert cfg.log_level == "INFO"
    assert cfg.log_json is False
    assert cfg.registry_path is None
    assert isinstance(cfg.build_registry(), IbanStorage)


def test_from_env(monkeypatch, tmp_path):
    path = tmp_path / "reg.json"
    path.write_text(json.dumps({"ZZ": {"fields": [["bank", "3!n"]]}}), encoding="utf-8")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("IBAN_LOG_JSON", "1")
    monkeypatch.setenv("IBAN_REGISTRY_PATH", str(path))
    monkeypatch.setenv("IBAN_REGISTRY_EXTEND", "yes")

    cfg = load_config()
    assert (cfg.log_level, cfg.log_json, cfg.registry_extend) == ("DEBUG", True, True)
    reg = cfg.build_registry()
    assert isinstance(reg, JsonRegistry)
    assert reg.has_country("ZZ") and reg.has_country("GB")


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "")
    assert env("LOG_LEVEL", "INFO") == "INFO"
    monkeypatch.setenv("IBAN_LOG_JSON", "off")
    assert env_flag("IBAN_LOG_JSON", True) is False
    assert env_flag("IBAN_REGISTRY_EXTEND", True) is True


def test_load_json(tmp_path):
    assert load_json(None) == {}
    assert load_json(str(tmp_path / "missing.json")) == {}
    p = tmp_path / "a.json"
    p.write_text('{"a": 1}', encoding="utf-8")
    assert load_json(str(p)) == {"a": 1}
