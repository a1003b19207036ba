import json
import logging

import pytest

from iban_helper.detection.errors import RegistryError
from iban_helper.detection.iban import generate_iban, get_fields
from iban_helper.registry.base import CountryRegistry
from iban_helper.registry.formats import CountryFormat, swift_format_length, swift_format_to_re
from iban_helper.registry.json_registry import JsonRegistry, parse_registry
from iban_helper.registry.storage import IbanStorage
from iban_samples import IBAN_SAMPLES

GB_FIELDS = [["bank_code", "4!a"], ["sort_code", "6!n"], ["account_number", "8!n"]]


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# --- SWIFT notation ----------------------------------------------------------

def test_swift_format_to_re():
    assert swift_format_to_re("4!a6!n") == "[A-Z]{4}[0-9]{6}"
    assert swift_format_to_re("12!c") == "[A-Z0-9]{12}"
    assert swift_format_length("4!a2!n") == 6


@pytest.mark.parametrize("fmt", ["", "4a", "4!x", "!n", "0!n", "4!n 2!a"])
def test_swift_format_invalid(fmt):
    with pytest.raises(RegistryError):
        swift_format_to_re(fmt)


# --- CountryFormat -----------------------------------------------------------

def test_country_format_gb():
    fmt = CountryFormat("GB", "United Kingdom", tuple(map(tuple, GB_FIELDS)))
    assert fmt.length == 22
    assert fmt.field_names == ["check_digits", "bank_code", "sort_code", "account_number"]
    assert fmt.pattern.fullmatch("GB00NWBK60161331926819").groups() == ("00", "NWBK", "601613", "31926819")


@pytest.mark.parametrize("country,fields", [
    ("gb", (("bank_code", "4!a"),)),
    ("GBR", (("bank_code", "4!a"),)),
    ("GB", ()),
    ("GB", (("bank_code", "4!a"), ("bank_code", "6!n"))),
    ("GB", (("check_digits", "2!n"),)),
    ("GB", (("bank_code", "4a"),)),
])
def test_country_format_rejects(country, fields):
    with pytest.raises(RegistryError):
        CountryFormat(country, "x", fields)


def test_country_format_is_frozen():
    fmt = CountryFormat("NL", "Netherlands", (("bank_code", "4!a"), ("account_number", "10!n")))
    with pytest.raises(AttributeError):
        fmt.name = "Holland"


# --- IbanStorage -------------------------------------------------------------

def test_storage_is_a_registry(registry):
    assert isinstance(registry, CountryRegistry)


def test_storage_covers_all_samples(registry):
    assert len(registry) == len(IBAN_SAMPLES) == 70
    assert registry.countries() == sorted(IBAN_SAMPLES)


@pytest.mark.parametrize("country", sorted(IBAN_SAMPLES))
def test_storage_lengths(registry, country):
    digits, parts = IBAN_SAMPLES[country]
    assert registry.get_length(country) == len(country + digits + "".join(parts))
    assert registry.get_fields(country)[0] == "check_digits"
    assert len(registry.get_fields(country)) == len(parts) + 1


def test_storage_get_fields_returns_fresh_list(registry):
    fields = registry.get_fields("GB")
    fields.append("junk")
    assert "junk" not in registry.get_fields("GB")


def test_storage_custom_formats():
    reg = IbanStorage({"NL": CountryFormat("NL", "Netherlands", (("bank_code", "4!a"), ("account_number", "10!n")))})
    assert reg.countries() == ["NL"]
    assert not reg.has_country("GB")


# --- JsonRegistry ------------------------------------------------------------

def test_json_registry_loads(tmp_path):
    path = _write(tmp_path / "reg.json", {"GB": {"name": "United Kingdom", "fields": GB_FIELDS}})
    reg = JsonRegistry(path)
    assert reg.countries() == ["GB"]
    assert reg.path == path
    assert generate_iban("GB", "NWBK60161331926819", reg) == "GB29NWBK60161331926819"
    assert get_fields("GB29NWBK60161331926819", reg)["sort_code"] == "601613"
    assert not reg.has_country("DE")


def test_json_registry_extend_overrides_builtin(tmp_path):
    path = _write(tmp_path / "reg.json", {
        "GB": {"name": "Britain", "fields": [["bank_code", "4!a"], ["rest", "14!n"]]},
        "ZZ": {"fields": [["bank", "3!n"]]},
    })
    reg = JsonRegistry(path, extend=True)
    assert len(reg) == 71
    assert reg.has_country("DE")
    assert reg.get_format("GB").name == "Britain"
    assert reg.get_fields("GB") == ["check_digits", "bank_code", "rest"]
    assert reg.get_format("ZZ").name == ""


@pytest.mark.parametrize("data", [
    {"gb": {"fields": GB_FIELDS}},
    {"GBR": {"fields": GB_FIELDS}},
    {"GB": {"fields": []}},
    {"GB": {"name": "x"}},
    {"GB": {"fields": [["bank_code", "4!q"]]}},
    {"GB": {"fields": [["check_digits", "2!n"]]}},
    {"GB": {"fields": [["a", "1!n"], ["a", "1!n"]]}},
])
def test_parse_registry_rejects(data):
    with pytest.raises(RegistryError):
        parse_registry(data)


def test_json_registry_missing_file(tmp_path):
    with pytest.raises(RegistryError, match="not found"):
        JsonRegistry(tmp_path / "nope.json")


def test_json_registry_not_an_object(tmp_path):
    with pytest.raises(RegistryError, match="JSON object"):
        JsonRegistry(_write(tmp_path / "reg.json", [1, 2]))


def test_json_registry_bad_json(tmp_path):
    path = tmp_path / "reg.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(RegistryError, match="not valid JSON"):
        JsonRegistry(path)


def test_json_registry_logs_source(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="iban_helper.registry.json_registry")
    path = _write(tmp_path / "reg.json", {"GB": {"fields": GB_FIELDS}})
    JsonRegistry(path)
    assert [r.registry for r in caplog.records] == [str(path)]
