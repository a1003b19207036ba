from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Tuple

from pydantic import BaseModel, ValidationError, field_validator

from ..core.config import load_json
from ..detection.errors import RegistryError
from .formats import CHECK_DIGITS_FIELD, CountryFormat, swift_format_to_re
from .storage import COUNTRY_TABLE, IbanStorage, build_formats

log = logging.getLogger(__name__)


class CountryEntry(BaseModel):
    name: str = ""
    fields: List[Tuple[str, str]]

    @field_validator("fields")
    @classmethod
    def _check_fields(cls, v: List[Tuple[str, str]]) -> List[Tuple[str, str]]:
        if not v:
            raise ValueError("at least one BBAN field is required")
        names = [n for n, _ in v]
        if CHECK_DIGITS_FIELD in names:
            raise ValueError(f"'{CHECK_DIGITS_FIELD}' is implicit and cannot be declared")
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate field names: {names}")
        for _, fmt in v:
            try:
                swift_format_to_re(fmt)
            except RegistryError as e:
                raise ValueError(str(e)) from e
        return v


class RegistryFile(BaseModel):
    countries: Dict[str, CountryEntry]

    @field_validator("countries")
    @classmethod
    def _check_codes(cls, v: Dict[str, CountryEntry]) -> Dict[str, CountryEntry]:
        bad = [cc for cc in v if len(cc) != 2 or not cc.isascii() or not cc.isalpha() or not cc.isupper()]
        if bad:
            raise ValueError(f"invalid country codes: {bad}")
        return v


def parse_registry(data: dict) -> Dict[str, CountryFormat]:
    try:
        parsed = RegistryFile(countries=data)
    except ValidationError as e:
        raise RegistryError(f"Invalid IBAN registry data: {e}") from e
    return {
        cc: CountryFormat(cc, entry.name, tuple(entry.fields))
        for cc, entry in parsed.countries.items()
    }


class JsonRegistry(IbanStorage):
    """Registry read once from a JSON file.

    File layout::

        {"GB": {"name": "United Kingdom",
                "fields": [["bank_code", "4!a"], ["sort_code", "6!n"], ["account_number", "8!n"]]}}

    With ``extend=True`` the file entries override/extend the built-in table.
    """

    def __init__(self, path: Path, extend: bool = False):
        path = Path(path)
        if not path.is_file():
            raise RegistryError(f"Registry file not found: {path}")
        try:
            data = load_json(str(path))
        except ValueError as e:
            raise RegistryError(f"Registry file {path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise RegistryError(f"Registry file {path} must contain a JSON object")

        formats = build_formats(COUNTRY_TABLE) if extend else {}
        loaded = parse_registry(data)
        formats.update(loaded)
        log.info(
            "Registry loaded: %s (%d countries from file, %d total)",
            path, len(loaded), len(formats),
            extra={"registry": str(path)},
        )
        super().__init__(formats)
        self.path = path
