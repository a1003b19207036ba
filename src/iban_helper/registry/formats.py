from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Tuple

from ..detection.errors import RegistryError

CHECK_DIGITS_FIELD = "check_digits"

# SWIFT IBAN registry notation: 4!a6!n -> [A-Z]{4}[0-9]{6}
_SWIFT_TOKEN_RE = re.compile(r"(\d+)!([nac])")
_SWIFT_FULL_RE = re.compile(r"^(\d+![nac])+$")
_CHAR_CLASS = {
    "n": "0-9",
    "a": "A-Z",
    "c": "A-Z0-9",
}


def swift_format_to_re(fmt: str) -> str:
    if not _SWIFT_FULL_RE.match(fmt):
        raise RegistryError(f"Invalid SWIFT format: {fmt!r}")
    out = []
    for count, typ in _SWIFT_TOKEN_RE.findall(fmt):
        if int(count) == 0:
            raise RegistryError(f"Zero-length element in SWIFT format: {fmt!r}")
        out.append(f"[{_CHAR_CLASS[typ]}]{{{count}}}")
    return "".join(out)


def swift_format_length(fmt: str) -> int:
    return sum(int(count) for count, _ in _SWIFT_TOKEN_RE.findall(fmt))


@dataclass(frozen=True)
class CountryFormat:
    """IBAN structure of one country.

    Attributes:
        country: ISO 3166-1 alpha-2 code
        name: country name in English
        fields: ordered (field_name, swift_format) pairs of the BBAN
        pattern: compiled regex over the full IBAN, check digits as group 1
        length: total IBAN length
    """

    country: str
    name: str
    fields: Tuple[Tuple[str, str], ...]
    pattern: re.Pattern = field(init=False, repr=False, compare=False)
    length: int = field(init=False)

    def __post_init__(self) -> None:
        if not re.fullmatch(r"[A-Z]{2}", self.country):
            raise RegistryError(f"Invalid country code: {self.country!r}")
        names = [n for n, _ in self.fields]
        if not names:
            raise RegistryError(f"{self.country}: no BBAN fields")
        if CHECK_DIGITS_FIELD in names or len(set(names)) != len(names):
            raise RegistryError(f"{self.country}: duplicate field names {names}")
        groups = "".join(f"({swift_format_to_re(fmt)})" for _, fmt in self.fields)
        # frozen dataclass: derived attributes go through object.__setattr__
        object.__setattr__(self, "pattern", re.compile(rf"^{self.country}([0-9]{{2}}){groups}$"))
        object.__setattr__(
            self, "length", 4 + sum(swift_format_length(fmt) for _, fmt in self.fields)
        )

    @property
    def field_names(self) -> List[str]:
        return [CHECK_DIGITS_FIELD] + [n for n, _ in self.fields]
