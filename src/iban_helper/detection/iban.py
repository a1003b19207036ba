from __future__ import annotations

import logging
import re
from typing import Dict, Sequence, Union

from ..registry.base import CountryRegistry
from .errors import (
    IbanError,
    InvalidChecksum,
    InvalidIbanShape,
    MalformedAccountData,
    MalformedIban,
    UnsupportedCountry,
)

log = logging.getLogger(__name__)

_COUNTRY_PREFIX_RE = re.compile(r"^([A-Za-z]+)[0-9]")

# first window, then suffix windows: remainder (<=2 digits) + 7 digits fits in 9
_HEAD = 9
_STEP = 7

AccountData = Union[str, Sequence[str]]


def normalize_iban(s: str) -> str:
    """Remove all whitespace and upper-case."""
    return re.sub(r"\s+", "", (s or "")).upper()


def _to_numeric(iban: str) -> str:
    # move first 4 chars to the end, then A=10..Z=35
    rearranged = iban[4:] + iban[:4]
    return "".join(str(ord(c) - 55) if c.isalpha() else c for c in rearranged)


def mod97(iban: str) -> int:
    """ISO 7064 MOD 97-10 over an IBAN-shaped string, in bounded windows."""
    num = _to_numeric(iban)
    rem = int(num[:_HEAD] or "0") % 97
    for i in range(_HEAD, len(num), _STEP):
        rem = int(str(rem) + num[i:i + _STEP]) % 97
    return rem


def check_digits(iban: str) -> str:
    """Check digits for an IBAN whose check-digit field is ``00``."""
    return f"{98 - mod97(iban):02d}"


def uses_iban(country: str, registry: CountryRegistry) -> bool:
    return registry.has_country(country)


def generate_iban(country: str, data: AccountData, registry: CountryRegistry) -> str:
    """Build a checksummed IBAN.

    ``data`` is the BBAN either as one string or as its parts in order,
    e.g. for GB ``["NWBK", "601613", "31926819"]`` or ``"NWBK60161331926819"``.
    Both give ``GB29NWBK60161331926819``.
    """
    country = country.upper()
    if not uses_iban(country, registry):
        log.debug("generate rejected: unsupported country %s", country, extra={"country": country})
        raise UnsupportedCountry(country)

    if not isinstance(data, str):
        data = "".join(data)
    data = data.upper().replace(" ", "")

    candidate = country + "00" + data
    if registry.get_pattern(country).fullmatch(candidate) is None:
        log.debug("generate rejected: %s does not match %s format", data, country, extra={"country": country})
        raise MalformedAccountData(country, data)

    iban = country + check_digits(candidate) + data
    log.debug("generated %s", iban, extra={"country": country})
    return iban


def _country_of(iban: str) -> str:
    m = _COUNTRY_PREFIX_RE.match(iban)
    if not m:
        raise InvalidIbanShape(iban)
    return m.group(1)


def get_fields(iban: str, registry: CountryRegistry) -> Dict[str, str]:
    """Split an IBAN into its named fields, check digits first."""
    iban = iban.replace(" ", "")
    country = _country_of(iban)
    if not uses_iban(country, registry):
        log.debug("fields rejected: unsupported country %s", country, extra={"country": country})
        raise UnsupportedCountry(country)

    m = registry.get_pattern(country).fullmatch(iban)
    if m is None:
        log.debug("fields rejected: %s does not match %s format", iban, country, extra={"country": country})
        raise MalformedIban(country, iban)
    return dict(zip(registry.get_fields(country), m.groups()))


def verify_iban(iban: str, registry: CountryRegistry) -> Dict[str, str]:
    """Structure and checksum check. Returns the fields of a valid IBAN."""
    fields = get_fields(iban, registry)
    iban = iban.replace(" ", "")
    if mod97(iban) != 1:
        log.debug("verify rejected: bad checksum for %s", iban)
        raise InvalidChecksum(iban)
    return fields


def is_valid_iban(iban: str, registry: CountryRegistry) -> bool:
    try:
        verify_iban(iban, registry)
    except IbanError:
        return False
    return True
