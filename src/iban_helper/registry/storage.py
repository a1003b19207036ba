from __future__ import annotations

import re
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .formats import CountryFormat

# country -> (name, [(field, SWIFT format), ...]); check digits are implicit
COUNTRY_TABLE: Dict[str, Tuple[str, List[Tuple[str, str]]]] = {
    "AD": ("Andorra", [("bank_code", "4!n"), ("branch_code", "4!n"), ("account_number", "12!c")]),
    "AE": ("United Arab Emirates", [("bank_code", "3!n"), ("account_number", "16!n")]),
    "AL": ("Albania", [("bank_code", "3!n"), ("branch_code", "4!n"), ("national_check", "1!n"), ("account_number", "16!c")]),
    "AT": ("Austria", [("bank_code", "5!n"), ("account_number", "11!n")]),
    "AZ": ("Azerbaijan", [("bank_code", "4!a"), ("account_number", "20!c")]),
    "BA": ("Bosnia and Herzegovina", [("bank_code", "3!n"), ("branch_code", "3!n"), ("account_number", "8!n"), ("national_check", "2!n")]),
    "BE": ("Belgium", [("bank_code", "3!n"), ("account_number", "7!n"), ("national_check", "2!n")]),
    "BG": ("Bulgaria", [("bank_code", "4!a"), ("branch_code", "4!n"), ("account_type", "2!n"), ("account_number", "8!c")]),
    "BH": ("Bahrain", [("bank_code", "4!a"), ("account_number", "14!c")]),
    "BR": ("Brazil", [("bank_code", "8!n"), ("branch_code", "5!n"), ("account_number", "10!n"), ("account_type", "1!a"), ("owner_account_number", "1!c")]),
    "CH": ("Switzerland", [("bank_code", "5!n"), ("account_number", "12!c")]),
    "CR": ("Costa Rica", [("bank_code", "4!n"), ("account_number", "14!n")]),
    "CY": ("Cyprus", [("bank_code", "3!n"), ("branch_code", "5!n"), ("account_number", "16!c")]),
    "CZ": ("Czech Republic", [("bank_code", "4!n"), ("account_prefix", "6!n"), ("account_number", "10!n")]),
    "DE": ("Germany", [("bank_code", "8!n"), ("account_number", "10!n")]),
    "DK": ("Denmark", [("bank_code", "4!n"), ("account_number", "9!n"), ("national_check", "1!n")]),
    "DO": ("Dominican Republic", [("bank_code", "4!c"), ("account_number", "20!n")]),
    "EE": ("Estonia", [("bank_code", "2!n"), ("branch_code", "2!n"), ("account_number", "11!n"), ("national_check", "1!n")]),
    "ES": ("Spain", [("bank_code", "4!n"), ("branch_code", "4!n"), ("national_check", "2!n"), ("account_number", "10!n")]),
    "FI": ("Finland", [("bank_code", "6!n"), ("account_number", "7!n"), ("national_check", "1!n")]),
    "FO": ("Faroe Islands", [("bank_code", "4!n"), ("account_number", "9!n"), ("national_check", "1!n")]),
    "FR": ("France", [("bank_code", "5!n"), ("branch_code", "5!n"), ("account_number", "11!c"), ("national_check", "2!n")]),
    "GB": ("United Kingdom", [("bank_code", "4!a"), ("sort_code", "6!n"), ("account_number", "8!n")]),
    "GE": ("Georgia", [("bank_code", "2!a"), ("account_number", "16!n")]),
    "GI": ("Gibraltar", [("bank_code", "4!a"), ("account_number", "15!c")]),
    "GL": ("Greenland", [("bank_code", "4!n"), ("account_number", "9!n"), ("national_check", "1!n")]),
    "GR": ("Greece", [("bank_code", "3!n"), ("branch_code", "4!n"), ("account_number", "16!c")]),
    "GT": ("Guatemala", [("bank_code", "4!c"), ("currency", "2!n"), ("account_type", "2!n"), ("account_number", "16!c")]),
    "HR": ("Croatia", [("bank_code", "7!n"), ("account_number", "10!n")]),
    "HU": ("Hungary", [("bank_code", "3!n"), ("branch_code", "4!n"), ("branch_check", "1!n"), ("account_number", "15!n"), ("national_check", "1!n")]),
    "IE": ("Ireland", [("bank_code", "4!a"), ("sort_code", "6!n"), ("account_number", "8!n")]),
    "IL": ("Israel", [("bank_code", "3!n"), ("branch_code", "3!n"), ("account_number", "13!n")]),
    "IS": ("Iceland", [("bank_code", "2!n"), ("branch_code", "2!n"), ("account_type", "2!n"), ("account_number", "6!n"), ("national_id", "10!n")]),
    "IT": ("Italy", [("national_check", "1!a"), ("bank_code", "5!n"), ("branch_code", "5!n"), ("account_number", "12!c")]),
    "JO": ("Jordan", [("bank_code", "4!a"), ("branch_code", "4!n"), ("account_number", "18!c")]),
    "KW": ("Kuwait", [("bank_code", "4!a"), ("account_number", "22!c")]),
    "KZ": ("Kazakhstan", [("bank_code", "3!n"), ("account_number", "13!c")]),
    "LB": ("Lebanon", [("bank_code", "4!n"), ("account_number", "20!c")]),
    "LC": ("Saint Lucia", [("bank_code", "4!a"), ("account_number", "24!c")]),
    "LI": ("Liechtenstein", [("bank_code", "5!n"), ("account_number", "12!c")]),
    "LT": ("Lithuania", [("bank_code", "5!n"), ("account_number", "11!n")]),
    "LU": ("Luxembourg", [("bank_code", "3!n"), ("account_number", "13!c")]),
    "LV": ("Latvia", [("bank_code", "4!a"), ("account_number", "13!c")]),
    "MC": ("Monaco", [("bank_code", "5!n"), ("branch_code", "5!n"), ("account_number", "11!c"), ("national_check", "2!n")]),
    "MD": ("Moldova", [("bank_code", "2!c"), ("account_number", "18!c")]),
    "ME": ("Montenegro", [("bank_code", "3!n"), ("account_number", "13!n"), ("national_check", "2!n")]),
    "MK": ("North Macedonia", [("bank_code", "3!n"), ("account_number", "10!c"), ("national_check", "2!n")]),
    "MR": ("Mauritania", [("bank_code", "5!n"), ("branch_code", "5!n"), ("account_number", "11!n"), ("national_check", "2!n")]),
    "MT": ("Malta", [("bank_code", "4!a"), ("branch_code", "5!n"), ("account_number", "18!c")]),
    "MU": ("Mauritius", [("bank_code", "4!a2!n"), ("branch_code", "2!n"), ("account_number", "12!n3!n"), ("currency", "3!a")]),
    "NL": ("Netherlands", [("bank_code", "4!a"), ("account_number", "10!n")]),
    "NO": ("Norway", [("bank_code", "4!n"), ("account_number", "6!n"), ("national_check", "1!n")]),
    "PK": ("Pakistan", [("bank_code", "4!a"), ("account_number", "16!c")]),
    "PL": ("Poland", [("bank_code", "3!n"), ("branch_code", "4!n"), ("national_check", "1!n"), ("account_number", "16!n")]),
    "PS": ("Palestine", [("bank_code", "4!a"), ("account_number", "21!c")]),
    "PT": ("Portugal", [("bank_code", "4!n"), ("branch_code", "4!n"), ("account_number", "11!n"), ("national_check", "2!n")]),
    "QA": ("Qatar", [("bank_code", "4!a"), ("account_number", "21!c")]),
    "RO": ("Romania", [("bank_code", "4!a"), ("account_number", "16!c")]),
    "RS": ("Serbia", [("bank_code", "3!n"), ("account_number", "13!n"), ("national_check", "2!n")]),
    "SA": ("Saudi Arabia", [("bank_code", "2!n"), ("account_number", "18!c")]),
    "SE": ("Sweden", [("bank_code", "3!n"), ("account_number", "16!n"), ("national_check", "1!n")]),
    "SI": ("Slovenia", [("bank_code", "2!n"), ("branch_code", "3!n"), ("account_number", "8!n"), ("national_check", "2!n")]),
    "SK": ("Slovakia", [("bank_code", "4!n"), ("account_number", "16!n")]),
    "SM": ("San Marino", [("national_check", "1!a"), ("bank_code", "5!n"), ("branch_code", "5!n"), ("account_number", "12!c")]),
    "ST": ("Sao Tome and Principe", [("bank_code", "4!n"), ("branch_code", "4!n"), ("account_number", "11!n"), ("national_check", "2!n")]),
    "TL": ("Timor-Leste", [("bank_code", "3!n"), ("account_number", "14!n"), ("national_check", "2!n")]),
    "TN": ("Tunisia", [("bank_code", "2!n"), ("branch_code", "3!n"), ("account_number", "13!n"), ("national_check", "2!n")]),
    "TR": ("Turkey", [("bank_code", "5!n"), ("reserved", "1!n"), ("account_number", "16!c")]),
    "VG": ("British Virgin Islands", [("bank_code", "4!a"), ("account_number", "16!n")]),
    "XK": ("Kosovo", [("bank_code", "2!n"), ("branch_code", "2!n"), ("account_number", "10!n"), ("national_check", "2!n")]),
}


def build_formats(table: Mapping[str, Tuple[str, Iterable[Tuple[str, str]]]]) -> Dict[str, CountryFormat]:
    return {
        cc: CountryFormat(cc, name, tuple(tuple(f) for f in fields))
        for cc, (name, fields) in table.items()
    }


class IbanStorage:
    """Registry backed by an in-memory table of country formats.

    Read-only after construction; safe to share between threads.
    """

    def __init__(self, formats: Optional[Mapping[str, CountryFormat]] = None):
        if formats is None:
            formats = build_formats(COUNTRY_TABLE)
        self._formats: Mapping[str, CountryFormat] = MappingProxyType(dict(formats))

    def has_country(self, country: str) -> bool:
        return country in self._formats

    def get_pattern(self, country: str) -> re.Pattern:
        return self._formats[country].pattern

    def get_fields(self, country: str) -> List[str]:
        return self._formats[country].field_names

    def get_format(self, country: str) -> CountryFormat:
        return self._formats[country]

    def get_length(self, country: str) -> int:
        return self._formats[country].length

    def countries(self) -> List[str]:
        return sorted(self._formats)

    def __len__(self) -> int:
        return len(self._formats)
