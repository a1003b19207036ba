from __future__ import annotations

import re
from typing import List, Protocol, runtime_checkable


@runtime_checkable
class CountryRegistry(Protocol):
    """Per-country IBAN structure lookups used by ``detection.iban``.

    ``get_pattern`` and ``get_fields`` are only called for countries where
    ``has_country`` is true. The pattern must match the whole IBAN (country,
    check digits, BBAN) with one group per field, in ``get_fields`` order.
    """

    def has_country(self, country: str) -> bool: ...

    def get_pattern(self, country: str) -> re.Pattern[str]: ...

    def get_fields(self, country: str) -> List[str]: ...
