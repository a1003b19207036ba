from __future__ import annotations


class IbanError(ValueError):
    """Base for every rejection raised by the IBAN helpers.

    ``value`` holds the offending input (country code or IBAN string).
    """

    def __init__(self, message: str, value: str):
        super().__init__(message)
        self.value = value


class UnsupportedCountry(IbanError):
    def __init__(self, country: str):
        super().__init__(f"Country {country} does not use IBAN", country)
        self.country = country


class MalformedAccountData(IbanError):
    def __init__(self, country: str, data: str):
        super().__init__(f"Data not the correct format for {country}", data)
        self.country = country


class MalformedIban(IbanError):
    def __init__(self, country: str, iban: str):
        super().__init__(f"IBAN {iban} not the correct format for {country}", iban)
        self.country = country


class InvalidIbanShape(IbanError):
    def __init__(self, iban: str):
        super().__init__(f"{iban} has no country code prefix", iban)


class InvalidChecksum(IbanError):
    def __init__(self, iban: str):
        super().__init__(f"IBAN {iban} has invalid check digits", iban)


class RegistryError(ValueError):
    """Country registry data could not be loaded or is inconsistent."""
