"""
Reference-data identifiers: currencies and legal entities.

Both are opaque, immutable codes. They are used as dictionary keys and as
parts of sort keys, so equality, hashing and ordering come from the
underlying strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, order=True)
class Currency:
    """ISO-4217 style currency code, e.g. USD."""

    code: str

    def __post_init__(self) -> None:
        if not isinstance(self.code, str):
            raise TypeError(f"Currency code must be a string: {self.code!r}")
        if len(self.code) != 3 or not self.code.isalpha() or not self.code.isupper():
            raise ValueError(f"Invalid currency code: {self.code!r}")

    @classmethod
    def of(cls, code: Union[str, "Currency"]) -> "Currency":
        """Parse a currency code, normalizing case."""
        if isinstance(code, Currency):
            return code
        return cls(code.strip().upper())

    def __str__(self) -> str:
        return self.code


USD = Currency("USD")
EUR = Currency("EUR")
GBP = Currency("GBP")
JPY = Currency("JPY")
CHF = Currency("CHF")


@dataclass(frozen=True, order=True)
class StandardId:
    """
    Identifier of a legal entity (or any other reference-data object).

    Printed and parsed as ``scheme~value``, e.g. ``OG-Ticker~ACME``.
    """

    scheme: str
    value: str

    def __post_init__(self) -> None:
        if not self.scheme or not self.value:
            raise ValueError("StandardId scheme and value must not be empty")
        if "~" in self.scheme:
            raise ValueError(f"StandardId scheme must not contain '~': {self.scheme!r}")

    @classmethod
    def of(cls, scheme: str, value: str) -> "StandardId":
        return cls(scheme, value)

    @classmethod
    def parse(cls, text: Union[str, "StandardId"]) -> "StandardId":
        """Parse ``scheme~value``."""
        if isinstance(text, StandardId):
            return text
        scheme, sep, value = text.partition("~")
        if not sep:
            raise ValueError(f"StandardId must be formatted as 'scheme~value': {text!r}")
        return cls(scheme, value)

    def __str__(self) -> str:
        return f"{self.scheme}~{self.value}"
