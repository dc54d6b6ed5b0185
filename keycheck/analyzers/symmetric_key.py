"""
Symmetric Key Material
=======================

Symmetric keys carry no parseable structure; they are built directly from
a declared bit length (e.g. 128 for AES-128).

The year-adjusted recommendation grows linearly from 128 bits in 2025 at
0.67 bits per year, floored to an integer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

_BASE_BITS = 128
_BASE_YEAR = 2025
_BITS_PER_YEAR = 0.67


@dataclass(frozen=True, slots=True)
class SymmetricKey:
    """Symmetric key material of an explicit bit length."""

    length: int

    ALGORITHM: ClassVar[str] = "Symmetric"

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError(f"Key length must be >= 0, got {self.length}")

    def get_length(self) -> int:
        return self.length

    def get_algorithm(self) -> str:
        return self.ALGORITHM

    def is_secure(self, threshold: int) -> bool:
        return self.length >= threshold

    def adjust_for_year(self, year: int) -> int:
        years_after = year - _BASE_YEAR
        if years_after <= 0:
            return _BASE_BITS
        return _BASE_BITS + math.floor(years_after * _BITS_PER_YEAR)
