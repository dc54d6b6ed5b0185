"""
Key Material Interface
=======================

Capability set shared by every key-material variant. Implementations are
unrelated frozen dataclasses (:class:`~keycheck.analyzers.rsa_key.RSAKey`,
:class:`~keycheck.analyzers.ecc_key.ECCKey`,
:class:`~keycheck.analyzers.symmetric_key.SymmetricKey`), each owning its
own decoded representation.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyMaterial(Protocol):
    """Anything whose length can be measured and judged against a threshold."""

    def get_length(self) -> int:
        """Key length in bits."""
        ...

    def get_algorithm(self) -> str:
        """Algorithm family tag ("RSA", "ECC", "Symmetric")."""
        ...

    def is_secure(self, threshold: int) -> bool:
        """Whether the key length meets *threshold*."""
        ...

    def adjust_for_year(self, year: int) -> int:
        """Recommended minimum length for keys used in *year*."""
        ...
