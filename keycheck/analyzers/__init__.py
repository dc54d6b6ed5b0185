"""
KeyCheck Analyzers
===================

Key-material variants for the KeyCheck framework. Each variant measures
the length of one key family and projects a year-adjusted recommendation.
"""

from keycheck.analyzers.base import KeyMaterial
from keycheck.analyzers.ecc_key import ECCKey
from keycheck.analyzers.rsa_key import RSAKey
from keycheck.analyzers.symmetric_key import SymmetricKey

__all__ = [
    "ECCKey",
    "KeyMaterial",
    "RSAKey",
    "SymmetricKey",
]
