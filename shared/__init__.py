"""
KeyLength Shared Module
=======================

Configuration, logging and console infrastructure shared by the
KeyLength tools.
"""

from shared.config import KeyLengthConfig

__all__ = ["KeyLengthConfig"]
