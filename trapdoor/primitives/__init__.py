"""
Cryptographic primitive interfaces.

This module defines protocol interfaces for:
- TrapdoorPermutation: one-way permutation with a trapdoor
- ElementValidity: three-valued result of a domain membership check

Concrete implementations are in trapdoor/rabin/.
"""

from .tdp import ElementValidity, TrapdoorPermutation

__all__ = [
    "ElementValidity",
    "TrapdoorPermutation",
]
