"""
Trapdoor permutation library.

This package provides a Rabin trapdoor permutation over Blum integers,
for use as a building block in factoring-based signature and encryption
schemes.

Modules:
- primitives: Protocol interfaces (TrapdoorPermutation, ElementValidity)
- rabin: Rabin permutation engine, keys and handle registry
"""

from . import primitives
from . import rabin

__version__ = "0.1.0"
__all__ = [
    "primitives",
    "rabin",
]
