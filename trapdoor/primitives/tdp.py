"""
Trapdoor Permutation (TDP) protocol.

A TDP is a bijection f on a domain that anyone holding the public key can
evaluate, but only the holder of the trapdoor (private key) can invert.
"""

from enum import Enum
from typing import Protocol


class ElementValidity(Enum):
    """Outcome of checking whether a value belongs to a TDP's domain."""

    VALID = "valid"
    NOT_VALID = "not_valid"
    DONT_KNOW = "dont_know"  # Deciding needs the trapdoor, which is absent


class TrapdoorPermutation(Protocol):
    """
    Trapdoor Permutation.

    Properties:
    - Efficiently computable: apply(x) needs only public data
    - Hard to invert: without the trapdoor, inverting apply is infeasible
    - Invertible with trapdoor: invert(y) is efficient given private data
    """

    @property
    def algorithm_name(self) -> str:
        """Name of the underlying algorithm."""
        ...

    @property
    def modulus(self) -> int:
        """Public modulus; elements live in [0, modulus)."""
        ...

    @property
    def has_private_key(self) -> bool:
        """Whether invert() is available."""
        ...

    def apply(self, x: int) -> int:
        """
        Forward evaluation f(x).

        Args:
            x: Input in [0, modulus)

        Returns:
            Output in [0, modulus)
        """
        ...

    def invert(self, y: int) -> int:
        """
        Inverse evaluation f^{-1}(y). Requires the trapdoor.

        Args:
            y: Valid domain element

        Returns:
            x such that apply(x) == y
        """
        ...

    def check_element(self, x: int) -> ElementValidity:
        """Three-valued domain membership test."""
        ...

    def is_valid_domain_element(self, x: int) -> bool:
        """Two-valued domain membership test; raises when undecidable."""
        ...

    def random_element(self, randfunc=None) -> int:
        """Uniformly random valid element, using only public data."""
        ...
