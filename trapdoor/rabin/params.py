"""
Key generation parameters for the Rabin trapdoor permutation.

Key parameters:
- bit_length: Size of the modulus n = p * q in bits
- max_prime_attempts: Candidates tried per prime before giving up
- max_pair_attempts: Redraws of q allowed while q == p
- false_positive_prob: Acceptable Miller-Rabin false positive probability

OPT Tradeoffs:
- Prime search cost grows roughly with bit_length^4 in pure Python
- Lower false_positive_prob means more Miller-Rabin rounds per candidate
"""

from dataclasses import dataclass


@dataclass
class KeyGenParams:
    """Parameters for Rabin key generation."""

    bit_length: int  # Modulus size in bits
    # Primes 3 mod 4 have density ~2/ln(2^k) among candidates, so 20000 draws
    # leave a negligible failure chance even for 4096-bit moduli.
    max_prime_attempts: int = 20000
    max_pair_attempts: int = 100
    false_positive_prob: float = 1e-6

    def __post_init__(self):
        if self.bit_length < 16:
            raise ValueError("bit_length must be at least 16")
        if self.max_prime_attempts < 1:
            raise ValueError("max_prime_attempts must be at least 1")
        if self.max_pair_attempts < 1:
            raise ValueError("max_pair_attempts must be at least 1")
        if not 0 < self.false_positive_prob < 1:
            raise ValueError("false_positive_prob must be in (0, 1)")

    @property
    def p_bits(self) -> int:
        """Bit size of the first prime."""
        return self.bit_length // 2

    @property
    def q_bits(self) -> int:
        """Bit size of the second prime. p_bits + q_bits == bit_length."""
        return self.bit_length - self.p_bits

    def __repr__(self) -> str:
        return (
            f"KeyGenParams(bit_length={self.bit_length}, "
            f"p_bits={self.p_bits}, q_bits={self.q_bits}, "
            f"max_prime_attempts={self.max_prime_attempts}, "
            f"max_pair_attempts={self.max_pair_attempts})"
        )
