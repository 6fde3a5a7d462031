"""
Key material for the Rabin trapdoor permutation.

A public key is (n, r, s) where n = p * q is a Blum integer and r, s are
residuosity selectors. A private key additionally holds p, q and the CRT
coefficient u = p^{-1} mod q.

Selector convention:
    r is the Legendre symbol modulo p of the canonical square root,
    s is the Legendre symbol modulo q of the canonical square root.
    Both must be +1 or -1. Inversion always returns the root x with
    (x|p) = r and (x|q) = s, which makes squaring a bijection from
    D(r, s) = {x in Z_n^* : (x|p) = r, (x|q) = s} onto QR_n.

Two keys with the same n but different (r, s) describe different
permutations and are not interchangeable.
"""

import logging
from dataclasses import dataclass, field

from Crypto.Util.number import getRandomNBitInteger, inverse, isPrime

from .errors import KeyGenerationFailure, KeyMismatch
from .params import KeyGenParams
from .utils import require_int

logger = logging.getLogger(__name__)

SELECTORS = (1, -1)


@dataclass(frozen=True)
class RabinPublicKey:
    """Public Rabin key (n, r, s)."""

    n: int  # Modulus, product of two primes 3 (mod 4)
    r: int  # Legendre symbol mod p of the canonical root
    s: int  # Legendre symbol mod q of the canonical root

    def __post_init__(self):
        for name in ("n", "r", "s"):
            require_int(getattr(self, name), name)
        if self.n <= 1 or self.n % 2 == 0:
            raise KeyMismatch("Modulus n must be odd and greater than 1")
        if self.r not in SELECTORS:
            raise KeyMismatch(f"Selector r must be 1 or -1, got {self.r}")
        if self.s not in SELECTORS:
            raise KeyMismatch(f"Selector s must be 1 or -1, got {self.s}")

    def public_key(self) -> "RabinPublicKey":
        """Return the public part (n, r, s) of this key."""
        return RabinPublicKey(self.n, self.r, self.s)


@dataclass(frozen=True)
class RabinPrivateKey(RabinPublicKey):
    """
    Private Rabin key (n, r, s, p, q, u).

    SEC: p, q and u are kept out of repr() so keys can be logged or shown
    in tracebacks without leaking the factorization.
    """

    p: int = field(repr=False)
    q: int = field(repr=False)
    u: int = field(repr=False)  # p^{-1} mod q

    def __post_init__(self):
        super().__post_init__()
        for name in ("p", "q", "u"):
            require_int(getattr(self, name), name)

        if self.p * self.q != self.n:
            raise KeyMismatch("p * q does not equal the modulus n")
        if self.p == self.q:
            raise KeyMismatch("p and q must be distinct")
        # Square roots via exponentiation by (p+1)/4 need p = 3 (mod 4)
        if self.p % 4 != 3 or self.q % 4 != 3:
            raise KeyMismatch("p and q must both be 3 mod 4")
        if (self.u * self.p) % self.q != 1:
            raise KeyMismatch("u is not the inverse of p modulo q")

    @classmethod
    def from_primes(cls, p: int, q: int, r: int = 1, s: int = 1) -> "RabinPrivateKey":
        """
        Build a private key from its two primes, deriving n and u.

        Args:
            p: First prime, 3 mod 4
            q: Second prime, 3 mod 4, distinct from p
            r: Selector mod p (default: canonical root is a residue mod p)
            s: Selector mod q (default: canonical root is a residue mod q)
        """
        require_int(p, "p")
        require_int(q, "q")
        if p == q:
            raise KeyMismatch("p and q must be distinct")
        try:
            u = inverse(p, q)
        except (ValueError, ZeroDivisionError) as exc:
            raise KeyMismatch("p has no inverse modulo q") from exc
        return cls(p * q, r, s, p, q, u)


def _random_blum_prime(bits: int, params: KeyGenParams, randfunc=None) -> int:
    """
    Draw a random prime of exactly `bits` bits that is 3 mod 4.

    The two top bits are forced to 1 so that the product of a p_bits and a
    q_bits prime always has exactly p_bits + q_bits bits. The two low bits
    are forced to 1, which makes every candidate 3 mod 4.
    """
    mask = (3 << (bits - 2)) | 3

    for attempt in range(1, params.max_prime_attempts + 1):
        candidate = getRandomNBitInteger(bits, randfunc) | mask
        if isPrime(candidate, params.false_positive_prob, randfunc):
            logger.debug(f"Found {bits}-bit prime after {attempt} candidates")
            return candidate

    logger.warning(
        f"Prime search exhausted {params.max_prime_attempts} candidates "
        f"at {bits} bits"
    )
    raise KeyGenerationFailure(
        f"No {bits}-bit prime found in {params.max_prime_attempts} candidates"
    )


def generate_private_key(params: KeyGenParams, randfunc=None) -> RabinPrivateKey:
    """
    Generate a fresh Rabin key pair with selectors r = s = 1.

    Blocking: dominated by the prime search. Nothing is retained on failure.

    Args:
        params: Key generation parameters
        randfunc: Callable returning N random bytes (default: Crypto.Random)

    Returns:
        A private key whose modulus has exactly params.bit_length bits

    Raises:
        KeyGenerationFailure: If a prime search or the p != q redraw
            exceeds its bound
    """
    p = _random_blum_prime(params.p_bits, params, randfunc)

    for _ in range(params.max_pair_attempts):
        q = _random_blum_prime(params.q_bits, params, randfunc)
        if q != p:
            break
    else:
        logger.warning(
            f"Could not draw q != p in {params.max_pair_attempts} attempts"
        )
        raise KeyGenerationFailure("Could not draw two distinct primes")

    key = RabinPrivateKey.from_primes(p, q)
    logger.info(f"Generated Rabin key pair with {key.n.bit_length()}-bit modulus")
    return key
