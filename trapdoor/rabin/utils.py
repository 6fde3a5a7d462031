"""
Number-theoretic helpers for the Rabin permutation.

Includes:
- legendre / jacobi symbols for residuosity tests
- sqrt_mod_blum_prime for square roots modulo a prime p = 3 (mod 4)
- crt_combine to recombine residues mod p and q into a value mod n
- int_to_bytes / bytes_to_int for the big-endian boundary encoding

Heavy lifting (inverse, gcd, Jacobi, primality) is delegated to pycryptodome.
"""

from Crypto.Math.Numbers import Integer


def require_int(value, name: str = "x") -> int:
    """Reject non-integers (bool included) before any arithmetic happens."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    return value


def legendre(a: int, p: int) -> int:
    """
    Legendre symbol (a|p) via Euler's criterion.

    Args:
        a: Any integer
        p: Odd prime

    Returns:
        1 if a is a non-zero square mod p, -1 if it is not a square, 0 if p | a
    """
    t = pow(a, (p - 1) // 2, p)
    return -1 if t == p - 1 else t


def jacobi(a: int, n: int) -> int:
    """
    Jacobi symbol (a|n) for odd n > 0.

    Computable without the factorization of n. A value of -1 proves that a
    is not a square mod n; 1 is inconclusive for composite n.
    """
    return int(Integer.jacobi_symbol(a, n))


def sqrt_mod_blum_prime(a: int, p: int) -> int:
    """
    Square root of a quadratic residue a modulo a prime p = 3 (mod 4).

    Returns the root a^((p+1)/4) mod p. When a is a non-zero residue this
    root is itself a residue (Legendre symbol 1); its negation p - root is
    the other root and is a non-residue, since -1 is a non-residue mod p.
    """
    return pow(a, (p + 1) // 4, p)


def crt_combine(xp: int, xq: int, p: int, q: int, u: int) -> int:
    """
    Chinese Remainder recombination (Garner form).

    Args:
        xp: Residue mod p
        xq: Residue mod q
        p, q: Coprime moduli
        u: p^{-1} mod q

    Returns:
        The unique x in [0, p*q) with x = xp (mod p) and x = xq (mod q)
    """
    return xp + p * (((xq - xp) * u) % q)


def int_to_bytes(x: int) -> bytes:
    """
    Encode a non-negative integer as big-endian, unsigned, minimal-length bytes.

    Zero encodes as the empty byte string. No sign byte is ever emitted.
    """
    if x < 0:
        raise ValueError("Cannot encode a negative integer")
    return x.to_bytes((x.bit_length() + 7) // 8, "big")


def bytes_to_int(data: bytes) -> int:
    """Decode big-endian unsigned bytes. Leading zero bytes are ignored."""
    return int.from_bytes(data, "big")
