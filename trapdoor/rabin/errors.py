"""
Error kinds raised by the Rabin trapdoor permutation.

Each error also derives from the builtin exception matching its category,
so callers catching ValueError / RuntimeError / KeyError keep working.
"""


class RabinError(Exception):
    """Base class for all Rabin permutation errors."""


class KeyMismatch(RabinError, ValueError):
    """Supplied key material is inconsistent (e.g. p * q != n)."""


class InvalidInput(RabinError, ValueError):
    """Element is outside the permutation's domain."""


class MissingPrivateKey(RabinError, RuntimeError):
    """Operation needs the factorization but only the public key is known."""


class KeyGenerationFailure(RabinError, RuntimeError):
    """Random key generation did not converge within its retry bounds."""


class UnknownHandle(RabinError, KeyError):
    """Handle was released or never issued by this registry."""
