"""
Rabin trapdoor permutation over Blum integers.

Forward evaluation squares modulo n = p * q. Inversion takes a CRT square
root using the factorization and returns the root selected by the public
key's (r, s) selectors.

The key components:
- RabinPublicKey / RabinPrivateKey: immutable key material
- KeyGenParams: key generation configuration
- RabinPermutation: the engine (apply, invert, domain checks)
- HandleRegistry: owned typed handles for hosting engines across a boundary
"""

from .errors import (
    RabinError,
    KeyMismatch,
    InvalidInput,
    MissingPrivateKey,
    KeyGenerationFailure,
    UnknownHandle,
)
from .params import KeyGenParams
from .keys import RabinPublicKey, RabinPrivateKey, generate_private_key
from .permutation import RabinPermutation
from .handles import Handle, HandleRegistry
from .utils import int_to_bytes, bytes_to_int


def create_permutation(bit_length: int, **kwargs) -> RabinPermutation:
    """
    Create a Rabin permutation with a fresh random key pair.

    Args:
        bit_length: Modulus size in bits
        **kwargs: KeyGenParams options and randfunc

    Returns:
        Engine holding both public and private key
    """
    return RabinPermutation.init_random(bit_length, **kwargs)


__all__ = [
    "RabinError",
    "KeyMismatch",
    "InvalidInput",
    "MissingPrivateKey",
    "KeyGenerationFailure",
    "UnknownHandle",
    "KeyGenParams",
    "RabinPublicKey",
    "RabinPrivateKey",
    "generate_private_key",
    "RabinPermutation",
    "Handle",
    "HandleRegistry",
    "int_to_bytes",
    "bytes_to_int",
    "create_permutation",
]
