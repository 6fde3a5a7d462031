"""
Rabin trapdoor permutation.

Forward: f(x) = x^2 mod n, computable from the public modulus alone.
Inverse: square root via the Chinese Remainder Theorem, using the private
factorization n = p * q with p, q = 3 (mod 4).

Every quadratic residue y in Z_n^* has four square roots, one in each
class of Legendre signatures ((x|p), (x|q)). The key's selectors (r, s)
pick the class, so invert is deterministic and

    apply: D(r, s) -> QR_n    and    invert: QR_n -> D(r, s)

are mutually inverse bijections, where D(r, s) = {x in Z_n^* : (x|p) = r,
(x|q) = s}. See trapdoor.rabin.keys for the selector convention.

Engine instances are immutable after construction and safe to share
between threads.
"""

from Crypto.Util.number import GCD, getRandomRange

from ..primitives.tdp import ElementValidity
from .errors import InvalidInput, MissingPrivateKey
from .keys import RabinPrivateKey, RabinPublicKey, generate_private_key
from .params import KeyGenParams
from .utils import crt_combine, jacobi, legendre, require_int, sqrt_mod_blum_prime


class RabinPermutation:
    """
    Rabin trapdoor permutation over a Blum integer n.

    Built from a public key (apply only) or a private key (apply and
    invert). Use the init_* classmethods for the three construction modes.
    """

    ALGORITHM_NAME = "Rabin"

    def __init__(self, key: RabinPublicKey):
        """
        Initialize the permutation.

        Args:
            key: RabinPublicKey for a public-only engine, or RabinPrivateKey
                 to also enable inversion
        """
        if not isinstance(key, RabinPublicKey):
            raise TypeError("key must be a RabinPublicKey or RabinPrivateKey")

        self._public_key = key.public_key()
        self._private_key = key if isinstance(key, RabinPrivateKey) else None

    @classmethod
    def init_with_private(cls, n: int, r: int, s: int, p: int, q: int, u: int) -> "RabinPermutation":
        """Create an engine from full key material. Raises KeyMismatch if inconsistent."""
        return cls(RabinPrivateKey(n, r, s, p, q, u))

    @classmethod
    def init_with_public(cls, n: int, r: int, s: int) -> "RabinPermutation":
        """Create a public-only engine; invert() will raise MissingPrivateKey."""
        return cls(RabinPublicKey(n, r, s))

    @classmethod
    def init_random(cls, bit_length: int, randfunc=None, **kwargs) -> "RabinPermutation":
        """
        Create an engine with a freshly generated key pair.

        Args:
            bit_length: Modulus size in bits
            randfunc: Callable returning N random bytes (default: Crypto.Random)
            **kwargs: Extra KeyGenParams options (max_prime_attempts, ...)

        Raises:
            KeyGenerationFailure: If prime generation does not converge
        """
        params = KeyGenParams(bit_length=bit_length, **kwargs)
        return cls(generate_private_key(params, randfunc))

    @property
    def algorithm_name(self) -> str:
        return self.ALGORITHM_NAME

    @property
    def modulus(self) -> int:
        """The public modulus n."""
        return self._public_key.n

    @property
    def public_key(self) -> RabinPublicKey:
        return self._public_key

    @property
    def private_key(self) -> RabinPrivateKey:
        """The private key. Raises MissingPrivateKey on a public-only engine."""
        return self._require_private()

    @property
    def has_private_key(self) -> bool:
        return self._private_key is not None

    def _require_private(self) -> RabinPrivateKey:
        if self._private_key is None:
            raise MissingPrivateKey("Operation requires the private key (p, q)")
        return self._private_key

    def apply(self, x: int) -> int:
        """
        Forward permutation: x^2 mod n.

        Total on [0, n); x does not need to be a validated domain element.

        Args:
            x: Input in [0, n)

        Returns:
            Output in [0, n)
        """
        require_int(x)
        n = self._public_key.n
        if x < 0 or x >= n:
            raise InvalidInput(f"Input {x} out of range [0, {n})")

        return pow(x, 2, n)

    def _canonical_root(self, y: int) -> int | None:
        """
        Square root of y in D(r, s), or None if y is not in QR_n.

        Assumes 0 < y < n and a private key is present.
        """
        key = self._private_key
        p, q = key.p, key.q
        y_p, y_q = y % p, y % q

        # Elements sharing a factor with n are outside Z_n^*
        if y_p == 0 or y_q == 0:
            return None
        if legendre(y_p, p) != 1 or legendre(y_q, q) != 1:
            return None

        # Both roots below are residues; negate to pick the non-residue root
        root_p = sqrt_mod_blum_prime(y_p, p)
        root_q = sqrt_mod_blum_prime(y_q, q)
        if key.r == -1:
            root_p = p - root_p
        if key.s == -1:
            root_q = q - root_q

        return crt_combine(root_p, root_q, p, q, key.u)

    def invert(self, y: int) -> int:
        """
        Inverse permutation: the square root of y selected by (r, s).

        Args:
            y: A quadratic residue in Z_n^*

        Returns:
            x in [0, n) with apply(x) == y, (x|p) == r and (x|q) == s

        Raises:
            MissingPrivateKey: On a public-only engine
            InvalidInput: If y is out of (0, n) or is not a quadratic residue
        """
        require_int(y, "y")
        n = self._require_private().n
        if y <= 0 or y >= n:
            raise InvalidInput(f"Input {y} out of range (0, {n})")

        root = self._canonical_root(y)
        if root is None:
            raise InvalidInput(f"Input {y} is not a quadratic residue modulo n")
        return root

    def check_element(self, x: int) -> ElementValidity:
        """
        Three-valued domain check for invert() inputs.

        Returns:
            VALID if x is in QR_n, NOT_VALID if it provably is not,
            DONT_KNOW if deciding needs the factorization and this engine
            only holds the public key
        """
        require_int(x)
        n = self._public_key.n
        if x <= 0 or x >= n:
            return ElementValidity.NOT_VALID

        if self._private_key is None:
            # SEC: Jacobi -1 proves a non-residue, 0 means gcd(x, n) > 1.
            # Jacobi 1 is ambiguous without p and q.
            if jacobi(x, n) != 1:
                return ElementValidity.NOT_VALID
            return ElementValidity.DONT_KNOW

        if self._canonical_root(x) is None:
            return ElementValidity.NOT_VALID
        return ElementValidity.VALID

    def is_valid_domain_element(self, x: int) -> bool:
        """
        Check whether x can be passed to invert().

        Returns False for x outside (0, n) on any engine.

        Raises:
            MissingPrivateKey: If the engine is public-only and x has
                Jacobi symbol 1, so residuosity cannot be decided
        """
        validity = self.check_element(x)
        if validity is ElementValidity.DONT_KNOW:
            raise MissingPrivateKey(
                "Quadratic residuosity modulo n cannot be decided without p and q"
            )
        return validity is ElementValidity.VALID

    def random_element(self, randfunc=None) -> int:
        """
        Sample a uniformly random element of QR_n.

        Squares a random unit z; each residue has exactly four roots in
        Z_n^*, so the result is uniform. Needs only the public key.
        """
        n = self._public_key.n
        while True:
            z = getRandomRange(1, n, randfunc)
            if GCD(z, n) == 1:
                return pow(z, 2, n)

    def __repr__(self) -> str:
        return (
            f"RabinPermutation(n_bits={self.modulus.bit_length()}, "
            f"r={self._public_key.r}, s={self._public_key.s}, "
            f"private={self.has_private_key})"
        )
