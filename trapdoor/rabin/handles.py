"""
Handle registry: the byte-level boundary for hosting Rabin engines.

A host that cannot hold Python objects directly (an RPC peer, a foreign
runtime) refers to engines through opaque Handle values. The registry owns
every engine it creates; release() is the explicit destroy operation.

Boundary encoding:
- Big integers (n, p, q, u, elements) are big-endian, unsigned,
  minimal-length bytes with no sign byte; b"" is zero.
- Selectors r, s are plain ints (+1 or -1).
"""

import logging
import threading
from dataclasses import dataclass

from .errors import UnknownHandle
from .keys import RabinPrivateKey, RabinPublicKey
from .permutation import RabinPermutation
from .utils import bytes_to_int, int_to_bytes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Handle:
    """Opaque reference to an engine owned by a HandleRegistry."""

    id: int


class HandleRegistry:
    """
    Maps handles to owned RabinPermutation instances.

    Handle ids are never reused, so a stale handle cannot alias a newer
    engine. Only the bookkeeping is locked; engine calls run unlocked since
    engines are immutable.
    """

    def __init__(self):
        self._engines: dict[int, RabinPermutation] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def _register(self, engine: RabinPermutation) -> Handle:
        with self._lock:
            handle = Handle(self._next_id)
            self._next_id += 1
            self._engines[handle.id] = engine
        logger.debug(f"Registered engine under handle {handle.id}")
        return handle

    def _get(self, handle: Handle) -> RabinPermutation:
        with self._lock:
            engine = self._engines.get(handle.id)
        if engine is None:
            raise UnknownHandle(f"Handle {handle.id} is not registered")
        return engine

    def create_with_private(
        self, n: bytes, r: int, s: int, p: bytes, q: bytes, u: bytes
    ) -> Handle:
        """Create an engine from full key material."""
        key = RabinPrivateKey(
            bytes_to_int(n), r, s, bytes_to_int(p), bytes_to_int(q), bytes_to_int(u)
        )
        return self._register(RabinPermutation(key))

    def create_with_public(self, n: bytes, r: int, s: int) -> Handle:
        """Create a public-only engine."""
        return self._register(RabinPermutation(RabinPublicKey(bytes_to_int(n), r, s)))

    def create_random(self, bit_length: int, randfunc=None) -> Handle:
        """Create an engine with a freshly generated key pair."""
        return self._register(RabinPermutation.init_random(bit_length, randfunc))

    def apply(self, handle: Handle, x: bytes) -> bytes:
        return int_to_bytes(self._get(handle).apply(bytes_to_int(x)))

    def invert(self, handle: Handle, y: bytes) -> bytes:
        return int_to_bytes(self._get(handle).invert(bytes_to_int(y)))

    def is_valid_domain_element(self, handle: Handle, x: bytes) -> bool:
        return self._get(handle).is_valid_domain_element(bytes_to_int(x))

    def modulus(self, handle: Handle) -> bytes:
        return int_to_bytes(self._get(handle).modulus)

    def engine(self, handle: Handle) -> RabinPermutation:
        """Return the engine behind a handle, for in-process callers."""
        return self._get(handle)

    def release(self, handle: Handle) -> None:
        """
        Destroy the engine behind a handle.

        Raises:
            UnknownHandle: If the handle was already released or is foreign
        """
        with self._lock:
            engine = self._engines.pop(handle.id, None)
        if engine is None:
            raise UnknownHandle(f"Handle {handle.id} is not registered")
        logger.debug(f"Released handle {handle.id}")

    def __contains__(self, handle: Handle) -> bool:
        with self._lock:
            return handle.id in self._engines

    def __len__(self) -> int:
        with self._lock:
            return len(self._engines)
