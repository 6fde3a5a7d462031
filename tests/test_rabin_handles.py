"""Tests for the Rabin handle registry."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from trapdoor.rabin.errors import InvalidInput, KeyMismatch, MissingPrivateKey, UnknownHandle
from trapdoor.rabin.handles import Handle, HandleRegistry
from trapdoor.rabin.permutation import RabinPermutation
from trapdoor.rabin.utils import bytes_to_int, int_to_bytes


def enc(x: int) -> bytes:
    return int_to_bytes(x)


class TestLifecycle:
    """Create, use and release handles."""

    def test_create_and_release(self):
        registry = HandleRegistry()
        handle = registry.create_with_private(enc(77), 1, 1, enc(7), enc(11), enc(8))

        assert handle in registry
        assert len(registry) == 1
        assert isinstance(registry.engine(handle), RabinPermutation)

        registry.release(handle)
        assert handle not in registry
        assert len(registry) == 0

    def test_double_release(self):
        registry = HandleRegistry()
        handle = registry.create_with_public(enc(77), 1, 1)
        registry.release(handle)
        with pytest.raises(UnknownHandle):
            registry.release(handle)

    def test_released_handle_unusable(self):
        registry = HandleRegistry()
        handle = registry.create_with_public(enc(77), 1, 1)
        registry.release(handle)
        with pytest.raises(UnknownHandle):
            registry.apply(handle, enc(3))
        with pytest.raises(UnknownHandle):
            registry.modulus(handle)

    def test_foreign_handle(self):
        registry = HandleRegistry()
        with pytest.raises(UnknownHandle):
            registry.apply(Handle(999), enc(3))
        with pytest.raises(KeyError):
            registry.release(Handle(999))

    def test_ids_not_reused(self):
        registry = HandleRegistry()
        first = registry.create_with_public(enc(77), 1, 1)
        registry.release(first)
        second = registry.create_with_public(enc(77), 1, 1)
        assert second != first

    def test_registries_independent(self):
        a, b = HandleRegistry(), HandleRegistry()
        handle = a.create_with_public(enc(77), 1, 1)
        b.create_with_public(enc(77), 1, 1)
        b.release(handle)  # Same id, b's own engine
        assert handle in a


class TestOperations:
    """Byte-level operations through handles."""

    def test_private_round_trip(self):
        registry = HandleRegistry()
        handle = registry.create_with_private(enc(437), 1, 1, enc(19), enc(23), enc(17))

        assert registry.apply(handle, enc(100)) == enc(386)
        assert registry.invert(handle, enc(386)) == enc(100)
        assert registry.is_valid_domain_element(handle, enc(386)) is True
        assert registry.is_valid_domain_element(handle, enc(437)) is False

    def test_public_only(self):
        registry = HandleRegistry()
        handle = registry.create_with_public(enc(77), 1, 1)

        assert registry.apply(handle, enc(15)) == enc(71)
        with pytest.raises(MissingPrivateKey):
            registry.invert(handle, enc(71))

    def test_leading_zero_bytes_accepted(self):
        registry = HandleRegistry()
        handle = registry.create_with_public(b"\x00\x4d", 1, 1)
        assert registry.modulus(handle) == b"\x4d"

    def test_errors_propagate(self):
        registry = HandleRegistry()
        with pytest.raises(KeyMismatch):
            registry.create_with_private(enc(77), 1, 1, enc(7), enc(13), enc(8))
        handle = registry.create_with_public(enc(77), 1, 1)
        with pytest.raises(InvalidInput):
            registry.apply(handle, enc(77))
        assert len(registry) == 1

    def test_create_random(self):
        registry = HandleRegistry()
        handle = registry.create_random(128)
        engine = registry.engine(handle)

        y = engine.random_element()
        x = bytes_to_int(registry.invert(handle, enc(y)))
        assert bytes_to_int(registry.apply(handle, enc(x))) == y
        assert bytes_to_int(registry.modulus(handle)).bit_length() == 128


class TestConcurrentRegistration:
    """Handles issued from many threads stay unique."""

    def test_unique_ids(self):
        registry = HandleRegistry()

        def create(_):
            return registry.create_with_public(enc(77), 1, 1)

        with ThreadPoolExecutor(max_workers=8) as pool:
            handles = list(pool.map(create, range(200)))

        assert len({h.id for h in handles}) == 200
        assert len(registry) == 200


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
