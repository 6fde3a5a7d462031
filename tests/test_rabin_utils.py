"""Tests for Rabin number-theoretic helpers."""

import pytest
from trapdoor.rabin.utils import (
    bytes_to_int,
    crt_combine,
    int_to_bytes,
    jacobi,
    legendre,
    require_int,
    sqrt_mod_blum_prime,
)


class TestSymbols:
    """Tests for Legendre and Jacobi symbols."""

    def test_legendre_matches_squares(self):
        """Legendre symbol agrees with brute-force squares mod small primes."""
        for p in [3, 7, 11, 19, 23, 43]:
            squares = {(k * k) % p for k in range(1, p)}
            for a in range(1, p):
                expected = 1 if a in squares else -1
                assert legendre(a, p) == expected, f"({a}|{p})"

    def test_legendre_zero(self):
        assert legendre(0, 7) == 0
        assert legendre(14, 7) == 0

    def test_jacobi_is_product_of_legendre(self):
        """(a|pq) = (a|p)(a|q)."""
        p, q = 7, 11
        for a in range(1, p * q):
            assert jacobi(a, p * q) == legendre(a, p) * legendre(a, q)

    def test_jacobi_known_values(self):
        assert jacobi(48, 77) == -1
        assert jacobi(62, 77) == 1  # Non-residue mod both primes
        assert jacobi(71, 77) == 1
        assert jacobi(7, 77) == 0


class TestSquareRoots:
    """Tests for sqrt_mod_blum_prime and crt_combine."""

    def test_sqrt_is_root(self):
        """Root squares back to the input for every residue."""
        for p in [7, 11, 19, 23, 43, 47]:
            for k in range(1, p):
                a = (k * k) % p
                root = sqrt_mod_blum_prime(a, p)
                assert (root * root) % p == a

    def test_sqrt_returns_residue_root(self):
        """The returned root is itself a quadratic residue."""
        for p in [7, 11, 19, 23]:
            for k in range(1, p):
                root = sqrt_mod_blum_prime((k * k) % p, p)
                assert legendre(root, p) == 1

    def test_known_roots(self):
        assert sqrt_mod_blum_prime(2, 7) == 4
        assert sqrt_mod_blum_prime(5, 11) == 4

    def test_crt_combine(self):
        # u = 7^{-1} mod 11 = 8
        assert crt_combine(1, 4, 7, 11, 8) == 15
        assert crt_combine(6, 4, 7, 11, 8) == 48

    def test_crt_combine_all_residues(self):
        """Every pair of residues recombines to a consistent value in [0, n)."""
        p, q, u = 7, 11, 8
        for xp in range(p):
            for xq in range(q):
                x = crt_combine(xp, xq, p, q, u)
                assert 0 <= x < p * q
                assert x % p == xp
                assert x % q == xq


class TestByteEncoding:
    """Tests for the big-endian boundary encoding."""

    def test_zero_is_empty(self):
        assert int_to_bytes(0) == b""
        assert bytes_to_int(b"") == 0

    def test_minimal_length(self):
        assert int_to_bytes(1) == b"\x01"
        assert int_to_bytes(255) == b"\xff"  # No sign byte
        assert int_to_bytes(256) == b"\x01\x00"
        assert int_to_bytes(2021) == b"\x07\xe5"

    def test_leading_zeros_ignored(self):
        assert bytes_to_int(b"\x00\x00\x01") == 1

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            int_to_bytes(-1)


class TestRequireInt:
    """Tests for require_int."""

    def test_accepts_int(self):
        assert require_int(5) == 5

    def test_rejects_other_types(self):
        for bad in [True, 1.0, "1", None, b"\x01"]:
            with pytest.raises(TypeError):
                require_int(bad)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
