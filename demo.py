#!/usr/bin/env python3
"""
Demo and benchmarks for the Rabin trapdoor permutation.

Usage:
    python3 demo.py --rabin          # Run Rabin permutation demo
    python3 demo.py --benchmark      # Benchmark key generation, apply and invert
"""

import argparse
import logging
import time

from trapdoor.rabin import RabinPermutation, HandleRegistry, int_to_bytes

DEFAULT_BITS = 1024
DEFAULT_NUM_OPS = 100


# =============================================================================
# Formatting Utilities
# =============================================================================


def format_time(seconds: float) -> str:
    """Format time with appropriate unit."""
    if seconds >= 1:
        return f"{seconds:.2f}s"
    if seconds >= 0.001:
        return f"{seconds*1000:.2f}ms"
    return f"{seconds*1_000_000:.1f}us"


# =============================================================================
# Rabin Demo
# =============================================================================


def run_rabin_demo(bits: int):
    """Walk through key generation, apply, invert and domain checks."""
    print("=" * 70)
    print("Rabin Trapdoor Permutation - Demo")
    print("=" * 70)

    print(f"\n{'Key Generation':─^70}")
    start = time.perf_counter()
    tdp = RabinPermutation.init_random(bits)
    keygen_time = time.perf_counter() - start
    key = tdp.public_key
    print(f"  Modulus bits:   {tdp.modulus.bit_length():>12}")
    print(f"  Selectors:      {f'r={key.r}, s={key.s}':>12}")
    print(f"  Time:           {format_time(keygen_time):>12}")

    print(f"\n{'Apply / Invert':─^70}")
    y = tdp.random_element()
    x = tdp.invert(y)
    print(f"  y (residue):    {hex(y)[:40]}...")
    print(f"  x = invert(y):  {hex(x)[:40]}...")
    print(f"  apply(x) == y:  {tdp.apply(x) == y!s:>12}")
    print(f"  invert(apply(x)) == x: {tdp.invert(tdp.apply(x)) == x!s:>5}")

    print(f"\n{'Public-Only Engine':─^70}")
    public = RabinPermutation(tdp.public_key)
    print(f"  apply agrees:   {public.apply(x) == y!s:>12}")
    print(f"  check(y):       {public.check_element(y).value:>12}")
    print(f"  check(n - 1):   {public.check_element(tdp.modulus - 1).value:>12}")

    print(f"\n{'Handle Boundary':─^70}")
    registry = HandleRegistry()
    handle = registry.create_with_public(int_to_bytes(tdp.modulus), key.r, key.s)
    encoded = registry.apply(handle, int_to_bytes(x))
    print(f"  Handle id:      {handle.id:>12}")
    print(f"  Output bytes:   {len(encoded):>12}")
    registry.release(handle)
    print(f"  Live handles:   {len(registry):>12}")


# =============================================================================
# Benchmark
# =============================================================================


def run_benchmark(bits: int, num_ops: int):
    """Time key generation and per-operation cost."""
    print("=" * 70)
    print(f"Rabin Benchmark ({bits}-bit modulus, {num_ops} ops)")
    print("=" * 70)

    start = time.perf_counter()
    tdp = RabinPermutation.init_random(bits)
    keygen_time = time.perf_counter() - start

    elements = [tdp.random_element() for _ in range(num_ops)]

    start = time.perf_counter()
    roots = [tdp.invert(y) for y in elements]
    invert_time = time.perf_counter() - start

    start = time.perf_counter()
    images = [tdp.apply(x) for x in roots]
    apply_time = time.perf_counter() - start

    assert images == elements, "Round trip failed"

    start = time.perf_counter()
    for y in elements:
        tdp.is_valid_domain_element(y)
    check_time = time.perf_counter() - start

    print(f"\n  {'Operation':<20}{'Total':>12}{'Per op':>12}")
    print(f"  {'─' * 44}")
    print(f"  {'Key generation':<20}{format_time(keygen_time):>12}{'':>12}")
    print(f"  {'apply':<20}{format_time(apply_time):>12}{format_time(apply_time / num_ops):>12}")
    print(f"  {'invert':<20}{format_time(invert_time):>12}{format_time(invert_time / num_ops):>12}")
    print(f"  {'validity check':<20}{format_time(check_time):>12}{format_time(check_time / num_ops):>12}")


def main():
    parser = argparse.ArgumentParser(
        description="Rabin trapdoor permutation demo and benchmarks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 demo.py --rabin              # Demo
  python3 demo.py --benchmark          # Benchmark
  python3 demo.py --rabin --bits 2048  # Custom modulus size
        """,
    )
    parser.add_argument("--rabin", action="store_true", help="Run Rabin permutation demo")
    parser.add_argument("--benchmark", action="store_true", help="Run benchmark")
    parser.add_argument("--bits", type=int, default=DEFAULT_BITS, help=f"Modulus size (default: {DEFAULT_BITS})")
    parser.add_argument("--ops", type=int, default=DEFAULT_NUM_OPS, help=f"Operations to time (default: {DEFAULT_NUM_OPS})")
    parser.add_argument("--verbose", action="store_true", help="Show library debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if args.benchmark:
        run_benchmark(args.bits, args.ops)
    elif args.rabin:
        run_rabin_demo(args.bits)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
