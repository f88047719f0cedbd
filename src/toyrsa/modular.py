"""Fixed-width modular arithmetic for the RSA primitives.

Provides modular multiplication, exponentiation and inversion over unsigned 64-bit operands. Python integers never
overflow, so the 64-bit contract is enforced explicitly: operands outside `[0, 2**64)` are rejected and
`mod_mul` is written so that no intermediate value ever leaves that range.

Typical usage example:

    c = mod_exp(42, 65537, n)
    d = mod_inverse(65537, (p - 1) * (q - 1))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0

U64_MAX: int = 2**64 - 1


def _check_u64(name: str, value: int) -> None:
    """Raise ValueError unless `value` is an unsigned 64-bit integer."""
    if not 0 <= value <= U64_MAX:
        raise ValueError(f"{name} must be in range [0, 2**64 - 1]")


def _add_mod(a: int, b: int, m: int) -> int:
    """Computes (a + b) mod m for a, b already reduced, without the sum leaving [0, m)."""
    if a >= m - b:
        return a - (m - b)
    return a + b


def eea(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such a that a*s0 + b*t0 = r0 = gcd(a, b).

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        Greatest common divisor of two integers.
        As well as the Bezout coefficients.
    """
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def mod_mul(a: int, b: int, m: int) -> int:
    """Overflow-safe modular multiplication.

    Binary ("Russian peasant") double-and-add: `b` is scanned from the least significant bit while `a` is doubled
    modulo `m`. Every step is a reduced modular addition, so all values stay below `m`.

    Args:
        a: First factor, unsigned 64-bit.
        b: Second factor, unsigned 64-bit.
        m: Modulus, unsigned 64-bit and non-zero.

    Returns:
        (a * b) mod m

    Raises:
        ValueError: If an operand is out of the 64-bit range or `m` is zero.
    """
    _check_u64("a", a)
    _check_u64("b", b)
    _check_u64("m", m)
    if m == 0:
        raise ValueError("Modulus must be non-zero")
    a %= m
    b %= m
    result = 0
    while b:
        if b & 1:
            result = _add_mod(result, a, m)
        a = _add_mod(a, a, m)
        b >>= 1
    return result


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """Modular exponentiation via right-to-left square-and-multiply.

    Each multiplication goes through `mod_mul`. `base**0` is 1 for every modulus above 1, including `base == 0`.

    Args:
        base: The base, unsigned 64-bit.
        exponent: The exponent, unsigned 64-bit.
        modulus: The modulus, unsigned 64-bit and non-zero.

    Returns:
        base**exponent mod modulus

    Raises:
        ValueError: If an operand is out of the 64-bit range or `modulus` is zero.
    """
    _check_u64("base", base)
    _check_u64("exponent", exponent)
    _check_u64("modulus", modulus)
    if modulus == 0:
        raise ValueError("Modulus must be non-zero")
    if modulus == 1:
        return 0
    result = 1
    base %= modulus
    while exponent:
        if exponent & 1:
            result = mod_mul(result, base, modulus)
        exponent >>= 1
        if exponent:
            base = mod_mul(base, base, modulus)
    return result


def mod_inverse(a: int, m: int) -> int | None:
    """Modular multiplicative inverse of `a` modulo `m`.

    Args:
        a: The number to invert, unsigned 64-bit.
        m: The modulus, unsigned 64-bit.

    Returns:
        The unique x in [0, m) with a*x = 1 (mod m), or None if `m` is zero or gcd(a, m) != 1.

    Raises:
        ValueError: If an operand is out of the 64-bit range.
    """
    _check_u64("a", a)
    _check_u64("m", m)
    if m == 0:
        return None
    g, s, _ = eea(a % m, m)
    if g != 1:
        return None
    # Bezout coefficient may be negative.
    return s % m
