"""Core Key Generation Utility, focusing on the generation of random 32-bit primes.

This module is responsible for generating the two-prime keys of the toy RSA scheme. Candidates are trial divided
by a cached table of small primes before a Miller-Rabin test, which is deterministic for every candidate this
package can produce.

Typical usage example:

    is_probably_prime(2147483659)
    p = generate_prime()
    p, q = generate_keypair(random.Random(1234))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import secrets

from toyrsa.modular import mod_inverse

EXP: int = 65537
PRIME_BITS: int = 32

_log = logging.getLogger(__name__)
_SYSTEM_RANDOM = secrets.SystemRandom()
_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0
_TRIAL_DIVISION_CAP: int = 10000
# The first 13 primes as witnesses make Miller-Rabin exact below this bound.
_DETERMINISTIC_LIMIT: int = 3_317_044_064_679_887_385_961_981
_DETERMINISTIC_WITNESSES: tuple[int, ...] = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)
_PRIME_ATTEMPTS_PER_BIT: int = 20
_KEYPAIR_ATTEMPTS: int = 64


def _sieve(n: int = 10000) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Uses the textbook Sieve of Eratosthenes to generate a set of primes up to `n`.
    Includes memory space optimization and sieving until root.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(int(n**0.5) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    return [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]


def get_pre_primes(n: int = _TRIAL_DIVISION_CAP, change: bool = False) -> list[int]:
    """Get the small primes, automatically generating if necessary.

    Uses `_SMALL_PRIMES` as a cache, regenerating it through the sieve if the requested range is greater, the
    regeneration is forced by `change` or the cache is empty.

    Args:
        n: The number up to which to generate primes. Must be >= 0.
        change: Whether to force a recomputation of primes. Defaults to False.

    Returns:
        List of primes in ascending order. All primes at least to `n` or more unless `change` is True.

    Raises:
        ValueError: If `n` is negative.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or change or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(no: int, n: int = _TRIAL_DIVISION_CAP) -> bool:
    """Check the provided `no` against the known small primes.

    Runs a fast pre-check before Miller-Rabin by using modulo division on our known frequent primes.

    Args:
         no: The number to check.
         n: The number up to which to use primes. Passed to `get_pre_primes()`.

    Returns:
        False if `no` cannot be prime, True otherwise.
    """
    if no < 2:
        return False
    for prime in get_pre_primes(n):
        if prime**2 > no:
            return True
        if no % prime == 0:
            return False
    return True


def _miller_rabin(w: int, witnesses) -> bool:
    """Perform the Miller-Rabin primality test against the given witnesses.

    Args:
        w: Odd integer to be tested.
        witnesses: Iterable of bases to test `w` against. Bases divisible by `w` are skipped.

    Returns:
        True if `w` is probably prime, False otherwise.
    """
    if w <= 3:
        return w == 2 or w == 3
    tw = w - 1
    a = (tw & -tw).bit_length() - 1
    m = tw >> a
    for b in witnesses:
        if b % w == 0:
            continue
        z = pow(b, m, w)
        if z == 1 or z == w - 1:
            continue
        for _ in range(1, a):
            z = pow(z, 2, w)
            if z == w - 1:
                break
            if z == 1:
                return False
        else:
            return False
    return True


def _fips_rounds(candidate: int) -> int:
    """Miller-Rabin round count per FIPS 186-5 Appendix C.1."""
    bits = candidate.bit_length()
    if bits <= 512:
        return 40
    if bits <= 1024:
        return 56
    if bits <= 1536:
        return 64
    if bits <= 2048:
        return 70
    return 74


def is_probably_prime(candidate: int, iters: int | None = None, n: int = _TRIAL_DIVISION_CAP, rng=None) -> bool:
    """Composite primality test: trial division by the small primes, followed by Miller-Rabin.

    Numbers below 2 and even numbers other than 2 are rejected before any test runs. Below `_DETERMINISTIC_LIMIT`
    (covering every 64-bit integer) the fixed witness set makes the answer exact. Above it, `iters` random witnesses
    are drawn from `rng`.

    Args:
        candidate: The candidate prime to test.
        iters: Number of random Miller-Rabin rounds for candidates above the deterministic limit.
            If not provided will use defaults as per the FIPS 186-5 Appendix C.1
        n: The number up to which to use small primes for trial division.
        rng: Random source with `randrange`. Defaults to the system random source.

    Returns:
        True if `candidate` is probably prime, False otherwise.
    """
    if candidate < 2:
        return False
    if candidate % 2 == 0:
        return candidate == 2
    if not _trial_division(candidate, n):
        return False
    if candidate < _DETERMINISTIC_LIMIT:
        return _miller_rabin(candidate, _DETERMINISTIC_WITNESSES)
    rng = rng or _SYSTEM_RANDOM
    if iters is None:
        iters = _fips_rounds(candidate)
    return _miller_rabin(candidate, (rng.randrange(2, candidate - 1) for _ in range(iters)))


def generate_prime(bits: int = PRIME_BITS, rng=None) -> int:
    """Generate a prime of exactly `bits` bits by rejection sampling.

    Candidates are drawn uniformly from the odd integers of the closed-open range `[2**(bits-1), 2**bits)`.

    Args:
        bits: Bit length of the prime, in range [2, 32]. Defaults to `PRIME_BITS`.
        rng: Random source with `randrange`. Defaults to the system random source.

    Returns:
        A probable prime p with 2**(bits-1) <= p < 2**bits.

    Raises:
        ValueError: If `bits` is out of range.
        RuntimeError: If generation loops way beyond a reasonable time and a bit.
    """
    if not 2 <= bits <= PRIME_BITS:
        raise ValueError(f"bits must be in range [2, {PRIME_BITS}]")
    rng = rng or _SYSTEM_RANDOM
    low = 1 << (bits - 2)
    rep_cap = bits * _PRIME_ATTEMPTS_PER_BIT
    for _ in range(rep_cap):
        candidate = 2 * rng.randrange(low, low << 1) + 1
        if is_probably_prime(candidate):
            return candidate
    raise RuntimeError(f"Run an improbable {rep_cap} amount of loops with no prime found. Check random number source.")


def generate_keypair(rng=None, bits: int = PRIME_BITS, max_attempts: int = _KEYPAIR_ATTEMPTS) -> tuple[int, int]:
    """Generates the private key of a toy RSA key pair.

    Draws two distinct primes whose totient admits an inverse of `EXP`. On a collision only `q` is redrawn. If
    `EXP` is not invertible modulo the totient both primes are discarded.

    Args:
        rng: Random source with `randrange`. Defaults to the system random source.
        bits: Bit length of each prime, in range [9, 32]. Defaults to `PRIME_BITS`.
        max_attempts: Number of prime draws for `q` before giving up.

    Returns:
        The private key (p, q). The public key is the modulus p * q with exponent `EXP`.

    Raises:
        ValueError: If `bits` is out of range.
        RuntimeError: If no valid pair was found within `max_attempts`.
    """
    if not 9 <= bits <= PRIME_BITS:
        raise ValueError(f"bits must be in range [9, {PRIME_BITS}]")
    p = None
    for _ in range(max_attempts):
        if p is None:
            p = generate_prime(bits, rng)
        q = generate_prime(bits, rng)
        if q == p:
            _log.debug("Prime collision on %d, redrawing q.", p)
            continue
        totient = (p - 1) * (q - 1)
        if totient <= EXP or mod_inverse(EXP, totient) is None:
            _log.debug("Exponent %d not invertible modulo totient of (%d, %d), redrawing both primes.", EXP, p, q)
            p = None
            continue
        return p, q
    raise RuntimeError(f"No valid key pair found in {max_attempts} attempts. Check random number source.")
