"""Provides the textbook RSA transforms over 32-bit plaintexts and 64-bit moduli.

Handles the key objects as well as the module-level `encrypt`/`decrypt` pair operating on bare integers. The private
exponent is never stored: it is recovered from the primes every time it is needed.

Typical usage example:

    pk = RSAPrivKey.generate()
    c = pk.pub.encrypt(42)
    r = pk.decrypt(c)

    p, q = generate_keypair()
    c = encrypt(p * q, 42)
    r = decrypt((p, q), c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import warnings

from toyrsa import keygen
from toyrsa.keygen import EXP
from toyrsa.modular import mod_exp
from toyrsa.modular import mod_inverse
from toyrsa.modular import U64_MAX

U32_MAX: int = 2**32 - 1


def private_exponent(p: int, q: int) -> int:
    """Recovers the private exponent of the key (p, q).

    Args:
        p: Private Prime 1.
        q: Private Prime 2.

    Returns:
        d such that EXP * d = 1 (mod (p - 1)(q - 1)).

    Raises:
        RuntimeError: If `EXP` has no inverse modulo the totient. Never the case for a generated key.
    """
    d = mod_inverse(EXP, (p - 1) * (q - 1))
    if d is None:
        raise RuntimeError(f"Public exponent {EXP} is not invertible modulo the totient of ({p}, {q}).")
    return d


class RSAKey:
    """The overall RSA key class implementation.

    Holds the modulus shared by both halves of a key pair. Subclasses provide the exponent.

    Attributes:
        mod: The modulus of the keypair.
    """

    expo: int

    def __init__(self, mod: int) -> None:
        if not 1 < mod <= U64_MAX:
            raise ValueError("Modulus must be in range [2, 2**64 - 1]")
        self.mod = mod

    def c_rsa(self, message: int) -> int:
        """Performs core RSA operation. (Encrypt/Decrypt)

        Args:
            message: The integer to transform.

        Returns:
            message**expo mod mod

        Raises:
            ValueError: If the message is out of range for the current key.
        """
        if not 0 <= message < self.mod:
            raise ValueError("Message representative must be in range [0, mod-1]")
        return mod_exp(message, self.expo, self.mod)


class RSAPubKey(RSAKey):
    """A rather straightforward subclass of RSAKey, for Public Keys.

    A Public Key consists solely of the modulus, the exponent is the process-wide `EXP`.
    """

    expo = EXP

    def encrypt(self, message: int) -> int:
        """Use the public key to encrypt the message.

        Args:
            message: The 32-bit plaintext. Must also be below the modulus.

        Returns:
            The ciphertext.

        Raises:
            ValueError: If the message is not a 32-bit integer or not below the modulus.
        """
        if not 0 <= message <= U32_MAX:
            raise ValueError("Message must be in range [0, 2**32 - 1]")
        if message in (0, 1):
            warnings.warn(f"Message {message} is a fixed point of RSA and is encrypted to itself.", RuntimeWarning)
        return self.c_rsa(message)


class RSAPrivKey(RSAKey):
    """RSA Private Key class implementation.

    The key is the pair of primes. The private exponent is derived on access and never kept on the instance.

    Attributes:
        mod: The modulus of the keypair.
        pub: The public key of the key.
        p: Private Prime 1.
        q: Private Prime 2.
    """

    def __init__(self, p: int, q: int) -> None:
        """Initialize the RSA Private Key.

        Args:
            p: The private prime 1.
            q: The private prime 2.

        Raises:
            ValueError: If the primes are not two distinct 32-bit primes.
        """
        for prime in (p, q):
            if not 2 <= prime <= U32_MAX:
                raise ValueError("Primes must be in range [2, 2**32 - 1]")
            if not keygen.is_probably_prime(prime):
                raise ValueError(f"{prime} is not prime")
        if p == q:
            raise ValueError("Primes must be distinct")
        super().__init__(p * q)
        self.p = p
        self.q = q
        self.pub: RSAPubKey = RSAPubKey(self.mod)

    @property
    def expo(self) -> int:
        return private_exponent(self.p, self.q)

    def decrypt(self, ciphertext: int) -> int:
        """Decrypts the ciphertext using the private key.

        Args:
            ciphertext: The ciphertext, below the modulus.

        Returns:
            The 32-bit plaintext.

        Raises:
            ValueError: If the ciphertext is out of range for the current key.
            RuntimeError: If the key has no private exponent or the result does not fit in 32 bits.
        """
        message = self.c_rsa(ciphertext)
        if message > U32_MAX:
            raise RuntimeError("Decrypted message does not fit in 32 bits.")
        return message

    @classmethod
    def generate(cls, rng=None) -> "RSAPrivKey":
        """Generates an RSA Private Key, and it's respective Public Key.

        Args:
            rng: Random source with `randrange`. Defaults to the system random source.

        Returns:
            A new generated RSA Private Key.
        """
        p, q = keygen.generate_keypair(rng)
        return cls(p, q)


def encrypt(modulus: int, message: int) -> int:
    """Encrypts a 32-bit message under the public modulus with exponent `EXP`."""
    return RSAPubKey(modulus).encrypt(message)


def decrypt(key: tuple[int, int], ciphertext: int) -> int:
    """Decrypts a ciphertext with the private key (p, q)."""
    return RSAPrivKey(*key).decrypt(ciphertext)
