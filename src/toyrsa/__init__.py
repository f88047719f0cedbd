"""Toy RSA primitives in an Academic Sense.

Provides two-prime key generation with 32-bit primes, overflow-safe 64-bit modular arithmetic and textbook RSA
encryption and decryption of 32-bit messages. Keys this small are trivially factored: never use them for anything.

Typical usage example:

    p, q = generate_keypair()
    c = encrypt(p * q, 42)
    r = decrypt((p, q), c)
    pk = RSAPrivKey.generate()
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from toyrsa.keygen import EXP
from toyrsa.keygen import generate_keypair
from toyrsa.keygen import generate_prime
from toyrsa.keygen import get_pre_primes
from toyrsa.keygen import is_probably_prime
from toyrsa.keygen import PRIME_BITS
from toyrsa.modular import eea
from toyrsa.modular import mod_exp
from toyrsa.modular import mod_inverse
from toyrsa.modular import mod_mul
from toyrsa.rsa import decrypt
from toyrsa.rsa import encrypt
from toyrsa.rsa import private_exponent
from toyrsa.rsa import RSAKey
from toyrsa.rsa import RSAPrivKey
from toyrsa.rsa import RSAPubKey

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.0.1"
__all__ = [
    "EXP",
    "PRIME_BITS",
    "RSAKey",
    "RSAPrivKey",
    "RSAPubKey",
    "decrypt",
    "eea",
    "encrypt",
    "generate_keypair",
    "generate_prime",
    "get_pre_primes",
    "is_probably_prime",
    "mod_exp",
    "mod_inverse",
    "mod_mul",
    "private_exponent",
]
