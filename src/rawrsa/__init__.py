"""Textbook RSA: key generation and the four raw keyed operations.

Provides random RSA key pair generation over an exact-size modulus, and raw (unpadded) encryption, decryption,
signing and verification over integers. Prime sampling is pluggable; a Miller-Rabin based source ships as default.

Typical usage example:

    pub, priv = generate_random_keys(2048)
    c = pub.encrypt(42)
    m = priv.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rawrsa.keygen import generate_random_keys
from rawrsa.keygen import generate_random_keys_async
from rawrsa.keygen import PUBLIC_EXPONENT
from rawrsa.keys import Factors
from rawrsa.keys import KeyPair
from rawrsa.keys import PrivateKey
from rawrsa.keys import PublicKey
from rawrsa.primes import check_prime
from rawrsa.primes import probable_prime

__version__ = "0.1.0"
__all__ = [
    "PUBLIC_EXPONENT",
    "Factors",
    "KeyPair",
    "PrivateKey",
    "PublicKey",
    "generate_random_keys",
    "generate_random_keys_async",
    "probable_prime",
    "check_prime",
]
