"""Key generation: samples prime pairs until they form a valid RSA modulus, then derives the private exponent.

The first prime is drawn one bit longer than the second so the product lands on the requested bit length in most
rounds. Every round that fails a check throws both primes away and starts over.

Typical usage example:

    pub, priv = generate_random_keys(2048)
    pub, priv = await generate_random_keys_async(2048)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import asyncio
import inspect
import logging
import math
from typing import Awaitable, Callable, Iterator

from rawrsa import primes
from rawrsa.keys import Factors
from rawrsa.keys import KeyPair
from rawrsa.keys import PrivateKey
from rawrsa.keys import PublicKey

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT: int = 65537

PrimeSource = Callable[[int], int]
AsyncPrimeSource = Callable[[int], int | Awaitable[int]]


def _check_arguments(bit_length: int, max_rounds: int | None) -> None:
    if bit_length < PUBLIC_EXPONENT.bit_length():
        raise ValueError(f"Bit length must be at least {PUBLIC_EXPONENT.bit_length()} to exceed the public exponent.")
    if max_rounds is not None and max_rounds < 1:
        raise ValueError("max_rounds must be a positive integer or None.")


class _Rounds:
    """Round bookkeeping shared by the blocking and async generators.

    Iterating yields the prime sizes to sample for each round and raises `RuntimeError` once `max_rounds` is spent.
    `settle` judges a sampled pair and returns the key pair when the round is usable.
    """

    def __init__(self, bit_length: int, max_rounds: int | None) -> None:
        _check_arguments(bit_length, max_rounds)
        self.bit_length = bit_length
        self.max_rounds = max_rounds
        self.count = 0

    def __iter__(self) -> Iterator[tuple[int, int]]:
        while self.max_rounds is None or self.count < self.max_rounds:
            self.count += 1
            yield self.bit_length // 2 + 1, self.bit_length // 2
        raise RuntimeError(f"No valid {self.bit_length}-bit key pair found in {self.max_rounds} rounds.")

    def settle(self, p: int, q: int) -> KeyPair | None:
        n = p * q
        phi = (p - 1) * (q - 1)
        failed = []
        if p == q:
            failed.append("p == q")
        if n.bit_length() != self.bit_length:
            failed.append(f"modulus has {n.bit_length()} bits")
        if math.gcd(phi, PUBLIC_EXPONENT) != 1:
            failed.append("e not invertible mod phi")
        if failed:
            logger.debug("Round %d rejected: %s", self.count, ", ".join(failed))
            return None
        logger.info("Generated %d-bit key pair in %d round(s)", self.bit_length, self.count)
        d = pow(PUBLIC_EXPONENT, -1, phi)
        public_key = PublicKey(PUBLIC_EXPONENT, n)
        private_key = PrivateKey(d, public_key, Factors(p, q, phi))
        return KeyPair(public_key, private_key)


def generate_random_keys(bit_length: int = 2048,
                         prime_source: PrimeSource | None = None,
                         max_rounds: int | None = None) -> KeyPair:
    """Generates an RSA key pair with public exponent 65537.

    Args:
        bit_length: Exact bit length of the modulus. Defaults to 2048.
        prime_source: Callable returning a probable prime of the requested bit length.
            Defaults to `rawrsa.primes.probable_prime`.
        max_rounds: Upper bound on sampling rounds. Defaults to None, retrying until a valid pair is found.

    Returns:
        A KeyPair of (public key, private key).

    Raises:
        ValueError: If `bit_length` is below 17 or `max_rounds` is not positive.
        RuntimeError: If `max_rounds` rounds all failed.
    """
    rounds = _Rounds(bit_length, max_rounds)
    if prime_source is None:
        prime_source = primes.probable_prime
    for p_bits, q_bits in rounds:
        pair = rounds.settle(prime_source(p_bits), prime_source(q_bits))
        if pair is not None:
            return pair


async def _sample(prime_source: AsyncPrimeSource, bits: int) -> int:
    if inspect.iscoroutinefunction(prime_source):
        result = prime_source(bits)
    else:
        result = await asyncio.to_thread(prime_source, bits)
    # Callable objects and partials may still hand back a coroutine.
    if inspect.isawaitable(result):
        result = await result
    return result


async def generate_random_keys_async(bit_length: int = 2048,
                                     prime_source: AsyncPrimeSource | None = None,
                                     max_rounds: int | None = None) -> KeyPair:
    """Generates an RSA key pair without blocking the running event loop.

    Same algorithm and arguments as `generate_random_keys`. Prime sampling is the only suspension point: coroutine
    functions are awaited directly, other callables run in a worker thread and any awaitable they return is awaited.
    Cancelling the task between samples leaves no key behind.

    Returns:
        A KeyPair of (public key, private key).
    """
    rounds = _Rounds(bit_length, max_rounds)
    if prime_source is None:
        prime_source = primes.probable_prime
    for p_bits, q_bits in rounds:
        p = await _sample(prime_source, p_bits)
        q = await _sample(prime_source, q_bits)
        pair = rounds.settle(p, q)
        if pair is not None:
            return pair
