"""Default prime source used by key generation.

Samples probable primes of an exact bit length. Candidates are drawn from the `secrets` CSPRNG, screened by trial
division against a fixed table of small primes and then confirmed with a Miller-Rabin test.

Typical usage example:

    p = probable_prime(1025)
    check_prime(p)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import secrets

logger = logging.getLogger(__name__)

_TRIAL_BOUND: int = 2000
_DRAWS_PER_BIT: int = 5
# (largest candidate size in bits, Miller-Rabin rounds); larger candidates use _MAX_ROUNDS.
_ROUNDS_BY_SIZE: tuple[tuple[int, int], ...] = ((512, 40), (1024, 56), (1536, 64), (2048, 70))
_MAX_ROUNDS: int = 74


def _odd_primes_below(bound: int) -> tuple[int, ...]:
    """Sieve of Eratosthenes over the odd numbers below `bound`. Index `i` stands for `2 * i + 1`."""
    flags = bytearray([1]) * (bound // 2)
    if flags:
        flags[0] = 0
    for i in range(1, (math.isqrt(bound) + 1) // 2):
        if flags[i]:
            step = 2 * i + 1
            start = step * step // 2
            flags[start::step] = bytes(len(range(start, len(flags), step)))
    return tuple(2 * i + 1 for i, flag in enumerate(flags) if flag)


_SMALL_PRIMES: tuple[int, ...] = (2,) + _odd_primes_below(_TRIAL_BOUND)


def _rounds_for(size: int) -> int:
    return next((rounds for limit, rounds in _ROUNDS_BY_SIZE if size <= limit), _MAX_ROUNDS)


def _is_strong_probable_prime(w: int, base: int) -> bool:
    """Single Miller-Rabin round: whether odd `w > 3` passes for `base`."""
    tw = w - 1
    s = (tw & -tw).bit_length() - 1
    z = pow(base, tw >> s, w)
    if z in (1, tw):
        return True
    for _ in range(s - 1):
        z = z * z % w
        if z == tw:
            return True
    return False


def check_prime(candidate: int, iters: int | None = None) -> bool:
    """Composite primality test: trial division first, Miller-Rabin second.

    Candidates below the square of the trial bound are decided exactly by the trial division.

    Args:
        candidate: The candidate prime to test.
        iters: Number of Miller-Rabin rounds. Scaled to the size of `candidate` when omitted.

    Returns:
        True if `candidate` is probably prime, False otherwise.
    """
    if candidate < 2:
        return False
    for prime in _SMALL_PRIMES:
        if candidate % prime == 0:
            return candidate == prime
    if candidate < _TRIAL_BOUND**2:
        return True
    if iters is None:
        iters = _rounds_for(candidate.bit_length())
    return all(_is_strong_probable_prime(candidate, secrets.randbelow(candidate - 3) + 2) for _ in range(iters))


def probable_prime(bits: int) -> int:
    """Sample a probable prime with exactly `bits` significant bits.

    Args:
        bits: Bit length of the prime. Must be >= 2.

    Returns:
        A probable prime `p` with `p.bit_length() == bits`.

    Raises:
        ValueError: If `bits` is below 2.
        RuntimeError: If no prime turned up within `bits * 5` draws.
    """
    if bits < 2:
        raise ValueError("A prime needs at least 2 bits.")
    # Top bit pins the length, bottom bit rules out even candidates.
    msk = (1 << (bits - 1)) | 1
    for draw in range(1, bits * _DRAWS_PER_BIT + 1):
        candidate = secrets.randbits(bits) | msk
        if check_prime(candidate):
            logger.debug("Found %d-bit prime after %d draw(s)", bits, draw)
            return candidate
    raise RuntimeError(
        f"Ran an improbable {bits * _DRAWS_PER_BIT} draws with no {bits}-bit prime found. "
        "Check system random number generator.")
