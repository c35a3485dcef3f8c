"""RSA key value objects and the four raw keyed operations.

Keys are immutable once built. A public key carries `(e, n)`, a private key carries `d`, a reference to its public
key and, optionally, the factorization of the modulus. No padding is applied anywhere: every operation is a single
modular exponentiation over the caller's integer.

Typical usage example:

    pub = PublicKey(17, 3233)
    priv = PrivateKey.from_primes(2753, 61, 53, pub)
    assert priv.decrypt(pub.encrypt(65)) == 65
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from dataclasses import dataclass
from dataclasses import field
from typing import NamedTuple

from rawrsa import primes


class Factors(NamedTuple):
    """The factorization of a modulus, as known to a freshly generated private key."""
    p: int
    q: int
    phi: int

    @classmethod
    def from_primes(cls, p: int, q: int) -> "Factors":
        """Builds the factorization from the two primes, deriving Euler's totient."""
        p, q = int(p), int(q)
        return cls(p, q, (p - 1) * (q - 1))


@dataclass(frozen=True, slots=True)
class PublicKey:
    """RSA public key.

    Attributes:
        e: The public exponent.
        n: The modulus.

    Raises:
        ValueError: If the modulus is not positive or the exponent is not in `(1, n)`.
    """
    e: int
    n: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "e", int(self.e))
        object.__setattr__(self, "n", int(self.n))
        if self.n <= 0:
            raise ValueError("Modulus (n) must be positive.")
        if not 1 < self.e < self.n:
            raise ValueError("Public exponent (e) must be in range (1, n).")

    @property
    def bit_length(self) -> int:
        """Bit length of the modulus."""
        return self.n.bit_length()

    def encrypt(self, m: int) -> int:
        """Raw RSA encryption, `m^e mod n`.

        Args:
            m: Cleartext representative. Expected in `[0, n)`; anything else is reduced modulo `n`.

        Returns:
            The ciphertext representative.
        """
        return pow(m, self.e, self.n)

    def verify(self, s: int) -> int:
        """Raw RSA verification, `s^e mod n`.

        Recovers the signed representative only. Comparing it against a digest or padding is left to the caller.

        Args:
            s: Signature representative.

        Returns:
            The recovered message representative.
        """
        return pow(s, self.e, self.n)


@dataclass(frozen=True, slots=True)
class PrivateKey:
    """RSA private key.

    The modulus is not stored here; it is read through `public_key`. When `factors` is known, private operations are
    accelerated with the Chinese Remainder Theorem, giving the same results as the plain exponentiation.

    Attributes:
        d: The private exponent.
        public_key: The matching public key.
        factors: The factorization of the modulus, or None if unknown (e.g. a key rebuilt from `d` alone).

    Raises:
        TypeError: If `d` is missing.
        ValueError: If `d` is not positive, or `factors` is not a pair of distinct primes describing the modulus.
    """
    d: int = field(repr=False)
    public_key: PublicKey
    factors: Factors | None = field(default=None, repr=False)
    _crt: tuple[int, int, int] | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.d is None:
            raise TypeError("Private exponent (d) is required.")
        object.__setattr__(self, "d", int(self.d))
        if self.d <= 0:
            raise ValueError("Private exponent (d) must be positive.")
        if self.factors is None:
            return
        p, q, phi = (int(x) for x in self.factors)
        if p <= 1 or q <= 1:
            raise ValueError("Prime factors (p, q) must be strictly greater than 1.")
        if p == q:
            raise ValueError("First prime factor (p) must be different than second prime factor (q).")
        if p * q != self.public_key.n:
            raise ValueError("Modulus (n) is not equal to the product of prime factors (p, q).")
        if phi != (p - 1) * (q - 1):
            raise ValueError("Totient (phi) is not equal to (p - 1) * (q - 1).")
        if not (primes.check_prime(p) and primes.check_prime(q)):
            raise ValueError("Prime factors (p, q) must be prime.")
        object.__setattr__(self, "factors", Factors(p, q, phi))
        d_p, d_q = self.d % (p - 1), self.d % (q - 1)
        # A zero reduced exponent breaks the Fermat shortcut; keep the plain path then.
        if d_p and d_q:
            object.__setattr__(self, "_crt", (d_p, d_q, pow(q, -1, p)))

    @classmethod
    def from_primes(cls, d: int, p: int, q: int, public_key: PublicKey) -> "PrivateKey":
        """Builds a private key whose factorization is known."""
        return cls(d, public_key, Factors.from_primes(p, q))

    @property
    def n(self) -> int:
        """The modulus shared with the public key."""
        return self.public_key.n

    @property
    def bit_length(self) -> int:
        """Bit length of the modulus."""
        return self.public_key.n.bit_length()

    def _exp(self, c: int) -> int:
        if self._crt is None:
            return pow(c, self.d, self.public_key.n)
        p, q, _ = self.factors
        d_p, d_q, q_inv = self._crt
        m_1 = pow(c, d_p, p)
        m_2 = pow(c, d_q, q)
        h = ((m_1 - m_2) * q_inv) % p
        return m_2 + q * h

    def sign(self, m: int) -> int:
        """Raw RSA signature, `m^d mod n`.

        Args:
            m: Message representative, expected in `[0, n)`.

        Returns:
            The signature representative.
        """
        return self._exp(m)

    def decrypt(self, c: int) -> int:
        """Raw RSA decryption, `c^d mod n`.

        Args:
            c: Ciphertext representative, expected in `[0, n)`.

        Returns:
            The cleartext representative.
        """
        return self._exp(c)


class KeyPair(NamedTuple):
    """A freshly generated public key and its private key."""
    public_key: PublicKey
    private_key: PrivateKey
