"""
Prime Fields
Scalar-field arithmetic for the two secrets.

The spending key lives in the secp256k1 scalar field and the viewing key in
the BN254 scalar field. The two fields are unrelated; keeping the secrets in
different fields gives domain separation between them.

Elements are plain Python ints in [0, modulus). The only wire format is the
canonical one: lowercase hexadecimal, no "0x" prefix, no leading zeros.
"""

import re
import secrets
from dataclasses import dataclass

from keyrecovery.errors import DecodeError

# Order of the secp256k1 group (spending keys)
SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# Order of the BN254 (alt_bn128) group (viewing keys)
BN254_ORDER = 0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001

_CANONICAL_HEX = re.compile(r"0|[1-9a-f][0-9a-f]*")


@dataclass(frozen=True)
class PrimeField:
    """A prime-order scalar field, GF(modulus)."""
    name: str
    modulus: int

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def from_int(self, n: int) -> int:
        """Embed a small non-negative integer into the field."""
        if n < 0 or n >= self.modulus:
            raise ValueError(f"{n} is out of range for {self.name}")
        return n

    def random(self) -> int:
        """Uniformly random element from the OS CSPRNG."""
        return secrets.randbelow(self.modulus)

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.modulus

    def sub(self, a: int, b: int) -> int:
        return (a - b) % self.modulus

    def mul(self, a: int, b: int) -> int:
        return (a * b) % self.modulus

    def inverse(self, a: int) -> int:
        """Modular multiplicative inverse using Fermat's little theorem."""
        if a % self.modulus == 0:
            raise ZeroDivisionError(f"zero has no inverse in {self.name}")
        return pow(a, self.modulus - 2, self.modulus)

    def div(self, a: int, b: int) -> int:
        return self.mul(a, self.inverse(b))

    def equals(self, a: int, b: int) -> bool:
        return a % self.modulus == b % self.modulus

    def encode(self, element: int) -> str:
        """Canonical string form: lowercase hex, no prefix, no leading zeros."""
        return format(element % self.modulus, "x")

    def decode(self, text: str) -> int:
        """
        Parse a canonical string back into a field element.

        Raises:
            DecodeError: If the string is not canonical or the value is not
                below the field modulus.
        """
        if not isinstance(text, str) or not _CANONICAL_HEX.fullmatch(text):
            raise DecodeError(f"not a canonical hex scalar: {text!r}")
        value = int(text, 16)
        if value >= self.modulus:
            raise DecodeError(f"scalar 0x{text} out of range for {self.name}")
        return value


SECP256K1_FR = PrimeField("secp256k1-fr", SECP256K1_ORDER)
BN254_FR = PrimeField("bn254-fr", BN254_ORDER)


def random_keys() -> tuple[str, str]:
    """Generate a random (spending, viewing) key pair in canonical form."""
    return (
        SECP256K1_FR.encode(SECP256K1_FR.random()),
        BN254_FR.encode(BN254_FR.random()),
    )
