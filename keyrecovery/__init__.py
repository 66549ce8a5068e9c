"""
keyrecovery: Threshold Recovery for Spending and Viewing Keys
Split a key pair across N guardians so that any T of them can restore it.

The spending key is a secp256k1 scalar and the viewing key a BN254 scalar.
Both are shared with the same evaluation points, so each guardian holds one
Share carrying an evaluation of each key's polynomial.

Usage:
    from keyrecovery import split, recover
    shares = split(14, 20, spending_key, viewing_key)
    spending_key, viewing_key = recover(14, shares[:15])
"""

from keyrecovery.errors import (
    KeyRecoveryError,
    InvalidParameters,
    DecodeError,
    SharesBelowThreshold,
    DuplicatePointInShares,
    TamperDetected,
)
from keyrecovery.field import PrimeField, SECP256K1_FR, BN254_FR, random_keys
from keyrecovery.share import Share
from keyrecovery.split import split
from keyrecovery.recover import recover, validate_shares, verify_shares
from keyrecovery.config import RecoveryConfig, DEFAULT_THRESHOLD, DEFAULT_NUM_SHARES

__version__ = "0.1.0"
__all__ = [
    "split",
    "recover",
    "validate_shares",
    "verify_shares",
    "Share",
    "PrimeField",
    "SECP256K1_FR",
    "BN254_FR",
    "random_keys",
    "RecoveryConfig",
    "DEFAULT_THRESHOLD",
    "DEFAULT_NUM_SHARES",
    "KeyRecoveryError",
    "InvalidParameters",
    "DecodeError",
    "SharesBelowThreshold",
    "DuplicatePointInShares",
    "TamperDetected",
]
