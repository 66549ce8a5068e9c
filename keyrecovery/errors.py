"""
Errors raised by split and recovery.

Every error is terminal for the call that raised it. A caller that catches
any KeyRecoveryError must treat it as "no trustworthy key material was
produced".
"""


class KeyRecoveryError(Exception):
    """Base class for all key recovery errors."""


class InvalidParameters(KeyRecoveryError, ValueError):
    """Threshold / share count relationship is invalid."""


class DecodeError(KeyRecoveryError, ValueError):
    """A scalar is not in canonical encoding or is out of range."""


class SharesBelowThreshold(KeyRecoveryError):
    """Fewer shares were supplied than the threshold requires."""

    def __init__(self, have: int, need: int):
        self.have = have
        self.need = need
        super().__init__(
            f"number of shares less than threshold, have={have} < need={need}"
        )


class DuplicatePointInShares(KeyRecoveryError):
    """Two shares carry the same evaluation point (possible tampering)."""

    def __init__(self, point: str, index: int, first_index: int | None = None):
        self.point = point
        self.index = index
        self.first_index = first_index
        super().__init__(
            f"possible tampering, point 0x{point} (at index {index}) "
            f"appears more than once"
        )


class TamperDetected(KeyRecoveryError):
    """Independent interpolations over the supplied shares disagree."""

    def __init__(self):
        super().__init__("tampering detected, keys do not match")
