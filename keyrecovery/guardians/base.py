"""
Base class for guardian share stores.
Every place a guardian keeps its share implements this interface.
"""

from abc import ABC, abstractmethod

from keyrecovery.errors import KeyRecoveryError
from keyrecovery.share import Share


class GuardianError(KeyRecoveryError):
    """A guardian could not store or release its share."""


class GuardianStore(ABC):
    """Abstract base class for a guardian's share storage."""

    guardian_id: str

    @abstractmethod
    def store_share(self, share: Share) -> dict:
        """
        Persist this guardian's share.

        Args:
            share: The share to keep.

        Returns:
            Storage receipt (location, point, etc.)
        """

    @abstractmethod
    def load_share(self) -> Share:
        """
        Release the stored share.

        Raises:
            GuardianError: If the share is missing or cannot be decrypted.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this guardian currently holds a share."""

    @abstractmethod
    def get_info(self) -> dict:
        """Get metadata about this guardian (id, location, status)."""
