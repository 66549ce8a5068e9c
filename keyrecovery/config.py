"""
Recovery configuration.

Defaults match the production guardian set: 20 guardians, any 14 recover.
Every value can be overridden through the environment.
"""

import os
from dataclasses import dataclass

from keyrecovery.errors import InvalidParameters

DEFAULT_THRESHOLD = 14
DEFAULT_NUM_SHARES = 20

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class RecoveryConfig:
    """Threshold parameters shared by split and recover."""
    threshold: int = DEFAULT_THRESHOLD
    num_shares: int = DEFAULT_NUM_SHARES
    authenticated: bool = False  # Require T+1 shares on recovery

    @classmethod
    def from_env(cls, environ: dict | None = None) -> "RecoveryConfig":
        """
        Build a config from KEYRECOVERY_* environment variables.

        Reads KEYRECOVERY_THRESHOLD, KEYRECOVERY_NUM_SHARES and
        KEYRECOVERY_AUTHENTICATED; missing variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        try:
            threshold = int(env.get("KEYRECOVERY_THRESHOLD", DEFAULT_THRESHOLD))
            num_shares = int(env.get("KEYRECOVERY_NUM_SHARES", DEFAULT_NUM_SHARES))
        except ValueError as e:
            raise InvalidParameters(f"invalid threshold setting: {e}") from e
        authenticated = env.get("KEYRECOVERY_AUTHENTICATED", "").lower() in _TRUTHY
        config = cls(threshold=threshold, num_shares=num_shares, authenticated=authenticated)
        config.validate()
        return config

    def validate(self) -> None:
        if self.threshold < 1:
            raise InvalidParameters("threshold t must be at least 1")
        if self.threshold > self.num_shares:
            raise InvalidParameters(
                "threshold t should be less than or equal to number of shares n"
            )
