"""
Guardian share storage.
Each guardian keeps one share; these adapters persist and release it.
"""

from keyrecovery.guardians.base import GuardianStore, GuardianError
from keyrecovery.guardians.local import LocalGuardian
from keyrecovery.guardians.network import distribute, collect

__all__ = [
    "GuardianStore",
    "GuardianError",
    "LocalGuardian",
    "distribute",
    "collect",
]
