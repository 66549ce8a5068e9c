"""
Local guardian store.
Keeps one share on disk, encrypted under the guardian's passphrase.

File layout of share-<id>.enc:
    salt (16) || nonce (12) || AES-256-GCM ciphertext

The encryption key is derived from the passphrase with PBKDF2-HMAC-SHA256.
The guardian id is bound in as associated data, so a share file copied to
another guardian's slot fails to decrypt.
"""

import json
import logging
import os
import time
from pathlib import Path

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from keyrecovery.errors import DecodeError
from keyrecovery.guardians.base import GuardianError, GuardianStore
from keyrecovery.share import Share

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 600_000  # OWASP recommended minimum
SALT_SIZE = 16
NONCE_SIZE = 12
KEY_SIZE = 32
TAG_SIZE = 16  # AES-GCM authentication tag


def derive_share_key(passphrase: str, salt: bytes, iterations: int = PBKDF2_ITERATIONS) -> bytes:
    """Derive the share encryption key from a guardian passphrase."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(passphrase.encode("utf-8"))


class LocalGuardian(GuardianStore):
    """
    A guardian whose share lives in a local directory.

    Args:
        storage_dir: Directory holding the encrypted share and its metadata.
        passphrase: The guardian's passphrase.
        guardian_id: Name used for file names and as associated data.
        iterations: PBKDF2 iteration count.
    """

    def __init__(
        self,
        storage_dir: str | Path,
        passphrase: str,
        guardian_id: str,
        iterations: int = PBKDF2_ITERATIONS,
    ):
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self.guardian_id = guardian_id
        self.iterations = iterations
        self._passphrase = passphrase

    @property
    def _share_file(self) -> Path:
        return self.storage_dir / f"share-{self.guardian_id}.enc"

    @property
    def _meta_file(self) -> Path:
        return self.storage_dir / f"share-{self.guardian_id}.meta.json"

    def store_share(self, share: Share) -> dict:
        """Encrypt and write the share, replacing any previous one."""
        salt = os.urandom(SALT_SIZE)
        nonce = os.urandom(NONCE_SIZE)
        key = derive_share_key(self._passphrase, salt, self.iterations)
        ciphertext = AESGCM(key).encrypt(
            nonce, share.to_hex().encode(), self.guardian_id.encode()
        )
        self._share_file.write_bytes(salt + nonce + ciphertext)

        meta = {
            "guardian_id": self.guardian_id,
            "point": share.point,
            "stored_at": int(time.time()),
            "encrypted": True,
        }
        self._meta_file.write_text(json.dumps(meta, indent=2))
        logger.info("guardian %s stored share at point 0x%s", self.guardian_id, share.point)

        return {
            "guardian_id": self.guardian_id,
            "location": str(self._share_file),
            "point": share.point,
            "success": True,
        }

    def load_share(self) -> Share:
        """Read and decrypt the share."""
        if not self._share_file.exists():
            raise GuardianError(f"guardian {self.guardian_id} holds no share")

        blob = self._share_file.read_bytes()
        if len(blob) < SALT_SIZE + NONCE_SIZE + TAG_SIZE:
            raise GuardianError(f"guardian {self.guardian_id}: share file is truncated")
        salt = blob[:SALT_SIZE]
        nonce = blob[SALT_SIZE:SALT_SIZE + NONCE_SIZE]
        ciphertext = blob[SALT_SIZE + NONCE_SIZE:]

        key = derive_share_key(self._passphrase, salt, self.iterations)
        try:
            plaintext = AESGCM(key).decrypt(nonce, ciphertext, self.guardian_id.encode())
        except InvalidTag as e:
            raise GuardianError(
                f"guardian {self.guardian_id}: wrong passphrase or corrupted share"
            ) from e

        try:
            share = Share.from_hex(plaintext.decode())
        except (UnicodeDecodeError, DecodeError) as e:
            raise GuardianError(f"guardian {self.guardian_id}: malformed share") from e
        logger.debug("guardian %s released share at point 0x%s", self.guardian_id, share.point)
        return share

    def is_available(self) -> bool:
        return self._share_file.exists()

    def get_info(self) -> dict:
        info = {
            "guardian_id": self.guardian_id,
            "storage_dir": str(self.storage_dir),
            "has_share": self._share_file.exists(),
        }

        if self._meta_file.exists():
            meta = json.loads(self._meta_file.read_text())
            info["point"] = meta.get("point")
            info["stored_at"] = meta.get("stored_at")

        return info
