"""
Hand shares out to a set of guardians and gather them back.

Guardians are independent: one that is missing its share or rejects its
passphrase is skipped, and recovery proceeds with whoever answers. Whether
enough shares came back is for recover() to decide.
"""

import logging

from keyrecovery.guardians.base import GuardianError, GuardianStore
from keyrecovery.share import Share

logger = logging.getLogger(__name__)


def distribute(shares: list[Share], guardians: list[GuardianStore]) -> dict:
    """
    Give share i to guardian i.

    Args:
        shares: Output of split().
        guardians: One store per share, in the same order.

    Returns:
        Distribution report.

    Raises:
        ValueError: If the number of guardians and shares differ.
    """
    if len(shares) != len(guardians):
        raise ValueError(
            f"got {len(shares)} shares for {len(guardians)} guardians"
        )

    report = {"total_shares": len(shares), "guardians": []}
    for share, guardian in zip(shares, guardians):
        entry = {"guardian_id": guardian.guardian_id, "point": share.point, "distributed": False}
        try:
            entry.update(guardian.store_share(share))
            entry["distributed"] = True
        except (GuardianError, OSError) as e:
            logger.warning("could not store share with guardian %s: %s", guardian.guardian_id, e)
            entry["error"] = str(e)
        report["guardians"].append(entry)

    stored = sum(1 for g in report["guardians"] if g["distributed"])
    logger.info("distributed %d of %d shares", stored, len(shares))
    return report


def collect(guardians: list[GuardianStore], limit: int | None = None) -> list[Share]:
    """
    Gather shares from the guardians that can release one.

    Args:
        guardians: Guardians to ask, in order.
        limit: Stop once this many shares are collected (all by default).

    Returns:
        The collected shares, in guardian order.
    """
    collected = []
    for guardian in guardians:
        if limit is not None and len(collected) >= limit:
            break
        if not guardian.is_available():
            logger.warning("guardian %s has no share", guardian.guardian_id)
            continue
        try:
            collected.append(guardian.load_share())
        except (GuardianError, OSError) as e:
            logger.warning("guardian %s failed to release its share: %s", guardian.guardian_id, e)

    logger.info("collected %d shares from %d guardians", len(collected), len(guardians))
    return collected
