"""
Reconstruct a (spending, viewing) key pair from guardian shares.

Recovery runs in three stages: validate the share set, decode the shares
into field points, then interpolate at x=0 in each field.

When more than T distinct shares are given, the keys are interpolated twice,
from the first T and from the last T points, and must agree. A single
corrupted share among them is then detected instead of silently producing a
wrong key. With exactly T shares there is nothing to cross-check against, so
a corrupted share yields a wrong key without error. Pass authenticated=True
to refuse recovery unless the cross-check can run.
"""

from dataclasses import dataclass

from keyrecovery.errors import (
    DecodeError,
    DuplicatePointInShares,
    InvalidParameters,
    KeyRecoveryError,
    SharesBelowThreshold,
    TamperDetected,
)
from keyrecovery.field import SECP256K1_FR, BN254_FR
from keyrecovery.polynomial import interpolate_at_zero
from keyrecovery.share import Share


@dataclass(frozen=True)
class Point:
    """A share decoded into field elements, one coordinate pair per field."""
    x_spending: int
    x_viewing: int
    y_spending: int
    y_viewing: int

    @classmethod
    def from_share(cls, share: Share) -> "Point":
        """
        Decode a share.

        Raises:
            DecodeError: If any field is malformed, or the point is zero.
                Split never hands out x=0, and a share there would alone
                determine f(0).
        """
        point = cls(
            x_spending=SECP256K1_FR.decode(share.point),
            x_viewing=BN254_FR.decode(share.point),
            y_spending=SECP256K1_FR.decode(share.spending_eval),
            y_viewing=BN254_FR.decode(share.viewing_eval),
        )
        if SECP256K1_FR.equals(point.x_spending, SECP256K1_FR.zero()):
            raise DecodeError("share point must not be zero")
        return point


def validate_shares(threshold: int, shares: list[Share]) -> list[str]:
    """
    Check share count and point uniqueness.

    Returns:
        The distinct points, in input order.

    Raises:
        InvalidParameters: If threshold is below 1.
        SharesBelowThreshold: If fewer than threshold shares are given.
        DuplicatePointInShares: If two shares carry the same point.
    """
    if threshold < 1:
        raise InvalidParameters("threshold t must be at least 1")
    if len(shares) < threshold:
        raise SharesBelowThreshold(have=len(shares), need=threshold)

    seen = {}
    for index, share in enumerate(shares):
        if share.point in seen:
            raise DuplicatePointInShares(
                point=share.point, index=index, first_index=seen[share.point]
            )
        seen[share.point] = index
    return list(seen)


def extract_points(shares: list[Share], max_points: int | None = None) -> list[Point]:
    """
    Decode up to max_points shares (all by default) into points.

    Shares whose point was already seen are skipped, keeping the first.

    Raises:
        SharesBelowThreshold: If no shares are given.
        DecodeError: If any share is not canonically encoded.
    """
    if not shares:
        raise SharesBelowThreshold(have=0, need=1)
    if max_points is None:
        max_points = len(shares)

    points = []
    seen = set()
    for share in shares:
        if len(points) >= max_points:
            break
        point = Point.from_share(share)
        if point.x_spending in seen:
            continue
        seen.add(point.x_spending)
        points.append(point)
    return points


def recover_from_points(points: list[Point]) -> tuple[str, str]:
    """Interpolate both keys at x=0 from exactly the given points."""
    spending = interpolate_at_zero(
        SECP256K1_FR,
        [p.x_spending for p in points],
        [p.y_spending for p in points],
    )
    viewing = interpolate_at_zero(
        BN254_FR,
        [p.x_viewing for p in points],
        [p.y_viewing for p in points],
    )
    return SECP256K1_FR.encode(spending), BN254_FR.encode(viewing)


def recover(
    threshold: int,
    shares: list[Share],
    *,
    authenticated: bool = False,
) -> tuple[str, str]:
    """
    Reconstruct the key pair from T or more shares.

    Args:
        threshold: The T used when splitting.
        shares: At least T shares with pairwise distinct points.
        authenticated: Require at least T+1 shares so the tamper cross-check
            always runs.

    Returns:
        (spending_key, viewing_key) as canonical hex strings.

    Raises:
        SharesBelowThreshold: Not enough shares.
        DuplicatePointInShares: Two shares share a point.
        DecodeError: A share is malformed.
        TamperDetected: The two interpolations disagree.
    """
    validate_shares(threshold, shares)
    if authenticated and len(shares) <= threshold:
        raise SharesBelowThreshold(have=len(shares), need=threshold + 1)

    points = extract_points(shares)

    spending, viewing = recover_from_points(points[:threshold])
    if len(points) == threshold:
        return spending, viewing

    spending_check, viewing_check = recover_from_points(points[-threshold:])
    if spending != spending_check or viewing != viewing_check:
        raise TamperDetected()

    return spending, viewing


def verify_shares(
    shares: list[Share],
    spending_key: str,
    viewing_key: str,
    threshold: int | None = None,
) -> bool:
    """Check that a set of shares reconstructs the given key pair."""
    if threshold is None:
        threshold = len(shares)
    try:
        return recover(threshold, shares) == (spending_key, viewing_key)
    except KeyRecoveryError:
        return False
