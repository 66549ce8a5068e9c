"""
Tests for splitting and recovering spending/viewing key pairs.
"""

import itertools
import sys
from dataclasses import replace
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from keyrecovery import (
    split,
    recover,
    validate_shares,
    verify_shares,
    random_keys,
    Share,
    SECP256K1_FR,
    BN254_FR,
    InvalidParameters,
    DecodeError,
    SharesBelowThreshold,
    DuplicatePointInShares,
    TamperDetected,
)
from keyrecovery.recover import extract_points, recover_from_points, Point


N = 20
THRESHOLD = 14


def setup_random_shares(n=N, threshold=THRESHOLD):
    spending, viewing = random_keys()
    shares = split(threshold, n, spending, viewing)
    return shares, spending, viewing


def double_evals(share: Share) -> Share:
    """Corrupt a share's evaluations, keeping its point."""
    return replace(
        share,
        spending_eval=SECP256K1_FR.encode(SECP256K1_FR.mul(SECP256K1_FR.decode(share.spending_eval), 2)),
        viewing_eval=BN254_FR.encode(BN254_FR.mul(BN254_FR.decode(share.viewing_eval), 2)),
    )


def test_split_points():
    """Points are 1..N, non-zero and pairwise distinct."""
    print("Testing split points...", end=" ")
    shares, _, _ = setup_random_shares()
    assert len(shares) == N
    assert [s.point for s in shares] == [format(i, "x") for i in range(1, N + 1)]
    assert all(s.point != "0" for s in shares)
    assert len({s.point for s in shares}) == N
    print("PASS")


def test_recover_exact_threshold():
    """Scenario: shares[0:14] recovers both keys."""
    print("Testing recover with t shares...", end=" ")
    shares, spending, viewing = setup_random_shares()
    assert recover(THRESHOLD, shares[0:THRESHOLD]) == (spending, viewing)
    print("PASS")


def test_recover_above_threshold():
    """Scenario: shares[0:15] recovers both keys without a tamper signal."""
    print("Testing recover with t+1 shares...", end=" ")
    shares, spending, viewing = setup_random_shares()
    assert recover(THRESHOLD, shares[0:THRESHOLD + 1]) == (spending, viewing)
    assert recover(THRESHOLD, shares) == (spending, viewing)
    print("PASS")


def test_recover_below_threshold():
    """Scenario: shares[0:13] fails with SharesBelowThreshold."""
    print("Testing recover with t-1 shares...", end=" ")
    shares, _, _ = setup_random_shares()
    try:
        recover(THRESHOLD, shares[0:THRESHOLD - 1])
        print("FAIL (keys should not have been reconstructed)")
        assert False
    except SharesBelowThreshold as e:
        assert e.have == THRESHOLD - 1
        assert e.need == THRESHOLD
    print("PASS")


def test_any_t_subset_recovers():
    """Any T of the N shares reconstruct, in any order."""
    print("Testing any T shares reconstruct...", end=" ")
    shares, spending, viewing = setup_random_shares(n=6, threshold=3)
    combinations_tested = 0
    for combo in itertools.combinations(shares, 3):
        assert recover(3, list(combo)) == (spending, viewing)
        assert recover(3, list(reversed(combo))) == (spending, viewing)
        combinations_tested += 1
    assert combinations_tested == 20
    print(f"PASS ({combinations_tested} combinations)")


def test_every_small_subset_fails():
    """Every subset smaller than T is refused."""
    shares, _, _ = setup_random_shares(n=5, threshold=3)
    for size in range(0, 3):
        for combo in itertools.combinations(shares, size):
            try:
                recover(3, list(combo))
                assert False
            except SharesBelowThreshold:
                pass


def test_threshold_one():
    """With T=1 every share carries both keys directly."""
    spending, viewing = random_keys()
    shares = split(1, 3, spending, viewing)
    for share in shares:
        assert share.spending_eval == spending
        assert share.viewing_eval == viewing
        assert recover(1, [share]) == (spending, viewing)
    assert recover(1, shares) == (spending, viewing)


def test_threshold_equals_shares():
    """T=N works and needs every share."""
    shares, spending, viewing = setup_random_shares(n=5, threshold=5)
    assert recover(5, shares) == (spending, viewing)


def test_zero_and_max_keys():
    """Boundary key values split and recover."""
    for spending, viewing in [
        ("0", "0"),
        (format(SECP256K1_FR.modulus - 1, "x"), format(BN254_FR.modulus - 1, "x")),
    ]:
        shares = split(3, 4, spending, viewing)
        assert recover(3, shares) == (spending, viewing)


def test_split_invalid_parameters():
    """Threshold above N or below 1 is rejected before any work."""
    print("Testing split parameter validation...", end=" ")
    spending, viewing = random_keys()
    for threshold, n in [(5, 4), (0, 3), (-1, 3)]:
        try:
            split(threshold, n, spending, viewing)
            assert False, f"t={threshold}, n={n} should be rejected"
        except InvalidParameters:
            pass
    print("PASS")


def test_split_malformed_secret():
    """Non-canonical or out-of-range keys are rejected."""
    spending, viewing = random_keys()
    bad_pairs = [
        ("0x" + spending, viewing),
        (spending, viewing.upper() if viewing.upper() != viewing else "Z"),
        (spending, format(BN254_FR.modulus, "x")),
    ]
    for s, v in bad_pairs:
        try:
            split(3, 5, s, v)
            assert False
        except DecodeError:
            pass


def test_split_is_randomized():
    """Two splits of the same keys produce different evaluations."""
    spending, viewing = random_keys()
    a = split(3, 5, spending, viewing)
    b = split(3, 5, spending, viewing)
    assert [s.point for s in a] == [s.point for s in b]
    assert [s.spending_eval for s in a] != [s.spending_eval for s in b]
    assert [s.viewing_eval for s in a] != [s.viewing_eval for s in b]


def test_duplicate_point():
    """Scenario: a colliding point is reported, no key is returned."""
    print("Testing duplicate point detection...", end=" ")
    shares, _, _ = setup_random_shares()
    tampered = list(shares[0:THRESHOLD + 1])
    tampered[0] = replace(tampered[0], point=tampered[1].point)

    try:
        recover(THRESHOLD, tampered[0:THRESHOLD])
        print("FAIL (keys should not have been reconstructed)")
        assert False
    except DuplicatePointInShares as e:
        assert e.point == shares[1].point
        assert e.index == 1
        assert e.first_index == 0
        assert shares[1].point in str(e)
    print("PASS")


def test_duplicate_share_appended():
    """The same share given twice is a duplicate point too."""
    shares, _, _ = setup_random_shares()
    try:
        validate_shares(THRESHOLD, shares + [shares[0]])
        assert False
    except DuplicatePointInShares as e:
        assert e.index == N
        assert e.point == shares[0].point


def test_validate_returns_points():
    """validate_shares returns the distinct points in order."""
    shares, _, _ = setup_random_shares(n=5, threshold=3)
    assert validate_shares(3, shares[::-1]) == [s.point for s in shares[::-1]]


def test_tamper_detected():
    """One altered evaluation among T+1 shares is detected."""
    print("Testing tamper detection (t+1, one modified)...", end=" ")
    shares, spending, viewing = setup_random_shares()
    tampered = list(shares[0:THRESHOLD + 1])
    tampered[0] = double_evals(tampered[0])

    try:
        recover(THRESHOLD, tampered)
        print("FAIL (keys should not have been reconstructed)")
        assert False
    except TamperDetected:
        pass

    # Excluding the altered share still recovers the right keys
    assert recover(THRESHOLD, tampered[1:]) == (spending, viewing)

    # With exactly T shares the altered one goes unnoticed and skews the result
    wrong = recover(THRESHOLD, tampered[0:THRESHOLD])
    assert wrong != (spending, viewing)
    print("PASS")


def test_tamper_detected_single_field():
    """Altering only the viewing evaluation is enough to trip the check."""
    shares, _, _ = setup_random_shares(n=5, threshold=3)
    tampered = list(shares[0:4])
    altered = double_evals(tampered[3])
    tampered[3] = replace(tampered[3], viewing_eval=altered.viewing_eval)
    try:
        recover(3, tampered)
        assert False
    except TamperDetected:
        pass


def test_authenticated_recovery():
    """authenticated=True needs T+1 shares."""
    shares, spending, viewing = setup_random_shares(n=5, threshold=3)
    try:
        recover(3, shares[0:3], authenticated=True)
        assert False
    except SharesBelowThreshold as e:
        assert e.need == 4
    assert recover(3, shares[0:4], authenticated=True) == (spending, viewing)


def test_recover_malformed_share():
    """A malformed share aborts the whole recovery."""
    shares, _, _ = setup_random_shares(n=5, threshold=3)
    for field_name, value in [
        ("point", "0x1"),
        ("spending_eval", "XYZ"),
        ("viewing_eval", format(BN254_FR.modulus, "x")),
        ("point", format(BN254_FR.modulus + 1, "x")),
    ]:
        bad = list(shares[0:3])
        bad[2] = replace(bad[2], **{field_name: value})
        try:
            recover(3, bad)
            assert False, f"{field_name}={value} should not decode"
        except DecodeError:
            pass


def test_zero_point_rejected():
    """A share at x=0 is refused instead of dictating the recovered keys."""
    print("Testing zero point rejected...", end=" ")
    shares, _, _ = setup_random_shares(n=5, threshold=3)
    forged_spending, forged_viewing = random_keys()
    forged = list(shares[0:4])
    forged[1] = Share(point="0", spending_eval=forged_spending, viewing_eval=forged_viewing)

    # x=0 sits in both the first-3 and last-3 windows
    try:
        recover(3, forged)
        print("FAIL (forged keys should not have been accepted)")
        assert False
    except DecodeError:
        pass

    try:
        recover(3, forged[0:3])
        assert False
    except DecodeError:
        pass

    try:
        Point.from_share(forged[1])
        assert False
    except DecodeError:
        pass
    print("PASS")


def test_recover_invalid_threshold():
    """Threshold below 1 is a parameter error."""
    shares, _, _ = setup_random_shares(n=3, threshold=2)
    try:
        recover(0, shares)
        assert False
    except InvalidParameters:
        pass


def test_extract_points():
    """extract_points honours max_points and keeps the first of a repeated point."""
    shares, spending, viewing = setup_random_shares()
    points = extract_points(shares, THRESHOLD)
    assert len(points) == THRESHOLD
    assert all(isinstance(p, Point) for p in points)
    assert recover_from_points(points) == (spending, viewing)

    points = extract_points([shares[0], double_evals(shares[0]), shares[1]])
    assert len(points) == 2
    assert points[0] == Point.from_share(shares[0])

    try:
        extract_points([])
        assert False
    except SharesBelowThreshold:
        pass


def test_point_from_share():
    """A share decodes into field elements of the right fields."""
    spending, viewing = random_keys()
    point = Point.from_share(Share(point="1", spending_eval=spending, viewing_eval=viewing))
    assert point.x_spending == 1
    assert point.x_viewing == 1
    assert point.y_spending == SECP256K1_FR.decode(spending)
    assert point.y_viewing == BN254_FR.decode(viewing)


def test_verify_shares():
    """verify_shares checks a share set against a known key pair."""
    shares, spending, viewing = setup_random_shares(n=5, threshold=3)
    assert verify_shares(shares[:3], spending, viewing)
    assert verify_shares(shares, spending, viewing, threshold=3)
    other_spending, other_viewing = random_keys()
    assert not verify_shares(shares[:3], other_spending, other_viewing)
    assert not verify_shares(shares[:2], spending, viewing, threshold=3)


def test_share_serialization():
    """Shares survive to_hex/from_hex and to_dict/from_dict."""
    print("Testing share serialization...", end=" ")
    shares, spending, viewing = setup_random_shares(n=5, threshold=3)
    restored = [Share.from_hex(s.to_hex()) for s in shares]
    assert restored == shares
    restored = [Share.from_dict(s.to_dict()) for s in shares]
    assert restored == shares
    assert recover(3, restored[:3]) == (spending, viewing)

    for bad in ["1:2", "1:2:3:4", ""]:
        try:
            Share.from_hex(bad)
            assert False
        except DecodeError:
            pass
    try:
        Share.from_dict({"point": "1"})
        assert False
    except DecodeError:
        pass
    print("PASS")


def main():
    print("=" * 50)
    print("  Key Split / Recover Tests")
    print(f"  ({THRESHOLD}-of-{N} guardian set)")
    print("=" * 50)
    print()

    tests = [
        test_split_points,
        test_recover_exact_threshold,
        test_recover_above_threshold,
        test_recover_below_threshold,
        test_any_t_subset_recovers,
        test_every_small_subset_fails,
        test_threshold_one,
        test_threshold_equals_shares,
        test_zero_and_max_keys,
        test_split_invalid_parameters,
        test_split_malformed_secret,
        test_split_is_randomized,
        test_duplicate_point,
        test_duplicate_share_appended,
        test_validate_returns_points,
        test_tamper_detected,
        test_tamper_detected_single_field,
        test_authenticated_recovery,
        test_recover_malformed_share,
        test_zero_point_rejected,
        test_recover_invalid_threshold,
        test_extract_points,
        test_point_from_share,
        test_verify_shares,
        test_share_serialization,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"FAIL: {e}")
            import traceback
            traceback.print_exc()
            failed += 1

    print()
    print(f"Results: {passed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
