"""
Split a (spending, viewing) key pair into N shares where any T reconstruct it.

Each key gets its own random polynomial of degree T-1 over its own field,
with the key as the constant term. Share i is both polynomials evaluated at
x = i.
"""

from keyrecovery.errors import InvalidParameters
from keyrecovery.field import PrimeField, SECP256K1_FR, BN254_FR
from keyrecovery.polynomial import random_polynomial, evaluate
from keyrecovery.share import Share


def _evaluations(field: PrimeField, secret: int, threshold: int, num_shares: int) -> list[str]:
    """Evaluate a fresh polynomial for one secret at x = 1..N."""
    polynomial = random_polynomial(field, secret, threshold)
    try:
        return [
            field.encode(evaluate(field, polynomial, field.from_int(x)))
            for x in range(1, num_shares + 1)
        ]
    finally:
        # Coefficients are secret material; never kept past this call
        polynomial.clear()


def split(
    threshold: int,
    num_shares: int,
    spending_key: str,
    viewing_key: str,
) -> list[Share]:
    """
    Split a key pair using Shamir's Secret Sharing.

    Args:
        threshold: Minimum shares needed to reconstruct (T).
        num_shares: Total shares to generate (N).
        spending_key: secp256k1 scalar, canonical hex.
        viewing_key: BN254 scalar, canonical hex.

    Returns:
        List of N Share objects with points 1..N. Any T reconstruct both keys.

    Raises:
        InvalidParameters: If not 1 <= T <= N, or N does not fit in both fields.
        DecodeError: If either key is not a canonical scalar of its field.
    """
    if threshold < 1:
        raise InvalidParameters("threshold t must be at least 1")
    if threshold > num_shares:
        raise InvalidParameters(
            "threshold t should be less than or equal to number of shares n"
        )
    if num_shares >= min(SECP256K1_FR.modulus, BN254_FR.modulus):
        raise InvalidParameters("number of shares n exceeds the field order")

    spending_secret = SECP256K1_FR.decode(spending_key)
    viewing_secret = BN254_FR.decode(viewing_key)

    spending_evals = _evaluations(SECP256K1_FR, spending_secret, threshold, num_shares)
    viewing_evals = _evaluations(BN254_FR, viewing_secret, threshold, num_shares)

    shares = []
    for x, y_spending, y_viewing in zip(range(1, num_shares + 1), spending_evals, viewing_evals):
        shares.append(Share(
            point=SECP256K1_FR.encode(x),
            spending_eval=y_spending,
            viewing_eval=y_viewing,
        ))
    return shares
