"""
Polynomials over a prime field.

One generic implementation, parametrized by the field, serves both the
spending and the viewing secrets.
"""

from keyrecovery.field import PrimeField


def random_polynomial(field: PrimeField, secret: int, threshold: int) -> list[int]:
    """
    Build f(x) = secret + a1*x + ... + a(t-1)*x^(t-1) with random a1..a(t-1).

    Args:
        field: The field the coefficients live in.
        secret: The constant term, f(0).
        threshold: Number of coefficients (degree + 1).

    Returns:
        Coefficients in ascending order of degree.
    """
    coefficients = [secret]
    for _ in range(threshold - 1):
        coefficients.append(field.random())
    return coefficients


def evaluate(field: PrimeField, coefficients: list[int], x: int) -> int:
    """Evaluate a polynomial at x with Horner's scheme."""
    result = coefficients[-1]
    for coeff in reversed(coefficients[:-1]):
        result = field.add(field.mul(result, x), coeff)
    return result


def interpolate_at_zero(field: PrimeField, xs: list[int], ys: list[int]) -> int:
    """
    Lagrange interpolation at x=0.

        f(0) = sum_i  y_i * prod_{j != i} x_j / (x_j - x_i)

    Each term is multiplied by every numerator first and divided once by the
    accumulated denominator, so there is a single inversion per term.
    xs must be pairwise distinct.
    """
    result = field.zero()
    for i, (xi, yi) in enumerate(zip(xs, ys)):
        term = yi
        denominator = field.one()
        for j, xj in enumerate(xs):
            if i == j:
                continue
            term = field.mul(term, xj)
            denominator = field.mul(denominator, field.sub(xj, xi))
        result = field.add(result, field.div(term, denominator))
    return result
