"""Dense linear system solver.

Gaussian elimination with partial pivoting followed by back-substitution.
The arithmetic is performed element by element in a fixed order so that
results are reproducible across platforms (no BLAS reductions).

Typical size: the reduced B matrix of a network with < 50 buses.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

SINGULAR_PIVOT_TOL: float = 1e-12


class SingularMatrixError(ValueError):
    """Raised when elimination meets a (numerically) zero pivot."""


def solve_linear_system(A: ArrayLike, b: ArrayLike) -> NDArray[np.float64]:
    """Solve ``A·x = b`` by Gaussian elimination with partial pivoting.

    Algorithm:
    1. For each column i, pick the row k ≥ i with the largest |M[k, i]|
       (first occurrence wins ties) and swap it into row i.
    2. Eliminate column i below the pivot: M[k] += c·M[i], c = -M[k, i]/M[i, i].
    3. Back-substitute from the last row upwards.

    The inputs are never modified; elimination runs on float64 copies.

    Args:
        A: square matrix, shape (n, n)
        b: right-hand side, shape (n,)

    Raises:
        ValueError: if the shapes do not match.
        SingularMatrixError: if a pivot is below ``SINGULAR_PIVOT_TOL`` or
            the solution contains non-finite values.
    """
    M = np.array(A, dtype=np.float64, copy=True)
    x = np.array(b, dtype=np.float64, copy=True)

    n = x.shape[0] if x.ndim == 1 else -1
    if M.size == 0 and x.size == 0:
        return np.zeros(0, dtype=np.float64)
    if M.ndim != 2 or M.shape != (n, n):
        raise ValueError(
            f"A must be square and match b, got A{M.shape} and b{x.shape}"
        )

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for i in range(n):
            # Pivot
            max_el = abs(M[i, i])
            max_row = i
            for k in range(i + 1, n):
                if abs(M[k, i]) > max_el:
                    max_el = abs(M[k, i])
                    max_row = k

            if not max_el >= SINGULAR_PIVOT_TOL:
                raise SingularMatrixError(
                    f"Zero pivot in column {i} (|pivot|={max_el:.3e})"
                )

            # Swap
            if max_row != i:
                M[[i, max_row]] = M[[max_row, i]]
                x[i], x[max_row] = x[max_row], x[i]

            # Eliminate
            for k in range(i + 1, n):
                c = -M[k, i] / M[i, i]
                M[k, i] = 0.0
                M[k, i + 1:] += c * M[i, i + 1:]
                x[k] += c * x[i]

        # Back substitution
        result = np.zeros(n, dtype=np.float64)
        for i in range(n - 1, -1, -1):
            s = 0.0
            for j in range(i + 1, n):
                s += M[i, j] * result[j]
            result[i] = (x[i] - s) / M[i, i]

    if not np.all(np.isfinite(result)):
        raise SingularMatrixError("Solution contains non-finite values")

    return result
