"""Numeric tolerances shared by inversion, projection and comparison."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Tolerances:
    """Thresholds used to classify degenerate inputs.

    Attributes:
        singular_epsilon: A matrix is singular when ``|det|`` is at most this
            fraction of the product of its column lengths.
        orthonormal_tolerance: Allowed deviation of column lengths from 1 and
            of column dot products from 0 for the transpose fast path.
        w_epsilon: Homogeneous divisors with ``|w|`` at or below this value
            are treated as zero.
        compare_tolerance: Absolute tolerance for ``is_close`` comparisons.
    """
    singular_epsilon: float = 1e-12
    orthonormal_tolerance: float = 1e-9
    w_epsilon: float = 1e-12
    compare_tolerance: float = 1e-9

    def replace(self, **changes) -> 'Tolerances':
        """Return a copy with the given fields changed."""
        return replace(self, **changes)


DEFAULT_TOLERANCES = Tolerances()


def resolve(tolerances=None) -> Tolerances:
    return DEFAULT_TOLERANCES if tolerances is None else tolerances
