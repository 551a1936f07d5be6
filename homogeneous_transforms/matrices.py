"""Square 2x2, 3x3 and 4x4 matrices stored as basis column vectors.

A matrix is the linear map ``f(v) = v[0] * columns[0] + v[1] * columns[1]
+ ...``: each column is where the corresponding unit axis lands. Rotation,
scaling, translation and perspective are all just particular choices of
columns, built by the functions in ``transformations`` and ``camera``.

Composition reads right to left, as in the usual notation: ``(A @ B) @ v``
equals ``A @ (B @ v)``, so ``B`` is applied first.
"""

import logging
import math
from functools import reduce
from typing import ClassVar, Iterator, Optional, Tuple, Union

import numpy as np

from .config import Tolerances, resolve
from .errors import SingularMatrixError
from .vectors import Vector2, Vector3, Vector4, _Vector

logger = logging.getLogger(__name__)


class _BasisMatrix:
    """Shared implementation of the fixed-size matrix types."""
    __slots__ = ('_columns',)

    size: ClassVar[int] = 0
    vector_type: ClassVar[type] = _Vector

    def __init__(self, *columns):
        if len(columns) != self.size:
            raise ValueError(f'{type(self).__name__} needs {self.size} '
                             f'columns, got {len(columns)}')
        for column in columns:
            if type(column) is not self.vector_type:
                raise TypeError(f'{type(self).__name__} columns must be '
                                f'{self.vector_type.__name__}, got '
                                f'{type(column).__name__}')
        object.__setattr__(self, '_columns', tuple(columns))

    def __setattr__(self, name, value):
        raise AttributeError(f'{type(self).__name__} is immutable')

    def __reduce__(self):
        return (type(self), self._columns)

    @classmethod
    def identity(cls):
        axes = np.eye(cls.size)
        return cls(*(cls.vector_type(*axis) for axis in axes.tolist()))

    @classmethod
    def from_rows(cls, *rows):
        if len(rows) != cls.size or any(len(row) != cls.size for row in rows):
            raise ValueError(f'{cls.__name__} needs {cls.size} rows of '
                             f'{cls.size} values')
        return cls(*(cls.vector_type(*column) for column in zip(*rows)))

    @classmethod
    def from_array(cls, arr):
        """Build from a row-major ``(size, size)`` array."""
        values = np.asarray(arr, dtype=float)
        if values.shape != (cls.size, cls.size):
            raise ValueError(f'{cls.__name__} needs a {cls.size}x{cls.size} '
                             f'array, got shape {values.shape}')
        return cls(*(cls.vector_type(*column) for column in values.T.tolist()))

    def to_array(self) -> np.ndarray:
        """Row-major array whose columns are the basis vectors."""
        return np.column_stack([column.to_array() for column in self._columns])

    @property
    def columns(self) -> Tuple:
        return self._columns

    def column(self, index: int):
        return self._columns[index]

    def row(self, index: int):
        return self.vector_type(*(column[index] for column in self._columns))

    def __iter__(self) -> Iterator:
        return iter(self._columns)

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._columns == other._columns

    def __hash__(self):
        return hash((type(self).__name__, self._columns))

    def __repr__(self):
        columns = ', '.join(repr(column) for column in self._columns)
        return f'{type(self).__name__}({columns})'

    def apply(self, vector):
        """Weighted sum of the basis columns, weights taken from ``vector``."""
        if type(vector) is not self.vector_type:
            raise TypeError(f'{type(self).__name__} applies to '
                            f'{self.vector_type.__name__}, got '
                            f'{type(vector).__name__}')
        result = [0.0] * self.size
        for weight, column in zip(vector, self._columns):
            for i, value in enumerate(column):
                result[i] += weight * value
        return self.vector_type(*result)

    def multiply(self, other):
        """Composition ``self @ other``; ``other`` is applied first."""
        if type(other) is not type(self):
            raise TypeError(f'Cannot compose {type(self).__name__} with '
                            f'{type(other).__name__}')
        return type(self)(*(self.apply(column) for column in other._columns))

    def __matmul__(self, other):
        if isinstance(other, _BasisMatrix):
            return self.multiply(other)
        if isinstance(other, _Vector):
            return self.apply(other)
        return NotImplemented

    def transpose(self):
        return type(self)(*(self.row(i) for i in range(self.size)))

    @property
    def T(self):
        return self.transpose()

    def determinant(self) -> float:
        return float(np.linalg.det(self.to_array()))

    def is_orthonormal(self, tolerances: Optional[Tolerances] = None) -> bool:
        """True when the columns are unit length and mutually perpendicular."""
        tol = resolve(tolerances).orthonormal_tolerance
        for i, a in enumerate(self._columns):
            for j, b in enumerate(self._columns[i:], start=i):
                expected = 1.0 if i == j else 0.0
                if abs(a.dot(b) - expected) > tol:
                    return False
        return True

    def check_invertible(self, tolerances: Optional[Tolerances] = None) -> float:
        """Return the determinant, raising if the matrix is singular.

        The threshold is relative to the product of the column lengths, which
        bounds ``|det|`` from above, so uniformly scaled matrices are judged
        the same way regardless of their scale. When the determinant or the
        bound leaves the float range the comparison is made on logarithms.
        """
        det = self.determinant()
        epsilon = resolve(tolerances).singular_epsilon
        lengths = [column.length() for column in self._columns]
        if min(lengths) == 0:
            raise SingularMatrixError(det)
        bound = math.prod(lengths)
        if math.isfinite(det) and math.isfinite(bound) and bound > 0:
            singular = abs(det) <= epsilon * bound
        else:
            sign, log_det = np.linalg.slogdet(self.to_array())
            log_epsilon = math.log(epsilon) if epsilon > 0 else -math.inf
            singular = sign == 0 or log_det <= log_epsilon + sum(map(math.log, lengths))
        if singular:
            raise SingularMatrixError(det)
        return det

    def inverse(self, orthonormal: bool = False,
                tolerances: Optional[Tolerances] = None):
        """Matrix undoing this one.

        Args:
            orthonormal: Try the transpose first. It is used only if the
                columns really are orthonormal, otherwise general inversion
                runs as usual.
            tolerances: Overrides ``DEFAULT_TOLERANCES``.

        Raises:
            SingularMatrixError: The matrix has no inverse.
        """
        if orthonormal:
            if self.is_orthonormal(tolerances):
                return self.transpose()
            logger.debug('%s is not orthonormal, using general inversion',
                         type(self).__name__)
        self.check_invertible(tolerances)
        return type(self).from_array(np.linalg.inv(self.to_array()))

    def is_close(self, other, tolerances: Optional[Tolerances] = None) -> bool:
        if type(other) is not type(self):
            return False
        return all(a.is_close(b, tolerances)
                   for a, b in zip(self._columns, other._columns))


class Matrix2(_BasisMatrix):
    __slots__ = ()
    size = 2
    vector_type = Vector2

    def determinant(self) -> float:
        a, b = self._columns
        return a.x * b.y - b.x * a.y


class Matrix3(_BasisMatrix):
    __slots__ = ()
    size = 3
    vector_type = Vector3

    def determinant(self) -> float:
        # Scalar triple product of the basis columns
        a, b, c = self._columns
        return a.dot(b.cross(c))


class Matrix4(_BasisMatrix):
    __slots__ = ()
    size = 4
    vector_type = Vector4


Matrix = Union[Matrix2, Matrix3, Matrix4]


def apply(matrix: Matrix, vector):
    return matrix.apply(vector)


def multiply(*matrices: Matrix) -> Matrix:
    """Compose matrices; the rightmost one is applied first."""
    if not matrices:
        raise ValueError('multiply() needs at least one matrix')
    return reduce(lambda a, b: a.multiply(b), matrices)


def transpose(matrix: Matrix) -> Matrix:
    return matrix.transpose()


def determinant(matrix: Matrix) -> float:
    return matrix.determinant()


def inverse(matrix: Matrix, orthonormal: bool = False,
            tolerances: Optional[Tolerances] = None) -> Matrix:
    return matrix.inverse(orthonormal=orthonormal, tolerances=tolerances)
