"""Affine transforms: a linear part followed by a translation.

Object and camera placements are affine. Their inverses do not need a full
4x4 inversion: the linear block is inverted on its own (a transpose when it
is a pure rotation) and the translation is carried through it.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .config import Tolerances, resolve
from .errors import NotAffineError, SingularMatrixError
from .matrices import Matrix2, Matrix3, Matrix4
from .transformations import homogeneous, scale_rotate_translate
from .vectors import Vector2, Vector3

logger = logging.getLogger(__name__)

_LINEAR_TYPES = {Matrix3: Matrix2, Matrix4: Matrix3}


def _drop_last(vector):
    return vector.xy if isinstance(vector, Vector3) else vector.xyz


def split_affine(matrix: Union[Matrix3, Matrix4],
                 tolerances: Optional[Tolerances] = None) -> Tuple:
    """Split a homogeneous affine matrix into its linear part and offset.

    Raises:
        NotAffineError: The last row is not ``(0, ..., 0, 1)``.
    """
    linear_type = _LINEAR_TYPES.get(type(matrix))
    if linear_type is None:
        raise TypeError(f'Expected Matrix3 or Matrix4, got {type(matrix).__name__}')
    n = linear_type.size
    tol = resolve(tolerances).compare_tolerance
    last_row = tuple(matrix.row(n))
    expected = (0.0,) * n + (1.0,)
    if any(abs(a - b) > tol for a, b in zip(last_row, expected)):
        raise NotAffineError(f'Last row {last_row} is not affine')
    linear = linear_type(*(_drop_last(column) for column in matrix.columns[:n]))
    return linear, _drop_last(matrix.column(n))


def invert_linear(linear: Union[Matrix2, Matrix3],
                  tolerances: Optional[Tolerances] = None) -> Union[Matrix2, Matrix3]:
    """Invert a rotation/scale block, using the cheapest valid method.

    Orthonormal blocks are transposed. Blocks with mutually perpendicular
    columns (a rotation combined with per-axis scale) are inverted by
    scaling each column by its inverse squared length and transposing.
    Anything else falls back to general inversion.
    """
    tol = resolve(tolerances)
    if linear.is_orthonormal(tol):
        return linear.transpose()

    columns = linear.columns
    squared = [column.dot(column) for column in columns]
    perpendicular = all(
        abs(columns[i].dot(columns[j])) <= tol.orthonormal_tolerance * math.sqrt(squared[i] * squared[j])
        for i in range(len(columns)) for j in range(i + 1, len(columns)))
    if perpendicular:
        longest = max(squared)
        if longest == 0 or min(squared) <= (tol.singular_epsilon ** 2) * longest:
            raise SingularMatrixError(0.0, 'Linear part has a zero-length basis column')
        return type(linear).from_rows(*(column / sq for column, sq in zip(columns, squared)))

    logger.debug('Linear part is sheared, using general inversion')
    return linear.inverse(tolerances=tol)


def affine_inverse(matrix: Union[Matrix3, Matrix4],
                   tolerances: Optional[Tolerances] = None) -> Union[Matrix3, Matrix4]:
    """Invert a homogeneous affine matrix without general inversion.

    Args:
        matrix: 3x3 (2D) or 4x4 (3D) matrix with last row ``(0, ..., 0, 1)``
        tolerances: Overrides ``DEFAULT_TOLERANCES``

    Returns:
        The inverse, itself affine

    Raises:
        NotAffineError: The matrix has a perspective row.
        SingularMatrixError: The linear part collapses an axis.
    """
    linear, offset = split_affine(matrix, tolerances)
    inverse_linear = invert_linear(linear, tolerances)
    return homogeneous(inverse_linear, -(inverse_linear @ offset))


class _Affine:
    """Shared behaviour of ``Affine2`` and ``Affine3``."""
    linear_type = None
    vector_type = None

    def __post_init__(self):
        if type(self.linear) is not self.linear_type:
            raise TypeError(f'{type(self).__name__}.linear must be '
                            f'{self.linear_type.__name__}')
        if type(self.offset) is not self.vector_type:
            raise TypeError(f'{type(self).__name__}.offset must be '
                            f'{self.vector_type.__name__}')

    @classmethod
    def identity(cls):
        return cls(cls.linear_type.identity(), cls.vector_type.zero())

    @classmethod
    def from_matrix(cls, matrix, tolerances: Optional[Tolerances] = None):
        linear, offset = split_affine(matrix, tolerances)
        if type(linear) is not cls.linear_type:
            raise TypeError(f'{type(matrix).__name__} does not fit {cls.__name__}')
        return cls(linear, offset)

    def matrix(self):
        """Homogeneous matrix, one dimension larger than the points."""
        return homogeneous(self.linear, self.offset)

    def apply_point(self, point):
        return self.linear @ point + self.offset

    def apply_direction(self, direction):
        return self.linear @ direction

    def inverse(self, tolerances: Optional[Tolerances] = None):
        inverse_linear = invert_linear(self.linear, tolerances)
        return type(self)(inverse_linear, -(inverse_linear @ self.offset))

    def __matmul__(self, other):
        # (self @ other) applies other first
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(self.linear @ other.linear,
                          self.linear @ other.offset + self.offset)


@dataclass(frozen=True)
class Affine2(_Affine):
    """2D placement: position, rotation angle and per-axis scale."""
    linear: Matrix2 = field(default_factory=Matrix2.identity)
    offset: Vector2 = field(default_factory=Vector2.zero)

    linear_type = Matrix2
    vector_type = Vector2

    @classmethod
    def from_components(cls, position: Vector2 = Vector2(0, 0), angle: float = 0.0,
                        scale: Vector2 = Vector2(1, 1)) -> 'Affine2':
        """Scale, then rotate by ``angle`` degrees, then move to ``position``."""
        return cls.from_matrix(scale_rotate_translate(scale, angle, position))


@dataclass(frozen=True)
class Affine3(_Affine):
    """3D placement: position, rotation matrix and per-axis scale."""
    linear: Matrix3 = field(default_factory=Matrix3.identity)
    offset: Vector3 = field(default_factory=Vector3.zero)

    linear_type = Matrix3
    vector_type = Vector3

    @classmethod
    def from_components(cls, position: Vector3 = Vector3(0, 0, 0),
                        orientation: Optional[Matrix3] = None,
                        scale: Vector3 = Vector3(1, 1, 1)) -> 'Affine3':
        """Scale, then rotate by ``orientation``, then move to ``position``."""
        if orientation is None:
            orientation = Matrix3.identity()
        return cls.from_matrix(scale_rotate_translate(scale, orientation, position))
