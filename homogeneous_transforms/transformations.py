"""Rotation, scaling and translation matrix builders.

Angles are in degrees. Builders do the trigonometry once, when the matrix is
constructed; applying the result afterwards is only multiply-adds.
"""

import numbers
from typing import Optional, Union

import numpy as np

from .errors import ZeroLengthError
from .matrices import Matrix2, Matrix3, Matrix4
from .vectors import Vector2, Vector3, Vector4


def _cos_sin(angle: float):
    t = np.radians(angle)
    return float(np.cos(t)), float(np.sin(t))


def rotation(angle: float, axis: Optional[Vector3] = None) -> Union[Matrix2, Matrix3]:
    """Create a rotation matrix.

    Without an axis this is the 2D counter-clockwise rotation, whose second
    column is the first one turned a quarter turn. With an axis it is the 3D
    right-handed rotation about that axis (Rodrigues' formula).

    Args:
        angle: Rotation angle in degrees
        axis: Optional rotation axis, need not be unit length

    Returns:
        2x2 rotation matrix, or 3x3 when an axis is given
    """
    c, s = _cos_sin(angle)
    if axis is None:
        first = Vector2(c, s)
        return Matrix2(first, first.perpendicular())

    if type(axis) is not Vector3:
        raise TypeError(f'Rotation axis must be Vector3, got {type(axis).__name__}')
    k = axis.normalized()
    if k.length() == 0:
        raise ZeroLengthError('Rotation axis has zero length')
    t = 1.0 - c
    return Matrix3(
        Vector3(c + t * k.x * k.x, t * k.x * k.y + s * k.z, t * k.x * k.z - s * k.y),
        Vector3(t * k.x * k.y - s * k.z, c + t * k.y * k.y, t * k.y * k.z + s * k.x),
        Vector3(t * k.x * k.z + s * k.y, t * k.y * k.z - s * k.x, c + t * k.z * k.z),
    )


def x_rotation(angle: float) -> Matrix3:
    """Create a rotation matrix around the X axis (angle in degrees)."""
    c, s = _cos_sin(angle)
    return Matrix3(Vector3(1, 0, 0), Vector3(0, c, s), Vector3(0, -s, c))


def y_rotation(angle: float) -> Matrix3:
    """Create a rotation matrix around the Y axis (angle in degrees)."""
    c, s = _cos_sin(angle)
    return Matrix3(Vector3(c, 0, -s), Vector3(0, 1, 0), Vector3(s, 0, c))


def z_rotation(angle: float) -> Matrix3:
    """Create a rotation matrix around the Z axis (angle in degrees)."""
    c, s = _cos_sin(angle)
    return Matrix3(Vector3(c, s, 0), Vector3(-s, c, 0), Vector3(0, 0, 1))


def scaling(factors: Union[Vector2, Vector3]) -> Union[Matrix2, Matrix3]:
    """Create a diagonal scaling matrix from per-axis factors."""
    if isinstance(factors, Vector2):
        return Matrix2(Vector2(factors.x, 0), Vector2(0, factors.y))
    if isinstance(factors, Vector3):
        return Matrix3(Vector3(factors.x, 0, 0),
                       Vector3(0, factors.y, 0),
                       Vector3(0, 0, factors.z))
    raise TypeError(f'scaling() takes Vector2 or Vector3, got {type(factors).__name__}')


def translation(offset: Union[Vector2, Vector3]) -> Union[Matrix3, Matrix4]:
    """Create a homogeneous translation matrix.

    The matrix is one dimension larger than the points it moves: the offset
    sits in the last column and is picked up by the constant 1 that points
    carry there. Directions carry 0 and are left unchanged.
    """
    if isinstance(offset, Vector2):
        return Matrix3(Vector3(1, 0, 0), Vector3(0, 1, 0), offset.to_point())
    if isinstance(offset, Vector3):
        return Matrix4(Vector4(1, 0, 0, 0), Vector4(0, 1, 0, 0),
                       Vector4(0, 0, 1, 0), offset.to_point())
    raise TypeError(f'translation() takes Vector2 or Vector3, got {type(offset).__name__}')


def homogeneous(linear: Union[Matrix2, Matrix3],
                offset: Optional[Union[Vector2, Vector3]] = None) -> Union[Matrix3, Matrix4]:
    """Lift a linear part and an optional offset into a homogeneous matrix."""
    if isinstance(linear, Matrix2):
        offset = Vector2(0, 0) if offset is None else offset
        return Matrix3(*(column.to_direction() for column in linear), offset.to_point())
    if isinstance(linear, Matrix3):
        offset = Vector3(0, 0, 0) if offset is None else offset
        return Matrix4(*(column.to_direction() for column in linear), offset.to_point())
    raise TypeError(f'homogeneous() takes Matrix2 or Matrix3, got {type(linear).__name__}')


def scale_rotate_translate(scale: Union[Vector2, Vector3],
                           orientation: Union[float, Matrix2, Matrix3],
                           offset: Union[Vector2, Vector3]) -> Union[Matrix3, Matrix4]:
    """Create one matrix that scales, then rotates, then translates.

    Equivalent to ``translation(offset) @ homogeneous(rotation) @
    homogeneous(scaling(scale))`` but built directly: each rotated basis
    column is stretched by its scale factor.

    Args:
        scale: Per-axis scale factors (Vector2 for 2D, Vector3 for 3D)
        orientation: Angle in degrees or a Matrix2 for 2D; a Matrix3 for 3D
        offset: Translation applied last

    Returns:
        3x3 (2D) or 4x4 (3D) homogeneous matrix
    """
    if isinstance(orientation, numbers.Real):
        if not isinstance(scale, Vector2):
            raise TypeError('An angle rotation needs a Vector2 scale')
        orientation = rotation(orientation)
    if orientation.size != len(scale):
        raise TypeError(f'{type(orientation).__name__} does not match '
                        f'{type(scale).__name__} scale factors')
    linear = type(orientation)(*(column * factor for column, factor in zip(orientation, scale)))
    return homogeneous(linear, offset)
