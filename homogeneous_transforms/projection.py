"""Applying transforms to points and directions, one at a time or in bulk.

Points are lifted with a trailing 1 so translation and perspective act on
them, then divided by the resulting ``w``. Directions are lifted with a
trailing 0: translation drops out and no divide happens.
"""

import logging
from typing import Optional, Tuple, Union

import numpy as np

from .config import Tolerances, resolve
from .errors import InvalidParameterError, PointAtInfinityError
from .matrices import Matrix3, Matrix4
from .vectors import Vector2, Vector3, Vector4

logger = logging.getLogger(__name__)

_POINT_TYPES = {Matrix3: Vector2, Matrix4: Vector3}


def _point_type(matrix):
    try:
        return _POINT_TYPES[type(matrix)]
    except KeyError:
        raise TypeError(f'Expected Matrix3 or Matrix4, got {type(matrix).__name__}') from None


def _check_pair(matrix, vector):
    expected = _point_type(matrix)
    if type(vector) is not expected:
        raise TypeError(f'{type(matrix).__name__} projects {expected.__name__}, '
                        f'got {type(vector).__name__}')


def homogeneous_divide(vector: Union[Vector3, Vector4],
                       tolerances: Optional[Tolerances] = None) -> Union[Vector2, Vector3]:
    """Divide by the last component and drop it.

    Raises:
        PointAtInfinityError: ``|w|`` is at or below ``w_epsilon``.
    """
    if type(vector) not in (Vector3, Vector4):
        raise TypeError(f'Expected Vector3 or Vector4, got {type(vector).__name__}')
    *head, w = vector
    if abs(w) <= resolve(tolerances).w_epsilon:
        raise PointAtInfinityError(w)
    point_type = Vector2 if isinstance(vector, Vector3) else Vector3
    return point_type(*(c / w for c in head))


def project_point(matrix: Union[Matrix3, Matrix4], point: Union[Vector2, Vector3],
                  tolerances: Optional[Tolerances] = None) -> Union[Vector2, Vector3]:
    """Transform a point and perform the homogeneous divide.

    With a perspective matrix the result is the normalized device
    coordinate: screen x and y, then depth.
    """
    _check_pair(matrix, point)
    return homogeneous_divide(matrix @ point.to_point(), tolerances)


def project_direction(matrix: Union[Matrix3, Matrix4],
                      direction: Union[Vector2, Vector3]) -> Union[Vector3, Vector4]:
    """Transform a direction; the lifted result is returned undivided."""
    _check_pair(matrix, direction)
    return matrix @ direction.to_direction()


def _lift(matrix, vectors, w: float) -> np.ndarray:
    _point_type(matrix)
    dims = matrix.size - 1
    vectors = np.asarray(vectors, dtype=float)
    if vectors.ndim != 2 or vectors.shape[1] != dims:
        raise ValueError(f'Expected an (n, {dims}) array, got shape {vectors.shape}')
    return np.c_[vectors, np.full(len(vectors), w)]


def transform_vectors(matrix, vectors) -> np.ndarray:
    """Apply a matrix to every row of an ``(n, size)`` array."""
    vectors = np.asarray(vectors, dtype=float)
    if vectors.ndim != 2 or vectors.shape[1] != matrix.size:
        raise ValueError(f'Expected an (n, {matrix.size}) array, got shape {vectors.shape}')
    return vectors @ matrix.to_array().T


def project_points(matrix: Union[Matrix3, Matrix4], points,
                   tolerances: Optional[Tolerances] = None) -> Tuple[np.ndarray, np.ndarray]:
    """Project an array of points, such as all vertices of a mesh.

    Args:
        matrix: 3x3 (2D) or 4x4 (3D) transform, typically object-to-clip
        points: Array of points (n, 2) or (n, 3)
        tolerances: Overrides ``DEFAULT_TOLERANCES``

    Returns:
        Tuple of (projected, valid). Rows whose ``w`` is zero cannot be
        divided: they are NaN in ``projected`` and False in ``valid``.
    """
    V = _lift(matrix, points, 1.0) @ matrix.to_array().T
    w = V[:, -1]
    valid = np.abs(w) > resolve(tolerances).w_epsilon
    projected = np.full((len(V), V.shape[1] - 1), np.nan)
    projected[valid] = V[valid, :-1] / w[valid].reshape(-1, 1)
    if not valid.all():
        logger.debug('%d of %d points have w == 0 and were not divided',
                     np.count_nonzero(~valid), len(valid))
    return projected, valid


def project_directions(matrix: Union[Matrix3, Matrix4], directions) -> np.ndarray:
    """Transform an array of directions; rows keep their lifted last component."""
    return _lift(matrix, directions, 0.0) @ matrix.to_array().T


def ndc_to_viewport(ndc, width: int, height: int):
    """Map normalized device coordinates to pixel coordinates.

    NDC x and y run from -1 to 1 with +y up; pixels run from 0 to
    ``width``/``height`` with +y down. Depth passes through unchanged.

    Args:
        ndc: Vector3 or array of points (n, 3)
        width, height: Viewport size in pixels

    Returns:
        Same type as ``ndc``
    """
    if width <= 0 or height <= 0:
        raise InvalidParameterError(f'Viewport size must be positive, got {width}x{height}')
    if isinstance(ndc, Vector3):
        return Vector3((ndc.x + 1) * 0.5 * width, (1 - ndc.y) * 0.5 * height, ndc.z)
    ndc = np.asarray(ndc, dtype=float)
    if ndc.ndim != 2 or ndc.shape[1] != 3:
        raise ValueError(f'Expected an (n, 3) array, got shape {ndc.shape}')
    screen = np.copy(ndc)
    screen[:, 0] = (ndc[:, 0] + 1) * 0.5 * width
    screen[:, 1] = (1 - ndc[:, 1]) * 0.5 * height
    return screen
