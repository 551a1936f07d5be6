"""Perspective projection and world-to-clip composition.

Camera space has the camera at the origin looking down +z, with +x to the
right and +y up. The perspective matrix uses a reversed, infinitely distant
far plane::

    (x, y, z, 1) -> (x / half_width, y / half_height, near, z)

so after the homogeneous divide a point at ``z == near`` gets depth 1 and
depth falls towards 0 as ``z`` grows without bound. A depth test therefore
keeps the fragment with the larger depth value.
"""

import math
from dataclasses import dataclass, field
from typing import Tuple, Union

import numpy as np

from .affine import Affine3, affine_inverse
from .errors import InvalidParameterError, ZeroLengthError
from .matrices import Matrix3, Matrix4
from .vectors import Vector3, Vector4


@dataclass(frozen=True)
class Perspective:
    """Perspective projection parameters.

    Attributes:
        fov: Field of view angle in degrees, vertical unless ``diagonal``
        aspect_ratio: Width divided by height of the view
        near: Distance to the near plane, mapped to depth 1
        diagonal: Measure ``fov`` across the diagonal of the view. This bounds
            the visible angle more predictably for very wide or very tall
            aspect ratios.
    """
    fov: float = 90.0
    aspect_ratio: float = 1.0
    near: float = 0.1
    diagonal: bool = False

    def __post_init__(self):
        if not (math.isfinite(self.fov) and 0 < self.fov < 180):
            raise InvalidParameterError(f'fov must be in (0, 180) degrees, got {self.fov}')
        if not (math.isfinite(self.aspect_ratio) and self.aspect_ratio > 0):
            raise InvalidParameterError(f'aspect_ratio must be positive, got {self.aspect_ratio}')
        if not (math.isfinite(self.near) and self.near > 0):
            raise InvalidParameterError(f'near must be positive, got {self.near}')

    def half_extents(self) -> Tuple[float, float]:
        """Half width and half height of the view at unit distance."""
        half_height = float(np.tan(0.5 * np.radians(self.fov)))
        if self.diagonal:
            half_height /= math.sqrt(self.aspect_ratio ** 2 + 1)
        return self.aspect_ratio * half_height, half_height

    def matrix(self) -> Matrix4:
        half_width, half_height = self.half_extents()
        return Matrix4(
            Vector4(1 / half_width, 0, 0, 0),
            Vector4(0, 1 / half_height, 0, 0),
            Vector4(0, 0, 0, 1),
            Vector4(0, 0, self.near, 0),
        )


def perspective(fov: float, aspect_ratio: float, near: float,
                diagonal: bool = False) -> Matrix4:
    """Create a reversed-depth, infinite-far perspective matrix.

    Args:
        fov: Field of view angle in degrees
        aspect_ratio: Aspect ratio (width/height)
        near: Near plane distance
        diagonal: Whether ``fov`` is the diagonal rather than vertical angle

    Returns:
        4x4 perspective projection matrix
    """
    return Perspective(fov, aspect_ratio, near, diagonal).matrix()


def look_at(eye: Vector3, target: Vector3, up: Vector3 = Vector3(0, 1, 0)) -> Affine3:
    """Place a camera at ``eye`` with its +z axis facing ``target``.

    Raises:
        ZeroLengthError: ``eye`` equals ``target`` or the view direction is
            parallel to ``up``.
    """
    forward = (target - eye).normalized()
    if forward.length() == 0:
        raise ZeroLengthError('Camera eye and target coincide')
    right = up.cross(forward).normalized()
    if right.length() == 0:
        raise ZeroLengthError('View direction is parallel to the up vector')
    return Affine3(Matrix3(right, forward.cross(right), forward), eye)


def _as_matrix(transform: Union[Affine3, Perspective, Matrix4]) -> Matrix4:
    if isinstance(transform, (Affine3, Perspective)):
        return transform.matrix()
    if isinstance(transform, Matrix4):
        return transform
    raise TypeError(f'Expected Affine3, Perspective or Matrix4, got {type(transform).__name__}')


def world_to_clip(camera: Union[Affine3, Matrix4],
                  projection: Union[Perspective, Matrix4]) -> Matrix4:
    """Compose ``projection @ inverse(camera)``.

    The camera placement maps camera space to world space; inverting it
    brings world points into the space the projection expects, with the
    camera at the origin.
    """
    return _as_matrix(projection) @ affine_inverse(_as_matrix(camera))


def object_to_clip(view_projection: Matrix4,
                   object_to_world: Union[Affine3, Matrix4]) -> Matrix4:
    """Single matrix taking an instance's vertices straight to clip space."""
    return _as_matrix(view_projection) @ _as_matrix(object_to_world)


@dataclass(frozen=True)
class Camera:
    """A camera placement paired with its projection parameters."""
    placement: Affine3 = field(default_factory=Affine3.identity)
    projection: Perspective = field(default_factory=Perspective)

    @classmethod
    def looking_at(cls, eye: Vector3, target: Vector3,
                   projection: Perspective = Perspective(),
                   up: Vector3 = Vector3(0, 1, 0)) -> 'Camera':
        return cls(look_at(eye, target, up), projection)

    def world_to_clip(self) -> Matrix4:
        return world_to_clip(self.placement, self.projection)

    def object_to_clip(self, object_to_world: Union[Affine3, Matrix4]) -> Matrix4:
        return object_to_clip(self.world_to_clip(), object_to_world)
