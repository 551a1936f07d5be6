"""Vector, matrix and perspective transforms for real-time rendering."""

import logging

from .vectors import Vector2, Vector3, Vector4, dot, length, normalize, cross
from .matrices import (
    Matrix2, Matrix3, Matrix4, apply, multiply, transpose, determinant, inverse
)
from .transformations import (
    rotation, x_rotation, y_rotation, z_rotation, scaling, translation,
    homogeneous, scale_rotate_translate
)
from .affine import Affine2, Affine3, affine_inverse, split_affine
from .camera import Perspective, Camera, perspective, look_at, world_to_clip, object_to_clip
from .projection import (
    project_point, project_direction, homogeneous_divide, transform_vectors,
    project_points, project_directions, ndc_to_viewport
)
from .config import Tolerances, DEFAULT_TOLERANCES
from . import errors
from .errors import *

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Vector2', 'Vector3', 'Vector4', 'dot', 'length', 'normalize', 'cross',
    'Matrix2', 'Matrix3', 'Matrix4', 'apply', 'multiply', 'transpose',
    'determinant', 'inverse',
    'rotation', 'x_rotation', 'y_rotation', 'z_rotation', 'scaling',
    'translation', 'homogeneous', 'scale_rotate_translate',
    'Affine2', 'Affine3', 'affine_inverse', 'split_affine',
    'Perspective', 'Camera', 'perspective', 'look_at', 'world_to_clip',
    'object_to_clip',
    'project_point', 'project_direction', 'homogeneous_divide',
    'transform_vectors', 'project_points', 'project_directions',
    'ndc_to_viewport',
    'Tolerances', 'DEFAULT_TOLERANCES',
] + errors.__all__
