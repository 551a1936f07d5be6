"""Fixed-size 2D/3D/4D vector value types."""

import math
import numbers
from dataclasses import dataclass
from typing import ClassVar, Iterator, Optional, Tuple, Union

import numpy as np

from .config import Tolerances, resolve


class _Vector:
    """Component-wise arithmetic shared by the fixed-size vector types.

    Subclasses are frozen dataclasses listing their component names in
    ``_fields``. Arithmetic is only defined between vectors of the same
    type; anything else falls through to ``NotImplemented``.
    """
    _fields: ClassVar[Tuple[str, ...]] = ()
    # numpy scalars on the left defer to __rmul__ instead of broadcasting
    __array_ufunc__ = None

    def __post_init__(self):
        for name in self._fields:
            object.__setattr__(self, name, float(getattr(self, name)))

    def __iter__(self) -> Iterator[float]:
        return (getattr(self, name) for name in self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, index):
        return tuple(self)[index]

    def __add__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(*(a + b for a, b in zip(self, other)))

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(*(a - b for a, b in zip(self, other)))

    def __mul__(self, scalar):
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return type(self)(*(a * scalar for a in self))

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return type(self)(*(a / scalar for a in self))

    def __neg__(self):
        return type(self)(*(-a for a in self))

    def dot(self, other) -> float:
        """Sum of the component-wise products."""
        if type(other) is not type(self):
            raise TypeError(f'Cannot dot {type(self).__name__} with '
                            f'{type(other).__name__}')
        return sum(a * b for a, b in zip(self, other))

    def length(self) -> float:
        """Euclidean length, ``sqrt(v . v)`` computed without overflow."""
        return math.hypot(*self)

    def normalized(self):
        """Unit vector in the same direction.

        A zero-length vector has no direction; the zero vector is returned
        for it instead of raising.
        """
        size = self.length()
        if size == 0:
            return self.zero()
        return self / size

    def is_close(self, other, tolerances: Optional[Tolerances] = None) -> bool:
        if type(other) is not type(self):
            return False
        tol = resolve(tolerances).compare_tolerance
        return all(abs(a - b) <= tol for a, b in zip(self, other))

    def to_array(self) -> np.ndarray:
        return np.array(tuple(self), dtype=float)

    @classmethod
    def from_array(cls, arr):
        values = np.asarray(arr, dtype=float).ravel()
        if values.size != len(cls._fields):
            raise ValueError(f'{cls.__name__} needs {len(cls._fields)} '
                             f'components, got {values.size}')
        return cls(*values.tolist())

    @classmethod
    def zero(cls):
        return cls(*([0.0] * len(cls._fields)))


@dataclass(frozen=True)
class Vector2(_Vector):
    x: float
    y: float

    _fields: ClassVar[Tuple[str, ...]] = ('x', 'y')

    def perpendicular(self) -> 'Vector2':
        """This vector rotated a quarter turn counter-clockwise."""
        return Vector2(-self.y, self.x)

    def to_point(self) -> 'Vector3':
        return Vector3(self.x, self.y, 1.0)

    def to_direction(self) -> 'Vector3':
        return Vector3(self.x, self.y, 0.0)


@dataclass(frozen=True)
class Vector3(_Vector):
    x: float
    y: float
    z: float

    _fields: ClassVar[Tuple[str, ...]] = ('x', 'y', 'z')

    def cross(self, other: 'Vector3') -> 'Vector3':
        """Vector perpendicular to both inputs (right-hand rule)."""
        if type(other) is not Vector3:
            raise TypeError(f'Cannot cross Vector3 with {type(other).__name__}')
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    @property
    def xy(self) -> Vector2:
        return Vector2(self.x, self.y)

    def to_point(self) -> 'Vector4':
        return Vector4(self.x, self.y, self.z, 1.0)

    def to_direction(self) -> 'Vector4':
        return Vector4(self.x, self.y, self.z, 0.0)


@dataclass(frozen=True)
class Vector4(_Vector):
    x: float
    y: float
    z: float
    w: float

    _fields: ClassVar[Tuple[str, ...]] = ('x', 'y', 'z', 'w')

    @property
    def xyz(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)


Vector = Union[Vector2, Vector3, Vector4]


def dot(a: Vector, b: Vector) -> float:
    return a.dot(b)


def length(v: Vector) -> float:
    return v.length()


def normalize(v: Vector) -> Vector:
    """Unit vector along ``v``; the zero vector maps to itself."""
    return v.normalized()


def cross(a: Vector3, b: Vector3) -> Vector3:
    return a.cross(b)
