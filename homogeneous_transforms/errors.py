"""Exceptions raised by transform, inversion and projection operations."""

from typing import Optional

__all__ = ['TransformError', 'SingularMatrixError', 'NotAffineError',
           'PointAtInfinityError', 'ZeroLengthError', 'InvalidParameterError']


class TransformError(ValueError):
    """Base class for all errors raised by this package."""


class SingularMatrixError(TransformError):
    """Raised when inverting a matrix whose determinant is (near) zero."""

    def __init__(self, determinant: float, message: Optional[str] = None):
        self.determinant = determinant
        if message is None:
            message = f'Matrix is singular (determinant={determinant!r})'
        super().__init__(message)


class NotAffineError(TransformError):
    """Raised when an affine-only shortcut meets a projective last row."""


class PointAtInfinityError(TransformError):
    """Raised when a homogeneous divide would divide by zero."""

    def __init__(self, w: float):
        self.w = w
        super().__init__(f'Cannot divide by homogeneous w={w!r}; '
                         'the point lies on the camera plane')


class ZeroLengthError(TransformError):
    """Raised when a direction is required but the vector has no length."""


class InvalidParameterError(TransformError):
    """Raised for out-of-range camera or viewport parameters."""
