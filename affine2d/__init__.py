"""
affine2d: 2D affine transforms as 3x3 homogeneous matrices

A small linear-algebra package for building, composing, inverting and
applying 2D affine transforms.

Conventions:
    - Points are row vectors (x, y, 1); a transform M maps p to p @ M
    - Composition "A then B" is A @ B
    - Angles in radians

Example:
    >>> from affine2d import scale
    >>> t = scale(2.0, 3.0).move_by(3.0, 4.0)
    >>> t.apply(1.0, 1.0)
    (5.0, 7.0)
"""

from .transform import (
    EPSILON,
    SingularTransformError,
    Transform,
    cross,
    multiply,
    divide,
    one,
    identity,
    translate,
    move,
    scale,
    rotate,
    rotate_clockwise,
    rotate_about_point,
    reflect_x,
    reflect_y,
    reflect_origin,
    reflect_diagonal,
    reflect_antidiagonal,
)
from .config import TransformConfig

__version__ = "1.0.0"
__all__ = [
    "EPSILON",
    "SingularTransformError",
    "Transform",
    "TransformConfig",
    "cross",
    "multiply",
    "divide",
    "one",
    "identity",
    "translate",
    "move",
    "scale",
    "rotate",
    "rotate_clockwise",
    "rotate_about_point",
    "reflect_x",
    "reflect_y",
    "reflect_origin",
    "reflect_diagonal",
    "reflect_antidiagonal",
]
