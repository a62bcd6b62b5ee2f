"""
2D affine transform module.

A transform is a 3x3 matrix in homogeneous coordinates, stored row-major:

    | a b 0 |
    | c d 0 |
    | e f 1 |

Conventions:
    - Points are row vectors (x, y, 1) multiplied on the left: p' = p @ M
    - "Apply A then B" is therefore A @ B, not B @ A
    - Angles are in radians
    - Division by zero (scalar division, singular inverse) is not guarded:
      entries become inf/nan following IEEE-754
"""

import numpy as np
from typing import Iterator, Tuple
import logging

logger = logging.getLogger(__name__)

# Entries with a smaller magnitude are snapped to 0.0 by Transform.fix()
EPSILON = 1e-8


class SingularTransformError(ValueError):
    """Raised by Transform.checked_inverse() for a (near) singular matrix."""


def cross(x1: float, y1: float, x2: float, y2: float) -> float:
    """2x2 determinant of the rows (x1, y1) and (x2, y2)."""
    return x1 * y2 - y1 * x2


class Transform:
    """
    3x3 affine transform acting on row vectors.

    Operations return new transforms and leave their operands untouched,
    except fix() which cleans the receiver in place.

    Indexing:
        t[i]          flat row-major index 0..8
        t[row, col]   2D index
    """

    __slots__ = ("_m",)

    def __init__(
        self,
        a1: float, a2: float, a3: float,
        b1: float, b2: float, b3: float,
        c1: float, c2: float, c3: float,
    ):
        self._m = np.array([
            [a1, a2, a3],
            [b1, b2, b3],
            [c1, c2, c3]
        ], dtype=np.float64)

    @classmethod
    def from_array(cls, values) -> "Transform":
        """
        Build a transform from any array-like holding 9 values.

        Args:
            values: Flat sequence of 9 values or a 3x3 nested sequence/array

        Returns:
            New Transform (the input is copied)

        Raises:
            ValueError: If the input does not hold exactly 9 values
        """
        arr = np.asarray(values, dtype=np.float64)
        if arr.shape not in ((9,), (3, 3)):
            raise ValueError(f"Expected 9 values or a 3x3 array, got shape {arr.shape}")
        return cls(*arr.ravel())

    # ------------------------------------------------------------------
    # Access

    @property
    def values(self) -> Tuple[float, ...]:
        """The 9 entries in row-major order as Python floats."""
        return tuple(float(v) for v in self._m.ravel())

    @property
    def matrix(self) -> np.ndarray:
        """Copy of the underlying 3x3 array."""
        return self._m.copy()

    def __getitem__(self, index):
        if isinstance(index, tuple):
            return float(self._m[index])
        return float(self._m.flat[index])

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def __len__(self) -> int:
        return 9

    def __eq__(self, other):
        if not isinstance(other, Transform):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    __hash__ = None

    def allclose(self, other: "Transform", atol: float = 1e-9) -> bool:
        """Elementwise comparison within an absolute tolerance."""
        return bool(np.allclose(self._m, other._m, rtol=0.0, atol=atol))

    def __repr__(self):
        args = ", ".join(repr(v) for v in self.values)
        return f"Transform({args})"

    def __str__(self):
        return self.format()

    # ------------------------------------------------------------------
    # Algebra

    def multiply(self, other: "Transform") -> "Transform":
        """
        Matrix product self @ other.

        With row vectors this is "apply self, then other".
        """
        return Transform.from_array(self._m @ other._m)

    def __matmul__(self, other):
        if not isinstance(other, Transform):
            return NotImplemented
        return self.multiply(other)

    def divide(self, s: float) -> "Transform":
        """
        Divide every entry by a scalar.

        A zero scalar is not rejected: entries become inf (or nan for 0/0).
        """
        with np.errstate(divide='ignore', invalid='ignore'):
            return Transform.from_array(self._m / np.float64(s))

    def __truediv__(self, s):
        if isinstance(s, Transform):
            return NotImplemented
        return self.divide(s)

    def determinant(self) -> float:
        """
        Determinant by cofactor expansion along the first row.

        Returns:
            a(ei - fh) - b(di - fg) + c(dh - eg) for entries a..i
        """
        a, b, c, d, e, f, g, h, i = self.values
        return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)

    def inverse(self) -> "Transform":
        """
        Inverse via the adjugate (transposed cofactor matrix).

        Each cofactor is a 2x2 minor computed with cross(). The adjugate is
        divided by the determinant without checking it: a singular matrix
        yields inf/nan entries. Use checked_inverse() to get an exception
        instead.

        Returns:
            New Transform M^-1 such that M @ M^-1 ~ I
        """
        m = self.values
        det = self.determinant()
        if det == 0.0:
            logger.debug(f"Inverting singular transform, result is degenerate: {self!r}")

        adjugate = Transform(
            cross(m[4], m[5], m[7], m[8]), -cross(m[1], m[2], m[7], m[8]), cross(m[1], m[2], m[4], m[5]),
            -cross(m[3], m[5], m[6], m[8]), cross(m[0], m[2], m[6], m[8]), -cross(m[0], m[2], m[3], m[5]),
            cross(m[3], m[4], m[6], m[7]), -cross(m[0], m[1], m[6], m[7]), cross(m[0], m[1], m[3], m[4]),
        )
        return adjugate.divide(det)

    def checked_inverse(self, tol: float = EPSILON) -> "Transform":
        """
        Inverse that refuses (near) singular matrices.

        Args:
            tol: Smallest accepted absolute determinant

        Raises:
            SingularTransformError: If abs(determinant) < tol
        """
        det = self.determinant()
        if abs(det) < tol:
            raise SingularTransformError(
                f"Transform is singular (determinant {det!r}, tolerance {tol!r})"
            )
        return self.inverse()

    # ------------------------------------------------------------------
    # Composition helpers: self, then the primitive

    def move_by(self, tx: float, ty: float) -> "Transform":
        return self.multiply(translate(tx, ty))

    def scale_by(self, sx: float, sy: float) -> "Transform":
        return self.multiply(scale(sx, sy))

    def rotate_by(self, theta: float) -> "Transform":
        return self.multiply(rotate(theta))

    def rotate_clockwise_by(self, theta: float) -> "Transform":
        return self.multiply(rotate_clockwise(theta))

    def rotate_about_point_by(self, theta: float, x: float, y: float) -> "Transform":
        return self.multiply(rotate_about_point(theta, x, y))

    def with_pivot(self, x: float, y: float) -> "Transform":
        """
        Conjugate by a translation so (x, y) acts as the origin.

        Returns:
            translate(-x, -y) @ self @ translate(x, y)
        """
        return translate(-x, -y).multiply(self).multiply(translate(x, y))

    # ------------------------------------------------------------------
    # Points

    def apply(self, x: float, y: float) -> Tuple[float, float]:
        """
        Map the point (x, y, 1) through the transform.

        The homogeneous coordinate of the result is assumed to be 1 and is
        not computed.

        Args:
            x: Point x coordinate
            y: Point y coordinate

        Returns:
            (x', y')
        """
        m = self.values
        return (
            x * m[0] + y * m[3] + m[6],
            x * m[1] + y * m[4] + m[7],
        )

    def apply_many(self, points) -> np.ndarray:
        """
        Map several points at once.

        Args:
            points: Nx2 array-like of (x, y) points

        Returns:
            Nx2 array of mapped points
        """
        pts = np.asarray(points, dtype=np.float64)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise ValueError(f"Expected an Nx2 array of points, got shape {pts.shape}")
        return pts @ self._m[:2, :2] + self._m[2, :2]

    # ------------------------------------------------------------------
    # Cleanup

    def fix(self, eps: float = EPSILON) -> None:
        """Snap entries with abs(value) < eps to exactly 0.0, in place."""
        self._m[np.abs(self._m) < eps] = 0.0

    def fixed(self, eps: float = EPSILON) -> "Transform":
        """Cleaned copy; the receiver is left untouched."""
        result = Transform.from_array(self._m)
        result.fix(eps)
        return result

    # ------------------------------------------------------------------
    # Predicates

    def is_affine(self, tol: float = 1e-6) -> bool:
        """True if the third column is (0, 0, 1)."""
        return bool(np.allclose(self._m[:, 2], [0.0, 0.0, 1.0], rtol=0.0, atol=tol))

    def is_rotation(self, tol: float = 1e-6) -> bool:
        """
        Check for a proper rotation, possibly about a pivot point.

        A proper rotation must:
            1. Be affine (third column 0, 0, 1)
            2. Have an orthogonal linear part: L @ L.T = I
            3. Have determinant = +1 (not a reflection)

        The translation row is ignored, so rotate_about_point() results
        pass as well.
        """
        if not self.is_affine(tol):
            return False

        linear = self._m[:2, :2]
        if not np.allclose(linear @ linear.T, np.eye(2), rtol=0.0, atol=tol):
            return False

        return bool(np.isclose(self.determinant(), 1.0, rtol=0.0, atol=tol))

    # ------------------------------------------------------------------
    # Display

    def format(self, precision: int = 3, padding: int = 2) -> str:
        """
        Render the matrix as a three line box.

        Every entry is formatted with `precision` decimals and right-aligned
        to the longest entry plus `padding` characters:

            /   1.000   0.000   0.000 \\
            |   0.000   1.000   0.000 |
            \\   1.000   2.000   1.000 /
        """
        cells = [f"{v:.{precision}f}" for v in self.values]
        width = max(len(c) for c in cells) + padding
        cells = [c.rjust(width) for c in cells]
        return (
            "/ {} {} {} \\\n"
            "| {} {} {} |\n"
            "\\ {} {} {} /"
        ).format(*cells)


def multiply(a: Transform, b: Transform) -> Transform:
    """Product a @ b: apply a, then b."""
    return a.multiply(b)


def divide(a: Transform, s: float) -> Transform:
    return a.divide(s)


# ----------------------------------------------------------------------
# Primitive constructors

def one() -> Transform:
    """
    All-zero matrix.

    Despite the name this is NOT the multiplicative identity; anything
    multiplied by it is the zero matrix. Kept for compatibility, most likely
    a naming mistake. Use identity() for the identity.
    """
    return Transform(0, 0, 0, 0, 0, 0, 0, 0, 0)


def identity() -> Transform:
    return Transform(1, 0, 0, 0, 1, 0, 0, 0, 1)


def translate(tx: float, ty: float) -> Transform:
    """Translation adding (tx, ty) to a point."""
    return Transform(1, 0, 0, 0, 1, 0, tx, ty, 1)


move = translate


def scale(sx: float, sy: float) -> Transform:
    return Transform(sx, 0, 0, 0, sy, 0, 0, 0, 1)


def rotate(theta: float) -> Transform:
    """
    Rotation by theta radians.

    Counter-clockwise when y points up, clockwise on screen when y points
    down.
    """
    c, s = np.cos(theta), np.sin(theta)
    return Transform(c, s, 0, -s, c, 0, 0, 0, 1)


def rotate_clockwise(theta: float) -> Transform:
    """
    "Clockwise" rotation by theta radians.

    Note: this negates the cosine terms of rotate(theta), not the sine terms,
    so it equals rotate(pi - theta) rather than rotate(-theta) and is not the
    inverse of rotate(theta). The matrix is kept as-is for compatibility.
    """
    c, s = np.cos(theta), np.sin(theta)
    return Transform(-c, s, 0, -s, -c, 0, 0, 0, 1)


def rotate_about_point(theta: float, x: float, y: float) -> Transform:
    """Rotation by theta radians around the point (x, y)."""
    return rotate(theta).with_pivot(x, y)


# Reflections. Functions rather than module constants because fix() mutates.

def reflect_x() -> Transform:
    """Mirror about the X axis: (x, y) -> (x, -y)."""
    return Transform(1, 0, 0, 0, -1, 0, 0, 0, 1)


def reflect_y() -> Transform:
    """Mirror about the Y axis: (x, y) -> (-x, y)."""
    return Transform(-1, 0, 0, 0, 1, 0, 0, 0, 1)


def reflect_origin() -> Transform:
    """Point reflection through the origin: (x, y) -> (-x, -y)."""
    return Transform(-1, 0, 0, 0, -1, 0, 0, 0, 1)


def reflect_diagonal() -> Transform:
    """Mirror about the line y = x: (x, y) -> (y, x)."""
    return Transform(0, 1, 0, 1, 0, 0, 0, 0, 1)


def reflect_antidiagonal() -> Transform:
    """Mirror about the line y = -x: (x, y) -> (-y, -x)."""
    return Transform(0, -1, 0, -1, 0, 0, 0, 0, 1)
