"""
Transform primitives.

All transforms are 4x4 homogeneous matrices acting on column vectors.
Composition follows the matrix product: ``compose(A, B)`` is ``A @ B`` and
applied to a point means "apply B, then A".
"""

from functools import reduce

import numpy as np
from scipy.spatial import cKDTree
from scipy.spatial.transform import Rotation

from .errors import InvalidConfigurationError, NumericDegeneracyError

RIGHT = np.array([1.0, 0.0, 0.0])
UP = np.array([0.0, 1.0, 0.0])
FORWARD = np.array([0.0, 0.0, 1.0])

EPSILON = 1e-12
MAX_CONDITION = 1e12


def _as_vector3(values, fill: float = 0.0) -> np.ndarray:
    """Promote a 2- or 3-component sequence to a 3-vector."""
    vec = np.asarray(values, dtype=np.float64).reshape(-1)
    if vec.size == 2:
        return np.array([vec[0], vec[1], fill])
    if vec.size != 3:
        raise InvalidConfigurationError(
            f"Expected 2 or 3 components, got {vec.size}"
        )
    return vec


def identity() -> np.ndarray:
    """Return the 4x4 identity transform."""
    return np.eye(4)


def translation(offset) -> np.ndarray:
    """Translation by a 2D or 3D offset (2D offsets lie in the z=0 plane)."""
    m = np.eye(4)
    m[:3, 3] = _as_vector3(offset)
    return m


def scaling(factors) -> np.ndarray:
    """Scale transform.

    Args:
        factors: Scalar for a uniform scale, or 2/3 per-axis factors
            (a missing z factor is 1)

    Returns:
        4x4 scale matrix
    """
    if np.ndim(factors) == 0:
        diag = np.full(3, float(factors))
    else:
        diag = _as_vector3(factors, fill=1.0)
    m = np.eye(4)
    m[0, 0], m[1, 1], m[2, 2] = diag
    return m


def rotation(axis, angle_degrees: float, pivot=None) -> np.ndarray:
    """Rotation about an axis through a pivot point.

    Args:
        axis: Rotation axis (need not be normalized)
        angle_degrees: Rotation angle in degrees, counter-clockwise when
            looking down the axis towards the origin
        pivot: Point the axis passes through (defaults to the origin)

    Returns:
        4x4 matrix equal to translate(pivot) @ rotate @ translate(-pivot)
    """
    axis = _as_vector3(axis)
    length = np.linalg.norm(axis)
    if length < EPSILON:
        raise NumericDegeneracyError("Rotation axis has zero length")

    rotvec = np.radians(angle_degrees) * axis / length
    m = np.eye(4)
    m[:3, :3] = Rotation.from_rotvec(rotvec).as_matrix()

    if pivot is None:
        return m
    pivot = _as_vector3(pivot)
    return translation(pivot) @ m @ translation(-pivot)


def rotation_2d(angle_degrees: float, pivot=(0.0, 0.0)) -> np.ndarray:
    """Planar rotation: about the z axis through a 2D pivot."""
    return rotation(FORWARD, angle_degrees, pivot)


def reflection(p1, p2, p3=None) -> np.ndarray:
    """Reflection across the plane through three points.

    With ``p3`` omitted, the plane is the vertical plane containing the line
    through ``p1`` and ``p2``, so 2D points reflect across that line.

    Uses the Householder form ``I - 2 n n^T`` with the translation column
    ``-2 d n``, where ``n . x + d = 0`` is the plane equation.

    Args:
        p1: First point on the line/plane (2D or 3D)
        p2: Second point on the line/plane
        p3: Optional third point on the plane

    Returns:
        4x4 reflection matrix fixing every point of the plane
    """
    a = _as_vector3(p1)
    b = _as_vector3(p2)
    if np.array_equal(a, b):
        raise InvalidConfigurationError(
            f"Reflection line is undefined for coincident points {a.tolist()}"
        )
    c = a + FORWARD if p3 is None else _as_vector3(p3)

    normal = np.cross(b - a, c - a)
    length = np.linalg.norm(normal)
    if length < EPSILON:
        raise NumericDegeneracyError("Reflection plane normal is degenerate")
    normal = normal / length
    distance = -np.dot(normal, a)

    m = np.eye(4)
    m[:3, :3] -= 2.0 * np.outer(normal, normal)
    m[:3, 3] = -2.0 * distance * normal
    return m


def look_rotation(forward, up=UP) -> np.ndarray:
    """Rotation that points local +z along ``forward`` with +y towards ``up``.

    Args:
        forward: Target direction for the local z axis
        up: Hint for the local y axis; must not be parallel to forward

    Returns:
        4x4 rotation matrix
    """
    forward = _as_vector3(forward)
    up = _as_vector3(up)

    f_len = np.linalg.norm(forward)
    if f_len < EPSILON:
        raise NumericDegeneracyError("Look direction has zero length")
    z = forward / f_len

    x = np.cross(up, z)
    x_len = np.linalg.norm(x)
    if x_len < EPSILON:
        raise NumericDegeneracyError("Up vector is parallel to the look direction")
    x = x / x_len
    y = np.cross(z, x)

    m = np.eye(4)
    m[:3, 0] = x
    m[:3, 1] = y
    m[:3, 2] = z
    return m


def compose(*matrices: np.ndarray) -> np.ndarray:
    """Compose transforms left to right; the rightmost is applied first."""
    if not matrices:
        return identity()
    return reduce(np.matmul, matrices)


def is_affine(matrix: np.ndarray, tolerance: float = 1e-9) -> bool:
    """Check that a 4x4 matrix has the affine bottom row [0, 0, 0, 1]."""
    matrix = np.asarray(matrix)
    if matrix.shape != (4, 4):
        return False
    return bool(np.allclose(matrix[3], [0.0, 0.0, 0.0, 1.0], atol=tolerance))


def invert(matrix: np.ndarray) -> np.ndarray:
    """Invert an affine transform.

    Raises:
        NumericDegeneracyError: If the matrix is singular or too badly
            conditioned for a meaningful inverse
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    condition = np.linalg.cond(matrix[:3, :3])
    if not np.isfinite(condition) or condition > MAX_CONDITION:
        raise NumericDegeneracyError("Transform is singular and cannot be inverted")

    inverse = np.eye(4)
    linear_inv = np.linalg.inv(matrix[:3, :3])
    inverse[:3, :3] = linear_inv
    inverse[:3, 3] = -linear_inv @ matrix[:3, 3]
    return inverse


def apply(matrix: np.ndarray, points) -> np.ndarray:
    """Transform an (N, 2) or (N, 3) array of points.

    2D points are embedded in the z=0 plane and returned as 2D.
    """
    pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
    planar = pts.shape[1] == 2
    if planar:
        pts = np.hstack([pts, np.zeros((len(pts), 1))])

    result = pts @ matrix[:3, :3].T + matrix[:3, 3]
    return result[:, :2] if planar else result


def orbit_points(
    transforms: list[np.ndarray],
    point=(0.0, 0.0, 0.0),
    tolerance: float = 1e-8
) -> np.ndarray:
    """Distinct images of a point under a set of transforms.

    Images closer than ``tolerance`` are merged; the first occurrence in
    transform order is kept.

    Args:
        transforms: Transforms to apply
        point: 3D point to map
        tolerance: Distance threshold for considering images identical

    Returns:
        (M, 3) array of unique image points
    """
    if len(transforms) == 0:
        return np.zeros((0, 3))

    origin = _as_vector3(point)
    images = np.array([apply(m, origin)[0] for m in transforms])

    tree = cKDTree(images)
    unique_indices = []
    visited = set()

    for i in range(len(images)):
        if i in visited:
            continue
        for n in tree.query_ball_point(images[i], tolerance):
            visited.add(n)
        unique_indices.append(i)

    return images[unique_indices]
