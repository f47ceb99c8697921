"""
Point group generator.

Builds the transform sets of the 14 finite point group families. Every set is
the concatenation of generator orbits: a ring of rotations about the up axis,
mirrored or rotated copies of that ring, or one orientation per (face, vertex)
pair of a reference solid for the polyhedral families.

Each transform first moves the object ``radius`` units back along the forward
axis, then orients it, so copies sit on a circle (or sphere) of that radius
around the local origin.
"""

import logging

import numpy as np

from .errors import InvalidConfigurationError
from .models import PointGroupFamily
from .polyhedra import Polyhedron, cube, icosahedron, octahedron, tetrahedron
from .transforms import FORWARD, UP, look_rotation, rotation, scaling, translation

logger = logging.getLogger(__name__)

# Vertical mirror: the plane x=0, which contains the up axis.
# Horizontal mirror: the plane y=0, perpendicular to the up axis.
VERTICAL_MIRROR = scaling((-1.0, 1.0, 1.0))
HORIZONTAL_MIRROR = scaling((1.0, -1.0, 1.0))


def rotations(n: int, step_angle: float, radius: float) -> list[np.ndarray]:
    """Ring of ``n`` copies spaced by ``step_angle`` degrees about the up axis.

    Args:
        n: Number of copies
        step_angle: Angle between successive copies in degrees
        radius: Distance of the ring from the local origin

    Returns:
        List of rotate(step_angle * i, UP) @ translate(-FORWARD * radius)
    """
    offset = translation(-FORWARD * radius)
    return [rotation(UP, step_angle * i) @ offset for i in range(n)]


def reflect_all(matrices: list[np.ndarray], mirror: np.ndarray) -> list[np.ndarray]:
    return [mirror @ m for m in matrices]


def rotate_all(
    matrices: list[np.ndarray],
    axis: np.ndarray,
    angle: float
) -> list[np.ndarray]:
    r = rotation(axis, angle)
    return [r @ m for m in matrices]


def polyhedral_transforms(solid: Polyhedron, radius: float) -> list[np.ndarray]:
    """One orientation per (face, vertex) pair of a reference solid.

    Each transform looks along the direction from the face centroid to the
    vertex, with the centroid as the up hint. All copies use the same
    ``radius`` offset regardless of the vertex position on the solid.

    Args:
        solid: Reference solid
        radius: Placement radius

    Returns:
        List of transforms, faces in order, vertices in face order
    """
    offset = translation(-FORWARD * radius)
    result = []
    for face in solid.face_points():
        centroid = face.mean(axis=0)
        for vertex in face:
            result.append(look_rotation(vertex - centroid, centroid) @ offset)
    return result


# =============================================================================
# Family constructions
# =============================================================================

def _cyclic(n, step, radius):
    return rotations(n, step, radius)


def _pyramidal(n, step, radius):
    return rotations(n, step, radius) + reflect_all(
        rotations(n, step, radius), VERTICAL_MIRROR
    )


def _reflection(n, step, radius):
    return rotations(n, step, radius) + reflect_all(
        rotations(n, step, radius), HORIZONTAL_MIRROR
    )


def _improper(n, step, radius):
    ring = rotations(n, step * 2, radius)
    shifted = rotate_all(rotations(n, step * 2, radius), UP, step)
    return ring + reflect_all(shifted, HORIZONTAL_MIRROR)


def _dihedral(n, step, radius):
    return rotations(n, step, radius) + rotate_all(
        rotations(n, step, radius), FORWARD, 180.0
    )


def _prismatic(n, step, radius):
    base = _pyramidal(n, step, radius)
    return base + reflect_all(base, HORIZONTAL_MIRROR)


def _antiprismatic(n, step, radius):
    base = _pyramidal(n, step, radius)
    return base + rotate_all(reflect_all(base, HORIZONTAL_MIRROR), UP, step / 2)


def _from_solid(solid_factory, mirrored: bool):
    def build(n, step, radius):
        matrices = polyhedral_transforms(solid_factory(), radius)
        if mirrored:
            matrices = matrices + reflect_all(matrices, VERTICAL_MIRROR)
        return matrices
    return build


FAMILY_BUILDERS = {
    PointGroupFamily.CN: _cyclic,
    PointGroupFamily.CNV: _pyramidal,
    PointGroupFamily.CNH: _reflection,
    PointGroupFamily.SN: _improper,
    PointGroupFamily.DN: _dihedral,
    PointGroupFamily.DNH: _prismatic,
    PointGroupFamily.DND: _antiprismatic,
    PointGroupFamily.T: _from_solid(tetrahedron, mirrored=False),
    PointGroupFamily.TH: _from_solid(cube, mirrored=False),
    PointGroupFamily.TD: _from_solid(tetrahedron, mirrored=True),
    PointGroupFamily.O: _from_solid(octahedron, mirrored=False),
    PointGroupFamily.OH: _from_solid(octahedron, mirrored=True),
    PointGroupFamily.I: _from_solid(icosahedron, mirrored=False),
    PointGroupFamily.IH: _from_solid(icosahedron, mirrored=True),
}


def generate_point_group(
    family: PointGroupFamily | str,
    n: int = 1,
    radius: float = 0.0
) -> list[np.ndarray]:
    """Generate the transform set of a point group.

    Args:
        family: Point group family (enum member or name such as 'Dnh')
        n: Rotational fold, at least 1 (ignored by polyhedral families)
        radius: Placement radius; zero or negative values are allowed

    Returns:
        List of 4x4 transforms, the 0 degree rotation first

    Raises:
        InvalidConfigurationError: For an unknown family, or n that is not
            a finite integer >= 1
    """
    try:
        family = PointGroupFamily(family)
    except ValueError:
        raise InvalidConfigurationError(
            f"Unknown point group family: {family}. "
            f"Available: {[f.value for f in PointGroupFamily]}"
        ) from None

    if not np.isfinite(n) or int(n) != n or n < 1:
        raise InvalidConfigurationError(f"Order n must be an integer >= 1, got {n}")
    n = int(n)

    step = 360.0 / n
    matrices = FAMILY_BUILDERS[family](n, step, float(radius))

    logger.debug(
        "Generated %d transforms for point group %s (n=%d, radius=%s)",
        len(matrices), family.value, n, radius,
    )
    return matrices
