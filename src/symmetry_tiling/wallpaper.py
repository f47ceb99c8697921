"""
Planar lattice groups.

Construction recipes for the 17 wallpaper groups. Each recipe is a pure
function of the nominal tile size and the group's free parameters, returning
the fundamental domain, the translation lattice and the coset representatives
of the translation subgroup (identity excluded).

Coset representatives are anchored to the vertices and edges of the domain
they are built with. Groups of higher point symmetry chain representatives by
composition (a reflection composed with each rotation) instead of deriving
each one geometrically.

Adapted from the wallpaper group constructions of
https://github.com/hwatheod/wallpaper
"""

import logging
from dataclasses import dataclass

import numpy as np

from .errors import InvalidConfigurationError
from .models import FundamentalDomain, LatticeBasis, PlanarGroupId, _frozen_array
from .transforms import reflection, rotation_2d, translation

logger = logging.getLogger(__name__)

SQRT3 = np.sqrt(3)

# Parameters used when a group is built without any.
DEFAULT_LATTICE_PARAMS: dict[PlanarGroupId, tuple[float, ...]] = {
    PlanarGroupId.P1: (2, 0, 0, 2),
    PlanarGroupId.P2: (2, 0, 0, 2),
    PlanarGroupId.P3: (3,),
    PlanarGroupId.P4: (2,),
    PlanarGroupId.P6: (4,),
    PlanarGroupId.PM: (2, 2),
    PlanarGroupId.PMM: (2, 2),
    PlanarGroupId.P3M1: (5,),
    PlanarGroupId.P4M: (4,),
    PlanarGroupId.P6M: (5,),
    PlanarGroupId.CM: (1, 1),
    PlanarGroupId.PG: (1.5, 1.5),
    PlanarGroupId.PMG: (1.5, 1.2),
    PlanarGroupId.PGG: (1.5, 1.2),
    PlanarGroupId.CMM: (1.5, 1.2),
    PlanarGroupId.P31M: (3,),
    PlanarGroupId.P4G: (1.5,),
}


@dataclass(frozen=True, eq=False)
class PlanarLatticeGroup:
    """A wallpaper group realized as domain, lattice and coset representatives.

    Attributes:
        group_id: Wallpaper group
        domain: Fundamental domain polygon
        lattice: Translation lattice basis
        coset_reps: Non-identity coset representatives, in table order
    """
    group_id: PlanarGroupId
    domain: FundamentalDomain
    lattice: LatticeBasis
    coset_reps: tuple[np.ndarray, ...]

    @classmethod
    def build(
        cls,
        group_id: PlanarGroupId | str,
        lattice_params=(),
        tile_size=(1.0, 1.0)
    ) -> 'PlanarLatticeGroup':
        """Build a wallpaper group from its free parameters.

        Args:
            group_id: Wallpaper group (enum member or name such as 'p4m')
            lattice_params: Up to four group-specific lengths/skews. Missing
                values are zero; an empty sequence selects the group's
                DEFAULT_LATTICE_PARAMS. p1/p2 read (d1x, d1y, d2x, d2y), the
                rectangular groups (dx, dy) and the square/hexagonal groups a
                single size.
            tile_size: Nominal tile the domain is centred in

        Returns:
            PlanarLatticeGroup

        Raises:
            InvalidConfigurationError: For an unknown group, more than four
                parameters, or a degenerate lattice or reflection edge
        """
        try:
            group_id = PlanarGroupId(group_id)
        except ValueError:
            raise InvalidConfigurationError(
                f"Unknown wallpaper group: {group_id}. "
                f"Available: {[g.value for g in PlanarGroupId]}"
            ) from None

        params = [float(p) for p in lattice_params]
        if not params:
            params = [float(p) for p in DEFAULT_LATTICE_PARAMS[group_id]]
        if len(params) > 4:
            raise InvalidConfigurationError(
                f"At most 4 lattice parameters are accepted, got {len(params)}"
            )
        params += [0.0] * (4 - len(params))

        tile = np.asarray(tile_size, dtype=np.float64)
        domain, lattice, reps = RECIPES[group_id](tile, params)

        logger.debug(
            "Built wallpaper group %s with %d coset representatives",
            group_id.value, len(reps),
        )
        return cls(
            group_id=group_id,
            domain=domain,
            lattice=lattice,
            coset_reps=tuple(_frozen_array(r, (4, 4)) for r in reps),
        )

    @property
    def point_group_order(self) -> int:
        return len(self.coset_reps) + 1


# =============================================================================
# Fundamental domain shapes
# =============================================================================

def _polygon(points, offset) -> np.ndarray:
    return np.asarray(points, dtype=np.float64) + np.asarray(offset, dtype=np.float64)


def _rectangle(dx, dy, offset):
    return _polygon([(0, 0), (dx, 0), (dx, dy), (0, dy)], offset)


def _parallelogram(d1x, d2x, d1y, d2y, offset):
    return _polygon(
        [(0, 0), (d1x, d1y), (d1x + d2x, d1y + d2y), (d2x, d2y)],
        offset,
    )


def _half_parallelogram(d1x, d2x, d1y, d2y, offset):
    """Parallelogram spanned by the half basis vectors."""
    return _polygon(
        [(0, 0), (d2x / 2, d2y / 2), ((d1x + d2x) / 2, (d1y + d2y) / 2), (d1x / 2, d1y / 2)],
        offset,
    )


def _half_triangle(d1x, d2x, d1y, d2y, offset):
    return _polygon(
        [(0, 0), (d2x / 2, d2y / 2), ((d1x + d2x) / 2, (d1y + d2y) / 2)],
        offset,
    )


def _rhombus(hex_size, offset):
    """Two equilateral triangles of side hex_size / 2 sharing the x axis."""
    h = hex_size / 2 * SQRT3 / 2
    return _polygon(
        [(0, 0), (hex_size / 4, h), (hex_size / 2, 0), (hex_size / 4, -h)],
        offset,
    )


def _kite(hex_size, offset):
    """One sixth of a hexagon, cut from centre to edge midpoints."""
    h = hex_size / 2 * SQRT3 / 2
    return _polygon(
        [(0, 0), (0, h), (hex_size / 4, h), (3 * hex_size / 8, hex_size * SQRT3 / 8)],
        offset,
    )


def _equilateral_triangle(hex_size, offset):
    h = hex_size / 2 * SQRT3 / 2
    return _polygon([(0, 0), (hex_size / 4, h), (hex_size / 2, 0)], offset)


def _right_triangle(hex_size, offset):
    """30-60-90 triangle: one twelfth of a hexagon."""
    h = hex_size / 2 * SQRT3 / 2
    return _polygon([(0, 0), (0, h), (hex_size / 4, h)], offset)


def _isosceles_triangle(base, offset):
    """Triangle with 30 degree base angles."""
    return _polygon([(0, 0), (base, 0), (base / 2, base / 2 * SQRT3 / 3)], offset)


def _hexagonal_lattice(hex_size):
    d1x = 3 * hex_size / 4
    d1y = hex_size * SQRT3 / 4
    return LatticeBasis(u=(d1x, d1y), v=(d1x, -d1y))


def _chain(rotations, mirror, mirror_first: bool = False) -> list[np.ndarray]:
    """Compose a reflection with each rotation.

    With ``mirror_first`` the reflection is applied after the rotation
    (``mirror @ r``), otherwise before it (``r @ mirror``).
    """
    if mirror_first:
        return [mirror @ r for r in rotations]
    return [r @ mirror for r in rotations]


# =============================================================================
# Recipes: (tile, params) -> (domain, lattice, coset reps)
# =============================================================================

def _p1(tile, d):
    d1x, d1y, d2x, d2y = d
    offset = tile / 2 - np.array([d1x + d2x, d1y + d2y]) / 2
    domain = FundamentalDomain(
        points=_parallelogram(d1x, d2x, d1y, d2y, offset),
        center=np.array([d1x + d2x, d1y + d2y]) / 2 + offset,
    )
    lattice = LatticeBasis(u=(d1x, d1y), v=(d2x, d2y))
    return domain, lattice, []


def _p2(tile, d):
    d1x, d1y, d2x, d2y = d
    offset = tile / 2 - np.array([d1x + d2x, d1y + d2y]) / 2
    center = np.array([d1x, d1y]) / 2 + offset
    domain = FundamentalDomain(
        points=_parallelogram(d1x, d2x, d1y, d2y, offset),
        center=center,
    )
    lattice = LatticeBasis(u=(d1x, d1y), v=(2 * d2x, 2 * d2y))
    return domain, lattice, [rotation_2d(180, center)]


def _p3(tile, d):
    hex_size = d[0]
    center = tile / 2
    domain = FundamentalDomain(points=_rhombus(hex_size, center), center=center)
    reps = [rotation_2d(120, center), rotation_2d(240, center)]
    return domain, _hexagonal_lattice(hex_size), reps


def _p4(tile, d):
    size = d[0]
    center = tile / 2
    domain = FundamentalDomain(
        points=_half_parallelogram(size, 0, 0, size, center),
        center=center,
    )
    lattice = LatticeBasis(u=(size, 0), v=(0, size))
    reps = [rotation_2d(angle, center) for angle in (90, 180, 270)]
    return domain, lattice, reps


def _p6(tile, d):
    hex_size = d[0]
    center = tile / 2
    domain = FundamentalDomain(points=_kite(hex_size, center), center=center)
    reps = [rotation_2d(60 * (i + 1), center) for i in range(5)]
    return domain, _hexagonal_lattice(hex_size), reps


def _pm(tile, d):
    dx, dy = d[0], d[1]
    offset = tile / 2 - np.array([dx / 4, dy / 2])
    pts = _rectangle(dx / 2, dy, offset)
    domain = FundamentalDomain(points=pts, center=tile / 2)
    lattice = LatticeBasis(u=(dx, 0), v=(0, dy))
    return domain, lattice, [reflection(pts[0], pts[3])]


def _pg(tile, d):
    dx, dy = d[0], d[1]
    offset = tile / 2 - np.array([dx, dy]) / 2
    domain = FundamentalDomain(points=_rectangle(dx, dy, offset), center=tile / 2)
    lattice = LatticeBasis(u=(dx, 0), v=(0, 2 * dy))
    mirror = reflection(offset + (dx / 2, 0), offset + (dx / 2, dy))
    glide = translation((0, dy)) @ mirror
    return domain, lattice, [glide]


def _cm(tile, d):
    dx, dy = d[0], d[1]
    offset = tile / 2 - np.array([dx, dy]) / 2
    pts = _rectangle(dx, dy, offset)
    domain = FundamentalDomain(points=pts, center=tile / 2)
    lattice = LatticeBasis.from_components(xs=(dx, dx), ys=(dy, -dy))
    return domain, lattice, [reflection(pts[0], pts[3])]


def _pmm(tile, d):
    dx, dy = d[0], d[1]
    offset = tile / 2 - np.array([dx, dy]) / 4
    pts = _rectangle(dx / 2, dy / 2, offset)
    domain = FundamentalDomain(points=pts, center=tile / 2)
    lattice = LatticeBasis(u=(dx, 0), v=(0, dy))
    reps = [
        reflection(pts[0], pts[1]),
        reflection(pts[0], pts[3]),
        rotation_2d(180, offset),
    ]
    return domain, lattice, reps


def _pmg(tile, d):
    dx, dy = d[0], d[1]
    offset = tile / 2 - np.array([dx, dy]) / 2
    pts = _rectangle(dx, dy, offset)
    domain = FundamentalDomain(points=pts, center=tile / 2)
    lattice = LatticeBasis(u=(2 * dx, 0), v=(0, 2 * dy))
    mirror = reflection(pts[1], pts[2])
    half_turn = rotation_2d(180, offset + (dx / 2, 0))
    return domain, lattice, [mirror, half_turn, mirror @ half_turn]


def _pgg(tile, d):
    dx, dy = d[0], d[1]
    offset = tile / 2 - np.array([dx, dy]) / 2
    pts = _rectangle(dx, dy, offset)
    domain = FundamentalDomain(points=pts, center=tile / 2)
    lattice = LatticeBasis(u=(2 * dx, 0), v=(0, 2 * dy))
    glide = translation((0, dy)) @ reflection(pts[1], pts[2])
    half_turn = rotation_2d(180, offset + (dx / 2, 0))
    return domain, lattice, [glide, half_turn, glide @ half_turn]


def _cmm(tile, d):
    dx, dy = d[0], d[1]
    offset = tile / 2 - np.array([dx, dy]) / 2
    pts = _rectangle(dx, dy, offset)
    domain = FundamentalDomain(points=pts, center=tile / 2)
    lattice = LatticeBasis.from_components(xs=(dx, dx), ys=(2 * dy, -2 * dy))
    mirror = reflection(pts[1], pts[2])
    half_turn = rotation_2d(180, offset + (dx / 2, 0))
    return domain, lattice, [mirror, half_turn, half_turn @ mirror]


def _p3m1(tile, d):
    hex_size = d[0]
    center = tile / 2
    pts = _equilateral_triangle(hex_size, center)
    domain = FundamentalDomain(points=pts, center=center)
    turns = [rotation_2d(120, center), rotation_2d(240, center)]
    mirror = reflection(pts[2], pts[0])
    reps = turns + [mirror] + _chain(turns, mirror)
    return domain, _hexagonal_lattice(hex_size), reps


def _p31m(tile, d):
    base = d[0]
    offset = tile / 2 - np.array([base / 2, 0])
    pts = _isosceles_triangle(base, offset)
    center = np.array([3 * base / 4, base * SQRT3 / 4]) + offset
    domain = FundamentalDomain(points=pts, center=center)
    lattice = LatticeBasis(u=(base, 0), v=(base / 2, base * SQRT3 / 2))
    turns = [rotation_2d(120, pts[2]), rotation_2d(240, pts[2])]
    mirror = reflection(pts[1], center)
    reps = turns + [mirror] + _chain(turns, mirror, mirror_first=True)
    return domain, lattice, reps


def _p4m(tile, d):
    size = d[0]
    center = tile / 2
    pts = _half_triangle(size, 0, 0, size, center)
    domain = FundamentalDomain(points=pts, center=center)
    lattice = LatticeBasis(u=(size, 0), v=(0, size))
    turns = [rotation_2d(angle, center) for angle in (90, 180, 270)]
    mirror = reflection(pts[1], pts[2])
    reps = turns + [mirror] + _chain(turns, mirror)
    return domain, lattice, reps


def _p4g(tile, d):
    size = d[0]
    offset = tile / 2 - size / 2
    pts = _rectangle(size, size, offset)
    domain = FundamentalDomain(points=pts, center=offset)
    lattice = LatticeBasis.from_components(
        xs=(2 * size, 2 * size), ys=(2 * size, -2 * size)
    )
    turns = [rotation_2d(angle, offset) for angle in (90, 180, 270)]
    mirror = reflection(pts[2], pts[3])
    reps = turns + [mirror] + _chain(turns, mirror, mirror_first=True)
    return domain, lattice, reps


def _p6m(tile, d):
    hex_size = d[0]
    center = tile / 2
    pts = _right_triangle(hex_size, center)
    domain = FundamentalDomain(points=pts, center=center)
    turns = [rotation_2d(60 * (i + 1), center) for i in range(5)]
    mirror = reflection(pts[0], pts[2])
    reps = turns + [mirror] + _chain(turns, mirror)
    return domain, _hexagonal_lattice(hex_size), reps


RECIPES = {
    PlanarGroupId.P1: _p1,
    PlanarGroupId.P2: _p2,
    PlanarGroupId.P3: _p3,
    PlanarGroupId.P4: _p4,
    PlanarGroupId.P6: _p6,
    PlanarGroupId.PM: _pm,
    PlanarGroupId.PG: _pg,
    PlanarGroupId.CM: _cm,
    PlanarGroupId.PMM: _pmm,
    PlanarGroupId.PMG: _pmg,
    PlanarGroupId.PGG: _pgg,
    PlanarGroupId.CMM: _cmm,
    PlanarGroupId.P3M1: _p3m1,
    PlanarGroupId.P31M: _p31m,
    PlanarGroupId.P4M: _p4m,
    PlanarGroupId.P4G: _p4g,
    PlanarGroupId.P6M: _p6m,
}
