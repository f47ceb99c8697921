"""
Data classes for symmetry generation.

Contains the group identifiers and the value types shared by the point group
and wallpaper generators.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from .errors import InvalidConfigurationError
from .transforms import apply

BASIS_TOLERANCE = 1e-9


class PointGroupFamily(str, Enum):
    """The 14 families of finite 3D point groups."""

    CN = "Cn"
    CNV = "Cnv"
    CNH = "Cnh"
    SN = "Sn"
    DN = "Dn"
    DNH = "Dnh"
    DND = "Dnd"
    T = "T"
    TH = "Th"
    TD = "Td"
    O = "O"
    OH = "Oh"
    I = "I"
    IH = "Ih"

    @property
    def is_polyhedral(self) -> bool:
        """Whether the family is built from a reference solid."""
        return self.value[0] in "TOI"

    def order(self, n: int = 1) -> int:
        """Number of transforms the generator produces for this family.

        Args:
            n: Rotational fold (ignored by the polyhedral families)

        Returns:
            Size of the generated transform set
        """
        return _FAMILY_ORDERS[self](n)


_FAMILY_ORDERS = {
    PointGroupFamily.CN: lambda n: n,
    PointGroupFamily.CNV: lambda n: 2 * n,
    PointGroupFamily.CNH: lambda n: 2 * n,
    PointGroupFamily.SN: lambda n: 2 * n,
    PointGroupFamily.DN: lambda n: 2 * n,
    PointGroupFamily.DNH: lambda n: 4 * n,
    PointGroupFamily.DND: lambda n: 4 * n,
    PointGroupFamily.T: lambda n: 12,
    PointGroupFamily.TH: lambda n: 24,
    PointGroupFamily.TD: lambda n: 24,
    PointGroupFamily.O: lambda n: 24,
    PointGroupFamily.OH: lambda n: 48,
    PointGroupFamily.I: lambda n: 60,
    PointGroupFamily.IH: lambda n: 120,
}


class PlanarGroupId(str, Enum):
    """The 17 wallpaper groups."""

    P1 = "p1"
    P2 = "p2"
    P3 = "p3"
    P4 = "p4"
    P6 = "p6"
    PM = "pm"
    PG = "pg"
    CM = "cm"
    PMM = "pmm"
    PMG = "pmg"
    PGG = "pgg"
    CMM = "cmm"
    P3M1 = "p3m1"
    P31M = "p31m"
    P4M = "p4m"
    P4G = "p4g"
    P6M = "p6m"

    @property
    def degrees_of_freedom(self) -> int:
        """Number of free lattice parameters the group reads."""
        return _GROUP_TRAITS[self][0]

    @property
    def point_group_order(self) -> int:
        """Order of the point group, i.e. coset representatives plus identity."""
        return _GROUP_TRAITS[self][1]


# (degrees of freedom, point group order)
_GROUP_TRAITS = {
    PlanarGroupId.P1: (4, 1),
    PlanarGroupId.P2: (4, 2),
    PlanarGroupId.P3: (1, 3),
    PlanarGroupId.P4: (1, 4),
    PlanarGroupId.P6: (1, 6),
    PlanarGroupId.PM: (2, 2),
    PlanarGroupId.PG: (2, 2),
    PlanarGroupId.CM: (2, 2),
    PlanarGroupId.PMM: (2, 4),
    PlanarGroupId.PMG: (2, 4),
    PlanarGroupId.PGG: (2, 4),
    PlanarGroupId.CMM: (2, 4),
    PlanarGroupId.P3M1: (1, 6),
    PlanarGroupId.P31M: (1, 6),
    PlanarGroupId.P4M: (1, 8),
    PlanarGroupId.P4G: (1, 8),
    PlanarGroupId.P6M: (1, 12),
}


def _frozen_array(values, shape_tail: tuple[int, ...]) -> np.ndarray:
    arr = np.array(values, dtype=np.float64)
    if arr.shape[1:] != shape_tail and arr.shape != shape_tail:
        raise InvalidConfigurationError(
            f"Expected shape (..., {shape_tail}), got {arr.shape}"
        )
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class FundamentalDomain:
    """Fundamental domain polygon of a wallpaper group.

    Attributes:
        points: (N, 2) polygon vertices, closed implicitly last-to-first
        center: Default pivot for the group's rotations
    """
    points: np.ndarray
    center: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, 'points', _frozen_array(self.points, (2,)))
        object.__setattr__(self, 'center', _frozen_array(self.center, (2,)))

    def __len__(self) -> int:
        return len(self.points)

    def edges(self) -> list[tuple[np.ndarray, np.ndarray]]:
        """Return polygon edges as (start, end) point pairs."""
        n = len(self.points)
        return [(self.points[i], self.points[(i + 1) % n]) for i in range(n)]

    def signed_area(self) -> float:
        """Shoelace area; positive for counter-clockwise vertex order."""
        x = self.points[:, 0]
        y = self.points[:, 1]
        return float(0.5 * (np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)))

    def area(self) -> float:
        return abs(self.signed_area())

    def transformed(self, matrix: np.ndarray) -> 'FundamentalDomain':
        """Copy of the domain mapped through a transform (e.g. to outline a tile)."""
        return FundamentalDomain(
            points=apply(matrix, self.points),
            center=apply(matrix, self.center)[0],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'points': self.points.tolist(),
            'center': self.center.tolist(),
        }


@dataclass(frozen=True, eq=False)
class LatticeBasis:
    """Two vectors spanning the translation lattice of a wallpaper group.

    Attributes:
        u: First basis vector (x, y)
        v: Second basis vector (x, y)
    """
    u: np.ndarray
    v: np.ndarray

    def __post_init__(self):
        u = _frozen_array(self.u, (2,))
        v = _frozen_array(self.v, (2,))
        object.__setattr__(self, 'u', u)
        object.__setattr__(self, 'v', v)

        if np.linalg.norm(u) < BASIS_TOLERANCE or np.linalg.norm(v) < BASIS_TOLERANCE:
            raise InvalidConfigurationError(
                f"Lattice basis has a zero-length vector: u={u.tolist()}, v={v.tolist()}"
            )
        scale = np.linalg.norm(u) * np.linalg.norm(v)
        if abs(self.determinant) < BASIS_TOLERANCE * scale:
            raise InvalidConfigurationError(
                f"Lattice basis vectors are parallel: u={u.tolist()}, v={v.tolist()}"
            )

    @classmethod
    def from_components(cls, xs, ys) -> 'LatticeBasis':
        """Build from component-grouped storage.

        Args:
            xs: (Ux, Vx), the x components of both vectors
            ys: (Uy, Vy), the y components of both vectors
        """
        return cls(u=(xs[0], ys[0]), v=(xs[1], ys[1]))

    @property
    def determinant(self) -> float:
        """Signed area of the lattice cell."""
        return float(self.u[0] * self.v[1] - self.u[1] * self.v[0])

    def scaled(self, spacing) -> tuple[np.ndarray, np.ndarray]:
        """Basis vectors with per-axis spacing applied.

        Scaling is not validated again, so a zero spacing yields collapsed
        copies rather than an error.
        """
        spacing = np.asarray(spacing, dtype=np.float64)
        return self.u * spacing, self.v * spacing


@dataclass(eq=False)
class WallpaperResult:
    """Output of the wallpaper generator.

    Attributes:
        transforms: Normalized transform list, identity first
        fundamental_domain: Domain polygon of the generating group
    """
    transforms: list[np.ndarray] = field(default_factory=list)
    fundamental_domain: FundamentalDomain | None = None

    def __len__(self) -> int:
        return len(self.transforms)

    def tiles(self) -> list[FundamentalDomain]:
        """The fundamental domain mapped through every transform."""
        if self.fundamental_domain is None:
            return []
        return [self.fundamental_domain.transformed(m) for m in self.transforms]

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain lists for hosts."""
        return {
            'transforms': [m.tolist() for m in self.transforms],
            'fundamental_domain': (
                self.fundamental_domain.to_dict()
                if self.fundamental_domain is not None else None
            ),
        }
