"""
Wallpaper expansion.

Expands the coset representatives of a planar lattice group across a finite
patch of its lattice and normalizes the result so the first copy sits at the
object's own local frame.
"""

import logging

import numpy as np

from .models import PlanarGroupId, WallpaperResult
from .transforms import identity, invert, scaling, translation
from .wallpaper import PlanarLatticeGroup

logger = logging.getLogger(__name__)


class WallpaperExpander:
    """Expand a planar lattice group into a finite list of transforms.

    Args:
        group: Planar lattice group to expand
        repeat_x: Copies along the first lattice vector
        repeat_y: Copies along the second lattice vector
        unit_offset: 2D offset applied to the object before the group acts
        unit_scale: Uniform scale applied to the object before the offset
        spacing: Per-axis (x, y) factors applied to both lattice vectors
        final_scale: Uniform factor applied to the placement of every copy

    Example:
        >>> group = PlanarLatticeGroup.build('p1', (2, 0, 0, 2))
        >>> transforms = WallpaperExpander(group, 2, 2).expand()
        >>> len(transforms)
        4
    """

    def __init__(
        self,
        group: PlanarLatticeGroup,
        repeat_x: int = 1,
        repeat_y: int = 1,
        unit_offset=(0.0, 0.0),
        unit_scale: float = 1.0,
        spacing=(1.0, 1.0),
        final_scale: float = 1.0
    ):
        self.group = group
        self.repeat_x = int(repeat_x)
        self.repeat_y = int(repeat_y)
        self.unit_offset = np.asarray(unit_offset, dtype=np.float64)
        self.unit_scale = float(unit_scale)
        self.spacing = np.asarray(spacing, dtype=np.float64)
        self.final_scale = float(final_scale)

    def unit_transform(self) -> np.ndarray:
        """translate(unit_offset) @ scale(unit_scale)."""
        return translation(self.unit_offset) @ scaling(self.unit_scale)

    def seeds(self) -> list[np.ndarray]:
        """One seed per coset representative, identity representative first."""
        unit = self.unit_transform()
        return [unit] + [rep @ unit for rep in self.group.coset_reps]

    def _lattice_copies(self, seed: np.ndarray) -> list[np.ndarray]:
        u, v = self.group.lattice.scaled(self.spacing)
        copies = []
        for j in range(self.repeat_y):
            row = translation(j * v)
            for i in range(self.repeat_x):
                copies.append(row @ translation(i * u) @ seed)
        return copies

    def raw_transforms(self) -> list[np.ndarray]:
        """Lattice copies of every seed, before normalization."""
        matrices = []
        for seed in self.seeds():
            matrices.extend(self._lattice_copies(seed))
        return matrices

    def expand(self) -> list[np.ndarray]:
        """Normalized, rescaled transform list.

        Every entry is left-multiplied by the inverse of the first, which is
        then exactly the identity. The final scale multiplies the translation
        part of every entry, spreading copies apart without resizing them, so
        the identity-first invariant survives it.

        Raises:
            NumericDegeneracyError: If the first transform is singular
                (e.g. a zero unit scale)
        """
        matrices = self.raw_transforms()
        if not matrices:
            return []

        first_inverse = invert(matrices[0])
        normalized = [identity()] + [first_inverse @ m for m in matrices[1:]]

        for m in normalized:
            m[:3, 3] *= self.final_scale
        return normalized


def generate_wallpaper_group(
    group_id: PlanarGroupId | str,
    repeat_x: int = 1,
    repeat_y: int = 1,
    lattice_params=(),
    unit_offset=(0.0, 0.0),
    unit_scale: float = 1.0,
    spacing=(1.0, 1.0),
    final_scale: float = 1.0,
    tile_size=(1.0, 1.0)
) -> WallpaperResult:
    """Generate the transforms of a periodic wallpaper pattern.

    Args:
        group_id: Wallpaper group name, e.g. 'p4m'
        repeat_x: Copies along the first lattice vector (< 1 gives no copies)
        repeat_y: Copies along the second lattice vector (< 1 gives no copies)
        lattice_params: Group-specific lattice parameters (up to four);
            empty selects the group's defaults
        unit_offset: Offset applied to the object before the group acts
        unit_scale: Scale applied to the object before the offset
        spacing: Per-axis lattice spacing factors
        final_scale: Placement scale of the whole pattern
        tile_size: Nominal tile the fundamental domain is centred in

    Returns:
        WallpaperResult with identity-first transforms and the fundamental domain
    """
    group = PlanarLatticeGroup.build(group_id, lattice_params, tile_size)
    expander = WallpaperExpander(
        group,
        repeat_x=repeat_x,
        repeat_y=repeat_y,
        unit_offset=unit_offset,
        unit_scale=unit_scale,
        spacing=spacing,
        final_scale=final_scale,
    )
    transforms = expander.expand()

    logger.debug(
        "Expanded wallpaper group %s over %dx%d lattice into %d transforms",
        group.group_id.value, expander.repeat_x, expander.repeat_y, len(transforms),
    )
    return WallpaperResult(transforms=transforms, fundamental_domain=group.domain)
