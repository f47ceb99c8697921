"""Validated configuration models for the symmetry generators.

Hosts pass configuration as plain mappings; these models validate and freeze
it before any geometry is built.
"""

from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidConfigurationError
from .expander import generate_wallpaper_group
from .models import PlanarGroupId, PointGroupFamily, WallpaperResult
from .point_groups import generate_point_group
from .wallpaper import DEFAULT_LATTICE_PARAMS


class PointGroupConfig(BaseModel):
    """Configuration of a point group arrangement.

    Attributes:
        family: Point group family.
        n: Rotational fold.
        radius: Placement radius.

    Example:
        >>> config = PointGroupConfig(family="Dnh", n=6, radius=2.0)
        >>> len(config.generate())
        24
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    family: PointGroupFamily
    n: int = Field(1, ge=1)
    radius: float = 0.0

    def generate(self) -> list[np.ndarray]:
        return generate_point_group(self.family, self.n, self.radius)


class WallpaperConfig(BaseModel):
    """Configuration of a wallpaper pattern.

    Attributes:
        group: Wallpaper group.
        repeat_x: Copies along the first lattice vector.
        repeat_y: Copies along the second lattice vector.
        lattice_params: Group-specific lattice parameters; empty selects the
            group's defaults.
        tile_size: Nominal tile the fundamental domain is centred in.
        unit_offset: Offset applied to the object before the group acts.
        unit_scale: Scale applied to the object before the offset.
        spacing: Per-axis lattice spacing factors.
        final_scale: Placement scale of the whole pattern.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    group: PlanarGroupId
    repeat_x: int = 1
    repeat_y: int = 1
    lattice_params: tuple[float, ...] = ()
    tile_size: tuple[float, float] = (1.0, 1.0)
    unit_offset: tuple[float, float] = (0.0, 0.0)
    unit_scale: float = 1.0
    spacing: tuple[float, float] = (1.0, 1.0)
    final_scale: float = 1.0

    @field_validator("lattice_params")
    @classmethod
    def validate_lattice_params(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        """Validate at most four lattice parameters."""
        if len(v) > 4:
            raise ValueError(f"lattice_params accepts at most 4 values, got {len(v)}")
        return v

    @classmethod
    def preset(
        cls,
        group: PlanarGroupId | str,
        repeat_x: int = 1,
        repeat_y: int = 1,
        final_scale: float = 1.0
    ) -> "WallpaperConfig":
        """Built-in parameters that lay out a unit-sized object well.

        Raises:
            InvalidConfigurationError: If the group is unknown
        """
        try:
            group = PlanarGroupId(group)
        except ValueError:
            raise InvalidConfigurationError(
                f"Unknown wallpaper group: {group}. "
                f"Available: {[g.value for g in PlanarGroupId]}"
            ) from None
        return cls(
            group=group,
            repeat_x=repeat_x,
            repeat_y=repeat_y,
            final_scale=final_scale,
            **WALLPAPER_PRESETS[group],
        )

    def generate(self) -> WallpaperResult:
        return generate_wallpaper_group(
            self.group,
            repeat_x=self.repeat_x,
            repeat_y=self.repeat_y,
            lattice_params=self.lattice_params,
            unit_offset=self.unit_offset,
            unit_scale=self.unit_scale,
            spacing=self.spacing,
            final_scale=self.final_scale,
            tile_size=self.tile_size,
        )


_PRESET_LAYOUTS: dict[PlanarGroupId, dict[str, Any]] = {
    PlanarGroupId.P1: {"unit_offset": (0, 0)},
    PlanarGroupId.P2: {"unit_offset": (-2.5, 0.5)},
    PlanarGroupId.P3: {"unit_offset": (-2.75, -1.8)},
    PlanarGroupId.P4: {"unit_offset": (-2.5, -0.5)},
    PlanarGroupId.P6: {"unit_offset": (-3.5, -2.232)},
    PlanarGroupId.PM: {"unit_offset": (-2, -1)},
    PlanarGroupId.PMM: {"unit_offset": (-2, -1)},
    PlanarGroupId.P3M1: {
        "tile_size": (1, 0),
        "unit_offset": (-4.25, -2.17),
    },
    PlanarGroupId.P4M: {
        "tile_size": (-3.26, -4),
        "spacing": (1, 2),
        "unit_scale": 2,
        "unit_offset": (-4.73, 4),
    },
    PlanarGroupId.P6M: {
        "tile_size": (0.5, 1),
        "unit_offset": (-4.02, -2.63),
    },
    PlanarGroupId.CM: {
        "spacing": (2, 0.5),
        "unit_offset": (-2, 0),
    },
    PlanarGroupId.PG: {"unit_offset": (-1.5, 0)},
    PlanarGroupId.PMG: {"unit_offset": (0, 0)},
    PlanarGroupId.PGG: {"unit_offset": (0, 0)},
    PlanarGroupId.CMM: {"unit_offset": (0, 0)},
    PlanarGroupId.P31M: {"unit_offset": (-3.46, -1.41)},
    PlanarGroupId.P4G: {"unit_offset": (0, 0)},
}

WALLPAPER_PRESETS: dict[PlanarGroupId, dict[str, Any]] = {
    group: {"lattice_params": DEFAULT_LATTICE_PARAMS[group], **layout}
    for group, layout in _PRESET_LAYOUTS.items()
}
