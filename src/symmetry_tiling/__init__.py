"""
Symmetry Tiling - Symmetric Arrangements and Periodic Tilings.

Generates the 4x4 transforms realizing a finite 3D point group or one of the
17 wallpaper groups, so that copies of an object placed at each transform form
a symmetric arrangement or a periodic tiling.

Example:
    >>> from symmetry_tiling import generate_point_group, generate_wallpaper_group
    >>>
    >>> transforms = generate_point_group("Dnh", n=6, radius=2.0)
    >>> print(len(transforms))
    24

    >>> result = generate_wallpaper_group("p4m", 3, 3, lattice_params=(4,))
    >>> print(len(result.transforms), len(result.fundamental_domain))
    72 3
"""

__version__ = "1.0.0"

# Configuration
from .config import WALLPAPER_PRESETS, PointGroupConfig, WallpaperConfig

# Errors
from .errors import InvalidConfigurationError, NumericDegeneracyError, SymmetryError

# Wallpaper expansion
from .expander import WallpaperExpander, generate_wallpaper_group

# Data classes
from .models import (
    FundamentalDomain,
    LatticeBasis,
    PlanarGroupId,
    PointGroupFamily,
    WallpaperResult,
)

# Instance placement
from .placement import instance_matrices, trs

# Point groups
from .point_groups import generate_point_group, polyhedral_transforms

# Reference solids
from .polyhedra import REFERENCE_SOLIDS, Polyhedron, get_reference_solid

# Transform primitives
from .transforms import (
    FORWARD,
    RIGHT,
    UP,
    apply,
    compose,
    identity,
    invert,
    look_rotation,
    orbit_points,
    reflection,
    rotation,
    rotation_2d,
    scaling,
    translation,
)

# Planar lattice groups
from .wallpaper import PlanarLatticeGroup

__all__ = [
    # Version
    "__version__",
    # Core functions
    "generate_point_group",
    "generate_wallpaper_group",
    "polyhedral_transforms",
    # Generators
    "PlanarLatticeGroup",
    "WallpaperExpander",
    # Data classes
    "PointGroupFamily",
    "PlanarGroupId",
    "FundamentalDomain",
    "LatticeBasis",
    "WallpaperResult",
    # Configuration
    "PointGroupConfig",
    "WallpaperConfig",
    "WALLPAPER_PRESETS",
    # Errors
    "SymmetryError",
    "InvalidConfigurationError",
    "NumericDegeneracyError",
    # Transforms
    "identity",
    "translation",
    "scaling",
    "rotation",
    "rotation_2d",
    "reflection",
    "look_rotation",
    "compose",
    "invert",
    "apply",
    "orbit_points",
    "RIGHT",
    "UP",
    "FORWARD",
    # Reference solids
    "Polyhedron",
    "REFERENCE_SOLIDS",
    "get_reference_solid",
    # Placement
    "instance_matrices",
    "trs",
]
