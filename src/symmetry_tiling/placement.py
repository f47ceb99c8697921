"""
Instance placement.

Composes generated transform sets with caller-supplied transforms, producing
the per-instance matrices a renderer draws. Batching into draw calls is left
to the renderer.
"""

import numpy as np
from scipy.spatial.transform import Rotation

from .transforms import identity, scaling, translation


def trs(position=(0.0, 0.0, 0.0), euler_degrees=(0.0, 0.0, 0.0), scale=(1.0, 1.0, 1.0)) -> np.ndarray:
    """Translate-rotate-scale transform.

    The Euler angles are applied about the fixed z, x and y axes in that order.

    Args:
        position: Translation
        euler_degrees: (x, y, z) rotation angles in degrees
        scale: Per-axis scale, or a scalar for a uniform scale

    Returns:
        translate(position) @ rotate(euler) @ scale(scale)
    """
    ex, ey, ez = np.asarray(euler_degrees, dtype=np.float64)
    rot = np.eye(4)
    rot[:3, :3] = Rotation.from_euler('zxy', [ez, ex, ey], degrees=True).as_matrix()
    return translation(position) @ rot @ scaling(scale)


def instance_matrices(
    transforms: list[np.ndarray],
    base: np.ndarray | None = None,
    step: np.ndarray | None = None,
    apply_after: bool = True
) -> list[np.ndarray]:
    """Compose symmetry transforms with a base and an accumulating step.

    For the i-th transform ``M`` the cumulative step is ``C = step^(i+1)``
    and the result is ``C @ M @ base`` (``apply_after``) or ``M @ C @ base``.

    Args:
        transforms: Symmetry transforms, e.g. from generate_point_group
        base: Transform applied to the object before anything else
        step: Extra transform compounded once more for every instance
        apply_after: Whether the cumulative step acts after the symmetry

    Returns:
        One 4x4 matrix per input transform
    """
    base = identity() if base is None else np.asarray(base, dtype=np.float64)
    step = identity() if step is None else np.asarray(step, dtype=np.float64)

    result = []
    cumulative = step
    for m in transforms:
        placed = cumulative @ m if apply_after else m @ cumulative
        result.append(placed @ base)
        cumulative = cumulative @ step
    return result
