"""Exceptions raised by the symmetry generators."""


class SymmetryError(Exception):
    """Base exception for symmetry generation errors."""

    pass


class InvalidConfigurationError(SymmetryError, ValueError):
    """Raised when a generator is configured with structurally invalid input.

    Examples are a rotation order below 1, coincident reflection points or a
    lattice basis that does not span the plane.
    """

    pass


class NumericDegeneracyError(SymmetryError, ArithmeticError):
    """Raised when the data makes a computation numerically degenerate.

    Near-zero plane normals, degenerate look directions and near-singular
    matrices during inversion fall in this category.
    """

    pass
