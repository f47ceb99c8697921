"""Tests for the planar lattice groups."""

import dataclasses

import numpy as np
import pytest

from symmetry_tiling import (
    WALLPAPER_PRESETS,
    FundamentalDomain,
    InvalidConfigurationError,
    LatticeBasis,
    PlanarGroupId,
    PlanarLatticeGroup,
    apply,
    compose,
    identity,
)
from symmetry_tiling.wallpaper import DEFAULT_LATTICE_PARAMS


def _preset_group(group_id: PlanarGroupId) -> PlanarLatticeGroup:
    preset = WALLPAPER_PRESETS[group_id]
    return PlanarLatticeGroup.build(
        group_id,
        preset['lattice_params'],
        preset.get('tile_size', (1.0, 1.0)),
    )


ALL_GROUPS = list(PlanarGroupId)


# =============================================================================
# Group identifiers
# =============================================================================

class TestPlanarGroupId:
    """Test group metadata."""

    def test_seventeen_groups(self):
        assert len(PlanarGroupId) == 17

    @pytest.mark.parametrize('group_id', ALL_GROUPS)
    def test_degrees_of_freedom_range(self, group_id):
        assert 1 <= group_id.degrees_of_freedom <= 4

    def test_point_group_orders(self):
        assert PlanarGroupId.P1.point_group_order == 1
        assert PlanarGroupId.P2.point_group_order == 2
        assert PlanarGroupId.P4M.point_group_order == 8
        assert PlanarGroupId.P6M.point_group_order == 12


# =============================================================================
# Lattice basis
# =============================================================================

class TestLatticeBasis:
    """Test LatticeBasis dataclass."""

    def test_from_components(self):
        """Component-grouped storage maps x's and y's to the right vectors."""
        basis = LatticeBasis.from_components(xs=(1.0, 2.0), ys=(3.0, 4.0))
        assert np.allclose(basis.u, [1.0, 3.0])
        assert np.allclose(basis.v, [2.0, 4.0])

    def test_determinant(self):
        basis = LatticeBasis(u=(2.0, 0.0), v=(0.5, 3.0))
        assert basis.determinant == pytest.approx(6.0)

    def test_scaled(self):
        basis = LatticeBasis(u=(2.0, 1.0), v=(0.0, 3.0))
        u, v = basis.scaled((2.0, 0.5))
        assert np.allclose(u, [4.0, 0.5])
        assert np.allclose(v, [0.0, 1.5])

    def test_zero_vector(self):
        with pytest.raises(InvalidConfigurationError, match="zero-length"):
            LatticeBasis(u=(0.0, 0.0), v=(1.0, 0.0))

    def test_parallel_vectors(self):
        with pytest.raises(InvalidConfigurationError, match="parallel"):
            LatticeBasis(u=(1.0, 1.0), v=(-2.0, -2.0))

    def test_immutable(self):
        basis = LatticeBasis(u=(1.0, 0.0), v=(0.0, 1.0))
        with pytest.raises(dataclasses.FrozenInstanceError):
            basis.u = np.array([2.0, 0.0])
        with pytest.raises(ValueError):
            basis.u[0] = 5.0


# =============================================================================
# Fundamental domain
# =============================================================================

class TestFundamentalDomain:
    """Test FundamentalDomain dataclass."""

    def test_unit_square(self):
        domain = FundamentalDomain(points=[(0, 0), (1, 0), (1, 1), (0, 1)], center=(0.5, 0.5))
        assert len(domain) == 4
        assert domain.signed_area() == pytest.approx(1.0)
        assert len(domain.edges()) == 4

    def test_clockwise_area_negative(self):
        domain = FundamentalDomain(points=[(0, 0), (0, 1), (1, 1), (1, 0)], center=(0.5, 0.5))
        assert domain.signed_area() == pytest.approx(-1.0)
        assert domain.area() == pytest.approx(1.0)

    def test_transformed(self):
        domain = FundamentalDomain(points=[(0, 0), (1, 0), (0, 1)], center=(0.0, 0.0))
        moved = domain.transformed(compose(identity()))
        assert np.allclose(moved.points, domain.points)

    def test_points_read_only(self):
        domain = FundamentalDomain(points=[(0, 0), (1, 0), (0, 1)], center=(0.0, 0.0))
        with pytest.raises(ValueError):
            domain.points[0, 0] = 1.0

    def test_to_dict(self):
        domain = FundamentalDomain(points=[(0, 0), (1, 0), (0, 1)], center=(0.25, 0.25))
        d = domain.to_dict()
        assert d['points'] == [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]
        assert d['center'] == [0.25, 0.25]


# =============================================================================
# Group construction
# =============================================================================

class TestPlanarLatticeGroup:
    """Test the 17 construction recipes."""

    @pytest.mark.parametrize('group_id', ALL_GROUPS)
    def test_coset_rep_count(self, group_id):
        """One representative per non-identity point group element."""
        group = _preset_group(group_id)
        assert len(group.coset_reps) == group_id.point_group_order - 1
        assert group.point_group_order == group_id.point_group_order

    def test_known_counts(self):
        assert len(PlanarLatticeGroup.build('p4m', (4,)).coset_reps) == 7
        assert len(PlanarLatticeGroup.build('p2', (2, 0, 0, 2)).coset_reps) == 1
        assert len(PlanarLatticeGroup.build('p1', (2, 0, 0, 2)).coset_reps) == 0

    @pytest.mark.parametrize('group_id', ALL_GROUPS)
    def test_reps_are_isometries(self, group_id):
        for m in _preset_group(group_id).coset_reps:
            linear = m[:2, :2]
            assert np.allclose(linear @ linear.T, np.eye(2))
            assert np.allclose(m[2], [0, 0, 1, 0])
            assert np.allclose(m[3], [0, 0, 0, 1])

    @pytest.mark.parametrize('group_id', ALL_GROUPS)
    def test_reps_preserve_lattice(self, group_id):
        """The linear part of every rep maps lattice vectors to lattice vectors."""
        group = _preset_group(group_id)
        basis = np.column_stack([group.lattice.u, group.lattice.v])
        for m in group.coset_reps:
            images = m[:2, :2] @ basis
            coords = np.linalg.solve(basis, images)
            assert np.allclose(coords, np.round(coords), atol=1e-9)

    @pytest.mark.parametrize('group_id', ALL_GROUPS)
    def test_domain_tiles_lattice_cell(self, group_id):
        """Domain area times point group order equals the lattice cell area."""
        group = _preset_group(group_id)
        expected = abs(group.lattice.determinant)
        assert group.domain.area() * group.point_group_order == pytest.approx(expected)

    @pytest.mark.parametrize('group_id', ALL_GROUPS)
    def test_reps_distinct(self, group_id):
        group = _preset_group(group_id)
        reps = [identity()] + list(group.coset_reps)
        for i in range(len(reps)):
            for j in range(i + 1, len(reps)):
                assert not np.allclose(reps[i], reps[j])

    def test_p1_domain_centered_in_tile(self):
        group = PlanarLatticeGroup.build('p1', (2, 0, 0.5, 2), tile_size=(3.0, 1.0))
        assert np.allclose(group.domain.points.mean(axis=0), [1.5, 0.5])
        assert np.allclose(group.domain.center, [1.5, 0.5])

    def test_p1_lattice(self):
        group = PlanarLatticeGroup.build('p1', (2, 0.5, 0.8, 2))
        assert np.allclose(group.lattice.u, [2.0, 0.5])
        assert np.allclose(group.lattice.v, [0.8, 2.0])

    def test_p2_half_turn_about_center(self):
        group = PlanarLatticeGroup.build('p2', (2, 0, 0, 2))
        rep = group.coset_reps[0]
        center = group.domain.center
        assert np.allclose(apply(rep, center)[0], center)
        assert np.allclose(rep @ rep, np.eye(4))
        assert np.allclose(group.lattice.v, [0.0, 4.0])

    @pytest.mark.parametrize('group_id,turns', [('p3', 3), ('p4', 4), ('p6', 6)])
    def test_rotation_groups(self, group_id, turns):
        group = PlanarLatticeGroup.build(group_id, (2,))
        center = group.domain.center
        first = group.coset_reps[0]
        assert np.allclose(apply(first, center)[0], center)
        assert np.allclose(np.linalg.matrix_power(first, turns), np.eye(4))
        for k, rep in enumerate(group.coset_reps, start=1):
            assert np.allclose(rep, np.linalg.matrix_power(first, k))

    def test_pm_mirror_on_domain_edge(self):
        group = PlanarLatticeGroup.build('pm', (2, 1))
        mirror = group.coset_reps[0]
        pts = group.domain.points
        assert np.allclose(apply(mirror, pts[[0, 3]]), pts[[0, 3]])
        assert np.linalg.det(mirror[:3, :3]) == pytest.approx(-1.0)

    def test_pg_glide_squares_to_lattice_translation(self):
        group = PlanarLatticeGroup.build('pg', (1.5, 1.5))
        glide = group.coset_reps[0]
        assert np.allclose(glide @ glide, _translation_matrix((0.0, 3.0)))
        assert np.allclose(group.lattice.v, [0.0, 3.0])

    def test_p4m_chains_mirror_with_rotations(self):
        group = PlanarLatticeGroup.build('p4m', (4,))
        reps = group.coset_reps
        mirror = reps[3]
        for i in range(3):
            assert np.allclose(reps[4 + i], reps[i] @ mirror)

    def test_p4g_chains_rotations_after_mirror(self):
        group = PlanarLatticeGroup.build('p4g', (1.5,))
        reps = group.coset_reps
        mirror = reps[3]
        for i in range(3):
            assert np.allclose(reps[4 + i], mirror @ reps[i])

    def test_p6m_rep_structure(self):
        group = PlanarLatticeGroup.build('p6m', (5,))
        dets = [np.linalg.det(m[:3, :3]) for m in group.coset_reps]
        assert np.allclose(dets[:5], 1.0)
        assert np.allclose(dets[5:], -1.0)

    def test_domain_immutable(self):
        group = PlanarLatticeGroup.build('p4', (2,))
        with pytest.raises(dataclasses.FrozenInstanceError):
            group.domain = None

    def test_coset_reps_read_only(self):
        group = PlanarLatticeGroup.build('p4m', (4,))
        for rep in group.coset_reps:
            with pytest.raises(ValueError):
                rep[0, 3] = 1.0

    @pytest.mark.parametrize('group_id', ALL_GROUPS)
    def test_empty_params_use_defaults(self, group_id):
        a = PlanarLatticeGroup.build(group_id)
        b = PlanarLatticeGroup.build(group_id, DEFAULT_LATTICE_PARAMS[group_id])
        assert np.allclose(a.lattice.u, b.lattice.u)
        assert np.allclose(a.lattice.v, b.lattice.v)
        assert np.allclose(a.domain.points, b.domain.points)


# =============================================================================
# Validation
# =============================================================================

class TestValidation:
    """Test construction failures."""

    def test_unknown_group(self):
        with pytest.raises(InvalidConfigurationError, match="Unknown wallpaper group"):
            PlanarLatticeGroup.build('p5', (1,))

    def test_too_many_params(self):
        with pytest.raises(InvalidConfigurationError, match="At most 4"):
            PlanarLatticeGroup.build('p1', (1, 0, 0, 1, 5))

    def test_parallel_p1_lattice(self):
        with pytest.raises(InvalidConfigurationError, match="parallel"):
            PlanarLatticeGroup.build('p1', (1, 0, 2, 0))

    def test_zero_size(self):
        with pytest.raises(InvalidConfigurationError):
            PlanarLatticeGroup.build('p4', (0,))

    def test_explicit_zeros_rejected(self):
        """Only an empty sequence selects defaults; explicit zeros stay degenerate."""
        with pytest.raises(InvalidConfigurationError, match="zero-length"):
            PlanarLatticeGroup.build('p1', (0, 0, 0, 0))

    def test_missing_params_default_to_zero(self):
        """A rectangular group with a zero height has a degenerate lattice."""
        with pytest.raises(InvalidConfigurationError):
            PlanarLatticeGroup.build('pmm', (2,))


def _translation_matrix(offset):
    m = np.eye(4)
    m[:2, 3] = offset
    return m
