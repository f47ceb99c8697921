"""Tests for wallpaper expansion."""

import numpy as np
import pytest

from symmetry_tiling import (
    WALLPAPER_PRESETS,
    NumericDegeneracyError,
    PlanarGroupId,
    PlanarLatticeGroup,
    WallpaperExpander,
    WallpaperResult,
    apply,
    generate_wallpaper_group,
    invert,
    translation,
)
from symmetry_tiling.transforms import is_affine


def _p1(**kwargs) -> WallpaperResult:
    params = dict(repeat_x=2, repeat_y=2, lattice_params=(2, 0, 0, 2))
    params.update(kwargs)
    return generate_wallpaper_group('p1', **params)


# =============================================================================
# p1 scenario
# =============================================================================

class TestP1Scenario:
    """Test the simplest lattice expansion."""

    def test_count(self):
        assert len(_p1().transforms) == 4

    def test_first_is_identity(self):
        assert np.array_equal(_p1().transforms[0], np.eye(4))

    def test_lattice_order(self):
        """Copies step along U first, then V."""
        transforms = _p1().transforms
        assert np.allclose(transforms[1], translation((2.0, 0.0)))
        assert np.allclose(transforms[2], translation((0.0, 2.0)))
        assert np.allclose(transforms[3], translation((2.0, 2.0)))

    def test_skewed_lattice_diagonal(self):
        result = _p1(lattice_params=(2, 0.5, 0.8, 2))
        assert np.allclose(result.transforms[3], translation((2.8, 2.5)))

    def test_unit_offset_cancels(self):
        """Normalization removes a pure offset from the pattern."""
        result = _p1(unit_offset=(1.0, -3.0))
        assert np.allclose(result.transforms[3], translation((2.0, 2.0)))

    def test_unit_scale_shrinks_lattice_step(self):
        """In the object's scaled frame a lattice step is U / unit_scale."""
        result = _p1(unit_scale=2.0, unit_offset=(1.0, 1.0))
        assert np.allclose(result.transforms[3], translation((1.0, 1.0)))

    def test_spacing_per_axis(self):
        result = _p1(spacing=(2.0, 0.5))
        assert np.allclose(result.transforms[1], translation((4.0, 0.0)))
        assert np.allclose(result.transforms[2], translation((0.0, 1.0)))

    def test_final_scale_spreads_copies(self):
        result = _p1(final_scale=3.0)
        assert np.array_equal(result.transforms[0], np.eye(4))
        assert np.allclose(result.transforms[3], translation((6.0, 6.0)))
        assert np.allclose(result.transforms[3][:3, :3], np.eye(3))

    def test_fundamental_domain_returned(self):
        result = _p1()
        assert len(result.fundamental_domain) == 4


# =============================================================================
# Expander behaviour
# =============================================================================

class TestWallpaperExpander:
    """Test WallpaperExpander."""

    def test_seeds_identity_first(self):
        group = PlanarLatticeGroup.build('p4', (2,))
        expander = WallpaperExpander(group, unit_offset=(0.5, 0.0))
        seeds = expander.seeds()
        assert len(seeds) == 4
        assert np.allclose(seeds[0], expander.unit_transform())
        assert np.allclose(seeds[1], group.coset_reps[0] @ expander.unit_transform())

    def test_raw_order_groups_by_seed(self):
        group = PlanarLatticeGroup.build('p2', (2, 0, 0, 2))
        expander = WallpaperExpander(group, repeat_x=3, repeat_y=2)
        raw = expander.raw_transforms()
        assert len(raw) == 12
        rep = group.coset_reps[0]
        assert np.allclose(raw[6], rep)
        assert np.allclose(raw[7], translation(group.lattice.u) @ rep)

    def test_normalization(self):
        """Every entry equals inverse(first raw) composed with its raw entry."""
        group = PlanarLatticeGroup.build('p31m', (3,))
        expander = WallpaperExpander(group, 2, 3, unit_offset=(-1.0, 0.5), unit_scale=0.5)
        raw = expander.raw_transforms()
        normalized = expander.expand()
        first_inverse = invert(raw[0])
        for r, n in zip(raw, normalized, strict=True):
            assert np.allclose(first_inverse @ r, n)

    def test_half_turn_fixes_center(self):
        group = PlanarLatticeGroup.build('p2', (2, 0, 0, 2))
        transforms = WallpaperExpander(group).expand()
        center = group.domain.center
        assert len(transforms) == 2
        assert np.allclose(apply(transforms[1], center)[0], center)

    def test_zero_repeats_empty(self):
        group = PlanarLatticeGroup.build('p4m', (4,))
        assert WallpaperExpander(group, 0, 3).expand() == []
        assert WallpaperExpander(group, 3, -1).expand() == []

    def test_single_copy(self):
        result = generate_wallpaper_group('p1', 1, 1, lattice_params=(1, 0, 0, 1))
        assert len(result.transforms) == 1
        assert np.array_equal(result.transforms[0], np.eye(4))

    def test_zero_unit_scale(self):
        with pytest.raises(NumericDegeneracyError):
            generate_wallpaper_group('p4', 2, 2, lattice_params=(2,), unit_scale=0.0)

    @pytest.mark.parametrize('group_id', list(PlanarGroupId))
    def test_without_lattice_params(self, group_id):
        """Every group expands with no parameters at all."""
        result = generate_wallpaper_group(group_id, 2, 2)
        assert len(result.transforms) == group_id.point_group_order * 4
        assert np.array_equal(result.transforms[0], np.eye(4))
        assert all(is_affine(m) for m in result.transforms)


# =============================================================================
# All groups
# =============================================================================

class TestAllGroups:
    """Invariants over every wallpaper group."""

    @pytest.mark.parametrize('group_id', list(PlanarGroupId))
    def test_size_and_identity(self, group_id):
        preset = WALLPAPER_PRESETS[group_id]
        result = generate_wallpaper_group(
            group_id,
            repeat_x=3,
            repeat_y=2,
            lattice_params=preset['lattice_params'],
            unit_offset=preset['unit_offset'],
            final_scale=1.5,
        )
        assert len(result.transforms) == group_id.point_group_order * 6
        assert np.array_equal(result.transforms[0], np.eye(4))
        assert all(is_affine(m) for m in result.transforms)

    @pytest.mark.parametrize('group_id', list(PlanarGroupId))
    def test_repeatable(self, group_id):
        """Identical inputs give bit-identical output."""
        params = WALLPAPER_PRESETS[group_id]['lattice_params']
        a = generate_wallpaper_group(group_id, 2, 2, lattice_params=params)
        b = generate_wallpaper_group(group_id, 2, 2, lattice_params=params)
        assert all(np.array_equal(x, y) for x, y in zip(a.transforms, b.transforms, strict=True))

    def test_tiles(self):
        result = generate_wallpaper_group('p6m', 2, 2, lattice_params=(5,))
        tiles = result.tiles()
        assert len(tiles) == len(result.transforms)
        assert np.allclose(tiles[0].points, result.fundamental_domain.points)
        for tile in tiles:
            assert tile.area() == pytest.approx(result.fundamental_domain.area())

    def test_to_dict(self):
        d = _p1().to_dict()
        assert len(d['transforms']) == 4
        assert d['transforms'][0] == np.eye(4).tolist()
        assert len(d['fundamental_domain']['points']) == 4
