"""Tests for cap detection and removal."""
import logging

import numpy as np
import pytest

from holecap import CapRemovalConfig, detect_caps, remove_cap_triangles
from holecap.core.caps import border_counts, cap_triangle_mask
from holecap.tests.conftest import make_grid_mesh


def _rows(tris):
    return [tuple(int(v) for v in t) for t in np.asarray(tris)]


class TestScenarios:

    def test_sliver_is_kept_when_only_two_vertices_are_border(self, sliver_mesh):
        points, tris = sliver_mesh
        det = detect_caps(points, tris, 2.0)
        np.testing.assert_allclose(det.lengths, [3.0, 15.0], rtol=1e-12)
        assert det.ratios[0] == pytest.approx(5.0)
        assert det.ratios[1] == pytest.approx(5.0)
        assert det.ratios[2] == pytest.approx(1.0)
        assert det.ratios[3] == pytest.approx(1.0)
        assert det.is_border.tolist() == [True, True, False, False, False]
        assert det.border_counts.tolist() == [2, 2]
        assert _rows(det.triangles) == _rows(tris)

    def test_single_cap_removed(self, cap_mesh):
        points, tris = cap_mesh
        cleaned = remove_cap_triangles(points, tris, 2.5)
        assert len(cleaned) == len(tris) - 1
        assert _rows(cleaned) == _rows(tris[1:])

    def test_cap_detection_details(self, cap_mesh):
        points, tris = cap_mesh
        det = detect_caps(points, tris, 2.5)
        assert det.border_vertices.tolist() == [0, 1, 2]
        assert det.removed_indices.tolist() == [0]
        assert _rows(det.removed_triangles) == [(0, 1, 2)]
        assert det.stats.n_removed == 1
        assert det.stats.n_border_vertices == 3
        assert det.stats.n_triangles_out == 6

    def test_one_based_input_round_trips(self, cap_mesh):
        points, tris = cap_mesh
        cleaned = remove_cap_triangles(points, tris + 1, 2.5, index_base=1)
        assert _rows(cleaned) == _rows(tris[1:] + 1)
        det = detect_caps(points, tris + 1, 2.5, index_base=1)
        assert det.border_vertices.tolist() == [1, 2, 3]

    def test_config_overrides_keywords(self, cap_mesh):
        points, tris = cap_mesh
        cfg = CapRemovalConfig(threshold=1e6, index_base=1)
        cleaned = remove_cap_triangles(points, tris + 1, 2.5, config=cfg)
        assert _rows(cleaned) == _rows(tris + 1)

    def test_config_conflict_is_logged(self, cap_mesh, caplog, monkeypatch):
        monkeypatch.setattr(logging.getLogger('holecap'), 'propagate', True)
        points, tris = cap_mesh
        cfg = CapRemovalConfig(threshold=2.5)
        with caplog.at_level(logging.WARNING, logger='holecap'):
            cleaned = remove_cap_triangles(points, tris, 1e6, config=cfg)
        assert len(cleaned) == len(tris) - 1
        assert any('threshold=1000000.0' in r.getMessage() for r in caplog.records)

    def test_matching_config_and_arguments_are_quiet(self, cap_mesh, caplog, monkeypatch):
        monkeypatch.setattr(logging.getLogger('holecap'), 'propagate', True)
        points, tris = cap_mesh
        cfg = CapRemovalConfig(threshold=3.0, index_base=1)
        with caplog.at_level(logging.WARNING, logger='holecap'):
            remove_cap_triangles(points, tris + 1, 3.0, index_base=1, config=cfg)
        assert not any('overrides' in r.getMessage() for r in caplog.records)


class TestProperties:

    @pytest.mark.parametrize('threshold', [1.0, 1.5, 2.0, 3.0])
    def test_uniform_mesh_removes_nothing(self, grid_mesh, threshold):
        points, tris = grid_mesh
        det = detect_caps(points, tris, threshold)
        np.testing.assert_array_equal(det.lengths, 12.0)
        np.testing.assert_array_equal(det.ratios, 1.0)
        assert not det.is_border.any()
        assert _rows(det.triangles) == _rows(tris)

    def test_isolated_points_are_never_border(self, cap_mesh):
        points, tris = cap_mesh
        extra = np.vstack([points, [[50.0, 50.0, 50.0], [-3.0, 1.0, 0.0]]])
        det = detect_caps(extra, tris, 2.5)
        assert not det.is_border[-2:].any()
        assert np.isnan(det.ratios[-2:]).all()
        assert det.stats.n_isolated_vertices == 2
        assert _rows(det.triangles) == _rows(tris[1:])

    def test_output_is_ordered_subset(self, holey_surface):
        points, tris = holey_surface
        det = detect_caps(points, tris, 2.0)
        kept = np.nonzero(~det.cap_mask)[0]
        np.testing.assert_array_equal(det.triangles, tris[kept])
        assert det.triangles.dtype == tris.dtype

    def test_survives_iff_some_vertex_not_border(self, holey_surface):
        points, tris = holey_surface
        det = detect_caps(points, tris, 2.0)
        all_border = det.is_border[tris].all(axis=1)
        np.testing.assert_array_equal(det.cap_mask, all_border)
        assert np.all(det.ratios[tris[det.cap_mask]] > 2.0)

    def test_removal_monotone_in_threshold(self, holey_surface):
        points, tris = holey_surface
        removed = [detect_caps(points, tris, L).stats.n_removed for L in (1.2, 1.5, 2.0, 2.5, 3.0, 5.0, 10.0)]
        assert removed == sorted(removed, reverse=True)
        # triangles removed at a larger threshold are also removed at a smaller one
        low = detect_caps(points, tris, 1.5).cap_mask
        high = detect_caps(points, tris, 3.0).cap_mask
        assert np.all(low[high])

    def test_inputs_not_modified(self, cap_mesh):
        points, tris = cap_mesh
        p0, t0 = points.copy(), tris.copy()
        remove_cap_triangles(points, tris, 2.5)
        np.testing.assert_array_equal(points, p0)
        np.testing.assert_array_equal(tris, t0)

    def test_accepts_lists_and_2d_points(self):
        points, tris = make_grid_mesh(2, 2)
        cleaned = remove_cap_triangles(points[:, :2].tolist(), tris.tolist(), 2.0)
        assert _rows(cleaned) == _rows(tris)

    def test_empty_triangulation(self):
        points = np.random.default_rng(1).normal(size=(4, 3))
        det = detect_caps(points, np.empty((0, 3), dtype=int), 2.0)
        assert det.triangles.shape == (0, 3)
        assert det.stats.n_isolated_vertices == 4


class TestBorderCounts:

    def test_counts_per_slot(self):
        is_border = np.array([True, True, False, True])
        tris = np.array([[0, 1, 3], [0, 1, 2], [2, 2, 2]])
        assert border_counts(tris, is_border).tolist() == [3, 2, 0]
        assert cap_triangle_mask(tris, is_border).tolist() == [True, False, False]

    def test_degenerate_triangle_with_border_vertices_is_a_cap(self):
        is_border = np.array([True, True])
        assert cap_triangle_mask(np.array([[0, 0, 1]]), is_border).tolist() == [True]


def test_collapsed_triangle_does_not_flag_its_vertex():
    points, tris = make_grid_mesh(2, 2)
    # a fully collapsed triangle on vertex 4 (interior) must not create an infinite ratio
    tris = np.vstack([tris, [[4, 4, 4]]])
    det = detect_caps(points, tris, 1.5)
    assert det.lengths[-1] == 0.0
    assert det.ratios[4] == 1.0
    assert det.stats.n_degenerate_triangles == 1
    assert _rows(det.triangles) == _rows(tris)
