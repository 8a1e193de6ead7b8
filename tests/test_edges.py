"""Tests for edges module."""

import math

import numpy as np
import pytest
from tonegrid.edges import (
    detect_edges,
    difference_of_gaussians,
    gaussian_blur,
    gaussian_kernel,
    sobel_edges,
)
from tonegrid.geometry import GridGeometry
from tonegrid.luminance import sample_luminance

# --- Fixtures ---


@pytest.fixture
def vertical_step():
    grid = np.zeros((8, 8))
    grid[:, 4:] = 1.0
    return grid


@pytest.fixture
def unit_cells():
    return GridGeometry(cols=8, rows=8, cell_width_px=1, cell_height_px=1)


# --- Tests ---


class TestGaussianKernel:
    @pytest.mark.parametrize("sigma, size", [(0.5, 5), (1.0, 7), (2.0, 13)])
    def test_size_is_two_radius_plus_one(self, sigma, size):
        assert len(gaussian_kernel(sigma)) == size

    def test_normalized_and_symmetric(self):
        k = gaussian_kernel(1.0)
        assert k.sum() == pytest.approx(1.0)
        assert k == pytest.approx(k[::-1])
        assert int(np.argmax(k)) == len(k) // 2


class TestGaussianBlur:
    def test_constant_grid_unchanged(self):
        grid = np.full((5, 7), 0.3)
        assert gaussian_blur(grid, 1.0) == pytest.approx(grid)

    def test_impulse_spreads_as_outer_product(self):
        grid = np.zeros((9, 9))
        grid[4, 4] = 1.0
        k = gaussian_kernel(0.5)
        out = gaussian_blur(grid, 0.5)
        assert out[2:7, 2:7] == pytest.approx(np.outer(k, k))
        assert out.sum() == pytest.approx(1.0)

    def test_border_clamped(self):
        grid = np.zeros((3, 3))
        grid[:, 0] = 1.0
        out = gaussian_blur(grid, 1.0)
        # the left column keeps more weight than the mean because of clamping
        assert out[1, 0] > 1.0 / 3

    def test_input_not_mutated(self, vertical_step):
        before = vertical_step.copy()
        gaussian_blur(vertical_step, 0.5)
        assert np.array_equal(vertical_step, before)


class TestDifferenceOfGaussians:
    def test_flat_region_is_zero(self):
        assert difference_of_gaussians(np.full((6, 6), 0.8)) == pytest.approx(0.0, abs=1e-12)

    def test_default_second_sigma(self, vertical_step):
        explicit = difference_of_gaussians(vertical_step, 0.5, 1.0)
        assert difference_of_gaussians(vertical_step, 0.5) == pytest.approx(explicit)

    def test_step_response_changes_sign(self, vertical_step):
        dog = difference_of_gaussians(vertical_step)
        assert dog[4, 3] < 0 < dog[4, 4]


class TestSobelEdges:
    def test_vertical_step(self, vertical_step):
        edges = sobel_edges(vertical_step)
        assert edges.magnitude[1:-1, 3] == pytest.approx(1.0)
        assert edges.magnitude[1:-1, 4] == pytest.approx(1.0)
        assert edges.magnitude[1:-1, 1] == pytest.approx(0.0)
        assert edges.angle[4, 3] == pytest.approx(0.0)

    def test_border_ring_is_zero(self, vertical_step):
        edges = sobel_edges(vertical_step)
        for border in (
            edges.magnitude[0, :],
            edges.magnitude[-1, :],
            edges.magnitude[:, 0],
            edges.magnitude[:, -1],
        ):
            assert np.all(border == 0.0)

    def test_gradient_pointing_up(self):
        grid = np.zeros((5, 5))
        grid[:2, :] = 1.0
        edges = sobel_edges(grid)
        # brightness grows towards the top: Gy < 0
        assert edges.angle[2, 2] == pytest.approx(-math.pi / 2)

    def test_cell_extent_scaling(self):
        grid = np.zeros((5, 5))
        grid[:, 3:] = 1.0
        grid[3:, :] += 1.0
        edges = sobel_edges(grid, cell_width_px=1, cell_height_px=4)
        # Gx = 4, Gy = 4 / 4 at the shared corner cell
        assert edges.angle[2, 2] == pytest.approx(math.atan2(1.0, 4.0))

    def test_tiny_peaks_use_normalizer_floor(self):
        grid = np.zeros((5, 5))
        grid[:, 3:] = 0.001
        edges = sobel_edges(grid)
        assert edges.magnitude.max() == pytest.approx(0.4)

    def test_uniform_grid_has_no_edges(self):
        edges = sobel_edges(np.full((6, 6), 0.5))
        assert np.all(edges.magnitude == 0.0)

    @pytest.mark.parametrize("shape", [(1, 1), (2, 5), (5, 2)])
    def test_grids_without_interior(self, shape):
        edges = sobel_edges(np.ones(shape))
        assert edges.magnitude.shape == shape
        assert np.all(edges.magnitude == 0.0)


class TestDetectEdges:
    def test_normalized_and_bounded(self, scenario_image):
        luma = sample_luminance(scenario_image, cols=20, rows=6)
        geo = GridGeometry(cols=20, rows=6, cell_width_px=1, cell_height_px=1)
        edges = detect_edges(luma, geo)
        assert edges.magnitude.shape == (6, 20)
        assert edges.magnitude.max() == pytest.approx(1.0)
        assert edges.magnitude.min() >= 0.0
        assert np.all(edges.angle > -math.pi)
        assert np.all(edges.angle <= math.pi)

    def test_vertical_step_gives_horizontal_gradients(self, vertical_step, unit_cells):
        edges = detect_edges(vertical_step, unit_cells)
        strong = edges.magnitude > 0.5
        assert strong.any()
        assert np.sin(edges.angle[strong]) == pytest.approx(0.0, abs=1e-9)

    def test_empty_grid(self, unit_cells):
        edges = detect_edges(np.zeros((0, 0)), unit_cells)
        assert edges.magnitude.size == 0
        assert edges.angle.size == 0
