import numpy as np
import pytest

from gridcarve.grid import CLAMP_EDGES, WRAP_EDGES, PixelGrid
from gridcarve.seam import compute_costs, extract_cheapest_seam, find_seam


def _ref_path_costs(energy):
    h, w = energy.shape
    cost = [[0] * w for _ in range(h)]
    for c in range(w):
        cost[0][c] = int(energy[0, c])
    for r in range(1, h):
        for c in range(w):
            parents = [cost[r - 1][p] for p in (c - 1, c, c + 1) if 0 <= p < w]
            cost[r][c] = int(energy[r, c]) + min(parents)
    return cost


def _assert_connected(seam, height):
    assert len(seam) == height
    assert [y for _, y in seam] == list(range(height - 1, -1, -1))
    for (x0, _), (x1, _) in zip(seam, seam[1:]):
        assert abs(x0 - x1) <= 1


def test_reference_seam_3x4(image_3x4):
    grid = PixelGrid(image_3x4)
    compute_costs(grid)
    assert grid.energy[0].tolist() == [20808, 52020, 20808]
    assert grid.path_cost[0].tolist() == grid.energy[0].tolist()
    assert grid.path_cost[3].tolist() == [83233, 114650, 84057]

    seam = extract_cheapest_seam(grid)
    assert seam[0] == (0, 3)
    assert seam == [(0, 3), (0, 2), (0, 1), (0, 0)]


def test_reference_seam_6x5(image_6x5):
    grid = PixelGrid(image_6x5)
    seam = find_seam(grid)
    assert seam[0] == (2, 4)
    assert seam == [(2, 4), (2, 3), (3, 2), (4, 1), (3, 0)]


def test_reference_seam_6x5_clamped(image_6x5):
    grid = PixelGrid(image_6x5)
    seam = find_seam(grid, CLAMP_EDGES)
    assert seam == [(0, 4), (0, 3), (0, 2), (0, 1), (0, 0)]


@pytest.mark.parametrize("edge_mode", [WRAP_EDGES, CLAMP_EDGES])
def test_path_costs(random_rgba, edge_mode):
    grid = PixelGrid(random_rgba)
    compute_costs(grid, edge_mode)
    energy = grid.energy
    cost = grid.path_cost

    assert (cost >= energy).all()
    assert (cost[0] == energy[0]).all()
    assert cost.tolist() == _ref_path_costs(energy)

    seam = extract_cheapest_seam(grid)
    _assert_connected(seam, grid.height)
    x, y = seam[0]
    assert cost[y, x] == cost[-1].min()


def test_ties_go_to_the_leftmost_column():
    grid = PixelGrid(np.full((5, 7, 3), 42, dtype=np.uint8))
    seam = find_seam(grid)
    assert seam == [(0, y) for y in range(4, -1, -1)]


def test_single_row_and_column():
    rng = np.random.default_rng(5)
    grid = PixelGrid(rng.integers(0, 256, (1, 6, 3), dtype=np.uint8))
    seam = find_seam(grid)
    assert len(seam) == 1
    x, y = seam[0]
    assert y == 0 and grid.path_cost[0, x] == grid.path_cost[0].min()

    grid = PixelGrid(rng.integers(0, 256, (6, 1, 3), dtype=np.uint8))
    assert find_seam(grid) == [(0, y) for y in range(5, -1, -1)]


def test_costs_follow_the_current_shape(image_6x5):
    grid = PixelGrid(image_6x5)
    compute_costs(grid)
    grid.remove_last_column()
    grid.rotate()
    compute_costs(grid)
    assert grid.path_cost.shape == (5, 5)
    assert grid.path_cost.tolist() == _ref_path_costs(grid.energy)
