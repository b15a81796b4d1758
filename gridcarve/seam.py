from typing import List, Tuple

import numba as nb
import numpy as np

from .energy import compute_energy
from .grid import WRAP_EDGES, PixelGrid

Seam = List[Tuple[int, int]]


@nb.njit(cache=True)
def _accumulate_path_costs(energy: np.ndarray) -> np.ndarray:
    """Minimum cumulative energy of any vertical path ending at each cell"""
    h, w = energy.shape
    cost = np.empty((h, w), dtype=np.int64)
    for c in range(w):
        cost[0, c] = energy[0, c]
    for r in range(1, h):
        for c in range(w):
            best = cost[r - 1, c]
            if c > 0 and cost[r - 1, c - 1] < best:
                best = cost[r - 1, c - 1]
            if c < w - 1 and cost[r - 1, c + 1] < best:
                best = cost[r - 1, c + 1]
            cost[r, c] = energy[r, c] + best
    return cost


def compute_costs(grid: PixelGrid, edge_mode: str = WRAP_EDGES) -> None:
    """Refresh the energy and the path cost of every cell of the grid"""
    energy = np.ascontiguousarray(compute_energy(grid.colors, edge_mode))
    grid.energy[...] = energy
    grid.path_cost[...] = _accumulate_path_costs(energy)


def extract_cheapest_seam(grid: PixelGrid) -> Seam:
    """Backtrack the cheapest seam from the last row up to the first one.

    The path costs must be up to date. Ties are broken towards the lowest
    column, both for the starting cell and for every parent.
    """
    cost = grid.path_cost
    y = grid.height - 1
    x = int(np.argmin(cost[y]))
    seam = [(x, y)]
    parents = grid.parents(x, y)
    while parents:
        x, y = min(parents, key=lambda p: cost[p[1], p[0]])
        seam.append((x, y))
        parents = grid.parents(x, y)
    return seam


def find_seam(grid: PixelGrid, edge_mode: str = WRAP_EDGES) -> Seam:
    """Refresh the path costs of the grid and get its cheapest seam"""
    compute_costs(grid, edge_mode)
    return extract_cheapest_seam(grid)
