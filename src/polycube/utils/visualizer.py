"""
Scene visualization with matplotlib - occupied cells drawn as voxels.
"""

from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import to_rgba
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from polycube.geometry.occupancy import occupied_cells, placement_cells
from polycube.geometry.types import Cell

if TYPE_CHECKING:
    from mpl_toolkits.mplot3d import Axes3D
    from polycube.scene.scene import Scene


PLACEMENT_COLORS = [
    '#FF6B6B',  # red
    '#4ECDC4',  # teal
    '#45B7D1',  # blue
    '#96CEB4',  # green
    '#FFEAA7',  # yellow
    '#FD79A8',  # pink
    '#A29BFE',  # purple
    '#74B9FF',  # light blue
    '#55EFC4',  # mint
    '#FDCB6E',  # orange
    '#E17055',  # burnt orange
]

SELECTED_COLOR = '#93c5fd'
PREVIEW_COLOR = '#ef4444'


def get_placement_color(index: int) -> str:
    return PLACEMENT_COLORS[index % len(PLACEMENT_COLORS)]


def create_cube_vertices(cell: Cell, size: float = 0.9) -> np.ndarray:
    """
    Vertices of the cube drawn for a grid cell.

    Args:
        cell: grid cell; it spans [x, x+1) x [y, y+1) x [z, z+1)
        size: edge length, below 1 to leave a gap between voxels

    Returns:
        8x3 vertex array
    """
    cx, cy, cz = cell[0] + 0.5, cell[1] + 0.5, cell[2] + 0.5
    d = size / 2.0

    return np.array([
        [cx - d, cy - d, cz - d],
        [cx + d, cy - d, cz - d],
        [cx + d, cy + d, cz - d],
        [cx - d, cy + d, cz - d],
        [cx - d, cy - d, cz + d],
        [cx + d, cy - d, cz + d],
        [cx + d, cy + d, cz + d],
        [cx - d, cy + d, cz + d],
    ])


def create_cube_faces(vertices: np.ndarray) -> List[np.ndarray]:
    """The 6 quads of a cube, 4 vertices each."""
    return [
        [vertices[0], vertices[1], vertices[2], vertices[3]],  # z min
        [vertices[4], vertices[5], vertices[6], vertices[7]],  # z max
        [vertices[0], vertices[1], vertices[5], vertices[4]],  # y min
        [vertices[2], vertices[3], vertices[7], vertices[6]],  # y max
        [vertices[0], vertices[3], vertices[7], vertices[4]],  # x min
        [vertices[1], vertices[2], vertices[6], vertices[5]],  # x max
    ]


def draw_voxel(ax: "Axes3D", cell: Cell, color: str, alpha: float = 0.8,
               edge_color: str = 'black', linewidth: float = 0.8):
    faces = create_cube_faces(create_cube_vertices(cell))
    ax.add_collection3d(Poly3DCollection(
        faces,
        facecolors=to_rgba(color, alpha),
        edgecolors=edge_color,
        linewidths=linewidth
    ))


def _scene_bounds(cells: Iterable[Cell], pad: int = 1) -> Tuple[np.ndarray, np.ndarray]:
    cells = np.array(list(cells), dtype=int).reshape(-1, 3)
    if len(cells) == 0:
        return np.array([-2, -2, 0]), np.array([2, 2, 2])
    low = cells.min(axis=0) - pad
    high = cells.max(axis=0) + 1 + pad
    low[2] = min(low[2], 0)
    return low, high


def visualize_scene(scene: "Scene", title: str = "Scene",
                    figsize: Tuple[int, int] = (8, 8),
                    elev: float = 25, azim: float = 45) -> plt.Figure:
    """
    Draw every placement's occupied cells, the ground plane and the preview.

    Returns:
        matplotlib Figure
    """
    placements = scene.snapshot()
    preview = scene.preview

    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(111, projection='3d')

    all_cells: List[Cell] = []
    for index, placement in enumerate(placements):
        color = SELECTED_COLOR if placement.id == scene.selected_id else get_placement_color(index)
        cells = placement_cells(placement)
        all_cells.extend(cells)
        for cell in cells:
            draw_voxel(ax, cell, color, alpha=0.85)

    if preview is not None:
        cells = occupied_cells(preview.shape_type, preview.position, preview.orientation)
        all_cells.extend(cells)
        color = PREVIEW_COLOR if preview.is_colliding else SELECTED_COLOR
        for cell in cells:
            draw_voxel(ax, cell, color, alpha=0.35, edge_color=color)

    low, high = _scene_bounds(all_cells)

    # Ground plane at z = 0
    xx, yy = np.meshgrid([low[0], high[0]], [low[1], high[1]])
    ax.plot_surface(xx, yy, np.zeros_like(xx), alpha=0.1, color='lightgray')

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_zlabel('Z')
    ax.set_xlim([low[0], high[0]])
    ax.set_ylim([low[1], high[1]])
    ax.set_zlim([low[2], high[2]])
    ax.set_box_aspect(tuple((high - low).tolist()))
    ax.view_init(elev=elev, azim=azim)
    ax.set_title(f"{title}\n{len(placements)} placements")

    plt.tight_layout()
    return fig


def save_scene_visualization(scene: "Scene", filename: str,
                             title: str = "Scene", dpi: int = 120,
                             backend: Optional[str] = "Agg"):
    """
    Save the scene visualization to an image file.

    Args:
        scene: scene to draw
        filename: output file name
        title: figure title
        dpi: resolution
        backend: matplotlib backend to switch to first; None keeps the current one
    """
    if backend:
        matplotlib.use(backend)
    fig = visualize_scene(scene, title=title)
    fig.savefig(filename, dpi=dpi, bbox_inches='tight', facecolor='white')
    plt.close(fig)
