"""Plotting utilities for visualizing Gram-Schmidt histories.

Each snapshot is drawn as a set of labelled arrows from the origin on a 3D axes.
"""

import math

import numpy as np
import torch
import matplotlib.pyplot as plt


def plot_canvas(ax, limit=1.5):
    """Prepare a 3D axes: symmetric limits, axis labels and coordinate guide lines.

    Args:
        ax: matplotlib 3D axes object
        limit: float, half-width of the plotted cube (default: 1.5)

    Returns:
        ax: matplotlib axes object
    """
    ax.set_xlim(-limit, limit)
    ax.set_ylim(-limit, limit)
    ax.set_zlim(-limit, limit)
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_zlabel("z")

    # Coordinate axes through the origin
    for axis in np.eye(3):
        start, end = -limit * axis, limit * axis
        ax.plot(
            [start[0], end[0]],
            [start[1], end[1]],
            [start[2], end[2]],
            color="gray",
            alpha=0.4,
            linestyle=":",
            linewidth=0.5,
        )

    return ax


def plot_snapshot(ax, snapshot, colors=None, labels=None, min_length=0.01):
    """Draw every vector of a snapshot as an arrow from the origin.

    Args:
        ax: matplotlib 3D axes object
        snapshot: torch.tensor or np.ndarray of shape (n, 3)
        colors: list of n colors (default: the matplotlib color cycle)
        labels: list of n strings (default: "v0", "v1", ...)
        min_length: float, vectors shorter than this are skipped (default: 0.01)

    Returns:
        list of matplotlib artists that were added
    """
    # Convert to numpy if tensor
    if torch.is_tensor(snapshot):
        snapshot = snapshot.detach().cpu().numpy()
    snapshot = np.asarray(snapshot, dtype=float)

    if colors is None:
        cycle = plt.rcParams["axes.prop_cycle"].by_key()["color"]
        colors = [cycle[i % len(cycle)] for i in range(len(snapshot))]
    if labels is None:
        labels = [f"v{i}" for i in range(len(snapshot))]

    artists = []
    for vec, color, label in zip(snapshot, colors, labels):
        if np.linalg.norm(vec) < min_length:
            continue
        x, y, z = vec
        artists.append(ax.quiver(0, 0, 0, x, y, z, color=color, arrow_length_ratio=0.1))
        artists.append(ax.text(x, y, z + 0.1, label, color=color))

    return artists


def plot_history(history, ncols=4, figsize=None, limit=None):
    """Plot every snapshot of a history in its own subplot.

    Args:
        history: list of torch.tensors of shape (n, 3), as returned by compute_history
        ncols: int, subplots per row (default: 4)
        figsize: tuple, figure size (default: 3 inches per subplot)
        limit: float, half-width of every plotted cube (default: fit the largest component)

    Returns:
        fig: matplotlib figure
        axes: list of 3D axes, one per snapshot
    """
    n_steps = len(history)
    ncols = max(1, min(ncols, n_steps))
    nrows = max(1, math.ceil(n_steps / ncols))

    if figsize is None:
        figsize = (3 * ncols, 3 * nrows)
    if limit is None:
        largest = max((float(s.abs().max()) for s in history if s.numel() > 0), default=0.0)
        limit = max(1.0, 1.1 * largest)

    fig = plt.figure(figsize=figsize)
    axes = []
    for step, snapshot in enumerate(history):
        ax = fig.add_subplot(nrows, ncols, step + 1, projection="3d")
        plot_canvas(ax, limit=limit)
        plot_snapshot(ax, snapshot)
        ax.set_title(f"step {step}")
        axes.append(ax)

    return fig, axes
