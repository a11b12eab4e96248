"""mgsviz: step-by-step Modified Gram-Schmidt for visualization.

Orthonormalizes small sets of 3D vectors and records every intermediate
state, so the process can be streamed to a remote viewer or plotted locally.

Main features:
- Modified Gram-Schmidt history generation
- JSON-over-UDP transport of snapshots
- Paced animation driver (python -m mgsviz)
- Visualization (3D arrows per snapshot)

Convention:
    - A vector set is a float tensor of shape (n, 3), one vector per row
    - Row order is the processing order
    - Vectors with norm <= machine epsilon of their dtype are left unnormalized
"""

# Orthonormalization
from .orthonormalize import compute_history, stack_history, is_orthonormal

# Transport
from .transport import encode_frame, decode_frame, UDPSink, UDPSource

# Driver
from .driver import default_vectors, run

# Plotting
from .plotting import plot_canvas, plot_snapshot, plot_history

# Euclidean helpers (less commonly needed directly)
from . import euclidean

__all__ = [
    # Orthonormalization
    "compute_history",
    "stack_history",
    "is_orthonormal",
    # Transport
    "encode_frame",
    "decode_frame",
    "UDPSink",
    "UDPSource",
    # Driver
    "default_vectors",
    "run",
    # Plotting
    "plot_canvas",
    "plot_snapshot",
    "plot_history",
    # Modules
    "euclidean",
]

__version__ = "0.1.0"
