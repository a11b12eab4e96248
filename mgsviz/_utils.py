"""Internal utilities for mgsviz."""

import numpy as np
import torch

DIM = 3


def as_vector_set(vectors, dtype=torch.float32):
    """Return a tensor view of a vector set.

    Tensors and floating numpy arrays are returned without copying, so writes
    to the result are visible in the caller's object. Anything else (lists of
    triples) is copied into a new tensor of the given dtype.

    Args:
        vectors: torch.Tensor, np.ndarray or sequence of 3-element sequences
        dtype: torch.dtype used when a new tensor has to be built

    Returns:
        torch.tensor of shape (n, 3)

    Raises:
        ValueError: if the input is not a writeable floating vector set of shape (n, 3)
    """
    if torch.is_tensor(vectors):
        x = vectors
    elif isinstance(vectors, np.ndarray):
        if not np.issubdtype(vectors.dtype, np.floating):
            raise ValueError(f"Expected a floating array, got dtype {vectors.dtype}")
        if not vectors.flags.writeable:
            raise ValueError("Expected a writeable array, got a read-only one")
        x = torch.from_numpy(vectors)
    elif len(vectors) == 0:
        x = torch.empty(0, DIM, dtype=dtype)
    else:
        try:
            x = torch.tensor([list(v) for v in vectors], dtype=dtype)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Expected a sequence of {DIM}-element vectors: {e}") from e

    if not x.is_floating_point():
        raise ValueError(f"Expected a floating tensor, got dtype {x.dtype}")
    if x.dim() != 2 or x.shape[-1] != DIM:
        raise ValueError(f"Expected a vector set of shape (n, {DIM}), got {tuple(x.shape)}")
    return x


def to_triples(snapshot):
    """Convert a snapshot to a list of [x, y, z] lists of Python floats.

    Args:
        snapshot: torch.tensor of shape (n, 3)

    Returns:
        list of n lists of 3 floats
    """
    return snapshot.detach().cpu().tolist()
