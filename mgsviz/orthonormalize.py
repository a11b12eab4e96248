"""Modified Gram-Schmidt orthonormalization with step-by-step history.

Every elementary update of the vector set (one normalization, or one
projection removal) is followed by a snapshot of the whole set, so the
returned history can be replayed as an animation.
"""

import torch
import numpy as np

from . import euclidean
from . import _utils


def compute_history(vectors):
    """Orthonormalize a vector set in place and record every intermediate state.

    Vectors are processed in order. Vector i is normalized (unless its norm
    is not above the machine epsilon of its dtype, in which case it is left
    as is), then its component is removed from every later vector j > i.
    A snapshot is taken after each of these steps.

    Args:
        vectors: torch.Tensor of shape (n, 3), floating np.ndarray of shape
            (n, 3), or a list of 3-element sequences. Mutated in place to the
            orthonormalized result.

    Returns:
        list of 1 + n + n(n-1)/2 torch.tensors of shape (n, 3). The first is
        the input before any change, the last the final result. Each entry is
        an independent copy.

    Example:
        >>> vecs = torch.tensor([[2.0, 1.0, 0.0], [1.0, 2.0, 0.0], [1.0, 1.0, 1.5]])
        >>> history = compute_history(vecs)
        >>> len(history)
        7
    """
    x = _utils.as_vector_set(vectors)
    n = x.shape[0]
    eps = torch.finfo(x.dtype).eps

    history = [x.clone()]

    with torch.no_grad():
        for i in range(n):
            v_norm = euclidean.norm(x[i])
            # Degenerate vectors stay untouched
            if v_norm > eps:
                x[i] = x[i] / v_norm
            history.append(x.clone())

            v_i = x[i].clone()

            for j in range(i + 1, n):
                x[j] = euclidean.remove_projection(x[j], v_i)
                history.append(x.clone())

    if not torch.is_tensor(vectors) and not isinstance(vectors, np.ndarray):
        _write_back(vectors, x)

    return history


def _write_back(vectors, x):
    """Copy the rows of x into a list-based vector set, keeping its containers."""
    for i, row in enumerate(_utils.to_triples(x)):
        if isinstance(vectors[i], list):
            vectors[i][:] = row
        else:
            vectors[i] = tuple(row)


def stack_history(history):
    """Stack a history into a single tensor.

    Args:
        history: list of T torch.tensors of shape (n, 3)

    Returns:
        torch.tensor of shape (T, n, 3)
    """
    return torch.stack(history, dim=0)


def is_orthonormal(vectors, atol=1e-4):
    """Check whether the rows of a vector set are unit length and pairwise orthogonal.

    Args:
        vectors: vector set, see compute_history
        atol: float, absolute tolerance on the Gram matrix (default: 1e-4)

    Returns:
        bool
    """
    x = _utils.as_vector_set(vectors)
    identity = torch.eye(x.shape[0], dtype=x.dtype, device=x.device)
    return bool(torch.allclose(euclidean.gram(x), identity, rtol=0.0, atol=atol))
