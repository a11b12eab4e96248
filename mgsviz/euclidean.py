"""Utility functions for the Euclidean inner product on vector sets.

A vector set is a tensor of shape (n, dim); all helpers broadcast over
leading dimensions so they also work on stacked histories of shape (T, n, dim).
"""

import torch


def inner(x, y):
    """Compute the Euclidean inner (dot) product of x and y.

    Args:
        x, y: torch.tensor of the same shape (..., dim)

    Returns:
        torch.tensor of shape (...)
    """
    return torch.sum(x * y, dim=-1, keepdim=False)


def norm(x):
    """Compute the Euclidean norm of x.

    Args:
        x: torch.tensor of shape (..., dim)

    Returns:
        torch.tensor of shape (...)
    """
    return torch.sqrt(inner(x, x))


def gram(x):
    """Compute the Gram matrix of the rows of x.

    Args:
        x: torch.tensor of shape (..., n, dim)

    Returns:
        torch.tensor of shape (..., n, n)
    """
    return x @ x.transpose(-1, -2)


def remove_projection(x, u):
    """Subtract from x its component along u.

    u is assumed to be a unit vector, so the component is <x, u> u.

    Args:
        x: torch.tensor of shape (..., dim)
        u: torch.tensor of shape (..., dim) - unit direction

    Returns:
        torch.tensor of shape (..., dim)
    """
    proj = inner(x, u).unsqueeze(-1)
    return x - proj * u
