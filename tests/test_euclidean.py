import torch

from mgsviz import euclidean


def test_inner_and_norm_broadcast_over_rows():
    x = torch.tensor([[3.0, 4.0, 0.0], [1.0, 2.0, 2.0]])
    y = torch.tensor([[1.0, 0.0, 0.0], [0.0, 1.0, 1.0]])
    torch.testing.assert_close(euclidean.inner(x, y), torch.tensor([3.0, 4.0]))
    torch.testing.assert_close(euclidean.norm(x), torch.tensor([5.0, 3.0]))


def test_gram_of_standard_basis_is_identity():
    e = torch.eye(3)
    torch.testing.assert_close(euclidean.gram(e), torch.eye(3))

    stacked = torch.stack([e, 2 * e])
    assert euclidean.gram(stacked).shape == (2, 3, 3)


def test_remove_projection_leaves_orthogonal_residual():
    u = torch.tensor([1.0, 0.0, 0.0])
    x = torch.tensor([2.0, 3.0, -1.0])
    r = euclidean.remove_projection(x, u)
    torch.testing.assert_close(r, torch.tensor([0.0, 3.0, -1.0]))
    assert euclidean.inner(r, u).item() == 0.0
