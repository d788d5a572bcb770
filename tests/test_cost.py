import numpy as np
import pytest

from tinykeras.cost import MSE


def test_cost_is_zero_for_identical_batches():
    batch = np.array([[0.25, -1.5, 3.0], [2.0, 0.0, -0.75]])
    assert MSE().cost(batch, batch.copy()) == 0.0


def test_cost_of_small_batch():
    output = np.array([[1.0, 2.0]])
    expected = np.array([[0.0, 0.0]])
    assert MSE().cost(output, expected) == pytest.approx(2.5)


def test_diff_cost_matches_cost():
    rng = np.random.default_rng(3)
    output = rng.normal(size=(4, 5))
    expected = rng.normal(size=(4, 5))
    cost, _ = MSE().diff(output, expected)
    assert cost == pytest.approx(MSE().cost(output, expected))


def test_diff_gradient_is_twice_difference():
    output = np.array([[1.0, 2.0], [3.0, 4.0]])
    expected = np.array([[0.5, 2.0], [4.0, 1.0]])
    _, grad = MSE().diff(output, expected)
    np.testing.assert_allclose(grad, np.array([[1.0, 0.0], [-2.0, 6.0]]))


def test_diff_gradient_matches_finite_difference_up_to_scale():
    rng = np.random.default_rng(7)
    output = rng.normal(size=(2, 3))
    expected = rng.normal(size=(2, 3))
    _, grad = MSE().diff(output, expected)
    eps = 1e-6
    bumped = output.copy()
    bumped[1, 2] += eps
    numeric = (MSE().cost(bumped, expected) - MSE().cost(output, expected)) / eps
    # The gradient is that of the summed squared error, not the mean.
    assert grad[1, 2] / output.size == pytest.approx(numeric, rel=1e-4)


def test_cost_is_symmetric():
    rng = np.random.default_rng(11)
    a = rng.normal(size=(3, 2))
    b = rng.normal(size=(3, 2))
    assert MSE().cost(a, b) == pytest.approx(MSE().cost(b, a))


def test_shape_mismatch_raises():
    with pytest.raises(ValueError):
        MSE().cost(np.zeros((2, 3)), np.zeros((3, 2)))
    with pytest.raises(ValueError):
        MSE().diff(np.zeros((2, 3)), np.zeros((2, 4)))


def test_non_batch_raises():
    with pytest.raises(ValueError):
        MSE().cost(np.zeros(3), np.zeros(3))