import numpy as np
import pytest

from tinykeras.activation import Relu, Sigmoid
from tinykeras.linear import Linear
from tinykeras.network import Net, net


def test_tuple_macro():
    assert net(0) == 0
    assert net(0, 1) == Net(0, 1)
    assert net(0, 1, 2, 3, 4, 5, 6, 7) == Net(
        Net(Net(0, 1), Net(2, 3)), Net(Net(4, 5), Net(6, 7))
    )
    assert net(0, 1, 2, 3, 4, 5, 6) == Net(
        Net(0, Net(1, 2)), Net(Net(3, 4), Net(5, 6))
    )
    assert net(0, 1, 2, 3, 4, 5) == Net(Net(0, 1), Net(Net(2, 3), Net(4, 5)))


def test_net_without_layers_raises():
    with pytest.raises(TypeError):
        net()


def test_output_size_chains():
    model = net(Linear(16), Relu(), Linear(10), Sigmoid())
    assert model.output_size(784) == 10


def test_param_count_is_sum_of_parts():
    first, second = Linear(4), Linear(2)
    model = Net(first, second)
    assert model.param_count(3) == first.param_count(3) + second.param_count(4)


def test_view_params_shares_memory():
    model = Net(Linear(2), Relu())
    flat = np.zeros(model.param_count(3))
    p_linear, p_relu = model.view_params(flat, 3)
    flat[:] = np.arange(flat.size)
    assert p_linear.weights.shape == (3, 2)
    assert p_linear.weights[0, 0] == 0.0
    assert p_linear.biases[1] == flat[7]
    assert float(p_relu) == flat[-1]


def test_view_params_wrong_length_raises():
    model = Net(Linear(2), Relu())
    with pytest.raises(ValueError):
        model.view_params(np.zeros(model.param_count(3) + 1), 3)


def test_init_fills_linear_weights():
    model = Net(Linear(5), Linear(3))
    flat = np.zeros(model.param_count(4))
    params = model.view_params(flat, 4)
    model.init(np.random.default_rng(0), params, 4)
    assert np.count_nonzero(params[0].weights) == params[0].weights.size
    assert np.count_nonzero(params[1].weights) == params[1].weights.size
    assert np.all(params[0].biases == 0.0)


def _setup(seed=0):
    rng = np.random.default_rng(seed)
    model = net(Linear(3), Sigmoid(), Linear(2))
    flat = rng.normal(size=model.param_count(4))
    params = model.view_params(flat, 4)
    x = rng.normal(size=(5, 4))
    return model, flat, params, x, rng


def test_infer_matches_forward():
    model, _, params, x, _ = _setup()
    out, _ = model.forward(params, x)
    np.testing.assert_allclose(model.infer(params, x), out)
    assert out.shape == (5, 2)


def test_backward_input_gradient_matches_finite_difference():
    model, flat, params, x, rng = _setup(1)
    w = rng.normal(size=(5, 2))
    _, cache = model.forward(params, x)
    dparams = model.view_params(np.zeros_like(flat), 4)
    dx = model.backward(params, w, cache, dparams)

    eps = 1e-6
    base = np.sum(model.infer(params, x) * w)
    numeric = np.zeros_like(x)
    for idx in np.ndindex(x.shape):
        bumped = x.copy()
        bumped[idx] += eps
        numeric[idx] = (np.sum(model.infer(params, bumped) * w) - base) / eps
    np.testing.assert_allclose(dx, numeric, rtol=1e-4, atol=1e-5)


def test_backward_weight_gradient_matches_finite_difference():
    model, flat, params, x, rng = _setup(2)
    w = rng.normal(size=(5, 2))
    _, cache = model.forward(params, x)
    dflat = np.zeros_like(flat)
    dparams = model.view_params(dflat, 4)
    model.backward(params, w, cache, dparams)
    analytic = dparams[0][0].weights.copy()

    eps = 1e-6
    base = np.sum(model.infer(params, x) * w)
    weights = params[0][0].weights
    numeric = np.zeros_like(weights)
    for idx in np.ndindex(weights.shape):
        saved = weights[idx]
        weights[idx] = saved + eps
        numeric[idx] = (np.sum(model.infer(params, x) * w) - base) / eps
        weights[idx] = saved
    np.testing.assert_allclose(analytic, numeric, rtol=1e-4, atol=1e-5)