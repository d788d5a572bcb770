"""Fully connected layer."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .layers import Layer


@dataclass
class LinearParams:
    """Weights of shape ``(inputs, units)`` and biases of shape ``(units,)``."""

    weights: np.ndarray
    biases: np.ndarray


@dataclass(frozen=True)
class Linear(Layer):
    """Affine map ``y = x @ weights + biases`` with ``units`` outputs."""

    units: int

    def output_size(self, input_size: int) -> int:
        return self.units

    def param_count(self, input_size: int) -> int:
        return (input_size + 1) * self.units

    def view_params(self, flat: np.ndarray, input_size: int) -> LinearParams:
        flat = super().view_params(flat, input_size)
        split = input_size * self.units
        weights = flat[:split].reshape(input_size, self.units)
        biases = flat[split:]
        return LinearParams(weights=weights, biases=biases)

    def init(
        self, rng: np.random.Generator, params: LinearParams, input_size: int
    ) -> None:
        """Draw weights from a normal distribution with variance ``1 / inputs``.

        The biases are left untouched.
        """
        inputs = params.weights.shape[0]
        std = np.sqrt(1.0 / inputs)
        params.weights[...] = rng.normal(0.0, std, size=params.weights.shape)

    def infer(self, params: LinearParams, x: np.ndarray) -> np.ndarray:
        return x @ params.weights + params.biases

    def forward(
        self, params: LinearParams, x: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        cache = np.array(x, copy=True)
        return self.infer(params, x), cache

    def backward(
        self,
        params: LinearParams,
        dy: np.ndarray,
        cache: np.ndarray,
        dparams: LinearParams,
    ) -> np.ndarray:
        dparams.weights[...] = cache.T @ dy
        # Each bias slot takes the mean of one batch row of the output
        # gradient; slots beyond the batch size keep their previous value.
        rows = min(dy.shape[0], dparams.biases.shape[0])
        dparams.biases[:rows] = dy[:rows].mean(axis=1)
        return dy @ params.weights.T