"""Element-wise and row-wise activation layers."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .layers import Layer


class Activation(Layer):
    """A layer without weights whose output has as many features as its input.

    It still reserves one scalar in the flat parameter array (a
    zero-dimensional parameter), which it never reads.
    """

    def output_size(self, input_size: int) -> int:
        return input_size

    def param_count(self, input_size: int) -> int:
        return 1

    def view_params(self, flat: np.ndarray, input_size: int) -> np.ndarray:
        return super().view_params(flat, input_size).reshape(())

    def init(self, rng: np.random.Generator, params: np.ndarray, input_size: int) -> None:
        """Activations have nothing to initialise."""


@dataclass(frozen=True)
class Relu(Activation):
    """Rectified linear unit, ``max(x, 0)``."""

    def infer(self, params: np.ndarray, x: np.ndarray) -> np.ndarray:
        return np.maximum(x, 0.0)

    def forward(
        self, params: np.ndarray, x: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        return self.infer(params, x), np.array(x, copy=True)

    def backward(
        self,
        params: np.ndarray,
        dy: np.ndarray,
        cache: np.ndarray,
        dparams: np.ndarray,
    ) -> np.ndarray:
        return dy * np.maximum(np.sign(cache), 0.0)


@dataclass(frozen=True)
class Sigmoid(Activation):
    """Logistic function, ``1 / (1 + exp(-x))``."""

    def infer(self, params: np.ndarray, x: np.ndarray) -> np.ndarray:
        return 1.0 / (1.0 + np.exp(-x))

    def forward(
        self, params: np.ndarray, x: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        output = self.infer(params, x)
        return output, output.copy()

    def backward(
        self,
        params: np.ndarray,
        dy: np.ndarray,
        cache: np.ndarray,
        dparams: np.ndarray,
    ) -> np.ndarray:
        return dy * cache * (1.0 - cache)


@dataclass(frozen=True)
class Softmax(Activation):
    """Softmax over the features of each batch row."""

    def infer(self, params: np.ndarray, x: np.ndarray) -> np.ndarray:
        exp = np.exp(x)
        return exp / exp.sum(axis=1, keepdims=True)

    def forward(
        self, params: np.ndarray, x: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        output = self.infer(params, x)
        return output, output.copy()

    def backward(
        self,
        params: np.ndarray,
        dy: np.ndarray,
        cache: np.ndarray,
        dparams: np.ndarray,
    ) -> np.ndarray:
        # Per row: (diag(y) - y y^T) @ dy, with y the softmax output.
        y = cache
        return y * dy - y * np.sum(y * dy, axis=1, keepdims=True)