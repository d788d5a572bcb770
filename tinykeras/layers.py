"""The interface every layer of a network implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np


class Layer(ABC):
    """A differentiable map from a batch of 1-D inputs to a batch of 1-D outputs.

    A layer keeps no weights itself. Its parameters live in one flat float
    array, and ``view_params`` turns that array into the structure the layer
    works on. The structure shares memory with the flat array, so the
    optimiser can update the flat array and the layer sees the change.
    Inputs and outputs are 2-D arrays of shape ``(batch, features)``.
    """

    @abstractmethod
    def output_size(self, input_size: int) -> int:
        """Number of output features for ``input_size`` input features."""

    @abstractmethod
    def param_count(self, input_size: int) -> int:
        """Number of scalars the layer's parameters take up."""

    def view_params(self, flat: np.ndarray, input_size: int) -> Any:
        """Return the parameters held in ``flat``, sharing its memory."""
        expected = self.param_count(input_size)
        if flat.shape != (expected,):
            raise ValueError(
                f"expected a flat parameter array of length {expected}, "
                f"got shape {flat.shape}"
            )
        return flat

    def init(self, rng: np.random.Generator, params: Any, input_size: int) -> None:
        """Fill ``params`` in place with starting values. By default it leaves them as they are."""

    def infer(self, params: Any, x: np.ndarray) -> np.ndarray:
        """Compute the output for the batch ``x``."""
        output, _ = self.forward(params, x)
        return output

    @abstractmethod
    def forward(self, params: Any, x: np.ndarray) -> tuple[np.ndarray, Any]:
        """Compute the output for ``x`` and the cache that ``backward`` needs."""

    @abstractmethod
    def backward(
        self, params: Any, dy: np.ndarray, cache: Any, dparams: Any
    ) -> np.ndarray:
        """Propagate the output gradient ``dy`` back through the layer.

        Writes the parameter gradients into ``dparams`` in place and returns
        the gradient with respect to the input.
        """