"""A layer bound to its parameters, and the loop that trains it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .cost import Cost
from .optimise import Optimiser


@dataclass(eq=False)
class Model:
    """A layer together with the flat array that holds its parameters."""

    layer: Any
    input_size: int
    params: np.ndarray

    @classmethod
    def from_layer(
        cls,
        layer: Any,
        input_size: int,
        rng: np.random.Generator | None = None,
    ) -> Model:
        """Allocate zeroed parameters for ``layer`` and let it initialise them."""
        if rng is None:
            rng = np.random.default_rng()
        params = np.zeros(layer.param_count(input_size), dtype=np.float64)
        model = cls(layer=layer, input_size=input_size, params=params)
        layer.init(rng, model._view(), input_size)
        return model

    @property
    def output_size(self) -> int:
        return self.layer.output_size(self.input_size)

    def _view(self, flat: np.ndarray | None = None) -> Any:
        return self.layer.view_params(
            self.params if flat is None else flat, self.input_size
        )

    def apply_batch(self, x: np.ndarray) -> np.ndarray:
        """Run the model on a batch of shape ``(batch, input_size)``."""
        x = np.asarray(x)
        if x.ndim != 2 or x.shape[1] != self.input_size:
            raise ValueError(
                f"expected a batch of shape (n, {self.input_size}), got {x.shape}"
            )
        return self.layer.infer(self._view(), x)

    def apply_single(self, x: np.ndarray) -> np.ndarray:
        """Run the model on one input of shape ``(input_size,)``."""
        x = np.asarray(x)
        if x.ndim != 1:
            raise ValueError(f"expected a single 1-D input, got shape {x.shape}")
        return self.apply_batch(x[np.newaxis, :])[0]


def _signum(values: np.ndarray) -> np.ndarray:
    # Zero counts as positive, as it does for a sign-bit based signum.
    return np.where(np.isnan(values), np.nan, np.copysign(1.0, values))


@dataclass(frozen=True)
class Regularisation:
    """Penalty on parameter size: ``l1 * |p| + l2 * p**2``, added to the gradients."""

    l1: float = 0.0
    l2: float = 0.0

    def apply(self, grads: np.ndarray, params: np.ndarray) -> None:
        """Add the penalty's gradient to ``grads`` in place."""
        params = np.asarray(params)
        if grads.shape != params.shape:
            raise ValueError(
                f"gradient shape {grads.shape} does not match parameter shape {params.shape}"
            )
        if self.l1:
            grads += _signum(params) * self.l1
        if self.l2:
            grads += (params + params) * self.l2


def _check_data(inputs: np.ndarray, expected: np.ndarray) -> None:
    if inputs.ndim != 2 or expected.ndim != 2:
        raise ValueError("inputs and expected values must be 2-D batches")
    if inputs.shape[0] != expected.shape[0]:
        raise ValueError(
            f"{inputs.shape[0]} inputs but {expected.shape[0]} expected values"
        )
    if inputs.shape[0] == 0:
        raise ValueError("cannot run an epoch over no data")


@dataclass(eq=False)
class Trainer:
    """Trains a model with an optimiser, a cost and an optional regularisation."""

    model: Model
    optimiser: Optimiser
    cost: Cost
    regularisation: Regularisation | None = None
    _grads: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.optimiser.init(self.model.params.size)
        self._grads = self.model.params.copy()

    def train_epoch(
        self,
        inputs: np.ndarray,
        expected: np.ndarray,
        batch_size: int,
        rng: np.random.Generator | None = None,
    ) -> float:
        """Train once over shuffled mini-batches and return the mean batch cost."""
        inputs = np.asarray(inputs)
        expected = np.asarray(expected)
        _check_data(inputs, expected)
        if batch_size < 1:
            raise ValueError("batch size must be at least 1")
        if rng is None:
            rng = np.random.default_rng()

        total = inputs.shape[0]
        order = rng.permutation(total)
        total_cost = 0.0
        for start in range(0, total, batch_size):
            chunk = order[start : start + batch_size]
            total_cost += self._train_batch(inputs[chunk], expected[chunk])
        return total_cost / -(-total // batch_size)

    def _train_batch(self, x: np.ndarray, y: np.ndarray) -> float:
        model = self.model
        layer = model.layer
        params = model._view()

        output, cache = layer.forward(params, x)
        cost, doutput = self.cost.diff(output, y)

        dparams = model._view(self._grads)
        layer.backward(params, doutput, cache, dparams)

        if self.regularisation is not None:
            self.regularisation.apply(self._grads, model.params)

        self.optimiser.optimise(model.params, self._grads)
        return cost

    def test_epoch(self, inputs: np.ndarray, expected: np.ndarray) -> float:
        """Return the mean cost of the model over every sample, one at a time."""
        inputs = np.asarray(inputs)
        expected = np.asarray(expected)
        _check_data(inputs, expected)

        total_cost = 0.0
        for x, y in zip(inputs, expected):
            output = self.model.apply_batch(x[np.newaxis, :])
            cost, _ = self.cost.diff(output, y[np.newaxis, :])
            total_cost += cost
        return total_cost / inputs.shape[0]