"""Optimisers that update a flat parameter array from its gradients."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import numpy as np


class Optimiser(ABC):
    """Updates parameters in place given their gradients."""

    def init(self, size: int) -> None:
        """Prepare for a parameter array of ``size`` scalars."""

    @abstractmethod
    def optimise(self, params: np.ndarray, grads: np.ndarray) -> None:
        """Apply one update step to ``params`` in place."""


def _check_lengths(params: np.ndarray, grads: np.ndarray) -> None:
    if params.shape != grads.shape:
        raise ValueError(
            f"parameter shape {params.shape} does not match gradient shape {grads.shape}"
        )


@dataclass
class Adam(Optimiser):
    """Adaptive moment estimation.

    The second-moment estimate is bias-corrected with ``beta1``, as the
    first-moment estimate is.
    """

    alpha: float
    beta1: float
    beta2: float
    epsilon: float
    m: np.ndarray = field(default_factory=lambda: np.zeros(0), init=False, repr=False)
    v: np.ndarray = field(default_factory=lambda: np.zeros(0), init=False, repr=False)
    t: int = field(default=0, init=False)

    def init(self, size: int) -> None:
        self.m = np.zeros(size)
        self.v = np.zeros(size)

    def optimise(self, params: np.ndarray, grads: np.ndarray) -> None:
        grads = np.asarray(grads)
        _check_lengths(params, grads)
        if self.m.shape != params.shape:
            raise ValueError(
                f"optimiser was initialised for {self.m.shape} parameters, "
                f"got {params.shape}"
            )
        self.t += 1
        b1, b2 = self.beta1, self.beta2
        self.m = self.m * b1 + grads * (1.0 - b1)
        self.v = self.v * b2 + grads**2 * (1.0 - b2)
        correction = 1.0 - b1**self.t
        mb = self.m / correction
        vb = self.v / correction
        params -= self.alpha * mb / (np.sqrt(vb) + self.epsilon)


@dataclass
class SGD(Optimiser):
    """Plain gradient descent with a fixed learning rate."""

    alpha: float

    def init(self, size: int) -> None:
        """Plain gradient descent keeps no state."""

    def optimise(self, params: np.ndarray, grads: np.ndarray) -> None:
        grads = np.asarray(grads)
        _check_lengths(params, grads)
        params -= self.alpha * grads