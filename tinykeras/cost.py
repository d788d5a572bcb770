"""Cost functions that compare a batch of outputs with the expected values."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np


class Cost(ABC):
    """Scores a batch of outputs against the expected batch."""

    @abstractmethod
    def cost(self, output: np.ndarray, expected: np.ndarray) -> float:
        """Return the cost of ``output`` given ``expected``."""

    @abstractmethod
    def diff(self, output: np.ndarray, expected: np.ndarray) -> tuple[float, np.ndarray]:
        """Return the cost and its gradient with respect to ``output``."""


def _check_batches(output: np.ndarray, expected: np.ndarray) -> None:
    if output.ndim != 2:
        raise ValueError(f"expected a 2-D batch of outputs, got shape {output.shape}")
    if output.shape != expected.shape:
        raise ValueError(
            f"output shape {output.shape} does not match expected shape {expected.shape}"
        )


@dataclass(frozen=True)
class MSE(Cost):
    """Mean squared error over every element of the batch."""

    def cost(self, output: np.ndarray, expected: np.ndarray) -> float:
        output = np.asarray(output)
        expected = np.asarray(expected)
        _check_batches(output, expected)
        d = output - expected
        return float(np.sum(d * d) / output.size)

    def diff(self, output: np.ndarray, expected: np.ndarray) -> tuple[float, np.ndarray]:
        """Return the mean squared error and ``2 * (output - expected)``.

        The gradient is not divided by the number of elements.
        """
        output = np.asarray(output)
        expected = np.asarray(expected)
        _check_batches(output, expected)
        d = output - expected
        return float(np.sum(d * d) / output.size), d * 2