"""Composition of two layers, and a helper that chains many."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from .layers import Layer


@dataclass(frozen=True)
class Net(Layer):
    """Feeds the output of ``first`` into ``second``.

    Parameters are laid out as the first layer's followed by the second's,
    and viewed as a ``(first_params, second_params)`` pair.
    """

    first: Any
    second: Any

    def output_size(self, input_size: int) -> int:
        return self.second.output_size(self.first.output_size(input_size))

    def param_count(self, input_size: int) -> int:
        mid = self.first.output_size(input_size)
        return self.first.param_count(input_size) + self.second.param_count(mid)

    def view_params(self, flat: np.ndarray, input_size: int) -> tuple[Any, Any]:
        flat = super().view_params(flat, input_size)
        mid = self.first.output_size(input_size)
        split = self.first.param_count(input_size)
        return (
            self.first.view_params(flat[:split], input_size),
            self.second.view_params(flat[split:], mid),
        )

    def init(
        self, rng: np.random.Generator, params: tuple[Any, Any], input_size: int
    ) -> None:
        mid = self.first.output_size(input_size)
        self.first.init(rng, params[0], input_size)
        self.second.init(rng, params[1], mid)

    def infer(self, params: tuple[Any, Any], x: np.ndarray) -> np.ndarray:
        mid = self.first.infer(params[0], x)
        return self.second.infer(params[1], mid)

    def forward(
        self, params: tuple[Any, Any], x: np.ndarray
    ) -> tuple[np.ndarray, tuple[Any, Any]]:
        mid, cache0 = self.first.forward(params[0], x)
        output, cache1 = self.second.forward(params[1], mid)
        return output, (cache0, cache1)

    def backward(
        self,
        params: tuple[Any, Any],
        dy: np.ndarray,
        cache: tuple[Any, Any],
        dparams: tuple[Any, Any],
    ) -> np.ndarray:
        dmid = self.second.backward(params[1], dy, cache[1], dparams[1])
        return self.first.backward(params[0], dmid, cache[0], dparams[0])


def net(*args: Any) -> Any:
    """Chain the given layers into a nested, roughly balanced tree of ``Net``.

    Neighbouring pairs are joined level by level; when a level has an odd
    count, its first item is carried up alone.
    """
    if not args:
        raise TypeError("net() needs at least one layer")
    items = list(args)
    while len(items) > 1:
        head = items[:1] if len(items) % 2 else []
        rest = items[len(head):]
        items = head + [Net(a, b) for a, b in zip(rest[::2], rest[1::2])]
    return items[0]