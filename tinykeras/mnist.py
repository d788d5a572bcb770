"""Train a small classifier on the MNIST digits stored as IDX files."""

from __future__ import annotations

import argparse
import struct
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from .activation import Relu, Sigmoid
from .cost import MSE
from .linear import Linear
from .model import Model, Regularisation, Trainer
from .network import net
from .optimise import Adam

IMAGE_SIDE = 28
IMAGE_SIZE = IMAGE_SIDE * IMAGE_SIDE
CLASSES = 10
BATCH_SIZE = 120
EPOCHS = 20


@dataclass
class DataSet:
    """Images of shape ``(n, 784)`` and labels of shape ``(n,)``, both bytes."""

    images: np.ndarray
    labels: np.ndarray


def _header(data: bytes, count: int) -> tuple[int, ...]:
    try:
        return struct.unpack_from(f">{count}I", data)
    except struct.error as exc:
        raise ValueError("truncated IDX header") from exc


def read_labels(data: bytes) -> np.ndarray:
    """Parse an IDX label file into an array of labels."""
    _, length = _header(data, 2)
    body = data[8 : 8 + length]
    if len(body) < length:
        raise ValueError(f"expected {length} labels, found {len(body)}")
    return np.frombuffer(body, dtype=np.uint8).copy()


def read_images(data: bytes) -> np.ndarray:
    """Parse an IDX image file of 28x28 images into an ``(n, 784)`` array."""
    _, length, width, height = _header(data, 4)
    if (width, height) != (IMAGE_SIDE, IMAGE_SIDE):
        raise ValueError(f"expected 28x28 images, got {width}x{height}")
    size = length * IMAGE_SIZE
    body = data[16 : 16 + size]
    if len(body) < size:
        raise ValueError(f"expected {length} images, data is truncated")
    return np.frombuffer(body, dtype=np.uint8).reshape(length, IMAGE_SIZE).copy()


def _load_set(directory: Path, prefix: str) -> DataSet:
    images = read_images((directory / f"{prefix}-images-idx3-ubyte").read_bytes())
    labels = read_labels((directory / f"{prefix}-labels-idx1-ubyte").read_bytes())
    return DataSet(images=images, labels=labels)


def load_data(directory: str | Path) -> tuple[DataSet, DataSet]:
    """Load the training and testing sets from ``directory``."""
    directory = Path(directory)
    return _load_set(directory, "train"), _load_set(directory, "t10k")


def process_data(dataset: DataSet) -> tuple[np.ndarray, np.ndarray]:
    """Scale pixels to ``[0, 1]`` and one-hot encode the labels."""
    count = len(dataset.images)
    if count != len(dataset.labels):
        raise ValueError(
            f"{count} images but {len(dataset.labels)} labels"
        )
    labels = np.asarray(dataset.labels, dtype=np.intp)
    if labels.size and labels.max() >= CLASSES:
        raise ValueError(f"label {labels.max()} is out of range")

    inputs = np.asarray(dataset.images, dtype=np.float32).reshape(count, IMAGE_SIZE) / 255.0
    expected = np.zeros((count, CLASSES), dtype=np.float32)
    expected[np.arange(count), labels] = 1.0
    return inputs.astype(np.float32), expected


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Train a classifier on MNIST.")
    parser.add_argument(
        "data",
        nargs="?",
        default="examples/mnist/data",
        help="directory holding the four IDX files",
    )
    parser.add_argument("--epochs", type=int, default=EPOCHS)
    parser.add_argument("--batch-size", type=int, default=BATCH_SIZE)
    args = parser.parse_args(argv)

    training, testing = load_data(args.data)
    train_x, train_y = process_data(training)
    test_x, test_y = process_data(testing)

    network = net(
        Linear(16),
        Relu(),
        Linear(16),
        Relu(),
        Linear(CLASSES),
        Sigmoid(),
    )
    model = Model.from_layer(network, IMAGE_SIZE)
    trainer = Trainer(
        model=model,
        optimiser=Adam(0.001, 0.9, 0.99, 1e-8),
        cost=MSE(),
        regularisation=Regularisation(l2=0.01),
    )

    costs = []
    for _ in range(args.epochs):
        cost = trainer.train_epoch(train_x, train_y, args.batch_size)
        costs.append(cost)
        print(f"cost: {cost}")

    print(f"test cost: {trainer.test_epoch(test_x, test_y)}")

    output = trainer.model.apply_single(train_x[0])
    print(f"output: {output}")
    print(f"expected: {train_y[0]}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())