"""Composable neural-network layers, costs, optimisers, training and an MNIST command."""

__version__ = "0.1.0"

__all__ = ["activation", "cost", "layers", "linear", "mnist", "model", "network", "optimise"]