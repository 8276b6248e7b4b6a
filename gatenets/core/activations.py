"""Activation utilities for GateNets."""

from __future__ import annotations

import numpy as np

from .types import Array


def sigmoid(x: float | Array) -> float | Array:
    """Return the logistic sigmoid ``1 / (1 + exp(-x))``."""

    return 1.0 / (1.0 + np.exp(-x))


def sigmoid_derivative_from_output(y: float | Array) -> float | Array:
    """Return the sigmoid derivative expressed through its output ``y``.

    ``y`` must already be a sigmoid activation, not the pre-activation sum.
    """

    return y * (1.0 - y)
