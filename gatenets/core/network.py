"""Initialisation, forward and backward passes of the 2-3-1 gate network."""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from .activations import sigmoid, sigmoid_derivative_from_output
from .types import HIDDEN, INPUTS, Array, Network


def init_network(
    name: str,
    learning_rate: float,
    rng: np.random.Generator | None = None,
) -> Network:
    """Return a network whose weights and biases are drawn from U[-1, 1].

    Seeding is left to the caller: pass the same generator to successive
    calls to build independent networks from a single seeded stream.
    """

    if not math.isfinite(learning_rate) or learning_rate <= 0.0:
        raise ValueError(f"learning_rate must be finite and positive, got {learning_rate!r}")
    rng = rng if rng is not None else np.random.default_rng()
    weight_input_hidden = rng.uniform(-1.0, 1.0, size=(INPUTS, HIDDEN))
    # one (bias, outgoing weight) pair per hidden unit
    per_unit = rng.uniform(-1.0, 1.0, size=(HIDDEN, 2))
    bias_output = float(rng.uniform(-1.0, 1.0))
    return Network(
        name=name,
        weight_input_hidden=weight_input_hidden,
        bias_hidden=per_unit[:, 0].copy(),
        weight_hidden_output=per_unit[:, 1].copy(),
        bias_output=bias_output,
        learning_rate=float(learning_rate),
    )


def forward(network: Network, input1: float, input2: float) -> Tuple[Array, float]:
    """Return the hidden activations and the scalar output for one input pair."""

    W = network.weight_input_hidden
    hidden = sigmoid(input1 * W[0] + input2 * W[1] + network.bias_hidden)
    output_sum = float(np.dot(hidden, network.weight_hidden_output)) + network.bias_output
    return hidden, float(sigmoid(output_sum))


def backward(
    network: Network,
    input1: float,
    input2: float,
    hidden: Array,
    output: float,
    target: float,
) -> None:
    """Apply one backpropagation update to ``network`` in place."""

    error = target - output
    delta_output = error * sigmoid_derivative_from_output(output)
    # read the outgoing weights before they are updated below
    delta_hidden = (
        sigmoid_derivative_from_output(hidden) * network.weight_hidden_output * delta_output
    )

    lr = network.learning_rate
    network.weight_hidden_output += lr * delta_output * hidden
    network.bias_output += lr * delta_output

    network.weight_input_hidden[0] += lr * delta_hidden * input1
    network.weight_input_hidden[1] += lr * delta_hidden * input2
    network.bias_hidden += lr * delta_hidden


def predict(network: Network, samples: Array) -> Array:
    """Run :func:`forward` on every row of ``samples``."""

    outputs = np.empty(len(samples), dtype=np.float64)
    for idx, (input1, input2) in enumerate(samples):
        _, outputs[idx] = forward(network, float(input1), float(input2))
    return outputs


__all__ = ["init_network", "forward", "backward", "predict"]
