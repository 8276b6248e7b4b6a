"""Per-network training loop for GateNets."""

from __future__ import annotations

import numpy as np

from ..core.network import backward, forward
from ..core.types import Array, Network, TrainingTask


class NonFiniteNetworkError(FloatingPointError):
    """A network parameter or epoch error became NaN or infinite."""


def train(network: Network, samples: Array, targets: Array, error_history: Array) -> None:
    """Train ``network`` for ``len(error_history)`` epochs over ``samples``.

    Each epoch runs forward and backward on every sample in order and stores
    the epoch's sum of squared errors in ``error_history[epoch]``.
    """

    if len(samples) != len(targets):
        raise ValueError(
            f"samples and targets differ in length: {len(samples)} != {len(targets)}"
        )
    if len(error_history) == 0:
        raise ValueError("error_history must hold at least one epoch")

    rows = [(float(a), float(b), float(t)) for (a, b), t in zip(samples, targets)]
    for epoch in range(len(error_history)):
        epoch_error = 0.0
        for input1, input2, target in rows:
            hidden, output = forward(network, input1, input2)
            epoch_error += (target - output) ** 2
            backward(network, input1, input2, hidden, output, target)
        error_history[epoch] = epoch_error


class Trainer:
    """Drive :func:`train` for one :class:`TrainingTask`.

    ``state`` moves ``"idle" -> "running"`` and then to ``"done"``, or to
    ``"failed"`` when training raises. A trainer runs exactly once.
    """

    def __init__(self, task: TrainingTask) -> None:
        self.task = task
        self.state = "idle"

    def run(self) -> TrainingTask:
        if self.state != "idle":
            raise RuntimeError(f"Trainer for {self.task.network.name} already {self.state}")
        self.state = "running"
        task = self.task
        try:
            train(task.network, task.samples, task.targets, task.error_history)
            self._check_finite()
        except Exception:
            self.state = "failed"
            raise
        self.state = "done"
        return task

    __call__ = run

    def _check_finite(self) -> None:
        network = self.task.network
        if not network.is_finite():
            raise NonFiniteNetworkError(f"Network {network.name} has non-finite parameters")
        if not np.all(np.isfinite(self.task.error_history)):
            raise NonFiniteNetworkError(f"Network {network.name} recorded a non-finite epoch error")


__all__ = ["NonFiniteNetworkError", "Trainer", "train"]
