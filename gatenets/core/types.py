"""Core typing contracts for GateNets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

import numpy as np

Array = np.ndarray

INPUTS = 2
HIDDEN = 3
OUTPUTS = 1
EPOCHS = 10000
LEARNING_RATE = 0.1
REPORT_EVERY = 2000


@dataclass
class Network:
    """Weights and biases of one 2-3-1 sigmoid network.

    Every array is owned by the network that holds it; nothing outside
    :func:`gatenets.core.network.backward` mutates them.
    """

    name: str
    weight_input_hidden: Array
    bias_hidden: Array
    weight_hidden_output: Array
    bias_output: float
    learning_rate: float

    def parameters(self) -> Dict[str, Array]:
        return {
            "weight_input_hidden": self.weight_input_hidden.copy(),
            "bias_hidden": self.bias_hidden.copy(),
            "weight_hidden_output": self.weight_hidden_output.copy(),
            "bias_output": np.array(self.bias_output),
        }

    def is_finite(self) -> bool:
        return bool(
            np.all(np.isfinite(self.weight_input_hidden))
            and np.all(np.isfinite(self.bias_hidden))
            and np.all(np.isfinite(self.weight_hidden_output))
            and np.isfinite(self.bias_output)
            and np.isfinite(self.learning_rate)
        )

    def parameter_count(self) -> int:
        return int(
            self.weight_input_hidden.size
            + self.bias_hidden.size
            + self.weight_hidden_output.size
            + 1
        )


@dataclass(frozen=True)
class TrainingTask:
    """Everything one training thread owns for the duration of a run."""

    network: Network
    samples: Array
    targets: Array
    error_history: Array


@dataclass(frozen=True)
class GateResult:
    """Trained network, its error history and final predictions."""

    gate: str
    network: Network
    error_history: Array
    samples: Array
    predictions: Array
    targets: Array


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`gatenets.training.pipelines.run_pipeline`."""

    results: Tuple[GateResult, ...]
    epochs: int
    metrics_paths: Tuple[str, ...] = field(default_factory=tuple)
    manifest_path: str = ""
    summary_path: str = ""
