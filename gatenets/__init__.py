"""GateNets public API."""

from .core import activations  # noqa: F401
from .core import types  # noqa: F401
from .core.network import backward, forward, init_network, predict
from .data.gates import SAMPLES, get_gate
from .training.pipelines import load_preset, presets, run_gates, run_pipeline
from .training.trainer import Trainer, train

__all__ = [
    "SAMPLES",
    "Trainer",
    "activations",
    "backward",
    "forward",
    "get_gate",
    "init_network",
    "load_preset",
    "predict",
    "presets",
    "run_gates",
    "run_pipeline",
    "train",
    "types",
]
