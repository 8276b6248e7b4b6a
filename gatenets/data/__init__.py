"""Gate truth tables shared by every training task."""

from .gates import DEFAULT_GATES, SAMPLES, Gate, get_gate, get_gates, names, register_gate

__all__ = [
    "DEFAULT_GATES",
    "SAMPLES",
    "Gate",
    "get_gate",
    "get_gates",
    "names",
    "register_gate",
]
