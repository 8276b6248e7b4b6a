"""Core numerical primitives for GateNets."""

from . import activations, network, types

__all__ = ["activations", "network", "types"]
