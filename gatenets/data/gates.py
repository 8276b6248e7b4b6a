"""Truth tables for two-input Boolean gates and the gate registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, MutableMapping, Sequence

import numpy as np

from ..core.types import Array


def _frozen(values: Sequence[Sequence[float]] | Sequence[float]) -> Array:
    arr = np.array(values, dtype=np.float64)
    arr.setflags(write=False)
    return arr


SAMPLES: Array = _frozen([[0, 0], [0, 1], [1, 0], [1, 1]])


@dataclass(frozen=True)
class Gate:
    """A two-input Boolean function used as a supervised target.

    Attributes
    ----------
    name:
        Upper-case label, e.g. ``"XOR"``.
    targets:
        Read-only vector of four outputs, one per row of :data:`SAMPLES`.
    """

    name: str
    targets: Array

    def truth_table(self) -> List[tuple[int, int, int]]:
        return [
            (int(a), int(b), int(t)) for (a, b), t in zip(SAMPLES, self.targets)
        ]


_REGISTRY: MutableMapping[str, Gate] = {}

DEFAULT_GATES = ("AND", "OR", "XOR")


def register_gate(name: str, targets: Sequence[float]) -> Gate:
    """Register a gate under ``name`` (stored upper-case)."""

    key = name.upper()
    if len(targets) != len(SAMPLES):
        raise ValueError(
            f"Gate {key} needs {len(SAMPLES)} targets, got {len(targets)}"
        )
    if any(t not in (0, 1) for t in targets):
        raise ValueError(f"Gate {key} targets must be 0 or 1: {list(targets)}")
    gate = Gate(name=key, targets=_frozen(targets))
    _REGISTRY[key] = gate
    return gate


def get_gate(name: str) -> Gate:
    try:
        return _REGISTRY[name.upper()]
    except KeyError as exc:
        available = ", ".join(names())
        raise KeyError(f"Unknown gate {name!r}. Available gates: {available}") from exc


def get_gates(gate_names: Iterable[str]) -> List[Gate]:
    """Resolve ``gate_names`` in order, rejecting empty or repeated lists."""

    gates = [get_gate(name) for name in gate_names]
    if not gates:
        raise ValueError("At least one gate is required")
    seen: Dict[str, int] = {}
    for gate in gates:
        seen[gate.name] = seen.get(gate.name, 0) + 1
    duplicates = sorted(name for name, count in seen.items() if count > 1)
    if duplicates:
        raise ValueError(f"Each gate may only be trained once per run: {duplicates}")
    return gates


def names() -> List[str]:
    return sorted(_REGISTRY)


register_gate("AND", [0, 0, 0, 1])
register_gate("OR", [0, 1, 1, 1])
register_gate("XOR", [0, 1, 1, 0])
register_gate("NAND", [1, 1, 1, 0])
register_gate("NOR", [1, 0, 0, 0])
register_gate("XNOR", [1, 0, 0, 1])


__all__ = [
    "SAMPLES",
    "DEFAULT_GATES",
    "Gate",
    "register_gate",
    "get_gate",
    "get_gates",
    "names",
]
