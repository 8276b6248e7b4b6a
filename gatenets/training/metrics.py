"""Metric helpers for trained gate networks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping

import numpy as np

from ..core.types import Array


@dataclass(frozen=True)
class MetricResult:
    name: str
    value: float


def default_metrics() -> List[str]:
    return ["accuracy", "sse", "max_abs_error"]


def compute_metric(name: str, predictions: Array, targets: Array) -> MetricResult:
    key = name.lower()
    preds = np.asarray(predictions, dtype=np.float64)
    targs = np.asarray(targets, dtype=np.float64)
    if key == "accuracy":
        value = float(np.mean((preds >= 0.5).astype(int) == targs.astype(int)))
    elif key == "correct":
        value = float(np.sum((preds >= 0.5).astype(int) == targs.astype(int)))
    elif key == "sse":
        value = float(np.sum((targs - preds) ** 2))
    elif key == "max_abs_error":
        value = float(np.max(np.abs(targs - preds))) if preds.size else 0.0
    else:
        raise KeyError(f"Unknown metric: {name}")
    return MetricResult(name=key, value=value)


def compute_metrics(
    names: Iterable[str], predictions: Array, targets: Array
) -> Mapping[str, float]:
    results: Dict[str, float] = {}
    for name in names:
        metric = compute_metric(name, predictions, targets)
        results[metric.name] = metric.value
    return results


__all__ = ["MetricResult", "default_metrics", "compute_metric", "compute_metrics"]
