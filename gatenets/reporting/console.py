"""Console reporting of trained gate networks."""

from __future__ import annotations

import sys
import threading
from typing import Iterable, List, TextIO

from ..core.types import REPORT_EVERY, GateResult
from ..training.metrics import compute_metric

SEPARATOR = "-" * 30


def sampled_epochs(epochs: int, every: int = REPORT_EVERY) -> range:
    """Return the epoch indices reported for an ``epochs``-long history.

    A trailing partial stride is not reported, so every index is ``< epochs``.
    """

    if every <= 0:
        raise ValueError(f"report stride must be positive, got {every}")
    return range(0, max(0, epochs), every)


def format_report(
    result: GateResult,
    *,
    every: int = REPORT_EVERY,
    show_accuracy: bool = False,
) -> List[str]:
    name = result.gate
    lines = ["", f"Results for logic gate {name}:"]
    for (input1, input2), output in zip(result.samples, result.predictions):
        lines.append(f"Inputs: {input1:.0f}, {input2:.0f} => Predicted output: {output:.3f}")
    if show_accuracy:
        correct = compute_metric("correct", result.predictions, result.targets).value
        lines.append(f"Accuracy: {int(correct)}/{len(result.targets)}")
    lines.append(SEPARATOR)
    history = result.error_history
    for epoch in sampled_epochs(len(history), every):
        lines.append(f"[{name}] Epoch {epoch} - Total error: {history[epoch]:f}")
    lines.append(SEPARATOR)
    return lines


class ConsoleReporter:
    """Print gate reports, one critical section per gate.

    The lock is injected so that reporters sharing a stream can share it.
    """

    def __init__(
        self,
        lock: threading.Lock,
        stream: TextIO | None = None,
        *,
        every: int = REPORT_EVERY,
        show_accuracy: bool = False,
    ) -> None:
        if every <= 0:
            raise ValueError(f"report stride must be positive, got {every}")
        self.lock = lock
        self.stream = stream
        self.every = every
        self.show_accuracy = show_accuracy

    def report(self, result: GateResult) -> None:
        lines = format_report(result, every=self.every, show_accuracy=self.show_accuracy)
        stream = self.stream or sys.stdout
        with self.lock:
            for line in lines:
                stream.write(line + "\n")
            stream.flush()

    def report_all(self, results: Iterable[GateResult]) -> None:
        for result in results:
            self.report(result)

    __call__ = report


__all__ = ["ConsoleReporter", "SEPARATOR", "format_report", "sampled_epochs"]
