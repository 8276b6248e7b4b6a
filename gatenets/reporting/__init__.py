"""Reporting utilities for GateNets."""

from .artifacts import write_manifest
from .console import ConsoleReporter, sampled_epochs
from .metrics import CsvSink, JsonlSink
from .plots import PlotAdapter
from .summary import write_summary

__all__ = [
    "ConsoleReporter",
    "CsvSink",
    "JsonlSink",
    "PlotAdapter",
    "sampled_epochs",
    "write_manifest",
    "write_summary",
]
