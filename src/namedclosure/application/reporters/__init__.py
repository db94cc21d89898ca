"""Reporters for expansion results."""

from namedclosure.application.reporters.console import ConsoleConfig, ConsoleReporter
from namedclosure.application.reporters.json_reporter import JsonReporter
from namedclosure.application.reporters.protocol import ReporterProtocol

__all__ = [
    "ConsoleConfig",
    "ConsoleReporter",
    "JsonReporter",
    "ReporterProtocol",
]
