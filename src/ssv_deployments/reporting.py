"""Progress and result reporting for interactive and machine-readable runs."""

import json
from typing import IO, Any, Dict, Optional, Protocol

import click

from .types import DeploymentSummary


class Reporter(Protocol):
    """Where deployment steps send their output."""

    def progress(self, line: str) -> None:
        ...

    def complete(self, summary: DeploymentSummary) -> None:
        ...

    def result(self, record: Dict[str, Any]) -> None:
        ...


class ConsoleReporter:
    """Prints every progress line; final records are not printed."""

    def __init__(self, file: Optional[IO[str]] = None):
        self.file = file

    def progress(self, line: str) -> None:
        click.echo(line, file=self.file)

    def complete(self, summary: DeploymentSummary) -> None:
        pass

    def result(self, record: Dict[str, Any]) -> None:
        pass


class MachineReporter:
    """Suppresses progress lines and prints one JSON line per finished command."""

    def __init__(self, file: Optional[IO[str]] = None):
        self.file = file

    def progress(self, line: str) -> None:
        pass

    def complete(self, summary: DeploymentSummary) -> None:
        click.echo(summary.to_json(), file=self.file)

    def result(self, record: Dict[str, Any]) -> None:
        click.echo(json.dumps(record), file=self.file)


def reporter_for(machine: bool, file: Optional[IO[str]] = None) -> Reporter:
    """Pick the reporter matching the --machine flag."""
    if machine:
        return MachineReporter(file)
    return ConsoleReporter(file)
