"""Command runner for coordinating CLI execution.

Manages logging configuration, client lifecycle, output printing and error
handling for command execution.
"""

from __future__ import annotations

import json

import click

from SolrClient import create_client
from SolrClient.cli.commands import Command
from SolrClient.config import AppConfig
from SolrClient.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def run(self, action: str, command: Command, *, pretty: bool = True) -> None:
        """Execute one command and print its JSON output.

        Args:
            action: The CLI command name (e.g., 'select').
            command: Command to execute.
            pretty: Indent printed JSON; one compact line per value otherwise.

        Raises:
            click.Abort: When the command fails.
        """
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        log.debug(
            "Running %s against %s collection=%s",
            action,
            self.config.solr.base_url,
            self.config.solr.collection,
        )
        try:
            with create_client(self.config) as client:
                for chunk in command.execute(client):
                    click.echo(json.dumps(chunk, ensure_ascii=False, indent=2 if pretty else None))
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action, e)
            raise click.Abort from e
