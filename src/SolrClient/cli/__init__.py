"""CLI package for solr-client command orchestration.

Option parsing (`ui`), command logic (`commands`) and execution lifecycle
(`runner`) live in separate modules.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from SolrClient.cli.runner import CommandRunner
from SolrClient.cli.ui import cli


def main() -> None:
    """Run the solr-client CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
