"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to the command runner.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from SolrClient.cli.commands import (
    CommitCommand,
    DeleteCommand,
    HandlerCommand,
    SelectCommand,
    UploadCommand,
)
from SolrClient.cli.runner import CommandRunner
from SolrClient.config import DEFAULT_CONFIG_PATH, load_config_with_defaults


def _parse_param(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> list[tuple[str, str]]:
    """Parse repeated `key=value` options, keeping their order."""
    del ctx, param
    pairs: list[tuple[str, str]] = []
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {item!r}")
        pairs.append((key, value))
    return pairs


@click.group(help="solr-client: query and update a Solr collection.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="YAML config file; its keys override config/default.yml.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.

    Args:
        ctx: Click context.
        config_path: YAML file layered over config/default.yml when that exists.
    """
    load_dotenv()
    ctx.obj = load_config_with_defaults(config_path)


@cli.command("select")
@click.argument("query")
@click.option("--rows", type=int, default=None, help="Page size (default: solr.rows).")
@click.option("--start", type=int, default=None, help="Offset of the first document.")
@click.option("--sort", default=None, help="Sort clause, e.g. 'id asc'.")
@click.option("--fq", "filter_queries", multiple=True, help="Filter query; repeatable.")
@click.option("--fl", "fields", multiple=True, help="Returned field; repeatable.")
@click.option("--facet-field", "facet_fields", multiple=True, help="Field to facet on; repeatable.")
@click.option("--cursor", "use_cursor", is_flag=True, help="Page through all results, one JSON doc per line.")
@click.pass_context
def select_cmd(
    ctx: click.Context,
    query: str,
    rows: int | None,
    start: int | None,
    sort: str | None,
    filter_queries: tuple[str, ...],
    fields: tuple[str, ...],
    facet_fields: tuple[str, ...],
    use_cursor: bool,
) -> None:
    """Query documents and print the JSON reply."""
    cfg = ctx.obj
    command = SelectCommand(
        query=query,
        rows=cfg.solr.rows if rows is None else rows,
        start=start,
        sort=sort,
        filter_queries=filter_queries,
        fields=fields,
        facet_fields=facet_fields,
        use_cursor=use_cursor,
    )
    CommandRunner(cfg).run(ctx.command.name, command, pretty=not use_cursor)


@cli.command("upload")
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False, exists=True))
@click.option("--commit", is_flag=True, help="Commit immediately.")
@click.pass_context
def upload_cmd(ctx: click.Context, path: Path, commit: bool) -> None:
    """Index the JSON document or list of documents in PATH."""
    CommandRunner(ctx.obj).run(ctx.command.name, UploadCommand(path=path, commit=commit))


@cli.command("delete")
@click.argument("query")
@click.option("--commit", is_flag=True, help="Commit immediately.")
@click.pass_context
def delete_cmd(ctx: click.Context, query: str, commit: bool) -> None:
    """Delete documents matching QUERY."""
    CommandRunner(ctx.obj).run(ctx.command.name, DeleteCommand(query=query, commit=commit))


@cli.command("commit")
@click.pass_context
def commit_cmd(ctx: click.Context) -> None:
    """Commit pending index changes."""
    CommandRunner(ctx.obj).run(ctx.command.name, CommitCommand())


@cli.command("handler")
@click.argument("name")
@click.option("-p", "--param", "params", multiple=True, callback=_parse_param, help="key=value; repeatable.")
@click.option("--post", is_flag=True, help="Send an empty POST instead of GET.")
@click.pass_context
def handler_cmd(ctx: click.Context, name: str, params: list[tuple[str, str]], post: bool) -> None:
    """Call request handler NAME, e.g. `mlt` or `admin/ping`."""
    CommandRunner(ctx.obj).run(ctx.command.name, HandlerCommand(name=name, params=params, post=post))
