"""Build a queue operation message.

CLI that resolves an operation name and prints the request message the queue
engine would receive for the given arguments. Nothing is sent.
"""

import json
from typing import Any

import click
from pydantic import ValidationError

from config import get_settings
from queue_ops import fields
from queue_ops.builder import build
from queue_ops.cli.resolve import load_environment
from queue_ops.operations import resolve


def collect_fields(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Return the builder fields among the CLI options that were given.

    Multiple-value options arrive as tuples and count as given only when
    non-empty; --configuration is parsed as a JSON object.
    """
    collected: dict[str, Any] = {}
    for name in ("queue_name", "index", "limit", "buffer", "filter", "unlock", "requested_by", "message"):
        if kwargs.get(name) is not None:
            collected[name] = kwargs[name]

    if kwargs.get("queue"):
        collected["queues"] = list(kwargs["queue"])
    if kwargs.get("lock"):
        collected["locks"] = list(kwargs["lock"])

    configuration = kwargs.get("configuration")
    if configuration is not None:
        try:
            collected["configuration"] = json.loads(configuration)
        except json.JSONDecodeError as err:
            raise click.ClickException(f"Invalid JSON: {configuration}") from err
        if not isinstance(collected["configuration"], dict):
            raise click.ClickException("Configuration must be a JSON object")
    return collected


@click.command()
@click.option("--operation", type=str, required=True, help="The operation name, canonical or legacy")
@click.option("--queue-name", type=str, required=False, help="The name of the queue")
@click.option("--index", type=int, required=False, help="The index of a queue item")
@click.option("--limit", type=str, required=False, help="The maximum number of items to read")
@click.option("--buffer", type=str, required=False, help="The content of a queue item")
@click.option("--filter", type=str, required=False, help="A queue or lock name pattern")
@click.option("--unlock/--no-unlock", default=None, help="Also release the queue lock")
@click.option("--queue", type=str, multiple=True, help="A queue name, can be used multiple times")
@click.option("--lock", type=str, multiple=True, help="A lock name, can be used multiple times")
@click.option("--requested-by", type=str, required=False, help="The identity requesting a lock")
@click.option("--message", type=str, required=False, help="The message body to enqueue")
@click.option("--configuration", type=str, required=False, help="The configuration (JSON object)")
def main(**kwargs: Any) -> None:
    """Print the request message for OPERATION as JSON."""
    load_environment()
    settings = get_settings()

    name = kwargs["operation"]
    resolution = resolve(name)
    if resolution is None:
        raise click.ClickException(f"{fields.BAD_INPUT}: unknown operation {name}")
    if resolution.deprecation is not None and settings.warn_legacy_operations:
        click.secho(resolution.deprecation.message, err=True, fg="yellow")

    try:
        message = build(resolution.operation, **collect_fields(kwargs))
    except (TypeError, ValidationError) as e:
        raise click.ClickException(f"{fields.BAD_INPUT}: {e}") from e

    click.echo(json.dumps(message, indent=settings.json_indent))


if __name__ == "__main__":
    main()
