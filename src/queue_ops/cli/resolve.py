"""Resolve a queue operation name.

CLI that prints the canonical name for a canonical or legacy operation name,
or lists the whole operation catalog.
"""

import os

import click
import dotenv

from config import get_settings
from queue_ops import fields
from queue_ops.operations import QueueOperation, resolve


ENV_FILE = ".env"


def load_environment() -> None:
    """Load the .env file in the working directory, if there is one."""
    if os.path.exists(ENV_FILE):
        dotenv.load_dotenv(ENV_FILE)


def list_operations() -> None:
    """Print every operation with its legacy name, if it has one."""
    for op in QueueOperation:
        if op.has_legacy_name:
            click.echo(f"{op.value} (legacy: {op.legacy_name})")
        else:
            click.echo(op.value)


@click.command()
@click.option("--name", type=str, required=False, help="The operation name to resolve")
@click.option("--list", "list_all", is_flag=True, default=False, help="List all operations")
def main(name: str | None, list_all: bool) -> None:
    """Print the canonical operation name for NAME; legacy names are reported."""
    load_environment()
    settings = get_settings()

    if list_all:
        click.echo(f"{settings.app_name} operations")
        list_operations()
        return
    if not name:
        raise click.ClickException("Either --name or --list is required")

    resolution = resolve(name)
    if resolution is None:
        raise click.ClickException(f"{fields.BAD_INPUT}: unknown operation {name}")

    if resolution.deprecation is not None and settings.warn_legacy_operations:
        click.secho(resolution.deprecation.message, err=True, fg="yellow")
    click.echo(resolution.operation.value)


if __name__ == "__main__":
    main()
