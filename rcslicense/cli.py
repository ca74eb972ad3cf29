"""
Command-line interface for the RCS license generator.
"""

from __future__ import annotations

import logging
import pprint
from datetime import datetime
from pathlib import Path

import click

from rcslicense.common.exceptions import LicenseError
from rcslicense.core.service import LicenseService


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-g", "--generate", is_flag=True, help="Generate a new license template")
@click.option(
    "-i",
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Input license file (will be fixed if corrupted)",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output license file",
)
@click.option("-V", "--version", "version", default=None, help="Version of the license")
@click.option("-v", "--verbose", is_flag=True, help="Verbose mode")
@click.option(
    "-x",
    "--hidden",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Hidden expiration (YYYY-MM-DD)",
)
def cli(
    generate: bool,  # noqa: FBT001
    input_path: Path | None,
    output_path: Path | None,
    version: str | None,
    verbose: bool,  # noqa: FBT001
    hidden: datetime | None,
) -> None:
    """Generate, check and upgrade license files."""
    if not (generate or input_path):
        msg = "Don't know what to do..."
        raise click.UsageError(msg)

    service = LicenseService(log_level=logging.DEBUG if verbose else logging.INFO)

    try:
        if input_path:
            document = service.load(input_path.read_bytes()).document
        else:
            document = service.generate_default()

        service.apply_overrides(
            document,
            version=version,
            hidden_expiry=hidden.date() if hidden else None,
        )

        if output_path:
            data = service.finalize(document)
            output_path.write_bytes(data)
            click.echo(f"License file created. {len(data)} bytes")
        else:
            service.validate(document)
    except LicenseError as err:
        raise click.ClickException(str(err)) from err

    if verbose:
        click.echo(pprint.pformat(document.to_dict(), sort_dicts=False))


if __name__ == "__main__":
    cli()
