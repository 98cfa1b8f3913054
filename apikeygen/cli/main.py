"""apikeygen CLI - Main entry point.

Generates a new API key and registers it on the ``api.security.keys`` line of the
backend's application.properties. Run without arguments from the directory the
backend tooling expects, or pass the properties file explicitly.
"""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from apikeygen.cli import output
from apikeygen.cli.config import get_config_paths, get_effective_config
from apikeygen.keys.errors import EntropyUnavailable, PropertiesFileError
from apikeygen.keys.generator import generate_api_key
from apikeygen.keys.properties import PropertiesFile
from apikeygen.version import __version__

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="apikeygen",
    help="Generate an API key and add it to the backend's application.properties.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        output.console.print(f"apikeygen version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )


@app.command()
def generate(
    properties_file: Annotated[
        Path | None,
        typer.Argument(
            help="Properties file to update (default: "
            "../Java/backend-api/src/main/resources/application.properties)",
            show_default=False,
        ),
    ] = None,
    unbiased: Annotated[
        bool,
        typer.Option(
            "--unbiased",
            help="Use rejection sampling for an exactly uniform key",
        ),
    ] = False,
    in_place: Annotated[
        bool,
        typer.Option(
            "--in-place",
            help="Truncate and rewrite the file instead of replacing it atomically",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file (default: user config directory)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Generate an API key and register it in application.properties.

    Examples:
        apikeygen
        apikeygen path/to/application.properties
        apikeygen --unbiased
    """
    configure_logging(verbose)
    logger.debug(f"Config paths: {get_config_paths()}")

    config = get_effective_config(
        config_path=config_path,
        properties_file=properties_file,
        unbiased=unbiased,
        in_place=in_place,
    )

    try:
        api_key = generate_api_key(
            config.keys.length,
            unbiased=config.keys.sampling == "rejection",
        )
    except EntropyUnavailable as e:
        output.print_error(str(e), hint=e.detail)
        raise typer.Exit(1) from None

    output.print_key(api_key)

    path = config.properties.path
    try:
        properties = PropertiesFile.load(
            path,
            property_name=config.keys.property,
            max_line_length=config.properties.max_line_length,
        )
        if properties.register_key(api_key):
            output.print_warning(f"{config.keys.property} line not found, adding new line")
        properties.save(atomic=config.properties.atomic_write)
    except PropertiesFileError as e:
        output.print_error(str(e), hint=e.detail)
        output.print_failure(f"Failed to add API Key to {path.name}")
        raise typer.Exit(1) from None

    output.print_success(f"API Key successfully added to {path.name}")


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
