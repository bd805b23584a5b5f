import click
import importlib.metadata
from ..cli_logger import logger

@click.command()
def version():
    """Print the version of brewprobe."""
    try:
        ver = importlib.metadata.version("brewprobe")
    except importlib.metadata.PackageNotFoundError:
        logger.error("Error: Could not determine the version of brewprobe. Is it installed correctly?")
        return
    click.echo(f"brewprobe {ver}")
