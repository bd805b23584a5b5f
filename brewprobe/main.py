import click
from .cli_logger import logger
from .commands import probe, config, cache, log, version


@click.group()
@click.option("--path", "-p", default=".", help="Path to the project directory.")
@click.option("--verbose", "-v", is_flag=True, help="Show debug messages on the console.")
@click.pass_context
def cli(ctx, path, verbose):
    """brewprobe: prepare Homebrew paths for a CMake build on macOS."""
    ctx.obj = {"path": path}
    logger.verbose = verbose
    logger.messages_to_stderr = False

cli.add_command(probe)
cli.add_command(config)
cli.add_command(cache)
cli.add_command(log)
cli.add_command(version)

if __name__ == '__main__':
    try:
        cli()
    except Exception as e:
        click.echo(f"An unexpected error occurred: {e}", err=True)
        click.echo("Please report this issue to the brewprobe developers.", err=True)
