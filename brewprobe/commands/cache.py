import click
import os
from .. import config as config_module
from ..cli_logger import logger

@click.group()
def cache():
    """Inspect or clear values cached by previous probe runs."""
    pass

@cache.command()
@click.pass_context
def show(ctx):
    """Show the cached values."""
    cached = config_module.load_cache(path=ctx.obj["path"])
    if not cached:
        logger.info("Nothing cached yet. Run 'brewprobe probe' first.")
        return
    for key in config_module.CACHED_KEYS:
        if key in cached:
            click.echo(f"{key} = {cached[key]}")

@cache.command()
@click.argument("key", required=False, type=click.Choice(config_module.CACHED_KEYS))
@click.pass_context
def clear(ctx, key):
    """Clear one cached value, or all of them, so the next probe starts fresh."""
    path = ctx.obj["path"]
    if config_module.clear_cache(path=path, key=key):
        if key:
            logger.success(f"Cleared cached '{key}'")
        else:
            logger.success(f"Removed {os.path.join(path, config_module.CACHE_FILE)}")
    else:
        logger.info("Nothing to clear.")
