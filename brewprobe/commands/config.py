import click
import os
import sys
import json
import toml
from .. import config as config_module
from ..cli_logger import logger

NO_CONFIG_MESSAGE = "Error: No brewprobe.toml found. Create one with 'brewprobe config set probe.<key> <value>'."

def parse_value(value):
    """
    Read booleans and arrays as TOML. Everything else stays a string, so
    versions such as 15.0 are not turned into floats.
    """
    try:
        parsed = toml.loads(f"value = {value}")["value"]
    except (ValueError, IndexError):
        return value
    if isinstance(parsed, (bool, list)):
        return parsed
    return value

@click.group()
@click.pass_context
def config(ctx):
    """View or edit the brewprobe.toml configuration file."""
    pass

@config.command()
@click.pass_context
def view(ctx):
    """View the contents of the brewprobe.toml file."""
    config_file_path = os.path.join(ctx.obj["path"], config_module.CONFIG_FILE)
    if not os.path.exists(config_file_path):
        logger.error(NO_CONFIG_MESSAGE)
        return
    try:
        with open(config_file_path, 'r') as f:
            click.echo(f.read())
    except IOError as e:
        logger.error(f"Error reading brewprobe.toml at {config_file_path}: {e}")
        logger.info("Please check file permissions.")

@config.command()
@click.pass_context
def edit(ctx):
    """Edit the brewprobe.toml file in your default editor."""
    config_file_path = os.path.join(ctx.obj["path"], config_module.CONFIG_FILE)
    if not os.path.exists(config_file_path):
        logger.error(NO_CONFIG_MESSAGE)
        return
    try:
        click.edit(filename=config_file_path)
    except click.ClickException as e:
        logger.error(f"Click error editing brewprobe.toml: {e}")
        logger.info("This might indicate an issue with your editor configuration or environment variables.")
    except Exception as e:
        logger.error(f"An unexpected error occurred while editing brewprobe.toml: {e}")
        logger.exception(*sys.exc_info())

@config.command(name="list")
@click.pass_context
def list_config(ctx):
    """List all configuration keys and values."""
    conf = config_module.load_config(path=ctx.obj["path"])
    if not conf:
        logger.error(NO_CONFIG_MESSAGE)
        return
    click.echo(json.dumps(conf, indent=4))

@config.command(name="get")
@click.argument('key')
@click.pass_context
def get_value(ctx, key):
    """Get a value from the brewprobe.toml file, e.g. probe.build_gui."""
    conf = config_module.load_config(path=ctx.obj["path"])
    if not conf:
        logger.error(NO_CONFIG_MESSAGE)
        return

    value = conf
    try:
        for k in key.split('.'):
            value = value[k]
    except (KeyError, TypeError):
        logger.error(f"Error: Key '{key}' not found in brewprobe.toml")
        return
    if isinstance(value, (dict, list)):
        click.echo(json.dumps(value, indent=4))
    else:
        click.echo(value)

@config.command(name="set")
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_value(ctx, key, value):
    """Set a value in the brewprobe.toml file, creating the file if needed.

    VALUE is read as TOML when possible, so 'true' and '["/opt/x"]' become a
    boolean and a list.
    """
    conf = config_module.load_config(path=ctx.obj["path"])

    keys = key.split('.')
    d = conf
    for k in keys[:-1]:
        d = d.setdefault(k, {})
        if not isinstance(d, dict):
            logger.error(f"Error: '{k}' in '{key}' is not a table")
            return
    d[keys[-1]] = parse_value(value)

    if config_module.save_config(conf, path=ctx.obj["path"]):
        logger.info(f"Set '{key}' to '{value}'")

@config.command()
@click.argument('key')
@click.pass_context
def unset(ctx, key):
    """Remove a key from the brewprobe.toml file."""
    conf = config_module.load_config(path=ctx.obj["path"])
    if not conf:
        logger.error(NO_CONFIG_MESSAGE)
        return

    keys = key.split('.')
    d = conf
    try:
        for k in keys[:-1]:
            d = d[k]
        del d[keys[-1]]
    except (KeyError, TypeError):
        logger.error(f"Error: Key '{key}' not found in brewprobe.toml")
        return
    if config_module.save_config(conf, path=ctx.obj["path"]):
        logger.info(f"Unset '{key}'")
