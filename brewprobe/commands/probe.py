import click
import os
from .. import config as config_module
from .. import emit
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ..prober import ProbeConfig, run_probe

PINNED_KEYS = ("homebrew_prefix", "python_executable", "deployment_target")

def setting_as_list(settings, key):
    """A list-valued setting. A lone string or number becomes a one-item list."""
    value = settings.get(key)
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return [str(value)]
    logger.warning(f"Ignoring {key} in {config_module.CONFIG_FILE}: expected a list.")
    return []

def build_probe_config(settings, cached, overrides, extra_search_paths=()):
    """
    Merge the probe inputs. For each pinned value the command line (or its
    environment variable) wins over brewprobe.toml, which wins over the cache.
    Search paths from brewprobe.toml come first, then the extra ones.
    """
    values = {}
    for key in PINNED_KEYS:
        for source in (overrides, settings, cached):
            if source.get(key) is not None:
                values[key] = str(source[key])
                break

    search_paths = setting_as_list(settings, "search_paths")
    search_paths.extend(extra_search_paths)
    return ProbeConfig(search_paths=search_paths, **values)

@click.command()
@click.option("--gui/--no-gui", "build_gui", default=None,
              help="Select a Python interpreter that has pivy installed (GUI builds).")
@click.option("--prefix", "homebrew_prefix", envvar="HOMEBREW_PREFIX", default=None,
              help="Use this Homebrew prefix instead of detecting it.")
@click.option("--python", "python_executable", default=None,
              help="Use this Python interpreter instead of searching for one.")
@click.option("--deployment-target", default=None,
              help="Use this macOS deployment target instead of the host's major version.")
@click.option("--search-path", "search_paths", multiple=True, type=click.Path(),
              envvar="CMAKE_PREFIX_PATH",
              help="Existing search-path entry to extend. Defaults to $CMAKE_PREFIX_PATH.")
@click.option("--format", "output_format", type=click.Choice(emit.FORMATS), default="text",
              show_default=True, help="Output format.")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Write the result to this file instead of stdout.")
@click.option("--no-cache", is_flag=True, help="Neither read nor write brewprobe-cache.toml.")
@click.pass_context
@handle_exceptions
def probe(ctx, build_gui, homebrew_prefix, python_executable, deployment_target,
          search_paths, output_format, output, no_cache):
    """Detect Homebrew and resolve build configuration for CMake."""
    path = ctx.obj["path"]
    logger.messages_to_stderr = output_format != "text" and output is None

    settings = config_module.get_probe_settings(config_module.load_config(path=path))
    cached = {} if no_cache else config_module.load_cache(path=path)
    if cached:
        logger.debug(f"Using cached values: {', '.join(sorted(cached))}")

    overrides = {
        "homebrew_prefix": homebrew_prefix,
        "python_executable": python_executable,
        "deployment_target": deployment_target,
    }
    probe_config = build_probe_config(settings, cached, overrides, search_paths)
    if build_gui is None:
        build_gui = bool(settings.get("build_gui", False))

    result = run_probe(
        probe_config,
        build_gui=build_gui,
        python_versions=setting_as_list(settings, "python_versions") or None,
    )

    if not no_cache and result.homebrew_prefix:
        config_module.save_cache(result.to_dict(), path=path)

    rendered = emit.render(result, output_format)
    if output:
        output_dir = os.path.dirname(output)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(output, "w") as f:
            f.write(rendered if rendered.endswith("\n") else rendered + "\n")
        logger.success(f"Wrote {output_format} output to {output}")
    else:
        click.echo(rendered, nl=not rendered.endswith("\n"))
