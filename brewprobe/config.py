import toml
import os
from .cli_logger import logger

CONFIG_FILE = "brewprobe.toml"
CACHE_FILE = "brewprobe-cache.toml"

# Values the prober resolves once and reuses on later runs
CACHED_KEYS = ("homebrew_prefix", "python_executable", "deployment_target")

def _load_toml(file_path):
    if os.path.exists(file_path):
        try:
            with open(file_path, "r") as f:
                return toml.load(f)
        except toml.TomlDecodeError as e:
            logger.error(f"Error decoding TOML file at {file_path}: {e}")
            logger.info("Please check the file's format for syntax errors.")
        except IOError as e:
            logger.error(f"Error reading {file_path}: {e}")
            logger.info("Please check file permissions.")
    return {}

def _save_toml(data, file_path):
    try:
        with open(file_path, "w") as f:
            toml.dump(data, f)
        return True
    except IOError as e:
        logger.error(f"Error saving {file_path}: {e}")
        logger.info("Please check file permissions and ensure the directory is writable.")
        return False

def load_config(path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    logger.debug(f"Loading configuration from {config_path}")
    return _load_toml(config_path)

def save_config(config, path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    logger.debug(f"Saving configuration to {config_path}")
    return _save_toml(config, config_path)

def get_probe_settings(config):
    """Return the [probe] table of a loaded brewprobe.toml."""
    settings = config.get("probe", {})
    if not isinstance(settings, dict):
        logger.warning(f"Ignoring [probe] in {CONFIG_FILE}: expected a table.")
        return {}
    return settings

def load_cache(path="."):
    """Load previously resolved values, ignoring unknown and empty keys."""
    cache_path = os.path.join(path, CACHE_FILE)
    data = _load_toml(cache_path)
    return {key: data[key] for key in CACHED_KEYS if data.get(key)}

def save_cache(values, path="."):
    cache_path = os.path.join(path, CACHE_FILE)
    data = {key: values[key] for key in CACHED_KEYS if values.get(key)}
    logger.debug(f"Saving cache to {cache_path}")
    return _save_toml(data, cache_path)

def clear_cache(path=".", key=None):
    """
    Remove a single cached value, or the whole cache file when no key is given.
    Returns True if something was removed.
    """
    cache_path = os.path.join(path, CACHE_FILE)
    if not os.path.exists(cache_path):
        return False
    if key is None:
        os.remove(cache_path)
        return True
    data = _load_toml(cache_path)
    if key not in data:
        return False
    del data[key]
    return _save_toml(data, cache_path)
