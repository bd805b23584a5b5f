"""
Homebrew environment probing for macOS builds.

Resolves the Homebrew prefix, extends the CMake search-path list with the
prefix and any keg-only packages that are installed, picks a Homebrew Python
that already has pivy for GUI builds, and infers a deployment target from the
host macOS version. Nothing here raises: every failed query falls back to the
next option or leaves the value unset.
"""
import copy
import functools
import os
import platform
import re

from packaging.version import InvalidVersion, Version

from .cli_logger import logger
from .utils import run_command

HOST_SYSTEM = "Darwin"

ARM_PREFIX = "/opt/homebrew"
DEFAULT_PREFIX = "/usr/local"
ARM_ARCHITECTURES = ("arm64", "aarch64")

# Keg-only formulae are not linked into the prefix, so CMake needs their opt/ paths
KEG_ONLY_PACKAGES = (
    "icu4c",
    "icu4c@76",
    "icu4c@77",
    "icu4c@78",
    "med-file@4.1.1",
    "qt@5",
    "python@3.11",
    "python@3.12",
    "python@3.13",
)

# Newest first
PYTHON_VERSIONS = ("3.13", "3.12", "3.11", "3.10")
PYTHON_ADDON = "pivy"

LIBAEC_PACKAGE = "libaec"
LIBAEC_CONFIG_FILES = ("libaec-config.cmake", "libaecConfig.cmake")

MAJOR_VERSION_RE = re.compile(r"^[0-9]+")


class ProbeConfig:
    """
    Configuration threaded through a probe run.

    homebrew_prefix is None when nobody has supplied or resolved it yet, and
    "" once probing has established that Homebrew is not installed.
    """

    def __init__(self, homebrew_prefix=None, search_paths=None, python_executable=None,
                 deployment_target=None, preloaded_packages=None, keg_only_packages=None):
        self.homebrew_prefix = homebrew_prefix
        self.search_paths = []
        for entry in search_paths or []:
            # Empty pieces come from stray separators in CMAKE_PREFIX_PATH
            if entry:
                append_unique(self.search_paths, entry)
        self.python_executable = python_executable
        self.deployment_target = deployment_target
        self.preloaded_packages = list(preloaded_packages or [])
        self.keg_only_packages = list(keg_only_packages or [])

    def copy(self):
        return copy.deepcopy(self)

    def to_dict(self):
        return {
            "homebrew_prefix": self.homebrew_prefix,
            "search_paths": list(self.search_paths),
            "python_executable": self.python_executable,
            "deployment_target": self.deployment_target,
            "preloaded_packages": list(self.preloaded_packages),
            "keg_only_packages": list(self.keg_only_packages),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            homebrew_prefix=data.get("homebrew_prefix"),
            search_paths=data.get("search_paths"),
            python_executable=data.get("python_executable"),
            deployment_target=data.get("deployment_target"),
            preloaded_packages=data.get("preloaded_packages"),
            keg_only_packages=data.get("keg_only_packages"),
        )

    def __eq__(self, other):
        if not isinstance(other, ProbeConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"ProbeConfig({self.to_dict()!r})"


def append_unique(paths, entry):
    """Append entry to paths unless it is already there. Returns True if appended."""
    if entry in paths:
        return False
    paths.append(entry)
    return True


# -------------------- Prefix resolution --------------------

def default_prefix_for_arch(arch):
    """Homebrew's default install location for a CPU architecture."""
    if arch in ARM_ARCHITECTURES:
        return ARM_PREFIX
    return DEFAULT_PREFIX


def prefix_from_brew():
    """Ask brew itself. Its answer is trusted as-is."""
    stdout, stderr, returncode = run_command(["brew", "--prefix"])
    if returncode != 0:
        logger.debug(f"'brew --prefix' failed ({returncode}): {stderr.strip()}")
        return None
    return stdout.strip()


def prefix_from_arch_default(arch=None):
    """Fall back to the architecture's default location, if brew lives there."""
    prefix = default_prefix_for_arch(arch or platform.machine())
    if os.path.exists(os.path.join(prefix, "bin", "brew")):
        return prefix
    logger.debug(f"No brew executable under {prefix}")
    return None


def resolve_homebrew_prefix(arch=None):
    """
    Try each prefix strategy in turn; the first one that answers wins.
    Returns "" when none does.
    """
    strategies = (
        prefix_from_brew,
        functools.partial(prefix_from_arch_default, arch),
    )
    for strategy in strategies:
        prefix = strategy()
        if prefix is not None:
            break
    else:
        prefix = ""

    if prefix:
        logger.info(f"Homebrew detected at: {prefix}")
    else:
        logger.info("Homebrew not found")
    return prefix


# -------------------- Keg-only packages --------------------

def discover_keg_only_packages(prefix, search_paths, packages=KEG_ONLY_PACKAGES):
    """
    Append <prefix>/opt/<name> to search_paths for every installed package.
    Returns the names that were added.
    """
    added = []
    for package in packages:
        package_path = os.path.join(prefix, "opt", package)
        if os.path.isdir(package_path) and append_unique(search_paths, package_path):
            logger.step_info(f"Added keg-only package: {package}")
            added.append(package)
    return added


# -------------------- Python with pivy --------------------

def normalize_python_versions(versions):
    """Sort candidate versions newest first, dropping duplicates and junk."""
    if isinstance(versions, (str, int, float)):
        versions = [versions]
    parsed = {}
    for version in versions:
        version = str(version).strip()
        try:
            key = Version(version)
        except InvalidVersion:
            logger.warning(f"Ignoring invalid Python version '{version}'")
            continue
        parsed.setdefault(key, version)
    return tuple(parsed[key] for key in sorted(parsed, reverse=True))


def select_python_with_addon(prefix, versions=PYTHON_VERSIONS, addon=PYTHON_ADDON):
    """
    Return the interpreter of the newest version whose site-packages already
    holds addon, or None.
    """
    for version in versions:
        site_packages = os.path.join(prefix, "lib", f"python{version}", "site-packages")
        if not os.path.exists(os.path.join(site_packages, addon)):
            continue
        python_exec = os.path.join(prefix, "bin", f"python{version}")
        if os.path.exists(python_exec):
            logger.step_info(f"Found {addon} for Python {version}, using: {python_exec}")
            return python_exec
    return None


# -------------------- libaec preload --------------------

def preload_libaec(prefix, preloaded_packages):
    """
    HDF5's CMake config references libaec::sz without finding libaec first,
    so libaec has to be loaded before VTK/HDF5. Records the package in
    preloaded_packages when its config is present.

    Returns True on success. Callers are free to ignore the result. Drop this
    once HDF5 ships a config that finds libaec itself.
    """
    config_dir = os.path.join(prefix, "lib", "cmake", LIBAEC_PACKAGE)
    if not os.path.exists(config_dir):
        return False
    for file_name in LIBAEC_CONFIG_FILES:
        if os.path.isfile(os.path.join(config_dir, file_name)):
            append_unique(preloaded_packages, LIBAEC_PACKAGE)
            logger.step_info("Found libaec (required by HDF5)")
            return True
    logger.debug(f"{config_dir} has no libaec package config")
    return False


# -------------------- Deployment target --------------------

def query_product_version():
    """The host macOS version, e.g. '15.7.1', or '' if sw_vers fails."""
    stdout, _, returncode = run_command(["sw_vers", "-productVersion"])
    if returncode != 0:
        return ""
    return stdout.strip()


def infer_deployment_target(product_version):
    """'15.7.1' -> '15.0'. None when there is no leading major version."""
    if not product_version:
        return None
    match = MAJOR_VERSION_RE.match(product_version)
    if not match:
        return None
    return f"{match.group(0)}.0"


# -------------------- Entry point --------------------

def run_probe(probe_config, build_gui=False, python_versions=None, system=None, arch=None):
    """
    Probe the host and return an updated copy of probe_config.

    Does nothing on hosts other than macOS. Values already present in
    probe_config (prefix, interpreter, deployment target) are never re-probed
    or overwritten.
    """
    result = probe_config.copy()
    host = system or platform.system()
    if host != HOST_SYSTEM:
        logger.debug(f"Host is {host}, not {HOST_SYSTEM}; skipping Homebrew setup")
        return result

    if result.homebrew_prefix is None:
        result.homebrew_prefix = resolve_homebrew_prefix(arch)
    else:
        logger.debug(f"Using configured Homebrew prefix: {result.homebrew_prefix!r}")

    prefix = result.homebrew_prefix
    if not prefix:
        return result

    append_unique(result.search_paths, prefix)
    result.keg_only_packages = discover_keg_only_packages(prefix, result.search_paths)

    if build_gui and not result.python_executable:
        versions = normalize_python_versions(python_versions) if python_versions else PYTHON_VERSIONS
        result.python_executable = select_python_with_addon(prefix, versions)

    preload_libaec(prefix, result.preloaded_packages)

    if not result.deployment_target:
        deployment_target = infer_deployment_target(query_product_version())
        if deployment_target:
            result.deployment_target = deployment_target
            logger.step_info(f"Set deployment target: macOS {deployment_target}")

    return result
