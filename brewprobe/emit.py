import json
import shlex

FORMATS = ("text", "json", "cmake", "env")

CMAKE_HEADER = """\
# Generated by brewprobe. Include this file before any find_package() call,
# or pass it to CMake with -DCMAKE_PROJECT_TOP_LEVEL_INCLUDES=<this file>.
"""


def _cmake_quote(value):
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
    return f'"{escaped}"'


def cmake_args(probe_config):
    """-D arguments for a cmake command line."""
    args = []
    if probe_config.search_paths:
        args.append(f"-DCMAKE_PREFIX_PATH={';'.join(probe_config.search_paths)}")
    if probe_config.homebrew_prefix:
        args.append(f"-DHOMEBREW_PREFIX={probe_config.homebrew_prefix}")
    if probe_config.python_executable:
        args.append(f"-DPython3_EXECUTABLE={probe_config.python_executable}")
    if probe_config.deployment_target:
        args.append(f"-DCMAKE_OSX_DEPLOYMENT_TARGET={probe_config.deployment_target}")
    return args


def to_cmake(probe_config):
    lines = [CMAKE_HEADER]
    for entry in probe_config.search_paths:
        quoted = _cmake_quote(entry)
        lines.append(f"if(NOT {quoted} IN_LIST CMAKE_PREFIX_PATH)")
        lines.append(f"  list(APPEND CMAKE_PREFIX_PATH {quoted})")
        lines.append("endif()")
    if probe_config.homebrew_prefix:
        lines.append(
            f"set(HOMEBREW_PREFIX {_cmake_quote(probe_config.homebrew_prefix)} "
            'CACHE PATH "Homebrew installation prefix")'
        )
    if probe_config.python_executable:
        lines.append(
            f"set(Python3_EXECUTABLE {_cmake_quote(probe_config.python_executable)} "
            'CACHE FILEPATH "Python interpreter with pivy")'
        )
    if probe_config.deployment_target:
        lines.append(
            f"set(CMAKE_OSX_DEPLOYMENT_TARGET {_cmake_quote(probe_config.deployment_target)} "
            'CACHE STRING "Minimum macOS deployment version")'
        )
    for package in probe_config.preloaded_packages:
        lines.append(f"find_package({package} CONFIG QUIET)")
    return "\n".join(lines) + "\n"


def to_env(probe_config):
    """
    export lines for a POSIX shell.

    CMake reads CMAKE_PREFIX_PATH and MACOSX_DEPLOYMENT_TARGET from the
    environment. HOMEBREW_PREFIX and Python3_EXECUTABLE are only for the
    calling script, e.g. cmake -DPython3_EXECUTABLE="$Python3_EXECUTABLE".
    """
    values = [
        ("CMAKE_PREFIX_PATH", ":".join(probe_config.search_paths)),
        ("HOMEBREW_PREFIX", probe_config.homebrew_prefix),
        ("Python3_EXECUTABLE", probe_config.python_executable),
        ("MACOSX_DEPLOYMENT_TARGET", probe_config.deployment_target),
    ]
    return "".join(
        f"export {name}={shlex.quote(value)}\n" for name, value in values if value
    )


def to_json(probe_config):
    return json.dumps(probe_config.to_dict(), indent=4)


def to_text(probe_config):
    lines = []
    if probe_config.homebrew_prefix:
        lines.append(f"Homebrew prefix:   {probe_config.homebrew_prefix}")
    else:
        lines.append("Homebrew prefix:   not found")
    lines.append("Search paths:")
    for entry in probe_config.search_paths:
        lines.append(f"  - {entry}")
    if not probe_config.search_paths:
        lines.append("  (none)")
    lines.append(f"Python:            {probe_config.python_executable or 'not set'}")
    lines.append(f"Deployment target: {probe_config.deployment_target or 'not set'}")
    if probe_config.preloaded_packages:
        lines.append(f"Preloaded:         {', '.join(probe_config.preloaded_packages)}")
    args = cmake_args(probe_config)
    if args:
        lines.append("CMake arguments:")
        lines.append("  " + " ".join(shlex.quote(arg) for arg in args))
    return "\n".join(lines)


RENDERERS = {
    "text": to_text,
    "json": to_json,
    "cmake": to_cmake,
    "env": to_env,
}


def render(probe_config, output_format="text"):
    try:
        renderer = RENDERERS[output_format]
    except KeyError:
        raise ValueError(f"Unknown output format '{output_format}'. Choose from: {', '.join(FORMATS)}") from None
    return renderer(probe_config)
