import subprocess
from ..cli_logger import logger

def run_command(command, env=None, cwd=None):
    """
    Executes a command and captures its output.

    There is no timeout: a hanging command blocks the caller.

    Args:
        command (list): The command to execute as a list of strings.
        env (dict, optional): A dictionary of environment variables.
        cwd (str, optional): The working directory for the command.

    Returns:
        A tuple (stdout, stderr, return_code). A command that cannot be
        started yields ("", <reason>, -1).
    """
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            env=env,
            check=False,
            cwd=cwd
        )
        return result.stdout, result.stderr, result.returncode

    except FileNotFoundError as e:
        logger.debug(f"Command not found: {e.filename}")
        return "", str(e), -1
    except OSError as e:
        logger.debug(f"Could not run {command[0]}: {e}")
        return "", str(e), -1
