import logging
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from .errors import CommandExecutionError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    command: tuple
    returncode: Optional[int]
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        return self.stdout + self.stderr

    @property
    def command_line(self) -> str:
        return subprocess.list2cmdline(self.command)


def run_command(command: Sequence[str], fail_on_nonzero_exit: bool = True) -> CommandResult:
    """
    Run an external command synchronously and capture its output.

    Args:
        command (Sequence[str]): The fully formed, platform specific argument list.
        fail_on_nonzero_exit (bool): Raise when the command does not exit with 0.

    Returns:
        CommandResult: The exit code and captured stdout/stderr.

    Raises:
        CommandExecutionError: If the command failed and `fail_on_nonzero_exit` is set.
    """
    command = tuple(str(part) for part in command)
    log.debug('Running %s', subprocess.list2cmdline(command))
    try:
        process = subprocess.Popen(command, stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                                   text=True, errors='replace')
    except OSError as e:
        # Could not even start, report it like any other failed command
        result = CommandResult(command, None, '', str(e))
    else:
        try:
            stdout, stderr = process.communicate()
            returncode = process.returncode
        except KeyboardInterrupt:
            process.kill()
            stdout, stderr = process.communicate()
            returncode = None
        result = CommandResult(command, returncode, stdout, stderr)

    if not result.succeeded:
        if fail_on_nonzero_exit:
            raise CommandExecutionError(result)
        log.debug('Ignoring failure of %s (exit code %s): %s', result.command_line, result.returncode, result.output.strip())
    return result
