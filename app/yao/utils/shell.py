"""Shell execution utilities.

Provides subprocess execution for the external tools yao drives
(pacman, makepkg, bsdtar, sudo). Commands are described by an immutable
:class:`ProcessSpec` so that privilege elevation is a transform over
argument lists rather than string concatenation.
"""

import logging
import os
import shlex
import shutil
import subprocess
import sys
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

_RELAY_CHUNK_SIZE = 4096


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a captured command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


@dataclass(frozen=True, slots=True)
class ProcessSpec:
    """Description of an external process invocation.

    Attributes:
        program: Executable name or path.
        args: Arguments passed to the program, one token each.
        env: Extra environment variables merged over the current environment.
        cwd: Working directory for the process.
    """

    program: str
    args: tuple[str, ...] = ()
    env: Mapping[str, str] = field(default_factory=dict)
    cwd: Path | None = None

    @property
    def argv(self) -> list[str]:
        """Full argument vector including the program."""
        return [self.program, *self.args]

    def display(self) -> str:
        """Render the command line for humans (never executed by a shell)."""
        prefix = " ".join(f"{key}={shlex.quote(value)}" for key, value in self.env.items())
        command = shlex.join(self.argv)
        return f"{prefix} {command}" if prefix else command

    def full_env(self) -> dict[str, str] | None:
        """Environment for the child, or None to inherit unchanged."""
        if not self.env:
            return None
        return {**os.environ, **self.env}


def elevate(spec: ProcessSpec, elevator: str) -> ProcessSpec:
    """Wrap a process so that it runs through an elevation command.

    The wrapped program and its arguments are appended unchanged to the
    elevation command, e.g. ``pacman -S foo`` becomes ``sudo pacman -S foo``.

    Args:
        spec: The process to wrap.
        elevator: Elevation binary (usually ``sudo``).

    Returns:
        New ProcessSpec running ``elevator`` with the original argv.
    """
    return ProcessSpec(
        program=elevator,
        args=(spec.program, *spec.args),
        env=spec.env,
        cwd=spec.cwd,
    )


def is_elevated() -> bool:
    """Check whether the current process runs with root privileges."""
    return os.geteuid() == 0


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandResult:
    """Execute a command and capture its output.

    Args:
        args: Command and arguments to execute.
        check: If True, raise CalledProcessError on non-zero exit.
        timeout: Maximum time in seconds to wait for command.
        cwd: Working directory for the command. If None, uses current directory.
        env: Additional environment variables (merged with current env).

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.CalledProcessError: If check=True and command fails.
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=check,
        timeout=timeout,
        cwd=cwd,
        env={**os.environ, **env} if env else None,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def run_quiet(args: list[str]) -> int:
    """Execute a command with all output discarded.

    Used for yes/no probes such as ``pacman -Si``.

    Args:
        args: Command and arguments to execute.

    Returns:
        Exit code of the command.

    Raises:
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        check=False,
    )
    return result.returncode


def which(name: str) -> str | None:
    """Resolve a command to its absolute path, or None."""
    return shutil.which(name)


def _relay(source: BinaryIO, sink: BinaryIO) -> None:
    """Copy a child stream to one of our streams until EOF."""
    while True:
        chunk = source.read1(_RELAY_CHUNK_SIZE)  # type: ignore[attr-defined]
        if not chunk:
            break
        sink.write(chunk)
        sink.flush()
    source.close()


def run_streaming(
    spec: ProcessSpec,
    *,
    stdout: BinaryIO | None = None,
    stderr: BinaryIO | None = None,
) -> int:
    """Execute a command, relaying its output while blocking until exit.

    Standard input is inherited so that interactive prompts of the child
    (pacman's ``[Y/n]``) reach the user. Two relay threads copy the child's
    stdout and stderr; both are joined before the exit code is returned, so
    no output is lost or reordered relative to process exit. There is no
    timeout.

    Args:
        spec: Process to run.
        stdout: Binary sink for the child's stdout (default: our stdout).
        stderr: Binary sink for the child's stderr (default: our stderr).

    Returns:
        Exit code of the command.

    Raises:
        FileNotFoundError: If command executable is not found.
        OSError: If the command cannot be executed.
    """
    out_sink = stdout if stdout is not None else sys.stdout.buffer
    err_sink = stderr if stderr is not None else sys.stderr.buffer

    logger.debug("Running %s", spec.display())
    process = subprocess.Popen(
        spec.argv,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=spec.cwd,
        env=spec.full_env(),
    )
    assert process.stdout is not None and process.stderr is not None

    relays = [
        threading.Thread(target=_relay, args=(process.stdout, out_sink), daemon=True),
        threading.Thread(target=_relay, args=(process.stderr, err_sink), daemon=True),
    ]
    for relay in relays:
        relay.start()

    returncode = process.wait()
    for relay in relays:
        relay.join()

    logger.debug("%s exited with %d", spec.program, returncode)
    return returncode


def run_interactive(
    args: list[str],
    *,
    cwd: str | None = None,
    env: dict[str, str] | None = None,
) -> int:
    """Execute a command interactively, inheriting the terminal.

    Unlike run_command(), this does NOT capture stdout/stderr,
    allowing the subprocess to interact with the user's terminal
    directly. Used for launching the recipe editor.

    Args:
        args: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Additional environment variables (merged with current env).

    Returns:
        Exit code of the command.

    Raises:
        FileNotFoundError: If command executable is not found.
        OSError: If command cannot be executed.
    """
    full_env = {**os.environ, **(env or {})}
    result = subprocess.run(
        args,
        check=False,
        cwd=cwd,
        env=full_env,
    )
    return result.returncode
