"""
Command execution abstraction for remote collection.

Remote collectors never call subprocess directly. They use the provided
executor so that tests can inject canned output instead of reaching a host.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

DEFAULT_TIMEOUT_S = 30


@dataclass(frozen=True)
class RunResult:
    """Result of running a command on a host."""

    stdout: str
    stderr: str
    returncode: int


class Executor(Protocol):
    """Runs an argv on a specific host."""

    def __call__(self, cmd: List[str]) -> RunResult:
        ...


@dataclass(frozen=True)
class SshOptions:
    """Operator supplied transport settings."""

    user: Optional[str] = None
    identity_file: Optional[str] = None
    port: Optional[int] = None
    timeout_s: int = DEFAULT_TIMEOUT_S


def subprocess_executor(cmd: List[str], *, timeout_s: int = DEFAULT_TIMEOUT_S) -> RunResult:
    """Run a local argv via subprocess."""
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout_s,
        )
        return RunResult(
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
        )
    except subprocess.TimeoutExpired as e:
        return RunResult(
            stdout="",
            stderr=f"Command timed out after {e.timeout}s",
            returncode=-1,
        )
    except FileNotFoundError:
        return RunResult(stdout="", stderr="Command not found", returncode=127)
    except OSError as e:
        return RunResult(stdout="", stderr=f"Command failed to start: {e}", returncode=126)


def ssh_command(host: str, cmd: List[str], options: SshOptions) -> List[str]:
    """Wrap an argv in a non-interactive ssh invocation."""
    argv = ["ssh", "-o", "BatchMode=yes", "-o", f"ConnectTimeout={options.timeout_s}"]
    if options.user:
        argv += ["-l", options.user]
    if options.identity_file:
        argv += ["-i", options.identity_file]
    if options.port:
        argv += ["-p", str(options.port)]
    return argv + [host, "--", *cmd]


def make_ssh_executor(host: str, options: SshOptions | None = None) -> Executor:
    """Create the default executor that runs commands on host over ssh."""
    opts = options or SshOptions()

    def run(cmd: List[str]) -> RunResult:
        return subprocess_executor(ssh_command(host, cmd, opts), timeout_s=opts.timeout_s)

    return run


ExecutorFactory = Callable[[str], Executor]
