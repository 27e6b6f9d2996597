"""
Command runner — the single place where system-changing commands start.

Every external process that changes the system (package managers, git,
third-party installer scripts, tar, chsh...) goes through
``CommandRunner.run``.  Read-only probes (``HostProbe``) and processes
that own the terminal (``gum`` menus, ``sudo -v``) start their own.

``run`` never raises for a failed command: the outcome is a typed
``CommandResult`` that tells apart a non-zero exit, a timeout, a
missing binary and a network failure.  Callers that want
"fail loudly" use ``check()``, which raises ``CommandError``.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from typing import Literal, Sequence

from pydantic import BaseModel, Field

from dotinstall.core.errors import CommandError

logger = logging.getLogger(__name__)

CommandStatus = Literal["ok", "nonzero_exit", "timeout", "not_found", "network_error"]

# curl: 6 resolve host, 7 connect, 28 timeout, 35 TLS handshake, 56 recv failure
_CURL_NETWORK_CODES = frozenset({6, 7, 28, 35, 56})
# wget: 4 network failure
_WGET_NETWORK_CODES = frozenset({4})

_NETWORK_STDERR_MARKERS = (
    "could not resolve host",
    "temporary failure in name resolution",
    "network is unreachable",
    "connection timed out",
    "connection refused",
    "unable to access",
    "failed to connect",
)

_OUTPUT_TAIL = 2000


class CommandResult(BaseModel):
    """Outcome of one external command."""

    command: list[str] = Field(default_factory=list)
    status: CommandStatus = "ok"
    returncode: int | None = 0
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the command succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return not self.ok

    @property
    def is_network_error(self) -> bool:
        return self.status == "network_error"

    def describe(self) -> str:
        """One-line human description of a failure."""
        cmd = " ".join(self.command)
        if self.status == "ok":
            return f"{cmd} succeeded"
        if self.status == "timeout":
            return f"{cmd} timed out"
        if self.status == "not_found":
            return f"{cmd}: command not found"
        detail = self.stderr.strip().splitlines()[-1] if self.stderr.strip() else ""
        prefix = "network error running" if self.status == "network_error" else "command failed:"
        message = f"{prefix} {cmd} (exit {self.returncode})"
        return f"{message}: {detail}" if detail else message

    @classmethod
    def success(cls, command: Sequence[str], stdout: str = "", **kwargs) -> CommandResult:
        return cls(command=list(command), status="ok", returncode=0, stdout=stdout, **kwargs)

    @classmethod
    def failure(
        cls,
        command: Sequence[str],
        status: CommandStatus = "nonzero_exit",
        returncode: int | None = 1,
        stderr: str = "",
        **kwargs,
    ) -> CommandResult:
        return cls(
            command=list(command),
            status=status,
            returncode=returncode,
            stderr=stderr,
            **kwargs,
        )


def classify_failure(command: Sequence[str], returncode: int, stderr: str) -> CommandStatus:
    """Decide whether a non-zero exit was a network failure."""
    tool = os.path.basename(command[0]) if command else ""
    if tool == "curl" and returncode in _CURL_NETWORK_CODES:
        return "network_error"
    if tool == "wget" and returncode in _WGET_NETWORK_CODES:
        return "network_error"
    lowered = stderr.lower()
    if any(marker in lowered for marker in _NETWORK_STDERR_MARKERS):
        return "network_error"
    return "nonzero_exit"


class CommandRunner:
    """Run external commands and capture their output.

    Args:
        default_timeout: Seconds before a command is killed.
    """

    def __init__(self, default_timeout: int = 900):
        self.default_timeout = default_timeout

    def run(
        self,
        cmd: Sequence[str],
        *,
        sudo: bool = False,
        timeout: int | None = None,
        cwd: str | None = None,
        env_overrides: dict[str, str] | None = None,
        input: str | bytes | None = None,
        ok_codes: Sequence[int] = (0,),
    ) -> CommandResult:
        """Run ``cmd`` and return a ``CommandResult``.

        Args:
            cmd: Command list (no shell interpretation).
            sudo: Prefix with ``sudo`` unless already root.
            timeout: Seconds; defaults to ``default_timeout``.
            cwd: Working directory.
            env_overrides: Extra environment variables.
            input: Data piped to stdin (bytes for binary payloads).
            ok_codes: Exit codes that count as success.
        """
        command = list(cmd)
        if sudo and os.geteuid() != 0:
            command = ["sudo"] + command

        env = None
        if env_overrides:
            env = os.environ.copy()
            for key, value in env_overrides.items():
                env[key] = os.path.expandvars(value)

        timeout = timeout or self.default_timeout
        binary = isinstance(input, bytes)

        logger.debug("Executing: %s (cwd=%s)", " ".join(command), cwd)
        start = time.monotonic()
        try:
            proc = subprocess.run(
                command,
                capture_output=True,
                text=not binary,
                timeout=timeout,
                input=input,
                env=env,
                cwd=cwd,
            )
        except FileNotFoundError:
            return CommandResult.failure(
                command, status="not_found", returncode=None,
                error=f"{command[0]}: command not found",
            )
        except subprocess.TimeoutExpired:
            return CommandResult.failure(
                command, status="timeout", returncode=None,
                error=f"Command timed out ({timeout}s)",
            )
        except OSError as e:
            logger.exception("Subprocess error: %s", command)
            return CommandResult.failure(command, returncode=None, error=str(e))

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = _decode(proc.stdout)[-_OUTPUT_TAIL:]
        stderr = _decode(proc.stderr)[-_OUTPUT_TAIL:]

        if proc.returncode in ok_codes:
            return CommandResult(
                command=command,
                status="ok",
                returncode=proc.returncode,
                stdout=stdout,
                stderr=stderr,
                duration_ms=elapsed_ms,
            )

        status = classify_failure(cmd, proc.returncode, stderr)
        logger.debug("Command failed (%s, exit %s): %s", status, proc.returncode, stderr)
        return CommandResult(
            command=command,
            status=status,
            returncode=proc.returncode,
            stdout=stdout,
            stderr=stderr,
            duration_ms=elapsed_ms,
        )

    def check(self, cmd: Sequence[str], *, message: str = "", **kwargs) -> CommandResult:
        """Run ``cmd``; raise ``CommandError`` unless it succeeded."""
        result = self.run(cmd, **kwargs)
        if not result.ok:
            raise CommandError(result, message)
        return result


def _decode(data: str | bytes | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
