"""
Mock command runner — universal test double for external processes.

Records every command instead of running it.  By default everything
succeeds; individual commands can be configured to fail or to return
custom output, and side-effect hooks let a test mutate a fake host
(e.g. "after ``apt-get install zsh`` the ``zsh`` binary exists").
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from dotinstall.adapters.shell.command import CommandResult, CommandRunner, CommandStatus


@dataclass
class RecordedCall:
    """One command the mock received."""

    command: list[str]
    sudo: bool = False
    cwd: str | None = None
    input: str | bytes | None = None

    @property
    def line(self) -> str:
        return " ".join(self.command)


class MockCommandRunner(CommandRunner):
    """Runner that records commands and returns configured results.

    Matching is by substring of the space-joined command (without the
    ``sudo`` prefix).  The most recently configured match wins.
    """

    def __init__(self, default_stdout: str = ""):
        super().__init__()
        self._default_stdout = default_stdout
        self._responses: list[tuple[str, CommandResult]] = []
        self._hooks: list[tuple[str, Callable[[RecordedCall], None]]] = []
        self._call_log: list[RecordedCall] = []

    @property
    def call_log(self) -> list[RecordedCall]:
        """All commands this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def lines(self) -> list[str]:
        """Space-joined command lines, in call order."""
        return [c.line for c in self._call_log]

    def calls_matching(self, match: str) -> list[RecordedCall]:
        return [c for c in self._call_log if match in c.line]

    def set_response(self, match: str, result: CommandResult) -> None:
        """Return ``result`` for commands containing ``match``."""
        self._responses.append((match, result))

    def set_output(self, match: str, stdout: str) -> None:
        self.set_response(match, CommandResult.success([match], stdout=stdout))

    def set_failure(
        self,
        match: str,
        *,
        status: CommandStatus = "nonzero_exit",
        returncode: int | None = 1,
        stderr: str = "mock failure",
    ) -> None:
        """Make commands containing ``match`` fail."""
        self._responses.append((
            match,
            CommandResult.failure([match], status=status, returncode=returncode, stderr=stderr),
        ))

    def on(self, match: str, hook: Callable[[RecordedCall], None]) -> None:
        """Call ``hook`` whenever a command containing ``match`` succeeds."""
        self._hooks.append((match, hook))

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
        call = RecordedCall(command=list(cmd), sudo=sudo, cwd=cwd, input=input)
        self._call_log.append(call)

        result: CommandResult | None = None
        for match, configured in reversed(self._responses):
            if match in call.line:
                result = configured.model_copy(update={"command": list(cmd)})
                break
        if result is None:
            result = CommandResult.success(cmd, stdout=self._default_stdout)

        if result.returncode is not None and result.returncode in ok_codes and not result.ok:
            result = result.model_copy(update={"status": "ok"})

        if result.ok:
            for match, hook in self._hooks:
                if match in call.line:
                    hook(call)
        return result

    def reset(self) -> None:
        """Clear call log, responses and hooks."""
        self._call_log.clear()
        self._responses.clear()
        self._hooks.clear()
