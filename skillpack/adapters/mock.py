"""
Mock adapter — scripted stand-in for the skills CLI.

Used by tests to drive the executor and the install use case without
spawning processes.  Responses are queued per source id and consumed
one per invocation; when a queue runs dry the default result (exit 0)
is returned.
"""

from __future__ import annotations

from collections import deque

from skillpack.adapters.base import CommandResult, InstallerAdapter


class MockInstaller(InstallerAdapter):
    """Installer that records calls and replays canned results."""

    def __init__(self, adapter_name: str = "mock"):
        self._name = adapter_name
        self._responses: dict[str, deque[CommandResult]] = {}
        self._call_log: list[list[str]] = []
        self._commit_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def program(self) -> list[str]:
        return ["npx", "skills"]

    @property
    def call_log(self) -> list[list[str]]:
        """Argument lists of every invocation, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def calls_for(self, source_id: str) -> list[list[str]]:
        """Invocations whose source argument is ``source_id``."""
        return [args for args in self._call_log if _source_of(args) == source_id]

    def queue(self, source_id: str, *results: CommandResult) -> None:
        """Append results to be returned for ``source_id``, in order."""
        self._responses.setdefault(source_id, deque()).extend(results)

    def queue_exit(self, source_id: str, exit_code: int, stdout: str = "", stderr: str = "") -> None:
        self.queue(source_id, CommandResult(exit_code=exit_code, stdout=stdout, stderr=stderr))

    def queue_error(self, source_id: str, error: str) -> None:
        """Simulate a spawn failure or timeout."""
        self.queue(source_id, CommandResult(error=error))

    def run(self, args: list[str], timeout: float) -> CommandResult:
        self._call_log.append(list(args))
        pending = self._responses.get(_source_of(args))
        if pending:
            result = pending.popleft()
        else:
            result = CommandResult(exit_code=0, stdout="[mock] installed")
        return result.model_copy(update={"command": [*self.program, *args]})

    def resolve_commit(self, source_id: str) -> str:
        self._commit_count += 1
        return f"mock-{self._commit_count}"


def _source_of(args: list[str]) -> str | None:
    # args look like ["add", "<owner/repo>", ...]
    return args[1] if len(args) > 1 else None
