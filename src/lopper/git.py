"""Git command execution."""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from git import Git
from git.exc import GitCommandNotFound

logger = logging.getLogger(__name__)


class LopperError(Exception):
    """Base error for lopper."""


class ToolUnavailable(LopperError):
    """The git executable cannot be invoked."""

    def __init__(self, program: str) -> None:
        super().__init__(f"Command not found: {program}")
        self.program = program


class InvalidBaseBranch(LopperError):
    """The base branch does not resolve to a commit."""

    def __init__(self, branch: str) -> None:
        super().__init__(f"Base branch not found: {branch}")
        self.branch = branch


class CommandFailure(LopperError):
    """A git invocation exited non-zero or could not be launched."""

    def __init__(
        self,
        program: str,
        args: Sequence[str],
        status: Optional[int] = None,
        stderr: str = "",
        cause: Optional[BaseException] = None,
    ) -> None:
        """Initialize error.

        Args:
            program: Executable that was invoked
            args: Arguments passed to it
            status: Exit status, None when the program never started
            stderr: Captured error stream
            cause: Underlying OS error for launch failures
        """
        self.program = program
        self.args_list = list(args)
        self.status = status
        self.stderr = stderr
        self.cause = cause
        super().__init__(self._format())

    @property
    def command_line(self) -> str:
        return " ".join([self.program, *self.args_list])

    def _format(self) -> str:
        if self.status is None:
            return f'"{self.command_line}" failed:\n{self.cause}'
        message = f'"{self.command_line}" received exit code {self.status}'
        if self.stderr:
            message += f"\n\n{self.stderr}"
        return message


class GitRepo:
    """Runs git commands against a working directory."""

    def __init__(self, path: Path, program: str = "git") -> None:
        """Initialize runner.

        Args:
            path: Working directory every command runs in
            program: Name or path of the git executable
        """
        self.path = Path(path)
        self.program = program
        self._git = Git(str(self.path))

    def run(self, *args: str) -> str:
        """Run a git command and return its stdout without trailing newlines.

        Raises:
            CommandFailure: If the command exits non-zero or cannot be started
        """
        command = [self.program, *args]
        logger.debug("Running %s", " ".join(command))
        try:
            status, stdout, stderr = self._git.execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except GitCommandNotFound as err:
            raise CommandFailure(self.program, args, cause=err) from err

        if status != 0:
            raise CommandFailure(self.program, args, status=status, stderr=stderr.strip())
        return stdout.rstrip("\n")

    def run_interactive(self, *args: str) -> int:
        """Run a git command attached to the terminal, e.g. for paged output.

        A non-zero exit is only warned about, since quitting the pager early
        is a normal way to leave `git log`.

        Raises:
            CommandFailure: If the command cannot be started
        """
        command = [self.program, *args]
        logger.debug("Spawning %s", " ".join(command))
        try:
            status = subprocess.call(command, cwd=self.path)
        except OSError as err:
            raise CommandFailure(self.program, args, cause=err) from err

        if status != 0:
            logger.warning('"%s" received exit code %s', " ".join(command), status)
        return status

    def check_available(self) -> None:
        """Make sure git can be invoked at all."""
        try:
            version = self.run("version")
        except CommandFailure as err:
            raise ToolUnavailable(self.program) from err
        logger.debug("Using %s", version)

    def verify_branch(self, branch: str) -> None:
        """Make sure the given branch resolves."""
        try:
            self.run("rev-parse", "--verify", branch)
        except CommandFailure as err:
            raise InvalidBaseBranch(branch) from err

    def list_lines(self, *args: str) -> list[str]:
        """Run a git command and split its output into non-empty lines."""
        return [line for line in self.run(*args).splitlines() if line]

    def current_branch(self) -> str:
        """Get the checked out branch name ("HEAD" when detached)."""
        return self.run("rev-parse", "--abbrev-ref", "HEAD")

    def branch_tip(self, branch: str) -> str:
        """Get the commit hash a branch points at."""
        return self.run("rev-parse", branch)

    def delete_branch(self, branch: str) -> None:
        """Force delete a local branch."""
        # -D because squash-merged branches are never ancestors of the base
        self.run("branch", "-D", branch)
