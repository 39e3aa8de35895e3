"""Interactive branch deletion."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable

from rich.console import Console
from rich.markup import escape

from lopper.git import GitRepo

console = Console()
logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]

HELP_TEXT = """
y: Yes, delete the branch
n: No, skip deleting
l: Show git logs of the branch
d: Show the latest commit of the branch and its diff
q: Quit immediately
h: Display this help"""


class Outcome(Enum):
    """What happened to a branch offered for deletion."""

    DELETED = "deleted"
    SKIPPED_CURRENT = "skipped-current-branch"
    SKIPPED_BY_USER = "skipped-by-user"
    ABORTED = "aborted"


@dataclass
class PruneReport:
    """Per-branch outcomes of a run, in processing order."""

    results: list[tuple[str, Outcome]] = field(default_factory=list)

    @property
    def aborted(self) -> bool:
        return any(outcome is Outcome.ABORTED for _, outcome in self.results)

    @property
    def deleted(self) -> list[str]:
        return [branch for branch, outcome in self.results if outcome is Outcome.DELETED]


def ask(message: str) -> str:
    """Read one line of input from the terminal."""
    return console.input(message)


def confirm_deletion(
    repo: GitRepo,
    branch: str,
    assume_yes: bool = False,
    prompt: Prompt = ask,
    log_limit: int = 100,
) -> Outcome:
    """Ask whether to delete a branch until the user settles on an answer.

    Raises:
        CommandFailure: If looking up, deleting or displaying the branch fails
    """
    question = f"\nAre you sure to delete [yellow]'{escape(branch)}'[/yellow] branch? {escape('[y|n|l|d|q|help]')}: "

    while True:
        if assume_yes:
            answer = "yes"
        else:
            try:
                answer = prompt(question).rstrip("\n")
            except EOFError:
                answer = "quit"

        if answer in ("y", "yes"):
            tip = repo.branch_tip(branch)
            repo.delete_branch(branch)
            logger.info("Deleted %s at %s", branch, tip)
            console.print(f"[green]Deleted '{escape(branch)}' branch[/green]")
            console.print(f"You can recreate this branch with `git branch {escape(branch)} {tip}`", highlight=False, soft_wrap=True)
            return Outcome.DELETED
        if answer in ("n", "no"):
            console.print("Skipped")
            return Outcome.SKIPPED_BY_USER
        if answer in ("l", "log"):
            repo.run_interactive("log", branch, f"-{log_limit}")
        elif answer in ("d", "diff"):
            repo.run_interactive("show", branch)
        elif answer in ("q", "quit"):
            console.print("[yellow]Suspends processing[/yellow]")
            return Outcome.ABORTED
        elif answer in ("h", "help"):
            console.print(HELP_TEXT, highlight=False)


def prune_branches(
    repo: GitRepo,
    base: str,
    branches: Iterable[str],
    assume_yes: bool = False,
    prompt: Prompt = ask,
    log_limit: int = 100,
) -> PruneReport:
    """Offer each branch for deletion, in order.

    The checked out branch is never deleted. Processing stops at the first
    branch the user quits on; branches deleted before that stay deleted.

    Raises:
        CommandFailure: If any git command fails, leaving remaining branches untouched
    """
    report = PruneReport()
    current = repo.current_branch()

    for branch in branches:
        if branch == base:
            continue

        if branch == current:
            console.print(f"[yellow]Skipped '{escape(branch)}' branch because it is current branch[/yellow]")
            report.results.append((branch, Outcome.SKIPPED_CURRENT))
            continue

        outcome = confirm_deletion(repo, branch, assume_yes, prompt, log_limit)
        report.results.append((branch, outcome))
        if outcome is Outcome.ABORTED:
            break

    return report
