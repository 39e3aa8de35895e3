"""Command line interface for lopper."""

from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from lopper import __version__
from lopper.branches import collect_deletable
from lopper.config import CherryMarkers, Config
from lopper.detector import MergeDetector
from lopper.git import GitRepo, LopperError
from lopper.logging_config import setup_logging
from lopper.prune import prune_branches

app = typer.Typer(help="Delete local branches that were merged or squash-merged into a base branch")
console = Console()
err_console = Console(stderr=True)


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    err_console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)
    raise typer.Exit(code=1)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"lopper {__version__}")
        raise typer.Exit()


def run(config: Config) -> None:
    """Find deletable branches and walk through deleting them."""
    repo = GitRepo(config.path, config.program)
    try:
        repo.check_available()
        repo.verify_branch(config.base_branch)

        with console.status("Searching merged branches..."):
            deletable = collect_deletable(repo, config.base_branch, MergeDetector(repo, config.markers))

        if not deletable:
            console.print(
                f"[yellow]There is no branch which has merged into {escape(config.base_branch)}[/yellow]",
                soft_wrap=True,
            )
            return

        console.print(
            f"Found [green]{len(deletable)}[/green] merged branches: {escape('[' + ' '.join(deletable) + ']')}",
            soft_wrap=True,
        )
        report = prune_branches(
            repo,
            config.base_branch,
            deletable,
            assume_yes=config.assume_yes,
            log_limit=config.log_limit,
        )
    except LopperError as err:
        fail(str(err))

    if report.aborted:
        raise typer.Exit(code=0)


@app.command()
def main(
    base_branch: Annotated[str, typer.Argument(help="Base branch name (e.g. main, develop)")],
    yes: bool = typer.Option(False, "--yes", "-y", help="Delete all merged branches without confirmations"),
    path: Annotated[Path, typer.Option(help="Path to git repository")] = Path("."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress details"),
    debug: bool = typer.Option(False, "--debug", help="Log every git command"),
    log_limit: Annotated[int, typer.Option(help="Number of commits shown by the log command")] = 100,
    upstream_marker: Annotated[
        str, typer.Option(help="Prefix git cherry uses for commits already upstream")
    ] = CherryMarkers.upstream,
    pending_marker: Annotated[
        str, typer.Option(help="Prefix git cherry uses for commits not yet upstream")
    ] = CherryMarkers.pending,
    program: Annotated[str, typer.Option("--git", help="Git executable to run")] = "git",
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """Delete branches which have been merged into BASE_BRANCH, including squash merges."""
    setup_logging(verbose=verbose, debug=debug)

    try:
        config = Config(
            base_branch=base_branch,
            assume_yes=yes,
            path=path,
            program=program,
            log_limit=log_limit,
            markers=CherryMarkers(upstream=upstream_marker, pending=pending_marker),
        )
    except ValueError as err:
        fail(str(err))

    run(config)


if __name__ == "__main__":
    app()
