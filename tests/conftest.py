"""Test configuration and fixtures."""

from pathlib import Path
from typing import Generator

import pytest
from git import Actor, Repo

from lopper.git import GitRepo

AUTHOR = Actor("Test User", "test@example.com")


def init_repo(path: Path) -> Repo:
    """Create a repository with a single commit on main."""
    path.mkdir(parents=True, exist_ok=True)
    repo = Repo.init(path)
    repo.config_writer().set_value("user", "name", AUTHOR.name).release()
    repo.config_writer().set_value("user", "email", AUTHOR.email).release()

    readme = path / "README.md"
    readme.write_text("# Test Repository")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit", author=AUTHOR, committer=AUTHOR)

    # Whatever the default branch is called, work on main
    repo.git.branch("-M", "main")
    return repo


def commit_file(repo: Repo, name: str, content: str) -> None:
    """Write a file and commit it on the checked out branch."""
    test_file = Path(repo.working_dir) / name
    test_file.parent.mkdir(parents=True, exist_ok=True)
    test_file.write_text(content)
    repo.index.add([name])
    repo.index.commit(f"Add {name}", author=AUTHOR, committer=AUTHOR)


@pytest.fixture
def test_env(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a repository with merged, squash-merged and unmerged branches.

    Branches:
        main: base branch, checked out
        feat-a: fast-forward merged into main
        feat-b: two commits, squash-merged into main
        feat-c: not merged
    """
    local_path = tmp_path / "local"
    repo = init_repo(local_path)
    main_branch = repo.heads.main

    repo.create_head("feat-a").checkout()
    commit_file(repo, "a.txt", "Feature A")
    main_branch.checkout()
    repo.git.merge("--ff-only", "feat-a")

    repo.create_head("feat-b").checkout()
    commit_file(repo, "b1.txt", "Feature B, part one")
    commit_file(repo, "b2.txt", "Feature B, part two")
    main_branch.checkout()
    repo.git.merge("--squash", "feat-b")
    repo.git.commit("-m", "Feature B (squashed)")

    repo.create_head("feat-c").checkout()
    commit_file(repo, "c.txt", "Feature C")
    main_branch.checkout()

    yield local_path

    repo.close()


@pytest.fixture
def diverged_env(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a repository whose branches were merged in ways fast-forward cannot cover.

    Branches:
        main: base branch, checked out
        feat-d: merged into main with a merge commit (--no-ff)
        feat-e: squash-merged after main gained an unrelated commit
        feat-f: not merged
    """
    local_path = tmp_path / "diverged"
    repo = init_repo(local_path)
    main_branch = repo.heads.main

    repo.create_head("feat-d").checkout()
    commit_file(repo, "d.txt", "Feature D")
    main_branch.checkout()
    repo.git.merge("--no-ff", "feat-d", "-m", "Merge feat-d")

    repo.create_head("feat-e").checkout()
    commit_file(repo, "e1.txt", "Feature E, part one")
    commit_file(repo, "e2.txt", "Feature E, part two")
    main_branch.checkout()
    commit_file(repo, "hotfix.txt", "Unrelated fix on main")
    repo.git.merge("--squash", "feat-e")
    repo.git.commit("-m", "Feature E (squashed)")

    repo.create_head("feat-f").checkout()
    commit_file(repo, "f.txt", "Feature F")
    main_branch.checkout()

    yield local_path

    repo.close()


@pytest.fixture
def empty_repo(tmp_path: Path) -> Path:
    """Create a repository with main as its only branch."""
    path = tmp_path / "empty"
    init_repo(path).close()
    return path


@pytest.fixture
def git_repo(test_env: Path) -> GitRepo:
    """Runner bound to the test repository."""
    return GitRepo(test_env)


@pytest.fixture
def branch_names(test_env: Path):
    """Return a callable listing the repository's current local branches."""

    def _names() -> list[str]:
        repo = Repo(test_env)
        try:
            return sorted(head.name for head in repo.heads)
        finally:
            repo.close()

    return _names
