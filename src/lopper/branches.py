"""Branch classification."""

import logging
from typing import Optional

from lopper.detector import MergeDetector, SquashStatus
from lopper.git import GitRepo

logger = logging.getLogger(__name__)


def list_local_branches(repo: GitRepo) -> list[str]:
    """Get the short names of all local branches."""
    return repo.list_lines("for-each-ref", "refs/heads/", "--format", "%(refname:short)")


def collect_deletable(repo: GitRepo, base: str, detector: Optional[MergeDetector] = None) -> list[str]:
    """Get the sorted names of branches merged or squash-merged into base.

    Raises:
        CommandFailure: If any git query fails; no partial result is returned
    """
    detector = detector or MergeDetector(repo)
    candidates = [branch for branch in list_local_branches(repo) if branch != base]

    # `branch --merged` can also report a detached HEAD, so keep real branches only
    merged = detector.merged_branches(base) & set(candidates)
    logger.info("Merged into %s: %s", base, sorted(merged))

    squashed = set()
    for branch in candidates:
        status = detector.squash_status(base, branch)
        if status is SquashStatus.MERGED:
            squashed.add(branch)
        elif status is SquashStatus.UNKNOWN:
            logger.warning("Keeping %s: could not tell whether it was squash-merged", branch)
    logger.info("Squash-merged into %s: %s", base, sorted(squashed))

    return sorted(merged | squashed)
