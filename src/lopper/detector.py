"""Merge detection for local branches."""

import logging
from enum import Enum
from typing import Optional

from lopper.config import CherryMarkers
from lopper.git import GitRepo

logger = logging.getLogger(__name__)

TEMPORARY_COMMIT_MESSAGE = "Temporary commit"


class SquashStatus(Enum):
    """Answer of a squash-merge check."""

    MERGED = "merged"
    UNMERGED = "unmerged"
    UNKNOWN = "unknown"


class MergeDetector:
    """Detects branches that were merged or squash-merged into a base branch."""

    def __init__(self, repo: GitRepo, markers: Optional[CherryMarkers] = None) -> None:
        self.repo = repo
        self.markers = markers or CherryMarkers()

    def merged_branches(self, base: str) -> set[str]:
        """Get every local branch whose tip is reachable from base, excluding base."""
        names = self.repo.list_lines("branch", "--merged", base, "--format", "%(refname:short)")
        return {name for name in names if name != base}

    def is_merged(self, base: str, candidate: str) -> bool:
        """Check if candidate was fast-forwarded or merged into base."""
        if candidate == base:
            return False
        return candidate in self.merged_branches(base)

    def is_squash_merged(self, base: str, candidate: str) -> bool:
        """Check if candidate was squash-merged into base."""
        return self.squash_status(base, candidate) is SquashStatus.MERGED

    def squash_status(self, base: str, candidate: str) -> SquashStatus:
        """Classify candidate by asking git cherry about a synthetic commit.

        A squash-merge leaves no ancestry link, so the candidate's whole change
        is recreated as one commit on top of the merge base: same tree as the
        candidate tip, merge base as its only parent. If base already contains
        an equivalent patch, cherry marks that commit as upstream.

        The synthetic commit is dangling; no ref ever points at it.
        """
        if candidate == base:
            return SquashStatus.UNMERGED

        ancestor = self.repo.run("merge-base", base, candidate)
        tree = self.repo.run("rev-parse", f"{candidate}^{{tree}}")
        answer = self.repo.run(
            "cherry",
            base,
            self.repo.run("commit-tree", tree, "-p", ancestor, "-m", TEMPORARY_COMMIT_MESSAGE),
        )
        return self._parse_cherry(candidate, answer)

    def _parse_cherry(self, candidate: str, answer: str) -> SquashStatus:
        first_line = answer.splitlines()[0] if answer else ""
        if not first_line:
            return SquashStatus.UNMERGED
        if first_line.startswith(self.markers.upstream):
            logger.debug("%s is squash-merged (%s)", candidate, first_line)
            return SquashStatus.MERGED
        if first_line.startswith(self.markers.pending):
            return SquashStatus.UNMERGED
        logger.warning("Unrecognized git cherry output for %s: %r", candidate, first_line)
        return SquashStatus.UNKNOWN
