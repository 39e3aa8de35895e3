"""Delete local git branches that are already merged.

Features:
- Detect branches merged into a base branch by fast-forward or merge commit
- Detect squash-merged branches, which have no ancestry link to the base
- Confirm each deletion interactively, with log and diff previews
- Print the command that recreates every deleted branch
"""

import os

# GitPython refuses to import without a git executable; let GitRepo.check_available report it instead
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

__version__ = "0.1.0"
