"""Configuration handling for lopper."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class CherryMarkers:
    """Line prefixes `git cherry` uses to describe each commit.

    `upstream` marks a commit whose patch already exists in the upstream
    branch, `pending` one that does not.
    """

    upstream: str = "- "
    pending: str = "+ "


@dataclass
class Config:
    """Configuration for a single lopper run."""

    base_branch: str
    assume_yes: bool = False
    path: Path = field(default_factory=lambda: Path("."))
    program: str = "git"
    log_limit: int = 100
    markers: CherryMarkers = field(default_factory=CherryMarkers)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_base_branch()
        self._validate_program()
        self._validate_log_limit()
        self._validate_markers()
        self._validate_path()

    def _validate_base_branch(self):
        if not self.base_branch or not self.base_branch.strip():
            raise ValueError("base_branch cannot be empty")
        self.base_branch = self.base_branch.strip()

    def _validate_program(self):
        if not self.program:
            raise ValueError("program cannot be empty")

    def _validate_log_limit(self):
        if self.log_limit <= 0:
            raise ValueError(f"log_limit must be positive, got {self.log_limit}")

    def _validate_markers(self):
        if not self.markers.upstream or not self.markers.pending:
            raise ValueError("cherry markers cannot be empty")
        if self.markers.upstream == self.markers.pending:
            raise ValueError(f"cherry markers must differ, got '{self.markers.upstream}' for both")

    def _validate_path(self):
        self.path = Path(self.path)
        if not self.path.is_dir():
            raise ValueError(f"path must be an existing directory, got '{self.path}'")
