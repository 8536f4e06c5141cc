# ruff: noqa: TC003  # datetime needed at runtime for dataclass fields
"""Backend models.

This module defines the value objects exchanged with VCS backends.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Signature:
    """Author or committer identity attached to a commit.

    Attributes:
        name: Display name.
        email: Email address.
        timestamp: Timezone-aware time recorded on the commit.
    """

    name: str
    email: str
    timestamp: datetime

    def __post_init__(self) -> None:
        if not self.name or not self.email:
            msg = "Signature requires a non-empty name and email"
            raise ValueError(msg)
        if self.timestamp.tzinfo is None:
            msg = f"Signature timestamp must be timezone-aware: {self.timestamp!r}"
            raise ValueError(msg)

    def format(self) -> str:
        """Format as a ``Name <email>`` identity line."""
        return f"{self.name} <{self.email}>"


@dataclass(frozen=True, slots=True)
class CommitInfo:
    """Information about a single commit.

    Attributes:
        sha: Commit identifier (40-character hex for git).
        message: Complete commit message.
        author_name: Author name from commit.
        author_email: Author email from commit.
        timestamp: Author timestamp as a timezone-aware datetime.
        parent_shas: Identifiers of parent commits (empty tuple for initial commit).
    """

    sha: str
    message: str
    author_name: str
    author_email: str
    timestamp: datetime
    parent_shas: tuple[str, ...]
