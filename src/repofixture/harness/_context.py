"""Default resolution for the collaborators every harness operation takes.

Harness functions accept optional ``config``, ``backend``, ``clock`` and
``logger`` keyword arguments. Missing values are filled in here: the
configuration from ``load_config()``, the git backend, the wall clock, and the
shared harness logger for the configured logging section.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from repofixture.backend import GitBackend, Signature
from repofixture.config import load_config
from repofixture.utils import get_harness_logger, utc_now

if TYPE_CHECKING:
    from datetime import datetime

    from structlog.typing import FilteringBoundLogger

    from repofixture.backend import VcsBackend
    from repofixture.config import HarnessConfig
    from repofixture.utils import Clock


@dataclass(frozen=True, slots=True)
class HarnessContext:
    """Resolved collaborators for one harness call."""

    config: HarnessConfig
    backend: VcsBackend
    clock: Clock
    logger: FilteringBoundLogger

    def signature(self, timestamp: datetime | None = None) -> Signature:
        """Build the fixed author identity for a new commit.

        Args:
            timestamp: Explicit commit time. Defaults to the next clock value.

        Returns:
            Signature using the configured author name and email.
        """
        return Signature(
            name=self.config.author_name,
            email=self.config.author_email,
            timestamp=timestamp if timestamp is not None else self.clock(),
        )


def resolve_backend(backend: VcsBackend | None = None) -> VcsBackend:
    """Return backend, or the git backend when none is supplied."""
    return backend if backend is not None else GitBackend()


def resolve_context(
    *,
    config: HarnessConfig | None = None,
    backend: VcsBackend | None = None,
    clock: Clock | None = None,
    logger: FilteringBoundLogger | None = None,
) -> HarnessContext:
    """Fill in defaults for any collaborator not supplied by the caller."""
    if config is None:
        config = load_config()
    if logger is None:
        logging_config = config.logging
        logger = get_harness_logger(
            logging_config.level.value,
            logging_config.format.value,
            logging_config.file,
        )
    return HarnessContext(
        config=config,
        backend=resolve_backend(backend),
        clock=clock if clock is not None else utc_now,
        logger=logger,
    )
