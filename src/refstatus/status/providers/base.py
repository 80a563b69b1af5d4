"""Base interface for commit status providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from refstatus.models.status import CommitStatusResult


class StatusProvider(ABC):
    """Abstract base class for CI status providers."""

    @abstractmethod
    def get_status(
        self, repository_path: str, reference: str
    ) -> CommitStatusResult | None:
        """Return the latest known combined status for a reference.

        Args:
            repository_path: Repository path on the provider, e.g. ``org/repo``.
            reference: Branch, tag or commit to look up.

        Returns:
            CommitStatusResult with the provider's state and statuses in
            provider order, or None when the provider has no such reference.

        Raises:
            StatusProviderError: If the provider cannot be reached or answers
                with an unusable response.
        """
