"""Deploy history repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from refstatus.models.deploy import DeployRecord, Project


class DeployRepository(ABC):
    """Read-only queries over past deploys.

    Implementations wrap whatever persistence layer the host application uses.
    """

    @abstractmethod
    def find_succeeded_deploys(
        self,
        deploy_group_ids: Iterable[int],
        excluding_deploy_id: int | None = None,
    ) -> Sequence[DeployRecord]:
        """Return succeeded deploys that touched any of the deploy groups.

        Args:
            deploy_group_ids: Deploy groups of the stage being checked.
            excluding_deploy_id: Deploy to leave out, usually the one in progress.

        Returns:
            Matching deploy records in any order.
        """

    @abstractmethod
    def deployed_reference_to_non_production_stage(
        self, project: Project, reference: str
    ) -> bool:
        """Return True if the reference already went to a non-production stage.

        Args:
            project: Project owning the stages.
            reference: Reference to look for.
        """
