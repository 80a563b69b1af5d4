"""Deploy history checks for production stages.

Flags a versioned reference as an old release when a numerically newer version
already went out to deploy groups shared with the stage.
"""

from __future__ import annotations

import logging

from refstatus.lib.version import is_newer, is_versioned, sort_key
from refstatus.models.deploy import Project, Stage
from refstatus.models.status import RefStatus, StatusEntry, StatusState
from refstatus.status.repository import DeployRepository

logger = logging.getLogger(__name__)

OLD_RELEASE = "Old Release"
PRODUCTION_ONLY_REFERENCE = "Production Only Reference"


class DeployHistoryInspector:
    """Derives warning statuses from past deploys.

    Attributes:
        repository: Source of deploy history.
        warn_production_only_reference: Also warn when a production stage
            deploys a reference that never went to a non-production stage.
    """

    def __init__(
        self,
        repository: DeployRepository,
        warn_production_only_reference: bool = False,
    ) -> None:
        self.repository = repository
        self.warn_production_only_reference = warn_production_only_reference

    def statuses(
        self,
        project: Project,
        stage: Stage | None,
        reference: str,
        deploy_id: int | None = None,
    ) -> list[RefStatus]:
        """Return history warnings for deploying ``reference`` to ``stage``.

        Only production stages are checked, and only while the reference has
        not already been deployed to a non-production stage.

        Args:
            project: Project owning the stage.
            stage: Stage being deployed to, or None.
            reference: Reference being deployed.
            deploy_id: Deploy in progress, excluded from history.

        Returns:
            Zero or more status groups, old release warning first.
        """
        if stage is None or not stage.production:
            return []
        if self.repository.deployed_reference_to_non_production_stage(
            project, reference
        ):
            return []

        statuses: list[RefStatus] = []
        old_release = self.old_release_status(stage, reference, deploy_id)
        if old_release:
            statuses.append(old_release)
        if self.warn_production_only_reference:
            statuses.append(self._production_only_status(reference))
        return statuses

    def old_release_status(
        self, stage: Stage, reference: str, deploy_id: int | None = None
    ) -> RefStatus | None:
        """Build the old release warning, or None when nothing newer was deployed."""
        if not is_versioned(reference) or not stage.deploy_group_ids:
            return None

        stage_groups = set(stage.deploy_group_ids)
        deploys = self.repository.find_succeeded_deploys(
            stage.deploy_group_ids, excluding_deploy_id=deploy_id
        )

        newer: dict[str, set[str]] = {}
        for deploy in deploys:
            if not deploy.succeeded or not is_newer(deploy.reference, reference):
                continue
            if deploy.deploy_group_ids and not stage_groups & set(
                deploy.deploy_group_ids
            ):
                continue
            newer.setdefault(deploy.reference, set()).add(deploy.stage_name)

        if not newer:
            return None

        references = sorted(newer, key=sort_key)
        stage_names: list[str] = []
        for newer_reference in references:
            for name in sorted(newer[newer_reference]):
                if name not in stage_names:
                    stage_names.append(name)

        logger.info(
            f"{reference} is older than {', '.join(references)} "
            f"already deployed to stage '{stage.name}' deploy groups"
        )
        description = (
            f"{', '.join(references)} was deployed to deploy groups in this stage "
            f"by {', '.join(stage_names)}"
        )
        return RefStatus(
            state=StatusState.ERROR,
            statuses=[StatusEntry(state=OLD_RELEASE, description=description)],
        )

    def _production_only_status(self, reference: str) -> RefStatus:
        return RefStatus(
            state=StatusState.PENDING,
            statuses=[
                StatusEntry(
                    state=PRODUCTION_ONLY_REFERENCE,
                    description=(
                        f"{reference} has not been deployed to a "
                        "non-production stage."
                    ),
                )
            ],
        )
