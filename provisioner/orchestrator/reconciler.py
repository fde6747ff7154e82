"""Merge an update request into the stored project."""

from ..contracts import ProjectRecord
from ..errors import NotFoundError, UpgradeNotAllowedError
from ..logging import RequestContext
from .delivery_chain import DeliveryChainBuilder


class UpdateReconciler:
    """Applies the update rules and runs the delivery chain for the new parts.

    Fields fixed at creation (name, description, bugtracker space, permission
    settings) always come from the stored project. ``platform_runtime`` can
    only move from False to True, and only while ``upgrade_allowed`` is set.
    The stored project is mutated and returned; the request is only a view
    used to drive the delivery chain.
    """

    def __init__(self, delivery_chain: DeliveryChainBuilder, upgrade_allowed: bool) -> None:
        self.delivery_chain = delivery_chain
        self.upgrade_allowed = upgrade_allowed

    def _apply_rules(self, existing: ProjectRecord, incoming: ProjectRecord) -> None:
        incoming.description = existing.description
        incoming.name = existing.name
        incoming.scm_url = existing.scm_url
        incoming.bugtracker_space = existing.bugtracker_space

        if not existing.platform_runtime and incoming.platform_runtime:
            if not self.upgrade_allowed:
                raise UpgradeNotAllowedError(
                    f"Project: {existing.key} cannot be upgraded to platform usage"
                )
        elif existing.platform_runtime:
            incoming.platform_runtime = True

        if existing.special_permission_set:
            incoming.copy_permissions_from(existing)

    def _keep_delivery_progress(
        self, existing: ProjectRecord, incoming: ProjectRecord, upgrade: bool
    ) -> None:
        """Copy the SCM project and repositories built for ``incoming`` onto ``existing``."""
        existing.scm_url = incoming.scm_url
        if upgrade:
            existing.platform_runtime = True
        if incoming.repositories:
            existing.repositories = {**(existing.repositories or {}), **incoming.repositories}

    async def reconcile(
        self,
        existing: ProjectRecord | None,
        incoming: ProjectRecord,
        ctx: RequestContext,
    ) -> ProjectRecord:
        if existing is None:
            raise NotFoundError(f"Project with key {incoming.key} does not exist")

        self._apply_rules(existing, incoming)
        upgrade = not existing.platform_runtime and incoming.platform_runtime
        ctx.log.debug("update_reconciled", platform_upgrade=upgrade)

        try:
            incoming = await self.delivery_chain.build(incoming, ctx)
        except Exception:
            if incoming.scm_url and incoming.scm_url != existing.scm_url:
                self._keep_delivery_progress(existing, incoming, upgrade)
            raise

        self._keep_delivery_progress(existing, incoming, upgrade)

        if incoming.quickstarters:
            if existing.quickstarters is not None:
                existing.quickstarters.extend(incoming.quickstarters)
            else:
                existing.quickstarters = incoming.quickstarters

        existing.last_execution_jobs = incoming.last_execution_jobs
        return existing
