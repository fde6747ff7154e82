"""Wiring of the orchestrator and FastAPI dependencies."""

from fastapi import Request

from ..adapters import (
    BitbucketAdapter,
    ClientRegistry,
    ConfluenceAdapter,
    CrowdIdentityAdapter,
    JiraAdapter,
    ProjectStorage,
    RundeckAdapter,
    RundeckJobStore,
    ServiceAccountSessionProvider,
)
from ..config import Settings
from ..logging import RequestContext
from ..notifications import WebhookNotifier
from ..orchestrator import (
    DeliveryChainBuilder,
    IdentityPolicyChecker,
    ProvisioningOrchestrator,
    UpdateReconciler,
)
from ..storage import InMemoryProjectStorage, SqlProjectStorage


def build_storage(settings: Settings) -> ProjectStorage:
    if settings.database_url:
        return SqlProjectStorage.from_url(settings.database_url)
    return InMemoryProjectStorage()


def build_orchestrator(settings: Settings, storage: ProjectStorage) -> ProvisioningOrchestrator:
    """Assemble the orchestrator with the REST adapters configured in settings."""
    registry = ClientRegistry(
        username=settings.service_user,
        password=settings.service_password,
        timeout=settings.http_timeout,
    )
    job_store = RundeckJobStore()

    jira = JiraAdapter(settings, registry)
    confluence = ConfluenceAdapter(settings, registry)
    bitbucket = BitbucketAdapter(settings, registry)
    rundeck = RundeckAdapter(settings, registry, job_store)
    crowd = CrowdIdentityAdapter(settings, registry)

    delivery_chain = DeliveryChainBuilder(
        scm=bitbucket,
        jobs=rundeck,
        bugtracker=jira,
        auxiliary_repositories=settings.auxiliary_repositories,
    )
    return ProvisioningOrchestrator(
        bugtracker=jira,
        collaboration=confluence,
        storage=storage,
        notifier=WebhookNotifier(settings.notification_webhook_url),
        jobs=rundeck,
        job_store=job_store,
        sessions=ServiceAccountSessionProvider(registry),
        identity_checker=IdentityPolicyChecker(crowd),
        delivery_chain=delivery_chain,
        reconciler=UpdateReconciler(delivery_chain, settings.upgrade_allowed),
        template_keys=list(settings.project_templates),
    )


def get_orchestrator(request: Request) -> ProvisioningOrchestrator:
    return request.app.state.orchestrator


def get_request_context(request: Request) -> RequestContext:
    """Request context carrying the correlation id set by the middleware."""
    correlation_id = getattr(request.state, "correlation_id", None)
    if correlation_id:
        return RequestContext(correlation_id=correlation_id)
    return RequestContext()
