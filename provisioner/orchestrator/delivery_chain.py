"""Delivery chain: SCM project, platform project and component automation.

Steps are resumable rather than compensated. The SCM project, its auxiliary
repositories and the platform project are only created while ``scm_url`` is
empty. When a later step fails the orchestrator persists the record with its
``scm_url``, so a retried update picks up from the component step.
"""

from ..adapters import BugtrackerAdapter, JobExecutionAdapter, SCMAdapter
from ..contracts import ProjectRecord
from ..errors import AdapterFailureError
from ..logging import RequestContext


class DeliveryChainBuilder:
    def __init__(
        self,
        scm: SCMAdapter,
        jobs: JobExecutionAdapter,
        bugtracker: BugtrackerAdapter,
        auxiliary_repositories: list[str],
    ) -> None:
        self.scm = scm
        self.jobs = jobs
        self.bugtracker = bugtracker
        self.auxiliary_repositories = list(auxiliary_repositories)

    async def build(self, project: ProjectRecord, ctx: RequestContext) -> ProjectRecord:
        log = ctx.log
        log.debug(
            "delivery_chain_started",
            platform_runtime=project.platform_runtime,
            scm_url=project.scm_url,
        )

        if not project.platform_runtime:
            return project

        if not project.scm_url:
            project = await self.scm.create_project(project, ctx)
            if not project.scm_url:
                raise AdapterFailureError(
                    f"{type(self.scm).__name__} did not return scm url"
                )

            project = await self.scm.create_auxiliary_repositories(
                project, self.auxiliary_repositories, ctx
            )
            project = await self.jobs.create_platform_projects(project, ctx)
            log.info("platform_project_created", scm_url=project.scm_url)

        project = await self.scm.create_component_repositories(project, ctx)
        await self.bugtracker.create_components_for_repositories(project, ctx)

        if project.last_execution_jobs is None:
            project.last_execution_jobs = []
        executions = await self.jobs.provision_quickstarters(project, ctx)
        project.last_execution_jobs.extend(execution.permalink for execution in executions)

        log.info(
            "delivery_chain_finished",
            repositories=sorted(project.repositories or {}),
            jobs=len(executions),
        )
        return project
