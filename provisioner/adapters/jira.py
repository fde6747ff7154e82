"""Jira-style issue tracker adapter."""

import re

import httpx

from ..config import Settings
from ..contracts import ProjectRecord
from ..logging import RequestContext
from .http import ClientRegistry, RestAdapter

KEY_MAX_LENGTH = 5


class JiraAdapter(RestAdapter):
    service_name = "jira"

    def __init__(self, settings: Settings, registry: ClientRegistry) -> None:
        super().__init__(settings.jira_url, registry)
        self._settings = settings
        self._project_lead = settings.service_user

    def template_for(self, project_type: str | None) -> tuple[str, str]:
        template = self._settings.template_for(project_type)
        return template.bugtracker_template_type, template.bugtracker_template_key

    def build_project_key(self, name: str) -> str:
        """Derive a project key: alphanumerics only, upper case, at most 5 chars.

        Long names keep their first three and last two characters.
        """
        key = re.sub(r"[^A-Za-z0-9]", "", name or "").upper()
        if len(key) > KEY_MAX_LENGTH:
            key = key[:3] + key[-2:]
        return key

    async def create_project(self, project: ProjectRecord, ctx: RequestContext) -> ProjectRecord:
        type_key, template_key = self.template_for(project.project_type)
        payload = {
            "key": project.key,
            "name": project.name,
            "description": project.description or "",
            "projectTypeKey": type_key,
            "projectTemplateKey": template_key,
            "lead": project.admin_user or self._project_lead,
        }
        data = await self._post_json("/rest/api/2/project", ctx, json=payload) or {}
        created_key = data.get("key", project.key)
        project.bugtracker_url = f"{self.base_url}/browse/{created_key}"
        ctx.log.info(
            "bugtracker_project_created",
            template=f"{type_key}#{template_key}",
            url=project.bugtracker_url,
        )
        return project

    async def add_shortcuts(self, project: ProjectRecord, ctx: RequestContext) -> int:
        if not project.bugtracker_space:
            return 0

        shortcuts = [
            ("Collaboration space", project.collaboration_space_url),
            ("Source code", project.scm_url),
        ]
        created = 0
        for name, url in shortcuts:
            if not url:
                continue
            await self._post_json(
                f"/rest/projects/1.0/project/{project.key}/shortcut",
                ctx,
                json={"name": name, "url": url, "icon": ""},
            )
            created += 1
        ctx.log.debug("bugtracker_shortcuts_added", count=created)
        return created

    async def create_components_for_repositories(
        self, project: ProjectRecord, ctx: RequestContext
    ) -> dict[str, str]:
        """Create one component per repository; returns name -> description."""
        if not project.bugtracker_space or not project.repositories:
            return {}

        components: dict[str, str] = {}
        for repo_name, repo in project.repositories.items():
            description = f"Technology component {repo_name} stored at {repo.url or repo_name}"
            await self._post_json(
                "/rest/api/2/component",
                ctx,
                json={"project": project.key, "name": repo_name, "description": description},
            )
            components[repo_name] = description
        ctx.log.info("bugtracker_components_created", components=sorted(components))
        return components

    async def project_key_exists(self, key_or_name: str, ctx: RequestContext) -> bool:
        resp = await self._client(ctx).get(f"/rest/api/2/project/{key_or_name}")
        if resp.status_code == httpx.codes.NOT_FOUND:
            return False
        resp.raise_for_status()
        return True
