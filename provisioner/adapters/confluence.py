"""Confluence-style collaboration space adapter."""

from ..config import Settings
from ..contracts import ProjectRecord
from ..logging import RequestContext
from .http import ClientRegistry, RestAdapter


class ConfluenceAdapter(RestAdapter):
    service_name = "confluence"

    def __init__(self, settings: Settings, registry: ClientRegistry) -> None:
        super().__init__(settings.confluence_url, registry)
        self._settings = settings

    def template_for(self, project_type: str | None) -> str:
        return self._settings.template_for(project_type).collaboration_template_key

    async def create_space(self, project: ProjectRecord, ctx: RequestContext) -> ProjectRecord:
        blueprint = self.template_for(project.project_type)
        description = project.description or ""
        payload = {
            "spaceKey": project.key,
            "name": project.name,
            "description": description,
            "spaceBlueprintId": blueprint,
            "context": {
                "name": project.name,
                "spaceKey": project.key,
                "description": description,
                "noPageTitlePrefix": "true",
            },
        }
        data = (
            await self._post_json(
                "/rest/create-dialog/1.0/space-blueprint/create-space", ctx, json=payload
            )
            or {}
        )
        space_key = data.get("spaceKey", project.key)
        project.collaboration_space_url = f"{self.base_url}/display/{space_key}"
        ctx.log.info(
            "collaboration_space_created",
            blueprint=blueprint,
            url=project.collaboration_space_url,
        )
        return project
