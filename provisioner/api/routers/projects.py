"""Projects router: create, update and inspect provisioned projects."""

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from ...contracts import ExistsResult, GeneratedKey, ProjectRecord, ProjectTemplates
from ...logging import RequestContext
from ...orchestrator import ProvisioningOrchestrator
from ..dependencies import get_orchestrator, get_request_context

router = APIRouter(prefix="/project", tags=["projects"])


def _exists_response(result: ExistsResult | None) -> Response:
    if result is None:
        return Response(status_code=status.HTTP_200_OK)
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=result.model_dump())


@router.post("", response_model=ProjectRecord)
async def create_project(
    project_in: ProjectRecord,
    orchestrator: ProvisioningOrchestrator = Depends(get_orchestrator),
    ctx: RequestContext = Depends(get_request_context),
) -> ProjectRecord:
    """Create a project and everything it requested."""
    return await orchestrator.create(project_in, ctx)


@router.put("", response_model=ProjectRecord)
async def update_project(
    project_in: ProjectRecord,
    orchestrator: ProvisioningOrchestrator = Depends(get_orchestrator),
    ctx: RequestContext = Depends(get_request_context),
) -> ProjectRecord:
    """Add quickstarters to a project or upgrade it to platform usage."""
    return await orchestrator.update(project_in, ctx)


@router.get("/validate")
async def validate_project_name(
    project_name: str = Query(..., alias="projectName"),
    orchestrator: ProvisioningOrchestrator = Depends(get_orchestrator),
    ctx: RequestContext = Depends(get_request_context),
) -> Response:
    """200 if the name is free, 409 with an error body if the tracker has it."""
    return _exists_response(await orchestrator.validate_name(project_name, ctx))


@router.get("/templates", response_model=list[str])
async def get_project_template_keys(
    orchestrator: ProvisioningOrchestrator = Depends(get_orchestrator),
) -> list[str]:
    return orchestrator.list_template_keys()


@router.get("/template/{key}", response_model=ProjectTemplates)
async def get_project_templates_for_key(
    key: str,
    orchestrator: ProvisioningOrchestrator = Depends(get_orchestrator),
) -> ProjectTemplates:
    return orchestrator.get_templates_for_key(key)


@router.get("/key/validate")
async def validate_project_key(
    project_key: str = Query(..., alias="projectKey"),
    orchestrator: ProvisioningOrchestrator = Depends(get_orchestrator),
    ctx: RequestContext = Depends(get_request_context),
) -> Response:
    return _exists_response(await orchestrator.validate_key(project_key, ctx))


@router.get("/key/generate", response_model=GeneratedKey)
async def generate_project_key(
    name: str = Query(...),
    orchestrator: ProvisioningOrchestrator = Depends(get_orchestrator),
) -> GeneratedKey:
    return GeneratedKey(project_key=orchestrator.generate_key(name))


@router.get("/{key}", response_model=ProjectRecord)
async def get_project(
    key: str,
    orchestrator: ProvisioningOrchestrator = Depends(get_orchestrator),
    ctx: RequestContext = Depends(get_request_context),
) -> ProjectRecord:
    """Get project by key."""
    return await orchestrator.get(key, ctx)
