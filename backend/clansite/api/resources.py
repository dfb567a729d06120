"""
Resource API

List routes are public; create, update and delete require a session token.

- /wipes, /team-members, /videos: list / create / update / delete
- /clan-info: get / replace
"""

from typing import Any, Callable

from fastapi import APIRouter, Depends

from clansite.api.deps import (
    ClanInfoServiceDep,
    get_team_members_service,
    get_videos_service,
    get_wipes_service,
    require_session,
)
from clansite.domain.resources import (
    ClanInfo,
    CreateResponse,
    ResourceDocument,
    SuccessResponse,
    TeamMember,
    Video,
    Wipe,
)
from clansite.services import ResourceService


def create_resource_router(
    path: str,
    tag: str,
    document_model: type[ResourceDocument],
    service_dependency: Callable[..., ResourceService],
) -> APIRouter:
    """
    Build the CRUD router for one prefix-bound resource

    Args:
        path: Route path, e.g. "/wipes"
        tag: OpenAPI tag
        document_model: Body schema for create/update
        service_dependency: FastAPI dependency returning the resource service
    """
    router = APIRouter(prefix=path, tags=[tag])

    @router.get("", response_model=list[Any])
    async def list_resources(service: ResourceService = Depends(service_dependency)):
        return await service.get_all()

    @router.post(
        "",
        response_model=CreateResponse,
        dependencies=[Depends(require_session)],
    )
    async def create_resource(
        data: document_model,
        service: ResourceService = Depends(service_dependency),
    ):
        id = await service.create(data.to_document())
        return CreateResponse(id=id)

    @router.put(
        "/{id}",
        response_model=SuccessResponse,
        dependencies=[Depends(require_session)],
    )
    async def update_resource(
        id: str,
        data: document_model,
        service: ResourceService = Depends(service_dependency),
    ):
        await service.update(id, data.to_document())
        return SuccessResponse()

    @router.delete(
        "/{id}",
        response_model=SuccessResponse,
        dependencies=[Depends(require_session)],
    )
    async def delete_resource(
        id: str,
        service: ResourceService = Depends(service_dependency),
    ):
        await service.delete(id)
        return SuccessResponse()

    return router


wipes_router = create_resource_router("/wipes", "Wipes", Wipe, get_wipes_service)
team_members_router = create_resource_router(
    "/team-members", "Team Members", TeamMember, get_team_members_service
)
videos_router = create_resource_router("/videos", "Videos", Video, get_videos_service)


clan_info_router = APIRouter(prefix="/clan-info", tags=["Clan Info"])


@clan_info_router.get("", response_model=Any)
async def get_clan_info(service: ClanInfoServiceDep):
    return await service.get()


@clan_info_router.put(
    "",
    response_model=SuccessResponse,
    dependencies=[Depends(require_session)],
)
async def replace_clan_info(data: ClanInfo, service: ClanInfoServiceDep):
    await service.replace(data.to_document())
    return SuccessResponse()
