"""Folder API: browse, tree, contents, create, update, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from medialib.api.v1.dependencies import get_folder_service, page_size_param, simulate
from medialib.application.use_cases import FolderService
from medialib.schemas.common import PaginatedResponse
from medialib.schemas.envelope import ApiResponse, ok
from medialib.schemas.folder import (
    FolderContentsResponse,
    FolderCreate,
    FolderDeleteResponse,
    FolderResponse,
    FolderTreeNode,
    FolderUpdate,
)
from medialib.schemas.media import MediaResponse

router = APIRouter()

FolderServiceDep = Annotated[FolderService, Depends(get_folder_service)]


@router.get(
    "",
    response_model=ApiResponse[list[FolderResponse]],
    dependencies=[Depends(simulate("getFolders"))],
)
async def list_folders(
    request: Request,
    service: FolderServiceDep,
    parent: str | None = None,
):
    """Direct children of ``parent`` (root folders when omitted)."""
    folders = service.list_folders(parent)
    return ok(request, [FolderResponse.model_validate(f) for f in folders])


@router.get(
    "/tree",
    response_model=ApiResponse[list[FolderTreeNode]],
    dependencies=[Depends(simulate("getFolderTree"))],
)
async def get_folder_tree(request: Request, service: FolderServiceDep):
    return ok(request, [FolderTreeNode.model_validate(n) for n in service.get_folder_tree()])


@router.get(
    "/{folder_id}",
    response_model=ApiResponse[FolderResponse],
    dependencies=[Depends(simulate("getFolder"))],
)
async def get_folder(request: Request, folder_id: str, service: FolderServiceDep):
    return ok(request, FolderResponse.model_validate(service.get_folder(folder_id)))


@router.get(
    "/{folder_id}/contents",
    response_model=ApiResponse[FolderContentsResponse],
    dependencies=[Depends(simulate("getFolderContents"))],
)
async def get_folder_contents(
    request: Request,
    folder_id: str,
    service: FolderServiceDep,
    page_size: Annotated[int, Depends(page_size_param)],
    page: int = 1,
    recursive: bool = True,
):
    """Media in the folder (and its subfolders unless ``recursive=false``), paginated."""
    result = service.get_folder_contents(folder_id, page, page_size, recursive=recursive)
    return ok(
        request,
        FolderContentsResponse(
            folder=FolderResponse.model_validate(result.folder),
            contents=PaginatedResponse[MediaResponse].from_page(result.contents),
        ),
    )


@router.post(
    "",
    response_model=ApiResponse[FolderResponse],
    status_code=201,
    dependencies=[Depends(simulate("createFolder"))],
)
async def create_folder(request: Request, body: FolderCreate, service: FolderServiceDep):
    folder = service.create_folder(body.name, parent=body.parent, color=body.color)
    return ok(request, FolderResponse.model_validate(folder), "Folder created successfully")


@router.patch(
    "/{folder_id}",
    response_model=ApiResponse[FolderResponse],
    dependencies=[Depends(simulate("updateFolder"))],
)
async def update_folder(
    request: Request, folder_id: str, body: FolderUpdate, service: FolderServiceDep
):
    """Rename, recolor or move a folder; only fields present in the body change."""
    folder = service.update_folder(folder_id, body.model_dump(exclude_unset=True))
    return ok(request, FolderResponse.model_validate(folder), "Folder updated successfully")


@router.delete(
    "/{folder_id}",
    response_model=ApiResponse[FolderDeleteResponse],
    dependencies=[Depends(simulate("deleteFolder"))],
)
async def delete_folder(
    request: Request,
    folder_id: str,
    service: FolderServiceDep,
    force: Annotated[bool, Query()] = False,
):
    result = service.delete_folder(folder_id, force=force)
    return ok(request, FolderDeleteResponse.model_validate(result), "Folder deleted successfully")
