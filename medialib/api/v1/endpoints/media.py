"""Media API: query, CRUD, batch operations, move/copy and stats."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from medialib.api.v1.dependencies import get_media_service, page_size_param, simulate
from medialib.application.dtos.query import MediaQuery
from medialib.application.use_cases import MediaService
from medialib.domain.enums import SortOrder
from medialib.schemas.common import IdsRequest, PaginatedResponse
from medialib.schemas.envelope import ApiResponse, ok
from medialib.schemas.media import (
    BatchCopyResponse,
    BatchDeleteResponse,
    BatchUpdateResponse,
    MediaBatchUpdateRequest,
    MediaCreate,
    MediaResponse,
    MediaStatsResponse,
    MediaTransferRequest,
    MediaUpdate,
)

router = APIRouter()

MediaServiceDep = Annotated[MediaService, Depends(get_media_service)]
ListParam = Annotated[list[str] | None, Query()]


def split_values(values: list[str] | None) -> list[str]:
    """Accept repeated params and comma-separated values (``?types=image,video``)."""
    if not values:
        return []
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


@router.get(
    "",
    response_model=ApiResponse[PaginatedResponse[MediaResponse]],
    dependencies=[Depends(simulate("getMedia"))],
)
async def list_media(
    request: Request,
    service: MediaServiceDep,
    page_size: Annotated[int, Depends(page_size_param)],
    folder: str | None = None,
    recursive: bool = True,
    collection: str | None = None,
    search: str | None = None,
    types: ListParam = None,
    tags: ListParam = None,
    status: ListParam = None,
    used: str | None = None,
    starred: str | None = None,
    favorited: str | None = None,
    date_from: Annotated[str | None, Query(alias="dateFrom")] = None,
    date_to: Annotated[str | None, Query(alias="dateTo")] = None,
    sort_by: Annotated[str, Query(alias="sortBy")] = "name",
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = SortOrder.ASC,
    page: int = 1,
):
    """Filter, sort and paginate media; ``folder`` includes subfolders by default."""
    query = MediaQuery(
        folder=folder,
        recursive=recursive,
        collection=collection,
        search=search,
        types=split_values(types),
        tags=split_values(tags),
        status=split_values(status),
        used=used,
        starred=starred,
        favorited=favorited,
        date_from=date_from,
        date_to=date_to,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        page_size=page_size,
    )
    return ok(request, PaginatedResponse[MediaResponse].from_page(service.query_media(query)))


@router.get(
    "/stats",
    response_model=ApiResponse[MediaStatsResponse],
    dependencies=[Depends(simulate("getMediaStats"))],
)
async def get_media_stats(request: Request, service: MediaServiceDep):
    return ok(request, MediaStatsResponse.model_validate(service.get_media_stats()))


@router.post(
    "/batch-update",
    response_model=ApiResponse[BatchUpdateResponse],
    dependencies=[Depends(simulate("batchUpdateMedia"))],
)
async def batch_update_media(
    request: Request, body: MediaBatchUpdateRequest, service: MediaServiceDep
):
    """Apply the same changes to every id; unknown ids are reported in ``failed``."""
    result = service.batch_update_media(body.ids, body.updates.model_dump(exclude_unset=True))
    return ok(
        request,
        BatchUpdateResponse.model_validate(result),
        f"Updated {result.total_updated} items",
    )


@router.post(
    "/batch-delete",
    response_model=ApiResponse[BatchDeleteResponse],
    dependencies=[Depends(simulate("batchDeleteMedia"))],
)
async def batch_delete_media(request: Request, body: IdsRequest, service: MediaServiceDep):
    """Delete every id that exists and is not in a collection."""
    result = service.batch_delete_media(body.ids)
    payload = BatchDeleteResponse(
        deleted=[item.id for item in result.deleted],
        failed=result.failed,
        total_deleted=result.total_deleted,
        total_failed=result.total_failed,
    )
    return ok(request, payload, f"Deleted {result.total_deleted} items")


@router.post(
    "/move",
    response_model=ApiResponse[BatchUpdateResponse],
    dependencies=[Depends(simulate("moveMedia"))],
)
async def move_media(request: Request, body: MediaTransferRequest, service: MediaServiceDep):
    result = service.move_media(body.ids, body.target_folder_id)
    return ok(
        request,
        BatchUpdateResponse.model_validate(result),
        f"Moved {result.total_updated} items",
    )


@router.post(
    "/copy",
    response_model=ApiResponse[BatchCopyResponse],
    status_code=201,
    dependencies=[Depends(simulate("copyMedia"))],
)
async def copy_media(request: Request, body: MediaTransferRequest, service: MediaServiceDep):
    result = service.copy_media(body.ids, body.target_folder_id)
    return ok(
        request,
        BatchCopyResponse.model_validate(result),
        f"Copied {len(result.copied)} items",
    )


@router.get(
    "/{media_id}",
    response_model=ApiResponse[MediaResponse],
    dependencies=[Depends(simulate("getMediaItem"))],
)
async def get_media(request: Request, media_id: str, service: MediaServiceDep):
    return ok(request, MediaResponse.model_validate(service.get_media(media_id)))


@router.post(
    "",
    response_model=ApiResponse[MediaResponse],
    status_code=201,
    dependencies=[Depends(simulate("createMedia", delay_ms=1000))],
)
async def create_media(request: Request, body: MediaCreate, service: MediaServiceDep):
    item = service.create_media(body.model_dump())
    return ok(request, MediaResponse.model_validate(item), "Media created successfully")


@router.patch(
    "/{media_id}",
    response_model=ApiResponse[MediaResponse],
    dependencies=[Depends(simulate("updateMedia"))],
)
async def update_media(
    request: Request, media_id: str, body: MediaUpdate, service: MediaServiceDep
):
    item = service.update_media(media_id, body.model_dump(exclude_unset=True))
    return ok(request, MediaResponse.model_validate(item), "Media updated successfully")


@router.delete(
    "/{media_id}",
    response_model=ApiResponse[MediaResponse],
    dependencies=[Depends(simulate("deleteMedia"))],
)
async def delete_media(request: Request, media_id: str, service: MediaServiceDep):
    """Delete a media item; rejected with item_in_use while a collection lists it."""
    item = service.delete_media(media_id)
    return ok(request, MediaResponse.model_validate(item), "Media deleted successfully")
