"""Collection API: nested collections, contents, membership and sharing."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from medialib.api.v1.dependencies import (
    SettingsDep,
    get_collection_service,
    page_size_param,
    simulate,
)
from medialib.application.dtos.query import CollectionQuery
from medialib.application.use_cases import CollectionService
from medialib.domain.enums import SortOrder
from medialib.schemas.collection import (
    ChildCollectionsResponse,
    CollectionContentsResponse,
    CollectionCreate,
    CollectionDeleteResponse,
    CollectionItemsRequest,
    CollectionResponse,
    CollectionTreeNode,
    CollectionUpdate,
    ShareCollectionRequest,
)
from medialib.schemas.common import PaginatedResponse
from medialib.schemas.envelope import ApiResponse, ok
from medialib.schemas.media import MediaResponse

router = APIRouter()

CollectionServiceDep = Annotated[CollectionService, Depends(get_collection_service)]
PageSizeDep = Annotated[int, Depends(page_size_param)]


@router.get(
    "",
    response_model=ApiResponse[PaginatedResponse[CollectionResponse]],
    dependencies=[Depends(simulate("getCollections"))],
)
async def list_collections(
    request: Request,
    service: CollectionServiceDep,
    page_size: PageSizeDep,
    created_by: Annotated[str | None, Query(alias="createdBy")] = None,
    is_shared: Annotated[str | None, Query(alias="isShared")] = None,
    parent_id: Annotated[str | None, Query(alias="parentId")] = None,
    recursive: bool = False,
    search: str | None = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = SortOrder.ASC,
    page: int = 1,
):
    query = CollectionQuery(
        created_by=created_by,
        is_shared=is_shared,
        parent_id=parent_id,
        recursive=recursive,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        page_size=page_size,
    )
    result = service.list_collections(query)
    return ok(request, PaginatedResponse[CollectionResponse].from_page(result))


@router.get(
    "/tree",
    response_model=ApiResponse[list[CollectionTreeNode]],
    dependencies=[Depends(simulate("getCollectionTree"))],
)
async def get_collection_tree(request: Request, service: CollectionServiceDep):
    nodes = service.get_collection_tree()
    return ok(request, [CollectionTreeNode.model_validate(n) for n in nodes])


@router.get(
    "/{collection_id}",
    response_model=ApiResponse[CollectionResponse],
    dependencies=[Depends(simulate("getCollection"))],
)
async def get_collection(request: Request, collection_id: str, service: CollectionServiceDep):
    return ok(request, CollectionResponse.model_validate(service.get_collection(collection_id)))


@router.get(
    "/{collection_id}/children",
    response_model=ApiResponse[ChildCollectionsResponse],
    dependencies=[Depends(simulate("getChildCollections"))],
)
async def get_child_collections(
    request: Request,
    collection_id: str,
    service: CollectionServiceDep,
    page_size: PageSizeDep,
    page: int = 1,
):
    result = service.get_child_collections(collection_id, page, page_size)
    return ok(
        request,
        ChildCollectionsResponse(
            parent=CollectionResponse.model_validate(result.parent),
            children=PaginatedResponse[CollectionResponse].from_page(result.children),
        ),
    )


@router.get(
    "/{collection_id}/contents",
    response_model=ApiResponse[CollectionContentsResponse],
    dependencies=[Depends(simulate("getCollectionContents"))],
)
async def get_collection_contents(
    request: Request,
    collection_id: str,
    service: CollectionServiceDep,
    page_size: PageSizeDep,
    page: int = 1,
    include_child_collections: Annotated[bool, Query(alias="includeChildCollections")] = False,
):
    result = service.get_collection_contents(
        collection_id, page, page_size, include_child_collections=include_child_collections
    )
    return ok(
        request,
        CollectionContentsResponse(
            collection=CollectionResponse.model_validate(result.collection),
            contents=PaginatedResponse[MediaResponse].from_page(result.contents),
        ),
    )


@router.post(
    "",
    response_model=ApiResponse[CollectionResponse],
    status_code=201,
    dependencies=[Depends(simulate("createCollection"))],
)
async def create_collection(
    request: Request,
    body: CollectionCreate,
    service: CollectionServiceDep,
    settings: SettingsDep,
):
    """Create a collection owned by the current user unless ``createdBy`` is given."""
    collection = service.create_collection(
        body.model_dump(exclude_unset=True), created_by=settings.current_user_id
    )
    return ok(request, CollectionResponse.model_validate(collection), "Collection created successfully")


@router.patch(
    "/{collection_id}",
    response_model=ApiResponse[CollectionResponse],
    dependencies=[Depends(simulate("updateCollection"))],
)
async def update_collection(
    request: Request,
    collection_id: str,
    body: CollectionUpdate,
    service: CollectionServiceDep,
):
    collection = service.update_collection(collection_id, body.model_dump(exclude_unset=True))
    return ok(request, CollectionResponse.model_validate(collection), "Collection updated successfully")


@router.delete(
    "/{collection_id}",
    response_model=ApiResponse[CollectionDeleteResponse],
    dependencies=[Depends(simulate("deleteCollection"))],
)
async def delete_collection(
    request: Request,
    collection_id: str,
    service: CollectionServiceDep,
    delete_children: Annotated[bool, Query(alias="deleteChildren")] = False,
):
    result = service.delete_collection(collection_id, delete_children=delete_children)
    return ok(request, CollectionDeleteResponse.model_validate(result), "Collection deleted successfully")


@router.post(
    "/{collection_id}/items",
    response_model=ApiResponse[CollectionResponse],
    dependencies=[Depends(simulate("addToCollection"))],
)
async def add_items(
    request: Request,
    collection_id: str,
    body: CollectionItemsRequest,
    service: CollectionServiceDep,
):
    collection = service.add_items(collection_id, body.item_ids)
    return ok(request, CollectionResponse.model_validate(collection), "Items added to collection")


@router.post(
    "/{collection_id}/items/remove",
    response_model=ApiResponse[CollectionResponse],
    dependencies=[Depends(simulate("removeFromCollection"))],
)
async def remove_items(
    request: Request,
    collection_id: str,
    body: CollectionItemsRequest,
    service: CollectionServiceDep,
):
    collection = service.remove_items(collection_id, body.item_ids)
    return ok(request, CollectionResponse.model_validate(collection), "Items removed from collection")


@router.post(
    "/{collection_id}/share",
    response_model=ApiResponse[CollectionResponse],
    dependencies=[Depends(simulate("shareCollection"))],
)
async def share_collection(
    request: Request,
    collection_id: str,
    body: ShareCollectionRequest,
    service: CollectionServiceDep,
):
    collection = service.share_collection(collection_id, body.user_ids)
    return ok(request, CollectionResponse.model_validate(collection), "Collection shared successfully")
