"""Tag category API: CRUD with a guarded delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from medialib.api.v1.dependencies import get_tag_service, simulate
from medialib.application.use_cases import TagService
from medialib.schemas.envelope import ApiResponse, ok
from medialib.schemas.tag import (
    TagCategoryCreate,
    TagCategoryResponse,
    TagCategoryUpdate,
)

router = APIRouter()

TagServiceDep = Annotated[TagService, Depends(get_tag_service)]


@router.get(
    "",
    response_model=ApiResponse[list[TagCategoryResponse]],
    dependencies=[Depends(simulate("getTagCategories"))],
)
async def list_categories(request: Request, service: TagServiceDep):
    return ok(request, [TagCategoryResponse.model_validate(c) for c in service.list_categories()])


@router.get(
    "/{category_id}",
    response_model=ApiResponse[TagCategoryResponse],
    dependencies=[Depends(simulate("getTagCategory"))],
)
async def get_category(request: Request, category_id: str, service: TagServiceDep):
    return ok(request, TagCategoryResponse.model_validate(service.get_category(category_id)))


@router.post(
    "",
    response_model=ApiResponse[TagCategoryResponse],
    status_code=201,
    dependencies=[Depends(simulate("createTagCategory"))],
)
async def create_category(request: Request, body: TagCategoryCreate, service: TagServiceDep):
    category = service.create_category(body.name, description=body.description)
    return ok(request, TagCategoryResponse.model_validate(category), "Tag category created successfully")


@router.patch(
    "/{category_id}",
    response_model=ApiResponse[TagCategoryResponse],
    dependencies=[Depends(simulate("updateTagCategory"))],
)
async def update_category(
    request: Request, category_id: str, body: TagCategoryUpdate, service: TagServiceDep
):
    category = service.update_category(category_id, body.model_dump(exclude_unset=True))
    return ok(request, TagCategoryResponse.model_validate(category), "Tag category updated successfully")


@router.delete(
    "/{category_id}",
    response_model=ApiResponse[TagCategoryResponse],
    dependencies=[Depends(simulate("deleteTagCategory"))],
)
async def delete_category(
    request: Request,
    category_id: str,
    service: TagServiceDep,
    force: Annotated[bool, Query()] = False,
):
    """Delete a category; with ``force`` its tags become uncategorized."""
    category = service.delete_category(category_id, force=force)
    return ok(request, TagCategoryResponse.model_validate(category), "Tag category deleted successfully")
