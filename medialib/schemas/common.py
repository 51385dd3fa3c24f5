"""Shared schema building blocks: camelCase base model, ISO datetimes, pages."""

from datetime import datetime
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from medialib.application.services.query_engine import Page
from medialib.shared.utils.datetime import to_iso

T = TypeVar("T")

IsoDatetime = Annotated[datetime, PlainSerializer(to_iso, return_type=str, when_used="json")]


class CamelModel(BaseModel):
    """Base for wire models: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PageMetaResponse(CamelModel):
    page: int
    page_size: int
    total: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


class PaginatedResponse(CamelModel, Generic[T]):
    """One page of items plus pagination metadata."""

    items: list[T]
    meta: PageMetaResponse

    @classmethod
    def from_page(cls, page: Page) -> "PaginatedResponse[T]":
        return cls.model_validate({"items": page.items, "meta": page.meta}, from_attributes=True)


class IdsRequest(CamelModel):
    """Request body carrying a list of ids."""

    ids: list[str]


class BatchFailureResponse(CamelModel):
    id: str
    reason: str
    message: str | None = None
