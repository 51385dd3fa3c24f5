"""Collection domain entity."""

from dataclasses import dataclass, field
from datetime import datetime

from medialib.domain.exceptions import ValidationException


@dataclass
class CollectionEntity:
    """Domain entity for a collection of media items.

    Collections may nest through ``parent_id``. ``items`` and ``shared_with``
    behave as ordered sets (no duplicates, insertion order kept).
    """

    id: str
    name: str
    created: datetime
    modified: datetime
    description: str | None = None
    items: list[str] = field(default_factory=list)
    color: str | None = None
    created_by: str | None = None
    is_shared: bool = False
    shared_with: list[str] = field(default_factory=list)
    parent_id: str | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate collection business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Collection ID is required", field="id")
        if not self.name or not self.name.strip():
            raise ValidationException("Collection name is required", field="name")
        if self.parent_id == self.id:
            raise ValidationException(
                "Collection cannot be its own parent",
                field="parent_id",
                error_code="invalid_parent",
            )

    def contains(self, media_id: str) -> bool:
        """Return whether the media item is a direct member of this collection."""
        return media_id in self.items
